from pydantic import BaseModel, Field, model_validator
from typing import Optional
from datetime import datetime
from app.models.event import EventType, EventStatus

class EventBase(BaseModel):
    title: str = Field(..., min_length=3, max_length=200)
    description: Optional[str] = None
    event_type: EventType
    location: str = Field(..., min_length=2, max_length=255)
    start_date: datetime
    end_date: datetime
    max_attendees: Optional[int] = Field(None, gt=0)
    target_audience: str = "general"
    image_url: Optional[str] = Field(None, max_length=500)

class EventCreate(EventBase):
    status: EventStatus = EventStatus.DRAFT

    @model_validator(mode="after")
    def validate_dates(self):
        if self.end_date < self.start_date:
            raise ValueError("End date must be after start date")
        return self

class EventUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=3, max_length=200)
    description: Optional[str] = None
    event_type: Optional[EventType] = None
    location: Optional[str] = Field(None, min_length=2, max_length=255)
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    max_attendees: Optional[int] = Field(None, gt=0)
    status: Optional[EventStatus] = None
    target_audience: Optional[str] = None
    image_url: Optional[str] = Field(None, max_length=500)

class Event(EventBase):
    id: int
    status: EventStatus
    created_by: int
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

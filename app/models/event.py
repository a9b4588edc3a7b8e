from sqlalchemy import Column, String, Text, ForeignKey, Integer, DateTime, CheckConstraint
from sqlalchemy.orm import relationship
from app.models.base import BaseModel
import enum

class EventType(str, enum.Enum):
    CONFERENCE = "conference"
    WORKSHOP = "workshop"
    SEMINAR = "seminar"
    WEBINAR = "webinar"
    MEETUP = "meetup"
    OTHER = "other"

class EventStatus(str, enum.Enum):
    DRAFT = "draft"
    PUBLISHED = "published"
    CANCELLED = "cancelled"
    COMPLETED = "completed"

# Statuses an event may move to from each status
STATUS_TRANSITIONS = {
    EventStatus.DRAFT: {EventStatus.PUBLISHED},
    EventStatus.PUBLISHED: {EventStatus.CANCELLED, EventStatus.COMPLETED},
    EventStatus.CANCELLED: set(),
    EventStatus.COMPLETED: set(),
}

# Statuses visible on the public feedback path
PUBLIC_STATUSES = {EventStatus.PUBLISHED, EventStatus.COMPLETED}

class Event(BaseModel):
    __tablename__ = "events"
    __table_args__ = (
        CheckConstraint("end_date >= start_date", name="ck_events_time_window"),
    )

    title = Column(String(200), nullable=False)
    description = Column(Text)
    event_type = Column(String(50), nullable=False, default=EventType.OTHER.value)
    status = Column(String(50), nullable=False, default=EventStatus.DRAFT.value, index=True)
    start_date = Column(DateTime(timezone=True), nullable=False)
    end_date = Column(DateTime(timezone=True), nullable=False)

    # Location & audience
    location = Column(String(255))
    target_audience = Column(String(255), default="general")
    max_attendees = Column(Integer, nullable=True)
    image_url = Column(String(500))

    # Metadata
    created_by = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    # Relationships
    owner = relationship("User", back_populates="events")
    feedback = relationship("Feedback", back_populates="event", cascade="all, delete-orphan", passive_deletes=True)
    analytics = relationship("FeedbackAnalytics", back_populates="event", uselist=False, cascade="all, delete-orphan", passive_deletes=True)

from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime
from app.models.feedback import FeedbackCategory, Sentiment

# ==========================================
# SUBMISSION INPUT
# ==========================================

class FeedbackItemIn(BaseModel):
    """One category entry of a submission form"""
    category: FeedbackCategory
    # Category items without a rating inherit the overall rating
    rating: Optional[int] = None
    comment: Optional[str] = None

class FeedbackSubmissionCreate(BaseModel):
    """Request body of the public feedback form"""
    name: Optional[str] = Field(None, max_length=100)
    is_anonymous: bool = False
    items: List[FeedbackItemIn]

class FeedbackSubmissionCommon(BaseModel):
    """Fields shared by every record of one submission"""
    event_id: int
    name: Optional[str] = Field(None, max_length=100)
    is_anonymous: bool = False
    user_id: Optional[int] = None

# ==========================================
# RECORDS
# ==========================================

class FeedbackRecordCreate(BaseModel):
    """A validated row ready for insertion"""
    event_id: int
    user_id: Optional[int] = None
    name: Optional[str] = None
    is_anonymous: bool = False
    submission_id: str
    category: Optional[FeedbackCategory] = None
    rating: int
    comment: Optional[str] = None
    sentiment: Sentiment
    created_at: datetime

class FeedbackItem(BaseModel):
    id: Optional[int] = None
    event_id: int
    user_id: Optional[int] = None
    name: Optional[str] = None
    is_anonymous: bool = False
    submission_id: Optional[str] = None
    category: Optional[FeedbackCategory] = None
    rating: int
    comment: Optional[str] = None
    sentiment: Sentiment = Sentiment.NEUTRAL
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

# ==========================================
# GROUPED VIEWS
# ==========================================

class SubmissionGroup(BaseModel):
    """Rows of one logical submission, described by its master row"""
    key: str
    submission_id: Optional[str] = None
    event_id: int
    event_title: Optional[str] = None
    user_id: Optional[int] = None
    name: Optional[str] = None
    is_anonymous: bool = False
    display_name: str
    rating: int = 0
    is_rated: bool = True
    sentiment: Sentiment = Sentiment.NEUTRAL
    created_at: Optional[datetime] = None
    items: List[FeedbackItem] = []

class EventFeedbackList(BaseModel):
    event_id: int
    total_submissions: int
    submissions: List[SubmissionGroup]

class FeedbackAnalytics(BaseModel):
    """Aggregates per event, counted over submissions rather than rows"""
    event_id: int
    event_title: Optional[str] = None
    total_feedback: int = 0
    avg_rating: float = 0.0
    positive_count: int = 0
    neutral_count: int = 0
    negative_count: int = 0
    last_feedback_at: Optional[datetime] = None

    class Config:
        from_attributes = True

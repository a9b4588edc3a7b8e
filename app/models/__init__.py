from .base import BaseModel
from .user import User, UserRole
from .event import Event, EventType, EventStatus
from .feedback import Feedback, FeedbackCategory, Sentiment
from .feedback_analytics import FeedbackAnalytics

__all__ = [
    "BaseModel", "User", "UserRole", "Event", "EventType", "EventStatus",
    "Feedback", "FeedbackCategory", "Sentiment", "FeedbackAnalytics",
]

from .auth import Token, TokenData
from .user import User, UserCreate, UserUpdate, UserBase
from .event import Event, EventCreate, EventUpdate, EventBase
from .feedback import (
    FeedbackItemIn, FeedbackSubmissionCreate, FeedbackSubmissionCommon,
    FeedbackRecordCreate, FeedbackItem, SubmissionGroup, EventFeedbackList,
    FeedbackAnalytics,
)
from .dashboard import DashboardSummary

__all__ = [
    "Token", "TokenData", "User", "UserCreate", "UserUpdate", "UserBase",
    "Event", "EventCreate", "EventUpdate", "EventBase",
    "FeedbackItemIn", "FeedbackSubmissionCreate", "FeedbackSubmissionCommon",
    "FeedbackRecordCreate", "FeedbackItem", "SubmissionGroup", "EventFeedbackList",
    "FeedbackAnalytics", "DashboardSummary",
]

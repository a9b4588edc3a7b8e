from .user import user
from .event import event
from .feedback import feedback
from .feedback_analytics import feedback_analytics

__all__ = ["user", "event", "feedback", "feedback_analytics"]

from pydantic import BaseModel
from typing import List
from app.schemas.feedback import FeedbackAnalytics, SubmissionGroup

class DashboardSummary(BaseModel):
    total_events: int
    # Unique submissions across every event the organizer owns
    total_feedback: int
    average_rating: float
    top_events: List[FeedbackAnalytics]
    recent_feedback: List[SubmissionGroup]

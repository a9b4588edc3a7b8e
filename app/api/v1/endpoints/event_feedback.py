# File: app/api/v1/endpoints/event_feedback.py
from typing import Any, Optional
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from app import schemas
from app.api import deps
from app.db.database import get_db
from app.models.user import User
from app.services import feedback_service

router = APIRouter()

@router.post("/{event_id}/feedback", response_model=schemas.SubmissionGroup, status_code=status.HTTP_201_CREATED)
def submit_event_feedback(
    event_id: int,
    submission_in: schemas.FeedbackSubmissionCreate,
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(deps.get_current_user_optional),
):
    """Submit feedback for an event (guests and anonymous respondents allowed)"""
    return feedback_service.submit_feedback(db, current_user, event_id, submission_in)

@router.get("/{event_id}/feedback", response_model=schemas.EventFeedbackList)
def get_event_feedback(
    event_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user),
):
    """Get all submissions for an event (owner only)"""
    return feedback_service.get_feedback_by_event(db, current_user, event_id)

@router.get("/{event_id}/feedback/analytics", response_model=schemas.FeedbackAnalytics)
def get_event_feedback_analytics(
    event_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user),
):
    """Get feedback statistics for an event, counted per submission"""
    return feedback_service.get_feedback_analytics(db, current_user, event_id)

@router.delete("/{event_id}/feedback/{submission_id}")
def delete_event_feedback_submission(
    event_id: int,
    submission_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user),
) -> Any:
    """Remove one submission and all of its category rows (owner only)"""
    deleted = feedback_service.delete_submission(db, current_user, event_id, submission_id)
    return {"submission_id": submission_id, "deleted_rows": deleted}

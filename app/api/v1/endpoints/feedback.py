from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app import schemas
from app.api import deps
from app.db.database import get_db
from app.models.user import User
from app.services import feedback_service

router = APIRouter()

@router.get("/", response_model=List[schemas.SubmissionGroup])
def get_all_feedback(
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user),
):
    """Submissions across every event the current user owns"""
    return feedback_service.get_all_feedback(db, current_user)

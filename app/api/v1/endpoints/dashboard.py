from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app import schemas
from app.api import deps
from app.db.database import get_db
from app.models.user import User
from app.services import feedback_service

router = APIRouter()

@router.get("/", response_model=schemas.DashboardSummary)
def get_dashboard(
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user),
):
    """Organizer overview; total_feedback counts unique submissions"""
    return feedback_service.get_dashboard(db, current_user)

# File: app/api/v1/endpoints/events.py
from typing import Any, List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from app import schemas
from app.api import deps
from app.db.database import get_db
from app.models.event import EventStatus, EventType
from app.models.user import User
from app.services import event_service

router = APIRouter()

@router.get("/public", response_model=List[schemas.Event])
def get_public_events(
    *,
    db: Session = Depends(get_db),
    skip: int = 0,
    limit: int = Query(100, le=500),
) -> Any:
    """Published events open for feedback (no login required)."""
    return event_service.list_public_events(db, skip=skip, limit=limit)

@router.get("/", response_model=List[schemas.Event])
def get_my_events(
    *,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user),
    status_filter: Optional[EventStatus] = Query(None, alias="status"),
    event_type: Optional[EventType] = None,
    search: Optional[str] = Query(None, max_length=100),
    skip: int = 0,
    limit: int = Query(100, le=500),
) -> Any:
    """Events created by the current user, latest start date first."""
    return event_service.list_events(
        db,
        current_user,
        status=status_filter.value if status_filter else None,
        event_type=event_type.value if event_type else None,
        search=search,
        skip=skip,
        limit=limit,
    )

@router.post("/", response_model=schemas.Event, status_code=status.HTTP_201_CREATED)
def create_event(
    *,
    db: Session = Depends(get_db),
    event_in: schemas.EventCreate,
    current_user: User = Depends(deps.get_current_user),
) -> Any:
    return event_service.create_event(db, current_user, event_in)

@router.get("/{event_id}", response_model=schemas.Event)
def get_event(
    *,
    db: Session = Depends(get_db),
    event_id: int,
    current_user: Optional[User] = Depends(deps.get_current_user_optional),
) -> Any:
    """Owners see any status; others only published or completed events."""
    return event_service.get_visible_event(db, current_user, event_id)

@router.put("/{event_id}", response_model=schemas.Event)
def update_event(
    *,
    db: Session = Depends(get_db),
    event_id: int,
    event_in: schemas.EventUpdate,
    current_user: User = Depends(deps.get_current_user),
) -> Any:
    return event_service.update_event(db, current_user, event_id, event_in)

@router.delete("/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_event(
    *,
    db: Session = Depends(get_db),
    event_id: int,
    current_user: User = Depends(deps.get_current_user),
) -> None:
    """Delete an event together with its feedback and analytics."""
    event_service.delete_event(db, current_user, event_id)

import logging
from datetime import datetime, timezone
from typing import List, Optional
from sqlalchemy.orm import Session
from app import crud
from app.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from app.core.permissions import can_view_event, is_event_owner
from app.models.event import Event, EventStatus, STATUS_TRANSITIONS
from app.models.user import User
from app.schemas.event import EventCreate, EventUpdate

logger = logging.getLogger(__name__)

EVENT_NOT_AVAILABLE = "Event not available"

REQUIRED_EVENT_FIELDS = ("title", "event_type", "location", "start_date", "end_date", "status")


def _utc(value: datetime) -> datetime:
    return value.replace(tzinfo=timezone.utc) if value.tzinfo is None else value


def get_owned_event(db: Session, user: Optional[User], event_id: int) -> Event:
    """Load an event the user owns. Missing and foreign events read the same to the caller."""
    if user is None:
        raise AuthorizationError("Not authenticated", requires_login=True)

    event = crud.event.get(db, id=event_id)
    if event is None:
        raise NotFoundError("Unauthorized or event not found")
    if not is_event_owner(user, event):
        logger.warning(f"User {user.id} denied access to event {event_id}")
        raise AuthorizationError("Unauthorized or event not found")
    return event


def get_visible_event(db: Session, user: Optional[User], event_id: int) -> Event:
    event = crud.event.get(db, id=event_id)
    if not can_view_event(user, event):
        raise NotFoundError(EVENT_NOT_AVAILABLE)
    return event


def create_event(db: Session, user: User, event_in: EventCreate) -> Event:
    event = crud.event.create_with_owner(db, obj_in=event_in, owner_id=user.id)
    logger.info(f"Event {event.id} '{event.title}' created by user {user.id}")
    return event


def update_event(db: Session, user: User, event_id: int, event_in: EventUpdate) -> Event:
    event = get_owned_event(db, user, event_id)

    # Explicit nulls would clear columns an event cannot live without
    changes = event_in.model_dump(exclude_unset=True)
    cleared = [field for field in REQUIRED_EVENT_FIELDS if field in changes and changes[field] is None]
    if cleared:
        raise ValidationError(f"{', '.join(cleared)} cannot be empty")

    start_date = event_in.start_date or event.start_date
    end_date = event_in.end_date or event.end_date
    if _utc(end_date) < _utc(start_date):
        raise ValidationError("End date must be after start date")

    if event_in.status is not None:
        current = EventStatus(event.status)
        if event_in.status != current and event_in.status not in STATUS_TRANSITIONS[current]:
            raise ValidationError(
                f"Cannot change status from {current.value} to {event_in.status.value}"
            )

    event = crud.event.update(db, db_obj=event, obj_in=event_in)
    if "title" in changes:
        crud.feedback_analytics.rename_event(db, event_id=event.id, event_title=event.title)
    logger.info(f"Event {event.id} updated by user {user.id}")
    return event


def delete_event(db: Session, user: User, event_id: int) -> Event:
    event = get_owned_event(db, user, event_id)
    db.delete(event)
    db.commit()
    logger.info(f"Event {event_id} deleted by user {user.id} with its feedback")
    return event


def list_events(
    db: Session,
    user: User,
    status: Optional[str] = None,
    event_type: Optional[str] = None,
    search: Optional[str] = None,
    skip: int = 0,
    limit: int = 100,
) -> List[Event]:
    return crud.event.get_by_owner(
        db, owner_id=user.id, status=status, event_type=event_type,
        search=search, skip=skip, limit=limit,
    )


def list_public_events(db: Session, skip: int = 0, limit: int = 100) -> List[Event]:
    return crud.event.get_published(db, skip=skip, limit=limit)

from typing import Optional
from app.models.user import User
from app.models.event import Event, EventStatus, PUBLIC_STATUSES


def is_event_owner(user: Optional[User], event: Optional[Event]) -> bool:
    """Check if user created the event. Organizers may read all of its feedback."""
    if user is None or event is None:
        return False
    return event.created_by == user.id


def can_view_event(user: Optional[User], event: Optional[Event]) -> bool:
    """Owners see every status, everyone else only published/completed events"""
    if event is None:
        return False
    if is_event_owner(user, event):
        return True
    return EventStatus(event.status) in PUBLIC_STATUSES


def can_submit_feedback(event: Optional[Event]) -> bool:
    """Draft and cancelled events are hidden from the public submission path"""
    return event is not None and EventStatus(event.status) in PUBLIC_STATUSES

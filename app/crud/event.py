# File: app/crud/event.py
import enum
from typing import Any, Dict, List, Optional
from sqlalchemy import or_
from sqlalchemy.orm import Session
from app.crud.base import CRUDBase
from app.models.event import Event, EventStatus
from app.schemas.event import EventCreate, EventUpdate

def _plain(data: Dict[str, Any]) -> Dict[str, Any]:
    """Store enum members as their string values"""
    return {k: (v.value if isinstance(v, enum.Enum) else v) for k, v in data.items()}

class CRUDEvent(CRUDBase[Event, EventCreate, EventUpdate]):

    def get_by_owner(
        self,
        db: Session,
        *,
        owner_id: int,
        status: Optional[str] = None,
        event_type: Optional[str] = None,
        search: Optional[str] = None,
        skip: int = 0,
        limit: int = 100,
    ) -> List[Event]:
        query = db.query(Event).filter(Event.created_by == owner_id)
        if status:
            query = query.filter(Event.status == status)
        if event_type:
            query = query.filter(Event.event_type == event_type)
        if search:
            pattern = f"%{search}%"
            query = query.filter(or_(Event.title.ilike(pattern), Event.description.ilike(pattern)))
        return query.order_by(Event.start_date.desc()).offset(skip).limit(limit).all()

    def get_published(self, db: Session, *, skip: int = 0, limit: int = 100) -> List[Event]:
        return (
            db.query(Event)
            .filter(Event.status == EventStatus.PUBLISHED.value)
            .order_by(Event.start_date.asc())
            .offset(skip)
            .limit(limit)
            .all()
        )

    def create_with_owner(self, db: Session, *, obj_in: EventCreate, owner_id: int) -> Event:
        event_data = _plain(obj_in.model_dump())
        event_data["created_by"] = owner_id

        db_obj = Event(**event_data)
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def update(self, db: Session, *, db_obj: Event, obj_in: EventUpdate) -> Event:
        return super().update(db, db_obj=db_obj, obj_in=_plain(obj_in.model_dump(exclude_unset=True)))

event = CRUDEvent(Event)

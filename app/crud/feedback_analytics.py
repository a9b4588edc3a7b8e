from datetime import datetime, timezone
from typing import List, Optional
from sqlalchemy.orm import Session
from app.crud.base import CRUDBase
from app.models.event import Event
from app.models.feedback_analytics import FeedbackAnalytics
from app.schemas.feedback import FeedbackAnalytics as FeedbackAnalyticsSchema

class CRUDFeedbackAnalytics(CRUDBase[FeedbackAnalytics, FeedbackAnalyticsSchema, FeedbackAnalyticsSchema]):

    def get_by_event(self, db: Session, *, event_id: int) -> Optional[FeedbackAnalytics]:
        return db.query(FeedbackAnalytics).filter(FeedbackAnalytics.event_id == event_id).first()

    def upsert(self, db: Session, *, obj_in: FeedbackAnalyticsSchema) -> FeedbackAnalytics:
        db_obj = self.get_by_event(db, event_id=obj_in.event_id)
        if db_obj is None:
            db_obj = FeedbackAnalytics(event_id=obj_in.event_id)
            db.add(db_obj)

        for field, value in obj_in.model_dump(exclude={"event_id"}).items():
            setattr(db_obj, field, value)
        db_obj.refreshed_at = datetime.now(timezone.utc)

        db.commit()
        db.refresh(db_obj)
        return db_obj

    def rename_event(self, db: Session, *, event_id: int, event_title: str) -> Optional[FeedbackAnalytics]:
        db_obj = self.get_by_event(db, event_id=event_id)
        if db_obj is not None and db_obj.event_title != event_title:
            db_obj.event_title = event_title
            db.commit()
            db.refresh(db_obj)
        return db_obj

    def get_top_for_owner(self, db: Session, *, owner_id: int, limit: int = 5) -> List[FeedbackAnalytics]:
        return (
            db.query(FeedbackAnalytics)
            .join(Event, Event.id == FeedbackAnalytics.event_id)
            .filter(Event.created_by == owner_id, FeedbackAnalytics.total_feedback > 0)
            .order_by(FeedbackAnalytics.avg_rating.desc(), FeedbackAnalytics.total_feedback.desc())
            .limit(limit)
            .all()
        )

feedback_analytics = CRUDFeedbackAnalytics(FeedbackAnalytics)

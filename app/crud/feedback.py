from typing import List
from sqlalchemy.orm import Session
from app.crud.base import CRUDBase
from app.models.feedback import Feedback
from app.schemas.feedback import FeedbackRecordCreate

class CRUDFeedback(CRUDBase[Feedback, FeedbackRecordCreate, FeedbackRecordCreate]):

    def create_batch(self, db: Session, *, records: List[FeedbackRecordCreate]) -> List[Feedback]:
        """Insert every row of a submission in one transaction"""
        rows = [Feedback(**record.model_dump(mode="json", exclude={"created_at"}), created_at=record.created_at)
                for record in records]
        db.add_all(rows)
        db.commit()
        for row in rows:
            db.refresh(row)
        return rows

    def get_by_event(self, db: Session, *, event_id: int) -> List[Feedback]:
        # id breaks ties so rows of one submission keep insertion order
        return (
            db.query(Feedback)
            .filter(Feedback.event_id == event_id)
            .order_by(Feedback.created_at.desc(), Feedback.id.asc())
            .all()
        )

    def get_by_events(self, db: Session, *, event_ids: List[int]) -> List[Feedback]:
        if not event_ids:
            return []
        return (
            db.query(Feedback)
            .filter(Feedback.event_id.in_(event_ids))
            .order_by(Feedback.created_at.desc(), Feedback.id.asc())
            .all()
        )

    def remove_submission(self, db: Session, *, event_id: int, submission_id: str) -> int:
        deleted = (
            db.query(Feedback)
            .filter(Feedback.event_id == event_id, Feedback.submission_id == submission_id)
            .delete(synchronize_session=False)
        )
        db.commit()
        return deleted

feedback = CRUDFeedback(Feedback)

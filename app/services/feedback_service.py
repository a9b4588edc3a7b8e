"""
Feedback submission and organizer reads against the database.

The pure pieces live in feedback_submission and feedback_grouping; this
module adds event visibility, ownership checks, the transactional insert and
the analytics refresh that follows each submission.
"""

import logging
from typing import List, Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from app import crud
from app.core.config import settings
from app.core.exceptions import NotFoundError, PersistenceError
from app.core.permissions import can_submit_feedback
from app.models.event import Event
from app.models.user import User
from app.schemas.dashboard import DashboardSummary
from app.schemas.feedback import (
    EventFeedbackList, FeedbackAnalytics, FeedbackSubmissionCommon,
    FeedbackSubmissionCreate, SubmissionGroup,
)
from app.services import feedback_grouping
from app.services.event_service import EVENT_NOT_AVAILABLE, get_owned_event
from app.services.feedback_submission import build_submission

logger = logging.getLogger(__name__)

RECENT_FEEDBACK_LIMIT = 5
TOP_EVENTS_LIMIT = 5


def refresh_feedback_analytics(db: Session, event: Event) -> FeedbackAnalytics:
    """Recompute and store the analytics row of one event"""
    try:
        rows = crud.feedback.get_by_event(db, event_id=event.id)
        analytics = feedback_grouping.aggregate_event(
            rows, event.id, event.title, legacy_grouping=settings.FEEDBACK_LEGACY_GROUPING
        )
        crud.feedback_analytics.upsert(db, obj_in=analytics)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to refresh analytics for event {event.id}: {e}")
        raise PersistenceError(details={"cause": str(e)}) from e
    logger.info(
        f"Refreshed analytics for event {event.id}: "
        f"{analytics.total_feedback} submissions, avg {analytics.avg_rating}"
    )
    return analytics


def submit_feedback(
    db: Session,
    user: Optional[User],
    event_id: int,
    submission_in: FeedbackSubmissionCreate,
) -> SubmissionGroup:
    """Validate, persist and group one submission from the public form"""
    event = crud.event.get(db, id=event_id)
    if not can_submit_feedback(event):
        # Drafts, cancelled and missing events all look the same from outside
        raise NotFoundError(EVENT_NOT_AVAILABLE)

    common = FeedbackSubmissionCommon(
        event_id=event.id,
        name=submission_in.name,
        is_anonymous=submission_in.is_anonymous,
        user_id=user.id if user else None,
    )
    records = build_submission(
        common,
        submission_in.items,
        require_identity=settings.FEEDBACK_REQUIRE_IDENTITY,
        comment_min_length=settings.FEEDBACK_COMMENT_MIN_LENGTH,
        comment_max_length=settings.FEEDBACK_COMMENT_MAX_LENGTH,
    )

    try:
        rows = crud.feedback.create_batch(db, records=records)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to store submission for event {event_id}: {e}")
        raise PersistenceError(details={"cause": str(e)}) from e

    submission_id = records[0].submission_id
    logger.info(f"Stored submission {submission_id} for event {event_id} ({len(rows)} rows)")

    # One refresh per submission, not per row
    refresh_feedback_analytics(db, event)

    groups = feedback_grouping.group(rows, event_titles={event.id: event.title})
    return groups[0]


def get_feedback_by_event(db: Session, user: Optional[User], event_id: int) -> EventFeedbackList:
    event = get_owned_event(db, user, event_id)
    rows = crud.feedback.get_by_event(db, event_id=event.id)
    groups = feedback_grouping.group(
        rows,
        legacy_grouping=settings.FEEDBACK_LEGACY_GROUPING,
        event_titles={event.id: event.title},
    )
    return EventFeedbackList(event_id=event.id, total_submissions=len(groups), submissions=groups)


def get_all_feedback(db: Session, user: User) -> List[SubmissionGroup]:
    """Every submission on events the user owns, most recent first"""
    events = crud.event.get_by_owner(db, owner_id=user.id, limit=None)
    if not events:
        return []
    rows = crud.feedback.get_by_events(db, event_ids=[e.id for e in events])
    return feedback_grouping.group(
        rows,
        legacy_grouping=settings.FEEDBACK_LEGACY_GROUPING,
        event_titles={e.id: e.title for e in events},
    )


def get_feedback_analytics(db: Session, user: Optional[User], event_id: int) -> FeedbackAnalytics:
    event = get_owned_event(db, user, event_id)
    stored = crud.feedback_analytics.get_by_event(db, event_id=event.id)
    if stored is None:
        return refresh_feedback_analytics(db, event)
    return FeedbackAnalytics.model_validate(stored)


def delete_submission(db: Session, user: User, event_id: int, submission_id: str) -> int:
    """Remove every row of one submission from an owned event"""
    event = get_owned_event(db, user, event_id)
    try:
        deleted = crud.feedback.remove_submission(db, event_id=event.id, submission_id=submission_id)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to delete submission {submission_id}: {e}")
        raise PersistenceError(details={"cause": str(e)}) from e

    if deleted == 0:
        raise NotFoundError("Submission not found")

    logger.info(f"Deleted submission {submission_id} ({deleted} rows) from event {event.id}")
    refresh_feedback_analytics(db, event)
    return deleted


def get_dashboard(db: Session, user: User) -> DashboardSummary:
    events = crud.event.get_by_owner(db, owner_id=user.id, limit=None)
    event_ids = [e.id for e in events]
    rows = crud.feedback.get_by_events(db, event_ids=event_ids)

    groups = feedback_grouping.group(
        rows,
        legacy_grouping=settings.FEEDBACK_LEGACY_GROUPING,
        event_titles={e.id: e.title for e in events},
    )
    rated = [g.rating for g in groups if g.is_rated]
    top_events = crud.feedback_analytics.get_top_for_owner(db, owner_id=user.id, limit=TOP_EVENTS_LIMIT)

    return DashboardSummary(
        total_events=len(events),
        total_feedback=sum(
            feedback_grouping.count_unique_submissions_by_event(
                rows, legacy_grouping=settings.FEEDBACK_LEGACY_GROUPING
            ).values()
        ),
        average_rating=round(sum(rated) / len(rated), 2) if rated else 0.0,
        top_events=[FeedbackAnalytics.model_validate(a) for a in top_events],
        recent_feedback=groups[:RECENT_FEEDBACK_LIMIT],
    )

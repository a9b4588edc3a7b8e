"""
Rebuilds logical submissions from flat feedback rows and aggregates them.

A submission is every row sharing a submission_id. Rows written before that
column existed are reconciled with a composite (event, timestamp, respondent)
key; this is a compatibility path for legacy data only.

Counts shown to organizers are always over submissions, never over rows.
"""

from collections import defaultdict
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Mapping, Optional

from pydantic import BaseModel

from app.models.feedback import FeedbackCategory, Sentiment
from app.schemas.feedback import FeedbackAnalytics, FeedbackItem, SubmissionGroup

ANONYMOUS_LABEL = "Anonymous"
GUEST_LABEL = "Guest"

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def _timestamp(value: Optional[datetime]) -> datetime:
    """Comparable aware timestamp; SQLite hands back naive UTC values"""
    if value is None:
        return _EPOCH
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _as_item(record: Any) -> FeedbackItem:
    if isinstance(record, FeedbackItem):
        return record
    if isinstance(record, BaseModel):
        return FeedbackItem.model_validate(record.model_dump())
    if isinstance(record, Mapping):
        return FeedbackItem.model_validate(dict(record))
    return FeedbackItem.model_validate(record, from_attributes=True)


def _respondent(item: FeedbackItem) -> str:
    if item.user_id is not None:
        return f"user:{item.user_id}"
    if item.name:
        return f"name:{item.name}"
    return "anon"


def _key(item: FeedbackItem, legacy_grouping: bool) -> str:
    if item.submission_id:
        return item.submission_id
    if not legacy_grouping:
        return f"row:{item.id}"
    return f"legacy:{item.event_id}:{_timestamp(item.created_at).isoformat()}:{_respondent(item)}"


def submission_key(record: Any, legacy_grouping: bool = True) -> str:
    """Grouping key of a row: its submission_id, else the legacy composite key"""
    return _key(_as_item(record), legacy_grouping)


def display_name(item: FeedbackItem) -> str:
    if item.is_anonymous:
        return ANONYMOUS_LABEL
    return item.name or GUEST_LABEL


def _pick_master(items: List[FeedbackItem]) -> FeedbackItem:
    for item in items:
        if item.category == FeedbackCategory.OVERALL:
            return item
    # min() keeps the first of several equally old rows
    return min(items, key=lambda item: _timestamp(item.created_at))


def group(
    records: Iterable[Any],
    legacy_grouping: bool = True,
    event_titles: Optional[Mapping[int, str]] = None,
) -> List[SubmissionGroup]:
    """Group rows into submissions, most recent submission first.

    Items keep their input order inside a group. Groups without an overall
    row are still returned, with rating 0 and is_rated False.
    """
    buckets: Dict[str, List[FeedbackItem]] = {}
    for record in records:
        item = _as_item(record)
        buckets.setdefault(_key(item, legacy_grouping), []).append(item)

    event_titles = event_titles or {}
    groups = []
    for key, items in buckets.items():
        master = _pick_master(items)
        is_rated = master.category == FeedbackCategory.OVERALL
        groups.append(
            SubmissionGroup(
                key=key,
                submission_id=master.submission_id,
                event_id=master.event_id,
                event_title=event_titles.get(master.event_id),
                user_id=master.user_id,
                name=master.name,
                is_anonymous=master.is_anonymous,
                display_name=display_name(master),
                rating=master.rating if is_rated else 0,
                is_rated=is_rated,
                sentiment=master.sentiment,
                created_at=master.created_at,
                items=items,
            )
        )

    # sorted() is stable, so ties keep first-seen order
    return sorted(groups, key=lambda g: _timestamp(g.created_at), reverse=True)


def flatten(groups: Iterable[SubmissionGroup]) -> List[FeedbackItem]:
    return [item for g in groups for item in g.items]


def count_unique_submissions(records: Iterable[Any], legacy_grouping: bool = True) -> int:
    """Number of distinct submissions, however many rows each one spans"""
    return len({submission_key(record, legacy_grouping) for record in records})


def count_unique_submissions_by_event(records: Iterable[Any], legacy_grouping: bool = True) -> Dict[int, int]:
    keys_by_event = defaultdict(set)
    for record in records:
        item = _as_item(record)
        keys_by_event[item.event_id].add(_key(item, legacy_grouping))
    return {event_id: len(keys) for event_id, keys in keys_by_event.items()}


def summarize_groups(
    groups: List[SubmissionGroup],
    event_id: int,
    event_title: Optional[str] = None,
) -> FeedbackAnalytics:
    """Analytics row for one event from its already grouped submissions"""
    rated = [g.rating for g in groups if g.is_rated]
    avg_rating = round(sum(rated) / len(rated), 2) if rated else 0.0
    sentiments = [g.sentiment for g in groups]
    timestamps = [g.created_at for g in groups if g.created_at is not None]

    return FeedbackAnalytics(
        event_id=event_id,
        event_title=event_title,
        total_feedback=len(groups),
        avg_rating=avg_rating,
        positive_count=sentiments.count(Sentiment.POSITIVE),
        neutral_count=sentiments.count(Sentiment.NEUTRAL),
        negative_count=sentiments.count(Sentiment.NEGATIVE),
        last_feedback_at=max(timestamps, key=_timestamp) if timestamps else None,
    )


def aggregate_event(
    records: Iterable[Any],
    event_id: int,
    event_title: Optional[str] = None,
    legacy_grouping: bool = True,
) -> FeedbackAnalytics:
    """Analytics row for one event; rows of other events are ignored"""
    items = [item for item in map(_as_item, records) if item.event_id == event_id]
    return summarize_groups(group(items, legacy_grouping), event_id, event_title)

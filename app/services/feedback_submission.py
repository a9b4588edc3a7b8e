"""
Turns one respondent's multi-category form into feedback rows.

Every row of a submission shares one fresh submission_id, the respondent
fields and a single creation timestamp. Nothing here touches the database;
all validation happens before the caller persists anything.
"""

import uuid
import logging
from datetime import datetime, timezone
from typing import Any, Iterable, List, Mapping, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from app.core.exceptions import AuthorizationError, ValidationError
from app.models.feedback import FeedbackCategory, Sentiment
from app.schemas.feedback import FeedbackItemIn, FeedbackRecordCreate, FeedbackSubmissionCommon
from app.services.sentiment import classify

logger = logging.getLogger(__name__)

MIN_RATING = 1
MAX_RATING = 5

ItemInput = Union[FeedbackItemIn, Mapping[str, Any]]


def _coerce_common(common: Union[FeedbackSubmissionCommon, Mapping[str, Any]]) -> FeedbackSubmissionCommon:
    if isinstance(common, FeedbackSubmissionCommon):
        return common
    try:
        return FeedbackSubmissionCommon.model_validate(common)
    except PydanticValidationError as e:
        raise ValidationError("Invalid submission details", details={"errors": e.errors()}) from e


def _coerce_item(item: ItemInput) -> FeedbackItemIn:
    if isinstance(item, FeedbackItemIn):
        return item
    try:
        return FeedbackItemIn.model_validate(item)
    except PydanticValidationError as e:
        raise ValidationError("Invalid feedback item", details={"errors": e.errors()}) from e


def _is_valid_rating(rating: Any) -> bool:
    return (
        isinstance(rating, int)
        and not isinstance(rating, bool)
        and MIN_RATING <= rating <= MAX_RATING
    )


def _clean_comment(comment: Optional[str]) -> str:
    return (comment or "").strip()


def build_submission(
    common: Union[FeedbackSubmissionCommon, Mapping[str, Any]],
    items: Iterable[ItemInput],
    *,
    require_identity: bool = False,
    comment_min_length: int = 3,
    comment_max_length: int = 1000,
    submission_id: Optional[str] = None,
    created_at: Optional[datetime] = None,
) -> List[FeedbackRecordCreate]:
    """Build the rows of one submission.

    The "overall" item is mandatory and carries the headline rating. Other
    categories are kept only when they have a non-empty comment, and inherit
    the overall rating when they carry none of their own.

    Raises ValidationError for malformed input and AuthorizationError when
    require_identity is set and a non-anonymous caller has no identity.
    """
    common = _coerce_common(common)
    items = [_coerce_item(item) for item in items]

    if not items:
        raise ValidationError("At least one feedback item is required")

    overall_items = [item for item in items if item.category == FeedbackCategory.OVERALL]
    if not overall_items:
        raise ValidationError("Please provide an overall rating.")
    if len(overall_items) > 1:
        raise ValidationError("Only one overall rating is allowed per submission")

    overall_rating = overall_items[0].rating
    if not _is_valid_rating(overall_rating):
        raise ValidationError(f"Overall rating must be between {MIN_RATING} and {MAX_RATING}")

    if require_identity and not common.is_anonymous and common.user_id is None:
        raise AuthorizationError("Sign in or submit anonymously to leave feedback", requires_login=True)

    # Anonymity hides the identity even when the caller is signed in
    user_id = None if common.is_anonymous else common.user_id
    name = (common.name or "").strip() or None
    submission_id = submission_id or str(uuid.uuid4())
    created_at = created_at or datetime.now(timezone.utc)

    records = []
    for item in items:
        comment = _clean_comment(item.comment)
        if item.category != FeedbackCategory.OVERALL and not comment:
            continue

        if comment and len(comment) < comment_min_length:
            raise ValidationError(
                f"Feedback must be at least {comment_min_length} characters",
                details={"category": item.category.value},
            )
        if len(comment) > comment_max_length:
            raise ValidationError(
                f"Feedback must be at most {comment_max_length} characters",
                details={"category": item.category.value},
            )

        rating = overall_rating if item.rating is None else item.rating
        if not _is_valid_rating(rating):
            raise ValidationError(
                f"Rating must be between {MIN_RATING} and {MAX_RATING}",
                details={"category": item.category.value},
            )

        records.append(
            FeedbackRecordCreate(
                event_id=common.event_id,
                user_id=user_id,
                name=name,
                is_anonymous=common.is_anonymous,
                submission_id=submission_id,
                category=item.category,
                rating=rating,
                comment=comment or None,
                sentiment=classify(comment) if comment else Sentiment.NEUTRAL,
                created_at=created_at,
            )
        )

    logger.debug(f"Built submission {submission_id} with {len(records)} rows for event {common.event_id}")
    return records

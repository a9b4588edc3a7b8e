from typing import Optional
from app.models.feedback import Sentiment

POSITIVE_WORDS = (
    "great", "excellent", "amazing", "wonderful", "good",
    "love", "liked", "best", "useful", "nice",
)

NEGATIVE_WORDS = (
    "bad", "poor", "terrible", "horrible", "hate",
    "awful", "worst", "useless", "boring",
)


def classify(text: Optional[str]) -> Sentiment:
    """Keyword sentiment of a comment.

    Each keyword counts once if it appears anywhere in the lower-cased text,
    so "hatefully" matches "hate". Ties, including no hits at all, are neutral.
    """
    if not text:
        return Sentiment.NEUTRAL

    lower_text = text.lower()
    positive_count = sum(1 for word in POSITIVE_WORDS if word in lower_text)
    negative_count = sum(1 for word in NEGATIVE_WORDS if word in lower_text)

    if positive_count > negative_count:
        return Sentiment.POSITIVE
    if negative_count > positive_count:
        return Sentiment.NEGATIVE
    return Sentiment.NEUTRAL

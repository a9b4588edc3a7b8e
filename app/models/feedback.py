from sqlalchemy import Column, String, Integer, Text, DateTime, ForeignKey, Boolean, CheckConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.db.database import Base
import enum

class FeedbackCategory(str, enum.Enum):
    CONTENT = "content"
    ORGANIZATION = "organization"
    VENUE = "venue"
    SPEAKER = "speaker"
    OVERALL = "overall"

class Sentiment(str, enum.Enum):
    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"

class Feedback(Base):
    """One category row of a feedback submission. Rows are inserted, never updated."""
    __tablename__ = "feedback"
    __table_args__ = (
        CheckConstraint("rating >= 1 AND rating <= 5", name="ck_feedback_rating_range"),
    )

    id = Column(Integer, primary_key=True, index=True)
    event_id = Column(Integer, ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    name = Column(String(100), nullable=True)
    is_anonymous = Column(Boolean, nullable=False, default=False)

    # Grouping key shared by every row of one submission (NULL on legacy rows)
    submission_id = Column(String(36), nullable=True, index=True)

    category = Column(String(50), nullable=True)
    rating = Column(Integer, nullable=False)  # 1-5 stars
    comment = Column(Text, nullable=True)
    sentiment = Column(String(20), nullable=False, default=Sentiment.NEUTRAL.value)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)

    # Relationships
    event = relationship("Event", back_populates="feedback")
    user = relationship("User", foreign_keys=[user_id])

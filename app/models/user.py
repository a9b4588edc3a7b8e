from sqlalchemy import Column, String, Boolean, Enum
from sqlalchemy.orm import relationship
from app.models.base import BaseModel
import enum

class UserRole(enum.Enum):
    ORGANIZER = "organizer"
    ATTENDEE = "attendee"

class User(BaseModel):
    __tablename__ = "users"

    email = Column(String(255), unique=True, index=True, nullable=False)
    hashed_password = Column(String(255), nullable=True)
    full_name = Column(String(255), nullable=True)
    role = Column(Enum(UserRole), nullable=False, default=UserRole.ORGANIZER)
    is_active = Column(Boolean, default=True)

    # Relationships
    events = relationship("Event", back_populates="owner")

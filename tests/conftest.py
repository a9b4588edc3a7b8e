"""
Event Feedback API - Test Configuration and Fixtures
"""
import os
from datetime import datetime, timedelta, timezone
from typing import Generator

# Set testing environment before the app reads its settings
os.environ["ENVIRONMENT"] = "testing"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key-for-testing-only"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
from faker import Faker
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app import crud
from app.core.security import create_access_token
from app.db.database import Base, get_db
from app.main import app
from app.models.event import Event, EventStatus
from app.models.user import User
from app.schemas.user import UserCreate

fake = Faker()

# One in-memory database shared by every connection of a test
test_engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


@pytest.fixture(scope="function")
def db_session() -> Generator[Session, None, None]:
    """Create a fresh database for each test"""
    Base.metadata.create_all(bind=test_engine)
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def client(db_session: Session) -> Generator[TestClient, None, None]:
    """Test client whose requests share the test session"""
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def make_user(db: Session, password: str = "testpassword123") -> User:
    return crud.user.create(
        db,
        obj_in=UserCreate(email=fake.unique.email(), full_name=fake.name(), password=password),
    )


def make_event(db: Session, owner: User, status: EventStatus = EventStatus.PUBLISHED, **overrides) -> Event:
    start = datetime.now(timezone.utc) + timedelta(days=7)
    data = dict(
        title=fake.sentence(nb_words=3).rstrip("."),
        description=fake.paragraph(),
        event_type="conference",
        location=fake.city(),
        start_date=start,
        end_date=start + timedelta(hours=8),
        status=status.value,
        created_by=owner.id,
    )
    data.update(overrides)
    event = Event(**data)
    db.add(event)
    db.commit()
    db.refresh(event)
    return event


def auth_headers_for(user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


@pytest.fixture
def organizer(db_session: Session) -> User:
    return make_user(db_session)


@pytest.fixture
def other_organizer(db_session: Session) -> User:
    return make_user(db_session)


@pytest.fixture
def organizer_headers(organizer: User) -> dict:
    return auth_headers_for(organizer)


@pytest.fixture
def other_headers(other_organizer: User) -> dict:
    return auth_headers_for(other_organizer)


@pytest.fixture
def published_event(db_session: Session, organizer: User) -> Event:
    return make_event(db_session, organizer, EventStatus.PUBLISHED)


@pytest.fixture
def draft_event(db_session: Session, organizer: User) -> Event:
    return make_event(db_session, organizer, EventStatus.DRAFT)

"""
Pytest Configuration and Fixtures
"""

from datetime import datetime, timedelta
from typing import Callable, Generator
from uuid import uuid4

import pytest
from faker import Faker
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

import sportnet.database as app_database
from sportnet.config import settings
from sportnet.database import Base, get_db
from sportnet.main import app  # This is the FastAPI instance
from sportnet.models.coach import Coach
from sportnet.models.event import Event, EventType, PriceType
from sportnet.models.participant import Participant
from sportnet.models.reference import EventStyle, Sport, SportGoal, SportGroup
from sportnet.models.user import User, UserRole
from sportnet.utils.auth import create_access_token, get_password_hash

fake = Faker()

CSRF_TOKEN = "test-csrf-token"
TEST_PASSWORD = "Password123"

# One shared in-memory database for the whole run
engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Startup (init_db) must use the test engine too
app_database._engine = engine
app_database._SessionLocal = TestingSessionLocal

# Hash once, bcrypt is slow
_PASSWORD_HASH = get_password_hash(TEST_PASSWORD)


@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """Fresh schema for every test"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.rollback()
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def upload_dir(tmp_path, monkeypatch):
    """Uploads land in the test's temporary directory"""
    directory = tmp_path / "uploads"
    monkeypatch.setattr(settings, "UPLOAD_DIR", str(directory))
    return directory


@pytest.fixture(scope="function")
def client(db: Session) -> Generator[TestClient, None, None]:
    """Create a test client with database override and a CSRF cookie/header pair"""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(
        app,
        headers={settings.CSRF_HEADER_NAME: CSRF_TOKEN},
        cookies={settings.CSRF_COOKIE_NAME: CSRF_TOKEN},
    ) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# Reference data


@pytest.fixture
def sport_group(db: Session) -> SportGroup:
    group = SportGroup(name="Racket Sports")
    db.add(group)
    db.commit()
    db.refresh(group)
    return group


def _make_sport(db: Session, group: SportGroup, name: str) -> Sport:
    sport = Sport(group_id=group.id, name=name, group_name=group.name)
    db.add(sport)
    db.commit()
    db.refresh(sport)
    return sport


@pytest.fixture
def tennis(db: Session, sport_group: SportGroup) -> Sport:
    return _make_sport(db, sport_group, "Tennis")


@pytest.fixture
def padel(db: Session, sport_group: SportGroup) -> Sport:
    return _make_sport(db, sport_group, "Padel")


@pytest.fixture
def sport_goal(db: Session) -> SportGoal:
    goal = SportGoal(name="Stay fit")
    db.add(goal)
    db.commit()
    db.refresh(goal)
    return goal


@pytest.fixture
def event_style(db: Session) -> EventStyle:
    style = EventStyle(name="Training", color="#1E90FF")
    db.add(style)
    db.commit()
    db.refresh(style)
    return style


# Users


@pytest.fixture
def make_user(db: Session) -> Callable[..., User]:
    """Factory for users with optional profiles"""

    def _make_user(role: UserRole = UserRole.USER, participant: Participant = None, coach: Coach = None) -> User:
        first_name = fake.first_name()
        user = User(
            first_name=first_name,
            last_name=fake.last_name(),
            email=f"{first_name.lower()}-{uuid4().hex[:8]}@example.com",
            phone="+46701234567",
            hashed_password=_PASSWORD_HASH,
            role=role.value,
            is_active=True,
        )
        if participant is not None:
            db.add(participant)
            db.flush()
            user.participant_id = participant.id
        if coach is not None:
            db.add(coach)
            db.flush()
            user.coach_id = coach.id
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make_user


@pytest.fixture
def make_participant_user(make_user, tennis: Sport, sport_goal: SportGoal) -> Callable[[], User]:
    def _make():
        participant = Participant(
            name=fake.name(),
            main_sport_id=tennis.id,
            skill_level=5,
            sport_goal_id=sport_goal.id,
        )
        return make_user(participant=participant)

    return _make


@pytest.fixture
def admin_user(make_user) -> User:
    return make_user(role=UserRole.ADMIN)


@pytest.fixture
def coach_user(make_user) -> User:
    return make_user(coach=Coach(name=fake.name()))


@pytest.fixture
def other_coach_user(make_user) -> User:
    return make_user(coach=Coach(name=fake.name()))


@pytest.fixture
def participant_user(make_participant_user) -> User:
    return make_participant_user()


@pytest.fixture
def auth_headers() -> Callable[[User], dict]:
    """Bearer header for any user"""

    def _headers(user: User) -> dict:
        return {"Authorization": f"Bearer {create_access_token(user.id)}"}

    return _headers


# Events


@pytest.fixture
def make_event(db: Session, coach_user: User, tennis: Sport, event_style: EventStyle) -> Callable[..., Event]:
    """Factory for events starting a given time from now"""

    def _make_event(start_in: timedelta = timedelta(days=10), capacity: int = 2, owner: User = None, **overrides):
        start_time = datetime.utcnow() + start_in
        values = dict(
            owner_id=(owner or coach_user).id,
            name="Morning Tennis",
            start_time=start_time,
            end_time=start_time + timedelta(hours=2),
            capacity=capacity,
            level=5,
            event_type=EventType.OUTDOOR,
            style_id=event_style.id,
            style_name=event_style.name,
            style_color=event_style.color,
            sport_group_id=tennis.group_id,
            sport_id=tennis.id,
            price_type=PriceType.FREE,
            participation_fee=0,
            location="Central Park courts",
            equipment="Racket",
        )
        values.update(overrides)
        event = Event(**values)
        db.add(event)
        db.commit()
        db.refresh(event)
        return event

    return _make_event

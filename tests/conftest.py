"""Shared test fixtures."""

from datetime import UTC, datetime, timedelta
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel, create_engine
from sqlmodel.pool import StaticPool

from app.core.database import get_session
from app.core.security import CurrentUser, create_access_token
from app.main import app
from app.models import Event, Participant
from app.scheduling.keys import generate_series_id

SERIES_START = datetime(2026, 3, 2, 9, 0, tzinfo=UTC)


def bearer(user: CurrentUser) -> dict[str, str]:
    token = create_access_token(user.id, user.username, user.email)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture(name="engine")
def engine_fixture():
    """Create an in-memory SQLite database for testing."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture(name="session")
def session_fixture(engine):
    """Create a new database session for each test."""
    with Session(engine) as session:
        yield session


@pytest.fixture(name="client")
def client_fixture(session: Session):
    """Create a test client with the test database session."""

    def get_session_override():
        return session

    app.dependency_overrides[get_session] = get_session_override
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


@pytest.fixture(name="alice")
def alice_fixture() -> CurrentUser:
    return CurrentUser(id=uuid4(), username="alice", email="alice@example.com")


@pytest.fixture(name="bob")
def bob_fixture() -> CurrentUser:
    return CurrentUser(id=uuid4(), username="bob", email="Bob@Example.com")


@pytest.fixture(name="alice_headers")
def alice_headers_fixture(alice: CurrentUser) -> dict[str, str]:
    return bearer(alice)


@pytest.fixture(name="bob_headers")
def bob_headers_fixture(bob: CurrentUser) -> dict[str, str]:
    return bearer(bob)


@pytest.fixture(name="standalone_event")
def standalone_event_fixture(session: Session, alice: CurrentUser) -> Event:
    """A one-off event created by alice with bob as participant."""
    event = Event(
        title="Dentist",
        description="Annual check-up",
        start_time=SERIES_START + timedelta(days=1),
        end_time=SERIES_START + timedelta(days=1, hours=1),
        creator_id=alice.id,
        series_id=generate_series_id("none"),
        participants=[Participant(email="bob@example.com")],
    )
    session.add(event)
    session.commit()
    session.refresh(event)
    return event


@pytest.fixture(name="weekly_series")
def weekly_series_fixture(session: Session, alice: CurrentUser) -> list[Event]:
    """Three weekly occurrences T1 < T2 < T3 of one series created by alice."""
    series_id = generate_series_id("weekly")
    events = [
        Event(
            title="Standup",
            start_time=SERIES_START + timedelta(weeks=week),
            end_time=SERIES_START + timedelta(weeks=week, minutes=15),
            creator_id=alice.id,
            recurrence_type="weekly",
            recurrence_interval=1,
            series_id=series_id,
        )
        for week in range(3)
    ]
    session.add_all(events)
    session.commit()
    for event in events:
        session.refresh(event)
    return events

"""Pytest fixtures: in-memory SQLite database for fast, isolated tests."""
from datetime import datetime, timedelta
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

from socialeyes.database import Base, enable_sqlite_foreign_keys, get_db
from socialeyes.main import app

# Import all models so they register with Base.metadata
from socialeyes.models.user import User                           # noqa: F401
from socialeyes.models.group import Group, Membership, Venue      # noqa: F401
from socialeyes.models.event import Event, EventImage             # noqa: F401
from socialeyes.models.attendance import Attendance               # noqa: F401


@pytest.fixture(scope="function")
def db_engine():
    """Create a fresh in-memory SQLite engine for each test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db(db_engine):
    """Yield a database session for direct store assertions."""
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def client(db_engine):
    """FastAPI TestClient with the database dependency overridden to use SQLite."""
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)

    def _override_get_db():
        session = TestingSession()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Helpers: drive the API and return response JSON
# ---------------------------------------------------------------------------
def as_user(user: dict) -> dict:
    """Request headers identifying the caller."""
    return {"X-User-Id": str(user["id"])}


def create_test_user(client: TestClient, name: str = "Test") -> dict:
    """Helper: POST /api/users and return response JSON."""
    handle = name.lower().replace(" ", "")
    resp = client.post("/api/users/", json={
        "firstName": name,
        "lastName": "User",
        "email": f"{handle}@example.com",
        "username": f"{handle}_user",
    })
    assert resp.status_code == 201, resp.text
    return resp.json()


def create_test_group(client: TestClient, organizer: dict, name: str = "Test Group", tz: str = "UTC") -> dict:
    """Helper: POST /api/groups as the organizer and return response JSON."""
    resp = client.post("/api/groups/", headers=as_user(organizer), json={
        "name": name,
        "about": "A group for testing",
        "type": "In person",
        "private": False,
        "city": "Portland",
        "state": "OR",
        "timezone": tz,
    })
    assert resp.status_code == 201, resp.text
    return resp.json()


def add_member(client: TestClient, group: dict, organizer: dict, user: dict, status: str = "member") -> dict:
    """Helper: POST /api/groups/{id}/members as the organizer."""
    resp = client.post(f"/api/groups/{group['id']}/members", headers=as_user(organizer), json={
        "userId": user["id"],
        "status": status,
    })
    assert resp.status_code == 201, resp.text
    return resp.json()


def create_test_event(client: TestClient, group: dict, host: dict, name: str = "Test Event",
                      start_offset_days: int = 7, venue_id: int = None) -> dict:
    """Helper: POST /api/groups/{id}/events as an organizer or co-host."""
    start = datetime(2030, 1, 1, 18, 0) + timedelta(days=start_offset_days)
    resp = client.post(f"/api/groups/{group['id']}/events", headers=as_user(host), json={
        "venueId": venue_id,
        "name": name,
        "type": "In person",
        "capacity": 10,
        "price": 15.5,
        "description": "An event for testing",
        "startDate": start.isoformat(),
        "endDate": (start + timedelta(hours=2)).isoformat(),
    })
    assert resp.status_code == 201, resp.text
    return resp.json()


def setup_event(client: TestClient) -> dict:
    """Organizer, co-host, member, outsider, a group and one event in it."""
    organizer = create_test_user(client, name="Organizer")
    cohost = create_test_user(client, name="Cohost")
    member = create_test_user(client, name="Member")
    outsider = create_test_user(client, name="Outsider")
    group = create_test_group(client, organizer)
    add_member(client, group, organizer, cohost, status="co-host")
    add_member(client, group, organizer, member, status="member")
    event = create_test_event(client, group, organizer)
    return {
        "organizer": organizer,
        "cohost": cohost,
        "member": member,
        "outsider": outsider,
        "group": group,
        "event": event,
    }

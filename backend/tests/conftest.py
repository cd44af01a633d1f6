"""Pytest fixtures: file-backed SQLite database, recreated for every test."""
import uuid
from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from fastapi.testclient import TestClient

from campus_events.database import Base, configure_sqlite, get_db
from campus_events.main import app
from campus_events.models import Event, MemberRole, MemberStatus, Profile, Society, SocietyMember
from campus_events.store import SqlAlchemyEventStore

# Import all models so they register with Base.metadata
import campus_events.models  # noqa: F401

SQLITE_URL = "sqlite:///./test.db"


@pytest.fixture(scope="function")
def db_engine():
    """Create a fresh SQLite engine for each test.

    File-backed so that concurrent sessions in the threading tests share it.
    """
    engine = create_engine(SQLITE_URL, connect_args={"check_same_thread": False, "timeout": 30})
    configure_sqlite(engine)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def session_factory(db_engine):
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=db_engine)


@pytest.fixture(scope="function")
def db(session_factory):
    """Yield a database session, closed after the test."""
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def store(db):
    return SqlAlchemyEventStore(db)


@pytest.fixture(scope="function")
def client(session_factory):
    """FastAPI TestClient with the database dependency overridden to use SQLite."""

    def _override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Direct-to-database factories for service-level tests
# ---------------------------------------------------------------------------
def make_user(db, name: str = "Student", is_admin: bool = False) -> Profile:
    user = Profile(
        email=f"{name.lower().replace(' ', '.')}.{uuid.uuid4().hex[:6]}@uni.test",
        full_name=name,
        is_admin=is_admin,
    )
    db.add(user)
    db.commit()
    return user


def make_society(db, creator: Profile, name: str = "Chess Society") -> Society:
    society = Society(name=name, slug=f"{name.lower().replace(' ', '-')}-{uuid.uuid4().hex[:6]}",
                      created_by=creator.user_id)
    db.add(society)
    db.flush()
    db.add(SocietyMember(
        society_id=society.society_id,
        user_id=creator.user_id,
        role=MemberRole.admin,
        status=MemberStatus.approved,
    ))
    db.commit()
    return society


def add_member(db, society: Society, user: Profile, role: MemberRole = MemberRole.member,
               status: MemberStatus = MemberStatus.approved) -> SocietyMember:
    member = SocietyMember(society_id=society.society_id, user_id=user.user_id, role=role, status=status)
    db.add(member)
    db.commit()
    return member


def make_event(db, society: Society, creator: Profile, **overrides) -> Event:
    start = datetime.now(timezone.utc) + timedelta(days=3)
    fields = {
        "society_id": society.society_id,
        "created_by": creator.user_id,
        "title": "Open Night",
        "start_time": start,
        "end_time": start + timedelta(hours=2),
        "capacity": None,
        "allow_guests": False,
        "max_guests_per_rsvp": None,
        "check_in_enabled": True,
        "event_code": uuid.uuid4().hex[:8].upper(),
    }
    fields.update(overrides)
    event = Event(**fields)
    db.add(event)
    db.commit()
    return event


@pytest.fixture
def organizer(db):
    return make_user(db, name="Organizer")


@pytest.fixture
def society(db, organizer):
    return make_society(db, organizer)


# ---------------------------------------------------------------------------
# API helpers
# ---------------------------------------------------------------------------
def create_test_user(client: TestClient, name: str = "Test User", is_admin: bool = False) -> dict:
    """Helper: POST /api/users and return response JSON."""
    resp = client.post("/api/users/", json={
        "email": f"{name.lower().replace(' ', '.')}.{uuid.uuid4().hex[:6]}@uni.test",
        "full_name": name,
        "is_admin": is_admin,
    })
    assert resp.status_code == 201, resp.text
    return resp.json()


def create_test_society(client: TestClient, creator_id: str, name: str = "Test Society") -> dict:
    """Helper: POST /api/societies and return response JSON."""
    resp = client.post("/api/societies/", json={
        "name": name,
        "slug": f"{name.lower().replace(' ', '-')}-{uuid.uuid4().hex[:6]}",
        "created_by": creator_id,
    })
    assert resp.status_code == 201, resp.text
    return resp.json()


def create_test_event(client: TestClient, society_id: str, organizer_id: str, **overrides) -> dict:
    """Helper: POST /api/events starting three days out, return response JSON."""
    start = datetime.now(timezone.utc) + timedelta(days=3)
    payload = {
        "society_id": society_id,
        "created_by": organizer_id,
        "title": "Test Event",
        "start_time": start.isoformat(),
        "end_time": (start + timedelta(hours=2)).isoformat(),
        "check_in_enabled": True,
    }
    payload.update(overrides)
    resp = client.post("/api/events/", json=payload)
    assert resp.status_code == 201, resp.text
    return resp.json()

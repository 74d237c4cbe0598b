"""Shared fixtures: an in-memory SQLite database and a TestClient bound to it.

Each test gets a fresh schema, so rows never leak between tests.
"""
from typing import Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import gallery.models  # noqa: F401
from gallery import crud
from gallery.core.config import Settings
from gallery.core.security import create_guest_token
from gallery.crud.event import EventCreate
from gallery.crud.photo import PhotoCreate
from gallery.db.database import Base, get_db
from gallery.main import create_app
from gallery.schemas.feedback import ClientInfo, FeedbackCreate, FeedbackSettingsUpdate
from gallery.services.feedback_service import FeedbackService


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(engine):
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def service():
    return FeedbackService()


@pytest.fixture
def event(db):
    return crud.event.create(db, obj_in=EventCreate(slug="summer-wedding", event_name="Summer Wedding"))


@pytest.fixture
def other_event(db):
    return crud.event.create(db, obj_in=EventCreate(slug="office-party", event_name="Office Party"))


@pytest.fixture
def make_photo(db):
    """Factory for photos in a given event."""

    def _make_photo(event_id: int, filename: str, category_id: Optional[int] = None, type: str = "single"):
        return crud.photo.create(
            db,
            obj_in=PhotoCreate(
                event_id=event_id,
                filename=filename,
                url=f"https://cdn.example.com/{filename}",
                thumbnail_url=f"https://cdn.example.com/thumbs/{filename}",
                type=type,
                category_id=category_id,
            ),
        )

    return _make_photo


@pytest.fixture
def photos(make_photo, event):
    return [
        make_photo(event.id, "p1.jpg", category_id=1),
        make_photo(event.id, "p2.jpg", category_id=1),
        make_photo(event.id, "p3.jpg", category_id=2, type="collage"),
    ]


@pytest.fixture
def enabled_settings(db, service, event):
    """Feedback on for every type, comments moderated."""
    return service.update_event_feedback_settings(
        db,
        event.id,
        FeedbackSettingsUpdate(feedback_enabled=True, allow_comments=True, moderate_comments=True),
    )


@pytest.fixture
def submit(db, service):
    """Submit feedback as a guest; extra keyword args go into FeedbackCreate."""

    def _submit(event_id, photo_id, guest_id, feedback_type, svc=None, **fields):
        return (svc or service).submit_feedback(
            db,
            event_id,
            photo_id,
            FeedbackCreate(feedback_type=feedback_type, **fields),
            ClientInfo(guest_id=guest_id, ip_address="10.0.0.1", user_agent="pytest"),
        )

    return _submit


@pytest.fixture
def strict_settings():
    """Settings with edited comments sent back through moderation."""
    return Settings(AUTO_APPROVE_EDITED_COMMENTS=False)


@pytest.fixture
def app(db):
    app = create_app()

    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    return app


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def guest_headers():
    def _guest_headers(event_id: int, guest_id: str) -> dict:
        return {"X-Guest-Token": create_guest_token(event_id, guest_id)}

    return _guest_headers


@pytest.fixture
def admin_headers():
    return {"X-Admin-Id": "admin-1"}

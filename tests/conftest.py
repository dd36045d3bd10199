from datetime import timedelta

import mongomock
import pytest
from fastapi.testclient import TestClient

from help_hive_api.app.core.config import Settings
from help_hive_api.app.core.db import Database
from help_hive_api.app.main import create_app
from help_hive_api.app.services.event_service import utcnow

TEST_SECRET = "test-secret"
ORGANIZER_EMAIL = "organizer@example.com"


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        secret_key=TEST_SECRET,
        environment="development",
        seed_sample_data=False,
        cors_origins="http://localhost:5175",
    )


@pytest.fixture
def database() -> Database:
    """In-memory MongoDB handle with the production indexes."""
    db = Database(mongomock.MongoClient(), "test_events_db")
    db.ensure_indexes()
    return db


@pytest.fixture
def app(test_settings: Settings, database: Database):
    return create_app(settings=test_settings, database=database)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_client(client: TestClient) -> TestClient:
    """The same client, holding a valid ``token`` cookie."""
    response = client.post("/api/auth/token", json={"email": ORGANIZER_EMAIL, "name": "Organizer"})
    assert response.status_code == 200, response.text
    return client


@pytest.fixture
def make_event(database: Database):
    """Insert an event document directly and return its id as a string."""

    def _make_event(**overrides) -> str:
        doc = {
            "title": "Beach Cleanup Drive",
            "description": "Clean the shore",
            "eventType": "Cleanup",
            "thumbnail": "https://example.com/beach.jpg",
            "location": "Miami Beach",
            "eventDate": utcnow() + timedelta(days=10),
            "email": ORGANIZER_EMAIL,
            "createdAt": utcnow(),
        }
        doc.update(overrides)
        return str(database.events.insert_one(doc).inserted_id)

    return _make_event

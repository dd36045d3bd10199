"""
MongoDB integration.

This module owns the single ``MongoClient`` used by the process.  The
client is created once at startup by ``connect`` and wrapped in a
``Database`` handle that exposes the two collections the API works
with.  The handle is stored on ``app.state`` and handed to every
request through the ``get_database`` dependency, so tests can inject a
handle backed by an in-memory client instead.
"""

import logging
from typing import Any

from fastapi import Request
from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.server_api import ServerApi

from .config import Settings

logger = logging.getLogger(__name__)

EVENTS_COLLECTION = "events"
JOINED_EVENTS_COLLECTION = "joined_events"
JOIN_UNIQUE_INDEX = "event_participant_unique"


class Database:
    """Handle over the ``events`` and ``joined_events`` collections."""

    def __init__(self, client: Any, name: str) -> None:
        self.client = client
        self.name = name
        db = client[name]
        self.events = db[EVENTS_COLLECTION]
        self.joined_events = db[JOINED_EVENTS_COLLECTION]

    def ensure_indexes(self) -> None:
        """Create the indexes the services rely on.

        The compound unique index on ``(eventId, participantEmail)`` is
        what prevents a participant from joining the same event twice;
        ``JoinService`` treats a violation of it as a conflict.
        """
        self.joined_events.create_index(
            [("eventId", ASCENDING), ("participantEmail", ASCENDING)],
            unique=True,
            name=JOIN_UNIQUE_INDEX,
        )
        self.joined_events.create_index([("participantEmail", ASCENDING), ("joinedAt", DESCENDING)])
        self.events.create_index([("eventDate", ASCENDING)])
        self.events.create_index([("email", ASCENDING), ("createdAt", DESCENDING)])

    def close(self) -> None:
        self.client.close()


def connect(settings: Settings) -> Database:
    """Open the MongoDB connection and verify it with a ping.

    Raises ``pymongo.errors.PyMongoError`` if the server cannot be
    reached; the caller decides whether that is fatal.
    """
    client = MongoClient(
        settings.database_uri,
        server_api=ServerApi("1", strict=True, deprecation_errors=True),
    )
    try:
        client.admin.command("ping")
    except Exception:
        client.close()
        raise
    logger.info("Connected to MongoDB database '%s'", settings.db_name)
    return Database(client, settings.db_name)


def get_database(request: Request) -> Database:
    """FastAPI dependency returning the application's database handle."""
    return request.app.state.database

"""
Business logic for events.

``EventService`` runs every query against the ``events`` collection of
the injected ``Database`` handle.  The pymongo driver is blocking, so
each call is pushed to Starlette's threadpool and requests keep
interleaving on the event loop while one of them waits on MongoDB.
"""

import logging
import re
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from bson import ObjectId
from fastapi.concurrency import run_in_threadpool
from pymongo import ASCENDING, DESCENDING
from pymongo.errors import PyMongoError

from ..core.db import Database
from ..core.errors import EventNotFoundError, EventValidationError, StorageError
from ..schemas.event import EventCreate, EventRead, EventUpdate

logger = logging.getLogger(__name__)

ALL_EVENT_TYPES = "All"


def utcnow() -> datetime:
    """Current time as naive UTC, comparable with stored BSON dates."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def parse_object_id(event_id: str) -> ObjectId:
    """Turn a path parameter into an ``ObjectId``.

    Malformed identifiers can never match a document, so they are
    reported as a missing event rather than a separate error.
    """
    if not ObjectId.is_valid(event_id):
        raise EventNotFoundError("Event not found")
    return ObjectId(event_id)


class EventService:
    """Operations on the ``events`` collection."""

    @classmethod
    async def create_event(
        cls,
        db: Database,
        data: EventCreate,
        creator_email: Optional[str] = None,
    ) -> str:
        """Insert a new event and return its id.

        ``title`` must be non-empty and ``eventDate`` present; otherwise
        ``EventValidationError`` is raised and nothing is written.
        ``creator_email`` fills ``email`` when the payload has none.
        """
        if not (data.title and data.title.strip()) or data.event_date is None:
            raise EventValidationError("Title and event date are required")
        document = data.model_dump(by_alias=True, exclude_unset=True)
        if not document.get("email") and creator_email:
            document["email"] = creator_email
        document["createdAt"] = utcnow()
        try:
            result = await run_in_threadpool(db.events.insert_one, document)
        except PyMongoError as exc:
            raise StorageError("Failed to create event") from exc
        logger.info("Created event %s '%s'", result.inserted_id, data.title)
        return str(result.inserted_id)

    @classmethod
    async def list_events(
        cls,
        db: Database,
        event_type: Optional[str] = None,
        search: Optional[str] = None,
    ) -> List[EventRead]:
        """Return upcoming events ordered by date.

        - ``event_type`` is an exact match; the value ``"All"`` disables
          the filter.
        - ``search`` matches ``title`` case-insensitively as a plain
          substring.
        Past events (``eventDate`` before now) are never returned.
        """
        query: Dict[str, Any] = {"eventDate": {"$gte": utcnow()}}
        if event_type and event_type != ALL_EVENT_TYPES:
            query["eventType"] = event_type
        if search:
            query["title"] = {"$regex": re.escape(search), "$options": "i"}

        def _find() -> List[Dict[str, Any]]:
            return list(db.events.find(query).sort("eventDate", ASCENDING))

        try:
            docs = await run_in_threadpool(_find)
        except PyMongoError as exc:
            raise StorageError("Failed to fetch events") from exc
        return [EventRead.model_validate(doc) for doc in docs]

    @classmethod
    async def get_event_document(cls, db: Database, event_id: str) -> Dict[str, Any]:
        """Fetch the raw document, raising ``EventNotFoundError`` if absent."""
        oid = parse_object_id(event_id)
        try:
            doc = await run_in_threadpool(db.events.find_one, {"_id": oid})
        except PyMongoError as exc:
            raise StorageError("Failed to fetch event") from exc
        if not doc:
            raise EventNotFoundError("Event not found")
        return doc

    @classmethod
    async def get_event(cls, db: Database, event_id: str) -> EventRead:
        """Retrieve a single event by its id."""
        return EventRead.model_validate(await cls.get_event_document(db, event_id))

    @classmethod
    async def update_event(cls, db: Database, event_id: str, updates: EventUpdate) -> None:
        """Merge the supplied fields into the event and stamp ``updatedAt``.

        Fields the client did not send are left unchanged.  Existing
        join records keep their snapshot of the old values.
        """
        oid = parse_object_id(event_id)
        changes = updates.model_dump(by_alias=True, exclude_unset=True)
        if "title" in changes and not (changes["title"] or "").strip():
            raise EventValidationError("Title cannot be empty")
        if "eventDate" in changes and changes["eventDate"] is None:
            raise EventValidationError("Event date cannot be empty")
        changes["updatedAt"] = utcnow()
        try:
            result = await run_in_threadpool(db.events.update_one, {"_id": oid}, {"$set": changes})
        except PyMongoError as exc:
            raise StorageError("Failed to update event") from exc
        if result.matched_count == 0:
            raise EventNotFoundError("Event not found")
        logger.info("Updated event %s fields %s", event_id, sorted(changes))

    @classmethod
    async def delete_event(cls, db: Database, event_id: str) -> None:
        """Delete an event together with the join records pointing at it.

        Once the event itself is gone the call succeeds; a failure while
        removing its join records is logged and leaves them orphaned.
        """
        oid = parse_object_id(event_id)
        try:
            result = await run_in_threadpool(db.events.delete_one, {"_id": oid})
        except PyMongoError as exc:
            raise StorageError("Failed to delete event") from exc
        if result.deleted_count == 0:
            raise EventNotFoundError("Event not found")
        try:
            removed = await run_in_threadpool(db.joined_events.delete_many, {"eventId": str(oid)})
        except PyMongoError:
            logger.exception("Deleted event %s but failed to remove its join records", oid)
            return
        logger.info("Deleted event %s and %d join record(s)", oid, removed.deleted_count)

    @classmethod
    async def list_events_by_creator(cls, db: Database, email: str) -> List[EventRead]:
        """All events created by ``email``, newest first."""

        def _find() -> List[Dict[str, Any]]:
            return list(db.events.find({"email": email}).sort("createdAt", DESCENDING))

        try:
            docs = await run_in_threadpool(_find)
        except PyMongoError as exc:
            raise StorageError("Failed to fetch user events") from exc
        return [EventRead.model_validate(doc) for doc in docs]

"""
Business logic for joining events.

Joining stores a snapshot of the event inside the join record.  The
"one join per participant and event" rule is enforced by the unique
index created in ``Database.ensure_indexes``: the insert either
succeeds or fails with ``DuplicateKeyError``, so two concurrent
requests for the same pair cannot both write a record.
"""

import logging
from typing import Any, Dict, List

from fastapi.concurrency import run_in_threadpool
from pymongo import DESCENDING
from pymongo.errors import DuplicateKeyError, PyMongoError

from ..core.db import Database
from ..core.errors import AlreadyJoinedError, EventValidationError, StorageError
from ..schemas.join import JoinRead
from .event_service import EventService, utcnow

logger = logging.getLogger(__name__)


class JoinService:
    """Operations on the ``joined_events`` collection."""

    @classmethod
    async def join_event(cls, db: Database, event_id: str, participant_email: str) -> None:
        """Record that ``participant_email`` joined the event.

        Raises ``EventNotFoundError`` if the event does not exist and
        ``AlreadyJoinedError`` if the participant has joined before.
        """
        if not participant_email or not participant_email.strip():
            raise EventValidationError("Email is required")
        event = await EventService.get_event_document(db, event_id)
        record = {
            "eventId": str(event["_id"]),
            "participantEmail": participant_email,
            "joinedAt": utcnow(),
            "event": dict(event),
        }
        try:
            await run_in_threadpool(db.joined_events.insert_one, record)
        except DuplicateKeyError as exc:
            raise AlreadyJoinedError("Already joined this event") from exc
        except PyMongoError as exc:
            raise StorageError("Failed to join event") from exc
        logger.info("%s joined event %s", participant_email, event_id)

    @classmethod
    async def list_joined_events(cls, db: Database, email: str) -> List[JoinRead]:
        """Join records of a participant, most recent first."""

        def _find() -> List[Dict[str, Any]]:
            return list(db.joined_events.find({"participantEmail": email}).sort("joinedAt", DESCENDING))

        try:
            docs = await run_in_threadpool(_find)
        except PyMongoError as exc:
            raise StorageError("Failed to fetch joined events") from exc
        return [JoinRead.model_validate(doc) for doc in docs]

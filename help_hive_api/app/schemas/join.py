"""
Pydantic models for joining events.

A join record stores a full copy of the event as it looked when the
participant joined.  Later edits to the event are not propagated to
existing join records.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field, field_serializer, field_validator

from .event import EventRead, _CamelModel, as_utc


class JoinRequest(BaseModel):
    """Body of ``POST /api/events/{id}/join``.

    ``email`` is optional at the schema level so that a missing value
    yields the API's own 400 response instead of a validation error.
    """

    email: Optional[str] = Field(None, examples=["participant@example.com"])


class JoinRead(_CamelModel):
    id: str = Field(..., alias="_id")
    event_id: str
    participant_email: str
    joined_at: datetime
    event: Optional[EventRead] = None

    @field_validator("id", mode="before")
    @classmethod
    def _object_id_to_str(cls, value: Any) -> Any:
        return str(value) if value is not None else value

    @field_serializer("joined_at", when_used="json")
    def _joined_at_as_utc(self, value: datetime) -> datetime:
        return as_utc(value)

"""
Pydantic models for event data.

Documents in MongoDB use camelCase keys (``eventType``, ``eventDate``,
``createdAt``); the models expose snake_case attributes and use
camelCase aliases on the wire and in the database.  ``EventCreate``
and ``EventUpdate`` describe request bodies, ``EventRead`` describes
a stored document as returned to clients.
"""

from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, Field, field_serializer, field_validator
from pydantic.alias_generators import to_camel


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Convert an aware datetime to naive UTC, the form BSON round-trips."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Mark a stored naive datetime as UTC so JSON output carries the offset."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


class _CamelModel(BaseModel):
    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "extra": "ignore",
    }


class EventFields(_CamelModel):
    """Editable event fields shared by create and update payloads."""

    title: Optional[str] = Field(None, examples=["Beach Cleanup Drive"])
    description: Optional[str] = Field(None, examples=["Community cleanup of the shoreline"])
    event_type: Optional[str] = Field(None, examples=["Cleanup"])
    thumbnail: Optional[str] = Field(None, examples=["https://images.unsplash.com/photo-1618477461853"])
    location: Optional[str] = Field(None, examples=["Miami Beach"])
    event_date: Optional[datetime] = Field(None, examples=["2026-12-20T09:00:00Z"])
    email: Optional[str] = Field(None, examples=["organizer@example.com"])

    @field_validator("event_date", mode="before")
    @classmethod
    def _parse_date_only(cls, value: Any) -> Any:
        # Clients frequently send a bare calendar date from a date picker.
        if isinstance(value, str) and len(value) == 10:
            return datetime.fromisoformat(value)
        return value

    @field_validator("event_date")
    @classmethod
    def _normalise_tz(cls, value: Optional[datetime]) -> Optional[datetime]:
        return to_naive_utc(value)


class EventCreate(EventFields):
    """Schema for creating an event.

    ``title`` and ``event_date`` are required but are checked by
    ``EventService.create_event`` so that a missing value produces the
    same error message as an empty one.
    """


class EventUpdate(EventFields):
    """Schema for a partial update.

    Only fields present in the request body are written; unspecified
    fields remain unchanged.
    """


class EventRead(_CamelModel):
    """An event document as returned by the API."""

    id: str = Field(..., alias="_id")
    title: Optional[str] = None
    description: Optional[str] = None
    event_type: Optional[str] = None
    thumbnail: Optional[str] = None
    location: Optional[str] = None
    event_date: Optional[datetime] = None
    email: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("id", mode="before")
    @classmethod
    def _object_id_to_str(cls, value: Any) -> Any:
        return str(value) if value is not None else value

    @field_serializer("event_date", "created_at", "updated_at", when_used="json")
    def _dates_as_utc(self, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value)


class EventCreated(BaseModel):
    message: str
    eventId: str


class MessageResponse(BaseModel):
    message: str

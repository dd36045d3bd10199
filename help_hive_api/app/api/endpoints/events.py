"""
Event endpoints.

These routes provide CRUD operations for events, the per-user listings
and joining.  Every mutating route requires an authenticated user
(a valid ``token`` cookie).  Service errors are translated here into
HTTP responses; the application-level handlers render the ``detail``
as ``{"message": ...}``.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from help_hive_api.app.core.db import Database, get_database
from help_hive_api.app.core.errors import ServiceError
from help_hive_api.app.core.security import get_current_user
from help_hive_api.app.schemas.auth import TokenClaims
from help_hive_api.app.schemas.event import (
    EventCreate,
    EventCreated,
    EventRead,
    EventUpdate,
    MessageResponse,
)
from help_hive_api.app.schemas.join import JoinRead, JoinRequest
from help_hive_api.app.services.event_service import EventService
from help_hive_api.app.services.join_service import JoinService

logger = logging.getLogger(__name__)

router = APIRouter()


def _http_error(exc: ServiceError) -> HTTPException:
    if exc.status_code >= 500:
        logger.error("%s: %s", exc, exc.__cause__)
    return HTTPException(status_code=exc.status_code, detail=str(exc))


@router.post("", response_model=EventCreated, status_code=status.HTTP_201_CREATED)
async def create_event(
    event: EventCreate,
    current_user: TokenClaims = Depends(get_current_user),
    db: Database = Depends(get_database),
) -> EventCreated:
    """Create a new event.

    ``title`` and ``eventDate`` are required.  When the body has no
    ``email`` the authenticated user is recorded as the creator.
    """
    try:
        event_id = await EventService.create_event(db, event, creator_email=current_user.email)
    except ServiceError as e:
        raise _http_error(e) from e
    return EventCreated(message="Event created", eventId=event_id)


@router.get("", response_model=List[EventRead])
async def list_events(
    event_type: Optional[str] = Query(None, alias="eventType"),
    search: Optional[str] = Query(None),
    db: Database = Depends(get_database),
) -> List[EventRead]:
    """List upcoming events, soonest first.

    - **eventType**: exact category match; ``All`` means no filter.
    - **search**: case-insensitive substring of the title.
    """
    try:
        return await EventService.list_events(db, event_type=event_type, search=search)
    except ServiceError as e:
        raise _http_error(e) from e


@router.get("/user/{email}", response_model=List[EventRead])
async def list_user_events(email: str, db: Database = Depends(get_database)) -> List[EventRead]:
    """Events created by ``email``, newest first."""
    try:
        return await EventService.list_events_by_creator(db, email)
    except ServiceError as e:
        raise _http_error(e) from e


@router.get("/user/{email}/joined", response_model=List[JoinRead])
async def list_joined_events(email: str, db: Database = Depends(get_database)) -> List[JoinRead]:
    """Join records of ``email``, each with the event as it was when joined."""
    try:
        return await JoinService.list_joined_events(db, email)
    except ServiceError as e:
        raise _http_error(e) from e


@router.get("/{event_id}", response_model=EventRead)
async def get_event(event_id: str, db: Database = Depends(get_database)) -> EventRead:
    """Retrieve a single event.  Unknown or malformed ids yield 404."""
    try:
        return await EventService.get_event(db, event_id)
    except ServiceError as e:
        raise _http_error(e) from e


@router.patch("/{event_id}", response_model=MessageResponse)
async def update_event(
    event_id: str,
    updates: EventUpdate,
    current_user: TokenClaims = Depends(get_current_user),
    db: Database = Depends(get_database),
) -> MessageResponse:
    """Partially update an event; unspecified fields remain unchanged."""
    try:
        await EventService.update_event(db, event_id, updates)
    except ServiceError as e:
        raise _http_error(e) from e
    return MessageResponse(message="Event updated")


@router.delete("/{event_id}", response_model=MessageResponse)
async def delete_event(
    event_id: str,
    current_user: TokenClaims = Depends(get_current_user),
    db: Database = Depends(get_database),
) -> MessageResponse:
    """Delete an event and the join records that reference it."""
    try:
        await EventService.delete_event(db, event_id)
    except ServiceError as e:
        raise _http_error(e) from e
    logger.info("Event %s deleted by %s", event_id, current_user.email)
    return MessageResponse(message="Event deleted")


@router.post("/{event_id}/join", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def join_event(
    event_id: str,
    payload: Optional[JoinRequest] = None,
    current_user: TokenClaims = Depends(get_current_user),
    db: Database = Depends(get_database),
) -> MessageResponse:
    """Join an event as the participant named by ``email`` in the body.

    Returns 400 if ``email`` is missing or the participant already
    joined, 404 if the event does not exist.
    """
    email = payload.email if payload else None
    try:
        await JoinService.join_event(db, event_id, email or "")
    except ServiceError as e:
        raise _http_error(e) from e
    return MessageResponse(message="Successfully joined event")

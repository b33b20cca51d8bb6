"""Draft editing endpoints - materialize, edit, select hotel, discard, save."""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, HTTPException, Query, status
from pydantic import BaseModel, ConfigDict, Field

from itinerary_editor.api.deps import get_draft_store, get_trip_store
from itinerary_editor.drafts.store import DraftStore, new_temp_trip_id
from itinerary_editor.editing.session import EditingSession
from itinerary_editor.editing.source import normalize_trip_source
from itinerary_editor.errors import MoveRejectedError, SaveError, SaveValidationError
from itinerary_editor.models.commands import AddActivity, MoveActivity, RemoveActivity, RemoveDay
from itinerary_editor.models.hotel import normalize_hotel
from itinerary_editor.models.trip import Trip
from itinerary_editor.saving.reconciler import SaveReconciler
from itinerary_editor.saving.trip_store import TripStore

router = APIRouter(prefix="/drafts", tags=["drafts"])


class SaveDraftRequest(BaseModel):
    """Request body for POST /drafts/{trip_id}/save."""

    model_config = ConfigDict(populate_by_name=True)

    user_email: str = Field(..., min_length=1, alias="userEmail")


def _session(trip_id: str, drafts: DraftStore) -> EditingSession:
    """Session over an existing draft.

    Raises:
        HTTPException: 404 if there is no draft for the trip
    """
    if drafts.load(trip_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Draft not found")
    return EditingSession(trip_id, drafts)


def _draft_body(session: EditingSession, trip: Trip) -> dict[str, Any]:
    return {"trip": trip.to_document(), "unsavedChanges": session.has_unsaved_changes}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_draft(
    payload: Annotated[dict[str, Any] | list[Any], Body()],
    drafts: Annotated[DraftStore, Depends(get_draft_store)],
) -> dict[str, Any]:
    """Materialize a draft for a plan with no trip id; it gets a ``temp_`` id.

    A payload that carries its saved trip id keeps that id instead.
    """
    try:
        trip = normalize_trip_source(payload)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e)) from e

    session = EditingSession(trip.id or new_temp_trip_id(), drafts)
    return _draft_body(session, session.start(trip))


@router.put("/{trip_id}")
async def open_draft(
    trip_id: str,
    payload: Annotated[dict[str, Any] | list[Any], Body()],
    drafts: Annotated[DraftStore, Depends(get_draft_store)],
    replace: Annotated[bool, Query()] = False,
) -> dict[str, Any]:
    """Materialize a draft from a generated plan or saved trip.

    An existing draft is resumed unless ``replace`` is set.
    """
    try:
        trip = normalize_trip_source(payload, trip_id=trip_id)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e)) from e

    session = EditingSession(trip_id, drafts)
    if replace:
        session.discard()
    return _draft_body(session, session.start(trip))


@router.get("/{trip_id}")
async def get_draft(
    trip_id: str,
    drafts: Annotated[DraftStore, Depends(get_draft_store)],
) -> dict[str, Any]:
    session = _session(trip_id, drafts)
    return _draft_body(session, session.current)


@router.post("/{trip_id}/commands")
async def apply_command(
    trip_id: str,
    command: Annotated[
        MoveActivity | AddActivity | RemoveActivity | RemoveDay, Body(discriminator="kind")
    ],
    drafts: Annotated[DraftStore, Depends(get_draft_store)],
) -> dict[str, Any]:
    """Apply one edit command.

    Returns:
        Updated draft; 409 when the command is rejected
    """
    session = _session(trip_id, drafts)
    try:
        trip = session.dispatch(command)
    except MoveRejectedError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={"code": e.code, "message": e.message},
        ) from e
    return _draft_body(session, trip)


@router.put("/{trip_id}/hotel")
async def select_hotel(
    trip_id: str,
    payload: Annotated[dict[str, Any], Body()],
    drafts: Annotated[DraftStore, Depends(get_draft_store)],
    toggle: Annotated[bool, Query()] = False,
) -> dict[str, Any]:
    """Select a hotel (any provider shape); ``toggle`` deselects a re-picked hotel."""
    session = _session(trip_id, drafts)
    try:
        hotel = normalize_hotel(payload)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e)) from e

    trip = session.toggle_hotel(hotel) if toggle else session.select_hotel(hotel)
    return _draft_body(session, trip)


@router.delete("/{trip_id}/hotel")
async def clear_hotel(
    trip_id: str,
    drafts: Annotated[DraftStore, Depends(get_draft_store)],
) -> dict[str, Any]:
    session = _session(trip_id, drafts)
    return _draft_body(session, session.clear_hotel())


@router.delete("/{trip_id}", status_code=status.HTTP_204_NO_CONTENT)
async def discard_draft(
    trip_id: str,
    drafts: Annotated[DraftStore, Depends(get_draft_store)],
) -> None:
    EditingSession(trip_id, drafts).discard()


@router.post("/{trip_id}/save")
async def save_draft(
    trip_id: str,
    request: SaveDraftRequest,
    drafts: Annotated[DraftStore, Depends(get_draft_store)],
    trip_store: Annotated[TripStore, Depends(get_trip_store)],
) -> dict[str, Any]:
    """Validate the draft and persist it.

    Returns:
        ``{success, tripId, message, created}``; 400 for save-time validation
        failures, the Trip Store's status (or 502) when it fails
    """
    session = _session(trip_id, drafts)
    trip = session.current
    selected = [trip.selected_hotel] if trip.selected_hotel is not None else []

    try:
        result = await SaveReconciler(trip_store, drafts).save(
            trip_id, trip, selected, request.user_email
        )
    except SaveValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"code": e.code, "message": e.message},
        ) from e
    except SaveError as e:
        raise HTTPException(
            status_code=e.status_code or status.HTTP_502_BAD_GATEWAY,
            detail={"code": e.code, "message": e.message},
        ) from e

    return {
        "success": True,
        "tripId": result.trip_id,
        "message": result.message,
        "created": result.created,
    }

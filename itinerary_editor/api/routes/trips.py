"""Trip Store endpoints - save, fetch, list and delete saved trips."""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from itinerary_editor.api.deps import get_trip_repository
from itinerary_editor.db.repositories import TripRecordData, TripRepository
from itinerary_editor.models.save import SaveTripRequest
from itinerary_editor.saving.service import TripNotFoundError, TripValidationError, persist_trip

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/trip", tags=["trips"])


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})


def _trip_body(record: TripRecordData) -> dict[str, Any]:
    return {**record.document, "id": record.trip_id}


@router.post("/save", response_model=None)
async def save_trip(
    request: SaveTripRequest,
    repo: Annotated[TripRepository, Depends(get_trip_repository)],
) -> dict[str, Any] | JSONResponse:
    """Create or update a trip.

    Returns:
        ``{success, tripId, message}``; 400 for invalid requests, 404 when
        updating a missing trip
    """
    try:
        response = await persist_trip(repo, request)
    except TripValidationError as e:
        return _error(status.HTTP_400_BAD_REQUEST, str(e))
    except TripNotFoundError as e:
        return _error(status.HTTP_404_NOT_FOUND, str(e))
    except SQLAlchemyError:
        logger.exception("Error saving trip")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to save trip")

    return response.to_document()


@router.get("/user/{user_email}", response_model=None)
async def get_user_trips(
    user_email: str,
    repo: Annotated[TripRepository, Depends(get_trip_repository)],
) -> dict[str, Any]:
    """List a user's trips, newest first."""
    trips = [_trip_body(record) for record in await repo.list_trips(user_email)]
    return {"success": True, "trips": trips, "count": len(trips)}


@router.get("/{trip_id}", response_model=None)
async def get_trip(
    trip_id: str,
    repo: Annotated[TripRepository, Depends(get_trip_repository)],
) -> dict[str, Any] | JSONResponse:
    record = await repo.get_trip(trip_id)
    if record is None:
        return _error(status.HTTP_404_NOT_FOUND, "Trip not found")
    return {"success": True, "trip": _trip_body(record)}


@router.delete("/{trip_id}", response_model=None)
async def delete_trip(
    trip_id: str,
    repo: Annotated[TripRepository, Depends(get_trip_repository)],
) -> dict[str, Any] | JSONResponse:
    if not await repo.delete_trip(trip_id):
        return _error(status.HTTP_404_NOT_FOUND, "Trip not found")
    return {"success": True, "message": "Trip deleted successfully"}

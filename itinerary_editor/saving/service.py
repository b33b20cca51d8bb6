"""Trip Store save service - server side of ``POST /trip/save``."""

import logging
import time
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

from itinerary_editor.db.repositories import TripRepository
from itinerary_editor.editing.source import is_temporary_id
from itinerary_editor.models.common import SLOT_ORDER, SlotName
from itinerary_editor.models.save import SaveTripRequest, SaveTripResponse
from itinerary_editor.scheduling.stamper import stamp_itinerary

logger = logging.getLogger(__name__)


class TripValidationError(Exception):
    """Request rejected before anything was written (HTTP 400)."""


class TripNotFoundError(Exception):
    """Update of a trip that does not exist (HTTP 404)."""


def millis_id() -> str:
    """New trip id: milliseconds since the epoch."""
    return str(int(time.time() * 1000))


def clean_itinerary(itinerary: dict[str, Any]) -> dict[str, Any]:
    """Drop activity ids and slots without activities from a JSON itinerary."""
    cleaned: dict[str, Any] = {}

    for day_key, day in itinerary.items():
        cleaned_day: dict[str, Any] = {"Theme": day.get("Theme", "")}
        for name in SLOT_ORDER:
            slot = day.get(name.value) or {}
            bounds = {"StartTime": slot.get("StartTime"), "EndTime": slot.get("EndTime")}

            if name is SlotName.lunch:
                if slot.get("Activity"):
                    activity = {k: v for k, v in slot["Activity"].items() if k != "id"}
                    cleaned_day[name.value] = {**bounds, "Activity": activity}
            elif slot.get("Activities"):
                activities = [{k: v for k, v in a.items() if k != "id"} for a in slot["Activities"]]
                cleaned_day[name.value] = {**bounds, "Activities": activities}

        cleaned[day_key] = cleaned_day

    return cleaned


async def persist_trip(
    repo: TripRepository,
    request: SaveTripRequest,
    id_factory: Callable[[], str] = millis_id,
) -> SaveTripResponse:
    """Validate, stamp and write a trip.

    Args:
        repo: Trip repository
        request: Save request from the editor
        id_factory: Supplies ids for new trips

    Returns:
        SaveTripResponse with the stored trip id

    Raises:
        TripValidationError: Missing email, no hotel or empty days
        TripNotFoundError: Updating a trip that does not exist
    """
    if not request.user_email:
        raise TripValidationError("User email is required")
    if not request.selected_hotels:
        raise TripValidationError("Please select at least one hotel")

    trip_data = request.trip_data
    empty_days = [key for key, day in trip_data.itinerary.items() if day.activity_count() == 0]
    if empty_days:
        raise TripValidationError(f"Please add activities to days: {', '.join(empty_days)}")

    is_new = is_temporary_id(request.trip_id)
    doc_id = id_factory() if is_new else str(request.trip_id)

    if not is_new and await repo.get_trip(doc_id) is None:
        raise TripNotFoundError("Trip not found")

    timezone = trip_data.timezone
    itinerary = {key: day.to_document() for key, day in trip_data.itinerary.items()}
    cleaned = clean_itinerary(stamp_itinerary(itinerary, timezone))

    now = datetime.now(UTC).isoformat()
    plan = {
        k: v
        for k, v in trip_data.to_document().items()
        if k not in ("Itinerary", "Hotels", "generationMethod")
    }
    document: dict[str, Any] = {
        "id": doc_id,
        "userEmail": request.user_email,
        "userSelection": request.user_selection.to_document(),
        "tripData": {
            **plan,
            "Timezone": timezone,
            "Hotels": [h.to_document() for h in request.selected_hotels],
            "Itinerary": cleaned,
        },
        "updatedAt": now,
        "generationMethod": trip_data.generation_method or "ai",
    }
    if is_new:
        document["createdAt"] = now

    await repo.upsert_trip(doc_id, request.user_email, document, merge=not is_new)
    logger.info(
        f"Trip {'created' if is_new else 'updated'}: {doc_id}",
        extra={"structured": {"trip_id": doc_id, "user_email": request.user_email, "new": is_new}},
    )

    return SaveTripResponse(
        trip_id=doc_id,
        message="Trip saved successfully!" if is_new else "Trip updated successfully!",
    )

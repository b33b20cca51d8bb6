"""Trip source normalization - one canonical Trip from generated or saved payloads."""

import logging
import re
from datetime import date, timedelta
from typing import Any

from itinerary_editor.config import get_settings
from itinerary_editor.editing.ids import IdGenerator, UuidIdGenerator
from itinerary_editor.models.common import SLOT_ORDER, SlotName
from itinerary_editor.models.hotel import normalize_hotel
from itinerary_editor.models.trip import Trip

logger = logging.getLogger(__name__)

TEMP_ID_PREFIX = "temp_"

_DAY_NUMBER_RE = re.compile(r"(\d+)")


def is_temporary_id(trip_id: str | None) -> bool:
    return not trip_id or trip_id.startswith(TEMP_ID_PREFIX)


def _unwrap(payload: Any) -> tuple[dict[str, Any], dict[str, Any], str | None]:
    """Return (plan, user_selection, trip_id) from any supported payload shape."""
    if isinstance(payload, list):
        payload = payload[0] if payload else {}
    if not isinstance(payload, dict):
        raise ValueError("Invalid trip data: expected an object")

    if isinstance(payload.get("tripData"), dict):
        return payload["tripData"], payload.get("userSelection") or {}, payload.get("id")
    if isinstance(payload.get("TravelPlan"), dict):
        return payload["TravelPlan"], payload.get("userSelection") or {}, payload.get("id")
    return payload, {}, None


def _day_entries(raw: Any) -> list[tuple[str, dict[str, Any]]]:
    # Itineraries arrive either as {key: day} or as [{key: day}, ...]
    if isinstance(raw, dict):
        return [(str(k), v) for k, v in raw.items() if isinstance(v, dict)]
    entries: list[tuple[str, dict[str, Any]]] = []
    for item in raw or []:
        if isinstance(item, dict) and item:
            key, value = next(iter(item.items()))
            if isinstance(value, dict):
                entries.append((str(key), value))
    return entries


def _is_day_key(key: str) -> bool:
    try:
        date.fromisoformat(key)
    except ValueError:
        return False
    return True


def _rekey_by_start_date(
    entries: list[tuple[str, dict[str, Any]]], start_date: str | None
) -> list[tuple[str, dict[str, Any]]]:
    """Bind ``Day1``, ``Day2``... keys to calendar dates from the trip start."""
    if all(_is_day_key(key) for key, _ in entries):
        return entries
    if not start_date:
        raise ValueError("Itinerary uses day numbers but the trip has no start date")

    start = date.fromisoformat(start_date)

    def day_number(key: str) -> int:
        match = _DAY_NUMBER_RE.search(key)
        return int(match.group(1)) if match else 0

    ordered = sorted(entries, key=lambda entry: day_number(entry[0]))
    return [
        ((start + timedelta(days=offset)).isoformat(), day)
        for offset, (_, day) in enumerate(ordered)
    ]


def _normalize_day(day_key: str, day: dict[str, Any], id_generator: IdGenerator) -> dict[str, Any]:
    defaults = get_settings().slot_bounds()

    result: dict[str, Any] = {"Theme": day.get("Theme") or ""}
    for name in SLOT_ORDER:
        slot = day.get(name.value)
        if not isinstance(slot, dict):
            continue

        start, end = defaults[name]
        bounds = {"StartTime": slot.get("StartTime") or start, "EndTime": slot.get("EndTime") or end}

        if name is SlotName.lunch:
            activity = slot.get("Activity")
            if not activity:
                continue
            result[name.value] = {
                **slot,
                **bounds,
                "Activity": {**activity, "id": activity.get("id") or id_generator(day_key, name)},
            }
        else:
            activities = slot.get("Activities") or []
            if not activities:
                continue
            result[name.value] = {
                **slot,
                **bounds,
                "Activities": [
                    {**a, "id": a.get("id") or id_generator(day_key, name)} for a in activities
                ],
            }

    return result


def normalize_trip_source(
    payload: Any,
    trip_id: str | None = None,
    id_generator: IdGenerator | None = None,
) -> Trip:
    """Build a canonical Trip from a generated plan or a saved trip document.

    Accepted shapes: ``{userSelection, tripData}``, ``[{TravelPlan}]``,
    ``{TravelPlan}`` or a bare plan. Day-numbered itineraries are re-keyed to
    calendar dates, activities receive ids, slots without activities become
    absent, hotels are normalized. A saved (non-temporary) trip stores only
    its selected hotel, which becomes the draft's selection.

    Raises:
        ValueError: If the payload has no itinerary
    """
    id_generator = id_generator or UuidIdGenerator()
    plan, user_selection, payload_id = _unwrap(payload)
    trip_id = trip_id or payload_id

    if "Itinerary" not in plan:
        raise ValueError("Invalid trip data: no itinerary")

    entries = _rekey_by_start_date(_day_entries(plan["Itinerary"]), user_selection.get("startDate"))
    itinerary = {key: _normalize_day(key, day, id_generator) for key, day in entries}
    hotels = [normalize_hotel(h) for h in plan.get("Hotels") or [] if isinstance(h, dict)]

    trip_data = {
        **{k: v for k, v in plan.items() if k not in ("Itinerary", "Hotels")},
        "Timezone": plan.get("Timezone") or get_settings().default_timezone,
        "Hotels": hotels,
        "Itinerary": itinerary,
    }

    selected = hotels[0] if hotels and not is_temporary_id(trip_id) else None
    logger.info(f"Normalized trip source: id={trip_id}, days={len(itinerary)}, hotels={len(hotels)}")

    return Trip.model_validate(
        {"id": trip_id, "userSelection": user_selection, "tripData": trip_data, "selectedHotel": selected}
    )

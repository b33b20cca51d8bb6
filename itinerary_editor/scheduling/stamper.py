"""Schedule stamping - absolute timestamps for activities at the save boundary."""

import logging
from datetime import date, datetime, time
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from itinerary_editor.errors import FormatError
from itinerary_editor.models.common import SLOT_ORDER
from itinerary_editor.scheduling.time_format import parse_time_range

logger = logging.getLogger(__name__)


def stamp(
    day_key: str, time_slot: str, timezone: str
) -> tuple[datetime | None, datetime | None]:
    """Combine a day key and a ``"<start> - <end>"`` slot into aware datetimes.

    Args:
        day_key: Calendar date, YYYY-MM-DD
        time_slot: Activity time range, e.g. "2:00 PM - 5:30 PM"
        timezone: IANA timezone of the trip

    Returns:
        (start, end) offset-aware datetimes, or (None, None) if anything
        cannot be parsed. Failures are logged and never raised.
    """
    try:
        day = date.fromisoformat(day_key)
        start_min, end_min = parse_time_range(time_slot)
        tz = ZoneInfo(timezone)
    except (FormatError, ValueError, ZoneInfoNotFoundError) as e:
        logger.warning(
            f"Cannot stamp schedule for {day_key!r} {time_slot!r} in {timezone!r}: {e}",
            extra={"structured": {"day_key": day_key, "time_slot": time_slot, "tz": timezone}},
        )
        return (None, None)

    start = datetime.combine(day, time(*divmod(start_min, 60)), tzinfo=tz)
    end = datetime.combine(day, time(*divmod(end_min, 60)), tzinfo=tz)
    return (start, end)


def _stamp_activity(activity: dict[str, Any], day_key: str, timezone: str) -> dict[str, Any]:
    if activity.get("ScheduleStart") and activity.get("ScheduleEnd"):
        return dict(activity)

    start, end = (None, None)
    if activity.get("TimeSlot"):
        start, end = stamp(day_key, activity["TimeSlot"], timezone)

    return {
        **activity,
        "ScheduleStart": start.isoformat() if start else None,
        "ScheduleEnd": end.isoformat() if end else None,
    }


def stamp_itinerary(itinerary: dict[str, Any], timezone: str) -> dict[str, Any]:
    """Attach ScheduleStart/ScheduleEnd to every activity of a JSON itinerary.

    Existing schedule values are kept. The input document is not modified;
    days keep their human-readable fields regardless of stamping failures.
    """
    result: dict[str, Any] = {}

    for day_key, day in itinerary.items():
        stamped_day = dict(day)
        for name in SLOT_ORDER:
            slot = day.get(name.value)
            if not slot:
                continue

            stamped_slot = dict(slot)
            if isinstance(slot.get("Activities"), list):
                stamped_slot["Activities"] = [
                    _stamp_activity(a, day_key, timezone) for a in slot["Activities"]
                ]
            if slot.get("Activity"):
                stamped_slot["Activity"] = _stamp_activity(slot["Activity"], day_key, timezone)
            stamped_day[name.value] = stamped_slot

        result[day_key] = stamped_day

    return result

"""Tests for absolute schedule stamping."""

from datetime import datetime
from zoneinfo import ZoneInfo

from itinerary_editor.scheduling.stamper import stamp, stamp_itinerary


def test_stamp_combines_day_and_time_slot_in_trip_timezone() -> None:
    """Test that stamps are offset-aware datetimes in the trip timezone."""
    start, end = stamp("2025-06-10", "2:00 PM - 4:30 PM", "Asia/Ho_Chi_Minh")

    tz = ZoneInfo("Asia/Ho_Chi_Minh")
    assert start == datetime(2025, 6, 10, 14, 0, tzinfo=tz)
    assert end == datetime(2025, 6, 10, 16, 30, tzinfo=tz)
    assert start is not None and start.isoformat() == "2025-06-10T14:00:00+07:00"


def test_stamp_failures_return_none_pair() -> None:
    """Test that bad dates, time slots or timezones are logged, not raised."""
    assert stamp("Day1", "2:00 PM - 4:00 PM", "Asia/Ho_Chi_Minh") == (None, None)
    assert stamp("2025-06-10", "afternoon", "Asia/Ho_Chi_Minh") == (None, None)
    assert stamp("2025-06-10", "2:00 PM - 4:00 PM", "Mars/Olympus_Mons") == (None, None)


def test_stamp_itinerary_adds_schedule_fields() -> None:
    """Test that every activity of a JSON itinerary gets ScheduleStart/End."""
    itinerary = {
        "2025-06-10": {
            "Theme": "Arrival",
            "Morning": {
                "StartTime": "8:00 AM",
                "EndTime": "12:00 PM",
                "Activities": [{"PlaceName": "Lake", "TimeSlot": "8:00 AM - 10:00 AM"}],
            },
            "Lunch": {
                "StartTime": "12:00 PM",
                "EndTime": "2:00 PM",
                "Activity": {"PlaceName": "Bun Cha", "TimeSlot": "12:00 PM - 2:00 PM"},
            },
        }
    }

    stamped = stamp_itinerary(itinerary, "Asia/Ho_Chi_Minh")
    day = stamped["2025-06-10"]

    morning = day["Morning"]["Activities"][0]
    assert morning["ScheduleStart"] == "2025-06-10T08:00:00+07:00"
    assert morning["ScheduleEnd"] == "2025-06-10T10:00:00+07:00"
    assert day["Lunch"]["Activity"]["ScheduleStart"] == "2025-06-10T12:00:00+07:00"
    assert day["Theme"] == "Arrival"

    # Input untouched
    assert "ScheduleStart" not in itinerary["2025-06-10"]["Morning"]["Activities"][0]


def test_stamp_itinerary_keeps_existing_schedule() -> None:
    """Test that already stamped activities are not re-stamped."""
    activity = {
        "PlaceName": "Lake",
        "TimeSlot": "8:00 AM - 10:00 AM",
        "ScheduleStart": "2025-06-10T09:00:00+07:00",
        "ScheduleEnd": "2025-06-10T09:30:00+07:00",
    }
    itinerary = {"2025-06-10": {"Morning": {"Activities": [activity]}}}

    stamped = stamp_itinerary(itinerary, "Asia/Ho_Chi_Minh")

    assert stamped["2025-06-10"]["Morning"]["Activities"][0] == activity


def test_stamp_itinerary_without_time_slot_leaves_schedule_empty() -> None:
    itinerary = {"2025-06-10": {"Evening": {"Activities": [{"PlaceName": "Stroll"}]}}}

    stamped = stamp_itinerary(itinerary, "Asia/Ho_Chi_Minh")

    activity = stamped["2025-06-10"]["Evening"]["Activities"][0]
    assert activity["ScheduleStart"] is None
    assert activity["ScheduleEnd"] is None

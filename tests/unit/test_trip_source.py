"""Tests for normalizing generated plans and saved trips into drafts."""

import pytest

from itinerary_editor.editing.ids import SequentialIdGenerator
from itinerary_editor.editing.source import is_temporary_id, normalize_trip_source
from itinerary_editor.models import HotelSource, SlotName


def _generated_payload() -> dict:
    return {
        "userSelection": {"location": "Da Nang", "startDate": "2025-08-01", "endDate": "2025-08-02"},
        "TravelPlan": {
            "Location": "Da Nang",
            "Duration": "2 days",
            "Hotels": [
                {
                    "HotelName": "Sea Breeze",
                    "HotelAddress": "1 Vo Nguyen Giap",
                    "GeoCoordinates": {"Latitude": 16.06, "Longitude": 108.24},
                }
            ],
            "Itinerary": {
                "Day2": {
                    "Theme": "Hills",
                    "Morning": {
                        "StartTime": "7:00 AM",
                        "EndTime": "11:00 AM",
                        "Activities": [{"PlaceName": "Ba Na Hills", "TicketPricing": 900000}],
                    },
                    "Evening": {"StartTime": "6:00 PM", "EndTime": "9:00 PM", "Activities": []},
                },
                "Day1": {
                    "Theme": "Beach",
                    "Lunch": {"Activity": {"PlaceName": "Mi Quang"}},
                    "Afternoon": {
                        "Activities": [
                            {"PlaceName": "Hotel Check-in", "ActivityType": "hotel_checkin"},
                            {"PlaceName": "My Khe Beach"},
                        ]
                    },
                },
            },
        },
    }


def test_day_numbers_become_calendar_dates() -> None:
    """Test that Day1/Day2 are bound to dates from the start date, in day order."""
    trip = normalize_trip_source(
        _generated_payload(), trip_id="temp_1", id_generator=SequentialIdGenerator()
    )

    assert sorted(trip.itinerary) == ["2025-08-01", "2025-08-02"]
    assert trip.itinerary["2025-08-01"].theme == "Beach"
    assert trip.itinerary["2025-08-02"].theme == "Hills"


def test_activities_get_ids_and_missing_bounds_get_defaults() -> None:
    trip = normalize_trip_source(
        _generated_payload(), trip_id="temp_1", id_generator=SequentialIdGenerator()
    )
    day1 = trip.itinerary["2025-08-01"]

    assert day1.lunch is not None
    assert day1.lunch.activity is not None
    assert day1.lunch.activity.id == "2025-08-01-lunch-1"
    assert (day1.lunch.start_time, day1.lunch.end_time) == ("12:00 PM", "2:00 PM")
    assert day1.afternoon is not None
    assert [a.id for a in day1.afternoon.activities] == [
        "2025-08-01-afternoon-2",
        "2025-08-01-afternoon-3",
    ]
    assert day1.afternoon.activities[0].is_pinned


def test_empty_slots_are_absent_and_prices_are_strings() -> None:
    trip = normalize_trip_source(_generated_payload(), trip_id="temp_1")
    day2 = trip.itinerary["2025-08-02"]

    assert day2.evening is None
    assert day2.morning is not None
    assert day2.morning.activities[0].ticket_pricing == "900000"


def test_temporary_trip_has_no_selected_hotel() -> None:
    """Test that a never-saved trip starts without a hotel choice."""
    trip = normalize_trip_source(_generated_payload(), trip_id="temp_1")

    assert trip.selected_hotel is None
    assert trip.trip_data.hotels[0].source is HotelSource.ai
    assert trip.trip_data.timezone == "Asia/Ho_Chi_Minh"


def test_saved_trip_selects_its_stored_hotel(trip_document: dict) -> None:
    """Test that loading a saved trip selects the hotel it was saved with."""
    trip_document.pop("selectedHotel")

    trip = normalize_trip_source(trip_document)

    assert trip.id == "trip-1"
    assert trip.selected_hotel is not None
    assert trip.selected_hotel.hotel_name == "Lotus Hotel"
    assert trip.itinerary["2025-06-10"].activities_in(SlotName.morning)[0].id == "d1-lake"


def test_list_wrapped_plan_with_dated_days() -> None:
    payload = [
        {
            "TravelPlan": {
                "Itinerary": [
                    {"2025-09-01": {"Morning": {"Activities": [{"PlaceName": "Museum"}]}}},
                    {"2025-09-02": {"Evening": {"Activities": [{"PlaceName": "Bar"}]}}},
                ]
            }
        }
    ]

    trip = normalize_trip_source(payload, trip_id="temp_2")

    assert sorted(trip.itinerary) == ["2025-09-01", "2025-09-02"]


def test_day_numbers_sort_numerically() -> None:
    itinerary = {f"Day{n}": {"Theme": f"t{n}"} for n in (10, 2, 1)}
    payload = {"userSelection": {"startDate": "2025-01-01"}, "TravelPlan": {"Itinerary": itinerary}}

    trip = normalize_trip_source(payload, trip_id="temp_3")

    assert [trip.itinerary[key].theme for key in sorted(trip.itinerary)] == ["t1", "t2", "t10"]


def test_invalid_payloads_are_rejected() -> None:
    with pytest.raises(ValueError, match="no itinerary"):
        normalize_trip_source({"TravelPlan": {"Location": "Hue"}})
    with pytest.raises(ValueError, match="start date"):
        normalize_trip_source({"TravelPlan": {"Itinerary": {"Day1": {}}}})
    with pytest.raises(ValueError):
        normalize_trip_source("not a trip")


def test_is_temporary_id() -> None:
    assert is_temporary_id(None)
    assert is_temporary_id("temp_1700000000000")
    assert not is_temporary_id("1700000000000")

"""Tests for hotel synchronization and hotel matching."""

from itinerary_editor.editing.hotel_sync import hotels_match, normalize_text, sync_hotel
from itinerary_editor.models import Hotel, SlotName, Trip


def _all_activities(trip_itinerary: dict) -> dict[str, dict]:
    return {
        activity.id: activity.to_document()
        for day in trip_itinerary.values()
        for _, _, activity in day.all_activities()
    }


def test_changing_hotel_rewrites_only_checkin_and_checkout(trip: Trip, sen: Hotel) -> None:
    """Test that every other activity stays identical when the hotel changes."""
    before = _all_activities(trip.itinerary)

    after = _all_activities(sync_hotel(trip.itinerary, sen))

    changed = {key for key in before if before[key] != after[key]}
    assert changed == {"d1-checkin", "d3-checkout"}
    assert after["d1-checkin"]["PlaceDetails"] == "Check-in at Sen Boutique"
    assert after["d1-checkin"]["PlaceName"] == "Hotel Check-in"
    assert after["d1-checkin"]["ImageUrl"] == "https://img.example.com/sen.jpg"
    assert after["d3-checkout"]["PlaceDetails"] == "Check-out from Sen Boutique"
    assert after["d3-checkout"]["PlaceName"] == "Hotel Check-out"


def test_sync_is_idempotent(trip: Trip, sen: Hotel) -> None:
    """Test that syncing twice equals syncing once."""
    once = sync_hotel(trip.itinerary, sen)
    twice = sync_hotel(once, sen)

    assert {k: d.to_document() for k, d in twice.items()} == {
        k: d.to_document() for k, d in once.items()
    }


def test_sync_keeps_previous_image_when_hotel_has_none(trip: Trip) -> None:
    hotel = Hotel(hotel_name="No Photo Inn")

    synced = sync_hotel(trip.itinerary, hotel)

    checkin = synced["2025-06-10"].activities_in(SlotName.afternoon)[0]
    assert checkin.place_details == "Check-in at No Photo Inn"
    assert checkin.image_url == "https://img.example.com/lotus.jpg"


def test_sync_without_checkin_or_checkout_is_a_noop(trip: Trip, sen: Hotel) -> None:
    middle_only = {"2025-06-11": trip.itinerary["2025-06-11"]}

    assert sync_hotel(middle_only, sen) == middle_only
    assert sync_hotel({}, sen) == {}


def test_normalize_text_strips_diacritics_and_spacing() -> None:
    assert normalize_text("  Khách sạn   Đông Á ") == "khach san dong a"
    assert normalize_text(None) == ""


def test_hotels_match_by_provider_token() -> None:
    """Test that a shared token matches despite different names."""
    a = Hotel(hotel_name="Lotus", property_token="tok-1")
    b = Hotel(hotel_name="Lotus Hotel Hanoi", property_token="tok-1")
    c = Hotel(hotel_name="Sen Boutique", property_token="tok-2")

    assert hotels_match(a, b)
    assert not hotels_match(a, c)


def test_differing_tokens_fall_through_to_name_and_address() -> None:
    serp = Hotel(hotel_name="Lotus Hotel", hotel_address="12 Tran Phu", property_token="tok-1")
    relisted = Hotel(hotel_name="LOTUS hotel", hotel_address="12 Trần Phú", property_token="tok-9")
    moved = Hotel(hotel_name="Lotus Hotel", hotel_address="40 Hang Bai", property_token="tok-7")

    assert hotels_match(serp, relisted)
    assert not hotels_match(serp, moved)


def test_hotels_match_by_place_id() -> None:
    a = Hotel(hotel_name="Lotus", place_id="123")
    b = Hotel(hotel_name="Other name", place_id="123")

    assert hotels_match(a, b)


def test_hotels_match_by_name_and_address_across_providers() -> None:
    """Test normalized name+address comparison when no ids are shared."""
    ai = Hotel(hotel_name="Khách sạn Đông Á", hotel_address="5 Lê Lợi, Huế")
    manual = Hotel(
        hotel_name="khach san dong a", hotel_address="5 Le Loi, Hue", place_id="osm-1"
    )
    elsewhere = Hotel(hotel_name="Khach San Dong A", hotel_address="9 Tran Hung Dao, Hue")

    assert hotels_match(ai, manual)
    assert not hotels_match(ai, elsewhere)


def test_hotels_match_by_name_only_when_address_missing() -> None:
    assert hotels_match(Hotel(hotel_name="Lotus Hotel"), Hotel(hotel_name="LOTUS  hotel"))
    assert not hotels_match(Hotel(hotel_name="Lotus Hotel"), Hotel(hotel_name="Sen Boutique"))

"""Hotel synchronization - bind check-in/out activities to the selected hotel."""

import unicodedata

from itinerary_editor.models.common import ActivityType, SlotName
from itinerary_editor.models.hotel import Hotel
from itinerary_editor.models.trip import Activity, Itinerary, first_day_key, last_day_key


def _checkin(activity: Activity, hotel: Hotel) -> Activity:
    return activity.model_copy(
        update={
            "place_name": "Hotel Check-in",
            "place_details": f"Check-in at {hotel.hotel_name}",
            "image_url": hotel.hotel_image_url or activity.image_url,
            "geo_coordinates": hotel.geo_coordinates or activity.geo_coordinates,
        }
    )


def _checkout(activity: Activity, hotel: Hotel) -> Activity:
    return activity.model_copy(
        update={
            "place_name": "Hotel Check-out",
            "place_details": f"Check-out from {hotel.hotel_name}",
            "image_url": hotel.hotel_image_url or activity.image_url,
            "geo_coordinates": hotel.geo_coordinates or activity.geo_coordinates,
        }
    )


def _rebind(
    itinerary: Itinerary, day_key: str, slot_name: SlotName, kind: ActivityType, rewrite
) -> None:
    day = itinerary[day_key]
    slot = day.slot(slot_name)
    if slot is None:
        return

    members = slot.members()
    if not any(a.activity_type is kind for a in members):
        return

    rebound = [rewrite(a) if a.activity_type is kind else a for a in members]
    itinerary[day_key] = day.with_slot(slot_name, slot.with_members(rebound))


def sync_hotel(itinerary: Itinerary, hotel: Hotel) -> Itinerary:
    """Rewrite the first day's check-in and the last day's check-out for a hotel.

    Only the afternoon ``hotel_checkin`` of the earliest day and the morning
    ``hotel_checkout`` of the latest day are touched; every other activity is
    returned as-is. Missing check-in/out activities make this a no-op.
    Calling it twice with the same hotel gives the same result as once.
    """
    first = first_day_key(itinerary)
    last = last_day_key(itinerary)
    if first is None or last is None:
        return itinerary

    result = dict(itinerary)
    _rebind(result, first, SlotName.afternoon, ActivityType.hotel_checkin, lambda a: _checkin(a, hotel))
    _rebind(result, last, SlotName.morning, ActivityType.hotel_checkout, lambda a: _checkout(a, hotel))
    return result


def normalize_text(value: str | None) -> str:
    """Lowercase, strip diacritics, collapse whitespace."""
    if not value:
        return ""
    decomposed = unicodedata.normalize("NFD", value.lower().replace("đ", "d"))
    stripped = "".join(c for c in decomposed if not unicodedata.combining(c))
    return " ".join(stripped.split())


def hotels_match(a: Hotel, b: Hotel) -> bool:
    """Whether two hotel records, possibly from different providers, are one hotel.

    Rules, tried in order until one matches:
        1. Shared property token, then shared place id
        2. Normalized name and address, when both are present on both sides
        3. Normalized name alone

    Differing provider ids do not rule out a match on the later rules.
    """
    if a.property_token and a.property_token == b.property_token:
        return True
    if a.place_id and a.place_id == b.place_id:
        return True

    name_a, name_b = normalize_text(a.hotel_name), normalize_text(b.hotel_name)
    addr_a, addr_b = normalize_text(a.hotel_address), normalize_text(b.hotel_address)
    if name_a and name_b and addr_a and addr_b:
        return name_a == name_b and addr_a == addr_b

    return bool(name_a) and name_a == name_b

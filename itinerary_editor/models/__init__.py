"""Models package - re-exports for convenience."""

from itinerary_editor.models.commands import (
    AddActivity,
    ApprovedMove,
    EditCommand,
    MoveActivity,
    RemoveActivity,
    RemoveDay,
)
from itinerary_editor.models.common import (
    HOTEL_ACTIVITY_TYPES,
    SLOT_ORDER,
    ActivityType,
    Geo,
    HotelSource,
    SlotName,
)
from itinerary_editor.models.hotel import Hotel, normalize_hotel
from itinerary_editor.models.save import SaveTripRequest, SaveTripResponse
from itinerary_editor.models.trip import (
    Activity,
    ActivitySlot,
    Day,
    Itinerary,
    LunchSlot,
    Slot,
    Trip,
    TripData,
    UserSelection,
    first_day_key,
    last_day_key,
)

__all__ = [
    # Common
    "Geo",
    "ActivityType",
    "HOTEL_ACTIVITY_TYPES",
    "SlotName",
    "SLOT_ORDER",
    "HotelSource",
    # Hotel
    "Hotel",
    "normalize_hotel",
    # Trip
    "Activity",
    "ActivitySlot",
    "LunchSlot",
    "Slot",
    "Day",
    "Itinerary",
    "UserSelection",
    "TripData",
    "Trip",
    "first_day_key",
    "last_day_key",
    # Save
    "SaveTripRequest",
    "SaveTripResponse",
    # Commands
    "MoveActivity",
    "AddActivity",
    "RemoveActivity",
    "RemoveDay",
    "EditCommand",
    "ApprovedMove",
]

"""Common types and enums shared across all models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class WireModel(BaseModel):
    """Immutable model whose JSON keys follow the trip document's naming.

    Python attributes are snake_case; the wire aliases are the document keys
    (``PlaceName``, ``StartTime``...). Unknown provider fields are preserved.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="allow")

    def to_document(self) -> dict:
        """Dump to the JSON document shape."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class Geo(WireModel):
    """Geographic coordinates (WGS84)."""

    latitude: float = Field(..., ge=-90, le=90, alias="Latitude")
    longitude: float = Field(..., ge=-180, le=180, alias="Longitude")


class ActivityType(str, Enum):
    """Kind of scheduled activity."""

    hotel_checkin = "hotel_checkin"
    hotel_checkout = "hotel_checkout"
    normal_attraction = "normal_attraction"


HOTEL_ACTIVITY_TYPES = frozenset({ActivityType.hotel_checkin, ActivityType.hotel_checkout})


class SlotName(str, Enum):
    """Fixed daily periods, in chronological order."""

    morning = "Morning"
    lunch = "Lunch"
    afternoon = "Afternoon"
    evening = "Evening"

    @property
    def attr(self) -> str:
        """Attribute name on Day."""
        return self.value.lower()


SLOT_ORDER: tuple[SlotName, ...] = (
    SlotName.morning,
    SlotName.lunch,
    SlotName.afternoon,
    SlotName.evening,
)


class HotelSource(str, Enum):
    """Provider a hotel record was normalized from."""

    ai = "ai"
    serpapi = "serpapi"
    nominatim = "nominatim"
    manual = "manual"

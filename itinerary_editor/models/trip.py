"""Trip models - the editable itinerary document."""

from datetime import datetime
from typing import Any, TypeAlias

from pydantic import Field, field_validator

from itinerary_editor.models.common import (
    HOTEL_ACTIVITY_TYPES,
    SLOT_ORDER,
    ActivityType,
    Geo,
    SlotName,
    WireModel,
)
from itinerary_editor.models.hotel import Hotel


class Activity(WireModel):
    """Single scheduled place visit or hotel event."""

    id: str | None = None
    activity_type: ActivityType = Field(ActivityType.normal_attraction, alias="ActivityType")
    place_name: str = Field("", alias="PlaceName")
    place_details: str = Field("", alias="PlaceDetails")
    image_url: str | None = Field(None, alias="ImageUrl")
    geo_coordinates: Geo | None = Field(None, alias="GeoCoordinates")
    ticket_pricing: str | None = Field(None, alias="TicketPricing")
    time_slot: str | None = Field(None, alias="TimeSlot")
    duration: str | None = Field(None, alias="Duration")
    best_time_to_visit: str | None = Field(None, alias="BestTimeToVisit")
    schedule_start: datetime | None = Field(None, alias="ScheduleStart")
    schedule_end: datetime | None = Field(None, alias="ScheduleEnd")

    @field_validator("ticket_pricing", mode="before")
    @classmethod
    def coerce_ticket_pricing(cls, v: Any) -> Any:
        """Generated plans sometimes price tickets as bare numbers."""
        if isinstance(v, int | float):
            return str(v)
        return v

    @property
    def is_pinned(self) -> bool:
        """Hotel check-in/out activities never change position."""
        return self.activity_type in HOTEL_ACTIVITY_TYPES


class ActivitySlot(WireModel):
    """Morning, Afternoon or Evening: an ordered sequence of activities."""

    start_time: str = Field(..., alias="StartTime")
    end_time: str = Field(..., alias="EndTime")
    activities: list[Activity] = Field(default_factory=list, alias="Activities")

    def members(self) -> list[Activity]:
        return list(self.activities)

    def with_members(self, members: list[Activity]) -> "ActivitySlot":
        return self.model_copy(update={"activities": list(members)})


class LunchSlot(WireModel):
    """Lunch holds a single activity, not a sequence."""

    start_time: str = Field(..., alias="StartTime")
    end_time: str = Field(..., alias="EndTime")
    activity: Activity | None = Field(None, alias="Activity")

    def members(self) -> list[Activity]:
        return [self.activity] if self.activity is not None else []

    def with_members(self, members: list[Activity]) -> "LunchSlot":
        if len(members) > 1:
            raise ValueError("Lunch holds at most one activity")
        return self.model_copy(update={"activity": members[0] if members else None})


Slot: TypeAlias = ActivitySlot | LunchSlot


class Day(WireModel):
    """One calendar day: a theme and up to four slots."""

    theme: str = Field("", alias="Theme")
    morning: ActivitySlot | None = Field(None, alias="Morning")
    lunch: LunchSlot | None = Field(None, alias="Lunch")
    afternoon: ActivitySlot | None = Field(None, alias="Afternoon")
    evening: ActivitySlot | None = Field(None, alias="Evening")

    def slot(self, name: SlotName) -> Slot | None:
        """Return the slot, or None when it is absent."""
        slot: Slot | None = getattr(self, name.attr)
        return slot

    def activities_in(self, name: SlotName) -> list[Activity]:
        slot = self.slot(name)
        return slot.members() if slot is not None else []

    def with_slot(self, name: SlotName, slot: Slot | None) -> "Day":
        return self.model_copy(update={name.attr: slot})

    def activity_count(self) -> int:
        """Total activities across all slots."""
        return sum(len(self.activities_in(name)) for name in SLOT_ORDER)

    def all_activities(self) -> list[tuple[SlotName, int, Activity]]:
        return [
            (name, index, activity)
            for name in SLOT_ORDER
            for index, activity in enumerate(self.activities_in(name))
        ]


Itinerary: TypeAlias = dict[str, Day]


def first_day_key(itinerary: Itinerary) -> str | None:
    """Earliest day key (keys are ISO dates, so they sort chronologically)."""
    return min(itinerary) if itinerary else None


def last_day_key(itinerary: Itinerary) -> str | None:
    return max(itinerary) if itinerary else None


class UserSelection(WireModel):
    """What the traveler asked for when the trip was generated."""

    location: str | None = None
    start_date: str | None = Field(None, alias="startDate")
    end_date: str | None = Field(None, alias="endDate")
    budget_min: float | None = Field(None, alias="budgetMin")
    budget_max: float | None = Field(None, alias="budgetMax")
    adults: int | None = None
    children: int | None = None
    children_ages: list[int] = Field(default_factory=list, alias="childrenAges")


class TripData(WireModel):
    """Generated travel plan."""

    location: str | None = Field(None, alias="Location")
    duration: str | None = Field(None, alias="Duration")
    budget: str | None = Field(None, alias="Budget")
    travelers: str | None = Field(None, alias="Travelers")
    total_travelers: int | str | None = Field(None, alias="TotalTravelers")
    timezone: str = Field("Asia/Ho_Chi_Minh", alias="Timezone")
    hotels: list[Hotel] = Field(default_factory=list, alias="Hotels")
    itinerary: Itinerary = Field(default_factory=dict, alias="Itinerary")
    generation_method: str | None = Field(None, alias="generationMethod")

    def day_keys(self) -> list[str]:
        return sorted(self.itinerary)


class Trip(WireModel):
    """Root aggregate: the document being edited."""

    id: str | None = None
    user_selection: UserSelection = Field(default_factory=UserSelection, alias="userSelection")
    trip_data: TripData = Field(..., alias="tripData")
    # Draft-only: the hotel the traveler picked among trip_data.hotels
    selected_hotel: Hotel | None = Field(None, alias="selectedHotel")

    @property
    def itinerary(self) -> Itinerary:
        return self.trip_data.itinerary

    def with_itinerary(self, itinerary: Itinerary) -> "Trip":
        return self.model_copy(
            update={"trip_data": self.trip_data.model_copy(update={"itinerary": itinerary})}
        )

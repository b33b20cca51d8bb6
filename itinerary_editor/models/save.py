"""Trip Store wire contracts for saving a trip."""

from pydantic import Field

from itinerary_editor.models.common import WireModel
from itinerary_editor.models.hotel import Hotel
from itinerary_editor.models.trip import TripData, UserSelection


class SaveTripRequest(WireModel):
    """Body of ``POST /trip/save``.

    ``trip_id`` absent or temporary means "create"; anything else updates.
    Required-field checks happen in the save service so they surface as
    400 responses with a readable message.
    """

    trip_id: str | None = Field(None, alias="tripId")
    user_email: str | None = Field(None, alias="userEmail")
    user_selection: UserSelection = Field(default_factory=UserSelection, alias="userSelection")
    trip_data: TripData = Field(..., alias="tripData")
    selected_hotels: list[Hotel] = Field(default_factory=list, alias="selectedHotels")


class SaveTripResponse(WireModel):
    """Body returned by a successful save."""

    success: bool = True
    trip_id: str = Field(..., alias="tripId")
    message: str

"""Hotel records and boundary normalization of provider payloads."""

from typing import Any

from pydantic import Field

from itinerary_editor.models.common import Geo, HotelSource, WireModel


class Hotel(WireModel):
    """Canonical hotel record, whatever provider it came from."""

    hotel_name: str = Field(..., alias="HotelName")
    hotel_address: str | None = Field(None, alias="HotelAddress")
    hotel_image_url: str | None = Field(None, alias="HotelImageUrl")
    geo_coordinates: Geo | None = Field(None, alias="GeoCoordinates")
    price: str | None = Field(None, alias="Price")
    rating: str | float | None = Field(None, alias="Rating")
    description: str | None = Field(None, alias="Description")
    property_token: str | None = None
    place_id: str | None = None
    source: HotelSource = HotelSource.ai


def _geo(lat: Any, lon: Any) -> Geo | None:
    try:
        return Geo(latitude=float(lat), longitude=float(lon))
    except (TypeError, ValueError):
        return None


def _first_image(images: Any) -> str | None:
    if not isinstance(images, list):
        return None
    for image in images:
        if isinstance(image, dict):
            url = image.get("original_image") or image.get("thumbnail")
            if url:
                return str(url)
        elif isinstance(image, str) and image:
            return image
    return None


def normalize_hotel(raw: dict[str, Any]) -> Hotel:
    """Normalize a provider hotel payload into a canonical Hotel.

    Recognized shapes:
        - generated plans and previously saved trips (``HotelName``...)
        - SerpApi Google Hotels properties (``name``, ``gps_coordinates``,
          ``property_token``)
        - manual search results from Nominatim (``name``, ``lat``, ``lon``)

    Raises:
        ValueError: If the payload matches none of the known shapes
    """
    if raw.get("HotelName"):
        geo = raw.get("GeoCoordinates") or {}
        source = raw.get("source")
        if source is None:
            source = HotelSource.manual if raw.get("isManuallyAdded") else HotelSource.ai
        return Hotel(
            hotel_name=raw["HotelName"],
            hotel_address=raw.get("HotelAddress"),
            hotel_image_url=raw.get("HotelImageUrl"),
            geo_coordinates=_geo(
                geo.get("Latitude", raw.get("lat")), geo.get("Longitude", raw.get("lon"))
            ),
            price=raw.get("Price"),
            rating=raw.get("Rating"),
            description=raw.get("Description"),
            property_token=raw.get("property_token"),
            place_id=raw.get("place_id"),
            source=HotelSource(source),
        )

    if raw.get("name") and ("property_token" in raw or "gps_coordinates" in raw):
        gps = raw.get("gps_coordinates") or {}
        rate = raw.get("rate_per_night") or {}
        return Hotel(
            hotel_name=raw["name"],
            hotel_address=raw.get("address"),
            hotel_image_url=_first_image(raw.get("images")),
            geo_coordinates=_geo(gps.get("latitude"), gps.get("longitude")),
            price=rate.get("lowest"),
            rating=raw.get("overall_rating"),
            description=raw.get("description"),
            property_token=raw.get("property_token") or raw.get("token"),
            source=HotelSource.serpapi,
        )

    if raw.get("name") and "lat" in raw and "lon" in raw:
        place_id = raw.get("place_id", raw.get("id"))
        return Hotel(
            hotel_name=raw["name"],
            hotel_address=raw.get("address"),
            geo_coordinates=_geo(raw["lat"], raw["lon"]),
            place_id=str(place_id) if place_id is not None else None,
            source=HotelSource.nominatim,
        )

    raise ValueError(f"Unrecognized hotel payload with keys: {sorted(raw)}")

"""Trip Store clients used by the save reconciler."""

import logging
from typing import Any, Protocol

import httpx
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from itinerary_editor.db.repositories import TripRepository
from itinerary_editor.errors import SaveError
from itinerary_editor.models.save import SaveTripRequest, SaveTripResponse
from itinerary_editor.saving.service import TripNotFoundError, TripValidationError, persist_trip

logger = logging.getLogger(__name__)


class TripStore(Protocol):
    """Remote persistence for saved trips."""

    async def save_trip(self, request: SaveTripRequest) -> SaveTripResponse:
        """Create or update a trip.

        Raises:
            SaveError: If the store rejects the request or cannot be reached
        """
        ...

    async def get_trip(self, trip_id: str) -> dict[str, Any]:
        """Fetch a saved trip document.

        Raises:
            SaveError: If the trip cannot be fetched
        """
        ...


def _error_message(response: httpx.Response, default: str) -> str:
    try:
        body = response.json()
    except ValueError:
        return default
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return default


class HttpTripStore:
    """TripStore speaking the ``/trip`` HTTP API."""

    def __init__(
        self,
        base_url: str,
        timeout_s: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize HTTP trip store.

        Args:
            base_url: Trip Store base URL
            timeout_s: Request timeout when no client is supplied
            client: Optional httpx client (for testing with mocks)
        """
        self._base_url = base_url.rstrip("/")
        self._timeout_s = timeout_s
        self._client = client

    async def _request(self, method: str, path: str, default_error: str, **kwargs: Any) -> Any:
        close_client = False
        client = self._client
        if client is None:
            client = httpx.AsyncClient(timeout=self._timeout_s)
            close_client = True

        try:
            response = await client.request(method, f"{self._base_url}{path}", **kwargs)
            if response.is_error:
                raise SaveError(
                    _error_message(response, default_error), status_code=response.status_code
                )
            return response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"Trip Store request failed: {method} {path}: {e}")
            raise SaveError(default_error) from e
        finally:
            if close_client:
                await client.aclose()

    async def save_trip(self, request: SaveTripRequest) -> SaveTripResponse:
        body = await self._request(
            "POST", "/trip/save", "Failed to save trip", json=request.to_document()
        )
        if not isinstance(body, dict) or body.get("success") is False:
            message = body.get("error") if isinstance(body, dict) else None
            raise SaveError(str(message or "Failed to save trip"))
        try:
            return SaveTripResponse.model_validate(body)
        except ValidationError as e:
            logger.warning(f"Trip Store returned an invalid save response: {e}")
            raise SaveError("Failed to save trip") from e

    async def get_trip(self, trip_id: str) -> dict[str, Any]:
        body = await self._request("GET", f"/trip/{trip_id}", "Failed to fetch trip")
        return body["trip"]


class LocalTripStore:
    """In-process TripStore backed by a trip repository."""

    def __init__(self, repo: TripRepository) -> None:
        self._repo = repo

    async def save_trip(self, request: SaveTripRequest) -> SaveTripResponse:
        try:
            return await persist_trip(self._repo, request)
        except TripValidationError as e:
            raise SaveError(str(e), status_code=400) from e
        except TripNotFoundError as e:
            raise SaveError(str(e), status_code=404) from e
        except SQLAlchemyError as e:
            logger.error(f"Trip persistence failed for {request.trip_id}: {e}")
            raise SaveError("Failed to save trip", status_code=500) from e

    async def get_trip(self, trip_id: str) -> dict[str, Any]:
        record = await self._repo.get_trip(trip_id)
        if record is None:
            raise SaveError("Trip not found", status_code=404)
        return {**record.document, "id": record.trip_id}

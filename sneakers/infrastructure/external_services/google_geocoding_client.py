"""HTTP client for the Google Geocoding API."""

import httpx
import structlog

from sneakers.application.interfaces.geocoding_client import GeocodingClient
from sneakers.config import settings
from sneakers.domain.entities.sneaker import Location
from sneakers.domain.exceptions import GeocodingError

logger = structlog.get_logger(__name__)


class GoogleGeocodingClient(GeocodingClient):
    """Thin wrapper around GET /maps/api/geocode/json."""

    def __init__(
        self,
        api_url: str = settings.geocoding_api_url,
        api_key: str = settings.google_maps_api_key,
        timeout: float = settings.geocoding_timeout_seconds,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_url = api_url
        self._api_key = api_key
        self._timeout = timeout
        self._transport = transport

    async def resolve(self, address: str) -> Location:
        """
        GET ?address=...&key=... → {"status": "OK", "results": [{"geometry": {"location": {...}}}]}
        """
        params = {"address": address, "key": self._api_key}

        async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
            try:
                response = await client.get(self._api_url, params=params)
                response.raise_for_status()
                data = response.json()
            except httpx.HTTPStatusError as exc:
                logger.error(
                    "geocoding_request_failed",
                    status_code=exc.response.status_code,
                    response=exc.response.text,
                )
                raise GeocodingError(
                    f"Geocoding provider returned {exc.response.status_code}."
                ) from exc
            except httpx.RequestError as exc:
                logger.error("geocoding_connection_failed", error=str(exc))
                raise GeocodingError("Could not reach the geocoding provider.") from exc
            except ValueError as exc:
                logger.error("geocoding_invalid_response", error=str(exc))
                raise GeocodingError("Geocoding provider returned an unreadable response.") from exc

        if not isinstance(data, dict):
            logger.error("geocoding_invalid_response", error="payload is not an object")
            raise GeocodingError("Geocoding provider returned an unreadable response.")

        status = data.get("status")
        results = data.get("results") or []
        if status != "OK" or not results:
            logger.info("geocoding_no_results", address=address, status=status)
            raise GeocodingError()

        try:
            coordinates = results[0]["geometry"]["location"]
            location = Location(lat=float(coordinates["lat"]), lng=float(coordinates["lng"]))
        except (KeyError, TypeError, ValueError) as exc:
            logger.error("geocoding_malformed_result", address=address, error=str(exc))
            raise GeocodingError() from exc

        logger.debug("address_geocoded", address=address, lat=location.lat, lng=location.lng)
        return location

# =============================================================================
# lib/geocoder.py - Address Geocoding
# =============================================================================
# Resolves a free-text postal address to latitude/longitude using the
# Google Geocoding HTTP API (or any endpoint with the same response shape).
#
# Usage:
#   geocoder = Geocoder(api_key="...")
#   location = geocoder.geocode("1600 Amphitheatre Parkway")
#   print(location.lat, location.lng)
# =============================================================================

from __future__ import annotations

import logging
from dataclasses import dataclass

import httpx

from lib.utils import ApplicationError

logger = logging.getLogger(__name__)

DEFAULT_GEOCODING_URL = "https://maps.googleapis.com/maps/api/geocode/json"


@dataclass(frozen=True)
class Coordinates:
    lat: float
    lng: float


class GeocodingError(ApplicationError):
    """
    Raised when an address cannot be turned into coordinates.

    `address_not_found` distinguishes "the service answered but knows no such
    address" from "the service could not be used at all".
    """

    def __init__(self, message: str, address: str, address_not_found: bool):
        super().__init__(
            message=message,
            code="ADDRESS_NOT_FOUND" if address_not_found else "GEOCODING_FAILED",
            details={"address": address},
        )
        self.address_not_found = address_not_found


class Geocoder:
    """
    Thin synchronous client for the geocoding API.

    Owns an httpx.Client unless one is passed in; call close() on shutdown.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_GEOCODING_URL,
        timeout: float = 10.0,
        client: httpx.Client | None = None,
    ):
        self._api_key = api_key
        self._base_url = base_url
        self._client = client or httpx.Client(timeout=timeout)

    def geocode(self, address: str) -> Coordinates:
        """
        Resolve an address to coordinates.

        Raises:
            GeocodingError: address_not_found=True when the API returns no
                result, False for transport errors and error statuses
        """
        try:
            response = self._client.get(
                self._base_url,
                params={"address": address, "key": self._api_key},
            )
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"Geocoding request failed for {address!r}: {e}")
            raise GeocodingError(
                f"Geocoding service unavailable: {e}",
                address=address,
                address_not_found=False,
            )

        status = data.get("status")
        results = data.get("results") or []

        if status == "ZERO_RESULTS" or (status == "OK" and not results):
            raise GeocodingError(
                "Could not find location for the specified address.",
                address=address,
                address_not_found=True,
            )

        if status != "OK":
            logger.warning(f"Geocoding API returned {status}: {data.get('error_message')}")
            raise GeocodingError(
                f"Geocoding service returned status {status}",
                address=address,
                address_not_found=False,
            )

        try:
            location = results[0]["geometry"]["location"]
            coordinates = Coordinates(lat=float(location["lat"]), lng=float(location["lng"]))
        except (KeyError, IndexError, TypeError, ValueError) as e:
            raise GeocodingError(
                f"Unexpected geocoding response: {e}",
                address=address,
                address_not_found=False,
            )

        logger.debug(f"Geocoded {address!r} -> ({coordinates.lat}, {coordinates.lng})")
        return coordinates

    def close(self) -> None:
        self._client.close()

"""HTTP client for resolving free-text addresses into coordinates."""

from __future__ import annotations

import logging

import httpx

from ...config import settings
from ...errors import AddressNotFoundError

logger = logging.getLogger(__name__)


class GeocodingClient:
    """Minimal Nominatim search client returning the first match.

    Failures are not retried: the caller shows "address not found" and the
    user edits the address.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        user_agent: str | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = (base_url or settings.geocoding_base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.geocoding_timeout_seconds
        self.user_agent = user_agent or settings.geocoding_user_agent
        self._transport = transport

    def _get_client(self) -> httpx.Client:
        return httpx.Client(
            timeout=httpx.Timeout(self.timeout, connect=5.0),
            headers={"User-Agent": self.user_agent},
            transport=self._transport,
        )

    def lookup(self, address: str) -> tuple[float, float]:
        """Return (lat, lon) of the first match for ``address``."""
        query = (address or "").strip()
        if not query:
            raise ValueError("Address is required for geocoding.")

        params = {"q": query, "format": "json", "limit": "1"}
        with self._get_client() as client:
            try:
                response = client.get(f"{self.base_url}/search", params=params)
                response.raise_for_status()
                data = response.json()
            except (httpx.HTTPError, ValueError) as exc:
                logger.warning(f"Geocoding request for '{query}' failed: {exc}")
                raise AddressNotFoundError(query) from exc

        if not isinstance(data, list) or not data:
            logger.info(f"Geocoding returned no match for '{query}'")
            raise AddressNotFoundError(query)
        try:
            return float(data[0]["lat"]), float(data[0]["lon"])
        except (KeyError, TypeError, ValueError) as exc:
            raise AddressNotFoundError(query) from exc


def resolve_center(
    latitude: float | None,
    longitude: float | None,
    address: str | None,
    client: GeocodingClient | None = None,
) -> tuple[float, float]:
    """Use the device location when present, otherwise geocode the typed address."""
    if latitude is not None and longitude is not None:
        return latitude, longitude
    if not address or not address.strip():
        raise ValueError("Location unavailable: provide coordinates or an address.")
    return (client or GeocodingClient()).lookup(address)

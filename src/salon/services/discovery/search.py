"""Map discovery session: filter state, remote result sets and clustering."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Callable, Sequence

from ...cache import QueryCache
from ...config import settings
from ...errors import RemoteQueryError
from ...messages import translate
from ...models.domain import Salon
from ...persistence.salons import fetch_filtered_salons, fetch_salons_in_radius
from ..geospatial import haversine_km
from .clustering import cluster_salons, to_markers
from .filters import FilterState, category_query, derive_bounds, reset_filters, set_filter, to_rpc_params

logger = logging.getLogger(__name__)

FetchAll = Callable[[float, float, float], Sequence[Salon]]
FetchFiltered = Callable[[dict[str, Any]], Sequence[Salon]]


class DiscoverySession:
    """Keeps the map's filter state and the two result sets it drives.

    The unfiltered set ("all salons in radius") feeds category and price bound
    discovery and the dimmed markers; the filtered set marks which markers are
    active. Remote failures are recorded in :attr:`error` and treated as an
    empty result so clustering always runs.
    """

    def __init__(
        self,
        cache: QueryCache,
        *,
        fetch_all: FetchAll = fetch_salons_in_radius,
        fetch_filtered: FetchFiltered = fetch_filtered_salons,
        clock: Callable[[], datetime] | None = None,
        cell_size_degrees: float | None = None,
        language: str | None = None,
    ) -> None:
        self.cache = cache
        self._fetch_all = fetch_all
        self._fetch_filtered = fetch_filtered
        self._clock = clock
        self.cell_size_degrees = cell_size_degrees or settings.cluster_cell_size_degrees
        self.language = language

        self.center: tuple[float, float] | None = None
        self.filters = FilterState()
        self.all_salons: list[Salon] = []
        self.filtered_salons: list[Salon] = []
        self.available_categories: list[str] = []
        self.error: str | None = None
        self._generation = 0

    @property
    def filtered_ids(self) -> set[str]:
        return {salon.id for salon in self.filtered_salons}

    def set_center(self, lat: float, lon: float, *, refresh: bool = True) -> None:
        self.center = (lat, lon)
        if refresh:
            self.refresh()

    def set_filter(self, **partial: Any) -> FilterState:
        self.filters = set_filter(self.filters, **partial)
        self.refresh()
        return self.filters

    def reset_filters(self) -> FilterState:
        self.filters = reset_filters(self.filters)
        self.refresh()
        return self.filters

    def refresh(self) -> None:
        """Re-run both queries for the current center, radius and filters."""
        if self.center is None:
            logger.debug("No map center yet; skipping salon queries")
            return
        self.error = None
        self._load_all_salons()
        self._load_filtered_salons()

    def _load_all_salons(self) -> None:
        lat, lon = self.center
        radius = self.filters.radius_meters
        try:
            salons = self.cache.get_or_fetch(
                ("salons", round(lat, 6), round(lon, 6), radius),
                lambda: list(self._fetch_all(lat, lon, radius)),
            )
        except RemoteQueryError as exc:
            logger.warning(f"Radius search failed for center=({lat}, {lon}) radius={radius}m: {exc}")
            self.error = translate("fetch_failed", self.language)
            salons = []
        self.all_salons = list(salons)
        self.filters, self.available_categories = derive_bounds(self.filters, self.all_salons)

    def _load_filtered_salons(self) -> None:
        self._generation += 1
        generation = self._generation
        now = self._clock() if self._clock else None
        params = to_rpc_params(self.filters, self.center, now)
        try:
            salons = list(self._fetch_filtered(params))
        except RemoteQueryError as exc:
            logger.warning(f"Filtered salon search failed: {exc}")
            self.error = translate("fetch_failed", self.language)
            salons = []
        self.apply_filtered_response(generation, salons)

    def apply_filtered_response(self, generation: int, salons: Sequence[Salon]) -> bool:
        """Store a filtered result unless a newer request has been issued since."""
        if generation < self._generation:
            logger.debug(f"Discarding stale filtered response (generation {generation} < {self._generation})")
            return False
        self.filtered_salons = list(salons)
        return True

    def snapshot(self) -> dict[str, Any]:
        active_ids = self.filtered_ids
        clusters = cluster_salons(self.all_salons, active_ids, self.cell_size_degrees)
        salons: list[dict[str, Any]] = []
        for salon in self.all_salons:
            distance_km = None
            if self.center and salon.has_coordinates:
                distance_km = round(haversine_km(self.center[0], self.center[1], salon.latitude, salon.longitude), 3)
            salons.append(
                {
                    "id": salon.id,
                    "name": salon.name,
                    "latitude": salon.latitude,
                    "longitude": salon.longitude,
                    "rating": salon.rating,
                    "reviews_count": salon.reviews_count,
                    "categories": list(salon.categories),
                    "min_price": salon.min_price,
                    "max_price": salon.max_price,
                    "address": salon.address,
                    "postal_code": salon.postal_code,
                    "city": salon.city,
                    "distance_km": distance_km,
                    "active": salon.id in active_ids,
                }
            )
        return {
            "center": list(self.center) if self.center else None,
            "radius_meters": self.filters.radius_meters,
            "filters": {
                "min_rating": self.filters.min_rating,
                "price_range": list(self.filters.price_range),
                "price_bounds": list(self.filters.price_bounds),
                "selected_categories": list(self.filters.selected_categories),
                "max_distance_km": self.filters.max_distance_km,
                "time_frame": self.filters.time_frame.value,
            },
            "available_categories": list(self.available_categories),
            "salons": salons,
            "markers": to_markers(clusters),
            "filtered_count": len(self.filtered_salons),
            "category_query": category_query(self.filters),
            "error": self.error,
        }

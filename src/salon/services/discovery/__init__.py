"""Salon discovery: filters, clustering, search and geocoding."""

from .availability import has_free_slot
from .clustering import cluster_salons, to_markers
from .filters import (
    FilterState,
    TimeFrame,
    category_query,
    derive_bounds,
    reset_filters,
    set_filter,
    time_window,
    to_rpc_params,
)
from .geocoding import GeocodingClient, resolve_center
from .search import DiscoverySession

__all__ = [
    "DiscoverySession",
    "FilterState",
    "GeocodingClient",
    "TimeFrame",
    "category_query",
    "cluster_salons",
    "derive_bounds",
    "has_free_slot",
    "reset_filters",
    "resolve_center",
    "set_filter",
    "time_window",
    "to_markers",
    "to_rpc_params",
]

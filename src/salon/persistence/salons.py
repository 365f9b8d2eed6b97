"""Geospatial salon queries backed by database RPCs."""

from __future__ import annotations

from typing import Any

from ..models.domain import Salon
from .client import execute, require_client, rows

FILTERED_SEARCH_RPC = "salons_within_radius_filtered"
FREE_SLOT_RPC = "has_free_slot"

_FILTER_KEYS = ("p_min_rating", "p_min_price", "p_max_price", "p_categories", "p_start", "p_end")


def fetch_salons_in_radius(lat: float, lon: float, radius_meters: float) -> list[Salon]:
    """All salons within ``radius_meters`` of the point, no filters applied."""
    params: dict[str, Any] = {"p_lat": lat, "p_lon": lon, "p_radius": radius_meters}
    params.update({key: None for key in _FILTER_KEYS})
    return fetch_filtered_salons(params)


def fetch_filtered_salons(params: dict[str, Any]) -> list[Salon]:
    """Call the filtered radius search; None-valued filters are ignored server-side."""
    supabase = require_client()
    response = execute(supabase.rpc(FILTERED_SEARCH_RPC, params), "Filtered salon search")
    return [Salon.from_row(row) for row in rows(response)]


def check_has_free_slot(salon_id: str, start_iso: str, end_iso: str) -> bool:
    supabase = require_client()
    response = execute(
        supabase.rpc(FREE_SLOT_RPC, {"p_salon_id": salon_id, "p_start": start_iso, "p_end": end_iso}),
        "Free slot check",
    )
    return bool(getattr(response, "data", False))

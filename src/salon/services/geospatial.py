"""Geospatial helper functions."""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np
from shapely.geometry import MultiPoint

EARTH_RADIUS_KM = 6371.0


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Compute distance between two coordinates using the Haversine formula."""

    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def grid_cells(coordinates: Sequence[tuple[float, float]], cell_size_degrees: float) -> list[tuple[int, int]]:
    """Map (lat, lon) pairs onto integer grid cells of ``cell_size_degrees``."""

    if cell_size_degrees <= 0:
        raise ValueError("cell_size_degrees must be > 0")
    if not coordinates:
        return []
    points = np.asarray(coordinates, dtype=float)
    indices = np.floor(points / cell_size_degrees).astype(np.int64)
    return [(int(row), int(col)) for row, col in indices]


def centroid(coordinates: Sequence[tuple[float, float]]) -> tuple[float, float]:
    """Mean position of (lat, lon) pairs."""

    if not coordinates:
        raise ValueError("At least one coordinate is required for a centroid.")
    if len(coordinates) == 1:
        return coordinates[0]
    center = MultiPoint([(lon, lat) for lat, lon in coordinates]).centroid
    return center.y, center.x


def bounding_box(coordinates: Sequence[tuple[float, float]]) -> tuple[float, float, float, float]:
    """Return (south, west, north, east) enclosing the (lat, lon) pairs."""

    min_lon, min_lat, max_lon, max_lat = MultiPoint([(lon, lat) for lat, lon in coordinates]).bounds
    return min_lat, min_lon, max_lat, max_lon

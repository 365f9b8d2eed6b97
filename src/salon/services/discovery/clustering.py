"""Grid clustering of salon markers."""

from __future__ import annotations

from typing import Any, Collection, Sequence

from ...models.domain import Cluster, Salon
from ..geospatial import bounding_box, centroid, grid_cells


def cluster_salons(
    salons: Sequence[Salon],
    filtered_ids: Collection[str],
    cell_size_degrees: float,
) -> list[Cluster]:
    """Bucket salons into square grid cells of ``cell_size_degrees``.

    Cell membership and centroids depend only on coordinates and cell size;
    ``filtered_ids`` only decides each cluster's ``active`` flag, so markers
    keep their positions when filters change. Salons without coordinates are
    skipped. Clusters are returned in order of their first member.
    """

    if cell_size_degrees <= 0:
        raise ValueError("cell_size_degrees must be > 0")

    located = [salon for salon in salons if salon.has_coordinates]
    coordinates = [(salon.latitude, salon.longitude) for salon in located]
    cells = grid_cells(coordinates, cell_size_degrees)

    members_by_cell: dict[tuple[int, int], list[Salon]] = {}
    for salon, cell in zip(located, cells):
        members_by_cell.setdefault(cell, []).append(salon)

    active_ids = set(filtered_ids)
    clusters: list[Cluster] = []
    for cell, members in members_by_cell.items():
        lat, lon = centroid([(member.latitude, member.longitude) for member in members])
        clusters.append(
            Cluster(
                key=cell,
                latitude=lat,
                longitude=lon,
                members=members,
                active=any(member.id in active_ids for member in members),
            )
        )
    return clusters


def to_markers(clusters: Sequence[Cluster]) -> list[dict[str, Any]]:
    """Render-ready markers: a plain point for lone salons, a count badge otherwise."""

    markers: list[dict[str, Any]] = []
    for cluster in clusters:
        if cluster.count == 1:
            salon = cluster.members[0]
            markers.append(
                {
                    "kind": "point",
                    "cell": list(cluster.key),
                    "latitude": salon.latitude,
                    "longitude": salon.longitude,
                    "count": 1,
                    "active": cluster.active,
                    "salon_ids": [salon.id],
                    "salon": {
                        "id": salon.id,
                        "name": salon.name,
                        "rating": salon.rating,
                        "reviews_count": salon.reviews_count,
                        "categories": list(salon.categories),
                        "min_price": salon.min_price,
                        "max_price": salon.max_price,
                    },
                }
            )
            continue
        south, west, north, east = bounding_box(
            [(member.latitude, member.longitude) for member in cluster.members]
        )
        markers.append(
            {
                "kind": "cluster",
                "cell": list(cluster.key),
                "latitude": cluster.latitude,
                "longitude": cluster.longitude,
                "count": cluster.count,
                "active": cluster.active,
                "salon_ids": [member.id for member in cluster.members],
                "bounds": [south, west, north, east],
            }
        )
    return markers

import pytest

from src.salon.models.domain import Salon
from src.salon.services.discovery.clustering import cluster_salons, to_markers


def _salon(sid: str, lat: float | None, lon: float | None) -> Salon:
    return Salon(id=sid, name=f"Salon {sid}", latitude=lat, longitude=lon, rating=4.0, categories=("Haircut",))


SALONS = [
    _salon("a", 52.5201, 13.4001),
    _salon("b", 52.5202, 13.4003),
    _salon("c", 52.5551, 13.4551),
    _salon("d", None, None),
]


def test_cluster_salons_groups_by_grid_cell_and_skips_unlocated() -> None:
    clusters = cluster_salons(SALONS, {"a"}, 0.01)

    assert [[m.id for m in cluster.members] for cluster in clusters] == [["a", "b"], ["c"]]
    assert clusters[0].count == 2
    assert clusters[0].latitude == pytest.approx(52.52015)
    assert clusters[0].longitude == pytest.approx(13.4002)
    assert clusters[0].active is True
    assert clusters[1].active is False


def test_cluster_positions_do_not_depend_on_filtered_ids() -> None:
    unfiltered = cluster_salons(SALONS, set(), 0.01)
    filtered = cluster_salons(SALONS, {"c"}, 0.01)

    assert [(c.key, c.latitude, c.longitude) for c in unfiltered] == [
        (c.key, c.latitude, c.longitude) for c in filtered
    ]
    assert [c.active for c in unfiltered] == [False, False]
    assert [c.active for c in filtered] == [False, True]


def test_cluster_salons_is_deterministic() -> None:
    first = cluster_salons(SALONS, {"a", "c"}, 0.01)
    second = cluster_salons(SALONS, {"a", "c"}, 0.01)

    assert to_markers(first) == to_markers(second)


def test_to_markers_renders_points_and_counted_clusters() -> None:
    markers = to_markers(cluster_salons(SALONS, {"c"}, 0.01))

    cluster, point = markers
    assert cluster["kind"] == "cluster"
    assert cluster["count"] == 2
    assert cluster["salon_ids"] == ["a", "b"]
    assert cluster["bounds"] == pytest.approx([52.5201, 13.4001, 52.5202, 13.4003])
    assert point["kind"] == "point"
    assert point["active"] is True
    assert point["salon"]["id"] == "c"
    assert (point["latitude"], point["longitude"]) == (52.5551, 13.4551)


def test_cluster_salons_rejects_non_positive_cell_size() -> None:
    with pytest.raises(ValueError):
        cluster_salons(SALONS, set(), 0)

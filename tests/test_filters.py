from datetime import datetime
from zoneinfo import ZoneInfo

import pytest

from src.salon.models.domain import Salon
from src.salon.services.discovery.filters import (
    FilterState,
    TimeFrame,
    category_query,
    derive_bounds,
    reset_filters,
    set_filter,
    time_window,
    to_rpc_params,
)

BERLIN = ZoneInfo("Europe/Berlin")
# Wednesday afternoon
NOW = datetime(2024, 5, 15, 14, 30, tzinfo=BERLIN)


def _salon(sid: str, categories: tuple[str, ...], min_price: float | None, max_price: float | None) -> Salon:
    return Salon(
        id=sid,
        name=f"Salon {sid}",
        latitude=52.52,
        longitude=13.40,
        categories=categories,
        min_price=min_price,
        max_price=max_price,
    )


def test_time_window_any_has_no_bounds() -> None:
    assert time_window(TimeFrame.ANY, NOW) == (None, None)


def test_time_window_this_week_spans_monday_to_sunday() -> None:
    start, end = time_window(TimeFrame.THIS_WEEK, NOW)

    assert start == "2024-05-13T00:00:00.000+02:00"
    assert end == "2024-05-19T23:59:59.999+02:00"


def test_time_window_today_next_hour_and_two_weeks() -> None:
    assert time_window("today", NOW) == ("2024-05-15T00:00:00.000+02:00", "2024-05-15T23:59:59.999+02:00")
    assert time_window("nextHour", NOW) == ("2024-05-15T14:30:00.000+02:00", "2024-05-15T15:30:00.000+02:00")
    assert time_window("next2Weeks", NOW) == ("2024-05-15T14:30:00.000+02:00", "2024-05-29T14:30:00.000+02:00")


def test_time_window_rejects_unknown_frame() -> None:
    with pytest.raises(ValueError):
        time_window("nextYear", NOW)


def test_derive_bounds_snaps_sentinel_range_and_collects_categories() -> None:
    salons = [
        _salon("a", ("Haircut", "Balayage"), 15, 60),
        _salon("b", ("Balayage", "Nails"), 25, 80),
        _salon("c", (), None, None),
    ]

    state, categories = derive_bounds(FilterState(), salons)

    assert state.price_bounds == (15, 80)
    assert state.price_range == (15, 80)
    assert categories == ["Haircut", "Balayage", "Nails"]


def test_derive_bounds_keeps_user_price_range() -> None:
    state = FilterState(price_range=(20.0, 60.0), price_bounds=(10.0, 90.0))

    updated, _ = derive_bounds(state, [_salon("a", (), 15, 80)])

    assert updated.price_bounds == (15, 80)
    assert updated.price_range == (20.0, 60.0)


def test_derive_bounds_without_salons_leaves_state_untouched() -> None:
    state = FilterState()

    updated, categories = derive_bounds(state, [])

    assert updated == state
    assert categories == []


@pytest.mark.parametrize(
    "salons",
    [
        [_salon("a", ("Nails",), 50, None), _salon("b", (), None, 20)],
        [_salon("a", ("Nails",), 30, 25)],
    ],
)
def test_derive_bounds_ignores_inverted_price_envelope(salons) -> None:
    state = FilterState()

    updated, categories = derive_bounds(state, salons)

    assert updated.price_range == (0.0, 0.0)
    assert updated.price_bounds == (0.0, 0.0)
    assert categories == ["Nails"]


def test_rpc_params_send_only_active_filters() -> None:
    state = set_filter(FilterState(), min_rating=4, selected_categories=["Balayage"])

    params = to_rpc_params(state, (52.52, 13.40), NOW)

    assert params == {
        "p_lat": 52.52,
        "p_lon": 13.40,
        "p_radius": 5000,
        "p_min_rating": 4,
        "p_min_price": None,
        "p_max_price": None,
        "p_categories": ["Balayage"],
        "p_start": None,
        "p_end": None,
    }


def test_rpc_params_include_narrowed_price_range_and_time_window() -> None:
    state = FilterState(
        price_range=(20.0, 60.0),
        price_bounds=(15.0, 80.0),
        time_frame=TimeFrame.TODAY,
        max_distance_km=10,
    )

    params = to_rpc_params(state, (52.52, 13.40), NOW)

    assert params["p_radius"] == 10000
    assert (params["p_min_price"], params["p_max_price"]) == (20.0, 60.0)
    assert params["p_start"] == "2024-05-15T00:00:00.000+02:00"
    assert params["p_min_rating"] is None
    assert params["p_categories"] is None


def test_rpc_params_skip_price_range_equal_to_bounds() -> None:
    state = FilterState(price_range=(15.0, 80.0), price_bounds=(15.0, 80.0))

    params = to_rpc_params(state, (52.52, 13.40), NOW)

    assert params["p_min_price"] is None
    assert params["p_max_price"] is None


def test_set_filter_merges_and_deduplicates() -> None:
    state = set_filter(FilterState(), selected_categories=["Nails", "Nails", "Haircut"], time_frame="thisWeek")
    state = set_filter(state, min_rating=None, max_distance_km=12)

    assert state.selected_categories == ("Nails", "Haircut")
    assert state.time_frame is TimeFrame.THIS_WEEK
    assert state.max_distance_km == 12
    assert state.min_rating == 0


def test_set_filter_rejects_unknown_fields_and_invalid_values() -> None:
    with pytest.raises(ValueError):
        set_filter(FilterState(), colour="red")
    with pytest.raises(ValueError):
        set_filter(FilterState(), max_distance_km=25)
    with pytest.raises(ValueError):
        set_filter(FilterState(), price_range=(60, 20))


def test_reset_filters_restores_defaults_and_price_bounds() -> None:
    state = FilterState(
        min_rating=4,
        price_range=(20.0, 60.0),
        price_bounds=(15.0, 80.0),
        selected_categories=("Nails",),
        max_distance_km=15,
        time_frame=TimeFrame.THIS_WEEK,
    )

    reset = reset_filters(state)

    assert reset.min_rating == 0
    assert reset.price_range == (15.0, 80.0)
    assert reset.selected_categories == ()
    assert reset.max_distance_km == 5
    assert reset.time_frame is TimeFrame.ANY


def test_category_query_is_url_encoded() -> None:
    assert category_query(FilterState()) == ""
    state = FilterState(selected_categories=("Balayage", "Färben"))
    assert category_query(state) == "?categories=Balayage%2CF%C3%A4rben"

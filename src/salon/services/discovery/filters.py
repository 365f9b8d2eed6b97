"""Filter state for the salon map and its derived query parameters."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from datetime import datetime, time, timedelta
from enum import Enum
from typing import Any, Iterable, Optional
from urllib.parse import quote
from zoneinfo import ZoneInfo

from ...config import settings
from ...models.domain import Salon

PRICE_SENTINEL: tuple[float, float] = (0.0, 0.0)
MAX_RATING = 5


class TimeFrame(str, Enum):
    ANY = "any"
    NEXT_HOUR = "nextHour"
    TODAY = "today"
    THIS_WEEK = "thisWeek"
    NEXT_2_WEEKS = "next2Weeks"


@dataclass(slots=True, frozen=True)
class FilterState:
    """User-selected map filters.

    ``price_range`` starts at the ``(0, 0)`` sentinel and is snapped to the
    discovered ``price_bounds`` the first time bounds are known.
    """

    min_rating: float = 0
    price_range: tuple[float, float] = PRICE_SENTINEL
    price_bounds: tuple[float, float] = PRICE_SENTINEL
    selected_categories: tuple[str, ...] = ()
    max_distance_km: float = settings.default_radius_km
    time_frame: TimeFrame = TimeFrame.ANY

    def __post_init__(self) -> None:
        if not 0 <= self.min_rating <= MAX_RATING:
            raise ValueError(f"min_rating must be between 0 and {MAX_RATING}")
        low, high = self.price_range
        if low < 0 or high < 0 or low > high:
            raise ValueError(f"Invalid price range {self.price_range}")
        if not settings.min_radius_km <= self.max_distance_km <= settings.max_radius_km:
            raise ValueError(
                f"max_distance_km must be between {settings.min_radius_km} and {settings.max_radius_km}"
            )

    @property
    def radius_meters(self) -> float:
        return self.max_distance_km * 1000

    @property
    def price_range_narrowed(self) -> bool:
        """True when the user restricted prices below the discovered envelope."""
        return self.price_range != PRICE_SENTINEL and self.price_range != self.price_bounds


_FIELD_NAMES = frozenset(f.name for f in fields(FilterState))


def _normalize(key: str, value: Any) -> Any:
    if key in {"price_range", "price_bounds"}:
        low, high = value
        return (float(low), float(high))
    if key == "selected_categories":
        unique: list[str] = []
        for category in value or ():
            if category not in unique:
                unique.append(category)
        return tuple(unique)
    if key == "time_frame":
        return TimeFrame(value)
    return value


def set_filter(state: FilterState, **partial: Any) -> FilterState:
    """Merge ``partial`` into ``state`` and return the new state."""

    unknown = set(partial) - _FIELD_NAMES
    if unknown:
        raise ValueError(f"Unknown filter field(s): {', '.join(sorted(unknown))}")
    changes = {key: _normalize(key, value) for key, value in partial.items() if value is not None}
    return replace(state, **changes)


def derive_bounds(state: FilterState, salons: Iterable[Salon]) -> tuple[FilterState, list[str]]:
    """Scan the unfiltered salons once for categories and the price envelope.

    Returns the updated state and the available categories in first-seen order.
    A user-adjusted ``price_range`` is never overwritten.
    """

    categories: list[str] = []
    seen: set[str] = set()
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    any_salon = False

    for salon in salons:
        any_salon = True
        for category in salon.categories:
            if category not in seen:
                seen.add(category)
                categories.append(category)
        if salon.min_price is not None and (min_price is None or salon.min_price < min_price):
            min_price = salon.min_price
        if salon.max_price is not None and (max_price is None or salon.max_price > max_price):
            max_price = salon.max_price

    if not any_salon or min_price is None or max_price is None:
        return state, categories
    if min_price > max_price:
        # Rows with partial or inconsistent prices; keep the previous envelope.
        return state, categories

    bounds = (min_price, max_price)
    price_range = bounds if state.price_range == PRICE_SENTINEL else state.price_range
    return replace(state, price_bounds=bounds, price_range=price_range), categories


def reset_filters(state: FilterState) -> FilterState:
    low, high = state.price_bounds
    price_range = state.price_bounds if low != high else state.price_range
    return replace(
        state,
        min_rating=0,
        selected_categories=(),
        price_range=price_range,
        max_distance_km=settings.default_radius_km,
        time_frame=TimeFrame.ANY,
    )


def current_time() -> datetime:
    return datetime.now(ZoneInfo(settings.timezone))


def _iso(value: datetime) -> str:
    return value.isoformat(timespec="milliseconds")


def time_window(time_frame: TimeFrame | str, now: datetime | None = None) -> tuple[Optional[str], Optional[str]]:
    """Resolve a relative time frame into ISO bounds anchored at ``now``."""

    frame = TimeFrame(time_frame)
    if frame is TimeFrame.ANY:
        return None, None

    now = now or current_time()
    end_of_day = time(23, 59, 59, 999000)
    match frame:
        case TimeFrame.NEXT_HOUR:
            start, end = now, now + timedelta(hours=1)
        case TimeFrame.TODAY:
            start = datetime.combine(now.date(), time.min, tzinfo=now.tzinfo)
            end = datetime.combine(now.date(), end_of_day, tzinfo=now.tzinfo)
        case TimeFrame.THIS_WEEK:
            monday = now.date() - timedelta(days=now.weekday())
            start = datetime.combine(monday, time.min, tzinfo=now.tzinfo)
            end = datetime.combine(monday + timedelta(days=6), end_of_day, tzinfo=now.tzinfo)
        case TimeFrame.NEXT_2_WEEKS:
            start, end = now, now + timedelta(days=14)
        case _:
            raise ValueError(f"Unsupported time frame '{frame.value}'.")
    return _iso(start), _iso(end)


def to_rpc_params(
    state: FilterState,
    center: tuple[float, float],
    now: datetime | None = None,
) -> dict[str, Any]:
    """Build the payload for ``salons_within_radius_filtered``.

    Filters the user left at their neutral value are sent as None so the
    database ignores them.
    """

    lat, lon = center
    start_iso, end_iso = time_window(state.time_frame, now)
    min_price, max_price = state.price_range if state.price_range_narrowed else (None, None)
    return {
        "p_lat": lat,
        "p_lon": lon,
        "p_radius": state.radius_meters,
        "p_min_rating": state.min_rating if state.min_rating > 0 else None,
        "p_min_price": min_price,
        "p_max_price": max_price,
        "p_categories": list(state.selected_categories) or None,
        "p_start": start_iso,
        "p_end": end_iso,
    }


def category_query(state: FilterState) -> str:
    """Query string that pre-filters a salon's booking page by category."""
    if not state.selected_categories:
        return ""
    return f"?categories={quote(','.join(state.selected_categories), safe='')}"

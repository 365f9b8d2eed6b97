"""Pydantic request/response models for salon discovery endpoints."""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from ..config import settings

TimeFrameLiteral = Literal["any", "nextHour", "today", "thisWeek", "next2Weeks"]


class FilterStateModel(BaseModel):
    min_rating: float = Field(default=0, ge=0, le=5)
    price_range: tuple[float, float] = Field(default=(0.0, 0.0), description="(0, 0) until bounds are known.")
    price_bounds: tuple[float, float] = Field(default=(0.0, 0.0))
    selected_categories: list[str] = Field(default_factory=list)
    max_distance_km: float = Field(
        default=settings.default_radius_km,
        ge=settings.min_radius_km,
        le=settings.max_radius_km,
    )
    time_frame: TimeFrameLiteral = "any"

    @field_validator("price_range")
    @classmethod
    def validate_price_range(cls, value: tuple[float, float]) -> tuple[float, float]:
        low, high = value
        if low < 0 or high < 0 or low > high:
            raise ValueError("price_range must be (min, max) with 0 <= min <= max")
        return value


class SalonSearchRequest(BaseModel):
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)
    address: Optional[str] = Field(default=None, description="Fallback when device location is unavailable.")
    filters: FilterStateModel = Field(default_factory=FilterStateModel)
    cell_size_degrees: Optional[float] = Field(default=None, gt=0, le=1)

    @model_validator(mode="after")
    def check_coordinates_pair(self) -> "SalonSearchRequest":
        if (self.latitude is None) != (self.longitude is None):
            raise ValueError("latitude and longitude must be provided together")
        return self


class SalonModel(BaseModel):
    id: str
    name: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    rating: Optional[float] = None
    reviews_count: int = 0
    categories: list[str] = Field(default_factory=list)
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    address: Optional[str] = None
    postal_code: Optional[str] = None
    city: Optional[str] = None
    distance_km: Optional[float] = None
    active: bool = False


class MarkerModel(BaseModel):
    kind: Literal["point", "cluster"]
    cell: list[int]
    latitude: float
    longitude: float
    count: int
    active: bool
    salon_ids: list[str]
    salon: Optional[dict] = None
    bounds: Optional[list[float]] = None


class SalonSearchResponse(BaseModel):
    center: Optional[list[float]]
    radius_meters: float
    filters: FilterStateModel
    available_categories: list[str]
    salons: list[SalonModel]
    markers: list[MarkerModel]
    filtered_count: int
    category_query: str
    error: Optional[str] = None


class GeocodeRequest(BaseModel):
    address: str = Field(..., min_length=1)


class GeocodeResponse(BaseModel):
    address: str
    latitude: float
    longitude: float


class AvailabilityResponse(BaseModel):
    salon_id: str
    time_frame: TimeFrameLiteral
    start: Optional[str]
    end: Optional[str]
    has_free_slot: bool

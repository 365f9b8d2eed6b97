"""API routes for salon discovery on the map."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ...cache import QueryCache
from ...errors import AddressNotFoundError
from ...messages import translate
from ...schemas.discovery import (
    AvailabilityResponse,
    GeocodeRequest,
    GeocodeResponse,
    SalonSearchRequest,
    SalonSearchResponse,
    TimeFrameLiteral,
)
from ...services.discovery import DiscoverySession, GeocodingClient, has_free_slot, resolve_center
from ..dependencies import get_geocoding_client, get_language, get_query_cache

router = APIRouter(prefix="/salons", tags=["salons"])


@router.post("/search", response_model=SalonSearchResponse, status_code=status.HTTP_200_OK)
def search_salons(
    payload: SalonSearchRequest,
    cache: QueryCache = Depends(get_query_cache),
    geocoder: GeocodingClient = Depends(get_geocoding_client),
    language: str = Depends(get_language),
) -> SalonSearchResponse:
    """Return salons around the device location (or a typed address) with filter-driven markers.

    Backend failures do not fail the request: the snapshot carries an
    ``error`` message and empty result sets instead.
    """
    try:
        latitude, longitude = resolve_center(payload.latitude, payload.longitude, payload.address, geocoder)
    except AddressNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=translate("address_not_found", language)
        ) from exc
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=translate("location_required", language)
        ) from exc

    session = DiscoverySession(cache, cell_size_degrees=payload.cell_size_degrees, language=language)
    try:
        session.set_filter(**payload.filters.model_dump())
        session.set_center(latitude, longitude)
        return SalonSearchResponse(**session.snapshot())
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logging.exception(f"Error searching salons: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=translate("fetch_failed", language),
        ) from exc


@router.post("/geocode", response_model=GeocodeResponse, status_code=status.HTTP_200_OK)
def geocode_address(
    payload: GeocodeRequest,
    geocoder: GeocodingClient = Depends(get_geocoding_client),
    language: str = Depends(get_language),
) -> GeocodeResponse:
    try:
        latitude, longitude = geocoder.lookup(payload.address)
    except AddressNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=translate("address_not_found", language)
        ) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return GeocodeResponse(address=payload.address.strip(), latitude=latitude, longitude=longitude)


@router.get("/{salon_id}/availability", response_model=AvailabilityResponse, status_code=status.HTTP_200_OK)
def salon_availability(
    salon_id: str,
    time_frame: TimeFrameLiteral = Query(default="today", description="Relative window to check."),
    language: str = Depends(get_language),
) -> AvailabilityResponse:
    try:
        return AvailabilityResponse(**has_free_slot(salon_id, time_frame))
    except ConnectionError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=translate("database_unavailable", language)
        ) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

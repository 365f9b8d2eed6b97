"""Request-scoped dependencies shared by the route modules."""

from __future__ import annotations

from fastapi import Header, Request

from ..cache import QueryCache
from ..messages import resolve_language
from ..services.discovery.geocoding import GeocodingClient


def get_query_cache(request: Request) -> QueryCache:
    return request.app.state.query_cache


def get_language(accept_language: str | None = Header(default=None)) -> str:
    return resolve_language(accept_language)


def get_geocoding_client() -> GeocodingClient:
    return GeocodingClient()

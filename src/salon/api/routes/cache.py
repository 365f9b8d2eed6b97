"""Cache maintenance endpoint (called on sign-out and salon switch)."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from ...cache import QueryCache
from ..dependencies import get_query_cache

router = APIRouter(tags=["cache"])


@router.delete("/cache", status_code=status.HTTP_200_OK)
def clear_cache(cache: QueryCache = Depends(get_query_cache)) -> dict:
    return {"invalidated": cache.invalidate()}

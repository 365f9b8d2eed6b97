"""Shared access to the Supabase client for persistence helpers."""

from __future__ import annotations

import logging
from typing import Any

from ..db.supabase import get_supabase_client
from ..errors import RemoteQueryError

logger = logging.getLogger(__name__)


def require_client() -> Any:
    supabase = get_supabase_client()
    if not supabase:
        raise RemoteQueryError(
            "Supabase not configured. Set SALON_SUPABASE_URL and SALON_SUPABASE_KEY environment variables."
        )
    return supabase


def execute(query: Any, action: str) -> Any:
    """Run a query builder and wrap any client failure in RemoteQueryError."""
    try:
        return query.execute()
    except RemoteQueryError:
        raise
    except Exception as exc:
        logger.warning(f"{action} failed: {exc}")
        raise RemoteQueryError(f"{action} failed: {exc}") from exc


def rows(response: Any) -> list[dict]:
    return list(getattr(response, "data", None) or [])


def first_row(response: Any) -> dict | None:
    data = rows(response)
    return data[0] if data else None

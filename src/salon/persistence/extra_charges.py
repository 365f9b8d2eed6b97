"""CRUD for the per-salon catalog of extra charge reasons."""

from __future__ import annotations

from typing import Any, Iterable

from ..cache import QueryCache
from ..errors import ReasonNotFoundError, RemoteQueryError
from ..models.domain import ExtraChargeReason
from .client import execute, first_row, require_client, rows

TABLE = "extra_charge_reasons"


def _cache_prefix(salon_id: str) -> tuple[str, str]:
    return ("extra_charge_reasons", salon_id)


def _validate(name: str | None, default_amount: float | None) -> None:
    if name is not None and not name.strip():
        raise ValueError("Extra charge reason name must not be blank.")
    if default_amount is not None and default_amount < 0:
        raise ValueError("default_amount must be >= 0")


def list_reasons(salon_id: str, cache: QueryCache | None = None) -> list[ExtraChargeReason]:
    def fetch() -> list[ExtraChargeReason]:
        supabase = require_client()
        response = execute(
            supabase.table(TABLE).select("*").eq("salon_id", salon_id).order("created_at"),
            f"Listing extra charge reasons for salon {salon_id}",
        )
        return [ExtraChargeReason.from_row(row) for row in rows(response)]

    if cache is None:
        return fetch()
    return cache.get_or_fetch(_cache_prefix(salon_id), fetch)


def get_reasons_by_ids(reason_ids: Iterable[str]) -> list[ExtraChargeReason]:
    ids = list(dict.fromkeys(reason_ids))
    if not ids:
        return []
    supabase = require_client()
    response = execute(supabase.table(TABLE).select("*").in_("id", ids), "Loading extra charge reasons")
    return [ExtraChargeReason.from_row(row) for row in rows(response)]


def create_reason(
    salon_id: str,
    name: str,
    default_amount: float,
    cache: QueryCache | None = None,
) -> ExtraChargeReason:
    _validate(name, default_amount)
    supabase = require_client()
    response = execute(
        supabase.table(TABLE).insert(
            {"salon_id": salon_id, "name": name.strip(), "default_amount": default_amount}
        ),
        "Creating extra charge reason",
    )
    row = first_row(response)
    if row is None:
        raise RemoteQueryError("Failed to create extra charge reason: no row returned")
    if cache is not None:
        cache.invalidate(_cache_prefix(salon_id))
    return ExtraChargeReason.from_row(row)


def update_reason(
    salon_id: str,
    reason_id: str,
    updates: dict[str, Any],
    cache: QueryCache | None = None,
) -> ExtraChargeReason:
    allowed = {key: value for key, value in updates.items() if key in {"name", "default_amount"} and value is not None}
    if not allowed:
        raise ValueError("Nothing to update: provide name and/or default_amount.")
    _validate(allowed.get("name"), allowed.get("default_amount"))
    if "name" in allowed:
        allowed["name"] = allowed["name"].strip()
    supabase = require_client()
    response = execute(
        supabase.table(TABLE).update(allowed).eq("id", reason_id).eq("salon_id", salon_id),
        f"Updating extra charge reason {reason_id}",
    )
    row = first_row(response)
    if row is None:
        raise ReasonNotFoundError(reason_id)
    if cache is not None:
        cache.invalidate(_cache_prefix(salon_id))
    return ExtraChargeReason.from_row(row)


def delete_reason(salon_id: str, reason_id: str, cache: QueryCache | None = None) -> None:
    supabase = require_client()
    response = execute(
        supabase.table(TABLE).delete().eq("id", reason_id).eq("salon_id", salon_id),
        f"Deleting extra charge reason {reason_id}",
    )
    if not rows(response):
        raise ReasonNotFoundError(reason_id)
    if cache is not None:
        cache.invalidate(_cache_prefix(salon_id))

"""Database persistence for appointments, services and completion records."""

from __future__ import annotations

import logging
from typing import Any, Iterable

from ..models.domain import Appointment, ServiceInfo, Transaction, TransactionItem
from ..errors import AppointmentNotFoundError, RemoteQueryError
from .client import execute, first_row, require_client, rows

logger = logging.getLogger(__name__)


def get_appointment(appointment_id: str) -> Appointment:
    supabase = require_client()
    response = execute(
        supabase.table("appointments").select("*").eq("id", appointment_id).limit(1),
        f"Loading appointment {appointment_id}",
    )
    row = first_row(response)
    if row is None:
        raise AppointmentNotFoundError(appointment_id)
    return Appointment.from_row(row)


def get_service(service_id: str) -> ServiceInfo | None:
    """Return the service or None when it is missing or cannot be loaded."""
    supabase = require_client()
    try:
        response = execute(
            supabase.table("services").select("*").eq("id", service_id).limit(1),
            f"Loading service {service_id}",
        )
    except RemoteQueryError as exc:
        logger.error(f"Failed to fetch service for transaction item: {exc}")
        return None
    row = first_row(response)
    return ServiceInfo.from_row(row) if row else None


def update_appointment(appointment_id: str, updates: dict[str, Any]) -> Appointment:
    supabase = require_client()
    response = execute(
        supabase.table("appointments").update(updates).eq("id", appointment_id),
        f"Updating appointment {appointment_id}",
    )
    row = first_row(response)
    if row is None:
        raise AppointmentNotFoundError(appointment_id)
    return Appointment.from_row(row)


def insert_transaction(payload: dict[str, Any]) -> Transaction:
    supabase = require_client()
    response = execute(supabase.table("transactions").insert(payload), "Creating transaction")
    row = first_row(response)
    if row is None:
        raise RemoteQueryError("Failed to create transaction: no row returned")
    return Transaction.from_row(row)


def insert_transaction_items(transaction_id: str, items: Iterable[TransactionItem]) -> bool:
    """Insert line items; a failure is logged and reported as False."""
    payload = [item.to_row(transaction_id) for item in items]
    if not payload:
        return True
    supabase = require_client()
    try:
        execute(supabase.table("transaction_items").insert(payload), "Inserting transaction items")
    except RemoteQueryError as exc:
        logger.error(f"Failed to insert transaction items for {transaction_id}: {exc}")
        return False
    return True


def list_transactions(salon_id: str, limit: int = 100) -> list[Transaction]:
    supabase = require_client()
    response = execute(
        supabase.table("transactions")
        .select("*")
        .eq("salon_id", salon_id)
        .order("created_at", desc=True)
        .limit(limit),
        f"Listing transactions for salon {salon_id}",
    )
    return [Transaction.from_row(row) for row in rows(response)]


def invoke_invoice_function(function_name: str, body: dict[str, Any]) -> Any:
    supabase = require_client()
    return supabase.functions.invoke(function_name, invoke_options={"body": body})

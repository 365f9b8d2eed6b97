"""Appointment completion: transaction, line items, status and invoice."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Optional, Sequence

from ...config import settings
from ...errors import InvalidTransitionError, RemoteQueryError
from ...models.domain import (
    Appointment,
    AppointmentStatus,
    AppliedExtra,
    ServiceInfo,
    Transaction,
    TransactionItem,
)
from ...persistence.appointments import (
    get_appointment,
    get_service,
    insert_transaction,
    insert_transaction_items,
    invoke_invoice_function,
    update_appointment,
)
from ...persistence.extra_charges import get_reasons_by_ids
from .calculator import build_line_items, compute_totals, round2

logger = logging.getLogger(__name__)

InvoiceScheduler = Callable[..., None]


@dataclass(slots=True)
class CompletionOutcome:
    appointment: Appointment
    transaction: Transaction
    items: list[TransactionItem]
    items_saved: bool


def request_invoice(transaction_id: str, salon_id: str, invoice_type: str = "invoice") -> bool:
    """Ask the invoice function to render an invoice; at most one attempt.

    Failures are logged only: the transaction and the completed appointment
    stand regardless.
    """
    body = {"transactionId": transaction_id, "invoiceType": invoice_type, "salonId": salon_id}
    try:
        invoke_invoice_function(settings.invoice_function_name, body)
    except Exception as exc:
        logger.error(f"Failed to invoke {settings.invoice_function_name} for transaction {transaction_id}: {exc}")
        return False
    logger.info(f"Requested {invoice_type} for transaction {transaction_id}")
    return True


def resolve_base_price(appointment: Appointment, service: Optional[ServiceInfo] = None) -> float:
    """Booked price of the appointment, falling back to the service's list price."""
    if appointment.price is not None:
        return appointment.price
    if service is not None and service.price is not None:
        return service.price
    return 0.0


def _join_notes(*notes: Optional[str]) -> Optional[str]:
    joined = "\n\n".join(note for note in notes if note)
    return joined or None


def complete_appointment(
    appointment_id: str,
    final_price: float,
    extras: Sequence[AppliedExtra],
    internal_note: str = "",
    *,
    invoice_scheduler: InvoiceScheduler | None = None,
) -> CompletionOutcome:
    """Settle an appointment and mark it completed.

    ``invoice_scheduler`` receives ``(request_invoice, transaction_id,
    salon_id)``; FastAPI's ``BackgroundTasks.add_task`` fits. Without one the
    invoice is requested inline after the appointment update.
    """

    appointment = get_appointment(appointment_id)
    if not appointment.status.can_complete:
        raise InvalidTransitionError(
            f"Appointment {appointment_id} is {appointment.status.value} and cannot be completed."
        )

    subtotal = round2(final_price)
    tax_rate = settings.tax_rate_percent
    tax_amount, total_amount = compute_totals(subtotal, tax_rate)

    transaction = insert_transaction(
        {
            "salon_id": appointment.salon_id,
            "appointment_id": appointment.id,
            "customer_id": appointment.customer_id,
            "employee_id": appointment.employee_id,
            "subtotal": subtotal,
            "tax_amount": tax_amount,
            "tax_rate": tax_rate,
            "discount_amount": 0,
            "tip_amount": 0,
            "total_amount": total_amount,
            "payment_method": settings.default_payment_method,
            "payment_status": "completed",
            "guest_name": appointment.guest_name,
            "guest_email": appointment.guest_email,
            "guest_phone": appointment.guest_phone,
            "notes": _join_notes(appointment.notes, internal_note),
        }
    )
    logger.info(f"Created transaction {transaction.id} for appointment {appointment.id} (total {total_amount})")

    service = get_service(appointment.service_id) if appointment.service_id else None
    reason_names: dict[str, str] = {}
    if extras:
        try:
            reason_names = {reason.id: reason.name for reason in get_reasons_by_ids(e.reason_id for e in extras)}
        except RemoteQueryError as exc:
            logger.error(f"Failed to fetch extra charge reasons: {exc}")

    items = build_line_items(
        base_price=resolve_base_price(appointment, service),
        extras=extras,
        final_price=subtotal,
        service=service,
        reason_names=reason_names,
    )
    items_saved = insert_transaction_items(transaction.id, items)

    updated = update_appointment(
        appointment.id,
        {
            "status": AppointmentStatus.COMPLETED.value,
            "price": subtotal,
            "updated_at": datetime.now(timezone.utc).isoformat(),
        },
    )
    updated.service = service

    if invoice_scheduler is not None:
        invoice_scheduler(request_invoice, transaction.id, appointment.salon_id)
    else:
        request_invoice(transaction.id, appointment.salon_id)

    return CompletionOutcome(appointment=updated, transaction=transaction, items=items, items_saved=items_saved)

"""API routes for previewing, completing and rescheduling appointments."""

from __future__ import annotations

import logging

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, status

from ...config import settings
from ...errors import InvalidTransitionError
from ...messages import translate
from ...models.domain import Appointment
from ...persistence.appointments import get_appointment, get_service
from ...schemas.billing import (
    AppointmentModel,
    CompleteAppointmentRequest,
    CompleteAppointmentResponse,
    CompletionPreviewRequest,
    CompletionPreviewResponse,
    RescheduleRequest,
    TransactionItemModel,
    TransactionModel,
)
from ...services.appointments import EditorEvent, Saving, Viewing, reschedule_appointment, transition
from ...services.billing import (
    CompletionDraft,
    ExtraSelection,
    complete_appointment,
    preview_completion,
    resolve_base_price,
)
from ..dependencies import get_language

router = APIRouter(prefix="/appointments", tags=["appointments"])


def _appointment_model(appointment: Appointment) -> AppointmentModel:
    return AppointmentModel(
        id=appointment.id,
        salon_id=appointment.salon_id,
        start_time=appointment.start_time,
        end_time=appointment.end_time,
        status=appointment.status.value,
        price=appointment.price,
        service_id=appointment.service_id,
        employee_id=appointment.employee_id,
        service_name=appointment.service.name if appointment.service else None,
    )


def _load_base_price(appointment_id: str) -> float:
    appointment = get_appointment(appointment_id)
    service = None
    if appointment.price is None and appointment.service_id:
        service = get_service(appointment.service_id)
    return resolve_base_price(appointment, service)


def _draft(base_price: float, extras, manual_adjustment: float) -> CompletionDraft:
    selection = ExtraSelection()
    for extra in extras:
        selection.toggle_extra(extra.id, True, extra.amount)
    draft = CompletionDraft(base_price=base_price, selection=selection)
    draft.set_manual_adjustment(manual_adjustment)
    return draft


def _http_error(exc: Exception, language: str, action: str) -> HTTPException:
    if isinstance(exc, InvalidTransitionError):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
    if isinstance(exc, LookupError):
        return HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=translate("appointment_not_found", language)
        )
    if isinstance(exc, ConnectionError):
        return HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=translate("database_unavailable", language)
        )
    if isinstance(exc, ValueError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    logging.exception(f"Error while trying to {action}: {exc}")
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=f"Failed to {action}: {exc}")


@router.post("/{appointment_id}/preview", response_model=CompletionPreviewResponse, status_code=status.HTTP_200_OK)
def preview_appointment_completion(
    appointment_id: str,
    payload: CompletionPreviewRequest,
    language: str = Depends(get_language),
) -> CompletionPreviewResponse:
    """Price breakdown for the completion form without writing anything."""
    try:
        base_price = payload.base_price if payload.base_price is not None else _load_base_price(appointment_id)
        draft = _draft(base_price, payload.extras, payload.manual_adjustment)
        preview = preview_completion(
            draft.base_price, draft.selection.applied(), draft.manual_adjustment, settings.tax_rate_percent
        )
    except Exception as exc:
        raise _http_error(exc, language, "preview completion") from exc
    return CompletionPreviewResponse(**preview)


@router.post("/{appointment_id}/complete", response_model=CompleteAppointmentResponse, status_code=status.HTTP_200_OK)
def complete(
    appointment_id: str,
    payload: CompleteAppointmentRequest,
    background_tasks: BackgroundTasks,
    language: str = Depends(get_language),
) -> CompleteAppointmentResponse:
    """Create the transaction, mark the appointment completed and queue the invoice."""
    mode = Viewing()
    try:
        base_price = _load_base_price(appointment_id) if payload.final_price is None else 0.0
        draft = _draft(base_price, payload.extras, payload.manual_adjustment)
        mode = transition(mode, EditorEvent.START_COMPLETE, draft=draft)
        mode = transition(mode, EditorEvent.SUBMIT)
        final_price = payload.final_price if payload.final_price is not None else draft.final_price()
        outcome = complete_appointment(
            appointment_id,
            final_price,
            draft.selection.applied(),
            payload.internal_note,
            invoice_scheduler=background_tasks.add_task,
        )
        mode = transition(mode, EditorEvent.SUCCEED)
    except Exception as exc:
        if isinstance(mode, Saving):
            mode = transition(mode, EditorEvent.FAIL)
        logging.debug(f"Completion of {appointment_id} stopped in {type(mode).__name__.lower()} mode")
        raise _http_error(exc, language, "complete appointment") from exc

    transaction = outcome.transaction
    return CompleteAppointmentResponse(
        appointment=_appointment_model(outcome.appointment),
        transaction=TransactionModel(
            id=transaction.id,
            salon_id=transaction.salon_id,
            appointment_id=transaction.appointment_id,
            subtotal=transaction.subtotal,
            tax_rate=transaction.tax_rate,
            tax_amount=transaction.tax_amount,
            total_amount=transaction.total_amount,
            payment_method=transaction.payment_method,
            payment_status=transaction.payment_status,
            created_at=transaction.created_at,
        ),
        items=[
            TransactionItemModel(
                name=item.name,
                item_type=item.item_type,
                quantity=item.quantity,
                unit_price=item.unit_price,
                total_price=item.total_price,
                service_id=item.service_id,
            )
            for item in outcome.items
        ],
        items_saved=outcome.items_saved,
        invoice_requested=True,
    )


@router.patch("/{appointment_id}/schedule", response_model=AppointmentModel, status_code=status.HTTP_200_OK)
def reschedule(
    appointment_id: str,
    payload: RescheduleRequest,
    language: str = Depends(get_language),
) -> AppointmentModel:
    """Move an appointment; staff with reassignment rights may also change the employee."""
    try:
        appointment = reschedule_appointment(
            appointment_id,
            payload.date,
            payload.time,
            employee_id=payload.employee_id,
            can_reassign=payload.can_reassign,
        )
    except Exception as exc:
        raise _http_error(exc, language, "reschedule appointment") from exc
    return _appointment_model(appointment)

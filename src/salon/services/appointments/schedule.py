"""Rescheduling and reassigning appointments."""

from __future__ import annotations

import logging
from datetime import date, datetime, time, timedelta
from zoneinfo import ZoneInfo

from ...config import settings
from ...errors import InvalidTransitionError
from ...models.domain import Appointment, AppointmentStatus
from ...persistence.appointments import get_appointment, get_service, update_appointment

logger = logging.getLogger(__name__)


def compute_new_slot(
    new_date: date,
    new_time: time,
    duration_minutes: int | None,
    tz: str | None = None,
) -> tuple[datetime, datetime]:
    """Start at the local date/time; end after the service duration."""
    start = datetime.combine(new_date, new_time, tzinfo=ZoneInfo(tz or settings.timezone))
    minutes = duration_minutes or settings.default_appointment_minutes
    return start, start + timedelta(minutes=minutes)


def reschedule_appointment(
    appointment_id: str,
    new_date: date,
    new_time: time,
    *,
    employee_id: str | None = None,
    can_reassign: bool = False,
) -> Appointment:
    appointment = get_appointment(appointment_id)
    if appointment.status in (AppointmentStatus.COMPLETED, AppointmentStatus.CANCELLED):
        raise InvalidTransitionError(
            f"Appointment {appointment_id} is {appointment.status.value} and cannot be rescheduled."
        )

    service = get_service(appointment.service_id) if appointment.service_id else None
    start, end = compute_new_slot(new_date, new_time, service.duration_minutes if service else None)
    updates: dict = {"start_time": start.isoformat(), "end_time": end.isoformat()}
    if can_reassign:
        updates["employee_id"] = employee_id or None

    logger.info(f"Rescheduling appointment {appointment_id} to {updates['start_time']}")
    updated = update_appointment(appointment_id, updates)
    updated.service = service
    return updated

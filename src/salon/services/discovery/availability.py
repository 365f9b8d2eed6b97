"""Free-slot checks for a salon within a relative time frame."""

from __future__ import annotations

from datetime import datetime

from ...persistence.salons import check_has_free_slot
from .filters import TimeFrame, time_window


def has_free_slot(salon_id: str, time_frame: TimeFrame | str, now: datetime | None = None) -> dict:
    frame = TimeFrame(time_frame)
    if frame is TimeFrame.ANY:
        raise ValueError("A concrete time frame is required to check availability.")
    start_iso, end_iso = time_window(frame, now)
    return {
        "salon_id": salon_id,
        "time_frame": frame.value,
        "start": start_iso,
        "end": end_iso,
        "has_free_slot": check_has_free_slot(salon_id, start_iso, end_iso),
    }

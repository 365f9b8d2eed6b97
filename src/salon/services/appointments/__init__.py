"""Appointment editing services."""

from .schedule import compute_new_slot, reschedule_appointment
from .workflow import Completing, EditorEvent, EditorMode, Editing, Saving, Viewing, transition

__all__ = [
    "Completing",
    "EditorEvent",
    "EditorMode",
    "Editing",
    "Saving",
    "Viewing",
    "compute_new_slot",
    "reschedule_appointment",
    "transition",
]

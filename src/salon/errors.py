"""Exception types shared by services and routes."""

from __future__ import annotations


class RemoteQueryError(ConnectionError):
    """The backend could not be reached, is not configured, or rejected a query."""


class AddressNotFoundError(ValueError):
    """Geocoding produced no coordinates for the given address."""

    def __init__(self, address: str) -> None:
        super().__init__(f"Address not found: '{address}'")
        self.address = address


class AppointmentNotFoundError(LookupError):
    def __init__(self, appointment_id: str) -> None:
        super().__init__(f"Appointment '{appointment_id}' not found.")
        self.appointment_id = appointment_id


class ReasonNotFoundError(LookupError):
    def __init__(self, reason_id: str) -> None:
        super().__init__(f"Extra charge reason '{reason_id}' not found.")
        self.reason_id = reason_id


class InvalidTransitionError(ValueError):
    """A status or editor-mode change that the workflow does not allow."""

"""Domain models for salons, appointments and billing records."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional


def _optional_float(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    return float(value)


@dataclass(slots=True)
class Salon:
    """A salon as returned by the radius search RPCs."""

    id: str
    name: str
    latitude: Optional[float]
    longitude: Optional[float]
    rating: Optional[float] = None
    reviews_count: int = 0
    categories: tuple[str, ...] = ()
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    address: Optional[str] = None
    postal_code: Optional[str] = None
    city: Optional[str] = None
    raw: dict = field(default_factory=dict)

    @property
    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None

    @classmethod
    def from_row(cls, row: dict) -> "Salon":
        return cls(
            id=str(row["id"]),
            name=(row.get("name") or "").strip(),
            latitude=_optional_float(row.get("latitude")),
            longitude=_optional_float(row.get("longitude")),
            rating=_optional_float(row.get("rating")),
            reviews_count=int(row.get("reviews_count") or 0),
            categories=tuple(row.get("categories") or ()),
            min_price=_optional_float(row.get("min_price")),
            max_price=_optional_float(row.get("max_price")),
            address=row.get("address"),
            postal_code=row.get("postal_code"),
            city=row.get("city"),
            raw=row,
        )


@dataclass(slots=True)
class Cluster:
    """Salons sharing one grid cell on the map."""

    key: tuple[int, int]
    latitude: float
    longitude: float
    members: list[Salon]
    active: bool = False

    @property
    def count(self) -> int:
        return len(self.members)


class AppointmentStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @property
    def can_complete(self) -> bool:
        return self in (AppointmentStatus.PENDING, AppointmentStatus.CONFIRMED)


@dataclass(slots=True)
class ServiceInfo:
    id: str
    name: str
    duration_minutes: Optional[int] = None
    price: Optional[float] = None
    description: Optional[str] = None

    @classmethod
    def from_row(cls, row: dict) -> "ServiceInfo":
        duration = row.get("duration_minutes")
        return cls(
            id=str(row["id"]),
            name=row.get("name") or "",
            duration_minutes=int(duration) if duration is not None else None,
            price=_optional_float(row.get("price")),
            description=row.get("description"),
        )


@dataclass(slots=True)
class Appointment:
    id: str
    salon_id: str
    start_time: datetime
    end_time: datetime
    status: AppointmentStatus
    price: Optional[float] = None
    service_id: Optional[str] = None
    customer_id: Optional[str] = None
    employee_id: Optional[str] = None
    guest_name: Optional[str] = None
    guest_email: Optional[str] = None
    guest_phone: Optional[str] = None
    notes: Optional[str] = None
    service: Optional[ServiceInfo] = None

    @classmethod
    def from_row(cls, row: dict) -> "Appointment":
        return cls(
            id=str(row["id"]),
            salon_id=str(row["salon_id"]),
            start_time=datetime.fromisoformat(str(row["start_time"])),
            end_time=datetime.fromisoformat(str(row["end_time"])),
            status=AppointmentStatus(row.get("status") or AppointmentStatus.PENDING.value),
            price=_optional_float(row.get("price")),
            service_id=row.get("service_id"),
            customer_id=row.get("customer_id"),
            employee_id=row.get("employee_id"),
            guest_name=row.get("guest_name"),
            guest_email=row.get("guest_email"),
            guest_phone=row.get("guest_phone"),
            notes=row.get("notes"),
        )


@dataclass(slots=True)
class ExtraChargeReason:
    """A salon-defined surcharge that may be applied at completion."""

    id: str
    salon_id: str
    name: str
    default_amount: float = 0.0

    @classmethod
    def from_row(cls, row: dict) -> "ExtraChargeReason":
        return cls(
            id=str(row["id"]),
            salon_id=str(row["salon_id"]),
            name=row.get("name") or "",
            default_amount=float(row.get("default_amount") or 0.0),
        )


@dataclass(slots=True, frozen=True)
class AppliedExtra:
    reason_id: str
    amount: float


@dataclass(slots=True)
class CompletionResult:
    final_price: float
    applied_extras: list[AppliedExtra]
    manual_adjustment: float


@dataclass(slots=True)
class TransactionItem:
    name: str
    unit_price: float
    item_type: str = "product"
    quantity: int = 1
    service_id: Optional[str] = None
    description: Optional[str] = None

    @property
    def total_price(self) -> float:
        return round(self.unit_price * self.quantity, 2)

    def to_row(self, transaction_id: str) -> dict:
        return {
            "transaction_id": transaction_id,
            "item_type": self.item_type,
            "service_id": self.service_id,
            "inventory_id": None,
            "name": self.name,
            "description": self.description,
            "quantity": self.quantity,
            "unit_price": self.unit_price,
            "total_price": self.total_price,
        }


@dataclass(slots=True)
class Transaction:
    id: str
    salon_id: str
    subtotal: float
    tax_rate: float
    tax_amount: float
    total_amount: float
    appointment_id: Optional[str] = None
    payment_method: str = "cash"
    payment_status: str = "completed"
    created_at: Optional[str] = None
    raw: dict = field(default_factory=dict)

    @classmethod
    def from_row(cls, row: dict) -> "Transaction":
        return cls(
            id=str(row["id"]),
            salon_id=str(row["salon_id"]),
            subtotal=float(row.get("subtotal") or 0.0),
            tax_rate=float(row.get("tax_rate") or 0.0),
            tax_amount=float(row.get("tax_amount") or 0.0),
            total_amount=float(row.get("total_amount") or 0.0),
            appointment_id=row.get("appointment_id"),
            payment_method=row.get("payment_method") or "cash",
            payment_status=row.get("payment_status") or "completed",
            created_at=row.get("created_at"),
            raw=row,
        )

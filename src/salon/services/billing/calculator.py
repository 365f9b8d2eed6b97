"""Pure price arithmetic for appointment completion."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Mapping, Optional, Sequence

from ...models.domain import AppliedExtra, CompletionResult, ExtraChargeReason, ServiceInfo, TransactionItem

ADJUSTMENT_EPSILON = 0.009
MANUAL_ADJUSTMENT_NAME = "Manual Adjustment"
EXTRA_FALLBACK_NAME = "Extra"
SERVICE_FALLBACK_NAME = "Service"


def round2(value: float) -> float:
    """Round half-up to cents."""
    return float(Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def extras_total(extras: Iterable[AppliedExtra]) -> float:
    return sum((extra.amount for extra in extras), 0.0)


def compute_final_price(base_price: float, extras: Iterable[AppliedExtra], manual_adjustment: float = 0.0) -> float:
    """``base_price + sum(extras) + manual_adjustment`` rounded to cents."""
    return round2((base_price or 0.0) + extras_total(extras) + (manual_adjustment or 0.0))


def compute_totals(subtotal: float, tax_rate_percent: float) -> tuple[float, float]:
    """Return (tax_amount, total_amount) for a tax-exclusive subtotal."""
    tax_amount = round2(subtotal * tax_rate_percent / 100)
    return tax_amount, round2(subtotal + tax_amount)


def manual_adjustment_delta(final_price: float, base_price: float, extras_sum: float) -> float:
    """Part of the final price not explained by the base price and extras."""
    return round2(final_price - base_price - extras_sum)


def needs_adjustment_line(delta: float) -> bool:
    return abs(delta) > ADJUSTMENT_EPSILON


@dataclass(slots=True)
class _Selection:
    selected: bool
    amount: float


class ExtraSelection:
    """Which extra charge reasons are applied, and at what amount.

    Unselecting a reason keeps its edited amount so re-selecting restores it.
    """

    def __init__(self) -> None:
        self._entries: dict[str, _Selection] = {}

    @classmethod
    def from_reasons(cls, reasons: Iterable[ExtraChargeReason]) -> "ExtraSelection":
        selection = cls()
        for reason in reasons:
            selection._entries[reason.id] = _Selection(selected=False, amount=reason.default_amount)
        return selection

    def toggle_extra(
        self,
        reason_id: str,
        selected: bool,
        amount: Optional[float] = None,
        *,
        default_amount: float = 0.0,
    ) -> None:
        entry = self._entries.get(reason_id)
        if amount is None:
            amount = entry.amount if entry is not None else default_amount
        self._entries[reason_id] = _Selection(selected=selected, amount=amount)

    def set_amount(self, reason_id: str, amount: float) -> None:
        entry = self._entries.get(reason_id)
        self._entries[reason_id] = _Selection(selected=entry.selected if entry else True, amount=amount)

    def is_selected(self, reason_id: str) -> bool:
        entry = self._entries.get(reason_id)
        return bool(entry and entry.selected)

    def amount_for(self, reason_id: str) -> Optional[float]:
        entry = self._entries.get(reason_id)
        return entry.amount if entry else None

    def applied(self) -> list[AppliedExtra]:
        return [
            AppliedExtra(reason_id=reason_id, amount=entry.amount)
            for reason_id, entry in self._entries.items()
            if entry.selected
        ]

    def total(self) -> float:
        return extras_total(self.applied())


@dataclass
class CompletionDraft:
    """Price being assembled while an appointment is completed."""

    base_price: float
    selection: ExtraSelection = field(default_factory=ExtraSelection)
    manual_adjustment: float = 0.0

    def set_manual_adjustment(self, amount: float) -> None:
        self.manual_adjustment = amount or 0.0

    def final_price(self) -> float:
        return compute_final_price(self.base_price, self.selection.applied(), self.manual_adjustment)

    def result(self) -> CompletionResult:
        return CompletionResult(
            final_price=self.final_price(),
            applied_extras=self.selection.applied(),
            manual_adjustment=self.manual_adjustment,
        )


def preview_completion(
    base_price: float,
    extras: Sequence[AppliedExtra],
    manual_adjustment: float,
    tax_rate_percent: float,
) -> dict:
    final_price = compute_final_price(base_price, extras, manual_adjustment)
    tax_amount, total_amount = compute_totals(final_price, tax_rate_percent)
    return {
        "base_price": round2(base_price or 0.0),
        "extras_total": round2(extras_total(extras)),
        "manual_adjustment": round2(manual_adjustment or 0.0),
        "final_price": final_price,
        "tax_rate": tax_rate_percent,
        "tax_amount": tax_amount,
        "total_amount": total_amount,
    }


def build_line_items(
    *,
    base_price: float,
    extras: Sequence[AppliedExtra],
    final_price: float,
    service: Optional[ServiceInfo] = None,
    reason_names: Mapping[str, str] | None = None,
) -> list[TransactionItem]:
    """Line items for the base service, each extra and any residual adjustment."""

    items: list[TransactionItem] = []
    if service is not None or base_price:
        items.append(
            TransactionItem(
                name=service.name if service and service.name else SERVICE_FALLBACK_NAME,
                unit_price=round2(base_price),
                item_type="service",
                service_id=service.id if service else None,
                description=service.description if service else None,
            )
        )
    names = reason_names or {}
    for extra in extras:
        items.append(
            TransactionItem(
                name=names.get(extra.reason_id) or EXTRA_FALLBACK_NAME,
                unit_price=round2(extra.amount),
            )
        )
    delta = manual_adjustment_delta(final_price, base_price, extras_total(extras))
    if needs_adjustment_line(delta):
        items.append(TransactionItem(name=MANUAL_ADJUSTMENT_NAME, unit_price=delta))
    return items

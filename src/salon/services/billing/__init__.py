"""Billing services for appointment completion."""

from .calculator import (
    CompletionDraft,
    ExtraSelection,
    build_line_items,
    compute_final_price,
    compute_totals,
    manual_adjustment_delta,
    needs_adjustment_line,
    preview_completion,
    round2,
)
from .completion import CompletionOutcome, complete_appointment, request_invoice, resolve_base_price

__all__ = [
    "CompletionDraft",
    "CompletionOutcome",
    "ExtraSelection",
    "build_line_items",
    "complete_appointment",
    "compute_final_price",
    "compute_totals",
    "manual_adjustment_delta",
    "needs_adjustment_line",
    "preview_completion",
    "request_invoice",
    "resolve_base_price",
    "round2",
]

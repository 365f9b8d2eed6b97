"""Transaction history listing and spreadsheet export."""

from __future__ import annotations

from io import BytesIO
from typing import Sequence

from openpyxl import Workbook
from openpyxl.styles import Font

from ...models.domain import Transaction
from ...persistence.appointments import list_transactions

EXPORT_COLUMNS = (
    ("Transaction ID", "id"),
    ("Created At", "created_at"),
    ("Appointment ID", "appointment_id"),
    ("Payment Method", "payment_method"),
    ("Payment Status", "payment_status"),
    ("Subtotal", "subtotal"),
    ("Tax Rate (%)", "tax_rate"),
    ("Tax", "tax_amount"),
    ("Total", "total_amount"),
)

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def get_transaction_history(salon_id: str, limit: int = 100) -> list[Transaction]:
    if limit < 1:
        raise ValueError("limit must be >= 1")
    return list_transactions(salon_id, limit=limit)


def export_transactions_xlsx(transactions: Sequence[Transaction], title: str = "Transactions") -> bytes:
    """Render transactions as a single-sheet workbook with a totals row."""
    workbook = Workbook()
    worksheet = workbook.active
    worksheet.title = title[:31]

    worksheet.append([header for header, _ in EXPORT_COLUMNS])
    for cell in worksheet[1]:
        cell.font = Font(bold=True)

    for transaction in transactions:
        worksheet.append([getattr(transaction, attribute) for _, attribute in EXPORT_COLUMNS])

    if transactions:
        worksheet.append(
            ["Total", None, None, None, None,
             round(sum(t.subtotal for t in transactions), 2),
             None,
             round(sum(t.tax_amount for t in transactions), 2),
             round(sum(t.total_amount for t in transactions), 2)]
        )
        for cell in worksheet[worksheet.max_row]:
            cell.font = Font(bold=True)

    buffer = BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()

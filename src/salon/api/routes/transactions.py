"""API routes for a salon's transaction history."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from ...messages import translate
from ...models.domain import Transaction
from ...schemas.billing import TransactionModel
from ...services.reports import XLSX_MEDIA_TYPE, export_transactions_xlsx, get_transaction_history
from ..dependencies import get_language

router = APIRouter(prefix="/salons/{salon_id}/transactions", tags=["transactions"])


def _load(salon_id: str, limit: int, language: str) -> list[Transaction]:
    try:
        return get_transaction_history(salon_id, limit=limit)
    except ConnectionError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=translate("database_unavailable", language)
        ) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@router.get("", response_model=List[TransactionModel], status_code=status.HTTP_200_OK)
def list_salon_transactions(
    salon_id: str,
    limit: int = Query(default=100, ge=1, le=1000),
    language: str = Depends(get_language),
) -> List[TransactionModel]:
    return [
        TransactionModel(
            id=t.id,
            salon_id=t.salon_id,
            appointment_id=t.appointment_id,
            subtotal=t.subtotal,
            tax_rate=t.tax_rate,
            tax_amount=t.tax_amount,
            total_amount=t.total_amount,
            payment_method=t.payment_method,
            payment_status=t.payment_status,
            created_at=t.created_at,
        )
        for t in _load(salon_id, limit, language)
    ]


@router.get("/export", status_code=status.HTTP_200_OK)
def export_salon_transactions(
    salon_id: str,
    limit: int = Query(default=1000, ge=1, le=10000),
    language: str = Depends(get_language),
) -> Response:
    """Download the transaction history as an Excel workbook."""
    content = export_transactions_xlsx(_load(salon_id, limit, language))
    return Response(
        content=content,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="transactions-{salon_id}.xlsx"'},
    )

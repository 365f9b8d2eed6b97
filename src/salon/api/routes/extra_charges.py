"""API routes for a salon's extra charge reasons."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status

from ...cache import QueryCache
from ...messages import translate
from ...models.domain import ExtraChargeReason
from ...persistence.extra_charges import create_reason, delete_reason, list_reasons, update_reason
from ...schemas.billing import ExtraChargeReasonCreate, ExtraChargeReasonModel, ExtraChargeReasonUpdate
from ..dependencies import get_language, get_query_cache

router = APIRouter(prefix="/salons/{salon_id}/extra-charge-reasons", tags=["extra-charges"])


def _to_model(reason: ExtraChargeReason) -> ExtraChargeReasonModel:
    return ExtraChargeReasonModel(
        id=reason.id, salon_id=reason.salon_id, name=reason.name, default_amount=reason.default_amount
    )


def _http_error(exc: Exception, language: str) -> HTTPException:
    if isinstance(exc, LookupError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=translate("reason_not_found", language))
    if isinstance(exc, ConnectionError):
        return HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=translate("database_unavailable", language)
        )
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))


@router.get("", response_model=List[ExtraChargeReasonModel], status_code=status.HTTP_200_OK)
def get_extra_charge_reasons(
    salon_id: str,
    cache: QueryCache = Depends(get_query_cache),
    language: str = Depends(get_language),
) -> List[ExtraChargeReasonModel]:
    try:
        reasons = list_reasons(salon_id, cache=cache)
    except ConnectionError as exc:
        raise _http_error(exc, language) from exc
    return [_to_model(reason) for reason in reasons]


@router.post("", response_model=ExtraChargeReasonModel, status_code=status.HTTP_201_CREATED)
def add_extra_charge_reason(
    salon_id: str,
    payload: ExtraChargeReasonCreate,
    cache: QueryCache = Depends(get_query_cache),
    language: str = Depends(get_language),
) -> ExtraChargeReasonModel:
    try:
        reason = create_reason(salon_id, payload.name, payload.default_amount, cache=cache)
    except (ConnectionError, ValueError) as exc:
        raise _http_error(exc, language) from exc
    return _to_model(reason)


@router.patch("/{reason_id}", response_model=ExtraChargeReasonModel, status_code=status.HTTP_200_OK)
def edit_extra_charge_reason(
    salon_id: str,
    reason_id: str,
    payload: ExtraChargeReasonUpdate,
    cache: QueryCache = Depends(get_query_cache),
    language: str = Depends(get_language),
) -> ExtraChargeReasonModel:
    try:
        reason = update_reason(salon_id, reason_id, payload.model_dump(exclude_none=True), cache=cache)
    except (LookupError, ConnectionError, ValueError) as exc:
        raise _http_error(exc, language) from exc
    return _to_model(reason)


@router.delete("/{reason_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_extra_charge_reason(
    salon_id: str,
    reason_id: str,
    cache: QueryCache = Depends(get_query_cache),
    language: str = Depends(get_language),
) -> Response:
    try:
        delete_reason(salon_id, reason_id, cache=cache)
    except (LookupError, ConnectionError) as exc:
        raise _http_error(exc, language) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)

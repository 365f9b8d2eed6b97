"""Pydantic request/response models for appointments, extras and transactions."""

from __future__ import annotations

import datetime as dt
from typing import Optional

from pydantic import BaseModel, Field, model_validator


class AppliedExtraModel(BaseModel):
    id: str = Field(..., description="Extra charge reason id.")
    amount: float


class CompletionPreviewRequest(BaseModel):
    base_price: Optional[float] = Field(
        default=None, description="Override of the appointment's stored price."
    )
    extras: list[AppliedExtraModel] = Field(default_factory=list)
    manual_adjustment: float = Field(default=0.0, description="Signed amount added to the total.")


class CompletionPreviewResponse(BaseModel):
    base_price: float
    extras_total: float
    manual_adjustment: float
    final_price: float
    tax_rate: float
    tax_amount: float
    total_amount: float


class CompleteAppointmentRequest(BaseModel):
    final_price: Optional[float] = Field(
        default=None,
        description="Final price excluding tax. Computed from base price, extras and adjustment when omitted.",
    )
    extras: list[AppliedExtraModel] = Field(default_factory=list)
    manual_adjustment: float = Field(
        default=0.0, description="Signed amount added to the computed price. Not allowed together with final_price."
    )
    internal_note: str = ""

    @model_validator(mode="after")
    def check_single_price_source(self) -> "CompleteAppointmentRequest":
        if self.final_price is not None and self.manual_adjustment:
            raise ValueError("Send either final_price or manual_adjustment, not both.")
        return self


class TransactionItemModel(BaseModel):
    name: str
    item_type: str
    quantity: int
    unit_price: float
    total_price: float
    service_id: Optional[str] = None


class TransactionModel(BaseModel):
    id: str
    salon_id: str
    appointment_id: Optional[str] = None
    subtotal: float
    tax_rate: float
    tax_amount: float
    total_amount: float
    payment_method: str
    payment_status: str
    created_at: Optional[str] = None


class AppointmentModel(BaseModel):
    id: str
    salon_id: str
    start_time: dt.datetime
    end_time: dt.datetime
    status: str
    price: Optional[float] = None
    service_id: Optional[str] = None
    employee_id: Optional[str] = None
    service_name: Optional[str] = None


class CompleteAppointmentResponse(BaseModel):
    appointment: AppointmentModel
    transaction: TransactionModel
    items: list[TransactionItemModel]
    items_saved: bool
    invoice_requested: bool


class RescheduleRequest(BaseModel):
    date: dt.date
    time: dt.time
    employee_id: Optional[str] = None
    can_reassign: bool = False


class ExtraChargeReasonModel(BaseModel):
    id: str
    salon_id: str
    name: str
    default_amount: float


class ExtraChargeReasonCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=120)
    default_amount: float = Field(default=0.0, ge=0.0)


class ExtraChargeReasonUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=120)
    default_amount: Optional[float] = Field(default=None, ge=0.0)

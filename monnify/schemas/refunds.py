"""Pydantic models for refund endpoints."""

from __future__ import annotations

from typing import Optional

from pydantic import Field

from monnify.schemas.common import ListFilter, MonnifyModel, RequestModel


class RefundRequest(RequestModel):
    transaction_reference: str = Field(..., min_length=1)
    refund_amount: float = Field(..., gt=0)
    refund_reference: str = Field(..., min_length=1, max_length=100)
    refund_reason: str = "Customer request"
    customer_note: Optional[str] = None


class RefundFilter(ListFilter):
    pass


class RefundDetails(MonnifyModel):
    refund_reference: str
    transaction_reference: Optional[str] = None
    refund_amount: float = 0.0
    refund_reason: Optional[str] = None
    customer_note: Optional[str] = None
    refund_status: Optional[str] = None
    created_on: Optional[str] = None
    completed_on: Optional[str] = None

    @property
    def is_successful(self) -> bool:
        return self.refund_status in ("COMPLETED", "SUCCESSFUL")

    @property
    def is_pending(self) -> bool:
        return self.refund_status in ("IN_PROGRESS", "PENDING")

    @property
    def is_failed(self) -> bool:
        return self.refund_status == "FAILED"


__all__ = ["RefundDetails", "RefundFilter", "RefundRequest"]

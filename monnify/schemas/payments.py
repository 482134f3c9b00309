"""Pydantic models for collection (payment) endpoints."""

from __future__ import annotations

import re
from typing import Any, Dict, List, Optional
from urllib.parse import urlparse

from pydantic import Field, field_validator

from monnify.schemas.common import ListFilter, MonnifyModel, RequestModel

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

DEFAULT_PAYMENT_METHODS = ("CARD", "ACCOUNT_TRANSFER", "USSD")


def validate_email(value: str) -> str:
    if not _EMAIL_PATTERN.match(value):
        raise ValueError("Invalid email address")
    return value


class PaymentRequest(RequestModel):
    """Payload for initializing a one-off collection."""

    amount: float = Field(..., gt=0)
    customer_name: str = Field(..., min_length=1)
    customer_email: str
    payment_reference: str = Field(..., min_length=1, max_length=100)
    redirect_url: str
    payment_description: str = "Payment for services"
    currency_code: str = "NGN"
    contract_code: Optional[str] = None
    payment_methods: List[str] = Field(default_factory=lambda: list(DEFAULT_PAYMENT_METHODS))
    customer_phone: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None

    @field_validator("customer_email")
    @classmethod
    def _check_email(cls, value: str) -> str:
        return validate_email(value)

    @field_validator("redirect_url")
    @classmethod
    def _check_redirect_url(cls, value: str) -> str:
        parsed = urlparse(value)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError("Invalid redirect URL")
        return value


class PaymentFilter(ListFilter):
    """Filters for listing collections; pages start at 1."""

    page: Optional[int] = Field(None, ge=1)


class InitializedPayment(MonnifyModel):
    transaction_reference: str
    payment_reference: str
    merchant_name: Optional[str] = None
    api_key: Optional[str] = None
    enabled_payment_method: List[str] = Field(default_factory=list)
    checkout_url: Optional[str] = None


class PaymentStatusDetails(MonnifyModel):
    """Transaction state returned by the verification endpoint."""

    transaction_reference: str
    payment_reference: str
    amount_paid: float = 0.0
    total_payable: float = 0.0
    settlement_amount: Optional[float] = None
    paid_on: Optional[str] = None
    payment_status: str
    payment_description: Optional[str] = None
    currency: Optional[str] = None
    payment_method: Optional[str] = None
    product: Optional[Dict[str, Any]] = None
    card_details: Optional[Dict[str, Any]] = None
    account_details: Optional[Dict[str, Any]] = None
    account_payments: List[Dict[str, Any]] = Field(default_factory=list)
    customer: Optional[Dict[str, Any]] = None
    meta_data: Dict[str, Any] = Field(default_factory=dict)

    @property
    def is_paid(self) -> bool:
        return self.payment_status == "PAID"

    @property
    def is_pending(self) -> bool:
        return self.payment_status == "PENDING"

    @property
    def is_failed(self) -> bool:
        return self.payment_status == "FAILED"

    @property
    def is_expired(self) -> bool:
        return self.payment_status == "EXPIRED"


class TransactionSummary(MonnifyModel):
    """One row of the transaction listing."""

    transaction_reference: str
    payment_reference: Optional[str] = None
    amount: float = 0.0
    amount_paid: Optional[float] = None
    payment_status: Optional[str] = None
    payment_method: Optional[str] = None
    payment_description: Optional[str] = None
    currency_code: Optional[str] = None
    customer_name: Optional[str] = None
    customer_email: Optional[str] = None
    created_on: Optional[str] = None
    completed_on: Optional[str] = None


__all__ = [
    "DEFAULT_PAYMENT_METHODS",
    "InitializedPayment",
    "PaymentFilter",
    "PaymentRequest",
    "PaymentStatusDetails",
    "TransactionSummary",
    "validate_email",
]

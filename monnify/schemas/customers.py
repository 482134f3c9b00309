"""Pydantic models for customer endpoints."""

from __future__ import annotations

import re
from typing import Any, Dict, Optional

from pydantic import Field, field_validator

from monnify.schemas.common import MonnifyModel, RequestModel
from monnify.schemas.payments import validate_email

_PHONE_PATTERN = re.compile(r"^\+?[1-9]\d{1,14}$")


def validate_phone(value: Optional[str]) -> Optional[str]:
    if value and not _PHONE_PATTERN.match(value):
        raise ValueError("Invalid phone number")
    return value or None


class CustomerRequest(RequestModel):
    email: str
    name: str = Field(..., min_length=1)
    phone: Optional[str] = None

    @field_validator("email")
    @classmethod
    def _check_email(cls, value: str) -> str:
        return validate_email(value)

    @field_validator("phone")
    @classmethod
    def _check_phone(cls, value: Optional[str]) -> Optional[str]:
        return validate_phone(value)


class CustomerUpdate(RequestModel):
    """Partial update; only the fields that are set are sent."""

    name: Optional[str] = Field(None, min_length=1)
    phone: Optional[str] = None

    @field_validator("phone")
    @classmethod
    def _check_phone(cls, value: Optional[str]) -> Optional[str]:
        return validate_phone(value)


class CustomerFilter(RequestModel):
    page: Optional[int] = Field(None, ge=0)
    size: Optional[int] = Field(None, ge=1)

    def to_query(self) -> Dict[str, Any]:
        return self.to_payload()


class Customer(MonnifyModel):
    email: str
    name: Optional[str] = None
    phone: Optional[str] = None
    customer_id: Optional[str] = Field(None, alias="id")
    created_on: Optional[str] = None


__all__ = [
    "Customer",
    "CustomerFilter",
    "CustomerRequest",
    "CustomerUpdate",
    "validate_phone",
]

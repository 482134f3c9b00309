"""Bank directory and account-name lookup models."""

from __future__ import annotations

from typing import Optional

from monnify.schemas.common import MonnifyModel


class Bank(MonnifyModel):
    name: str
    code: str
    ussd_template: Optional[str] = None
    base_ussd_code: Optional[str] = None
    transfer_ussd_template: Optional[str] = None


class AccountValidation(MonnifyModel):
    account_number: str
    account_name: Optional[str] = None
    bank_code: Optional[str] = None


__all__ = ["AccountValidation", "Bank"]

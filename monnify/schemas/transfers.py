"""Pydantic models for disbursement (transfer) endpoints."""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, FrozenSet, List, Literal, Optional

from pydantic import Field, model_validator

from monnify.core.errors import ValidationError
from monnify.schemas.common import MonnifyModel, RequestModel

MAX_BULK_TRANSACTIONS = 800


class TransferStatus(str, Enum):
    PENDING = "PENDING"
    AWAITING_PROCESSING = "AWAITING_PROCESSING"
    IN_PROGRESS = "IN_PROGRESS"
    PENDING_AUTHORIZATION = "PENDING_AUTHORIZATION"
    OTP_EMAIL_DISPATCH_FAILED = "OTP_EMAIL_DISPATCH_FAILED"
    SUCCESS = "SUCCESS"
    COMPLETED = "COMPLETED"
    REVERSED = "REVERSED"
    FAILED = "FAILED"
    EXPIRED = "EXPIRED"

    @classmethod
    def pending_statuses(cls) -> FrozenSet["TransferStatus"]:
        return frozenset(
            {cls.PENDING, cls.PENDING_AUTHORIZATION, cls.AWAITING_PROCESSING, cls.IN_PROGRESS}
        )

    @classmethod
    def successful_statuses(cls) -> FrozenSet["TransferStatus"]:
        return frozenset({cls.SUCCESS, cls.COMPLETED})

    @classmethod
    def failed_statuses(cls) -> FrozenSet["TransferStatus"]:
        return frozenset(
            {cls.OTP_EMAIL_DISPATCH_FAILED, cls.REVERSED, cls.FAILED, cls.EXPIRED}
        )

    @property
    def is_pending(self) -> bool:
        return self in self.pending_statuses()

    @property
    def is_successful(self) -> bool:
        return self in self.successful_statuses()

    @property
    def is_failed(self) -> bool:
        return self in self.failed_statuses()


class _HasTransferStatus:
    """Status helpers for models carrying a raw ``status`` string."""

    status: str

    @property
    def transfer_status(self) -> Optional[TransferStatus]:
        try:
            return TransferStatus(self.status)
        except ValueError:
            return None

    @property
    def is_successful(self) -> bool:
        status = self.transfer_status
        return status is not None and status.is_successful

    @property
    def is_pending(self) -> bool:
        status = self.transfer_status
        return status is not None and status.is_pending

    @property
    def is_failed(self) -> bool:
        status = self.transfer_status
        return status is not None and status.is_failed


# Requests


class BulkTransferItem(RequestModel):
    """One transfer inside a batch; the batch carries the source account."""

    amount: float = Field(..., gt=0)
    reference: str = Field(..., min_length=1)
    narration: str = Field(..., min_length=1)
    destination_bank_code: str = Field(..., min_length=1)
    destination_account_number: str = Field(..., min_length=1)
    currency: str = "NGN"
    beneficiary_email: Optional[str] = None
    beneficiary_phone: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None


class TransferRequest(BulkTransferItem):
    """
    A single transfer.

    When ``source_account_number`` is omitted the service falls back to the
    configured wallet account.
    """

    source_account_number: Optional[str] = None
    async_: bool = Field(False, alias="async")


class BulkTransferRequest(RequestModel):
    title: str = Field(..., min_length=1)
    batch_reference: str = Field(..., min_length=1)
    narration: str = Field(..., min_length=1)
    source_account_number: str = Field(..., min_length=1)
    transaction_list: List[BulkTransferItem]
    currency: str = "NGN"
    on_validation_failure: Literal["CONTINUE", "BREAK"] = "CONTINUE"
    notification_interval: int = 25

    @model_validator(mode="after")
    def _check_batch(self) -> "BulkTransferRequest":
        if not self.transaction_list:
            raise ValidationError("Transaction list cannot be empty", "transactionList")
        if len(self.transaction_list) > MAX_BULK_TRANSACTIONS:
            raise ValidationError(
                f"A batch cannot hold more than {MAX_BULK_TRANSACTIONS} transactions",
                "transactionList",
            )
        interval = self.notification_interval
        if interval % 25 or interval < 25 or interval > 100:
            raise ValidationError(
                "Must be a multiple of 25 between 25 and 100",
                "notificationInterval",
            )
        return self


class TransferAuthorization(RequestModel):
    reference: str = Field(..., min_length=1)
    authorization_code: str = Field(..., min_length=1)


class BulkTransferAuthorization(TransferAuthorization):
    """Authorizes every transfer of a batch; ``reference`` is the batch reference."""


class TransferFilter(RequestModel):
    page: Optional[int] = Field(None, ge=0)
    size: Optional[int] = Field(None, ge=1)
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    transaction_reference: Optional[str] = None
    source_account_number: Optional[str] = None
    amount_from: Optional[float] = None
    amount_to: Optional[float] = None

    def to_query(self) -> Dict[str, Any]:
        return self.to_payload()


# Responses


class InitiatedTransfer(_HasTransferStatus, MonnifyModel):
    amount: float
    reference: str
    status: str
    date_created: Optional[str] = None
    total_fee: float = 0.0
    session_id: Optional[str] = None
    destination_account_name: Optional[str] = None
    destination_bank_name: Optional[str] = None
    destination_account_number: Optional[str] = None
    destination_bank_code: Optional[str] = None
    comment: Optional[str] = None

    @property
    def is_pending_authorization(self) -> bool:
        return self.status == TransferStatus.PENDING_AUTHORIZATION.value


class AuthorizedTransfer(_HasTransferStatus, MonnifyModel):
    amount: float
    reference: str
    status: str
    date_created: Optional[str] = None


class InitiatedBulkTransfer(MonnifyModel):
    total_amount: float
    total_fee: float = 0.0
    batch_reference: str
    batch_status: str
    total_transactions_count: int = 0
    date_created: Optional[str] = None

    @property
    def is_completed(self) -> bool:
        return self.batch_status == TransferStatus.COMPLETED.value

    @property
    def is_pending_authorization(self) -> bool:
        return self.batch_status == TransferStatus.PENDING_AUTHORIZATION.value

    @property
    def net_amount(self) -> float:
        return self.total_amount - self.total_fee


class BulkTransferDetails(InitiatedBulkTransfer):
    transaction_batch_reference: Optional[str] = None


class TransferDetails(_HasTransferStatus, MonnifyModel):
    amount: float
    reference: str
    status: str
    narration: Optional[str] = None
    currency: Optional[str] = None
    fee: float = 0.0
    two_fa_enabled: bool = False
    transaction_description: Optional[str] = None
    transaction_reference: Optional[str] = None
    destination_bank_code: Optional[str] = None
    source_account_number: Optional[str] = None
    destination_account_number: Optional[str] = None
    destination_account_name: Optional[str] = None
    destination_bank_name: Optional[str] = None
    created_on: Optional[str] = None

    @property
    def net_amount(self) -> float:
        return self.amount - self.fee


class OtpResent(MonnifyModel):
    message: str


class WalletBalance(MonnifyModel):
    available_balance: float
    ledger_balance: float

    def has_sufficient_balance(self, amount: float) -> bool:
        return self.available_balance >= amount

    @property
    def pending_amount(self) -> float:
        return self.ledger_balance - self.available_balance

    @property
    def has_pending_transactions(self) -> bool:
        return self.pending_amount > 0

    @property
    def available_percentage(self) -> float:
        if self.ledger_balance == 0:
            return 0.0
        return self.available_balance / self.ledger_balance * 100


__all__ = [
    "AuthorizedTransfer",
    "BulkTransferAuthorization",
    "BulkTransferDetails",
    "BulkTransferItem",
    "BulkTransferRequest",
    "InitiatedBulkTransfer",
    "InitiatedTransfer",
    "MAX_BULK_TRANSACTIONS",
    "OtpResent",
    "TransferAuthorization",
    "TransferDetails",
    "TransferFilter",
    "TransferRequest",
    "TransferStatus",
    "WalletBalance",
]

"""Public schema exports."""

from .banks import AccountValidation, Bank
from .common import (
    ListFilter,
    MonnifyModel,
    MonnifyResponse,
    Page,
    Pageable,
    RequestModel,
    Sort,
)
from .customers import Customer, CustomerFilter, CustomerRequest, CustomerUpdate
from .payments import (
    InitializedPayment,
    PaymentFilter,
    PaymentRequest,
    PaymentStatusDetails,
    TransactionSummary,
)
from .refunds import RefundDetails, RefundFilter, RefundRequest
from .settlements import SettlementFilter
from .transfers import (
    AuthorizedTransfer,
    BulkTransferAuthorization,
    BulkTransferDetails,
    BulkTransferItem,
    BulkTransferRequest,
    InitiatedBulkTransfer,
    InitiatedTransfer,
    OtpResent,
    TransferAuthorization,
    TransferDetails,
    TransferFilter,
    TransferRequest,
    TransferStatus,
    WalletBalance,
)
from .webhooks import WebhookEvent, WebhookEventHandler

__all__ = [
    "AccountValidation",
    "Bank",
    "Customer",
    "CustomerFilter",
    "CustomerRequest",
    "CustomerUpdate",
    "ListFilter",
    "MonnifyModel",
    "MonnifyResponse",
    "Page",
    "Pageable",
    "RequestModel",
    "Sort",
    "InitializedPayment",
    "PaymentFilter",
    "PaymentRequest",
    "PaymentStatusDetails",
    "TransactionSummary",
    "RefundDetails",
    "RefundFilter",
    "RefundRequest",
    "SettlementFilter",
    "AuthorizedTransfer",
    "BulkTransferAuthorization",
    "BulkTransferDetails",
    "BulkTransferItem",
    "BulkTransferRequest",
    "InitiatedBulkTransfer",
    "InitiatedTransfer",
    "OtpResent",
    "TransferAuthorization",
    "TransferDetails",
    "TransferFilter",
    "TransferRequest",
    "TransferStatus",
    "WalletBalance",
    "WebhookEvent",
    "WebhookEventHandler",
]

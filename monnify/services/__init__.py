"""Service layer exports."""

from .banks import BankService
from .customers import CustomerService
from .payments import PaymentService
from .refunds import RefundService
from .settlements import SettlementService
from .token_cipher import TokenCipher
from .transfers import TransferService
from .webhooks import WebhookService

__all__ = [
    "BankService",
    "CustomerService",
    "PaymentService",
    "RefundService",
    "SettlementService",
    "TokenCipher",
    "TransferService",
    "WebhookService",
]

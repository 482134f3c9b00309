"""
Webhook notification payloads.

Monnify posts ``{"eventType": ..., "eventData": {...}}``; the handler protocol
lives here so settings can validate registered handlers without importing the
service layer.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Protocol, runtime_checkable

from pydantic import ConfigDict, Field

from monnify.schemas.common import MonnifyModel

SUCCESSFUL_TRANSACTION = "SUCCESSFUL_TRANSACTION"
FAILED_TRANSACTION = "FAILED_TRANSACTION"
PENDING_TRANSACTION = "PENDING_TRANSACTION"


class WebhookEvent(MonnifyModel):
    model_config = ConfigDict(extra="allow")

    event_type: Optional[str] = None
    event_data: Dict[str, Any] = Field(default_factory=dict)

    @property
    def transaction_reference(self) -> Optional[str]:
        return self.event_data.get("transactionReference")

    @property
    def payment_reference(self) -> Optional[str]:
        return self.event_data.get("paymentReference")

    @property
    def payment_status(self) -> Optional[str]:
        return self.event_data.get("paymentStatus")

    @property
    def is_successful_payment(self) -> bool:
        return self.event_type == SUCCESSFUL_TRANSACTION and self.payment_status == "PAID"

    @property
    def is_failed_payment(self) -> bool:
        return self.event_type == FAILED_TRANSACTION and self.payment_status == "FAILED"

    @property
    def is_pending_payment(self) -> bool:
        return self.event_type == PENDING_TRANSACTION and self.payment_status == "PENDING"


@runtime_checkable
class WebhookEventHandler(Protocol):
    """Anything with a ``handle(event)`` method can receive webhook events."""

    def handle(self, event: WebhookEvent) -> Any:
        ...


__all__ = [
    "FAILED_TRANSACTION",
    "PENDING_TRANSACTION",
    "SUCCESSFUL_TRANSACTION",
    "WebhookEvent",
    "WebhookEventHandler",
]

"""Collections: initialize, verify and list payments."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from monnify.schemas.common import MonnifyResponse, Page, require_value
from monnify.schemas.payments import (
    InitializedPayment,
    PaymentFilter,
    PaymentRequest,
    PaymentStatusDetails,
    TransactionSummary,
)

if TYPE_CHECKING:
    from monnify.clients.http import HttpClient

logger = logging.getLogger(__name__)

TRANSACTIONS_PATH = "/api/v1/merchant/transactions"


class PaymentService:
    """Wrap the merchant transaction endpoints."""

    def __init__(self, client: "HttpClient") -> None:
        self._client = client

    def initialize(self, request: PaymentRequest) -> MonnifyResponse[InitializedPayment]:
        """Start a checkout; the contract code defaults to the configured one."""
        payload = request.to_payload()
        payload.setdefault("contractCode", self._client.settings.contract_code)
        logger.info("Initializing payment %s", request.payment_reference)
        data = self._client.post(f"{TRANSACTIONS_PATH}/init-transaction", payload)
        return MonnifyResponse[InitializedPayment].from_payload(data)

    def verify(self, payment_reference: str) -> MonnifyResponse[PaymentStatusDetails]:
        reference = require_value(payment_reference, "paymentReference", "Payment reference")
        data = self._client.get(
            f"{TRANSACTIONS_PATH}/query", query={"paymentReference": reference}
        )
        return MonnifyResponse[PaymentStatusDetails].from_payload(data)

    def get_all(
        self, filters: Optional[PaymentFilter] = None
    ) -> MonnifyResponse[Page[TransactionSummary]]:
        query = filters.to_query() if filters else None
        data = self._client.get(TRANSACTIONS_PATH, query=query)
        return MonnifyResponse[Page[TransactionSummary]].from_payload(data)


__all__ = ["PaymentService"]

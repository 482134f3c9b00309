"""Refunds against completed collections."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from monnify.schemas.common import MonnifyResponse, Page, require_value
from monnify.schemas.refunds import RefundDetails, RefundFilter, RefundRequest

if TYPE_CHECKING:
    from monnify.clients.http import HttpClient

logger = logging.getLogger(__name__)

REFUND_PATH = "/api/v1/merchant/transactions/refund"


class RefundService:
    def __init__(self, client: "HttpClient") -> None:
        self._client = client

    def initiate(self, request: RefundRequest) -> MonnifyResponse[RefundDetails]:
        logger.info(
            "Requesting refund %s for %s",
            request.refund_reference,
            request.transaction_reference,
        )
        data = self._client.post(REFUND_PATH, request.to_payload())
        return MonnifyResponse[RefundDetails].from_payload(data)

    def get_status(self, refund_reference: str) -> MonnifyResponse[RefundDetails]:
        reference = require_value(refund_reference, "refundReference", "Refund reference")
        data = self._client.get(REFUND_PATH, query={"refundReference": reference})
        return MonnifyResponse[RefundDetails].from_payload(data)

    def get_all(
        self, filters: Optional[RefundFilter] = None
    ) -> MonnifyResponse[Page[RefundDetails]]:
        query = filters.to_query() if filters else None
        data = self._client.get(REFUND_PATH, query=query)
        return MonnifyResponse[Page[RefundDetails]].from_payload(data)


__all__ = ["RefundService"]

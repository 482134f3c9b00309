"""
Disbursements: single and bulk transfers, OTP authorization and wallet lookups.

All endpoints live under ``/api/v2/disbursements``. Transfers that omit a source
account are debited from the configured wallet.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Dict, Optional

from monnify.core.errors import ValidationError
from monnify.schemas.common import MonnifyResponse, Page, require_value
from monnify.schemas.transfers import (
    AuthorizedTransfer,
    BulkTransferAuthorization,
    BulkTransferDetails,
    BulkTransferRequest,
    InitiatedBulkTransfer,
    InitiatedTransfer,
    OtpResent,
    TransferAuthorization,
    TransferDetails,
    TransferFilter,
    TransferRequest,
    WalletBalance,
)

if TYPE_CHECKING:
    from monnify.clients.http import HttpClient

logger = logging.getLogger(__name__)

DISBURSEMENTS_PATH = "/api/v2/disbursements"


class TransferService:
    """Wrap the v2 disbursement endpoints."""

    def __init__(self, client: "HttpClient") -> None:
        self._client = client

    def initiate_single(self, request: TransferRequest) -> MonnifyResponse[InitiatedTransfer]:
        payload = request.to_payload()
        if not payload.get("sourceAccountNumber"):
            payload["sourceAccountNumber"] = self._wallet_account(None)
        logger.info("Initiating transfer %s", request.reference)
        data = self._client.post(f"{DISBURSEMENTS_PATH}/single", payload)
        return MonnifyResponse[InitiatedTransfer].from_payload(data)

    def initiate_bulk(
        self, request: BulkTransferRequest
    ) -> MonnifyResponse[InitiatedBulkTransfer]:
        logger.info(
            "Initiating bulk transfer %s with %d items",
            request.batch_reference,
            len(request.transaction_list),
        )
        data = self._client.post(f"{DISBURSEMENTS_PATH}/batch", request.to_payload())
        return MonnifyResponse[InitiatedBulkTransfer].from_payload(data)

    def authorize_single(
        self, authorization: TransferAuthorization
    ) -> MonnifyResponse[AuthorizedTransfer]:
        data = self._client.post(
            f"{DISBURSEMENTS_PATH}/single/validate-otp", authorization.to_payload()
        )
        return MonnifyResponse[AuthorizedTransfer].from_payload(data)

    def authorize_bulk(
        self, authorization: BulkTransferAuthorization
    ) -> MonnifyResponse[InitiatedBulkTransfer]:
        data = self._client.post(
            f"{DISBURSEMENTS_PATH}/batch/validate-otp", authorization.to_payload()
        )
        return MonnifyResponse[InitiatedBulkTransfer].from_payload(data)

    def resend_otp(self, reference: str) -> MonnifyResponse[OtpResent]:
        reference = require_value(reference, "reference", "Transfer reference")
        data = self._client.post(
            f"{DISBURSEMENTS_PATH}/single/resend-otp", {"reference": reference}
        )
        return MonnifyResponse[OtpResent].from_payload(data)

    def get_single_transfer_status(self, reference: str) -> MonnifyResponse[TransferDetails]:
        reference = require_value(reference, "reference", "Transfer reference")
        data = self._client.get(
            f"{DISBURSEMENTS_PATH}/single/summary", query={"reference": reference}
        )
        return MonnifyResponse[TransferDetails].from_payload(data)

    def list_single_transfers(
        self, filters: Optional[TransferFilter] = None
    ) -> MonnifyResponse[Page[TransferDetails]]:
        data = self._client.get(
            f"{DISBURSEMENTS_PATH}/single/transactions", query=self._query(filters)
        )
        return MonnifyResponse[Page[TransferDetails]].from_payload(data)

    def list_bulk_transfers(
        self, filters: Optional[TransferFilter] = None
    ) -> MonnifyResponse[Page[BulkTransferDetails]]:
        data = self._client.get(f"{DISBURSEMENTS_PATH}/bulk", query=self._query(filters))
        return MonnifyResponse[Page[BulkTransferDetails]].from_payload(data)

    def get_bulk_transfer_transactions(
        self, batch_reference: str, filters: Optional[TransferFilter] = None
    ) -> MonnifyResponse[Page[TransferDetails]]:
        reference = require_value(batch_reference, "batchReference", "Batch reference")
        data = self._client.get(
            f"{DISBURSEMENTS_PATH}/bulk/{reference}/transactions",
            query=self._query(filters),
        )
        return MonnifyResponse[Page[TransferDetails]].from_payload(data)

    def get_bulk_transfer_summary(
        self, batch_reference: str
    ) -> MonnifyResponse[BulkTransferDetails]:
        reference = require_value(batch_reference, "batchReference", "Batch reference")
        data = self._client.get(
            f"{DISBURSEMENTS_PATH}/batch/summary", query={"reference": reference}
        )
        return MonnifyResponse[BulkTransferDetails].from_payload(data)

    def search_disbursements(
        self, filters: TransferFilter
    ) -> MonnifyResponse[Page[TransferDetails]]:
        query = self._query(filters)
        if not query.get("sourceAccountNumber"):
            query["sourceAccountNumber"] = self._wallet_account(None)
        data = self._client.get(f"{DISBURSEMENTS_PATH}/search-transactions", query=query)
        return MonnifyResponse[Page[TransferDetails]].from_payload(data)

    def get_wallet_balance(
        self, account_number: Optional[str] = None
    ) -> MonnifyResponse[WalletBalance]:
        account = self._wallet_account(account_number)
        data = self._client.get(
            f"{DISBURSEMENTS_PATH}/wallet-balance", query={"accountNumber": account}
        )
        return MonnifyResponse[WalletBalance].from_payload(data)

    def _wallet_account(self, account_number: Optional[str]) -> str:
        account = account_number or self._client.settings.wallet_account_number
        if not account:
            raise ValidationError(
                "Account number is required when no wallet account is configured",
                "accountNumber",
            )
        return account

    @staticmethod
    def _query(filters: Optional[TransferFilter]) -> Dict[str, Any]:
        return filters.to_query() if filters else {}


__all__ = ["TransferService"]

"""Read-only access to settlement accounts and payouts."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional

from monnify.schemas.common import MonnifyResponse
from monnify.schemas.settlements import SettlementFilter

if TYPE_CHECKING:
    from monnify.clients.http import HttpClient

SETTLEMENTS_PATH = "/api/v1/merchant/settlements"


class SettlementService:
    """Settlement bodies vary by merchant setup and are returned as plain mappings."""

    def __init__(self, client: "HttpClient") -> None:
        self._client = client

    def get_accounts(self) -> MonnifyResponse[List[Dict[str, Any]]]:
        data = self._client.get(SETTLEMENTS_PATH)
        return MonnifyResponse[List[Dict[str, Any]]].from_payload(data)

    def get_transactions(
        self, filters: Optional[SettlementFilter] = None
    ) -> MonnifyResponse[Dict[str, Any]]:
        data = self._client.get(f"{SETTLEMENTS_PATH}/transactions", query=self._query(filters))
        return MonnifyResponse[Dict[str, Any]].from_payload(data)

    def get_summary(
        self, filters: Optional[SettlementFilter] = None
    ) -> MonnifyResponse[Dict[str, Any]]:
        query = self._query(filters)
        # The summary endpoint is not paginated.
        query.pop("page", None)
        query.pop("size", None)
        data = self._client.get(f"{SETTLEMENTS_PATH}/summary", query=query)
        return MonnifyResponse[Dict[str, Any]].from_payload(data)

    @staticmethod
    def _query(filters: Optional[SettlementFilter]) -> Dict[str, Any]:
        return filters.to_query() if filters else {}


__all__ = ["SettlementService"]

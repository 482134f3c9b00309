"""Customer records kept by Monnify for reserved accounts and invoices."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

from monnify.core.errors import MonnifyException
from monnify.schemas.common import MonnifyResponse, Page, require_value
from monnify.schemas.customers import Customer, CustomerFilter, CustomerRequest, CustomerUpdate

if TYPE_CHECKING:
    from monnify.clients.http import HttpClient

CUSTOMERS_PATH = "/api/v1/customers"


class CustomerService:
    def __init__(self, client: "HttpClient") -> None:
        self._client = client

    def create(self, request: CustomerRequest) -> MonnifyResponse[Customer]:
        data = self._client.post(CUSTOMERS_PATH, request.to_payload())
        return MonnifyResponse[Customer].from_payload(data)

    def get_by_email(self, email: str) -> MonnifyResponse[Any]:
        address = require_value(email, "email", "Email")
        data = self._client.get(CUSTOMERS_PATH, query={"email": address})
        return MonnifyResponse[Any].from_payload(data)

    def get_by_id(self, customer_id: str) -> MonnifyResponse[Customer]:
        identifier = require_value(customer_id, "customerId", "Customer ID")
        data = self._client.get(f"{CUSTOMERS_PATH}/{identifier}")
        return MonnifyResponse[Customer].from_payload(data)

    def update(self, customer_id: str, update: CustomerUpdate) -> MonnifyResponse[Customer]:
        identifier = require_value(customer_id, "customerId", "Customer ID")
        data = self._client.put(f"{CUSTOMERS_PATH}/{identifier}", update.to_payload())
        return MonnifyResponse[Customer].from_payload(data)

    def delete(self, customer_id: str) -> MonnifyResponse[Any]:
        identifier = require_value(customer_id, "customerId", "Customer ID")
        data = self._client.delete(f"{CUSTOMERS_PATH}/{identifier}")
        return MonnifyResponse[Any].from_payload(data)

    def get_all(
        self, filters: Optional[CustomerFilter] = None
    ) -> MonnifyResponse[Page[Customer]]:
        query = filters.to_query() if filters else None
        data = self._client.get(CUSTOMERS_PATH, query=query)
        return MonnifyResponse[Page[Customer]].from_payload(data)

    def exists(self, email: str) -> bool:
        """Whether Monnify returns a non-empty record for ``email``."""
        try:
            result = self.get_by_email(email)
        except MonnifyException:
            return False
        return result.is_successful and bool(result.response_body)


__all__ = ["CustomerService"]

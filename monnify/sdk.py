"""
Top-level entry point wiring settings, the token store, the HTTP client and the
service façade together.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from monnify.clients.http import HttpClient
from monnify.clients.token_store import TokenStore
from monnify.core.config import MonnifySettings, get_settings
from monnify.core.logging import configure_logging
from monnify.services import (
    BankService,
    CustomerService,
    PaymentService,
    RefundService,
    SettlementService,
    TransferService,
    WebhookService,
)

logger = logging.getLogger(__name__)


class Monnify:
    """
    One configured connection to the Monnify API.

    Instances are safe to share between threads. The token store is built from
    the settings on first authenticated request unless one is supplied.
    """

    def __init__(
        self,
        settings: MonnifySettings,
        *,
        token_store: Optional[TokenStore] = None,
        http_client: Optional[httpx.Client] = None,
    ) -> None:
        self._settings = settings
        self._client = HttpClient(settings, token_store, http_client=http_client)

        self.payments = PaymentService(self._client)
        self.transfers = TransferService(self._client)
        self.refunds = RefundService(self._client)
        self.settlements = SettlementService(self._client)
        self.banks = BankService(self._client)
        self.customers = CustomerService(self._client)
        self.webhooks = WebhookService(settings)
        logger.debug("Monnify SDK ready for %s", settings.base_url)

    @classmethod
    def from_env(cls, **kwargs: Any) -> "Monnify":
        """Build from ``MONNIFY_*`` environment variables (and ``.env``)."""
        settings = get_settings()
        configure_logging(settings.log_level)
        return cls(settings, **kwargs)

    @property
    def settings(self) -> MonnifySettings:
        return self._settings

    @property
    def client(self) -> HttpClient:
        return self._client

    @property
    def token_store(self) -> TokenStore:
        return self._client.token_store

    @property
    def is_live(self) -> bool:
        return self._settings.is_live

    @property
    def is_sandbox(self) -> bool:
        return self._settings.is_sandbox

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "Monnify":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


__all__ = ["Monnify"]

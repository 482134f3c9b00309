"""
Verify, parse and dispatch Monnify webhook notifications.

Monnify signs each notification with an HMAC-SHA512 of the raw request body,
keyed by the merchant secret key, and sends the hex digest in the
``monnify-signature`` header.
"""

from __future__ import annotations

import hashlib
import hmac
import json
import logging
from typing import Union

from pydantic import ValidationError as PydanticValidationError

from monnify.core.config import MonnifySettings
from monnify.core.errors import MonnifyException, ValidationError
from monnify.schemas.webhooks import WebhookEvent

logger = logging.getLogger(__name__)

SIGNATURE_HEADER = "monnify-signature"

RawBody = Union[str, bytes]


def _as_bytes(raw_body: RawBody) -> bytes:
    return raw_body.encode("utf-8") if isinstance(raw_body, str) else raw_body


def compute_signature(raw_body: RawBody, secret_key: str) -> str:
    return hmac.new(
        secret_key.encode("utf-8"), _as_bytes(raw_body), hashlib.sha512
    ).hexdigest()


class WebhookService:
    """Check signatures and route events to the handlers registered in settings."""

    def __init__(self, settings: MonnifySettings) -> None:
        self._settings = settings

    def verify(self, raw_body: RawBody, signature: str) -> bool:
        if not raw_body:
            raise ValidationError("Webhook data is required", "body")
        if not signature:
            raise ValidationError("Webhook signature is required", "signature")
        expected = compute_signature(raw_body, self._settings.secret_key)
        return hmac.compare_digest(expected, signature.strip().lower())

    def parse(self, raw_body: RawBody) -> WebhookEvent:
        if not raw_body:
            raise ValidationError("Webhook data is required", "body")
        try:
            data = json.loads(raw_body)
        except ValueError as exc:
            raise ValidationError("Invalid JSON in webhook data", "body") from exc
        if not isinstance(data, dict):
            raise ValidationError("Webhook payload must be a JSON object", "body")
        try:
            return WebhookEvent.model_validate(data)
        except PydanticValidationError as exc:
            raise ValidationError("Malformed webhook payload", "body") from exc

    def verify_and_parse(self, raw_body: RawBody, signature: str) -> WebhookEvent:
        if not self.verify(raw_body, signature):
            logger.warning("Rejected webhook with invalid signature")
            raise MonnifyException("Invalid webhook signature", 400, "INVALID_SIGNATURE")
        return self.parse(raw_body)

    def dispatch(self, event: WebhookEvent) -> bool:
        """Run the handler registered for the event type; ``False`` if none is."""
        handler = self._settings.webhook_handlers.get(event.event_type or "")
        if handler is None:
            logger.info("No webhook handler registered for %s", event.event_type)
            return False
        logger.info(
            "Dispatching %s webhook for %s", event.event_type, event.transaction_reference
        )
        handler.handle(event)
        return True


__all__ = ["SIGNATURE_HEADER", "WebhookService", "compute_signature"]

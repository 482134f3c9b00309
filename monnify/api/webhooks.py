"""
FastAPI route receiving Monnify webhook notifications.
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from monnify.core.errors import MonnifyException
from monnify.dependencies import get_monnify
from monnify.sdk import Monnify
from monnify.services.webhooks import SIGNATURE_HEADER

logger = logging.getLogger(__name__)

WEBHOOK_PATH = "/monnify/webhook"


def build_webhook_router(path: str = WEBHOOK_PATH) -> APIRouter:
    """Router verifying the signature and dispatching to registered handlers."""
    router = APIRouter()

    @router.post(path, status_code=HTTPStatus.OK)
    async def receive_monnify_webhook(
        request: Request,
        monnify: Annotated[Monnify, Depends(get_monnify)],
    ) -> Any:
        raw_body = await request.body()
        signature = request.headers.get(SIGNATURE_HEADER, "")

        try:
            event = monnify.webhooks.verify_and_parse(raw_body, signature)
        except MonnifyException as exc:
            if exc.error_code == "INVALID_SIGNATURE":
                return JSONResponse(
                    status_code=HTTPStatus.BAD_REQUEST,
                    content={"error": "Invalid signature"},
                )
            logger.warning("Rejected webhook: %s", exc.message)
            return JSONResponse(
                status_code=HTTPStatus.BAD_REQUEST, content={"error": exc.message}
            )

        try:
            handled = await run_in_threadpool(monnify.webhooks.dispatch, event)
        except Exception:
            logger.exception("Webhook handler for %s raised", event.event_type)
            return JSONResponse(
                status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
                content={"error": "Webhook processing failed"},
            )

        return {"status": "processed" if handled else "ignored"}

    return router


__all__ = ["WEBHOOK_PATH", "build_webhook_router"]

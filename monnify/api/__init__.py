"""FastAPI routers for receiving Monnify callbacks."""

from .webhooks import WEBHOOK_PATH, build_webhook_router

__all__ = ["WEBHOOK_PATH", "build_webhook_router"]

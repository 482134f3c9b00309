"""
FastAPI application exposing the Monnify webhook receiver.
"""

from __future__ import annotations

from fastapi import FastAPI

from monnify import __version__
from monnify.api.webhooks import build_webhook_router


def create_app() -> FastAPI:
    """Factory for the FastAPI application."""
    app = FastAPI(
        title="Monnify webhook receiver",
        version=__version__,
        description="Verifies and dispatches Monnify payment notifications.",
    )
    app.include_router(build_webhook_router())

    @app.get("/health")
    async def healthcheck() -> dict:
        """Simple health endpoint for monitoring."""
        return {"status": "ok"}

    return app


app = create_app()

__all__ = ["app", "create_app"]

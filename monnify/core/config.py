"""
SDK configuration models and helpers.

Settings are validated once at construction and are read-only afterwards; the
HTTP client, token store and services all share the same instance.
"""

from __future__ import annotations

import hashlib
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Literal, Optional

from pydantic import Field, ValidationError as PydanticValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from monnify.core.errors import ConfigurationError
from monnify.schemas.webhooks import WebhookEventHandler

LIVE_BASE_URL = "https://api.monnify.com"
SANDBOX_BASE_URL = "https://sandbox.monnify.com"

_ENVIRONMENTS = ("sandbox", "live")


def _default_storage_dir() -> Path:
    return Path.home() / ".cache" / "monnify"


def _describe(exc: PydanticValidationError) -> str:
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ())) or "settings"
        message = error.get("msg", "invalid value")
        if message.startswith("Value error, "):
            message = message[len("Value error, ") :]
        problems.append(f"{location}: {message}")
    return "; ".join(problems)


class MonnifySettings(BaseSettings):
    """Credentials, environment and transport options for the Monnify API."""

    model_config = SettingsConfigDict(
        env_prefix="MONNIFY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
        arbitrary_types_allowed=True,
    )

    secret_key: str = Field(..., description="Merchant secret key.", repr=False)
    api_key: str = Field(..., description="Merchant API (public) key.")
    contract_code: str = Field(..., description="Merchant contract code.")
    environment: str = Field("sandbox", description="Either 'sandbox' or 'live'.")
    timeout: int = Field(30, description="Per-request timeout in seconds.")
    verify_ssl: bool = Field(True, description="Verify TLS certificates.")
    wallet_account_number: Optional[str] = Field(
        None,
        description="Default wallet used for disbursements and balance lookups.",
    )
    storage_dir: Path = Field(
        default_factory=_default_storage_dir,
        description="Directory holding the shared token cache.",
    )
    token_backend: Literal["auto", "sqlite", "file"] = Field(
        "auto",
        description="Token cache backend; 'auto' prefers SQLite when available.",
    )
    token_encryption_secret: Optional[str] = Field(
        None,
        description="Optional secret used to encrypt cached tokens at rest.",
        repr=False,
    )
    log_level: str = Field("INFO")
    webhook_handlers: Dict[str, Any] = Field(
        default_factory=dict,
        description="Mapping of webhook event type to handler.",
        exclude=True,
        repr=False,
    )

    def __init__(self, **values: Any) -> None:
        try:
            super().__init__(**values)
        except PydanticValidationError as exc:
            raise ConfigurationError(_describe(exc)) from exc

    @field_validator("secret_key", "api_key", "contract_code", "environment", mode="before")
    @classmethod
    def _require_non_empty(cls, value: Any) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValueError("must not be empty")
        return value.strip() if isinstance(value, str) else value

    @field_validator("environment")
    @classmethod
    def _check_environment(cls, value: str) -> str:
        if value not in _ENVIRONMENTS:
            raise ValueError('Environment must be either "sandbox" or "live"')
        return value

    @field_validator("timeout")
    @classmethod
    def _check_timeout(cls, value: int) -> int:
        if value < 1:
            raise ValueError("Timeout must be at least 1 second")
        return value

    @field_validator("webhook_handlers")
    @classmethod
    def _check_handlers(cls, value: Dict[str, Any]) -> Dict[str, Any]:
        for event_type, handler in value.items():
            if not event_type:
                raise ValueError("webhook event names must not be empty")
            if not isinstance(handler, WebhookEventHandler):
                raise ValueError(
                    f"handler for '{event_type}' must define a handle(event) method"
                )
        return value

    @property
    def base_url(self) -> str:
        return LIVE_BASE_URL if self.environment == "live" else SANDBOX_BASE_URL

    @property
    def is_live(self) -> bool:
        return self.environment == "live"

    @property
    def is_sandbox(self) -> bool:
        return self.environment == "sandbox"

    @property
    def token_namespace(self) -> str:
        """Short digest separating caches of different credential sets."""
        digest = hashlib.sha256(f"{self.environment}:{self.api_key}".encode("utf-8"))
        return digest.hexdigest()[:16]


@lru_cache()
def get_settings() -> MonnifySettings:
    """Return a cached settings object loaded from the environment."""
    return MonnifySettings()  # type: ignore[call-arg]


__all__ = [
    "LIVE_BASE_URL",
    "MonnifySettings",
    "SANDBOX_BASE_URL",
    "get_settings",
]

"""
Domain models for bearer-token caching.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError as PydanticValidationError

from monnify.core.errors import AuthenticationError

TOKEN_BUFFER_SECONDS = 60


class CachedToken(BaseModel):
    """Token record persisted by every token store backend."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    token: str = Field(..., min_length=1)
    expires_at: int = Field(..., alias="expiresAt", description="Expiry as epoch seconds.")

    def is_valid(self, now: float, buffer_seconds: int = TOKEN_BUFFER_SECONDS) -> bool:
        """A token is usable only until ``buffer_seconds`` before it really expires."""
        return now < self.expires_at - buffer_seconds

    @classmethod
    def from_json(cls, raw: str) -> Optional["CachedToken"]:
        """Parse a persisted record; empty or corrupt content means no record."""
        if not raw or not raw.strip():
            return None
        try:
            return cls.model_validate_json(raw)
        except PydanticValidationError:
            return None

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)


class TokenGrant(BaseModel):
    """Result of a credential refresh: a token and its lifetime in seconds."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    token: str
    expires_in: int = Field(..., alias="expiresIn")

    def to_cached(self, now: float) -> CachedToken:
        return CachedToken(token=self.token, expires_at=int(now) + self.expires_in)

    @classmethod
    def coerce(cls, value: Any) -> "TokenGrant":
        """
        Build a grant from a refresh callback result.

        Accepts a :class:`TokenGrant` or a mapping using either
        ``token``/``accessToken`` and ``expiresIn``/``expires_in`` keys.
        """
        if isinstance(value, TokenGrant):
            grant = value
        elif isinstance(value, Mapping):
            token = value.get("token", value.get("accessToken"))
            expires_in = value.get("expiresIn", value.get("expires_in"))
            try:
                grant = cls(token=token, expires_in=expires_in)
            except PydanticValidationError as exc:
                raise AuthenticationError(
                    f"Token refresh returned malformed data: {exc.error_count()} invalid field(s)"
                ) from exc
        else:
            raise AuthenticationError(
                f"Token refresh returned {type(value).__name__}, expected a token grant"
            )

        if not grant.token:
            raise AuthenticationError("Token refresh returned an empty token")
        if grant.expires_in <= 0:
            raise AuthenticationError("Token refresh returned a non-positive lifetime")
        return grant


__all__ = ["CachedToken", "TOKEN_BUFFER_SECONDS", "TokenGrant"]

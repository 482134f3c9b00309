"""Domain models."""

from .token import TOKEN_BUFFER_SECONDS, CachedToken, TokenGrant

__all__ = ["CachedToken", "TOKEN_BUFFER_SECONDS", "TokenGrant"]

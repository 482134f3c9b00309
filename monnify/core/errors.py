"""
Exception taxonomy shared by every layer of the SDK.

Callers branch on the exception type and on the ``code``/``error_code`` pair
carried by :class:`MonnifyException`; nothing in the SDK retries on its own.
"""

from __future__ import annotations

from typing import Optional


class MonnifyError(Exception):
    """Base exception for all Monnify SDK errors."""


class ConfigurationError(MonnifyError):
    """Raised when the SDK is constructed with invalid or missing settings."""


class ProtocolException(MonnifyError):
    """The response body is not a Monnify envelope (usually a routing problem)."""

    def __init__(self, status_code: int, message: str = "Unexpected Response Structure") -> None:
        self.status_code = status_code
        super().__init__(message)


class MonnifyException(MonnifyError):
    """Business-level or transport failure reported while talking to Monnify."""

    def __init__(
        self,
        message: str = "",
        code: int = 0,
        error_code: Optional[str] = None,
    ) -> None:
        self.message = message
        self.code = code
        self.error_code = error_code
        super().__init__(message)

    @property
    def is_authentication_error(self) -> bool:
        return self.error_code == "AUTH_FAILED" or self.code == 401

    @property
    def is_validation_error(self) -> bool:
        return self.error_code == "VALIDATION_ERROR" or self.code == 400

    @property
    def is_not_found_error(self) -> bool:
        return self.error_code == "NOT_FOUND" or self.code == 404

    @property
    def is_server_error(self) -> bool:
        return self.code >= 500

    @property
    def error_type(self) -> str:
        if self.is_authentication_error:
            return "authentication"
        if self.is_validation_error:
            return "validation"
        if self.is_not_found_error:
            return "not_found"
        if self.is_server_error:
            return "server"
        return "general"

    @property
    def formatted_message(self) -> str:
        if self.error_code:
            return f"[{self.error_code}] {self.message}"
        return self.message

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(message={self.message!r}, code={self.code}, "
            f"error_code={self.error_code!r})"
        )


class ValidationError(MonnifyException):
    """A request payload failed local checks before any network call."""

    def __init__(self, message: str, field: str) -> None:
        self.field = field
        self.reason = message
        super().__init__(f"Field '{field}': {message}", 400, "VALIDATION_ERROR")


class AuthenticationError(MonnifyException):
    """Obtaining or refreshing the bearer token failed."""

    def __init__(self, message: str, code: int = 0, error_code: str = "AUTH_FAILED") -> None:
        super().__init__(message, code, error_code)


class LockTimeoutError(MonnifyException):
    """Another caller held the token store's write lock for longer than allowed."""

    def __init__(self, message: str, error_code: str = "LOCK_TIMEOUT") -> None:
        super().__init__(message, 0, error_code)


__all__ = [
    "AuthenticationError",
    "ConfigurationError",
    "LockTimeoutError",
    "MonnifyError",
    "MonnifyException",
    "ProtocolException",
    "ValidationError",
]

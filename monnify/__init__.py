"""Python SDK for the Monnify payments API."""

from monnify.core.config import MonnifySettings, get_settings
from monnify.core.errors import (
    AuthenticationError,
    ConfigurationError,
    LockTimeoutError,
    MonnifyError,
    MonnifyException,
    ProtocolException,
    ValidationError,
)
from monnify.sdk import Monnify

__version__ = "0.1.0"

__all__ = [
    "AuthenticationError",
    "ConfigurationError",
    "LockTimeoutError",
    "Monnify",
    "MonnifyError",
    "MonnifyException",
    "MonnifySettings",
    "ProtocolException",
    "ValidationError",
    "__version__",
    "get_settings",
]

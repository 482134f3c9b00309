"""Expose the HTTP client and the token store factory.

The backends live in ``file_token_store`` (POSIX ``fcntl``) and
``sqlite_token_store`` and are imported only when the factory selects them.
"""

from .token_store import TokenStore, build_token_store, create_token_store, sqlite_available
from .http import HttpClient

__all__ = [
    "HttpClient",
    "TokenStore",
    "build_token_store",
    "create_token_store",
    "sqlite_available",
]

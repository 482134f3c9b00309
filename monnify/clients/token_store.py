"""
Token store interface and backend selection.

A token store hands out a currently-valid bearer token and guarantees that, for
every caller sharing the same backing file or database, at most one of them runs
the refresh callback at a time.
"""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Callable, Literal, Mapping, Optional, Union

from monnify.core.config import MonnifySettings
from monnify.core.errors import AuthenticationError, ConfigurationError, MonnifyError
from monnify.models.token import TOKEN_BUFFER_SECONDS, CachedToken, TokenGrant
from monnify.services.token_cipher import TokenCipher

logger = logging.getLogger(__name__)

RefreshCallback = Callable[[], Union[TokenGrant, Mapping[str, Any]]]
Clock = Callable[[], float]
Backend = Literal["auto", "sqlite", "file"]

SQLITE_DB_FILE = "auth-{namespace}.sqlite"
JSON_FILE = "auth-{namespace}.json"


class TokenStore(ABC):
    """Expiry-aware, single-flight cache for the API bearer token."""

    backend: str = ""

    def __init__(
        self,
        *,
        clock: Clock = time.time,
        cipher: Optional[TokenCipher] = None,
        buffer_seconds: int = TOKEN_BUFFER_SECONDS,
    ) -> None:
        self._clock = clock
        self._cipher = cipher
        self._buffer_seconds = buffer_seconds

    @abstractmethod
    def get_token(self, refresh: RefreshCallback) -> str:
        """Return a valid token, invoking ``refresh`` only when none is cached."""

    def _is_valid(self, record: Optional[CachedToken]) -> bool:
        return record is not None and record.is_valid(self._clock(), self._buffer_seconds)

    def _refresh(self, refresh: RefreshCallback) -> CachedToken:
        try:
            result = refresh()
        except MonnifyError:
            raise
        except Exception as exc:
            raise AuthenticationError(f"Token refresh failed: {exc}") from exc

        grant = TokenGrant.coerce(result)
        logger.info(
            "Refreshed access token via %s", type(self).__name__,
            extra={"expires_in": grant.expires_in},
        )
        return grant.to_cached(self._clock())

    def _seal(self, record: CachedToken) -> CachedToken:
        """Return the record in the form it is persisted."""
        if self._cipher is None:
            return record
        return CachedToken(token=self._cipher.seal(record.token), expires_at=record.expires_at)

    def _unseal(self, stored: Optional[CachedToken]) -> Optional[CachedToken]:
        if stored is None or self._cipher is None:
            return stored
        token = self._cipher.open(stored.token)
        if token is None:
            return None
        return CachedToken(token=token, expires_at=stored.expires_at)


def sqlite_available() -> bool:
    """Whether the interpreter ships a working ``sqlite3`` extension."""
    try:
        import sqlite3  # noqa: F401
    except ImportError:
        return False
    return True


def create_token_store(
    storage_dir: Union[str, Path],
    *,
    namespace: str = "default",
    backend: Backend = "auto",
    cipher: Optional[TokenCipher] = None,
    clock: Clock = time.time,
) -> TokenStore:
    """
    Build the token store for ``storage_dir``.

    ``auto`` prefers the SQLite backend and falls back to the file backend when
    the interpreter was built without SQLite support.
    """
    directory = Path(storage_dir).expanduser()
    directory.mkdir(parents=True, exist_ok=True)

    if backend not in ("auto", "sqlite", "file"):
        raise ConfigurationError(f"Unknown token backend '{backend}'")

    use_sqlite = backend == "sqlite" or (backend == "auto" and sqlite_available())
    if backend == "sqlite" and not sqlite_available():
        raise ConfigurationError("SQLite token backend requested but sqlite3 is unavailable")

    if use_sqlite:
        from monnify.clients.sqlite_token_store import SQLiteTokenStore

        path = directory / SQLITE_DB_FILE.format(namespace=namespace)
        logger.debug("Using SQLite token store at %s", path)
        return SQLiteTokenStore(path, cipher=cipher, clock=clock)

    from monnify.clients.file_token_store import FileTokenStore

    path = directory / JSON_FILE.format(namespace=namespace)
    logger.debug("Using file token store at %s", path)
    return FileTokenStore(path, cipher=cipher, clock=clock)


def build_token_store(settings: MonnifySettings) -> TokenStore:
    """Create the token store described by ``settings``."""
    cipher = None
    if settings.token_encryption_secret:
        cipher = TokenCipher(
            secret=settings.token_encryption_secret,
            namespace=settings.token_namespace,
        )
    return create_token_store(
        settings.storage_dir,
        namespace=settings.token_namespace,
        backend=settings.token_backend,
        cipher=cipher,
    )


__all__ = [
    "RefreshCallback",
    "TokenStore",
    "build_token_store",
    "create_token_store",
    "sqlite_available",
]

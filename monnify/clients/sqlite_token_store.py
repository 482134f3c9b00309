"""Token store backed by a single-row SQLite table."""

from __future__ import annotations

import logging
import sqlite3
from contextlib import closing
from pathlib import Path
from typing import Any, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from monnify.clients.token_store import RefreshCallback, TokenStore
from monnify.core.errors import LockTimeoutError
from monnify.models.token import CachedToken

logger = logging.getLogger(__name__)


class SQLiteTokenStore(TokenStore):
    """
    Serialize refreshes with ``BEGIN IMMEDIATE`` transactions.

    SQLite grants the reserved (write) lock to one connection at a time, so
    competing refreshers queue on the busy timeout instead of racing. Readers
    keep working in WAL mode while a refresh is in flight.
    """

    backend = "sqlite"

    def __init__(
        self,
        db_path: Union[str, Path],
        *,
        lock_timeout: float = 30.0,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self._db_path = Path(db_path)
        self._lock_timeout = lock_timeout
        if self._db_path.parent and not self._db_path.parent.exists():
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()

    @property
    def path(self) -> Path:
        return self._db_path

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(
            self._db_path,
            timeout=self._lock_timeout,
            isolation_level=None,
            check_same_thread=False,
        )
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_schema(self) -> None:
        with closing(self._connect()) as conn:
            conn.execute("PRAGMA journal_mode=WAL")
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS auth (
                    id INTEGER PRIMARY KEY,
                    token TEXT,
                    expiresAt INTEGER
                )
                """
            )

    def get_token(self, refresh: RefreshCallback) -> str:
        with closing(self._connect()) as conn:
            # Autocommit read: no write lock is taken while the cache is warm.
            record = self._select(conn)
            if self._is_valid(record):
                return record.token

            self._begin_immediate(conn)
            try:
                record = self._select(conn)
                if self._is_valid(record):
                    conn.execute("COMMIT")
                    logger.debug("Token refreshed concurrently by another caller")
                    return record.token

                fresh = self._refresh(refresh)
                stored = self._seal(fresh)
                conn.execute(
                    "REPLACE INTO auth (id, token, expiresAt) VALUES (1, ?, ?)",
                    (stored.token, stored.expires_at),
                )
                conn.execute("COMMIT")
                return fresh.token
            except BaseException:
                if conn.in_transaction:
                    conn.execute("ROLLBACK")
                raise

    def _begin_immediate(self, conn: sqlite3.Connection) -> None:
        try:
            conn.execute("BEGIN IMMEDIATE")
        except sqlite3.OperationalError as exc:
            logger.warning("Token store %s stayed locked for %ss", self._db_path, self._lock_timeout)
            raise LockTimeoutError(
                f"Timed out after {self._lock_timeout}s waiting for the token store lock: {exc}"
            ) from exc

    def _select(self, conn: sqlite3.Connection) -> Optional[CachedToken]:
        # fetchall() runs the statement to completion so no read stays open.
        rows = conn.execute("SELECT token, expiresAt FROM auth WHERE id = 1").fetchall()
        if not rows:
            return None
        row = rows[0]
        try:
            stored = CachedToken(token=row["token"], expires_at=row["expiresAt"])
        except PydanticValidationError:
            return None
        return self._unseal(stored)


__all__ = ["SQLiteTokenStore"]

"""Token store backed by a JSON file guarded by an advisory lock file."""

from __future__ import annotations

import fcntl
import logging
from pathlib import Path
from typing import Any, Optional, Union

from monnify.clients.token_store import RefreshCallback, TokenStore
from monnify.models.token import CachedToken
from monnify.utils.atomic_write import atomic_write

logger = logging.getLogger(__name__)


class FileTokenStore(TokenStore):
    """
    Cache the token in ``path`` and coordinate writers through ``<path>.lock``.

    Locks are taken on the separate lock file because the data file is replaced
    on every write; a lock held on the old data file's handle would no longer
    guard anything once the rename lands.
    """

    backend = "file"

    def __init__(self, path: Union[str, Path], **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._path = Path(path)
        self._lock_path = self._path.with_name(self._path.name + ".lock")

    @property
    def path(self) -> Path:
        return self._path

    @property
    def lock_path(self) -> Path:
        return self._lock_path

    def get_token(self, refresh: RefreshCallback) -> str:
        # flock locks belong to the open file description, so opening the lock
        # file per call serializes threads of this process too.
        with open(self._lock_path, "a") as lock_file:
            fd = lock_file.fileno()
            try:
                fcntl.flock(fd, fcntl.LOCK_SH)
                record = self._read()
                if self._is_valid(record):
                    return record.token

                fcntl.flock(fd, fcntl.LOCK_UN)
                fcntl.flock(fd, fcntl.LOCK_EX)

                # Another caller may have refreshed while no lock was held.
                record = self._read()
                if self._is_valid(record):
                    logger.debug("Token refreshed concurrently by another caller")
                    return record.token

                fresh = self._refresh(refresh)
                atomic_write(self._path, self._seal(fresh).to_json())
                return fresh.token
            finally:
                fcntl.flock(fd, fcntl.LOCK_UN)

    def _read(self) -> Optional[CachedToken]:
        try:
            raw = self._path.read_text(encoding="utf-8")
        except (FileNotFoundError, UnicodeDecodeError):
            return None
        return self._unseal(CachedToken.from_json(raw))


__all__ = ["FileTokenStore"]

"""Crash-safe replace-in-place file writes."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Union

PathLike = Union[str, "os.PathLike[str]"]


def atomic_write(path: PathLike, contents: Union[str, bytes]) -> None:
    """
    Replace ``path`` with ``contents`` so readers see either the old or the new file.

    The temporary file lives in the destination directory because ``os.replace``
    is only atomic within one filesystem.
    """
    target = Path(path)
    directory = target.parent if str(target.parent) else Path(".")

    if not directory.is_dir():
        raise FileNotFoundError(f"Directory does not exist: {directory}")
    if not os.access(directory, os.W_OK):
        raise PermissionError(f"Directory is not writable: {directory}")

    data = contents.encode("utf-8") if isinstance(contents, str) else contents
    fd, tmp_name = tempfile.mkstemp(prefix=".tmp_", dir=directory)
    try:
        with os.fdopen(fd, "wb") as handle:
            handle.write(data)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp_name, target)
    finally:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass


__all__ = ["atomic_write"]

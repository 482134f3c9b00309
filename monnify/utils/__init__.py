"""Filesystem helpers."""

from .atomic_write import atomic_write

__all__ = ["atomic_write"]

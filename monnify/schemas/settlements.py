"""Settlement query filters."""

from __future__ import annotations

from typing import Optional

from monnify.schemas.common import ListFilter


class SettlementFilter(ListFilter):
    account_number: Optional[str] = None


__all__ = ["SettlementFilter"]

"""
Logging utilities for applications embedding the SDK.

The SDK itself only emits records through module-level loggers; this helper
gives scripts and the webhook app a consistent format.
"""

import logging
import sys


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging with the SDK's default format."""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        stream=sys.stdout,
    )
    # httpx logs every request at INFO, including full URLs with query strings.
    logging.getLogger("httpx").setLevel(logging.WARNING)


__all__ = ["configure_logging"]

"""
Cached factories for sharing one SDK instance per process, usable directly or
as FastAPI dependencies.
"""

from functools import lru_cache

from fastapi import Depends

from monnify.sdk import Monnify


@lru_cache()
def get_monnify() -> Monnify:
    """Provide the process-wide SDK built from the environment."""
    return Monnify.from_env()


MonnifyDependency = Depends(get_monnify)

__all__ = ["MonnifyDependency", "get_monnify"]

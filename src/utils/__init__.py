"""
Utility modules shared by the storage and backend layers.

This package provides:
- Logger setup
- Error sanitization (security)
"""

from .logger import setup_logger
from .security import sanitize_error, mask_dsn

__all__ = [
    "setup_logger",
    "sanitize_error",
    "mask_dsn",
]

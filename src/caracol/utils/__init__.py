"""Utility modules for Caracol.

Provides:
- logger: get_logger for logging
"""

from caracol.utils.logger import get_logger

__all__ = [
    "get_logger",
]

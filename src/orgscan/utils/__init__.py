"""Utility modules for orgscan.

Provides:
- logger: get_logger for logging
"""

from orgscan.utils.logger import get_logger

__all__ = [
    "get_logger",
]

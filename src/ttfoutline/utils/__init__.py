"""Utility functions for ttfoutline.

This module provides logging setup and decoding statistics helpers.
"""

from ttfoutline.utils.logging import (
    DecodeLogger,
    DecodeStats,
    configure_logging,
    get_logger,
)

__all__ = [
    "DecodeLogger",
    "DecodeStats",
    "configure_logging",
    "get_logger",
]

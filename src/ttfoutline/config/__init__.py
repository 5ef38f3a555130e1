"""Configuration management for ttfoutline.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- DecodeConfig: Glyph decoding settings
- LoggingConfig: Logging settings
- TtfOutlineSettings: Main application settings
"""

from ttfoutline.config.settings import (
    DecodeConfig,
    LoggingConfig,
    TtfOutlineSettings,
    get_default_settings,
)

__all__ = [
    "DecodeConfig",
    "LoggingConfig",
    "TtfOutlineSettings",
    "get_default_settings",
]

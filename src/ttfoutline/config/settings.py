"""Configuration settings for ttfoutline."""

from pathlib import Path

from pydantic import BaseModel, Field, field_validator

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class DecodeConfig(BaseModel):
    """Configuration for glyph decoding."""

    max_workers: int = Field(
        default=1,
        ge=1,
        description="Worker processes for glyph decoding (1 = decode in-process)",
    )
    batch_size: int = Field(
        default=256,
        ge=1,
        le=65536,
        description="Glyphs per task submitted to a worker process",
    )
    verify_glyph_length: bool = Field(
        default=True,
        description="Fail glyphs whose decoding runs past their 'loca' slot",
    )
    verify_checksums: bool = Field(
        default=False,
        description="Compare table checksums and log mismatches",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="ERROR",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )

    @field_validator("log_level", "file_log_level")
    @classmethod
    def _check_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"Unknown log level {value!r}, expected one of {', '.join(_LOG_LEVELS)}")
        return level


class TtfOutlineSettings(BaseModel):
    """Main application settings."""

    decode: DecodeConfig = Field(default_factory=DecodeConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> TtfOutlineSettings:
    """Get default application settings."""
    return TtfOutlineSettings()

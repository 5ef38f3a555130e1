"""Logging utilities for ttfoutline."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import structlog

LOGGER_NAME = "ttfoutline"


@dataclass
class DecodeStats:
    """Statistics from a decoding run."""

    simple_count: int = 0
    compound_count: int = 0
    empty_count: int = 0
    error_count: int = 0
    total_points: int = 0
    errors: list[tuple[int, str]] = field(default_factory=list)
    start_time: float | None = None
    end_time: float | None = None

    @property
    def glyph_count(self) -> int:
        return self.simple_count + self.compound_count + self.empty_count + self.error_count

    @property
    def duration_seconds(self) -> float:
        """Calculate decoding duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0


def get_logger() -> structlog.stdlib.BoundLogger:
    """Return the package logger."""
    return structlog.get_logger(LOGGER_NAME)


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "ERROR",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Args:
        log_file: Path to log file (no file output if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, install no console handler

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        root_logger.addHandler(file_handler)

    if not quiet:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(getattr(logging, console_level.upper()))
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        root_logger.addHandler(console_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = get_logger()
    logger.info(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=console_level,
    )

    return logger


class DecodeLogger:
    """Logger for tracking per-glyph decoding results and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = DecodeStats()

    def log_glyph_decoded(self, index: int, contours: int, points: int) -> None:
        """Log a decoded simple glyph."""
        self._logger.debug("Glyph decoded", glyph=index, contours=contours, points=points)
        self._stats.simple_count += 1
        self._stats.total_points += points

    def log_glyph_compound(self, index: int) -> None:
        """Log a skipped compound glyph."""
        self._logger.debug("Glyph skipped", glyph=index, reason="compound glyph")
        self._stats.compound_count += 1

    def log_glyph_empty(self, index: int) -> None:
        """Log a glyph without outline data."""
        self._logger.debug("Glyph skipped", glyph=index, reason="empty glyph")
        self._stats.empty_count += 1

    def log_glyph_error(self, index: int, error_type: str, message: str) -> None:
        """Log a glyph decoding error."""
        self._logger.warning(
            "Glyph decoding failed",
            glyph=index,
            error=message,
            error_type=error_type,
        )
        self._stats.error_count += 1
        self._stats.errors.append((index, message))

    @property
    def stats(self) -> DecodeStats:
        """Get current decoding statistics."""
        return self._stats

"""Font assembly: table indexing, glyph location and decoding.

This module ties the decoding pipeline together and optionally decodes
glyphs in parallel using ProcessPoolExecutor.

Key components:
- decode_glyph_batch: Top-level picklable function for parallel execution
- FontDecoder: Main orchestrator producing a Font from a byte buffer
"""

import time
from concurrent.futures import ProcessPoolExecutor, as_completed
from pathlib import Path
from typing import Any

from ttfoutline.config import TtfOutlineSettings, get_default_settings
from ttfoutline.core.decoder import decode_glyph_at
from ttfoutline.core.directory import TableDirectory
from ttfoutline.core.locator import GlyphLocation, GlyphLocator
from ttfoutline.domain import (
    CompoundOutline,
    EmptyOutline,
    FailedOutline,
    Font,
    GlyphFailure,
    GlyphOutline,
    SimpleOutline,
    outline_from_dict,
)
from ttfoutline.exceptions import (
    GlyphError,
    GlyphLengthMismatchError,
    OutOfBoundsError,
)
from ttfoutline.io import FontReader
from ttfoutline.utils import DecodeLogger, DecodeStats, get_logger


def decode_location(
    data: bytes,
    location: GlyphLocation,
    verify_length: bool = True,
) -> GlyphOutline:
    """Decode the glyph at a resolved location.

    Args:
        data: Font buffer
        location: Resolved glyph location
        verify_length: Fail if decoding overruns the glyph's 'loca' slot

    Returns:
        EmptyOutline for a zero-length slot, otherwise the decoded outline

    Raises:
        GlyphError: If the glyph cannot be decoded
    """
    if location.is_empty:
        return EmptyOutline()

    outline, consumed = decode_glyph_at(data, location.offset)
    if (
        verify_length
        and location.length is not None
        and isinstance(outline, SimpleOutline)
        and consumed > location.length
    ):
        raise GlyphLengthMismatchError(location.index, location.length, consumed)
    return outline


def decode_glyph_batch(
    data: bytes,
    locations: list[tuple[int, int, int | None]],
    verify_length: bool = True,
) -> list[dict[str, Any]]:
    """Decode a batch of glyphs.

    Top-level function designed to be picklable for use with
    ProcessPoolExecutor. Each glyph gets its own cursor over data.

    Args:
        data: Font buffer
        locations: (index, offset, length) per glyph
        verify_length: Fail glyphs that overrun their 'loca' slot

    Returns:
        One dictionary per glyph, either
        - Success: {"index": int, "outline": outline_dict}
        - Error: {"index": int, "error": str, "error_type": str}
    """
    results = []
    for index, offset, length in locations:
        location = GlyphLocation(index=index, offset=offset, length=length)
        try:
            outline = decode_location(data, location, verify_length)
        except GlyphError as e:
            results.append({"index": index, "error": str(e), "error_type": type(e).__name__})
        else:
            results.append({"index": index, "outline": outline.to_dict()})
    return results


class FontDecoder:
    """Orchestrates decoding of a whole font.

    Manages the complete workflow:
    1. Parse the table directory and check required tables
    2. Resolve every glyph's location through 'loca'
    3. Decode glyphs, in-process or in worker processes
    4. Record per-glyph failures without stopping

    Example:
        decoder = FontDecoder(TtfOutlineSettings())
        font = decoder.decode_file(Path("font.ttf"))
        print(font.num_glyphs, len(font.failures))
    """

    def __init__(self, config: TtfOutlineSettings | None = None) -> None:
        """Initialize the decoder with configuration.

        Args:
            config: Settings; defaults are used if None
        """
        self.config = config if config is not None else get_default_settings()
        self.logger = get_logger()
        self._last_stats: DecodeStats | None = None

    @property
    def last_stats(self) -> DecodeStats | None:
        """Statistics of the most recent decode() call."""
        return self._last_stats

    def decode_file(self, font_path: Path) -> Font:
        """Load a font file and decode it.

        Raises:
            FileNotFoundError: If font file does not exist
            FontLoadError: If the file cannot be read
            FontError: If the font header is unusable
        """
        with FontReader(font_path) as reader:
            self.logger.info("Font loaded", path=str(font_path), size=reader.size)
            return self.decode(reader.data)

    def decode(self, data: bytes) -> Font:
        """Decode every glyph in a font buffer.

        Args:
            data: Complete font file contents

        Returns:
            Font with one outline per glyph index

        Raises:
            MalformedHeaderError: If the header or directory is truncated
            InvalidTagError: If a table tag is not ASCII
            MissingTableError: If 'head', 'maxp', 'loca' or 'glyf' is absent
            OutOfBoundsError: If 'maxp' or 'head' fields are outside the buffer
        """
        data = bytes(data)
        decode_logger = DecodeLogger(self.logger)
        stats = decode_logger.stats
        stats.start_time = time.time()

        directory = TableDirectory.parse(data)
        directory.ensure_required()
        self.logger.info(
            "Table directory parsed",
            flavor=directory.flavor,
            num_tables=len(directory),
        )

        mismatches: list[str] = []
        if self.config.decode.verify_checksums:
            mismatches = directory.verify_checksums(data)
            for tag in mismatches:
                self.logger.warning("Table checksum mismatch", tag=tag)

        locator = GlyphLocator(directory, data)
        self.logger.info(
            "Glyph locations resolved",
            num_glyphs=locator.num_glyphs,
            loca_entry_width=locator.entry_width,
        )

        glyphs: list[GlyphOutline | None] = [None] * locator.num_glyphs
        errors: dict[int, GlyphFailure] = {}
        locations: list[GlyphLocation] = []

        for index in range(locator.num_glyphs):
            try:
                locations.append(locator.locate(index))
            except (GlyphError, OutOfBoundsError) as e:
                errors[index] = GlyphFailure(index, type(e).__name__, str(e))

        verify_length = self.config.decode.verify_glyph_length
        max_workers = self.config.decode.max_workers
        if max_workers > 1 and len(locations) > 1:
            results = self._decode_parallel(data, locations, max_workers)
        else:
            results = decode_glyph_batch(
                data,
                [(loc.index, loc.offset, loc.length) for loc in locations],
                verify_length,
            )

        for result in results:
            index = result["index"]
            if "error" in result:
                errors[index] = GlyphFailure(index, result["error_type"], result["error"])
            else:
                glyphs[index] = outline_from_dict(result["outline"])

        failures = [errors[index] for index in sorted(errors)]
        for failure in failures:
            glyphs[failure.index] = FailedOutline(failure.error_type, failure.message)

        for index, outline in enumerate(glyphs):
            self._log_outline(decode_logger, index, outline)

        stats.end_time = time.time()
        self._last_stats = stats
        self.logger.info(
            "Decoding complete",
            simple=stats.simple_count,
            compound=stats.compound_count,
            empty=stats.empty_count,
            errors=stats.error_count,
            duration_seconds=round(stats.duration_seconds, 3),
        )

        return Font(
            tables=directory.tables,
            glyphs=glyphs,  # type: ignore[arg-type]
            failures=failures,
            checksum_mismatches=mismatches,
            scaler_type=directory.scaler_type,
        )

    def _decode_parallel(
        self,
        data: bytes,
        locations: list[GlyphLocation],
        max_workers: int,
    ) -> list[dict[str, Any]]:
        """Decode glyph batches in worker processes.

        Args:
            data: Font buffer, sent once per batch
            locations: Glyphs to decode
            max_workers: Maximum worker processes

        Returns:
            Result dictionaries from decode_glyph_batch, in completion order
        """
        batch_size = self.config.decode.batch_size
        verify_length = self.config.decode.verify_glyph_length
        batches = [
            [(loc.index, loc.offset, loc.length) for loc in locations[i:i + batch_size]]
            for i in range(0, len(locations), batch_size)
        ]

        self.logger.info(
            "Starting parallel decoding",
            glyph_count=len(locations),
            batches=len(batches),
            max_workers=max_workers,
        )

        results: list[dict[str, Any]] = []
        with ProcessPoolExecutor(max_workers=max_workers) as executor:
            futures = [
                executor.submit(decode_glyph_batch, data, batch, verify_length)
                for batch in batches
            ]
            try:
                for future in as_completed(futures):
                    results.extend(future.result())
            except KeyboardInterrupt:
                self.logger.info("Cancellation requested by user")
                executor.shutdown(wait=True, cancel_futures=True)
                raise

        return results

    @staticmethod
    def _log_outline(decode_logger: DecodeLogger, index: int, outline: GlyphOutline | None) -> None:
        if isinstance(outline, SimpleOutline):
            decode_logger.log_glyph_decoded(index, outline.num_contours, outline.num_points)
        elif isinstance(outline, CompoundOutline):
            decode_logger.log_glyph_compound(index)
        elif isinstance(outline, EmptyOutline):
            decode_logger.log_glyph_empty(index)
        elif isinstance(outline, FailedOutline):
            decode_logger.log_glyph_error(index, outline.error_type, outline.reason)

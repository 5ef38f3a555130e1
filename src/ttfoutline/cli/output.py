"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with formatted summaries, tables and messages.
"""

from rich.console import Console
from rich.table import Table
from rich.text import Text

from ttfoutline.domain import (
    CompoundOutline,
    EmptyOutline,
    FailedOutline,
    GlyphFailure,
    GlyphOutline,
    SimpleOutline,
    TableEntry,
)
from ttfoutline.utils import DecodeStats

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]ttfoutline[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator."""
    console.print(f"\n{SYM_STEP} {message}")


def print_font_info(font_path: str, flavor: str, num_tables: int, glyph_count: int) -> None:
    """Print font information.

    Args:
        font_path: Path to the font file
        flavor: Font flavor (e.g., "TrueType", "OpenType")
        num_tables: Number of tables in the directory
        glyph_count: Total number of glyphs in font
    """
    # Use Text to safely handle paths with special characters
    line1 = Text("  ")
    line1.append(font_path)
    line1.append(f" ({flavor})")
    console.print(line1)
    console.print(f"  {num_tables} tables {SYM_DOT} {glyph_count:,} glyphs")


def print_tables(tables: dict[str, TableEntry]) -> None:
    """Print the table directory sorted by offset."""
    table = Table(box=None, padding=(0, 2), show_header=True, header_style="bold")
    table.add_column("tag")
    table.add_column("offset", justify="right")
    table.add_column("length", justify="right")
    table.add_column("checksum", justify="right")
    for entry in sorted(tables.values(), key=lambda e: e.offset):
        table.add_row(entry.tag, str(entry.offset), str(entry.length), f"0x{entry.checksum:08X}")
    console.print(table)


def _format_time(seconds: float) -> str:
    """Format seconds into human-readable time string."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    else:
        mins = int(seconds // 60)
        secs = seconds % 60
        return f"{mins}m {secs:.1f}s"


def print_summary(stats: DecodeStats) -> None:
    """Print decoding summary.

    Args:
        stats: Statistics of the decoding run
    """
    time_str = _format_time(stats.duration_seconds)
    console.print(f"\n[bold green]{SYM_OK} Decoded[/bold green] in {time_str}")
    console.print(
        f"  {stats.simple_count} simple {SYM_DOT} {stats.compound_count} compound "
        f"{SYM_DOT} {stats.empty_count} empty"
    )
    error_style = "red" if stats.error_count > 0 else "green"
    console.print(
        f"  {stats.total_points:,} points {SYM_DOT} "
        f"[{error_style}]{stats.error_count} errors[/{error_style}]"
    )


def print_failures(failures: list[GlyphFailure], verbose: bool) -> None:
    """Print per-glyph failures.

    Args:
        failures: Failures in glyph index order
        verbose: Whether to list every failure instead of the first 20
    """
    if not failures:
        return
    console.print(f"\n[bold red]{len(failures)} glyphs failed[/bold red]")
    shown = failures if verbose else failures[:20]
    for failure in shown:
        line = Text(f"  {failure.index}: ")
        line.append(failure.error_type, style="red")
        line.append(f" {failure.message}")
        console.print(line)
    if len(shown) < len(failures):
        console.print(f"  {SYM_DOT}{SYM_DOT}{SYM_DOT} (+{len(failures) - len(shown)} more)")


def print_checksum_mismatches(tags: list[str]) -> None:
    """Print tables whose stored checksum did not match their data."""
    if not tags:
        return
    console.print(f"\n[yellow]{SYM_ERR} Checksum mismatch:[/yellow] {', '.join(tags)}")


def print_glyph(index: int, outline: GlyphOutline) -> None:
    """Print the contours and points of one glyph.

    Args:
        index: Glyph index
        outline: Decoded outline
    """
    console.print(f"\n[bold]Glyph {index}[/bold]")
    if isinstance(outline, CompoundOutline):
        console.print("  compound glyph (not decoded)")
    elif isinstance(outline, EmptyOutline):
        console.print("  empty glyph")
    elif isinstance(outline, FailedOutline):
        console.print(f"  [red]{SYM_ERR} {outline.error_type}[/red] {outline.reason}")
    elif isinstance(outline, SimpleOutline):
        x_min, y_min, x_max, y_max = outline.bounding_box()
        console.print(
            f"  {outline.num_contours} contours {SYM_DOT} {outline.num_points} points "
            f"{SYM_DOT} bbox ({x_min}, {y_min}, {x_max}, {y_max})"
        )
        for contour_idx, contour in enumerate(outline.contours()):
            console.print(f"  contour {contour_idx}")
            for point in contour:
                marker = "on " if point.on_curve else "off"
                console.print(f"    {marker} {point.x:>6} {point.y:>6}")


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")

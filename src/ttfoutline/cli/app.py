"""CLI application entry point for ttfoutline.

This module provides the main CLI interface using Typer.
"""

import json
from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError

from ttfoutline import __version__
from ttfoutline.cli.output import (
    SYM_OK,
    console,
    print_checksum_mismatches,
    print_error,
    print_failures,
    print_font_info,
    print_glyph,
    print_header,
    print_step,
    print_summary,
    print_tables,
)
from ttfoutline.config import DecodeConfig, LoggingConfig, TtfOutlineSettings
from ttfoutline.core import FontDecoder, flavor_of
from ttfoutline.exceptions import FontLoadError, TtfOutlineError
from ttfoutline.utils import configure_logging

# Create the Typer app
app = typer.Typer(
    name="ttfoutline",
    help="Decode glyph outlines from TrueType/OpenType fonts.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]ttfoutline[/bold blue] v{__version__}")
        raise typer.Exit()


@app.command()
def decode(
    input_font: Annotated[
        Path,
        typer.Argument(
            help="Path to input TTF/OTF font file",
            show_default=False,
        ),
    ],
    glyph: Annotated[
        list[int] | None,
        typer.Option(
            "--glyph",
            "-g",
            help="Print the points of this glyph index (repeatable)",
        ),
    ] = None,
    json_output: Annotated[
        Path | None,
        typer.Option(
            "--json",
            help="Write all decoded outlines to this JSON file",
        ),
    ] = None,
    workers: Annotated[
        int,
        typer.Option(
            "--workers",
            "-j",
            help="Number of worker processes (1 = decode in-process)",
            min=1,
        ),
    ] = 1,
    verify_checksums: Annotated[
        bool,
        typer.Option(
            "--verify-checksums",
            help="Check table checksums and report mismatches",
        ),
    ] = False,
    verify_length: Annotated[
        bool,
        typer.Option(
            "--verify-length/--no-verify-length",
            help="Fail glyphs whose data overruns their 'loca' slot",
        ),
    ] = True,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG|INFO|WARNING|ERROR)",
        ),
    ] = "ERROR",
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Verbose console output",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Minimal console output",
        ),
    ] = False,
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Decode every glyph outline in a TrueType font.

    Reads the table directory, resolves glyph offsets through 'loca' and
    decodes each simple glyph into contours of on-curve and off-curve points.
    Compound glyphs are detected and skipped.

    Example:
        ttfoutline Inconsolata-Regular.ttf --glyph 36
    """
    # Validate mutually exclusive options
    if verbose and quiet:
        print_error("Cannot use --verbose and --quiet together")
        raise typer.Exit(code=1)

    # Validate input file exists
    if not input_font.exists():
        print_error(
            f"Input file not found: {input_font}",
            details=f"The file '{input_font}' does not exist or is not accessible.",
        )
        raise typer.Exit(code=1)

    if not input_font.is_file():
        print_error(
            f"Input path is not a file: {input_font}",
            details="Please provide a path to a TTF or OTF font file.",
        )
        raise typer.Exit(code=1)

    try:
        settings = TtfOutlineSettings(
            decode=DecodeConfig(
                max_workers=workers,
                verify_glyph_length=verify_length,
                verify_checksums=verify_checksums,
            ),
            logging=LoggingConfig(
                log_file=log_file,
                log_level=log_level if not quiet else "ERROR",
            ),
        )
    except ValidationError as e:
        print_error("Invalid option", details=str(e.errors()[0]["msg"]))
        raise typer.Exit(code=1)

    configure_logging(
        log_file=settings.logging.log_file,
        console_level=settings.logging.log_level,
        file_level=settings.logging.file_log_level,
        quiet=quiet,
    )

    if not quiet:
        print_header(__version__)
        print_step("Decoding font")

    decoder = FontDecoder(settings)
    try:
        font = decoder.decode_file(input_font)
    except FontLoadError as e:
        print_error(f"Could not load font: {e.reason}")
        raise typer.Exit(code=1)
    except TtfOutlineError as e:
        print_error(f"Could not decode font: {e}")
        raise typer.Exit(code=1)

    stats = decoder.last_stats
    if not quiet:
        print_font_info(
            font_path=str(input_font),
            flavor=flavor_of(font.scaler_type),
            num_tables=len(font.tables),
            glyph_count=font.num_glyphs,
        )
        if verbose:
            print_tables(font.tables)
        if stats is not None:
            print_summary(stats)
        print_checksum_mismatches(font.checksum_mismatches)
        print_failures(font.failures, verbose=verbose)

    for index in glyph or []:
        try:
            outline = font.glyph(index)
        except IndexError as e:
            print_error(str(e))
            raise typer.Exit(code=1)
        print_glyph(index, outline)

    if json_output is not None:
        try:
            json_output.write_text(json.dumps(font.to_dict()), encoding="utf-8")
        except OSError as e:
            print_error(f"Could not write {json_output}: {e}")
            raise typer.Exit(code=1)
        if not quiet:
            console.print(f"\n[bold green]{SYM_OK}[/bold green] Wrote {json_output}")


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()

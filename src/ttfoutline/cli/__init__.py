"""Command-line interface for ttfoutline.

This module provides the CLI using Typer with rich output for
user-friendly feedback.

Key features:
- Decoding summary per outline kind
- Per-glyph point dumps
- JSON export of all outlines
- Detailed error reporting
"""

from ttfoutline.cli.app import cli, main

__all__ = ["cli", "main"]

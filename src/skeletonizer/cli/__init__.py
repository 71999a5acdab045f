"""Command-line interface for skeletonizer.

This module provides the CLI using Typer with rich output for
user-friendly feedback.

Key features:
- JSON polygon input in either winding
- Verbose/quiet output modes
- Collision sweep table for debugging
- Detailed error reporting
"""

from skeletonizer.cli.app import cli, main

__all__ = ["cli", "main"]

"""Command-line interface for territorial.

This module provides the CLI using Typer with rich output for
user-friendly feedback.

Key features:
- Polygon validation with the first crossing edge pair
- Overlap checks against a JSON territory store
- Snapping preview and full commit pipeline
"""

from territorial.cli.app import cli, main

__all__ = ["cli", "main"]

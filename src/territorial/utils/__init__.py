"""Utility functions for territorial.

This module provides utility functions including:

- Logging setup and configuration
- Session event logging and statistics
"""

from territorial.utils.logging import (
    SessionLogger,
    SessionStats,
    configure_logging,
)

__all__ = [
    "SessionLogger",
    "SessionStats",
    "configure_logging",
]

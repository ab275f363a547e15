"""Configuration management for territorial.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- GeometryConfig: Snap settings
- EditorConfig: Editing session settings
- LoggingConfig: Logging settings
- TerritorialSettings: Main application settings
"""

from territorial.config.settings import (
    EditorConfig,
    GeometryConfig,
    LoggingConfig,
    TerritorialSettings,
    get_default_settings,
)

__all__ = [
    "EditorConfig",
    "GeometryConfig",
    "LoggingConfig",
    "TerritorialSettings",
    "get_default_settings",
]

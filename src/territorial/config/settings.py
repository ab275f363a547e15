"""Configuration settings for territorial."""

from pathlib import Path

from pydantic import BaseModel, Field


class GeometryConfig(BaseModel):
    """Configuration for snapping.

    Distances are expressed in degrees, the unit of raw coordinates, not in
    metres. They are planar approximations and grow less accurate toward
    the poles.
    """

    snap_enabled: bool = Field(
        default=True,
        description="Snap drawn vertices to neighbouring territory boundaries",
    )
    snap_threshold: float = Field(
        default=0.0005,
        gt=0.0,
        le=0.1,
        description="Maximum vertex-to-boundary distance for snap-to-edge (degrees)",
    )
    snap_offset: float = Field(
        default=0.00005,
        gt=0.0,
        le=0.01,
        description="Distance a vertex is pushed outside a neighbouring territory (degrees)",
    )


class EditorConfig(BaseModel):
    """Configuration for editing sessions."""

    min_name_length: int = Field(
        default=2,
        ge=1,
        le=100,
        description="Minimum territory name length after trimming whitespace",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class TerritorialSettings(BaseModel):
    """Main application settings."""

    geometry: GeometryConfig = Field(default_factory=GeometryConfig)
    editor: EditorConfig = Field(default_factory=EditorConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> TerritorialSettings:
    """Get default application settings."""
    return TerritorialSettings()

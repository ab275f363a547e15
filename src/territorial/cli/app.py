"""CLI application entry point for territorial.

This module provides the command-line interface using Typer.
"""

from pathlib import Path
from typing import Annotated

import typer

from territorial import __version__
from territorial.api import overlaps, snap, validate
from territorial.cli.output import (
    console,
    describe_reason,
    print_committed,
    print_error,
    print_header,
    print_invalid,
    print_overlap,
    print_polygon,
    print_polygon_info,
    print_snap_summary,
    print_step,
    print_territories,
    print_valid,
)
from territorial.config import GeometryConfig, LoggingConfig, TerritorialSettings
from territorial.core import (
    InvalidReason,
    SessionState,
    SnapEngine,
    TerritoryEditor,
    find_self_intersection,
    is_valid_coordinate,
)
from territorial.core.snapping import moved_vertices
from territorial.domain import LatLng, to_points
from territorial.exceptions import TerritorialError
from territorial.io import JsonTerritoryStore, read_polygon, write_polygon
from territorial.utils import SessionLogger, configure_logging

# Create the Typer app
app = typer.Typer(
    name="territorial",
    help="Validate, snap and commit territory polygons against a territory store.",
    add_completion=False,
    no_args_is_help=True,
)

PolygonArg = Annotated[
    Path,
    typer.Argument(
        help="JSON file with a list of {lat, lng} objects or [lat, lng] pairs",
        show_default=False,
    ),
]
StoreOpt = Annotated[
    Path,
    typer.Option(
        "--store",
        "-s",
        help="Territory store JSON file",
    ),
]
ExcludeOpt = Annotated[
    int | None,
    typer.Option(
        "--exclude",
        "-x",
        help="Id of the territory being edited (ignored in checks)",
    ),
]


class _Options:
    """Global options shared by all commands."""

    quiet: bool = False
    log_file: Path | None = None
    log_level: str = "WARNING"


_options = _Options()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Territorial[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main_options(
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
    ] = "WARNING",
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
    """Territory polygon tools."""
    _options.quiet = quiet
    _options.log_file = log_file
    _options.log_level = log_level


def _settings(snap_enabled: bool = True) -> TerritorialSettings:
    return TerritorialSettings(
        geometry=GeometryConfig(snap_enabled=snap_enabled),
        logging=LoggingConfig(
            log_file=_options.log_file,
            log_level=_options.log_level,
        ),
    )


def _session_logger(settings: TerritorialSettings) -> SessionLogger:
    """Console logging at --log-level, plus a file when --log-file is given."""
    logger = configure_logging(
        log_file=settings.logging.log_file,
        console_level=settings.logging.log_level,
        file_level=settings.logging.file_log_level,
        quiet=_options.quiet,
    )
    return SessionLogger(logger)


def _load_polygon(path: Path) -> list[LatLng]:
    polygon = read_polygon(path)
    if not _options.quiet:
        print_polygon_info(str(path), len(polygon))
    return polygon


def _rejection(
    polygon: list[LatLng],
) -> tuple[InvalidReason, tuple[int, int] | None] | None:
    """Reason a polygon cannot be a territory boundary, or None if it can."""
    if len(polygon) < 3:
        return InvalidReason.TOO_FEW_VERTICES, None
    if not all(is_valid_coordinate(c.lat, c.lng) for c in polygon):
        return InvalidReason.INVALID_COORDINATE, None
    if not validate(polygon):
        return InvalidReason.SELF_INTERSECTION, find_self_intersection(to_points(polygon))
    return None


@app.command("validate")
def validate_command(polygon_file: PolygonArg) -> None:
    """Check that a polygon has 3+ vertices and no crossing edges."""
    try:
        if not _options.quiet:
            print_header(__version__)
            print_step("Validating")
        logger = _session_logger(_settings())
        polygon = _load_polygon(polygon_file)

        rejection = _rejection(polygon)
        if rejection is None:
            logger.log_validation(True, len(polygon), None)
            if not _options.quiet:
                print_valid(len(polygon))
            return

        reason, crossing = rejection
        logger.log_validation(False, len(polygon), crossing)
        print_invalid(describe_reason(reason), crossing)
        raise typer.Exit(code=1)

    except FileNotFoundError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except TerritorialError as e:
        print_error(str(e))
        raise typer.Exit(code=1)


@app.command("check")
def check_command(
    polygon_file: PolygonArg,
    store_path: StoreOpt,
    exclude: ExcludeOpt = None,
) -> None:
    """Check a polygon for overlap with stored territories."""
    try:
        if not _options.quiet:
            print_header(__version__)
            print_step("Checking overlap")
        logger = _session_logger(_settings())
        polygon = _load_polygon(polygon_file)
        store = JsonTerritoryStore(store_path)

        result = overlaps(polygon, store.get_existing_polygons(exclude), exclude)
        if result.overlaps:
            logger.log_conflict(result.conflicting_id, result.conflicting_name)
        if not _options.quiet or result.overlaps:
            print_overlap(result)
        if result.overlaps:
            raise typer.Exit(code=1)

    except FileNotFoundError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except TerritorialError as e:
        print_error(str(e))
        raise typer.Exit(code=1)


@app.command("snap")
def snap_command(
    polygon_file: PolygonArg,
    store_path: StoreOpt,
    exclude: ExcludeOpt = None,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Write the snapped polygon here instead of printing it",
        ),
    ] = None,
) -> None:
    """Snap polygon vertices to neighbouring territory boundaries."""
    try:
        if not _options.quiet:
            print_header(__version__)
            print_step("Snapping")
        polygon = _load_polygon(polygon_file)
        store = JsonTerritoryStore(store_path)

        settings = _settings()
        logger = _session_logger(settings)
        engine = SnapEngine(
            threshold=settings.geometry.snap_threshold,
            offset=settings.geometry.snap_offset,
        )
        others = [list(t.polygon) for t in store.get_existing_polygons(exclude)]
        snapped = snap(polygon, others, engine)
        moved = moved_vertices(polygon, snapped)
        logger.log_snap(moved)

        if not _options.quiet:
            print_snap_summary(moved, len(snapped))

        if output is not None:
            write_polygon(output, snapped)
        else:
            print_polygon(snapped)

        rejection = _rejection(snapped)
        if rejection is not None:
            reason, crossing = rejection
            print_invalid(describe_reason(reason), crossing)
            raise typer.Exit(code=1)

    except FileNotFoundError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except TerritorialError as e:
        print_error(str(e))
        raise typer.Exit(code=1)


@app.command("commit")
def commit_command(
    polygon_file: PolygonArg,
    store_path: StoreOpt,
    name: Annotated[
        str,
        typer.Option(
            "--name",
            "-n",
            help="Territory name (defaults to the edited territory's name)",
        ),
    ] = "",
    territory_id: Annotated[
        int | None,
        typer.Option(
            "--id",
            help="Replace the geometry of this existing territory",
        ),
    ] = None,
    no_snap: Annotated[
        bool,
        typer.Option(
            "--no-snap",
            help="Do not snap vertices to neighbouring territories",
        ),
    ] = False,
) -> None:
    """Validate, snap, overlap-check and store a territory polygon."""
    try:
        if not _options.quiet:
            print_header(__version__)
            print_step("Editing")
        polygon = _load_polygon(polygon_file)
        store = JsonTerritoryStore(store_path)

        settings = _settings(snap_enabled=not no_snap)
        editor = TerritoryEditor(store, settings, _session_logger(settings))
        editor.start(territory_id=territory_id, name=name or None)
        editor.clear()
        for coord in polygon:
            editor.add_vertex(coord)
        session = editor.close()

        if session.state == SessionState.DRAWING:
            reason = session.error or InvalidReason.TOO_FEW_VERTICES
            crossing = None
            if reason == InvalidReason.SELF_INTERSECTION:
                crossing = find_self_intersection(to_points(list(session.polygon)))
            print_invalid(describe_reason(reason), crossing)
            editor.cancel()
            raise typer.Exit(code=1)

        if session.state == SessionState.CONFLICTING and session.overlap is not None:
            print_overlap(session.overlap)
            editor.cancel()
            raise typer.Exit(code=1)

        if not _options.quiet and session.snapped_vertices:
            print_snap_summary(session.snapped_vertices, len(session.polygon))

        territory = editor.commit()
        if not _options.quiet:
            print_committed(territory, str(store.path))

    except FileNotFoundError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except TerritorialError as e:
        print_error(str(e))
        raise typer.Exit(code=1)


@app.command("list")
def list_command(store_path: StoreOpt) -> None:
    """List stored territories."""
    try:
        store = JsonTerritoryStore(store_path)
        territories = store.list_territories()
        if not territories:
            console.print("No territories stored.")
            return
        print_territories(territories)
    except TerritorialError as e:
        print_error(str(e))
        raise typer.Exit(code=1)


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()

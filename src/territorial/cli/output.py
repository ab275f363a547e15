"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with tables and formatted messages.
"""

from rich.console import Console
from rich.table import Table
from rich.text import Text

from territorial.core import InvalidReason, OverlapResult
from territorial.domain import LatLng, Territory

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info

# Distinguishable solid colours, picked by territory id
TERRITORY_COLORS = (
    "#4285F4",
    "#34A853",
    "#FBBC04",
    "#EA4335",
    "#9C27B0",
    "#FF6D00",
    "#00BCD4",
    "#E91E63",
    "#795548",
    "#607D8B",
    "#8BC34A",
    "#FF5722",
    "#673AB7",
    "#009688",
    "#FFC107",
    "#3F51B5",
    "#CDDC39",
    "#00796B",
    "#C2185B",
    "#1976D2",
)

_REASON_MESSAGES = {
    InvalidReason.TOO_FEW_VERTICES: "polygon needs at least 3 vertices",
    InvalidReason.INVALID_COORDINATE: "a vertex is outside valid lat/lng ranges",
    InvalidReason.SELF_INTERSECTION: "polygon edges cross each other",
    InvalidReason.SELF_INTERSECTION_AFTER_SNAP: "snapping to neighbouring territories made edges cross",
}


def territory_color(territory_id: int) -> str:
    """Stable display colour for a territory."""
    return TERRITORY_COLORS[territory_id % len(TERRITORY_COLORS)]


def describe_reason(reason: InvalidReason) -> str:
    """Human-readable explanation of a rejected polygon."""
    return _REASON_MESSAGES[reason]


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]Territorial[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator."""
    console.print(f"\n{SYM_STEP} {message}")


def print_polygon_info(path: str, vertices: int) -> None:
    """Print a loaded polygon summary.

    Args:
        path: Polygon file path
        vertices: Number of vertices read
    """
    line = Text("  ")
    line.append(path)
    line.append(f" {SYM_DOT} {vertices} vertices")
    console.print(line)


def print_valid(vertices: int) -> None:
    console.print(f"  [green]{SYM_OK} Valid[/green] {SYM_DOT} {vertices} vertices")


def print_invalid(reason: str, crossing: tuple[int, int] | None = None) -> None:
    """Print a validation failure.

    Args:
        reason: Explanation of the failure
        crossing: Indices of the first crossing edge pair, if known
    """
    console.print(f"  [red]{SYM_ERR} Invalid[/red] {SYM_DOT} {reason}")
    if crossing is not None:
        console.print(f"  edges {crossing[0]} and {crossing[1]} intersect")


def print_overlap(result: OverlapResult) -> None:
    """Print the outcome of an overlap check."""
    if result.overlaps:
        console.print(
            f"  [red]{SYM_ERR} Overlaps[/red] \"{result.conflicting_name}\" "
            f"(id {result.conflicting_id})"
        )
    else:
        console.print(f"  [green]{SYM_OK} No overlap[/green]")


def print_snap_summary(moved: int, total: int) -> None:
    console.print(f"  {moved} of {total} vertices snapped")


def print_polygon(polygon: list[LatLng]) -> None:
    """Print polygon vertices in (lat, lng) order."""
    for coord in polygon:
        console.print(f"  {coord.lat:.7f}, {coord.lng:.7f}")


def print_committed(territory: Territory, store_path: str) -> None:
    """Print commit success."""
    console.print(
        f"\n[bold green]{SYM_OK} Committed[/bold green] \"{territory.name}\" "
        f"(id {territory.id}) {SYM_DOT} {len(territory.polygon)} vertices"
    )
    console.print(f"  {store_path}")


def print_territories(territories: list[Territory]) -> None:
    """Print a table of territories."""
    table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
    table.add_column("ID", justify="right")
    table.add_column("Name")
    table.add_column("Vertices", justify="right")
    table.add_column("Active")

    for territory in territories:
        color = territory_color(territory.id or 0)
        table.add_row(
            str(territory.id),
            Text(territory.name, style=color),
            str(len(territory.polygon)),
            SYM_OK if territory.active else SYM_DOT,
        )

    console.print(table)


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")

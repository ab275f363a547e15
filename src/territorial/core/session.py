"""Editing session state machine.

An EditSession is an immutable value describing one in-progress territory
drawing. Every user gesture is a pure function taking a session and
returning the next one; nothing here touches a map library or a store
except commit(), which hands the finished territory to the store.

State flow:

    IDLE -> DRAWING -> CLOSED -> VALIDATING -> INVALID -> DRAWING
                                            -> SNAPPING -> SNAPPED
                                               (-> VALIDATING if vertices moved)
                                            -> OVERLAP_CHECKING -> CONFLICTING | READY
    READY -> COMMITTED
    any open state -> CANCELLED

CLOSED, VALIDATING, INVALID, SNAPPING, SNAPPED and OVERLAP_CHECKING are
passed through within a single transition and recorded in ``trace``; a
session at rest is always IDLE, DRAWING, CONFLICTING, READY or terminal.
"""

from collections.abc import Iterable
from dataclasses import dataclass, replace
from enum import Enum

from territorial.core.overlap import OverlapResult, find_conflict
from territorial.core.snapping import SnapEngine, changed_materially, moved_vertices
from territorial.core.validator import find_self_intersection, is_valid_coordinate
from territorial.domain import LatLng, Territory, to_points
from territorial.exceptions import CommitBlockedError, SessionStateError
from territorial.io.store import TerritoryStore


class SessionState(str, Enum):
    """Editing session states."""

    IDLE = "idle"
    DRAWING = "drawing"
    CLOSED = "closed"
    VALIDATING = "validating"
    INVALID = "invalid"
    SNAPPING = "snapping"
    SNAPPED = "snapped"
    OVERLAP_CHECKING = "overlap_checking"
    CONFLICTING = "conflicting"
    READY = "ready"
    COMMITTED = "committed"
    CANCELLED = "cancelled"


class InvalidReason(str, Enum):
    """Why the last close attempt was rejected."""

    TOO_FEW_VERTICES = "too_few_vertices"
    INVALID_COORDINATE = "invalid_coordinate"
    SELF_INTERSECTION = "self_intersection"
    SELF_INTERSECTION_AFTER_SNAP = "self_intersection_after_snap"


TERMINAL_STATES = frozenset({SessionState.COMMITTED, SessionState.CANCELLED})
EDITABLE_STATES = frozenset({SessionState.DRAWING, SessionState.CONFLICTING, SessionState.READY})
CLOSED_STATES = frozenset({SessionState.CONFLICTING, SessionState.READY})

DEFAULT_SNAPPER = SnapEngine()


@dataclass(frozen=True)
class EditSession:
    """Snapshot of one territory editing interaction.

    Attributes:
        state: Current resting state
        polygon: Vertices in (lat, lng) order; snapped once the ring is
            accepted, as drawn otherwise
        exclude_id: Identifier of the territory being edited, if any
        name: Name the territory will be committed under
        existing: Snapshot of stored territories the polygon is checked against
        valid: Result of the last validation (None before the first close)
        snapped_vertices: Number of vertices moved by the last snap
        overlap: Result of the last overlap check
        error: Reason the last close attempt was rejected
        trace: States entered by the last transition, in order
    """

    state: SessionState = SessionState.IDLE
    polygon: tuple[LatLng, ...] = ()
    exclude_id: int | None = None
    name: str = ""
    existing: tuple[Territory, ...] = ()
    valid: bool | None = None
    snapped_vertices: int = 0
    overlap: OverlapResult | None = None
    error: InvalidReason | None = None
    trace: tuple[SessionState, ...] = ()

    @property
    def is_open(self) -> bool:
        """True until the session is committed or cancelled."""
        return self.state not in TERMINAL_STATES

    @property
    def can_commit(self) -> bool:
        return self.state == SessionState.READY

    @property
    def conflicting_name(self) -> str | None:
        """Name of the territory blocking the commit, if any."""
        if self.overlap is None:
            return None
        return self.overlap.conflicting_name

    def other_polygons(self) -> list[list[LatLng]]:
        """Polygons of every other territory with usable geometry."""
        return [
            list(t.polygon)
            for t in self.existing
            if t.id != self.exclude_id and t.has_geometry()
        ]


def _require(session: EditSession, action: str, allowed: Iterable[SessionState]) -> None:
    if session.state not in allowed:
        raise SessionStateError(session.state.value, action)


def _validation_error(polygon: list[LatLng]) -> InvalidReason | None:
    if len(polygon) < 3:
        return InvalidReason.TOO_FEW_VERTICES
    if not all(is_valid_coordinate(c.lat, c.lng) for c in polygon):
        return InvalidReason.INVALID_COORDINATE
    if find_self_intersection(to_points(polygon)) is not None:
        return InvalidReason.SELF_INTERSECTION
    return None


def _reopen(
    session: EditSession,
    polygon: list[LatLng],
    error: InvalidReason | None,
    trace: tuple[SessionState, ...],
) -> EditSession:
    return replace(
        session,
        state=SessionState.DRAWING,
        polygon=tuple(polygon),
        valid=False if error else None,
        snapped_vertices=0,
        overlap=None,
        error=error,
        trace=trace,
    )


def _run_pipeline(
    session: EditSession,
    polygon: list[LatLng],
    snapper: SnapEngine | None,
) -> EditSession:
    """Validate, snap and overlap-check a closed ring."""
    trace = [SessionState.CLOSED, SessionState.VALIDATING]

    error = _validation_error(polygon)
    if error is not None:
        trace += [SessionState.INVALID, SessionState.DRAWING]
        return _reopen(session, polygon, error, tuple(trace))

    candidate = polygon
    moved = 0
    if snapper is not None:
        trace.append(SessionState.SNAPPING)
        snapped = snapper.snap(polygon, session.other_polygons())
        trace.append(SessionState.SNAPPED)

        if changed_materially(polygon, snapped):
            trace.append(SessionState.VALIDATING)
            if _validation_error(snapped) is not None:
                trace += [SessionState.INVALID, SessionState.DRAWING]
                return _reopen(
                    session,
                    polygon,
                    InvalidReason.SELF_INTERSECTION_AFTER_SNAP,
                    tuple(trace),
                )
            moved = moved_vertices(polygon, snapped)
            candidate = snapped

    trace.append(SessionState.OVERLAP_CHECKING)
    result = find_conflict(candidate, session.existing, session.exclude_id)
    state = SessionState.CONFLICTING if result.overlaps else SessionState.READY
    trace.append(state)

    return replace(
        session,
        state=state,
        polygon=tuple(candidate),
        valid=True,
        snapped_vertices=moved,
        overlap=result,
        error=None,
        trace=tuple(trace),
    )


def _edit(
    session: EditSession,
    polygon: list[LatLng],
    snapper: SnapEngine | None,
) -> EditSession:
    """Apply a structural change, re-running the pipeline on a closed ring."""
    if session.state in CLOSED_STATES:
        if len(polygon) < 3:
            return _reopen(
                session, polygon, InvalidReason.TOO_FEW_VERTICES, (SessionState.DRAWING,)
            )
        return _run_pipeline(session, polygon, snapper)
    return replace(session, polygon=tuple(polygon), trace=())


def start_session(
    existing: Iterable[Territory],
    exclude_id: int | None = None,
    name: str = "",
    initial: Iterable[LatLng] | None = None,
    snapper: SnapEngine | None = DEFAULT_SNAPPER,
) -> EditSession:
    """Open a session for a new territory or for editing an existing one.

    Args:
        existing: Snapshot of stored territories
        exclude_id: Identifier of the territory being edited; its stored
            geometry is ignored by snapping and overlap checks
        name: Initial territory name
        initial: Existing boundary to edit; a ring of 3+ vertices is
            closed and checked immediately
        snapper: Snap engine, or None to disable snapping

    Returns:
        Session in DRAWING, or the result of closing the initial ring
    """
    session = EditSession(
        state=SessionState.DRAWING,
        exclude_id=exclude_id,
        name=name,
        existing=tuple(existing),
        trace=(SessionState.DRAWING,),
    )
    polygon = list(initial) if initial is not None else []
    if len(polygon) >= 3:
        closed = _run_pipeline(session, polygon, snapper)
        return replace(closed, trace=(SessionState.DRAWING,) + closed.trace)
    return replace(session, polygon=tuple(polygon))


def add_vertex(
    session: EditSession,
    coord: LatLng,
    snapper: SnapEngine | None = DEFAULT_SNAPPER,
) -> EditSession:
    """Append a vertex to the polygon."""
    _require(session, "add a vertex", EDITABLE_STATES)
    return _edit(session, [*session.polygon, coord], snapper)


def insert_vertex(
    session: EditSession,
    index: int,
    coord: LatLng,
    snapper: SnapEngine | None = DEFAULT_SNAPPER,
) -> EditSession:
    """Insert a vertex before position ``index``."""
    _require(session, "insert a vertex", EDITABLE_STATES)
    polygon = list(session.polygon)
    polygon.insert(index, coord)
    return _edit(session, polygon, snapper)


def move_vertex(
    session: EditSession,
    index: int,
    coord: LatLng,
    snapper: SnapEngine | None = DEFAULT_SNAPPER,
) -> EditSession:
    """Move the vertex at ``index``.

    Raises:
        IndexError: If there is no vertex at ``index``
    """
    _require(session, "move a vertex", EDITABLE_STATES)
    polygon = list(session.polygon)
    polygon[index] = coord
    return _edit(session, polygon, snapper)


def delete_vertex(
    session: EditSession,
    index: int,
    snapper: SnapEngine | None = DEFAULT_SNAPPER,
) -> EditSession:
    """Remove the vertex at ``index``.

    Raises:
        IndexError: If there is no vertex at ``index``
    """
    _require(session, "delete a vertex", EDITABLE_STATES)
    polygon = list(session.polygon)
    del polygon[index]
    return _edit(session, polygon, snapper)


def close_ring(
    session: EditSession,
    snapper: SnapEngine | None = DEFAULT_SNAPPER,
) -> EditSession:
    """Close the drawn ring and run validation, snapping and overlap checks.

    Rejections are reported on the returned session (state DRAWING with
    ``error`` set), never raised.
    """
    _require(session, "close the ring", {SessionState.DRAWING})
    polygon = list(session.polygon)
    if len(polygon) < 3:
        return _reopen(session, polygon, InvalidReason.TOO_FEW_VERTICES, (SessionState.DRAWING,))
    return _run_pipeline(session, polygon, snapper)


def refresh(
    session: EditSession,
    existing: Iterable[Territory],
    snapper: SnapEngine | None = DEFAULT_SNAPPER,
) -> EditSession:
    """Replace the territory snapshot, re-checking a closed ring against it."""
    _require(session, "refresh territories", EDITABLE_STATES)
    updated = replace(session, existing=tuple(existing))
    return _edit(updated, list(session.polygon), snapper)


def rename(session: EditSession, name: str) -> EditSession:
    """Set the name the territory will be committed under."""
    _require(session, "rename", EDITABLE_STATES)
    return replace(session, name=name, trace=())


def clear(session: EditSession) -> EditSession:
    """Discard the drawn polygon and start drawing again."""
    _require(session, "clear the polygon", EDITABLE_STATES)
    return replace(
        session,
        state=SessionState.DRAWING,
        polygon=(),
        valid=None,
        snapped_vertices=0,
        overlap=None,
        error=None,
        trace=(SessionState.DRAWING,),
    )


def cancel(session: EditSession) -> EditSession:
    """Abandon the session. Nothing is written anywhere."""
    if not session.is_open:
        raise SessionStateError(session.state.value, "cancel")
    return replace(session, state=SessionState.CANCELLED, trace=(SessionState.CANCELLED,))


def commit(
    session: EditSession,
    store: TerritoryStore,
    min_name_length: int = 2,
) -> tuple[EditSession, Territory]:
    """Hand a READY polygon to the store.

    The polygon is checked once more against the store's current territories
    so a conflict created since the snapshot was taken still blocks the
    commit. The session passed in is never modified.

    Args:
        session: Session in READY
        store: Persistence collaborator
        min_name_length: Minimum name length after trimming whitespace

    Returns:
        Tuple of (committed session, stored territory)

    Raises:
        SessionStateError: If the session is not READY
        CommitBlockedError: If the name is too short or the polygon now
            overlaps a stored territory
    """
    _require(session, "commit", {SessionState.READY})

    name = session.name.strip()
    if len(name) < min_name_length:
        raise CommitBlockedError(f"name must be at least {min_name_length} characters")

    polygon = list(session.polygon)
    result = find_conflict(polygon, store.get_existing_polygons(session.exclude_id), session.exclude_id)
    if result.overlaps:
        raise CommitBlockedError(
            f"polygon overlaps '{result.conflicting_name}'",
            conflicting_name=result.conflicting_name,
        )

    if session.exclude_id is not None:
        territory = replace(store.get(session.exclude_id), name=name, polygon=tuple(polygon))
    else:
        territory = Territory(id=None, name=name, polygon=tuple(polygon))

    stored = store.save(territory)
    committed = replace(session, state=SessionState.COMMITTED, trace=(SessionState.COMMITTED,))
    return committed, stored

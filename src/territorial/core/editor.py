"""Stateful editing facade for map adapters.

A map adapter translates user gestures (click, drag, delete, close ring) into
calls on TerritoryEditor. The editor keeps the current EditSession, applies
the pure transitions from territorial.core.session, fetches territory
snapshots from the store and logs what happened.
"""

from itertools import pairwise

from territorial.config import TerritorialSettings
from territorial.core import session as transitions
from territorial.core.session import EditSession, SessionState
from territorial.core.snapping import SnapEngine
from territorial.core.validator import find_self_intersection
from territorial.domain import LatLng, Territory, to_points
from territorial.exceptions import CommitBlockedError, SessionStateError
from territorial.io.store import TerritoryStore
from territorial.utils import SessionLogger


class TerritoryEditor:
    """Drives one editing session at a time against a territory store.

    Example:
        editor = TerritoryEditor(store)
        editor.start()
        for coord in clicks:
            editor.add_vertex(coord)
        editor.close()
        if editor.session.can_commit:
            editor.rename("Zona Norte")
            territory = editor.commit()
    """

    def __init__(
        self,
        store: TerritoryStore,
        settings: TerritorialSettings | None = None,
        session_logger: SessionLogger | None = None,
    ) -> None:
        """Initialize the editor.

        Args:
            store: Source of existing territories and target of commits
            settings: Snap and editor settings (defaults if None)
            session_logger: Event logger (created if None)
        """
        self._store = store
        self._settings = settings or TerritorialSettings()
        self._logger = session_logger or SessionLogger()
        self._session = EditSession()

        geometry = self._settings.geometry
        self._snapper: SnapEngine | None = (
            SnapEngine(threshold=geometry.snap_threshold, offset=geometry.snap_offset)
            if geometry.snap_enabled
            else None
        )

    @property
    def session(self) -> EditSession:
        """The current session value."""
        return self._session

    @property
    def logger(self) -> SessionLogger:
        return self._logger

    @property
    def snapper(self) -> SnapEngine | None:
        """Snap engine in use, or None when snapping is disabled."""
        return self._snapper

    def start(self, territory_id: int | None = None, name: str | None = None) -> EditSession:
        """Open a session, replacing any previous session that is finished.

        Args:
            territory_id: Territory to edit, or None to draw a new one
            name: Name override (defaults to the edited territory's name)

        Raises:
            SessionStateError: If a session is still open
            TerritoryNotFoundError: If territory_id is not in the store
        """
        if self._session.is_open and self._session.state != SessionState.IDLE:
            raise SessionStateError(self._session.state.value, "start a new session")

        initial: list[LatLng] | None = None
        if territory_id is not None:
            original = self._store.get(territory_id)
            initial = list(original.polygon)
            if name is None:
                name = original.name

        existing = self._store.get_existing_polygons(territory_id)
        new = transitions.start_session(
            existing,
            exclude_id=territory_id,
            name=name or "",
            initial=initial,
            snapper=self._snapper,
        )
        return self._apply(EditSession(), new)

    def add_vertex(self, coord: LatLng) -> EditSession:
        return self._apply(self._session, transitions.add_vertex(self._session, coord, self._snapper))

    def insert_vertex(self, index: int, coord: LatLng) -> EditSession:
        return self._apply(
            self._session, transitions.insert_vertex(self._session, index, coord, self._snapper)
        )

    def move_vertex(self, index: int, coord: LatLng) -> EditSession:
        return self._apply(
            self._session, transitions.move_vertex(self._session, index, coord, self._snapper)
        )

    def delete_vertex(self, index: int) -> EditSession:
        return self._apply(
            self._session, transitions.delete_vertex(self._session, index, self._snapper)
        )

    def close(self) -> EditSession:
        """Close the ring and run the validation pipeline."""
        return self._apply(self._session, transitions.close_ring(self._session, self._snapper))

    def refresh(self) -> EditSession:
        """Re-read the store and re-check the polygon against it."""
        existing = self._store.get_existing_polygons(self._session.exclude_id)
        return self._apply(
            self._session, transitions.refresh(self._session, existing, self._snapper)
        )

    def rename(self, name: str) -> EditSession:
        return self._apply(self._session, transitions.rename(self._session, name))

    def clear(self) -> EditSession:
        return self._apply(self._session, transitions.clear(self._session))

    def cancel(self) -> EditSession:
        """Abandon the session without touching the store."""
        previous = self._session
        self._apply(previous, transitions.cancel(previous))
        self._logger.log_cancel(len(previous.polygon))
        return self._session

    def commit(self) -> Territory:
        """Commit the READY polygon to the store.

        If the store has gained a conflicting territory since the session
        started, the session moves to CONFLICTING and the error is re-raised.

        Returns:
            Territory as stored

        Raises:
            SessionStateError: If the session is not READY
            CommitBlockedError: If the name is too short or the polygon overlaps
        """
        try:
            committed, stored = transitions.commit(
                self._session,
                self._store,
                min_name_length=self._settings.editor.min_name_length,
            )
        except CommitBlockedError as e:
            self._logger.log_commit_blocked(e.reason)
            if e.conflicting_name is not None:
                self.refresh()
            raise

        self._apply(self._session, committed)
        self._logger.log_commit(stored.id, stored.name, len(stored.polygon))
        return stored

    def _apply(self, previous: EditSession, new: EditSession) -> EditSession:
        """Store the new session and log what the transition did."""
        self._session = new

        for source, target in pairwise((previous.state, *new.trace)):
            self._logger.log_transition(source.value, target.value, len(new.polygon))

        if SessionState.VALIDATING in new.trace:
            crossing = None
            if not new.valid and len(new.polygon) >= 3:
                crossing = find_self_intersection(to_points(list(new.polygon)))
            self._logger.log_validation(bool(new.valid), len(new.polygon), crossing)

        if new.valid and SessionState.SNAPPED in new.trace:
            self._logger.log_snap(new.snapped_vertices)

        if new.state == SessionState.CONFLICTING and new.overlap is not None:
            self._logger.log_conflict(new.overlap.conflicting_id, new.overlap.conflicting_name)

        return new


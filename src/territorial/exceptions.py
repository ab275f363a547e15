"""Exception hierarchy for territorial."""


class TerritorialError(Exception):
    """Base exception for all territorial errors."""

    pass


class GeometryError(TerritorialError):
    """Errors in geometric input."""

    pass


class InvalidPolygonError(GeometryError):
    """Polygon input cannot be used as a territory boundary."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Invalid polygon: {reason}")


class SessionError(TerritorialError):
    """Errors related to an editing session."""

    pass


class SessionStateError(SessionError):
    """Action not permitted in the session's current state."""

    def __init__(self, state: str, action: str) -> None:
        self.state = state
        self.action = action
        super().__init__(f"Cannot {action} while session is {state}")


class CommitBlockedError(SessionError):
    """Commit refused because the polygon or its metadata is not acceptable."""

    def __init__(self, reason: str, conflicting_name: str | None = None) -> None:
        self.reason = reason
        self.conflicting_name = conflicting_name
        super().__init__(f"Commit blocked: {reason}")


class StoreError(TerritorialError):
    """Errors related to the territory store."""

    pass


class TerritoryNotFoundError(StoreError):
    """Requested territory not found in store."""

    def __init__(self, territory_id: int) -> None:
        self.territory_id = territory_id
        super().__init__(f"Territory {territory_id} not found")


class StoreLoadError(StoreError):
    """Error loading a territory store file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load store '{path}': {reason}")


class StoreSaveError(StoreError):
    """Error saving a territory store file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to save store '{path}': {reason}")

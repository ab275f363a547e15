"""Logging utilities for territorial."""

import logging
from dataclasses import dataclass
from pathlib import Path

import structlog


@dataclass
class SessionStats:
    """Statistics accumulated over editing sessions."""

    transitions: int = 0
    validations: int = 0
    invalid_count: int = 0
    snapped_vertices: int = 0
    conflicts: int = 0
    commits: int = 0
    cancellations: int = 0


_handlers: list[logging.Handler] = []


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "INFO",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure structured logging to the console and, optionally, a file.

    Calling it again replaces the handlers installed by the previous call.

    Args:
        log_file: Path to log file (console only if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    for handler in _handlers:
        root_logger.removeHandler(handler)
        handler.close()
    _handlers.clear()

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        _handlers.append(file_handler)
        root_logger.setLevel(logging.DEBUG)
    else:
        root_logger.setLevel(getattr(logging, console_level.upper()))

    if not quiet:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(getattr(logging, console_level.upper()))
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        _handlers.append(console_handler)
    elif log_file is None:
        # Keeps logging's last-resort stderr handler silent
        _handlers.append(logging.NullHandler())

    for handler in _handlers:
        root_logger.addHandler(handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("territorial")
    logger.info("Logging initialized", log_file=str(log_file) if log_file else None)

    return logger


class SessionLogger:
    """Logger for editing session events and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None) -> None:
        self._logger = logger if logger is not None else structlog.get_logger("territorial")
        self._stats = SessionStats()

    def log_transition(self, source: str, target: str, vertices: int) -> None:
        """Log a session state change."""
        self._logger.debug(
            "Session transition",
            source=source,
            target=target,
            vertices=vertices,
        )
        self._stats.transitions += 1

    def log_validation(self, valid: bool, vertices: int, crossing: tuple[int, int] | None) -> None:
        """Log a polygon validation result."""
        self._stats.validations += 1
        if valid:
            self._logger.debug("Polygon valid", vertices=vertices)
            return
        self._logger.info(
            "Polygon invalid",
            vertices=vertices,
            crossing_edges=list(crossing) if crossing else None,
        )
        self._stats.invalid_count += 1

    def log_snap(self, moved: int) -> None:
        """Log vertices moved by snapping."""
        if moved:
            self._logger.debug("Vertices snapped", moved=moved)
        self._stats.snapped_vertices += moved

    def log_conflict(self, territory_id: int | None, territory_name: str | None) -> None:
        """Log an overlap with an existing territory."""
        self._logger.warning(
            "Overlap detected",
            territory_id=territory_id,
            territory=territory_name,
        )
        self._stats.conflicts += 1

    def log_commit(self, territory_id: int | None, name: str, vertices: int) -> None:
        """Log a committed territory."""
        self._logger.info(
            "Territory committed",
            territory_id=territory_id,
            territory=name,
            vertices=vertices,
        )
        self._stats.commits += 1

    def log_commit_blocked(self, reason: str) -> None:
        """Log a refused commit."""
        self._logger.info("Commit blocked", reason=reason)

    def log_cancel(self, vertices: int) -> None:
        """Log a cancelled session."""
        self._logger.debug("Session cancelled", vertices=vertices)
        self._stats.cancellations += 1

    @property
    def stats(self) -> SessionStats:
        """Get current session statistics."""
        return self._stats

"""Shared pytest fixtures."""

import logging

import pytest
import structlog


@pytest.fixture(autouse=True)
def restore_logging():
    """Undo handlers and structlog configuration installed by a test."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers = handlers
    root.setLevel(level)
    structlog.reset_defaults()

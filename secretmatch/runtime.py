"""Process-wide runtime state shared by the HTTP handlers."""

from __future__ import annotations

from secretmatch.core.config import Settings
from secretmatch.core.config import load_settings
from secretmatch.core.logging import setup_logging
from secretmatch.rooms.service import RendezvousService

settings = load_settings()
service = RendezvousService()


def startup() -> None:
    """Reload settings, configure logging and reset the in-memory room state."""
    global settings, service
    settings = load_settings()
    setup_logging(settings.secretmatch_log_level, settings.secretmatch_log_file)
    service = RendezvousService()


__all__ = [
    "Settings",
    "service",
    "settings",
    "startup",
]

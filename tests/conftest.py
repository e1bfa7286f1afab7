"""Shared fixtures for rendezvous server and client tests."""

from __future__ import annotations

from collections.abc import Generator

import pytest

import secretmatch.runtime as runtime
from secretmatch.core.config import Settings
from secretmatch.rooms.service import RendezvousService

SALT = "0123456789abcdef0123456789abcdef"


@pytest.fixture
def salt() -> str:
    """Fixed invite salt (32 lowercase hex characters)."""
    return SALT


@pytest.fixture
def service() -> RendezvousService:
    """Isolated service with its own empty room store."""
    return RendezvousService()


@pytest.fixture
def fresh_runtime(monkeypatch: pytest.MonkeyPatch) -> Generator[RendezvousService, None, None]:
    """Swap the process-wide service/settings for a clean instance."""
    fresh_service = RendezvousService()
    monkeypatch.setattr(runtime, "service", fresh_service)
    monkeypatch.setattr(runtime, "settings", Settings())
    yield fresh_service


@pytest.fixture
def short_hold_timeout(monkeypatch: pytest.MonkeyPatch, fresh_runtime: RendezvousService) -> float:
    """Make held requests give up after a fraction of a second."""
    timeout = 0.05
    monkeypatch.setattr(runtime, "settings", Settings(secretmatch_hold_timeout_seconds=timeout))
    return timeout

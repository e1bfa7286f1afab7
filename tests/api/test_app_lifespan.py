"""App lifespan: idle-room sweeper and uvicorn launch options."""

from __future__ import annotations

import time

import pytest
from fastapi.testclient import TestClient

import secretmatch.main as app_main
import secretmatch.runtime as runtime


def test_lifespan_sweeper_removes_idle_rooms(monkeypatch: pytest.MonkeyPatch) -> None:
    """Input: 1s TTL and sweep interval, one idle room -> Output: room swept, join then 404."""
    monkeypatch.setenv("SECRETMATCH_ROOM_TTL_SECONDS", "1")
    monkeypatch.setenv("SECRETMATCH_SWEEP_INTERVAL_SECONDS", "1")
    monkeypatch.delenv("SECRETMATCH_HOLD_TIMEOUT_SECONDS", raising=False)
    # startup() rebinds both; restore them after the test.
    monkeypatch.setattr(runtime, "settings", runtime.settings)
    monkeypatch.setattr(runtime, "service", runtime.service)

    with TestClient(app_main.app) as client:
        room_id = client.get("/api/rooms/new").text
        assert client.get("/api/health").json()["rooms"] == 1

        deadline = time.monotonic() + 5
        while client.get("/api/health").json()["rooms"] and time.monotonic() < deadline:
            time.sleep(0.1)

        assert client.get("/api/health").json()["rooms"] == 0
        response = client.get(f"/api/rooms/{room_id}/join")

    assert response.status_code == 404


def test_run_disables_access_log(monkeypatch: pytest.MonkeyPatch) -> None:
    """Input: run() -> Output: uvicorn launched without an access log."""
    calls: list[dict] = []

    def fake_run(app, **kwargs) -> None:
        calls.append({"app": app, **kwargs})

    monkeypatch.setattr(app_main.uvicorn, "run", fake_run)

    app_main.run(host="0.0.0.0", port=9000)

    assert len(calls) == 1
    assert calls[0]["app"] is app_main.app
    assert calls[0]["host"] == "0.0.0.0"
    assert calls[0]["port"] == 9000
    assert calls[0]["access_log"] is False

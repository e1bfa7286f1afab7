"""Room id generation tests."""

from __future__ import annotations

import pytest

from secretmatch.core.validation import is_room_id
from secretmatch.rooms.ids import RoomIdExhaustedError
from secretmatch.rooms.ids import RoomIdGenerator


def test_generated_id_is_eight_uppercase_letters() -> None:
    """Input: empty existing set -> Output: [A-Z]{8} id."""
    generator = RoomIdGenerator()

    for _ in range(50):
        room_id = generator.generate(set())
        assert len(room_id) == 8
        assert is_room_id(room_id)


def test_generate_resamples_on_collision(monkeypatch: pytest.MonkeyPatch) -> None:
    """Input: first two draws collide -> Output: third draw returned."""
    generator = RoomIdGenerator()
    draws = iter(["AAAAAAAA", "BBBBBBBB", "CCCCCCCC"])
    monkeypatch.setattr(generator, "draw", lambda: next(draws))

    assert generator.generate({"AAAAAAAA", "BBBBBBBB"}) == "CCCCCCCC"


def test_generate_gives_up_after_max_attempts(monkeypatch: pytest.MonkeyPatch) -> None:
    """Input: every draw collides -> Output: RoomIdExhaustedError, bounded draws."""
    generator = RoomIdGenerator(max_attempts=5)
    calls = 0

    def _always_taken() -> str:
        nonlocal calls
        calls += 1
        return "TAKENNNN"

    monkeypatch.setattr(generator, "draw", _always_taken)

    with pytest.raises(RoomIdExhaustedError):
        generator.generate({"TAKENNNN"})
    assert calls == 5


@pytest.mark.parametrize("kwargs", [{"length": 0}, {"max_attempts": 0}])
def test_generator_rejects_degenerate_configuration(kwargs: dict[str, int]) -> None:
    with pytest.raises(ValueError):
        RoomIdGenerator(**kwargs)

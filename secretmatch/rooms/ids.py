"""Human-typable room id generation."""

from __future__ import annotations

from collections.abc import Container
import secrets
import string

from secretmatch.core.validation import ROOM_ID_LENGTH

ROOM_ID_ALPHABET = string.ascii_uppercase
# 26**8 ids; hitting this many collisions in a row means the RNG is broken.
DEFAULT_MAX_ATTEMPTS = 1000


class RoomIdExhaustedError(RuntimeError):
    """Raised when no free room id was found within max_attempts draws."""


class RoomIdGenerator:
    """Draw fixed-length uppercase ids, resampling on collision."""

    def __init__(
        self,
        length: int = ROOM_ID_LENGTH,
        alphabet: str = ROOM_ID_ALPHABET,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ) -> None:
        if length < 1:
            raise ValueError("length must be >= 1")
        if max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        self._length = length
        self._alphabet = alphabet
        self._max_attempts = max_attempts

    def draw(self) -> str:
        return "".join(secrets.choice(self._alphabet) for _ in range(self._length))

    def generate(self, existing_ids: Container[str]) -> str:
        """Return an id not present in existing_ids."""
        for _ in range(self._max_attempts):
            room_id = self.draw()
            if room_id not in existing_ids:
                return room_id
        raise RoomIdExhaustedError(
            f"no free room id after {self._max_attempts} attempts"
        )


__all__ = [
    "DEFAULT_MAX_ATTEMPTS",
    "ROOM_ID_ALPHABET",
    "RoomIdExhaustedError",
    "RoomIdGenerator",
]

"""In-memory room domain models and store."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from dataclasses import field
from datetime import datetime
from datetime import timedelta
from datetime import timezone
import threading

from secretmatch.rooms.barrier import Barrier


class RoomError(Exception):
    """Base class for room-domain errors."""


class RoomNotFoundError(RoomError):
    """Raised when room_id is not a live room."""


class RoomNotReadyError(RoomError):
    """Raised when a commitment is submitted before both parties joined."""


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(slots=True)
class Room:
    """One comparison session between two participants."""

    room_id: str
    join_barrier: Barrier[None, None]
    submit_barrier: Barrier[str, bool]
    ready: bool = False
    created_at: datetime = field(default_factory=utc_now)

    def close(self) -> None:
        """Close both barriers, failing any held request."""
        self.join_barrier.close()
        self.submit_barrier.close()


class RoomStore:
    """Registry of live rooms keyed by room id."""

    def __init__(self) -> None:
        self._rooms: dict[str, Room] = {}
        self._lock = threading.RLock()

    def __len__(self) -> int:
        return len(self._rooms)

    def __contains__(self, room_id: object) -> bool:
        return room_id in self._rooms

    @contextmanager
    def locked(self) -> Iterator[None]:
        """Hold the store lock across a read-then-add sequence."""
        with self._lock:
            yield

    def add(self, room: Room) -> None:
        with self._lock:
            if room.room_id in self._rooms:
                raise ValueError(f"room_id={room.room_id} already exists")
            self._rooms[room.room_id] = room

    def get(self, room_id: str) -> Room:
        """Return the live room or raise RoomNotFoundError."""
        room = self._rooms.get(room_id)
        if room is None:
            raise RoomNotFoundError(f"room_id={room_id} not found")
        return room

    def remove(self, room_id: str) -> Room | None:
        """Drop the room if present and return it."""
        with self._lock:
            return self._rooms.pop(room_id, None)

    def room_ids(self) -> frozenset[str]:
        with self._lock:
            return frozenset(self._rooms)

    def pop_older_than(self, ttl_seconds: float, now: datetime | None = None) -> list[Room]:
        """Remove and return rooms created more than ttl_seconds before now."""
        cutoff = (now or utc_now()) - timedelta(seconds=ttl_seconds)
        with self._lock:
            expired = [room for room in self._rooms.values() if room.created_at <= cutoff]
            for room in expired:
                del self._rooms[room.room_id]
        return expired


__all__ = [
    "Room",
    "RoomError",
    "RoomNotFoundError",
    "RoomNotReadyError",
    "RoomStore",
    "utc_now",
]

"""Room lifecycle orchestration: create, join barrier, submit barrier, verdict."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
import hmac
import logging

from secretmatch.core.validation import validate_commitment
from secretmatch.core.validation import validate_room_id
from secretmatch.rooms.barrier import Barrier
from secretmatch.rooms.barrier import BarrierClosedError
from secretmatch.rooms.ids import RoomIdGenerator
from secretmatch.rooms.registry import Room
from secretmatch.rooms.registry import RoomNotFoundError
from secretmatch.rooms.registry import RoomNotReadyError
from secretmatch.rooms.registry import RoomStore

logger = logging.getLogger(__name__)

MATCH_TEXT = "good"
MISMATCH_TEXT = "bad"


@dataclass(frozen=True, slots=True)
class Verdict:
    """Equality result handed to both participants of a room."""

    match: bool

    @property
    def text(self) -> str:
        return MATCH_TEXT if self.match else MISMATCH_TEXT


class RendezvousService:
    """Pair two anonymous participants per room and compare their commitments.

    The service is the only writer of its RoomStore. Rooms are single use:
    they are destroyed once the submit barrier releases, when the held
    submitter goes away, or when they outlive the configured TTL.
    """

    def __init__(
        self,
        store: RoomStore | None = None,
        id_generator: RoomIdGenerator | None = None,
    ) -> None:
        self._store = store if store is not None else RoomStore()
        self._id_generator = id_generator if id_generator is not None else RoomIdGenerator()

    @property
    def room_count(self) -> int:
        return len(self._store)

    def get_room(self, room_id: str) -> Room:
        """Return the live room or raise RoomNotFoundError."""
        return self._store.get(room_id)

    def create_room(self) -> str:
        """Mint a free room id and register a fresh room under it."""
        with self._store.locked():
            room_id = self._id_generator.generate(self._store.room_ids())
            self._store.add(self._new_room(room_id))
        logger.info("room %s created", room_id)
        return room_id

    async def join(self, room_id: str) -> None:
        """Wait until a second participant joins the same room."""
        validate_room_id(room_id)
        room = self._store.get(room_id)
        try:
            await room.join_barrier.arrive(None)
        except BarrierClosedError as exc:
            raise RoomNotFoundError(f"room_id={room_id} not found") from exc

    async def submit(self, room_id: str, commitment: str) -> Verdict:
        """Wait for the peer's commitment and return the shared verdict."""
        validate_room_id(room_id)
        validate_commitment(commitment)
        room = self._store.get(room_id)
        if not room.ready:
            raise RoomNotReadyError(f"room_id={room_id} is not ready")
        try:
            match = await room.submit_barrier.arrive(commitment)
        except BarrierClosedError as exc:
            raise RoomNotFoundError(f"room_id={room_id} not found") from exc
        return Verdict(match=match)

    def sweep_expired(self, ttl_seconds: float, now: datetime | None = None) -> list[str]:
        """Destroy rooms older than ttl_seconds; return their ids."""
        expired = self._store.pop_older_than(ttl_seconds, now=now)
        for room in expired:
            room.close()
            logger.info("room %s expired", room.room_id)
        return [room.room_id for room in expired]

    def _new_room(self, room_id: str) -> Room:
        def release_join(_first: None, _second: None) -> None:
            room.ready = True
            logger.info("room %s paired", room_id)

        def release_submit(first: str, second: str) -> bool:
            match = hmac.compare_digest(first, second)
            self._store.remove(room_id)
            logger.info("room %s resolved match=%s", room_id, match)
            return match

        def abandon_submit() -> None:
            self._destroy(room_id, reason="submitter left before release")

        room = Room(
            room_id=room_id,
            join_barrier=Barrier(f"join:{room_id}", release_join, recoverable=True),
            submit_barrier=Barrier(
                f"submit:{room_id}",
                release_submit,
                recoverable=False,
                on_abandon=abandon_submit,
            ),
        )
        return room

    def _destroy(self, room_id: str, *, reason: str) -> None:
        room = self._store.remove(room_id)
        if room is None:
            return
        room.close()
        logger.info("room %s destroyed: %s", room_id, reason)


__all__ = [
    "MATCH_TEXT",
    "MISMATCH_TEXT",
    "RendezvousService",
    "Verdict",
]

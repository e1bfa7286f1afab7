"""Room domain package: ids, barrier, store and rendezvous service."""

from secretmatch.rooms.barrier import Barrier
from secretmatch.rooms.barrier import BarrierClosedError
from secretmatch.rooms.barrier import BarrierError
from secretmatch.rooms.barrier import BarrierReleasedError
from secretmatch.rooms.ids import RoomIdExhaustedError
from secretmatch.rooms.ids import RoomIdGenerator
from secretmatch.rooms.registry import Room
from secretmatch.rooms.registry import RoomError
from secretmatch.rooms.registry import RoomNotFoundError
from secretmatch.rooms.registry import RoomNotReadyError
from secretmatch.rooms.registry import RoomStore
from secretmatch.rooms.service import RendezvousService
from secretmatch.rooms.service import Verdict

__all__ = [
    "Barrier",
    "BarrierClosedError",
    "BarrierError",
    "BarrierReleasedError",
    "RendezvousService",
    "Room",
    "RoomError",
    "RoomIdExhaustedError",
    "RoomIdGenerator",
    "RoomNotFoundError",
    "RoomNotReadyError",
    "RoomStore",
    "Verdict",
]

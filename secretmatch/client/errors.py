"""Client-side protocol errors, one per server failure class."""

from __future__ import annotations


class ProtocolError(Exception):
    """Base class for failures while running the comparison protocol."""


class RoomNotFoundError(ProtocolError):
    """Room id unknown to the server (mistyped, finished or abandoned)."""


class RoomNotReadyError(ProtocolError):
    """Commitment submitted before both participants joined."""


class WaitTimeoutError(ProtocolError):
    """Gave up waiting for the other participant."""


class MalformedRequestError(ProtocolError):
    """Server rejected the room id or commitment shape."""


class UnexpectedResponseError(ProtocolError):
    """Server answered with a status or body outside the protocol."""

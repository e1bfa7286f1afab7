"""Peer-side orchestration of the blind equality protocol."""

from secretmatch.client.commitment import compute_commitment
from secretmatch.client.commitment import generate_salt
from secretmatch.client.errors import MalformedRequestError
from secretmatch.client.errors import ProtocolError
from secretmatch.client.errors import RoomNotFoundError
from secretmatch.client.errors import RoomNotReadyError
from secretmatch.client.errors import UnexpectedResponseError
from secretmatch.client.errors import WaitTimeoutError
from secretmatch.client.invite import InvalidInviteError
from secretmatch.client.invite import InviteLink
from secretmatch.client.invite import parse_invite
from secretmatch.client.protocol import EqualityProtocolClient

__all__ = [
    "EqualityProtocolClient",
    "InvalidInviteError",
    "InviteLink",
    "MalformedRequestError",
    "ProtocolError",
    "RoomNotFoundError",
    "RoomNotReadyError",
    "UnexpectedResponseError",
    "WaitTimeoutError",
    "compute_commitment",
    "generate_salt",
    "parse_invite",
]

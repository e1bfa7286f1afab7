"""Shape validation for room ids, commitments and salts."""

from __future__ import annotations

import regex

ROOM_ID_LENGTH = 8
SALT_HEX_LENGTH = 32
COMMITMENT_HEX_LENGTH = 64

_ROOM_ID_PATTERN = regex.compile(rf"[A-Z]{{{ROOM_ID_LENGTH}}}")
_SALT_PATTERN = regex.compile(rf"[a-z0-9]{{{SALT_HEX_LENGTH}}}")
_COMMITMENT_PATTERN = regex.compile(rf"[0-9a-f]{{{COMMITMENT_HEX_LENGTH}}}")


class MalformedInputError(ValueError):
    """Raised when an id, salt or commitment has the wrong shape."""


def is_room_id(value: str) -> bool:
    return _ROOM_ID_PATTERN.fullmatch(value) is not None


def is_salt(value: str) -> bool:
    return _SALT_PATTERN.fullmatch(value) is not None


def is_commitment(value: str) -> bool:
    return _COMMITMENT_PATTERN.fullmatch(value) is not None


def validate_room_id(value: str) -> str:
    """Return the room id unchanged or raise MalformedInputError."""
    if not is_room_id(value):
        raise MalformedInputError(
            f"room id must be {ROOM_ID_LENGTH} uppercase letters"
        )
    return value


def validate_salt(value: str) -> str:
    if not is_salt(value):
        raise MalformedInputError(
            f"salt must be {SALT_HEX_LENGTH} lowercase hex characters"
        )
    return value


def validate_commitment(value: str) -> str:
    """Return the commitment unchanged or raise MalformedInputError."""
    if not is_commitment(value):
        raise MalformedInputError(
            f"commitment must be {COMMITMENT_HEX_LENGTH} lowercase hex characters"
        )
    return value

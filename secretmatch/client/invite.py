"""Invite links carrying the room id in the path and the salt in the fragment."""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import urlsplit
from urllib.parse import urlunsplit

from secretmatch.core.validation import MalformedInputError
from secretmatch.core.validation import is_room_id
from secretmatch.core.validation import is_salt


class InvalidInviteError(MalformedInputError):
    """Raised when an invite link does not carry a room id and a salt."""


@dataclass(frozen=True, slots=True)
class InviteLink:
    """Out-of-band channel between the room creator and the joining peer."""

    base_url: str
    room_id: str
    salt: str

    @property
    def url(self) -> str:
        # The fragment is never sent to the server by an HTTP client.
        return f"{self.base_url.rstrip('/')}/{self.room_id}#{self.salt}"

    def __str__(self) -> str:
        return self.url


def parse_invite(link: str) -> InviteLink:
    """Split an invite link into base URL, room id and salt."""
    parts = urlsplit(link.strip())
    if not parts.scheme or not parts.netloc:
        raise InvalidInviteError(f"invalid invite link {link!r}: missing scheme or host")

    room_id = parts.path.strip("/")
    if parts.path != f"/{room_id}" or not is_room_id(room_id):
        raise InvalidInviteError(f"invalid invite link {link!r}: bad room id")
    if not is_salt(parts.fragment):
        raise InvalidInviteError(f"invalid invite link {link!r}: bad salt")

    base_url = urlunsplit((parts.scheme, parts.netloc, "", "", ""))
    return InviteLink(base_url=base_url, room_id=room_id, salt=parts.fragment)

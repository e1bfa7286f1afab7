"""HTTP driver for one participant of the blind equality protocol."""

from __future__ import annotations

import logging
from types import TracebackType
from typing import NoReturn

import httpx

from secretmatch.client.commitment import compute_commitment
from secretmatch.client.commitment import generate_salt
from secretmatch.client.errors import MalformedRequestError
from secretmatch.client.errors import ProtocolError
from secretmatch.client.errors import RoomNotFoundError
from secretmatch.client.errors import RoomNotReadyError
from secretmatch.client.errors import UnexpectedResponseError
from secretmatch.client.errors import WaitTimeoutError
from secretmatch.client.invite import InviteLink
from secretmatch.core.validation import is_room_id

logger = logging.getLogger(__name__)

DEFAULT_CONNECT_TIMEOUT_SECONDS = 10.0

_VERDICTS = {"good": True, "bad": False}


class EqualityProtocolClient:
    """Create, join and submit against a rendezvous server.

    Join and submit block until the other participant makes the matching
    call. ``wait_timeout_seconds`` bounds that wait on the client side;
    ``None`` leaves it to the server and the transport.
    """

    def __init__(
        self,
        base_url: str | None = None,
        *,
        http_client: httpx.Client | None = None,
        wait_timeout_seconds: float | None = None,
        connect_timeout_seconds: float = DEFAULT_CONNECT_TIMEOUT_SECONDS,
    ) -> None:
        if http_client is None:
            if base_url is None:
                raise ValueError("base_url or http_client is required")
            http_client = httpx.Client(
                base_url=base_url,
                timeout=httpx.Timeout(connect_timeout_seconds, read=wait_timeout_seconds),
            )
            self._owns_client = True
        else:
            self._owns_client = False
        self._http = http_client
        self.base_url = (base_url or str(http_client.base_url)).rstrip("/")

    def __enter__(self) -> "EqualityProtocolClient":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._http.close()

    def create_room(self) -> str:
        """Ask the server for a fresh room id."""
        response = self._get("/api/rooms/new", action="create a new room")
        if response.status_code != 200:
            raise UnexpectedResponseError(
                f"server error while trying to create a new room (status {response.status_code})"
            )
        room_id = response.text.strip()
        if not is_room_id(room_id):
            raise UnexpectedResponseError(f"server returned an invalid room id {room_id!r}")
        return room_id

    def join(self, room_id: str) -> None:
        """Block until the other participant joins room_id."""
        response = self._get(f"/api/rooms/{room_id}/join", action="join the room")
        if response.status_code == 204:
            return
        self._raise_for_status(response, room_id=room_id, waiting_for="join")

    def submit(self, room_id: str, commitment: str) -> bool:
        """Block until the other commitment arrives; return whether they match."""
        response = self._get(
            f"/api/rooms/{room_id}/submit/{commitment}",
            action="submit the string",
        )
        if response.status_code != 200:
            self._raise_for_status(response, room_id=room_id, waiting_for="submit")
        verdict = _VERDICTS.get(response.text.strip())
        if verdict is None:
            raise UnexpectedResponseError(f"unrecognized response from server {response.text!r}")
        return verdict

    def start_session(self) -> InviteLink:
        """Creator side: make a salt locally, create a room, build the invite."""
        salt = generate_salt()
        room_id = self.create_room()
        logger.info("created room %s", room_id)
        return InviteLink(base_url=self.base_url, room_id=room_id, salt=salt)

    def compare(self, invite: InviteLink, secret: str) -> bool:
        """Join the invite's room, then submit the commitment for secret."""
        self.join(invite.room_id)
        logger.info("both participants joined room %s", invite.room_id)
        commitment = compute_commitment(secret, invite.salt)
        return self.submit(invite.room_id, commitment)

    def _get(self, path: str, *, action: str) -> httpx.Response:
        try:
            return self._http.get(path)
        except httpx.TimeoutException as exc:
            raise WaitTimeoutError(f"timed out while trying to {action}") from exc
        except httpx.HTTPError as exc:
            raise ProtocolError(f"error while trying to {action}: {exc}") from exc

    @staticmethod
    def _raise_for_status(response: httpx.Response, *, room_id: str, waiting_for: str) -> NoReturn:
        status = response.status_code
        if status == 404:
            raise RoomNotFoundError(f"room {room_id} not found")
        if status == 418:
            raise RoomNotReadyError(f"room {room_id} is not ready")
        if status == 503:
            raise WaitTimeoutError(f"timed out waiting for the other person to {waiting_for}")
        if status == 400:
            raise MalformedRequestError(_error_message(response))
        raise UnexpectedResponseError(
            f"failed to {waiting_for} room {room_id} (status {status})"
        )


def _error_message(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        return response.text
    if isinstance(payload, dict) and "message" in payload:
        return str(payload["message"])
    return response.text

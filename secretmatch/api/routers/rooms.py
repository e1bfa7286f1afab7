"""Room REST routes: create, held join, held submit."""

from __future__ import annotations

from typing import NoReturn

from fastapi import APIRouter
from fastapi import Request
from fastapi import Response
from fastapi.responses import PlainTextResponse

import secretmatch.runtime as runtime
from secretmatch.api.errors import raise_api_error
from secretmatch.api.hold import ClientDisconnectedError
from secretmatch.api.hold import HoldTimeoutError
from secretmatch.api.hold import hold_until_released
from secretmatch.core.validation import MalformedInputError
from secretmatch.rooms.barrier import BarrierReleasedError
from secretmatch.rooms.ids import RoomIdExhaustedError
from secretmatch.rooms.registry import RoomNotFoundError
from secretmatch.rooms.registry import RoomNotReadyError

router = APIRouter()

# Not a registered status; the client never sees it.
CLIENT_CLOSED_REQUEST = 499


def _raise_malformed(exc: MalformedInputError, room_id: str) -> NoReturn:
    raise_api_error(
        status_code=400,
        code="MALFORMED_INPUT",
        message=str(exc),
        detail={"room_id": room_id},
    )


def _raise_room_not_found(room_id: str) -> NoReturn:
    raise_api_error(
        status_code=404,
        code="ROOM_NOT_FOUND",
        message="room not found",
        detail={"room_id": room_id},
    )


def _raise_wait_timeout(room_id: str, waiting_for: str) -> NoReturn:
    raise_api_error(
        status_code=503,
        code="WAIT_TIMEOUT",
        message=f"timed out waiting for the other person to {waiting_for}",
        detail={"room_id": room_id},
    )


def _raise_client_closed(room_id: str) -> NoReturn:
    raise_api_error(
        status_code=CLIENT_CLOSED_REQUEST,
        code="CLIENT_DISCONNECTED",
        message="client disconnected while waiting",
        detail={"room_id": room_id},
    )


@router.get("/api/rooms/new", response_class=PlainTextResponse)
async def create_room() -> str:
    """Create a room and return its id as plain text."""
    try:
        return runtime.service.create_room()
    except RoomIdExhaustedError:
        raise_api_error(
            status_code=500,
            code="ROOM_ID_EXHAUSTED",
            message="could not allocate a room id",
            detail={},
        )


@router.get("/api/rooms/{room_id}/join", status_code=204, response_class=Response)
async def join_room(room_id: str, request: Request) -> Response:
    """Hold the request until the other participant joins the room."""
    try:
        await hold_until_released(
            request.receive,
            runtime.service.join(room_id),
            timeout_seconds=runtime.settings.secretmatch_hold_timeout_seconds,
        )
    except MalformedInputError as exc:
        _raise_malformed(exc, room_id)
    except RoomNotFoundError:
        _raise_room_not_found(room_id)
    except BarrierReleasedError:
        raise_api_error(
            status_code=500,
            code="ROOM_BARRIER_RELEASED",
            message="room already has two participants",
            detail={"room_id": room_id},
        )
    except HoldTimeoutError:
        _raise_wait_timeout(room_id, "join")
    except ClientDisconnectedError:
        _raise_client_closed(room_id)
    return Response(status_code=204)


@router.get("/api/rooms/{room_id}/submit/{commitment}", response_class=PlainTextResponse)
async def submit_commitment(room_id: str, commitment: str, request: Request) -> str:
    """Hold the request until both commitments are in, then return good/bad."""
    try:
        verdict = await hold_until_released(
            request.receive,
            runtime.service.submit(room_id, commitment),
            timeout_seconds=runtime.settings.secretmatch_hold_timeout_seconds,
        )
    except MalformedInputError as exc:
        _raise_malformed(exc, room_id)
    except RoomNotFoundError:
        _raise_room_not_found(room_id)
    except RoomNotReadyError:
        raise_api_error(
            status_code=418,
            code="ROOM_NOT_READY",
            message="room is not ready",
            detail={"room_id": room_id},
        )
    except HoldTimeoutError:
        _raise_wait_timeout(room_id, "submit")
    except ClientDisconnectedError:
        _raise_client_closed(room_id)
    return verdict.text


@router.get("/api/health")
async def health() -> dict[str, object]:
    """Liveness probe with the live room count."""
    return {"status": "ok", "rooms": runtime.service.room_count}

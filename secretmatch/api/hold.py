"""Keep a request open while a barrier arrival is pending.

The arrival runs as its own task, raced against the client's disconnect and
an optional deadline. Losing the race cancels the arrival, which is how the
barrier learns that its held participant went away.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable
from collections.abc import Callable
import logging
from typing import Any
from typing import TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

Receive = Callable[[], Awaitable[dict[str, Any]]]


class HoldTimeoutError(Exception):
    """Raised when the peer did not arrive before the hold deadline."""


class ClientDisconnectedError(Exception):
    """Raised when the held client closed its connection before release."""


async def wait_for_disconnect(receive: Receive) -> None:
    """Return once the ASGI receive channel reports http.disconnect."""
    while True:
        message = await receive()
        if message["type"] == "http.disconnect":
            return


async def hold_until_released(
    receive: Receive,
    operation: Awaitable[T],
    *,
    timeout_seconds: float | None = None,
) -> T:
    """Await operation unless the client disconnects or the deadline passes."""
    operation_task = asyncio.ensure_future(operation)
    disconnect_task = asyncio.ensure_future(wait_for_disconnect(receive))
    try:
        done, _ = await asyncio.wait(
            {operation_task, disconnect_task},
            timeout=timeout_seconds,
            return_when=asyncio.FIRST_COMPLETED,
        )
    except asyncio.CancelledError:
        operation_task.cancel()
        raise
    finally:
        disconnect_task.cancel()

    if operation_task in done:
        return operation_task.result()

    operation_task.cancel()
    try:
        await operation_task
    except asyncio.CancelledError:
        pass
    else:
        # Released in the same tick the client left or the deadline hit.
        return operation_task.result()

    if disconnect_task in done:
        logger.debug("held client disconnected")
        raise ClientDisconnectedError("client disconnected while held")
    raise HoldTimeoutError(f"peer did not arrive within {timeout_seconds} seconds")


__all__ = [
    "ClientDisconnectedError",
    "HoldTimeoutError",
    "hold_until_released",
    "wait_for_disconnect",
]

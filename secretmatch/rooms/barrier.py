"""One-shot two-party rendezvous gate for held requests.

The first arrival suspends on a future; the second arrival computes the joint
outcome, resolves the held future and returns the same outcome, all inside
one critical section with no suspension point. Cancelling the held arrival
(client disconnect, deadline) abandons the slot: a recoverable barrier goes
back to empty, a non-recoverable one closes and fires ``on_abandon``.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from dataclasses import dataclass
import logging
import threading
from typing import Generic
from typing import TypeVar

logger = logging.getLogger(__name__)

PayloadT = TypeVar("PayloadT")
OutcomeT = TypeVar("OutcomeT")

EMPTY = "empty"
WAITING = "waiting"
RELEASED = "released"
CLOSED = "closed"


class BarrierError(Exception):
    """Base class for barrier errors."""


class BarrierReleasedError(BarrierError):
    """Raised on an arrival after the barrier already paired two parties."""


class BarrierClosedError(BarrierError):
    """Raised on an arrival at (or while held on) a closed barrier."""


@dataclass(slots=True)
class HeldArrival(Generic[PayloadT, OutcomeT]):
    """The first arrival's payload and the future its request waits on."""

    payload: PayloadT
    future: asyncio.Future[OutcomeT]
    loop: asyncio.AbstractEventLoop


def _settle(
    held: HeldArrival[PayloadT, OutcomeT],
    *,
    outcome: OutcomeT | None = None,
    error: BaseException | None = None,
) -> None:
    """Resolve the held future on its own loop, waking it from any thread."""

    def resolve() -> None:
        if held.future.done():
            return
        if error is not None:
            held.future.set_exception(error)
        else:
            held.future.set_result(outcome)

    try:
        running = asyncio.get_running_loop()
    except RuntimeError:
        running = None
    if running is held.loop:
        resolve()
    elif not held.loop.is_closed():
        held.loop.call_soon_threadsafe(resolve)


class Barrier(Generic[PayloadT, OutcomeT]):
    """Pair exactly two arrivals and release both with one outcome."""

    def __init__(
        self,
        name: str,
        release: Callable[[PayloadT, PayloadT], OutcomeT],
        *,
        recoverable: bool,
        on_abandon: Callable[[], None] | None = None,
    ) -> None:
        self.name = name
        self._release = release
        self._recoverable = recoverable
        self._on_abandon = on_abandon
        self._lock = threading.Lock()
        self._state = EMPTY
        self._held: HeldArrival[PayloadT, OutcomeT] | None = None

    @property
    def state(self) -> str:
        return self._state

    @property
    def recoverable(self) -> bool:
        return self._recoverable

    async def arrive(self, payload: PayloadT) -> OutcomeT:
        """Hold the caller until a peer arrives, or release both if one is held."""
        fire_abandon = False
        with self._lock:
            held = self._held
            if held is not None and held.future.done():
                # Held request was cancelled but its abandon has not run yet.
                fire_abandon = self._abandon_locked(held)
                held = None

            if self._state == CLOSED:
                error: BarrierError | None = BarrierClosedError(f"{self.name} barrier is closed")
            elif self._state == RELEASED:
                error = BarrierReleasedError(f"{self.name} barrier already released")
            else:
                error = None

            if error is None and held is not None:
                self._held = None
                self._state = RELEASED
                try:
                    outcome = self._release(held.payload, payload)
                except Exception as exc:
                    _settle(held, error=exc)
                    raise
                _settle(held, outcome=outcome)
                logger.debug("%s barrier released", self.name)
                return outcome

            if error is None:
                loop = asyncio.get_running_loop()
                held = HeldArrival(payload=payload, future=loop.create_future(), loop=loop)
                self._held = held
                self._state = WAITING

        if fire_abandon:
            self._fire_on_abandon()
        if error is not None:
            raise error

        try:
            return await held.future
        except asyncio.CancelledError:
            self.abandon(held)
            raise

    def abandon(self, held: HeldArrival[PayloadT, OutcomeT]) -> None:
        """Drop a held arrival whose request went away before release."""
        with self._lock:
            fire_abandon = self._abandon_locked(held)
        if fire_abandon:
            self._fire_on_abandon()

    def close(self) -> None:
        """Close the barrier and fail a held arrival with BarrierClosedError."""
        with self._lock:
            held = self._held
            self._held = None
            if self._state != RELEASED:
                self._state = CLOSED
            if held is not None:
                _settle(held, error=BarrierClosedError(f"{self.name} barrier is closed"))

    def _abandon_locked(self, held: HeldArrival[PayloadT, OutcomeT]) -> bool:
        if self._held is not held:
            return False
        self._held = None
        if self._recoverable:
            self._state = EMPTY
            logger.debug("%s barrier reset after held arrival left", self.name)
            return False
        self._state = CLOSED
        logger.debug("%s barrier closed after held arrival left", self.name)
        return True

    def _fire_on_abandon(self) -> None:
        if self._on_abandon is not None:
            self._on_abandon()


__all__ = [
    "Barrier",
    "BarrierClosedError",
    "BarrierError",
    "BarrierReleasedError",
    "CLOSED",
    "EMPTY",
    "HeldArrival",
    "RELEASED",
    "WAITING",
]

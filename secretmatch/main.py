"""FastAPI application entrypoint for the rendezvous server."""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi import HTTPException
from fastapi import Request
from fastapi.responses import JSONResponse
import uvicorn

import secretmatch.runtime as runtime
from secretmatch.api.errors import handle_http_exception
from secretmatch.api.routers.rooms import router as rooms_router

logger = logging.getLogger(__name__)


async def _sweep_loop() -> None:
    """Periodically destroy rooms that outlived the configured TTL."""
    while True:
        await asyncio.sleep(runtime.settings.secretmatch_sweep_interval_seconds)
        expired = runtime.service.sweep_expired(runtime.settings.secretmatch_room_ttl_seconds)
        if expired:
            logger.info("swept %d idle rooms", len(expired))


@asynccontextmanager
async def lifespan(_: FastAPI):
    runtime.startup()
    logger.info("rendezvous server started env=%s", runtime.settings.secretmatch_app_env)
    sweeper = asyncio.create_task(_sweep_loop())
    try:
        yield
    finally:
        sweeper.cancel()
        try:
            await sweeper
        except asyncio.CancelledError:
            pass


app = FastAPI(lifespan=lifespan)
app.include_router(rooms_router)


@app.exception_handler(HTTPException)
async def handle_http_exception_route(request: Request, exc: HTTPException) -> JSONResponse:
    """Adapter used by FastAPI exception handling."""
    return await handle_http_exception(request, exc)


def run(host: str | None = None, port: int | None = None) -> None:
    """Serve the app with uvicorn using configured host/port defaults."""
    uvicorn.run(
        app,
        host=host or runtime.settings.secretmatch_app_host,
        port=port or runtime.settings.secretmatch_app_port,
        log_level=runtime.settings.secretmatch_log_level.lower(),
        # Submit paths embed the commitment.
        access_log=False,
    )


__all__ = [
    "app",
    "handle_http_exception_route",
    "lifespan",
    "run",
]

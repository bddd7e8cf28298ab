"""Server-sent event streams for tool discovery.

Each connection drives its own async generator. sse-starlette cancels the
generator when the client goes away, which also cancels the pending
keepalive sleep, so nothing is written after a disconnect.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import AsyncIterator, Optional

from . import get_tools_manifest

logger = logging.getLogger(__name__)

ONE_SHOT_FLUSH_DELAY_SECONDS = 0.05
KEEPALIVE_INTERVAL_SECONDS = 10.0


def list_tools_event() -> dict:
    """The discovery payload, shaped for EventSourceResponse."""
    payload = {"event": "list_tools", "data": get_tools_manifest()}
    return {"event": "message", "data": json.dumps(payload)}


def keepalive_event() -> dict:
    return {"event": "ping", "data": json.dumps("keepalive")}


async def one_shot_events(flush_delay: float = ONE_SHOT_FLUSH_DELAY_SECONDS) -> AsyncIterator[dict]:
    """Emit the manifest once, then end the stream after a short flush delay."""
    yield list_tools_event()
    # Give proxies a moment to forward the event before the connection closes.
    await asyncio.sleep(flush_delay)


async def keepalive_events(interval: Optional[float] = None) -> AsyncIterator[dict]:
    """Emit the manifest, then a keepalive ping every ``interval`` seconds until cancelled.

    ``interval`` defaults to KEEPALIVE_INTERVAL_SECONDS, read when the stream starts.
    """
    if interval is None:
        interval = KEEPALIVE_INTERVAL_SECONDS
    yield list_tools_event()
    try:
        while True:
            await asyncio.sleep(interval)
            yield keepalive_event()
    except asyncio.CancelledError:
        logger.debug("Discovery stream closed by client")
        raise

"""Polling live-update channels streamed to clients as server-sent events."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

import anyio
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)

SnapshotFetcher = Callable[[], Awaitable[dict[str, Any]]]


class ChannelState(str, Enum):
    CONNECTING = "connecting"
    OPEN = "open"
    CLOSED = "closed"


@dataclass(frozen=True)
class ChannelFrame:
    """One message pushed to the client; ``event`` is ``None`` for snapshots."""

    data: dict[str, Any]
    event: str | None = None

    @property
    def is_error(self) -> bool:
        return self.event == "error"


class LiveUpdateChannel:
    """Push a full snapshot on open and then once every ``interval`` seconds.

    Frames are buffered one deep: a client that falls behind only ever sees the
    most recent snapshot. Closing the channel cancels the tick task at once;
    a fetch already running may finish but its result is dropped.
    """

    def __init__(
        self,
        fetch_snapshot: SnapshotFetcher,
        *,
        interval: float,
        name: str = "live-update",
        error_message: str = "Failed to fetch snapshot",
    ) -> None:
        if interval <= 0:
            raise ValueError("interval must be positive")
        self._fetch_snapshot = fetch_snapshot
        self._interval = interval
        self._name = name
        self._error_message = error_message
        self._frames: asyncio.Queue[ChannelFrame] = asyncio.Queue(maxsize=1)
        self._task: asyncio.Task[None] | None = None
        self.state = ChannelState.CONNECTING

    @property
    def name(self) -> str:
        return self._name

    async def open(self) -> None:
        """Send the initial snapshot and start the repeating tick."""

        if self.state is not ChannelState.CONNECTING:
            raise RuntimeError(f"Channel {self._name} cannot be opened twice")

        self.state = ChannelState.OPEN
        logger.info("Live-update channel %s opened", self._name)
        await self._tick()
        if self.state is ChannelState.OPEN:
            self._task = asyncio.create_task(self._run(), name=f"{self._name}-ticker")

    def close(self) -> None:
        """Stop ticking; safe to call more than once."""

        if self.state is ChannelState.CLOSED:
            return
        self.state = ChannelState.CLOSED
        if self._task is not None:
            self._task.cancel()
            self._task = None
        logger.info("Live-update channel %s closed", self._name)

    async def next_frame(self) -> ChannelFrame:
        """Wait for the next frame to deliver."""

        return await self._frames.get()

    async def frames(self) -> AsyncIterator[ChannelFrame]:
        """Open the channel and yield frames until the consumer goes away."""

        try:
            if self.state is ChannelState.CONNECTING:
                await self.open()
            while self.state is ChannelState.OPEN:
                yield await self._frames.get()
        finally:
            self.close()

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            await self._tick()

    async def _tick(self) -> None:
        try:
            frame = ChannelFrame(data=await self._fetch_snapshot())
        except Exception as exc:
            # A failed tick is reported to the client and the channel keeps going.
            logger.warning("Live-update channel %s tick failed: %s", self._name, exc)
            frame = ChannelFrame(data={"error": self._error_message}, event="error")

        if self.state is not ChannelState.OPEN:
            return
        if self._frames.full():
            self._frames.get_nowait()
        self._frames.put_nowait(frame)


def database_snapshot(
    build: Callable[[Session], dict[str, Any]],
    session_factory: Callable[[], Session] | None = None,
) -> SnapshotFetcher:
    """Return a fetcher running ``build`` on a fresh session in a worker thread."""

    def _run() -> dict[str, Any]:
        if session_factory is None:
            from portfolio_api.infrastructure.database import SessionLocal

            session = SessionLocal()
        else:
            session = session_factory()
        try:
            return build(session)
        finally:
            session.close()

    async def fetch() -> dict[str, Any]:
        return await anyio.to_thread.run_sync(_run)

    return fetch


def encode_sse(frame: ChannelFrame) -> str:
    """Render ``frame`` using the ``text/event-stream`` wire format."""

    payload = json.dumps(frame.data, default=str)
    if frame.event:
        return f"event: {frame.event}\ndata: {payload}\n\n"
    return f"data: {payload}\n\n"


async def stream_sse(channel: LiveUpdateChannel) -> AsyncIterator[str]:
    """Yield every frame of ``channel`` encoded as server-sent events."""

    async for frame in channel.frames():
        yield encode_sse(frame)


__all__ = [
    "ChannelFrame",
    "ChannelState",
    "LiveUpdateChannel",
    "SnapshotFetcher",
    "database_snapshot",
    "encode_sse",
    "stream_sse",
]

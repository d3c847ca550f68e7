"""Wrap live-update channels into server-sent event responses."""

from fastapi.responses import StreamingResponse
from starlette.types import Receive, Scope, Send

from portfolio_api.infrastructure.realtime import LiveUpdateChannel, stream_sse

SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",
}


class ChannelStreamingResponse(StreamingResponse):
    """Event stream that closes its channel however the response ends.

    Depending on the ASGI spec version a disconnect either cancels the body
    iterator or surfaces as a failed ``send``; the channel is closed in both
    cases.
    """

    def __init__(self, channel: LiveUpdateChannel) -> None:
        super().__init__(
            stream_sse(channel),
            media_type="text/event-stream",
            headers=SSE_HEADERS,
        )
        self.channel = channel

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        try:
            await super().__call__(scope, receive, send)
        finally:
            self.channel.close()


def sse_response(channel: LiveUpdateChannel) -> ChannelStreamingResponse:
    """Stream ``channel`` until the client disconnects."""

    return ChannelStreamingResponse(channel)


__all__ = ["ChannelStreamingResponse", "SSE_HEADERS", "sse_response"]

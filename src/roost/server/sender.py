"""ASGI response sending — translates roost responses to ASGI messages.

Buffered responses go out as one body message. Streaming responses send
headers first and then one message per chunk; once the headers are out
a failed write can only be logged.
"""

import logging

from roost._internal.asgi import Send
from roost.errors import WriteFailure
from roost.http.response import Response, StreamingResponse

logger = logging.getLogger("roost.server")


def _raw_headers(
    content_type: str, headers: tuple[tuple[str, str], ...]
) -> list[tuple[bytes, bytes]]:
    raw = [(b"content-type", content_type.encode("latin-1"))]
    raw.extend(
        (name.lower().encode("latin-1"), value.encode("latin-1")) for name, value in headers
    )
    return raw


async def send_response(response: Response, send: Send, *, head: bool = False) -> None:
    """Translate a buffered Response into ASGI send() calls."""
    body = response.body_bytes
    raw_headers = _raw_headers(response.content_type, response.headers)
    raw_headers.append((b"content-length", str(len(body)).encode("latin-1")))

    await send(
        {
            "type": "http.response.start",
            "status": response.status,
            "headers": raw_headers,
        }
    )
    await send(
        {
            "type": "http.response.body",
            "body": b"" if head else body,
        }
    )


async def send_streaming_response(
    response: StreamingResponse, send: Send, *, head: bool = False
) -> None:
    """Send a streaming response chunk by chunk.

    Write failures after ``http.response.start`` are logged as
    :class:`WriteFailure` and end the response; they never propagate.
    """
    raw_headers = _raw_headers(response.content_type, response.headers)
    if response.content_length is not None:
        raw_headers.append((b"content-length", str(response.content_length).encode("latin-1")))

    await send(
        {
            "type": "http.response.start",
            "status": response.status,
            "headers": raw_headers,
        }
    )

    try:
        if not head:
            for chunk in response.chunks:
                if chunk:
                    await send({"type": "http.response.body", "body": chunk, "more_body": True})
        await send({"type": "http.response.body", "body": b"", "more_body": False})
    except OSError as exc:
        failure = WriteFailure(f"response write failed: {exc}")
        logger.warning("%s", failure)

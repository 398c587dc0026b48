"""HTTP responses with a chainable .with_header() API.

Each call returns a new response; middleware never mutates one in place.
"""

from collections.abc import Iterator
from typing import TypeAlias
from dataclasses import dataclass, replace


@dataclass(frozen=True, slots=True)
class Response:
    """A fully buffered HTTP response.

    Used for error pages and anything small enough to build in one go.
    """

    body: str | bytes = ""
    status: int = 200
    content_type: str = "text/plain; charset=utf-8"
    headers: tuple[tuple[str, str], ...] = ()

    def with_header(self, name: str, value: str) -> "Response":
        """Return a new Response with an additional header."""
        return replace(self, headers=(*self.headers, (name, value)))

    @property
    def body_bytes(self) -> bytes:
        """Body as bytes."""
        if isinstance(self.body, str):
            return self.body.encode("utf-8")
        return self.body

    @property
    def text(self) -> str:
        """Body as string."""
        if isinstance(self.body, bytes):
            return self.body.decode("utf-8")
        return self.body

    def header(self, name: str) -> str | None:
        """First value of a header, case-insensitive."""
        name = name.lower()
        for key, value in self.headers:
            if key.lower() == name:
                return value
        return None


@dataclass(frozen=True, slots=True)
class StreamingResponse:
    """A response whose body is produced chunk by chunk.

    Headers go out first, then each chunk as its own body message.
    ``content_length`` is sent when the total size is known up front;
    otherwise the server falls back to chunked transfer encoding.

    Supports the same ``.with_header()`` chaining as ``Response``
    so middleware can modify headers without knowing the body is streamed.
    """

    chunks: Iterator[bytes]
    status: int = 200
    content_type: str = "application/octet-stream"
    headers: tuple[tuple[str, str], ...] = ()
    content_length: int | None = None

    def with_header(self, name: str, value: str) -> "StreamingResponse":
        return replace(self, headers=(*self.headers, (name, value)))


AnyResponse: TypeAlias = Response | StreamingResponse

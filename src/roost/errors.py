"""Roost exception hierarchy.

Shared by the asset resolver, the request pipeline, the bootstrapper
and the launch coordinator so every module raises and catches the
same types.
"""

from dataclasses import dataclass


class RoostError(Exception):
    """Base for all roost-specific errors."""


class ConfigurationError(RoostError):
    """Raised when launcher configuration or the asset tree is unusable.

    Raised at construction time, before any socket is bound.
    """


@dataclass(frozen=True, slots=True)
class HTTPError(RoostError):
    """An error that maps directly to an HTTP status code.

    Raised by the resolver or route handlers. The request pipeline
    catches these and turns them into plain-text responses.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """404 — neither the requested asset nor the fallback document exists."""

    def __init__(self, detail: str = "404 page not found") -> None:
        super().__init__(status=404, detail=detail)


class ReadFailure(HTTPError):  # noqa: N818
    """500 — no bytes could be read while sniffing an asset's content type."""

    def __init__(self, detail: str = "could not read file") -> None:
        super().__init__(status=500, detail=detail)


class MethodNotAllowed(HTTPError):  # noqa: N818
    """405 — the route table has no handler for this method."""

    def __init__(self, allowed: frozenset[str]) -> None:
        allow_value = ", ".join(sorted(allowed))
        super().__init__(
            status=405,
            detail=f"Method not allowed. Allowed methods: {allow_value}",
            headers=(("Allow", allow_value),),
        )


class WriteFailure(RoostError):  # noqa: N818
    """The client went away while a response body was being streamed.

    Never surfaced to the client: the response has already started.
    """


class BindExhausted(RoostError):  # noqa: N818
    """Every port-bind attempt failed. Fatal to the launcher."""

    def __init__(self, host: str, attempts: int) -> None:
        self.host = host
        self.attempts = attempts
        super().__init__(f"could not bind to any port on {host} after {attempts} attempts")


class LaunchFailure(RoostError):  # noqa: N818
    """The OS helper that opens the browser could not be started.

    Advisory only: the server keeps running and the user opens the URL by hand.
    """

    def __init__(self, url: str, reason: str = "") -> None:
        self.url = url
        self.reason = reason
        message = f"could not open browser at {url}"
        super().__init__(f"{message}: {reason}" if reason else message)

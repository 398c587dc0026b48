"""Immutable HTTP request.

Roost only routes on method and path, so that is all a request carries
besides its headers.
"""

from dataclasses import dataclass

from roost._internal.asgi import Scope


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request, created once per inbound call."""

    method: str
    path: str
    headers: tuple[tuple[str, str], ...] = ()

    @classmethod
    def from_asgi(cls, scope: Scope) -> "Request":
        """Build a Request from a raw ASGI HTTP scope."""
        return cls(
            method=scope["method"].upper(),
            path=scope.get("path") or "/",
            headers=tuple(
                (name.decode("latin-1").lower(), value.decode("latin-1"))
                for name, value in scope.get("headers", ())
            ),
        )

    @property
    def is_head(self) -> bool:
        return self.method == "HEAD"

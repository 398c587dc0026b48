"""Middleware protocol and Next type alias.

A middleware is any callable matching::

    async def my_mw(request: Request, next: Next) -> AnyResponse: ...

No base class required.
"""

from collections.abc import Awaitable, Callable
from typing import Protocol, TypeAlias

from roost.http.request import Request
from roost.http.response import AnyResponse

# The next handler in the middleware chain
Next: TypeAlias = Callable[[Request], Awaitable[AnyResponse]]


class Middleware(Protocol):
    """Protocol for roost middleware.

    Accepts both functions and callable objects::

        async def no_store(request: Request, next: Next) -> AnyResponse:
            response = await next(request)
            return response.with_header("Cache-Control", "no-store")
    """

    async def __call__(self, request: Request, next: Next) -> AnyResponse: ...

"""Middleware — Protocol-based, no inheritance required.

A middleware is any callable matching:
    async def mw(request: Request, next: Next) -> AnyResponse

Built-in middleware:
    CrossOriginIsolation -- COEP/COOP headers on every response
"""

from roost.middleware.isolation import CrossOriginIsolation, IsolationConfig
from roost.middleware.protocol import Middleware, Next

__all__ = [
    "CrossOriginIsolation",
    "IsolationConfig",
    "Middleware",
    "Next",
]

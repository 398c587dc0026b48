"""ASGI handler — translates ASGI scope/messages to roost types.

The only component that touches raw HTTP scopes directly. Converts the
scope to a Request, dispatches through middleware and the route table,
and sends the response back through ASGI send().
"""

from collections.abc import Awaitable, Callable, Mapping
from typing import Any, TypeAlias

from roost._internal.asgi import Scope, Send
from roost.errors import HTTPError, MethodNotAllowed
from roost.http.request import Request
from roost.http.response import AnyResponse, StreamingResponse
from roost.middleware.protocol import Next
from roost.server.errors import handle_http_error, handle_internal_error
from roost.server.sender import send_response, send_streaming_response

Handler: TypeAlias = Callable[[Request], Awaitable[AnyResponse]]


async def handle_request(
    scope: Scope,
    send: Send,
    *,
    routes: Mapping[str, Handler],
    middleware: tuple[Callable[..., Any], ...],
) -> None:
    """Process a single HTTP request through the full pipeline."""
    request = Request.from_asgi(scope)

    # Errors become responses here, inside the middleware, so every
    # layer sees (and decorates) error responses too.
    async def dispatch(req: Request) -> AnyResponse:
        handler = routes.get(req.method)
        try:
            if handler is None:
                raise MethodNotAllowed(frozenset(routes))
            return await handler(req)
        except HTTPError as exc:
            return handle_http_error(exc, req)
        except Exception as exc:
            return handle_internal_error(exc, req)

    pipeline: Next = dispatch
    for mw in reversed(middleware):

        async def make_next(req: Request, _mw: Any = mw, _next: Next = pipeline) -> AnyResponse:
            return await _mw(req, _next)

        pipeline = make_next

    response = await pipeline(request)

    if isinstance(response, StreamingResponse):
        await send_streaming_response(response, send, head=request.is_head)
    else:
        await send_response(response, send, head=request.is_head)

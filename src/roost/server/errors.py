"""Error handling pipeline for roost requests.

Maps HTTPError exceptions and unexpected failures to plain-text
responses. Per-request failures never leave the request they happened in.
"""

import logging

from roost.errors import HTTPError
from roost.http.request import Request
from roost.http.response import Response

logger = logging.getLogger("roost.server")


def handle_http_error(exc: HTTPError, request: Request) -> Response:
    """Map an HTTPError to a Response carrying its status, detail and headers."""
    if exc.status >= 500:
        logger.error("%d %s %s — %s", exc.status, request.method, request.path, exc.detail)
    else:
        logger.debug("%d %s %s — %s", exc.status, request.method, request.path, exc.detail)

    response = Response(body=exc.detail or f"Error {exc.status}", status=exc.status)
    for name, value in exc.headers:
        response = response.with_header(name, value)
    return response.with_header("X-Content-Type-Options", "nosniff")


def handle_internal_error(exc: Exception, request: Request) -> Response:
    """Handle unexpected exceptions as 500 errors."""
    logger.exception("500 %s %s", request.method, request.path, exc_info=exc)
    return Response(body="Internal Server Error", status=500)

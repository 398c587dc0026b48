"""The ASGI application that serves a bundled asset tree.

An ``AssetApp`` owns its route table and middleware outright; nothing is
registered globally, so tests can run several side by side.
"""

import logging
from collections.abc import Callable
from types import MappingProxyType
from typing import Any

from roost._internal.asgi import Receive, Scope, Send
from roost.assets.resolver import AssetResolver
from roost.assets.tree import AssetTree
from roost.config import LauncherConfig
from roost.errors import ConfigurationError
from roost.http.request import Request
from roost.http.response import StreamingResponse
from roost.middleware.isolation import CrossOriginIsolation, IsolationConfig
from roost.server.handler import Handler, handle_request

logger = logging.getLogger("roost.server")


class AssetApp:
    """ASGI 3.0 application serving every path from an :class:`AssetTree`.

    ``GET`` and ``HEAD`` resolve through :class:`AssetResolver`; any other
    method is answered with ``405``. Cross-origin isolation headers wrap
    everything::

        app = AssetApp(AssetTree.from_directory("dist"))
    """

    __slots__ = ("_middleware", "_resolver", "_routes", "config")

    def __init__(
        self,
        tree: AssetTree,
        config: LauncherConfig | None = None,
        *,
        middleware: tuple[Callable[..., Any], ...] = (),
    ) -> None:
        self.config = config or LauncherConfig()
        if tree.root != "/" + self.config.asset_root.strip("/"):
            msg = (
                f"asset tree root {tree.root!r} does not match "
                f"asset_root {self.config.asset_root!r}"
            )
            raise ConfigurationError(msg)
        if self.config.index_path not in tree:
            logger.warning("asset tree has no %s; unknown paths will 404", self.config.index_path)

        self._resolver = AssetResolver(
            tree,
            index=self.config.index,
            sniff_length=self.config.sniff_length,
        )
        self._routes: MappingProxyType[str, Handler] = MappingProxyType(
            {"GET": self._serve_asset, "HEAD": self._serve_asset}
        )
        isolation = CrossOriginIsolation(
            IsolationConfig(
                embedder_policy=self.config.embedder_policy,
                opener_policy=self.config.opener_policy,
            )
        )
        self._middleware = (isolation, *middleware)

    @property
    def resolver(self) -> AssetResolver:
        return self._resolver

    @property
    def routes(self) -> MappingProxyType[str, Handler]:
        """Method → handler. Every path goes to the same handler."""
        return self._routes

    async def _serve_asset(self, request: Request) -> StreamingResponse:
        asset = self._resolver.resolve(request.path)
        typed = self._resolver.open_typed(asset)
        return StreamingResponse(
            chunks=typed.iter_chunks(self.config.chunk_size),
            content_type=typed.content_type,
            content_length=asset.size,
        )

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return
        if scope["type"] != "http":
            return
        await handle_request(scope, send, routes=self._routes, middleware=self._middleware)

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        # Nothing to set up or tear down: the tree is loaded before serving.
        while True:
            message = await receive()
            if message["type"] == "lifespan.startup":
                await send({"type": "lifespan.startup.complete"})
            elif message["type"] == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return

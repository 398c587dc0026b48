"""Cross-origin isolation headers — COEP and COOP.

Browsers only hand out ``SharedArrayBuffer`` (and with it threaded
WebAssembly) to cross-origin isolated documents. Both headers go on
every response, errors included, so the isolation state never depends
on which branch produced the page.
"""

from dataclasses import dataclass

from roost.http.request import Request
from roost.http.response import AnyResponse
from roost.middleware.protocol import Next


@dataclass(frozen=True, slots=True)
class IsolationConfig:
    """Header values. The defaults enable cross-origin isolation."""

    embedder_policy: str = "require-corp"
    opener_policy: str = "same-origin"


class CrossOriginIsolation:
    """Add ``Cross-Origin-Embedder-Policy`` and ``Cross-Origin-Opener-Policy``.

    Usage::

        app = AssetApp(tree, middleware=(CrossOriginIsolation(),))

    ``AssetApp`` installs one from its config as the outermost layer, so
    user middleware never needs to.
    """

    __slots__ = ("config",)

    def __init__(self, config: IsolationConfig | None = None) -> None:
        self.config = config or IsolationConfig()

    async def __call__(self, request: Request, next: Next) -> AnyResponse:
        response = await next(request)
        return response.with_header(
            "Cross-Origin-Embedder-Policy", self.config.embedder_policy
        ).with_header("Cross-Origin-Opener-Policy", self.config.opener_policy)

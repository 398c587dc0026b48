"""Tests for AssetApp — routing, fallback, content types and isolation headers."""

import anyio
import pytest

from roost.app import AssetApp
from roost.assets.resolver import AssetResolver
from roost.assets.tree import AssetTree
from roost.config import LauncherConfig
from roost.errors import ConfigurationError
from roost.http.request import Request
from roost.middleware.protocol import Next
from roost.testing import TestClient

from conftest import APP_CSS, INDEX_HTML, MAIN_JS, PNG_HEADER, SAVED_GAME, WASM


def _assert_isolated(response) -> None:
    assert response.header("cross-origin-embedder-policy") == "require-corp"
    assert response.header("cross-origin-opener-policy") == "same-origin"


class TestKnownAssets:
    async def test_serves_exact_bytes(self, app: AssetApp) -> None:
        async with TestClient(app) as client:
            response = await client.get("/static/js/main.js")
        assert response.status == 200
        assert response.body == MAIN_JS
        assert response.content_type == "text/javascript; charset=utf-8"
        assert response.header("content-length") == str(len(MAIN_JS))

    async def test_wasm_content_type(self, app: AssetApp) -> None:
        async with TestClient(app) as client:
            response = await client.get("/static/engine.wasm")
        assert response.content_type == "application/wasm"
        assert response.body == WASM

    async def test_query_string_is_ignored(self, app: AssetApp) -> None:
        async with TestClient(app) as client:
            response = await client.get("/static/css/app.css?v=3")
        assert response.body == APP_CSS

    async def test_root_serves_app_shell(self, app: AssetApp) -> None:
        async with TestClient(app) as client:
            response = await client.get("/")
        assert response.status == 200
        assert response.body == INDEX_HTML
        assert response.content_type == "text/html; charset=utf-8"


class TestSinglePageFallback:
    @pytest.mark.parametrize("path", ["/no/such/route", "/game/42", "/static/missing.js"])
    async def test_unknown_paths_get_app_shell(self, app: AssetApp, path: str) -> None:
        async with TestClient(app) as client:
            response = await client.get(path)
        assert response.status == 200
        assert response.body == INDEX_HTML
        _assert_isolated(response)

    async def test_404_without_app_shell(self) -> None:
        app = AssetApp(AssetTree.from_mapping({"app.js": b"1;"}))
        async with TestClient(app) as client:
            found = await client.get("/app.js")
            missing = await client.get("/no/such/route")
        assert found.status == 200
        assert missing.status == 404
        assert missing.text == "404 page not found"
        _assert_isolated(missing)


class TestSniffing:
    async def test_png_magic_without_extension(self, app: AssetApp) -> None:
        async with TestClient(app) as client:
            response = await client.get("/icons/logo")
        assert response.status == 200
        assert response.content_type == "image/png"
        assert response.body == PNG_HEADER

    async def test_sniffed_bytes_are_not_lost(self, app: AssetApp) -> None:
        client = TestClient(app)
        response = await client.get("/games/opening.pgnx")
        assert response.content_type == "text/plain; charset=utf-8"
        assert response.body == SAVED_GAME
        # First body message is the sniff lookahead.
        assert client.chunks[0] == SAVED_GAME[:512]

    async def test_unreadable_file_is_500(self, app: AssetApp) -> None:
        async with TestClient(app) as client:
            response = await client.get("/empty")
        assert response.status == 500
        assert response.text == "could not read file"
        _assert_isolated(response)


class TestMethods:
    async def test_head_sends_headers_only(self, app: AssetApp) -> None:
        async with TestClient(app) as client:
            response = await client.head("/static/css/app.css")
        assert response.status == 200
        assert response.body == b""
        assert response.header("content-length") == str(len(APP_CSS))
        assert response.content_type == "text/css; charset=utf-8"
        _assert_isolated(response)

    @pytest.mark.parametrize("method", ["POST", "PUT", "DELETE"])
    async def test_other_methods_not_allowed(self, app: AssetApp, method: str) -> None:
        async with TestClient(app) as client:
            response = await client.request(method, "/")
        assert response.status == 405
        assert response.header("allow") == "GET, HEAD"
        _assert_isolated(response)

    def test_route_table_is_owned_and_read_only(self, app: AssetApp) -> None:
        assert set(app.routes) == {"GET", "HEAD"}
        with pytest.raises(TypeError):
            app.routes["POST"] = app.routes["GET"]  # type: ignore[index]


class TestErrorContainment:
    async def test_unexpected_error_is_500_with_headers(
        self, app: AssetApp, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        def boom(self, asset):
            raise RuntimeError("disk on fire")

        monkeypatch.setattr(AssetResolver, "open_typed", boom)
        async with TestClient(app) as client:
            response = await client.get("/static/js/main.js")
        assert response.status == 500
        assert response.text == "Internal Server Error"
        _assert_isolated(response)

    async def test_failures_do_not_leak_between_requests(self, app: AssetApp) -> None:
        async with TestClient(app) as client:
            bad = await client.get("/empty")
            good = await client.get("/static/js/main.js")
        assert bad.status == 500
        assert good.status == 200
        assert good.body == MAIN_JS


class TestConcurrency:
    async def test_concurrent_reads_do_not_interfere(self, app: AssetApp) -> None:
        expected = {
            "/static/js/main.js": MAIN_JS,
            "/games/opening.pgnx": SAVED_GAME,
            "/icons/logo": PNG_HEADER,
            "/deep/link": INDEX_HTML,
        }
        results: list[tuple[str, bytes]] = []

        async def fetch(path: str) -> None:
            response = await TestClient(app).get(path)
            results.append((path, response.body))

        async with anyio.create_task_group() as tg:
            for _ in range(25):
                for path in expected:
                    tg.start_soon(fetch, path)

        assert len(results) == 100
        for path, body in results:
            assert body == expected[path]


class TestConstruction:
    def test_tree_root_must_match_config(self, tree: AssetTree) -> None:
        with pytest.raises(ConfigurationError, match="does not match"):
            AssetApp(tree, LauncherConfig(asset_root="dist"))

    def test_missing_app_shell_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level("WARNING", logger="roost.server"):
            AssetApp(AssetTree.from_mapping({"app.js": b""}))
        assert "/build/index.html" in caplog.text

    async def test_user_middleware_runs_inside_isolation(self, tree: AssetTree) -> None:
        async def no_store(request: Request, next: Next):
            response = await next(request)
            return response.with_header("Cache-Control", "no-store")

        app = AssetApp(tree, middleware=(no_store,))
        async with TestClient(app) as client:
            response = await client.get("/")
        assert response.header("cache-control") == "no-store"
        _assert_isolated(response)

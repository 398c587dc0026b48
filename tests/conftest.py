"""Shared fixtures: a small asset bundle shaped like a real SPA build."""

import pytest

from roost.app import AssetApp
from roost.assets.tree import AssetTree
from roost.config import LauncherConfig

PNG_HEADER = b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR"
INDEX_HTML = b"<!DOCTYPE html><html><body><div id='root'></div></body></html>"
MAIN_JS = b"import('./engine.wasm');\nconsole.log('ready');\n"
APP_CSS = b"body { margin: 0; }"
WASM = b"\x00asm\x01\x00\x00\x00"
# Unknown extension, longer than the sniff window.
SAVED_GAME = b"1. e4 e5 2. Nf3 Nc6 " * 100


@pytest.fixture
def bundle() -> dict[str, bytes]:
    return {
        "index.html": INDEX_HTML,
        "static/js/main.js": MAIN_JS,
        "static/css/app.css": APP_CSS,
        "static/engine.wasm": WASM,
        "icons/logo": PNG_HEADER,
        "games/opening.pgnx": SAVED_GAME,
        "empty": b"",
    }


@pytest.fixture
def tree(bundle: dict[str, bytes]) -> AssetTree:
    return AssetTree.from_mapping(bundle)


@pytest.fixture
def app(tree: AssetTree) -> AssetApp:
    return AssetApp(tree, LauncherConfig())


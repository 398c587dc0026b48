"""Tests for the static extension table."""

import pytest

from roost.assets.mime import type_by_extension


class TestTypeByExtension:
    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            ("/build/index.html", "text/html; charset=utf-8"),
            ("/build/static/js/main.js", "text/javascript; charset=utf-8"),
            ("/build/static/js/chunk.mjs", "text/javascript; charset=utf-8"),
            ("/build/static/css/app.css", "text/css; charset=utf-8"),
            ("/build/engine.wasm", "application/wasm"),
            ("/build/manifest.json", "application/json"),
            ("/build/icons/logo.svg", "image/svg+xml"),
            ("/build/fonts/board.woff2", "font/woff2"),
            ("/build/sounds/move.mp3", "audio/mpeg"),
        ],
    )
    def test_web_types(self, path: str, expected: str) -> None:
        assert type_by_extension(path) == expected

    def test_extension_is_case_insensitive(self) -> None:
        assert type_by_extension("/build/LOGO.PNG") == "image/png"

    def test_builtin_table_fallback_gets_charset_for_text(self) -> None:
        assert type_by_extension("/build/export.csv") == "text/csv; charset=utf-8"

    def test_builtin_table_fallback_binary(self) -> None:
        assert type_by_extension("/build/bundle.zip") == "application/zip"

    @pytest.mark.parametrize(
        "path", ["/build/LICENSE", "/build/games/opening.pgnx", "/build/.hidden"]
    )
    def test_no_mapping(self, path: str) -> None:
        assert type_by_extension(path) is None

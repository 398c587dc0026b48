"""Immutable, path-addressable store of the bundled asset files.

Every key is an absolute, normalized tree path that starts with the
asset-root segment (``/build/index.html``). The tree is filled once at
startup and never mutated, so request handlers share it without locks.
"""

import logging
import posixpath
from collections.abc import Iterator, Mapping
from importlib.resources import files
from importlib.resources.abc import Traversable
from pathlib import Path
from types import MappingProxyType

from roost.errors import ConfigurationError

logger = logging.getLogger("roost.assets")


class AssetTree(Mapping[str, bytes]):
    """Read-only mapping of tree path → file bytes.

    Build one from whatever the packaging step produced::

        AssetTree.from_mapping({"index.html": b"<!doctype html>..."})
        AssetTree.from_directory("dist")
        AssetTree.from_package("roost", "build")
    """

    __slots__ = ("_entries", "root")

    def __init__(self, entries: Mapping[str, bytes], *, root: str = "build") -> None:
        self.root = "/" + root.strip("/")
        normalized: dict[str, bytes] = {}
        for path, content in entries.items():
            key = posixpath.normpath("/" + path.lstrip("/"))
            if not key.startswith(self.root + "/"):
                msg = f"asset {path!r} is outside the asset root {self.root!r}"
                raise ConfigurationError(msg)
            normalized[key] = bytes(content)
        self._entries: Mapping[str, bytes] = MappingProxyType(normalized)

    # -- Mapping protocol --

    def __getitem__(self, path: str) -> bytes:
        return self._entries[path]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, path: object) -> bool:
        return path in self._entries

    def __repr__(self) -> str:
        return f"AssetTree(root={self.root!r}, files={len(self)})"

    # -- Constructors --

    @classmethod
    def from_mapping(cls, contents: Mapping[str, bytes], *, root: str = "build") -> "AssetTree":
        """Build a tree from paths relative to the asset root."""
        prefix = "/" + root.strip("/")
        return cls(
            {f"{prefix}/{name.lstrip('/')}": content for name, content in contents.items()},
            root=root,
        )

    @classmethod
    def from_directory(cls, directory: str | Path, *, root: str = "build") -> "AssetTree":
        """Read every regular file under ``directory`` into memory."""
        base = Path(directory)
        if not base.is_dir():
            msg = f"asset directory {str(base)!r} does not exist"
            raise ConfigurationError(msg)
        contents = {
            path.relative_to(base).as_posix(): path.read_bytes()
            for path in sorted(base.rglob("*"))
            if path.is_file()
        }
        return cls.from_mapping(contents, root=root)

    @classmethod
    def from_package(cls, package: str, root: str = "build") -> "AssetTree":
        """Load the bundle shipped as package data under ``package/root``."""
        base = files(package).joinpath(root)
        if not base.is_dir():
            msg = f"package {package!r} ships no {root!r} asset directory"
            raise ConfigurationError(msg)
        contents = dict(_walk(base, ""))
        logger.debug("loaded %d assets from %s/%s", len(contents), package, root)
        return cls.from_mapping(contents, root=root)


def _walk(node: Traversable, prefix: str) -> Iterator[tuple[str, bytes]]:
    for child in node.iterdir():
        name = f"{prefix}{child.name}"
        if child.is_dir():
            yield from _walk(child, name + "/")
        elif child.is_file():
            yield name, child.read_bytes()

"""Request path → asset resolution with single-page-app fallback.

Any path the tree does not hold resolves to the app shell
(``/<root>/index.html``) so client-side routes survive a reload.
Only when the shell itself is missing does resolution fail.
"""

import io
import logging
import posixpath
from collections.abc import Iterator
from dataclasses import dataclass
from typing import BinaryIO

from roost.assets.mime import type_by_extension
from roost.assets.sniff import SNIFF_LENGTH, detect_content_type
from roost.assets.tree import AssetTree
from roost.errors import NotFound, ReadFailure

logger = logging.getLogger("roost.assets")


@dataclass(frozen=True, slots=True)
class ResolvedAsset:
    """An asset located in the tree, plus the path it was found under."""

    path: str
    content: bytes

    @property
    def size(self) -> int:
        return len(self.content)

    def open(self) -> BinaryIO:
        """A fresh read stream over the asset bytes."""
        return io.BytesIO(self.content)


@dataclass(frozen=True, slots=True)
class TypedStream:
    """An open asset stream whose content type has been settled.

    ``lookahead`` holds any bytes consumed while sniffing; they precede
    whatever is left in ``stream`` and must be sent first.
    """

    content_type: str
    lookahead: bytes
    stream: BinaryIO

    def iter_chunks(self, chunk_size: int) -> Iterator[bytes]:
        """Yield the complete body: lookahead first, then the rest of the stream."""
        if self.lookahead:
            yield self.lookahead
        while chunk := self.stream.read(chunk_size):
            yield chunk


class AssetResolver:
    """Map request paths onto an :class:`AssetTree`.

    The resolver holds no mutable state, so one instance serves every
    concurrent request.
    """

    __slots__ = ("_fallback", "_root", "_sniff_length", "tree")

    def __init__(
        self,
        tree: AssetTree,
        *,
        index: str = "index.html",
        sniff_length: int = SNIFF_LENGTH,
    ) -> None:
        self.tree = tree
        self._root = tree.root
        self._fallback = f"{tree.root}/{index.lstrip('/')}"
        self._sniff_length = sniff_length

    @property
    def fallback_path(self) -> str:
        return self._fallback

    def normalize(self, request_path: str) -> str:
        """Collapse ``.``/``..`` segments and prefix the asset root.

        ``..`` can never climb above the root: ``/../../etc`` becomes
        ``/build/etc``.
        """
        # normpath keeps a leading "//" as-is, so strip before re-anchoring.
        cleaned = posixpath.normpath("/" + request_path.lstrip("/"))
        if cleaned == "/":
            return self._root + "/"
        return self._root + cleaned

    def resolve(self, request_path: str) -> ResolvedAsset:
        """Find the asset for ``request_path``, falling back to the app shell.

        Raises:
            NotFound: neither the asset nor the fallback document exists.
        """
        path = self.normalize(request_path)
        content = self.tree.get(path)
        if content is None:
            path = self._fallback
            content = self.tree.get(path)
        if content is None:
            raise NotFound()
        return ResolvedAsset(path=path, content=content)

    def open_typed(self, asset: ResolvedAsset) -> TypedStream:
        """Open ``asset`` and settle its content type.

        The extension table wins. Without a mapping, up to ``sniff_length``
        bytes are read and sniffed; they travel on as the lookahead.

        Raises:
            ReadFailure: sniffing was needed but not a single byte could be read.
        """
        stream = asset.open()
        content_type = type_by_extension(asset.path)
        if content_type is not None:
            return TypedStream(content_type=content_type, lookahead=b"", stream=stream)

        lookahead = stream.read(self._sniff_length)
        if not lookahead:
            logger.error("could not read %s to detect its content type", asset.path)
            raise ReadFailure()
        return TypedStream(
            content_type=detect_content_type(lookahead),
            lookahead=lookahead,
            stream=stream,
        )

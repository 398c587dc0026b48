"""Content sniffing for assets whose extension has no MIME mapping.

Implements the signature table of the WHATWG MIME Sniffing Standard
(https://mimesniff.spec.whatwg.org/) over at most the first 512 bytes.
Signatures are tried in order; the first match wins. Data that matches
nothing is ``text/plain`` when it contains no binary control bytes and
``application/octet-stream`` otherwise.
"""

from dataclasses import dataclass

SNIFF_LENGTH = 512

DEFAULT_TYPE = "application/octet-stream"
TEXT_TYPE = "text/plain; charset=utf-8"

_WHITESPACE = b"\t\n\x0c\r "


@dataclass(frozen=True, slots=True)
class _Exact:
    """Data starts with ``prefix``."""

    prefix: bytes
    content_type: str

    def match(self, data: bytes, first_non_ws: int) -> str | None:
        return self.content_type if data.startswith(self.prefix) else None


@dataclass(frozen=True, slots=True)
class _Masked:
    """``data & mask == pattern`` over the pattern's length."""

    mask: bytes
    pattern: bytes
    content_type: str
    skip_whitespace: bool = False

    def match(self, data: bytes, first_non_ws: int) -> str | None:
        if self.skip_whitespace:
            data = data[first_non_ws:]
        if len(data) < len(self.pattern):
            return None
        for byte, mask, expected in zip(data, self.mask, self.pattern):
            if byte & mask != expected:
                return None
        return self.content_type


@dataclass(frozen=True, slots=True)
class _HTMLTag:
    """Case-insensitive tag after leading whitespace, ended by space or ``>``."""

    tag: bytes

    def match(self, data: bytes, first_non_ws: int) -> str | None:
        data = data[first_non_ws:]
        if len(data) < len(self.tag) + 1:
            return None
        if data[: len(self.tag)].upper() != self.tag:
            return None
        if data[len(self.tag)] not in b" >":
            return None
        return "text/html; charset=utf-8"


@dataclass(frozen=True, slots=True)
class _MP4:
    """ISO base media file whose ``ftyp`` box lists an ``mp4`` brand."""

    def match(self, data: bytes, first_non_ws: int) -> str | None:
        if len(data) < 12:
            return None
        box_size = int.from_bytes(data[:4], "big")
        if len(data) < box_size or box_size % 4 != 0:
            return None
        if data[4:8] != b"ftyp":
            return None
        for start in range(8, box_size, 4):
            if start == 12:
                # Bytes 12-15 hold the minor version, not a brand.
                continue
            if data[start : start + 3] == b"mp4":
                return "video/mp4"
        return None


@dataclass(frozen=True, slots=True)
class _Text:
    """No binary control bytes anywhere in the sample."""

    def match(self, data: bytes, first_non_ws: int) -> str | None:
        for byte in data[first_non_ws:]:
            if byte <= 0x08 or byte == 0x0B or 0x0E <= byte <= 0x1A or 0x1C <= byte <= 0x1F:
                return None
        return TEXT_TYPE


_HTML_TAGS = (
    b"<!DOCTYPE HTML",
    b"<HTML",
    b"<HEAD",
    b"<SCRIPT",
    b"<IFRAME",
    b"<H1",
    b"<DIV",
    b"<FONT",
    b"<TABLE",
    b"<A",
    b"<STYLE",
    b"<TITLE",
    b"<B",
    b"<BODY",
    b"<BR",
    b"<P",
    b"<!--",
)

_RIFF_MASK = b"\xff\xff\xff\xff\x00\x00\x00\x00\xff\xff\xff\xff"

SIGNATURES = (
    *(_HTMLTag(tag) for tag in _HTML_TAGS),
    _Masked(b"\xff\xff\xff\xff\xff", b"<?xml", "text/xml; charset=utf-8", skip_whitespace=True),
    _Exact(b"%PDF-", "application/pdf"),
    _Exact(b"%!PS-Adobe-", "application/postscript"),
    # Byte order marks
    _Masked(b"\xff\xff\x00\x00", b"\xfe\xff\x00\x00", "text/plain; charset=utf-16be"),
    _Masked(b"\xff\xff\x00\x00", b"\xff\xfe\x00\x00", "text/plain; charset=utf-16le"),
    _Masked(b"\xff\xff\xff\x00", b"\xef\xbb\xbf\x00", "text/plain; charset=utf-8"),
    # Images
    _Exact(b"\x00\x00\x01\x00", "image/x-icon"),
    _Exact(b"\x00\x00\x02\x00", "image/x-icon"),
    _Exact(b"BM", "image/bmp"),
    _Exact(b"GIF87a", "image/gif"),
    _Exact(b"GIF89a", "image/gif"),
    _Masked(_RIFF_MASK + b"\xff\xff", b"RIFF\x00\x00\x00\x00WEBPVP", "image/webp"),
    _Exact(b"\x89PNG\r\n\x1a\n", "image/png"),
    _Exact(b"\xff\xd8\xff", "image/jpeg"),
    # Audio and video
    _Masked(_RIFF_MASK, b"FORM\x00\x00\x00\x00AIFF", "audio/aiff"),
    _Exact(b"ID3", "audio/mpeg"),
    _Exact(b"OggS\x00", "application/ogg"),
    _Exact(b"MThd\x00\x00\x00\x06", "audio/midi"),
    _Masked(_RIFF_MASK, b"RIFF\x00\x00\x00\x00AVI ", "video/avi"),
    _Masked(_RIFF_MASK, b"RIFF\x00\x00\x00\x00WAVE", "audio/wave"),
    _MP4(),
    _Exact(b"\x1a\x45\xdf\xa3", "video/webm"),
    # Fonts
    _Exact(b"\x00\x01\x00\x00", "font/ttf"),
    _Exact(b"OTTO", "font/otf"),
    _Exact(b"ttcf", "font/collection"),
    _Exact(b"wOFF", "font/woff"),
    _Exact(b"wOF2", "font/woff2"),
    # Archives
    _Exact(b"\x1f\x8b\x08", "application/x-gzip"),
    _Exact(b"PK\x03\x04", "application/zip"),
    _Exact(b"Rar!\x1a\x07\x00", "application/x-rar-compressed"),
    _Exact(b"Rar!\x1a\x07\x01\x00", "application/x-rar-compressed"),
    _Exact(b"\x00asm", "application/wasm"),
    _Text(),
)


def detect_content_type(data: bytes) -> str:
    """Best-guess MIME type for a content sample.

    Only the first :data:`SNIFF_LENGTH` bytes are considered. Always returns
    a valid type; ``application/octet-stream`` when nothing matches.
    """
    data = data[:SNIFF_LENGTH]
    first_non_ws = 0
    while first_non_ws < len(data) and data[first_non_ws] in _WHITESPACE:
        first_non_ws += 1
    for signature in SIGNATURES:
        content_type = signature.match(data, first_non_ws)
        if content_type is not None:
            return content_type
    return DEFAULT_TYPE

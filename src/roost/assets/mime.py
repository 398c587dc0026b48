"""Static extension → MIME type table.

Web-app types come first with explicit charsets; everything else falls
back to the standard library's built-in table. The system's
``mime.types`` files are never consulted, so the answer for a given
extension is the same on every machine.
"""

import mimetypes
import posixpath

_WEB_TYPES: dict[str, str] = {
    ".avif": "image/avif",
    ".css": "text/css; charset=utf-8",
    ".gif": "image/gif",
    ".htm": "text/html; charset=utf-8",
    ".html": "text/html; charset=utf-8",
    ".ico": "image/x-icon",
    ".jpeg": "image/jpeg",
    ".jpg": "image/jpeg",
    ".js": "text/javascript; charset=utf-8",
    ".json": "application/json",
    ".map": "application/json",
    ".mjs": "text/javascript; charset=utf-8",
    ".mp3": "audio/mpeg",
    ".ogg": "audio/ogg",
    ".pdf": "application/pdf",
    ".png": "image/png",
    ".svg": "image/svg+xml",
    ".txt": "text/plain; charset=utf-8",
    ".wasm": "application/wasm",
    ".wav": "audio/wav",
    ".webmanifest": "application/manifest+json",
    ".webp": "image/webp",
    ".woff": "font/woff",
    ".woff2": "font/woff2",
    ".xml": "text/xml; charset=utf-8",
}

# MimeTypes() without filenames holds only the built-in defaults.
_BUILTIN = mimetypes.MimeTypes()


def type_by_extension(path: str) -> str | None:
    """MIME type for ``path``'s extension, or None when there is no mapping."""
    ext = posixpath.splitext(path)[1].lower()
    if not ext:
        return None
    if ext in _WEB_TYPES:
        return _WEB_TYPES[ext]
    guessed = _BUILTIN.types_map[True].get(ext)
    if guessed is None:
        return None
    if guessed.startswith("text/"):
        return f"{guessed}; charset=utf-8"
    return guessed

"""Launcher configuration.

LauncherConfig is a frozen dataclass, immutable after creation and fixed at
packaging time. Nothing here is read from the environment or the command line.
"""

import ipaddress
from dataclasses import dataclass

from roost.errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class LauncherConfig:
    """Launcher configuration. Immutable after creation.

    The defaults are what ``roost`` ships with. Tests override what they need::

        config = LauncherConfig(preferred_port=0, max_attempts=3)
    """

    # Server
    host: str = "localhost"
    preferred_port: int = 16810
    max_attempts: int = 10
    port_range: tuple[int, int] = (1024, 41024)  # half-open

    # Assets
    asset_root: str = "build"
    index: str = "index.html"
    sniff_length: int = 512
    chunk_size: int = 64 * 1024

    # Cross-origin isolation (SharedArrayBuffer / threaded wasm)
    embedder_policy: str = "require-corp"
    opener_policy: str = "same-origin"

    # Logging
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if not _is_loopback(self.host):
            msg = f"refusing to serve on {self.host!r}: not localhost or IPv4 loopback"
            raise ConfigurationError(msg)
        if self.max_attempts < 1:
            msg = f"max_attempts must be at least 1, got {self.max_attempts}"
            raise ConfigurationError(msg)
        low, high = self.port_range
        if not 0 < low < high <= 65536:
            msg = f"invalid port range [{low}, {high})"
            raise ConfigurationError(msg)
        if not 0 <= self.preferred_port <= 65535:
            msg = f"invalid preferred port {self.preferred_port}"
            raise ConfigurationError(msg)
        if not self.asset_root.strip("/"):
            raise ConfigurationError("asset_root must name a directory segment")
        if self.sniff_length < 1 or self.chunk_size < 1:
            raise ConfigurationError("sniff_length and chunk_size must be positive")

    @property
    def index_path(self) -> str:
        """Tree path of the fallback document, e.g. ``/build/index.html``."""
        return f"/{self.asset_root.strip('/')}/{self.index.lstrip('/')}"


def _is_loopback(host: str) -> bool:
    if host == "localhost":
        return True
    try:
        return ipaddress.IPv4Address(host).is_loopback
    except ValueError:
        return False

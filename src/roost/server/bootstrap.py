"""Server bootstrap — bind a loopback listener, then serve on it.

Policy: try the preferred port first so the app's URL is the same from
run to run; when that port is taken, draw pseudo-random ports from the
configured range until the attempt cap is spent. Only loopback hosts
are ever bound.

The bind loop runs on the serving thread itself. The outcome (the bound
address, or :class:`BindExhausted`) crosses back to the caller through a
one-shot :class:`AddressHandoff`, published only once the socket is
bound and listening, so the address is connectable the moment
:meth:`ServerBootstrapper.start` returns it.
"""

import logging
import random
import socket
import threading
import time
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import TypeAlias

from roost._internal.asgi import ASGIApp
from roost.config import LauncherConfig
from roost.errors import BindExhausted, RoostError
from roost.server.handoff import AddressHandoff

logger = logging.getLogger("roost.server")

Binder: TypeAlias = Callable[[str, int], socket.socket]


@dataclass(frozen=True, slots=True)
class BoundAddress:
    """Where the server is listening. Published once, never changes."""

    host: str
    port: int

    @property
    def url(self) -> str:
        return f"http://{self.host}:{self.port}"

    def __str__(self) -> str:
        return f"{self.host}:{self.port}"


class PortPicker:
    """Candidate ports: the preferred one, then random draws from a range.

    The generator is seeded from the clock per process, so two launchers
    started one after the other do not walk the same sequence.
    """

    __slots__ = ("_high", "_low", "_rng", "preferred")

    def __init__(
        self,
        preferred: int,
        port_range: tuple[int, int],
        *,
        rng: random.Random | None = None,
    ) -> None:
        self.preferred = preferred
        self._low, self._high = port_range
        self._rng = rng or random.Random(time.time_ns())

    def random_port(self) -> int:
        return self._rng.randrange(self._low, self._high)

    def candidates(self, attempts: int) -> Iterator[int]:
        if attempts < 1:
            return
        yield self.preferred
        for _ in range(attempts - 1):
            yield self.random_port()


def bind_listener(host: str, port: int) -> socket.socket:
    """Bind and listen on ``host:port``. Raises OSError when the port is taken."""
    return socket.create_server((host, port))


class ServerBootstrapper:
    """Acquire a loopback listener and serve an ASGI app on it.

    Usage::

        bootstrapper = ServerBootstrapper(app)
        address = bootstrapper.start()   # blocks until bound, or raises BindExhausted
        ...
        bootstrapper.wait()              # blocks for as long as the server runs
    """

    __slots__ = ("_binder", "_handoff", "_picker", "_thread", "app", "config")

    def __init__(
        self,
        app: ASGIApp,
        config: LauncherConfig | None = None,
        *,
        binder: Binder = bind_listener,
        picker: PortPicker | None = None,
    ) -> None:
        self.app = app
        self.config = config or LauncherConfig()
        self._binder = binder
        self._picker = picker or PortPicker(self.config.preferred_port, self.config.port_range)
        self._handoff: AddressHandoff[BoundAddress] = AddressHandoff()
        self._thread: threading.Thread | None = None

    def bind(self) -> tuple[socket.socket, BoundAddress]:
        """Run the bind-retry loop on the calling thread.

        Raises:
            BindExhausted: every one of ``max_attempts`` candidates failed.
        """
        host = self.config.host
        for port in self._picker.candidates(self.config.max_attempts):
            try:
                sock = self._binder(host, port)
            except OSError as exc:
                logger.warning("could not start server on %s:%d (%s)", host, port, exc)
                continue
            address = BoundAddress(host=host, port=sock.getsockname()[1])
            logger.info("listening on %s", address.url)
            return sock, address
        raise BindExhausted(host, self.config.max_attempts)

    def start(self) -> BoundAddress:
        """Start the serving thread and block until it reports its address.

        Raises:
            BindExhausted: the serving thread could not bind any port.
        """
        if self._thread is not None:
            raise RoostError("server already started")
        self._thread = threading.Thread(target=self._run, name="roost-server", daemon=True)
        self._thread.start()
        return self._handoff.wait()

    def wait(self) -> None:
        """Block until the serving thread exits (in normal operation, never)."""
        if self._thread is None:
            raise RoostError("server not started")
        self._thread.join()

    def _run(self) -> None:
        try:
            sock, address = self.bind()
        except Exception as exc:
            self._handoff.fail(exc)
            return
        self._handoff.publish(address)
        try:
            self._serve(sock)
        except Exception:
            logger.exception("server on %s crashed", address)
        else:
            logger.error("server on %s stopped", address)

    def _serve(self, sock: socket.socket) -> None:
        import uvicorn

        config = uvicorn.Config(
            self.app,
            log_config=None,
            access_log=False,
            lifespan="on",
        )
        uvicorn.Server(config).run(sockets=[sock])

"""A BrowserOpener that records URLs instead of spawning processes."""

import threading


class RecordingOpener:
    """Stand-in for the platform opener in tests.

    Pass ``error`` to simulate a helper that cannot be started::

        opener = RecordingOpener(error=FileNotFoundError("xdg-open"))
    """

    __test__ = False
    __slots__ = ("_lock", "error", "urls")

    def __init__(self, *, error: OSError | None = None) -> None:
        self.error = error
        self.urls: list[str] = []
        self._lock = threading.Lock()

    def open(self, url: str) -> None:
        with self._lock:
            self.urls.append(url)
        if self.error is not None:
            raise self.error

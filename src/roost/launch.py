"""Open the served app in the user's default browser.

The "open a URL" capability is a :class:`BrowserOpener`; the platform
implementation is picked once at startup. A helper that cannot be
started is never fatal: the URL is logged so the user can open it by hand.
"""

import logging
import subprocess
import sys
from dataclasses import dataclass
from typing import Protocol

from roost.errors import LaunchFailure

logger = logging.getLogger("roost.launch")


class BrowserOpener(Protocol):
    """Anything that can hand a URL to the OS.

    Raises ``OSError`` when the helper process cannot be started.
    """

    def open(self, url: str) -> None: ...


class CommandOpener:
    """Start ``executable *args url`` detached and do not wait for it."""

    __slots__ = ("_spawned", "args", "executable")

    def __init__(self, executable: str, *args: str) -> None:
        self.executable = executable
        self.args = args
        # Held so unreaped helpers don't trip Popen's ResourceWarning.
        self._spawned: list[subprocess.Popen[bytes]] = []

    def command(self, url: str) -> list[str]:
        return [self.executable, *self.args, url]

    def open(self, url: str) -> None:
        kwargs: dict[str, object] = {
            "stdin": subprocess.DEVNULL,
            "stdout": subprocess.DEVNULL,
            "stderr": subprocess.DEVNULL,
        }
        if sys.platform == "win32":
            kwargs["creationflags"] = (
                subprocess.DETACHED_PROCESS | subprocess.CREATE_NEW_PROCESS_GROUP
            )
        else:
            kwargs["start_new_session"] = True
        self._spawned.append(subprocess.Popen(self.command(url), **kwargs))  # noqa: S603

    def __repr__(self) -> str:
        return f"CommandOpener({' '.join((self.executable, *self.args))!r})"


def select_opener(platform: str | None = None) -> CommandOpener:
    """The platform's URL opener: ``cmd /c start``, ``open`` or ``xdg-open``."""
    platform = platform or sys.platform
    if platform == "win32":
        return CommandOpener("cmd", "/c", "start")
    if platform == "darwin":
        return CommandOpener("open")
    return CommandOpener("xdg-open")


@dataclass(frozen=True, slots=True)
class LaunchResult:
    """What happened when the browser was asked to open ``url``."""

    url: str
    error: LaunchFailure | None = None

    @property
    def opened(self) -> bool:
        return self.error is None


class LaunchCoordinator:
    """Point the default browser at the server, or tell the user where to go."""

    __slots__ = ("opener",)

    def __init__(self, opener: BrowserOpener | None = None) -> None:
        self.opener = opener or select_opener()

    def open(self, url: str) -> LaunchResult:
        try:
            self.opener.open(url)
        except OSError as exc:
            failure = LaunchFailure(url, str(exc))
            logger.warning("could not open the browser, open this page yourself: %s", url)
            logger.debug("%s", failure)
            return LaunchResult(url=url, error=failure)
        logger.info("opened %s in the default browser", url)
        return LaunchResult(url=url)

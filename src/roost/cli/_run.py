"""``roost`` — bind, serve, open the browser, then stay up.

States: binding → serving → browser opened (or not) → blocked. The only
way out is an external signal, or a fatal exit when no port can be bound
or the serving thread dies.
"""

import logging

from roost.app import AssetApp
from roost.assets.tree import AssetTree
from roost.config import LauncherConfig
from roost.errors import BindExhausted
from roost.launch import BrowserOpener, LaunchCoordinator
from roost.server.bootstrap import ServerBootstrapper

logger = logging.getLogger("roost")

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str) -> None:
    """Send roost (and uvicorn) records to stderr."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)


def run_launcher(
    config: LauncherConfig | None = None,
    *,
    tree: AssetTree | None = None,
    opener: BrowserOpener | None = None,
) -> None:
    """Run the launcher until the process is killed.

    ``tree`` defaults to the bundle shipped inside the ``roost`` package.

    Raises:
        SystemExit: with status 1 when no port could be bound, or when the
            server stops on its own; with status 0 on Ctrl+C.
    """
    config = config or LauncherConfig()
    configure_logging(config.log_level)

    if tree is None:
        tree = AssetTree.from_package("roost", config.asset_root)
    app = AssetApp(tree, config)
    bootstrapper = ServerBootstrapper(app, config)

    try:
        address = bootstrapper.start()
    except BindExhausted as exc:
        logger.critical("%s", exc)
        raise SystemExit(1) from exc

    LaunchCoordinator(opener).open(address.url)
    logger.info("press Ctrl+C or close this window to quit")

    try:
        bootstrapper.wait()
    except KeyboardInterrupt:
        logger.info("shutting down")
        raise SystemExit(0) from None
    logger.critical("server on %s is no longer running", address)
    raise SystemExit(1)

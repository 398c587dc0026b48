"""Roost — run a bundled web application as if it were a desktop app.

Serves a pre-built asset tree on a loopback port and points the default
browser at it.

Basic usage::

    from roost import AssetApp, AssetTree, ServerBootstrapper

    tree = AssetTree.from_directory("dist")
    app = AssetApp(tree)
    address = ServerBootstrapper(app).start()
    print(address.url)

Or from the shell, serving the bundle shipped inside the package::

    $ roost
"""

__version__ = "0.1.0"
__all__ = [
    "AssetApp",
    "AssetTree",
    "BindExhausted",
    "BoundAddress",
    "ConfigurationError",
    "HTTPError",
    "LaunchCoordinator",
    "LaunchFailure",
    "LauncherConfig",
    "NotFound",
    "ReadFailure",
    "RoostError",
    "ServerBootstrapper",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import roost`` from pulling in uvicorn until a server is needed.
    """
    if name == "AssetApp":
        from roost.app import AssetApp

        return AssetApp

    if name == "AssetTree":
        from roost.assets.tree import AssetTree

        return AssetTree

    if name == "LauncherConfig":
        from roost.config import LauncherConfig

        return LauncherConfig

    if name in ("BoundAddress", "ServerBootstrapper"):
        from roost.server import bootstrap

        return getattr(bootstrap, name)

    if name == "LaunchCoordinator":
        from roost.launch import LaunchCoordinator

        return LaunchCoordinator

    if name in (
        "BindExhausted",
        "ConfigurationError",
        "HTTPError",
        "LaunchFailure",
        "NotFound",
        "ReadFailure",
        "RoostError",
    ):
        from roost import errors

        return getattr(errors, name)

    msg = f"module 'roost' has no attribute {name!r}"
    raise AttributeError(msg)

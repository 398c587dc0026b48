"""Roost CLI — serve the bundled app and open it in the browser.

Entry point registered as ``roost`` in ``pyproject.toml``::

    [project.scripts]
    roost = "roost.cli:main"

The command takes no options: the asset root, the preferred port and
the attempt cap are fixed when the app is packaged.
"""

import argparse


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``roost`` command."""
    parser = argparse.ArgumentParser(
        prog="roost",
        description="Serve the bundled web app on localhost and open it in your browser.",
    )
    parser.parse_args(argv)

    from roost.cli._run import run_launcher

    run_launcher()

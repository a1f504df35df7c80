# ABOUTME: Shared Click options for findthatbook CLI commands.
# ABOUTME: Provides reusable decorators for common flags like --verbose and --timeout.

import logging

import click
from rich.console import Console
from rich.logging import RichHandler


def configure_logging(verbose: bool) -> None:
    """Route findthatbook logs through Rich; DEBUG when verbose, warnings otherwise."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )
    # httpx logs every request at INFO; keep it quiet unless debugging.
    logging.getLogger("httpx").setLevel(logging.INFO if verbose else logging.WARNING)


verbose_option = click.option(
    "-v",
    "--verbose",
    is_flag=True,
    default=False,
    help="Show debug logging, including per-candidate ranking decisions.",
)

timeout_option = click.option(
    "-t",
    "--timeout",
    type=click.FloatRange(min=0.0, min_open=True),
    default=None,
    help="Abort the search after this many seconds (default: FINDTHATBOOK_TIMEOUT or 60).",
)

# ABOUTME: CLI package for findthatbook, built on Click.
# ABOUTME: Defines the root command group and registers subcommands.

import click

from findthatbook.cli.commands import search_cmd


@click.group()
@click.version_option(package_name="findthatbook")
def cli() -> None:
    """findthatbook - find a book from whatever you remember about it."""


cli.add_command(search_cmd.search)

"""Root Typer app — global options and command group registration."""

from __future__ import annotations

from typing import Optional

import typer

from chain_cli import __version__
from chain_cli.commands import chains, config_cmd
from chain_cli.log import configure_logging

app = typer.Typer(
    name="chain-cli",
    help="CLI tool for managing chains on a node over its JSON API.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


def version_callback(value: bool) -> None:
    if value:
        print(f"chain-cli {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: Optional[bool] = typer.Option(
        None, "--version", "-V", callback=version_callback, is_eager=True, help="Show version and exit."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log HTTP traffic to stderr."),
) -> None:
    """List, create, remove and configure chains on a node."""
    configure_logging(verbose)


# Register command groups
app.add_typer(config_cmd.app, name="config")
app.add_typer(chains.app, name="chains")


def main() -> None:
    app()

"""Chain commands — list, show, create, remove, configure.

Chains live under ``/v2/chains/{type}`` on the node; ``--type`` picks the
namespace (``solana`` unless the profile says otherwise).
"""

from __future__ import annotations

from typing import Annotated

import typer
from rich.console import Console

from chain_cli.client.chains import configure_overrides
from chain_cli.client.errors import ValidationError, error_handler
from chain_cli.commands._common import (
    ChainTypeOpt,
    FormatOpt,
    ProfileOpt,
    TokenOpt,
    UrlOpt,
    chains_api,
    load_config_source,
    make_client,
    validate_format,
)
from chain_cli.models.chain import ResourcePage
from chain_cli.output.formatter import output_renderer
from chain_cli.output.presenters import ChainPresenter, ChainPresenters

app = typer.Typer(name="chains", help="Manage chains configured on the node.")
console = Console()

IdOpt = Annotated[
    str | None,
    typer.Option("--id", help="Chain ID"),
]


def _page_footer(page: ResourcePage) -> str | None:
    if not (page.has_next or page.has_prev):
        return None
    current = page.page or 1
    hints = []
    if page.has_prev:
        hints.append(f"--page {current - 1} for the previous page")
    if page.has_next:
        hints.append(f"--page {current + 1} for the next page")
    total = f" of {page.meta.count} chains" if page.meta.count is not None else ""
    return f"Page {current}{total}. Use " + ", ".join(hints) + "."


@app.command("list")
@error_handler
def list_chains(
    page: Annotated[
        int, typer.Option("--page", min=0, help="Page number (0 = node default)"),
    ] = 0,
    chain_type: ChainTypeOpt = None,
    profile: ProfileOpt = None,
    url: UrlOpt = None,
    token: TokenOpt = None,
    fmt: FormatOpt = "table",
) -> None:
    """List chains."""
    validate_format(fmt)
    with make_client(profile, url, token) as client:
        result = chains_api(client, chain_type).list_page(page)
    output_renderer(ChainPresenters.from_page(result), result.items, fmt)
    footer = _page_footer(result)
    if fmt == "table" and footer:
        console.print(f"[dim]{footer}[/]")


@app.command()
@error_handler
def show(
    chain_id: Annotated[str, typer.Argument(help="Chain ID")],
    chain_type: ChainTypeOpt = None,
    profile: ProfileOpt = None,
    url: UrlOpt = None,
    token: TokenOpt = None,
    fmt: FormatOpt = "table",
) -> None:
    """Show one chain."""
    validate_format(fmt)
    with make_client(profile, url, token) as client:
        chain = chains_api(client, chain_type).get(chain_id)
    output_renderer(ChainPresenter(chain), chain, fmt)


@app.command()
@error_handler
def create(
    source: Annotated[
        list[str] | None,
        typer.Argument(help="Chain config as a JSON string or a path to a JSON file"),
    ] = None,
    chain_id: IdOpt = None,
    chain_type: ChainTypeOpt = None,
    profile: ProfileOpt = None,
    url: UrlOpt = None,
    token: TokenOpt = None,
    fmt: FormatOpt = "table",
) -> None:
    """Create a chain: --id <chain-id> <JSON blob | JSON filepath>."""
    validate_format(fmt)
    if not source:
        raise ValidationError(
            "must pass in the chain's parameters [--id string] [JSON blob | JSON filepath]"
        )
    if not chain_id:
        raise ValidationError("missing chain ID [--id string]")
    config = load_config_source(source[0])
    with make_client(profile, url, token) as client:
        chain = chains_api(client, chain_type).create(chain_id, config)
    output_renderer(ChainPresenter(chain), chain, fmt)


@app.command()
@error_handler
def remove(
    chain_id: Annotated[
        str | None, typer.Argument(help="ID of the chain to remove"),
    ] = None,
    chain_type: ChainTypeOpt = None,
    profile: ProfileOpt = None,
    url: UrlOpt = None,
    token: TokenOpt = None,
) -> None:
    """Remove a chain."""
    if not chain_id:
        raise ValidationError("must pass the id of the chain to be removed")
    with make_client(profile, url, token) as client:
        chains_api(client, chain_type).delete(chain_id)
    console.print(f"Chain {chain_id} deleted", highlight=False)


@app.command()
@error_handler
def configure(
    params: Annotated[
        list[str] | None,
        typer.Argument(help="key=value pairs; values are parsed as JSON when possible"),
    ] = None,
    chain_id: IdOpt = None,
    chain_type: ChainTypeOpt = None,
    profile: ProfileOpt = None,
    url: UrlOpt = None,
    token: TokenOpt = None,
    fmt: FormatOpt = "table",
) -> None:
    """Update an existing chain's config: --id <chain-id> key1=value1 key2=value2 ..."""
    validate_format(fmt)
    overrides = configure_overrides(chain_id or "", params or [])
    with make_client(profile, url, token) as client:
        chain = chains_api(client, chain_type).apply_overrides(chain_id, overrides)
    output_renderer(ChainPresenter(chain), chain, fmt)

"""Config commands — manage node connection profiles."""

from __future__ import annotations

from typing import Annotated, Any, Optional

import typer
from rich.console import Console
from rich.prompt import Confirm

from chain_cli.client.errors import error_handler
from chain_cli.commands._common import FormatOpt, validate_format
from chain_cli.config.constants import DEFAULT_CHAIN_TYPE, DEFAULT_TIMEOUT
from chain_cli.config.manager import ConfigManager
from chain_cli.config.models import BackendProfile
from chain_cli.output.formatter import output

app = typer.Typer(name="config", help="Manage node connection profiles.")
console = Console()

PROFILE_COLUMNS = ["Name", "URL", "Chain Type", "Auth", "Default"]
SECRET_FIELDS = frozenset({"token", "password"})


def _get_manager() -> ConfigManager:
    return ConfigManager()


def _auth_kind(profile: BackendProfile) -> str:
    if profile.token:
        return "token"
    return "basic" if profile.username else "none"


def _masked(profile: BackendProfile) -> dict[str, Any]:
    data = profile.model_dump(exclude_none=True)
    token = data.get("token")
    if token:
        # Enough of the token to tell two apart
        data["token"] = token[:8] + "..." if len(token) > 8 else "***"
    if "password" in data:
        data["password"] = "***"
    return data


@app.command()
@error_handler
def add(
    name: Annotated[str, typer.Argument(help="Profile name")],
    url: Annotated[str, typer.Option("--url", "-u", help="Node URL")],
    token: Annotated[Optional[str], typer.Option("--token", "-t", help="API token")] = None,
    username: Annotated[Optional[str], typer.Option("--username", help="Basic auth username")] = None,
    password: Annotated[Optional[str], typer.Option("--password", help="Basic auth password")] = None,
    chain_type: Annotated[str, typer.Option("--chain-type", help="Chain type used when --type is omitted")] = DEFAULT_CHAIN_TYPE,
    timeout: Annotated[float, typer.Option("--timeout", help="Request timeout in seconds")] = DEFAULT_TIMEOUT,
    no_verify_ssl: Annotated[bool, typer.Option("--no-verify-ssl", help="Disable SSL verification")] = False,
    make_default: Annotated[bool, typer.Option("--default", help="Use this profile when --profile is omitted")] = False,
) -> None:
    """Add or replace a node profile."""
    mgr = _get_manager()
    mgr.add_profile(
        BackendProfile(
            name=name,
            url=url,
            token=token,
            username=username,
            password=password,
            verify_ssl=not no_verify_ssl,
            timeout=timeout,
            chain_type=chain_type,
        )
    )
    if make_default:
        mgr.set_default(name)
    console.print(f"[green]Profile '{name}' added.[/]")


@app.command("list")
@error_handler
def list_profiles(fmt: FormatOpt = "table") -> None:
    """List configured profiles. Secrets are never printed."""
    validate_format(fmt)
    mgr = _get_manager()
    profiles = mgr.config.profiles
    if not profiles:
        console.print("[yellow]No profiles configured. Run 'chain-cli config add' to get started.[/]")
        return

    default = mgr.config.default_profile
    rows = [
        [name, p.url, p.chain_type, _auth_kind(p), "*" if name == default else ""]
        for name, p in profiles.items()
    ]
    output(
        {"profiles": [p.model_dump(exclude_none=True, exclude=SECRET_FIELDS) for p in profiles.values()]},
        fmt,
        columns=PROFILE_COLUMNS,
        rows=rows,
        title="Node Profiles",
    )


@app.command()
@error_handler
def show(
    name: Annotated[str, typer.Argument(help="Profile name")],
    fmt: FormatOpt = "table",
) -> None:
    """Show one profile with its secrets masked."""
    validate_format(fmt)
    profile = _get_manager().require_profile(name)
    output(_masked(profile), fmt, kv=True, title=f"Profile: {name}")


@app.command("set-default")
@error_handler
def set_default(
    name: Annotated[str, typer.Argument(help="Profile name to use by default")],
) -> None:
    """Set the profile used when --profile is omitted."""
    _get_manager().set_default(name)
    console.print(f"[green]Default profile set to '{name}'.[/]")


@app.command()
@error_handler
def remove(
    name: Annotated[str, typer.Argument(help="Profile name to remove")],
    force: Annotated[bool, typer.Option("--force", help="Skip confirmation")] = False,
) -> None:
    """Remove a profile."""
    mgr = _get_manager()
    mgr.require_profile(name)
    if not force and not Confirm.ask(f"Remove profile '{name}'?"):
        console.print("Cancelled.")
        return
    mgr.remove_profile(name)
    console.print(f"[green]Profile '{name}' removed.[/]")

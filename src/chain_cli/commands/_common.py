"""Shared helpers for CLI commands — client factory, options, config sources."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated, Any

import typer

from chain_cli.client.chains import ChainsAPI
from chain_cli.client.errors import ValidationError
from chain_cli.client.http import BackendClient
from chain_cli.config.manager import ConfigManager
from chain_cli.output.formatter import FORMATS

# Shared Typer option type aliases
ProfileOpt = Annotated[
    str | None,
    typer.Option("--profile", "-p", help="Backend profile"),
]
UrlOpt = Annotated[
    str | None,
    typer.Option("--url", help="Backend URL override"),
]
TokenOpt = Annotated[
    str | None,
    typer.Option("--token", help="API token override"),
]
FormatOpt = Annotated[
    str,
    typer.Option("--format", "-f", help=f"Output format ({', '.join(FORMATS)})"),
]
ChainTypeOpt = Annotated[
    str | None,
    typer.Option("--type", help="Chain type, e.g. solana (defaults to the profile's)"),
]


def make_client(
    profile: str | None,
    url: str | None,
    token: str | None,
) -> BackendClient:
    """Create a BackendClient from CLI options, env vars, or config profile."""
    mgr = ConfigManager()
    resolved = mgr.resolve_profile(profile_name=profile, url=url, token=token)
    return BackendClient(resolved)


def chains_api(client: BackendClient, chain_type: str | None) -> ChainsAPI:
    return ChainsAPI(client, chain_type or client.profile.chain_type)


def validate_format(fmt: str) -> str:
    if fmt not in FORMATS:
        raise ValidationError(
            f"Unknown output format '{fmt}'. Choose from: {', '.join(FORMATS)}."
        )
    return fmt


def load_config_source(source: str) -> dict[str, Any]:
    """Load a chain config from a JSON string or a path to a JSON file.

    The argument is tried as JSON first; anything that does not parse is
    treated as a file path.
    """
    try:
        data = json.loads(source)
    except json.JSONDecodeError:
        path = Path(source)
        if not path.is_file():
            raise ValidationError(
                f"Config is neither valid JSON nor an existing file: {source}"
            ) from None
        try:
            data = json.loads(path.read_text())
        except OSError as exc:
            raise ValidationError(f"Cannot read config file {path}: {exc}") from exc
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise ValidationError(f"Invalid JSON in config file {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ValidationError("Chain config must be a JSON object.")
    result: dict[str, Any] = data
    return result

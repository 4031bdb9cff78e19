"""Chains API: list, create, remove and reconfigure chains on the node."""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from typing import Any

import httpx

from chain_cli.client.errors import DecodeError, ValidationError
from chain_cli.client.http import BackendClient
from chain_cli.config.constants import CHAINS_API_BASE
from chain_cli.models.chain import (
    ChainResource,
    ResourcePage,
    decode_chain,
    decode_chain_page,
)
from chain_cli.patch import Override, merge_config, parse_overrides

logger = logging.getLogger(__name__)

CONFIGURE_USAGE = (
    "usage: chain-cli chains configure --id <chain-id> key1=value1 key2=value2 ..."
)


def configure_overrides(chain_id: str, tokens: Sequence[str]) -> list[Override]:
    """Check a configure request and parse its tokens, without any I/O."""
    if not chain_id:
        raise ValidationError(f"missing chain ID ({CONFIGURE_USAGE})")
    if not tokens:
        raise ValidationError(
            "must pass in at least one chain configuration parameter "
            f"({CONFIGURE_USAGE})"
        )
    return parse_overrides(tokens)


def _json_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise DecodeError(f"Response body is not valid JSON: {exc}") from exc


class ChainsAPI:
    """Chain operations for one chain type (``/v2/chains/{type}``)."""

    def __init__(self, client: BackendClient, chain_type: str) -> None:
        if not chain_type:
            raise ValidationError("missing chain type")
        self.client = client
        self.chain_type = chain_type
        self.base_path = f"{CHAINS_API_BASE}/{chain_type}"

    def _chain_path(self, chain_id: str) -> str:
        return f"{self.base_path}/{chain_id}"

    def list_page(self, page: int = 0) -> ResourcePage:
        """Fetch one page of chains. Page 0 leaves the choice to the node."""
        params = {"page": page} if page > 0 else None
        with self.client.get(self.base_path, params=params) as resp:
            return decode_chain_page(_json_body(resp), page=page)

    def get(self, chain_id: str) -> ChainResource:
        if not chain_id:
            raise ValidationError("missing chain ID")
        with self.client.get(self._chain_path(chain_id)) as resp:
            return decode_chain(_json_body(resp))

    def create(self, chain_id: str, config: dict[str, Any] | None) -> ChainResource:
        if not chain_id:
            raise ValidationError("missing chain ID [--id string]")
        if config is None:
            raise ValidationError(
                "must pass in the chain's parameters [--id string] [JSON blob | JSON filepath]"
            )
        body = {"chainID": chain_id, "config": config}
        with self.client.post(self.base_path, json=body) as resp:
            chain = decode_chain(_json_body(resp))
        logger.info("Created %s chain %s", self.chain_type, chain.id)
        return chain

    def delete(self, chain_id: str) -> None:
        if not chain_id:
            raise ValidationError("must pass the id of the chain to be removed")
        with self.client.delete(self._chain_path(chain_id)):
            pass
        logger.info("Deleted %s chain %s", self.chain_type, chain_id)

    def update(
        self, chain_id: str, *, enabled: bool, config: dict[str, Any],
    ) -> ChainResource:
        """Replace a chain's enabled flag and whole config document."""
        body = {"enabled": enabled, "config": config}
        with self.client.patch(self._chain_path(chain_id), json=body) as resp:
            return decode_chain(_json_body(resp))

    def configure(self, chain_id: str, tokens: Sequence[str]) -> ChainResource:
        """Apply ``key=value`` overrides to a chain's current config.

        Every token is parsed before the node is contacted.
        """
        return self.apply_overrides(chain_id, configure_overrides(chain_id, tokens))

    def apply_overrides(
        self, chain_id: str, overrides: Sequence[Override],
    ) -> ChainResource:
        """Fetch the chain, merge *overrides* over its config and write it back.

        The full config is sent with the chain's current enabled flag.
        """
        chain = self.get(chain_id)
        config = merge_config(chain.config, overrides)
        logger.debug(
            "Configuring %s chain %s: %s",
            self.chain_type, chain_id, ", ".join(o.describe() for o in overrides),
        )
        return self.update(chain_id, enabled=chain.enabled, config=config)

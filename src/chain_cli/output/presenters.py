"""Table presentation of chain resources.

A single chain and a list of chains render the same way: one header row with
the chain columns, then one row per chain in the order received.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Protocol

from rich.console import Console

from chain_cli.models.chain import ChainResource, ResourcePage
from chain_cli.output.tables import render_list

CHAIN_HEADERS = ["ID", "Enabled", "Config", "Created", "Updated"]


class TableRenderer(Protocol):
    """Anything that can be shown as rows under a fixed header."""

    headers: list[str]

    def to_rows(self) -> list[list[str]]: ...

    def render_table(self, sink: Console) -> None: ...


@dataclass
class ChainPresenter:
    """Presents one chain."""

    chain: ChainResource
    headers: list[str] = field(default_factory=lambda: list(CHAIN_HEADERS))

    def to_row(self) -> list[str]:
        try:
            config = json.dumps(self.chain.config, indent=4, ensure_ascii=False)
        except (TypeError, ValueError) as exc:
            # config was decoded from JSON, so it always encodes back
            raise RuntimeError(
                f"chain {self.chain.id!r} has a config that cannot be encoded: {exc}"
            ) from exc
        return [
            self.chain.id,
            "true" if self.chain.enabled else "false",
            config,
            self.chain.created_at.isoformat(),
            self.chain.updated_at.isoformat(),
        ]

    def to_rows(self) -> list[list[str]]:
        return [self.to_row()]

    def render_table(self, sink: Console) -> None:
        render_list(self.headers, self.to_rows(), sink)


@dataclass
class ChainPresenters:
    """Presents a list of chains."""

    presenters: list[ChainPresenter]
    headers: list[str] = field(default_factory=lambda: list(CHAIN_HEADERS))

    @classmethod
    def from_chains(cls, chains: Iterable[ChainResource]) -> ChainPresenters:
        return cls([ChainPresenter(c) for c in chains])

    @classmethod
    def from_page(cls, page: ResourcePage) -> ChainPresenters:
        return cls.from_chains(page.items)

    def to_rows(self) -> list[list[str]]:
        return [p.to_row() for p in self.presenters]

    def render_table(self, sink: Console) -> None:
        render_list(self.headers, self.to_rows(), sink)

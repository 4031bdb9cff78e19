"""Tests for chain table presentation."""

from __future__ import annotations

import json
from io import StringIO

import pytest
from rich.console import Console

from chain_cli.models import decode_chain, decode_chain_page
from chain_cli.output.presenters import (
    CHAIN_HEADERS,
    ChainPresenter,
    ChainPresenters,
)
from chain_cli.output.tables import make_table


def _console() -> tuple[Console, StringIO]:
    buf = StringIO()
    return Console(file=buf, force_terminal=False, width=200), buf


class TestChainPresenter:
    def test_row_columns(self, chain_document):
        row = ChainPresenter(decode_chain(chain_document)).to_row()
        assert row[0] == "mainnet"
        assert row[1] == "true"
        assert row[3] == "2024-03-01T10:00:00+00:00"
        assert row[4] == "2024-03-02T11:30:00+00:00"

    def test_disabled_is_literal_false(self, chain_page_document):
        page = decode_chain_page(chain_page_document)
        assert ChainPresenter(page.items[1]).to_row()[1] == "false"

    def test_config_column_round_trips(self, chain_document):
        chain = decode_chain(chain_document)
        config_text = ChainPresenter(chain).to_row()[2]
        assert "\n    " in config_text
        assert json.loads(config_text) == chain.config

    def test_unencodable_config_is_an_invariant_violation(self, chain_document):
        chain = decode_chain(chain_document)
        chain.config["bad"] = object()
        with pytest.raises(RuntimeError, match="cannot be encoded"):
            ChainPresenter(chain).to_row()

    def test_render_single(self, chain_document):
        console, buf = _console()
        ChainPresenter(decode_chain(chain_document)).render_table(console)
        out = buf.getvalue()
        for header in CHAIN_HEADERS:
            assert header in out
        assert "mainnet" in out
        assert '"http://a"' in out


class TestChainPresenters:
    def test_rows_keep_source_order(self, chain_page_document):
        presenters = ChainPresenters.from_page(decode_chain_page(chain_page_document))
        rows = presenters.to_rows()
        assert [r[0] for r in rows] == ["mainnet", "devnet"]

    def test_table_has_one_header_and_one_row_per_chain(self, chain_page_document):
        presenters = ChainPresenters.from_page(decode_chain_page(chain_page_document))
        table = make_table(None, presenters.headers, presenters.to_rows())
        assert [c.header for c in table.columns] == ["ID", "Enabled", "Config", "Created", "Updated"]
        assert table.row_count == 2

    def test_render_collection(self, chain_page_document):
        console, buf = _console()
        ChainPresenters.from_page(decode_chain_page(chain_page_document)).render_table(console)
        out = buf.getvalue()
        assert out.count("Enabled") == 1
        assert out.index("mainnet") < out.index("devnet")

    def test_render_empty(self):
        console, buf = _console()
        ChainPresenters.from_chains([]).render_table(console)
        assert "ID" in buf.getvalue()

"""Pydantic data models for the node's chains API."""

from chain_cli.models.chain import (
    ChainResource,
    ResourcePage,
    decode_chain,
    decode_chain_page,
)
from chain_cli.models.common import PageLinks, PageMeta

__all__ = [
    "ChainResource",
    "PageLinks",
    "PageMeta",
    "ResourcePage",
    "decode_chain",
    "decode_chain_page",
]

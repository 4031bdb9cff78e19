"""Chain resource models and their JSON:API decoding."""

from __future__ import annotations

from datetime import datetime
from typing import Any

import pydantic
from pydantic import BaseModel, ConfigDict, Field

from chain_cli.client.errors import DecodeError
from chain_cli.models.common import PageLinks, PageMeta


class ChainResource(BaseModel):
    """A chain configured on the node."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    enabled: bool
    config: dict[str, Any]
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")

    @classmethod
    def from_resource_object(cls, obj: Any) -> ChainResource:
        """Build from a JSON:API resource object (``id`` + ``attributes``)."""
        if not isinstance(obj, dict):
            raise DecodeError(f"Expected a resource object, got {type(obj).__name__}")
        attributes = obj.get("attributes")
        if not isinstance(attributes, dict):
            raise DecodeError("Resource object has no attributes")
        try:
            return cls.model_validate({**attributes, "id": obj.get("id")})
        except pydantic.ValidationError as exc:
            raise DecodeError(f"Malformed chain resource: {exc}") from exc


class ResourcePage(BaseModel):
    """One page of a chain listing."""

    items: list[ChainResource]
    page: int = 0
    links: PageLinks = Field(default_factory=PageLinks)
    meta: PageMeta = Field(default_factory=PageMeta)

    @property
    def has_next(self) -> bool:
        return self.links.next is not None

    @property
    def has_prev(self) -> bool:
        return self.links.prev is not None


def decode_chain(document: Any) -> ChainResource:
    """Decode a single-resource document ``{"data": {...}}``."""
    if not isinstance(document, dict) or "data" not in document:
        raise DecodeError("Response is not a JSON:API document")
    return ChainResource.from_resource_object(document["data"])


def decode_chain_page(document: Any, page: int = 0) -> ResourcePage:
    """Decode a collection document ``{"data": [...], "links", "meta"}``."""
    if not isinstance(document, dict) or not isinstance(document.get("data"), list):
        raise DecodeError("Response is not a JSON:API collection document")
    items = [ChainResource.from_resource_object(obj) for obj in document["data"]]
    try:
        links = PageLinks.model_validate(document.get("links") or {})
        meta = PageMeta.model_validate(document.get("meta") or {})
    except pydantic.ValidationError as exc:
        raise DecodeError(f"Malformed pagination metadata: {exc}") from exc
    return ResourcePage(items=items, page=page, links=links, meta=meta)

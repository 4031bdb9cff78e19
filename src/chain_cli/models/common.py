"""Common JSON:API document models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, field_validator


class PageLinks(BaseModel):
    """Pagination links of a collection document.

    Links may be plain URL strings or ``{"href": ...}`` objects.
    """

    next: str | None = None
    prev: str | None = None

    @field_validator("next", "prev", mode="before")
    @classmethod
    def unwrap_href(cls, v: Any) -> Any:
        if isinstance(v, dict):
            return v.get("href")
        return v or None


class PageMeta(BaseModel):
    """Collection metadata; ``count`` is the total across all pages."""

    count: int | None = None

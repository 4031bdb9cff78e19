"""Partial config updates from ``key=value`` overrides.

Overrides are applied on top of the config document fetched from the node.
Each override replaces one top-level field; a JSON object given as a value
replaces the whole nested field rather than being merged into it. The merged
document is what gets sent back, so an update is always read-modify-write.
"""

from __future__ import annotations

import copy
import json
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from chain_cli.client.errors import ValidationError


@dataclass(frozen=True)
class Override:
    """One parsed ``key=value`` token.

    ``structured`` is True when ``value`` came from parsing the raw text as
    JSON, False when it is the raw text itself.
    """

    key: str
    value: Any
    structured: bool

    def describe(self) -> str:
        return f"{self.key} ({'json' if self.structured else 'string'})"


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def parse_value(raw: str) -> tuple[Any, bool]:
    """Parse *raw* as a JSON literal, falling back to the string itself.

    ``NaN`` and ``Infinity`` are not JSON and stay strings.
    """
    try:
        return json.loads(raw, parse_constant=_reject_constant), True
    except ValueError:
        return raw, False


def parse_override(token: str) -> Override:
    """Split a ``key=value`` token on the first ``=`` and parse the value.

    An empty value is kept as an empty string and ``null`` as JSON null;
    neither removes the field.
    """
    key, sep, raw = token.partition("=")
    if not sep:
        raise ValidationError(f"invalid parameter: {token}")
    if not key:
        raise ValidationError(f"invalid parameter (empty key): {token}")
    value, structured = parse_value(raw)
    return Override(key=key, value=value, structured=structured)


def parse_overrides(tokens: Iterable[str]) -> list[Override]:
    return [parse_override(token) for token in tokens]


def build_patch(overrides: Iterable[Override]) -> dict[str, Any]:
    """Flatten overrides into a mapping; the last occurrence of a key wins."""
    patch: dict[str, Any] = {}
    for override in overrides:
        patch[override.key] = override.value
    return patch


def merge_config(
    current: Mapping[str, Any], overrides: Iterable[Override],
) -> dict[str, Any]:
    """Return a new config with each overridden top-level key replaced.

    *current* is left untouched.
    """
    merged = copy.deepcopy(dict(current))
    merged.update(copy.deepcopy(build_patch(overrides)))
    return merged

"""Authentication strategies for the backend node."""

from __future__ import annotations

from collections.abc import Generator

import httpx

from chain_cli.config.models import BackendProfile


class BearerTokenAuth(httpx.Auth):
    """Authenticate with an API token sent as ``Authorization: Bearer``."""

    def __init__(self, token: str) -> None:
        self.token = token

    def auth_flow(
        self, request: httpx.Request,
    ) -> Generator[httpx.Request, httpx.Response, None]:
        request.headers["Authorization"] = f"Bearer {self.token}"
        yield request


class BasicAuth(httpx.BasicAuth):
    """HTTP Basic auth wrapper."""


def resolve_auth(profile: BackendProfile) -> httpx.Auth | None:
    """Resolve authentication from a backend profile."""
    if profile.token:
        return BearerTokenAuth(profile.token)
    if profile.username and profile.password:
        return BasicAuth(profile.username, profile.password)
    return None

"""Shared test fixtures."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from chain_cli.client.http import BackendClient
from chain_cli.config.manager import ConfigManager
from chain_cli.config.models import BackendProfile

NODE = "http://node:6688"
CHAINS = f"{NODE}/v2/chains/solana"


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Keep tests away from the user's config file and environment."""
    path = tmp_path / "user-config" / "config.toml"
    monkeypatch.setattr("chain_cli.config.manager.CONFIG_FILE", path)
    for var in ("CHAIN_CLI_URL", "CHAIN_CLI_TOKEN", "CHAIN_CLI_PROFILE"):
        monkeypatch.delenv(var, raising=False)
    return path


@pytest.fixture
def tmp_config(tmp_path: Path) -> Path:
    """Return a temporary config file path."""
    return tmp_path / "config.toml"


@pytest.fixture
def config_manager(tmp_config: Path) -> ConfigManager:
    """Return a ConfigManager pointed at a temp config file."""
    return ConfigManager(config_path=tmp_config)


@pytest.fixture
def sample_profile() -> BackendProfile:
    """Return a sample backend profile for testing."""
    return BackendProfile(
        name="test-node",
        url=NODE,
        token="testtoken",
    )


def chain_object(
    chain_id: str = "mainnet",
    *,
    enabled: bool = True,
    config: dict | None = None,
) -> dict:
    """A JSON:API resource object for a chain, as the node returns it."""
    return {
        "type": "solana_chain",
        "id": chain_id,
        "attributes": {
            "enabled": enabled,
            "config": {} if config is None else config,
            "createdAt": "2024-03-01T10:00:00Z",
            "updatedAt": "2024-03-02T11:30:00Z",
        },
    }


@pytest.fixture
def chain_data():
    """Factory for single-chain response documents."""

    def make(chain_id: str = "mainnet", **kwargs) -> dict:
        return {"data": chain_object(chain_id, **kwargs)}

    return make


@pytest.fixture
def chain_document() -> dict:
    """Single-chain response document."""
    return {
        "data": chain_object(
            "mainnet",
            config={"url": "http://a", "timeout": 5},
        ),
    }


@pytest.fixture
def chain_page_document() -> dict:
    """Second page of a chain listing with two chains."""
    return {
        "data": [
            chain_object("mainnet", config={"url": "http://a"}),
            chain_object("devnet", enabled=False, config={"url": "http://d"}),
        ],
        "links": {
            "prev": f"{CHAINS}?page=1&size=2",
            "next": f"{CHAINS}?page=3&size=2",
        },
        "meta": {"count": 6},
    }


class FakeResponse:
    """Stands in for an httpx.Response whose release can be made to fail."""

    def __init__(self, status_code: int, body: object, close_error: Exception | None = None) -> None:
        self.status_code = status_code
        self._body = body
        self.close_error = close_error
        self.closed = False

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def text(self) -> str:
        return self._body if isinstance(self._body, str) else json.dumps(self._body)

    def read(self) -> bytes:
        return self.text.encode()

    def json(self) -> object:
        return json.loads(self.text)

    def close(self) -> None:
        self.closed = True
        if self.close_error is not None:
            raise self.close_error


class FakeSendClient(BackendClient):
    """BackendClient that hands out queued FakeResponses instead of sending."""

    def __init__(self, responses: list[FakeResponse]) -> None:
        super().__init__(BackendProfile(name="fake", url=NODE))
        self.responses = list(responses)
        self.sent: list[tuple[str, str, dict]] = []

    def _send(self, method: str, path: str, **kwargs: object) -> FakeResponse:  # type: ignore[override]
        self.sent.append((method, path, kwargs))
        return self.responses.pop(0)


@pytest.fixture
def fake_client():
    """Factory for a FakeSendClient preloaded with responses."""
    clients: list[FakeSendClient] = []

    def factory(*responses: FakeResponse) -> FakeSendClient:
        client = FakeSendClient(list(responses))
        clients.append(client)
        return client

    yield factory
    for client in clients:
        client.close()


@pytest.fixture
def fake_response() -> type[FakeResponse]:
    return FakeResponse

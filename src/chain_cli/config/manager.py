"""Configuration manager — read/write TOML config, resolve profiles."""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path
from typing import Any

import tomli_w

from chain_cli.client.errors import ConfigurationError
from chain_cli.config.constants import (
    CONFIG_FILE,
    DEFAULT_CHAIN_TYPE,
    DEFAULT_TIMEOUT,
    ENV_API_TOKEN,
    ENV_BACKEND_URL,
    ENV_PROFILE,
)
from chain_cli.config.models import BackendProfile, CLIConfig

logger = logging.getLogger(__name__)

_UNSET = object()
_PROFILE_DEFAULTS: dict[str, Any] = {
    "verify_ssl": True,
    "timeout": DEFAULT_TIMEOUT,
    "chain_type": DEFAULT_CHAIN_TYPE,
}


class ConfigManager:
    """Manages CLI configuration on disk and resolves backend profiles."""

    def __init__(self, config_path: Path | None = None) -> None:
        self.config_path = config_path or CONFIG_FILE
        self._config: CLIConfig | None = None

    @property
    def config(self) -> CLIConfig:
        if self._config is None:
            self._config = self._load()
        return self._config

    def _load(self) -> CLIConfig:
        if not self.config_path.exists():
            return CLIConfig()
        logger.debug("Loading config from %s", self.config_path)
        try:
            data = tomllib.loads(self.config_path.read_bytes().decode())
        except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as exc:
            raise ConfigurationError(
                f"Cannot read config file {self.config_path}: {exc}"
            ) from exc
        profiles: dict[str, BackendProfile] = {}
        for name, prof_data in data.get("profiles", {}).items():
            profiles[name] = BackendProfile(name=name, **prof_data)
        return CLIConfig(
            default_profile=data.get("default_profile"),
            default_format=data.get("default_format", "table"),
            profiles=profiles,
        )

    def save(self) -> None:
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        # Owner-only directory
        os.chmod(self.config_path.parent, 0o700)
        data: dict[str, Any] = {}
        if self.config.default_profile:
            data["default_profile"] = self.config.default_profile
        if self.config.default_format != "table":
            data["default_format"] = self.config.default_format
        if self.config.profiles:
            data["profiles"] = {
                name: _stored_fields(profile)
                for name, profile in self.config.profiles.items()
            }
        # Atomic write: temp file, then rename
        temp = self.config_path.with_suffix(".tmp")
        fd = os.open(str(temp), os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        try:
            os.write(fd, tomli_w.dumps(data).encode())
        finally:
            os.close(fd)
        temp.replace(self.config_path)
        logger.debug("Saved config to %s", self.config_path)

    def require_profile(self, name: str) -> BackendProfile:
        try:
            return self.config.profiles[name]
        except KeyError:
            raise ConfigurationError(f"Profile '{name}' not found.") from None

    def add_profile(self, profile: BackendProfile) -> None:
        self.config.profiles[profile.name] = profile
        if not self.config.default_profile:
            self.config.default_profile = profile.name
        self.save()

    def remove_profile(self, name: str) -> None:
        """Drop *name*; the next remaining profile becomes default if needed."""
        self.require_profile(name)
        del self.config.profiles[name]
        if self.config.default_profile == name:
            self.config.default_profile = next(iter(self.config.profiles), None)
        self.save()

    def set_default(self, name: str) -> None:
        self.require_profile(name)
        self.config.default_profile = name
        self.save()

    def get_profile(self, name: str | None = None) -> BackendProfile | None:
        wanted = name or self.config.default_profile
        return self.config.profiles.get(wanted) if wanted else None

    def resolve_profile(
        self,
        profile_name: str | None = None,
        url: str | None = None,
        token: str | None = None,
    ) -> BackendProfile:
        """Resolve the node connection.

        Precedence: CLI flags > env vars > config profile. A named profile
        (flag or ``CHAIN_CLI_PROFILE``) must exist; the default one may not.
        """
        wanted = profile_name or os.environ.get(ENV_PROFILE)
        profile = (
            self.require_profile(wanted) if wanted else self.get_profile()
        )
        fields: dict[str, Any] = (
            profile.model_dump() if profile else {"name": "cli"}
        )
        fields["url"] = url or os.environ.get(ENV_BACKEND_URL) or fields.get("url")
        fields["token"] = (
            token or os.environ.get(ENV_API_TOKEN) or fields.get("token")
        )
        if not fields["url"]:
            raise ConfigurationError(
                "No backend URL configured. Use 'chain-cli config add' or set "
                f"{ENV_BACKEND_URL} or pass --url."
            )
        return BackendProfile(**fields)


def _stored_fields(profile: BackendProfile) -> dict[str, Any]:
    """Profile fields as written to disk, leaving out defaults and the name."""
    stored = profile.model_dump(exclude={"name"}, exclude_none=True)
    return {
        key: value for key, value in stored.items()
        if _PROFILE_DEFAULTS.get(key, _UNSET) != value
    }

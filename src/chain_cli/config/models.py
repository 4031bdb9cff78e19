"""Pydantic models for CLI configuration."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from chain_cli.config.constants import DEFAULT_CHAIN_TYPE, DEFAULT_TIMEOUT


class BackendProfile(BaseModel):
    """A named backend node connection profile."""

    name: str
    url: str = Field(description="Node base URL, e.g. http://localhost:6688")
    token: str | None = Field(default=None, description="API token")
    username: str | None = Field(default=None, description="Basic auth username")
    password: str | None = Field(default=None, description="Basic auth password")
    verify_ssl: bool = Field(default=True, description="Verify SSL certificates")
    timeout: float = Field(
        default=DEFAULT_TIMEOUT, gt=0, le=600, description="Request timeout in seconds",
    )
    chain_type: str = Field(
        default=DEFAULT_CHAIN_TYPE, min_length=1, description="Default chain namespace",
    )

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError("URL must start with http:// or https://")
        return v.rstrip("/")

    @property
    def auth_configured(self) -> bool:
        has_basic = (
            self.username is not None and self.password is not None
        )
        return self.token is not None or has_basic


class CLIConfig(BaseModel):
    """Root configuration model."""

    default_profile: str | None = None
    default_format: str = "table"
    profiles: dict[str, BackendProfile] = Field(default_factory=dict)

"""Settings for building a :class:`~smop_provider.smopclient.client.SMOPClient`."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .responses import DEFAULT_MAX_RESPONSE_BYTES
from .transport import DEFAULT_TIMEOUT


class SMOPClientConfig(BaseSettings):
    """Connection settings for the SMoP API, read from ``SMOP_*`` variables."""

    server_url: str = Field(..., description="Base URL of the SMoP API")
    token: str = Field(..., description="Access token used for Bearer authentication")
    api_version: str | None = Field(
        default=None,
        description="Overrides the API version announced to SMoP",
    )
    timeout: float = Field(
        default=DEFAULT_TIMEOUT,
        gt=0,
        description="HTTP timeout (seconds) for SMoP requests",
    )
    verify_ssl: bool = Field(
        default=True,
        description="Whether to verify TLS certificates when calling SMoP",
    )
    max_response_bytes: int = Field(
        default=DEFAULT_MAX_RESPONSE_BYTES,
        ge=1,
        description="Largest response body the client will read",
    )
    allow_insecure: bool = Field(
        default=False,
        description="Permit plain http URLs for non-loopback hosts",
    )

    model_config = SettingsConfigDict(
        env_prefix="SMOP_",
        env_file=".env",
        extra="ignore",
    )


__all__ = ["SMOPClientConfig"]

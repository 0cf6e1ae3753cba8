"""API version policy for SMoP requests."""

from __future__ import annotations

import re
from typing import Final

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from .editors import header_editor
from .exceptions import ConfigurationError
from .transport import SMOPTransport, TransportOption

API_VERSION_HEADER: Final[str] = "X-SMoP-API-Version"
DEFAULT_API_VERSION: Final[str] = "v1"

_VERSION_PATTERN = re.compile(r"^(v\d+(\.\d+)?|\d{4}-\d{2}-\d{2})$")


class APIVersionSettings(BaseSettings):
    """Environment-driven override for the SMoP API version."""

    api_version: str = Field(
        default=DEFAULT_API_VERSION,
        description="Version sent in the X-SMoP-API-Version header",
    )

    model_config = SettingsConfigDict(env_prefix="SMOP_", extra="ignore")


def validate_api_version(version: str | None) -> str:
    """Return ``version`` stripped, or raise ``ConfigurationError`` if unusable."""

    cleaned = (version or "").strip()
    if not cleaned:
        raise ConfigurationError("SMoP API version is not configured")
    if not _VERSION_PATTERN.match(cleaned):
        raise ConfigurationError(
            f"SMoP API version {cleaned!r} must look like 'v1', 'v1.2' or 'YYYY-MM-DD'"
        )
    return cleaned


def current_api_version() -> str:
    """Resolve the API version the client should announce."""

    try:
        settings = APIVersionSettings()
    except ValidationError as exc:
        raise ConfigurationError(f"failed to load SMoP API version settings: {exc}") from exc
    return validate_api_version(settings.api_version)


def with_api_version_header(version: str) -> TransportOption:
    """Transport option pinning the API version header on every request."""

    editor = header_editor(API_VERSION_HEADER, validate_api_version(version))

    def _apply(transport: SMOPTransport) -> None:
        transport.pin_request_editor(editor)

    return _apply


__all__ = [
    "API_VERSION_HEADER",
    "APIVersionSettings",
    "DEFAULT_API_VERSION",
    "current_api_version",
    "validate_api_version",
    "with_api_version_header",
]

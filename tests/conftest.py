"""Shared fixtures for SMoP client tests."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import httpx
import pytest

from smop_provider.smopclient import SMOPClient, TransportOption, with_http_client

from .helpers import SERVER, TOKEN, Handler


@pytest.fixture(autouse=True)
def _clean_smop_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "SMOP_API_VERSION",
        "SMOP_SERVER_URL",
        "SMOP_TOKEN",
        "SMOP_TIMEOUT",
        "SMOP_VERIFY_SSL",
        "SMOP_MAX_RESPONSE_BYTES",
        "SMOP_ALLOW_INSECURE",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def make_client() -> Callable[..., SMOPClient]:
    """Return a factory building clients backed by ``httpx.MockTransport``."""

    def _factory(
        handler: Handler,
        *options: TransportOption,
        token: str = TOKEN,
        server: str = SERVER,
        **kwargs: Any,
    ) -> SMOPClient:
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        kwargs.setdefault("api_version_provider", lambda: "v1")
        return SMOPClient(server, token, with_http_client(http_client), *options, **kwargs)

    return _factory

"""Tests for Authorization header injection."""

from __future__ import annotations

import httpx
import pytest

from smop_provider.smopclient import AuthSetupError, get_request_editor


def _request() -> httpx.Request:
    return httpx.Request("GET", "https://smop.example.com/kv/db-password")


def test_sets_bearer_authorization_header() -> None:
    request = _request()
    get_request_editor("abc.def.ghi")(request)
    assert request.headers["Authorization"] == "Bearer abc.def.ghi"


def test_overwrites_existing_authorization_header() -> None:
    request = httpx.Request(
        "GET",
        "https://smop.example.com/kvs",
        headers={"Authorization": "Basic Zm9vOmJhcg=="},
    )
    get_request_editor("token")(request)
    assert request.headers.get_list("Authorization") == ["Bearer token"]


def test_each_call_builds_a_new_editor() -> None:
    first = get_request_editor("token-1")
    second = get_request_editor("token-2")

    request = _request()
    first(request)
    second(request)

    assert first is not second
    assert request.headers["Authorization"] == "Bearer token-2"


@pytest.mark.parametrize("token", ["", "   ", "abc\r\nX-Injected: 1", "tab\tinside"])
def test_rejects_structurally_invalid_tokens(token: str) -> None:
    with pytest.raises(AuthSetupError):
        get_request_editor(token)

"""Request editors applied to outgoing SMoP HTTP requests."""

from __future__ import annotations

from typing import Callable

import httpx

from .exceptions import AuthSetupError

RequestEditor = Callable[[httpx.Request], None]

AUTHORIZATION_HEADER = "Authorization"
AUTH_SCHEME = "Bearer"


def get_request_editor(token: str) -> RequestEditor:
    """Return a request editor that injects ``Authorization: Bearer <token>``."""

    if not isinstance(token, str) or not token.strip():
        raise AuthSetupError("SMoP token must be a non-empty string")
    if any(ord(char) < 0x20 or ord(char) == 0x7F for char in token):
        raise AuthSetupError("SMoP token contains control characters")

    header_value = f"{AUTH_SCHEME} {token.strip()}"

    def _edit(request: httpx.Request) -> None:
        request.headers[AUTHORIZATION_HEADER] = header_value

    return _edit


def header_editor(name: str, value: str) -> RequestEditor:
    """Return a request editor that sets a single static header."""

    def _edit(request: httpx.Request) -> None:
        request.headers[name] = value

    return _edit


__all__ = [
    "AUTHORIZATION_HEADER",
    "AUTH_SCHEME",
    "RequestEditor",
    "get_request_editor",
    "header_editor",
]

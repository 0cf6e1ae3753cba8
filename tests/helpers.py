"""Response builders and request recording for SMoP client tests."""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

import httpx


SERVER = "smop.example.com/api"
TOKEN = "test-token"

Handler = Callable[[httpx.Request], httpx.Response]


def json_response(
    data: Any,
    status_code: int = 200,
    content_type: str = "application/json",
) -> httpx.Response:
    """Build a response with a JSON body."""
    return httpx.Response(
        status_code=status_code,
        content=json.dumps(data).encode(),
        headers={"content-type": content_type},
    )


def text_response(
    text: str,
    status_code: int = 200,
    content_type: str = "text/plain",
) -> httpx.Response:
    """Build a response with a non-JSON body."""
    return httpx.Response(
        status_code=status_code,
        content=text.encode(),
        headers={"content-type": content_type},
    )


class RecordingHandler:
    """MockTransport handler that remembers every request it served."""

    def __init__(self, response: httpx.Response | Handler) -> None:
        self._response = response
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if callable(self._response):
            return self._response(request)
        return self._response

    @property
    def last(self) -> httpx.Request:
        assert self.requests, "no request was sent"
        return self.requests[-1]



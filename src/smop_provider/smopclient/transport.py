"""Thin async HTTP transport exposing the SMoP KV endpoints.

The transport only knows how to address the API: it builds requests, runs the
configured request editors and hands back a *streamed* ``httpx.Response``.
Reading, decoding and error classification happen in :mod:`.client`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Mapping
from urllib.parse import quote

import httpx

from .editors import RequestEditor, header_editor

DEFAULT_TIMEOUT: float = 10.0
KV_BY_PATH_ENDPOINT = "kv"
KV_LIST_ENDPOINT = "kvs"

TransportOption = Callable[["SMOPTransport"], None]


@dataclass(frozen=True, slots=True)
class GetKvByPathParams:
    """Query parameters for ``GET /kv/{name}``."""

    folder_name: str | None = None

    def to_query(self) -> dict[str, str]:
        if not self.folder_name:
            return {}
        return {"folderName": self.folder_name}


@dataclass(frozen=True, slots=True)
class GetKvsParams:
    """Query parameters for ``GET /kvs``."""

    path: str | None = None

    def to_query(self) -> dict[str, str]:
        if not self.path:
            return {}
        return {"path": self.path}


class SMOPTransport:
    """Builds and sends requests against a SMoP server."""

    def __init__(self, server: str | httpx.URL, *options: TransportOption) -> None:
        self.server = server
        self.http_client: httpx.AsyncClient | None = None
        self.timeout: float = DEFAULT_TIMEOUT
        self.verify: bool = True
        self.headers: dict[str, str] = {"Accept": "application/json"}
        self.request_editors: list[RequestEditor] = []
        self._pinned_editors: list[RequestEditor] = []

        for option in options:
            option(self)

        self._owns_client = self.http_client is None
        if self.http_client is None:
            self.http_client = httpx.AsyncClient(
                timeout=self.timeout,
                verify=self.verify,
            )

    @property
    def server(self) -> str:
        return self._server

    @server.setter
    def server(self, value: str | httpx.URL) -> None:
        self._server = str(value).rstrip("/")

    def pin_request_editor(self, editor: RequestEditor) -> None:
        """Register an editor that always runs after every other editor."""

        self._pinned_editors.append(editor)

    @property
    def is_closed(self) -> bool:
        return self.http_client is not None and self.http_client.is_closed

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this transport created it."""

        if self._owns_client and self.http_client is not None:
            await self.http_client.aclose()

    async def get_kv_by_path(
        self,
        name: str,
        params: GetKvByPathParams,
        *editors: RequestEditor,
        timeout: float | None = None,
    ) -> httpx.Response:
        path = f"{KV_BY_PATH_ENDPOINT}/{quote(name, safe='')}"
        return await self._send("GET", path, params.to_query(), editors, timeout)

    async def get_kvs(
        self,
        params: GetKvsParams,
        *editors: RequestEditor,
        timeout: float | None = None,
    ) -> httpx.Response:
        return await self._send("GET", KV_LIST_ENDPOINT, params.to_query(), editors, timeout)

    async def _send(
        self,
        method: str,
        path: str,
        query: Mapping[str, str],
        editors: tuple[RequestEditor, ...],
        timeout: float | None,
    ) -> httpx.Response:
        assert self.http_client is not None
        extra: dict[str, float] = {}
        if timeout is not None:
            extra["timeout"] = timeout
        request = self.http_client.build_request(
            method,
            f"{self.server}/{path}",
            params=dict(query) or None,
            headers=self.headers,
            **extra,
        )
        for editor in (*self.request_editors, *editors, *self._pinned_editors):
            editor(request)
        return await self.http_client.send(request, stream=True)


def with_http_client(client: httpx.AsyncClient) -> TransportOption:
    """Use a caller-managed ``httpx.AsyncClient`` instead of creating one."""

    def _apply(transport: SMOPTransport) -> None:
        transport.http_client = client

    return _apply


def with_request_editor(editor: RequestEditor) -> TransportOption:
    """Run ``editor`` on every request sent by the transport."""

    def _apply(transport: SMOPTransport) -> None:
        transport.request_editors.append(editor)

    return _apply


def with_timeout(seconds: float) -> TransportOption:
    def _apply(transport: SMOPTransport) -> None:
        transport.timeout = seconds

    return _apply


def with_verify(verify: bool) -> TransportOption:
    def _apply(transport: SMOPTransport) -> None:
        transport.verify = verify

    return _apply


def with_headers(headers: Mapping[str, str]) -> TransportOption:
    """Send ``headers`` on every request; request editors still run afterwards."""

    def _apply(transport: SMOPTransport) -> None:
        for name, value in headers.items():
            transport.request_editors.append(header_editor(name, value))

    return _apply


__all__ = [
    "DEFAULT_TIMEOUT",
    "GetKvByPathParams",
    "GetKvsParams",
    "SMOPTransport",
    "TransportOption",
    "with_headers",
    "with_http_client",
    "with_request_editor",
    "with_timeout",
    "with_verify",
]

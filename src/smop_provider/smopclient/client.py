"""SMOPClient: fetches key/value secrets from the SMoP API."""

from __future__ import annotations

import functools
import logging
import threading
from types import TracebackType
from typing import Any, Callable, Final

import httpx
from pydantic import ValidationError

from .apiversion import current_api_version, validate_api_version, with_api_version_header
from .config import SMOPClientConfig
from .editors import RequestEditor, get_request_editor
from .exceptions import (
    AuthSetupError,
    ConfigurationError,
    DecodeError,
    InvalidConfiguration,
    TransportError,
    TransportReadError,
)
from .folders import FolderPath, FolderPathLike
from .responses import (
    DEFAULT_MAX_RESPONSE_BYTES,
    classify_error_response,
    content_type_of,
    is_json_content_type,
    read_response_body,
)
from .schemas import KV, KVListItem, KVListResponse
from .transport import (
    GetKvByPathParams,
    GetKvsParams,
    SMOPTransport,
    TransportOption,
    with_timeout,
    with_verify,
)

_ALLOWED_SCHEMES: Final[frozenset[str]] = frozenset({"http", "https"})
_LOOPBACK_HOSTS: Final[frozenset[str]] = frozenset({"localhost", "127.0.0.1", "::1"})


def validate_server_url(server: str, *, allow_insecure: bool = False) -> str:
    """Return ``server`` normalized to ``scheme://host[:port][/path]``.

    A missing scheme defaults to ``https`` and trailing slashes are dropped.
    Plain ``http`` is only accepted for loopback hosts unless ``allow_insecure``
    is set.
    """

    if not isinstance(server, str) or not server.strip():
        raise InvalidConfiguration("SMoP server URL must not be empty")

    raw = server.strip()
    if "://" not in raw:
        raw = f"https://{raw}"

    try:
        url = httpx.URL(raw)
    except (httpx.InvalidURL, ValueError) as exc:
        raise InvalidConfiguration(f"failed to parse SMoP server URL {server!r}: {exc}") from exc

    if url.scheme not in _ALLOWED_SCHEMES:
        raise InvalidConfiguration(
            f"SMoP server URL {server!r} must use http or https, not {url.scheme!r}"
        )
    if not url.host:
        raise InvalidConfiguration(f"SMoP server URL {server!r} has no host")
    if url.userinfo:
        raise InvalidConfiguration(f"SMoP server URL {server!r} must not embed credentials")
    if url.query or url.fragment:
        raise InvalidConfiguration(
            f"SMoP server URL {server!r} must not carry a query string or fragment"
        )
    if url.scheme == "http" and not allow_insecure and url.host not in _LOOPBACK_HOSTS:
        raise InvalidConfiguration(
            f"SMoP server URL {server!r} is not secure; use https or set allow_insecure"
        )

    netloc = url.netloc.decode("ascii")
    path = url.raw_path.decode("ascii").rstrip("/")
    return f"{url.scheme}://{netloc}{path}"


class SMOPClient:
    """Async client for the SMoP key/value secrets API."""

    def __init__(
        self,
        server: str,
        token: str,
        *options: TransportOption,
        api_version_provider: Callable[[], str] = current_api_version,
        allow_insecure: bool = False,
        max_response_bytes: int = DEFAULT_MAX_RESPONSE_BYTES,
    ) -> None:
        base_url = validate_server_url(server, allow_insecure=allow_insecure)

        try:
            version_option = with_api_version_header(api_version_provider())
        except Exception as exc:
            raise ConfigurationError(
                f"failed to get API version for SMoP client: {exc}"
            ) from exc

        self._lock = threading.Lock()
        self._base_url: str = base_url
        self._token = token
        self._allow_insecure = allow_insecure
        self._max_response_bytes = max_response_bytes
        self._transport = SMOPTransport(base_url, version_option, *options)
        self._logger: logging.Logger = logging.getLogger(__name__)

    @classmethod
    def from_config(
        cls,
        config: SMOPClientConfig | None = None,
        *options: TransportOption,
    ) -> SMOPClient:
        """Build a client from ``SMOP_*`` settings."""

        if config is None:
            try:
                config = SMOPClientConfig()
            except ValidationError as exc:
                raise InvalidConfiguration(f"failed to load SMoP client settings: {exc}") from exc
        settings = config
        provider: Callable[[], str] = current_api_version
        if settings.api_version is not None:
            provider = functools.partial(validate_api_version, settings.api_version)
        return cls(
            settings.server_url,
            settings.token,
            with_timeout(settings.timeout),
            with_verify(settings.verify_ssl),
            *options,
            api_version_provider=provider,
            allow_insecure=settings.allow_insecure,
            max_response_bytes=settings.max_response_bytes,
        )

    @property
    def base_url(self) -> httpx.URL:
        """Return the base URL; ``httpx.URL`` is immutable so callers get a copy."""

        with self._lock:
            return httpx.URL(self._base_url)

    @property
    def server_url(self) -> str:
        with self._lock:
            return self._base_url

    def set_base_url(self, url: str) -> None:
        """Validate ``url`` and replace the stored base URL."""

        base_url = validate_server_url(url, allow_insecure=self._allow_insecure)
        with self._lock:
            self._base_url = base_url
            self._transport.server = base_url

    @property
    def is_closed(self) -> bool:
        """Whether the HTTP client used for requests has been closed."""

        return self._transport.is_closed

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""

        await self._transport.aclose()

    async def __aenter__(self) -> SMOPClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def get_secret(
        self,
        name: str,
        folder_path: FolderPathLike = None,
        *,
        timeout: float | None = None,
    ) -> KV:
        """Fetch the secret ``name`` stored in ``folder_path``."""

        if not name:
            raise ValueError("secret name must not be empty")

        folder = FolderPath.of(folder_path)
        path = str(folder)
        params = GetKvByPathParams(folder_name=folder.name)
        editor = self._request_editor()

        try:
            response = await self._transport.get_kv_by_path(name, params, editor, timeout=timeout)
        except httpx.HTTPError as exc:
            raise TransportError(
                f"failed to fetch secret {name!r} at {path!r}: {exc}",
                operation="get_secret",
                name=name,
                path=path,
            ) from exc

        try:
            body = await read_response_body(response, max_bytes=self._max_response_bytes)
        except TransportReadError as exc:
            raise TransportReadError(
                f"failed to read fetch secret response {name!r} at {path!r}: {exc}",
                operation="get_secret",
                name=name,
                path=path,
            ) from exc

        status = response.status_code
        content_type = content_type_of(response)
        context = self._log_context("get_secret", path, name=name, status=status)

        if status == httpx.codes.OK and is_json_content_type(content_type):
            try:
                kv = KV.model_validate_json(body)
            except ValidationError as exc:
                raise DecodeError(
                    f"failed to unmarshal response from fetch {name!r} at {path!r}: {exc}"
                ) from exc
            self._logger.debug("Secret fetched from SMoP", extra=context)
            return kv

        self._logger.debug("SMoP rejected secret fetch", extra=context)
        raise classify_error_response(
            body,
            status=status,
            content_type=content_type,
            path=folder.join(name),
        )

    async def get_secrets(
        self,
        folder_path: FolderPathLike = None,
        *,
        timeout: float | None = None,
    ) -> list[KVListItem]:
        """List the secrets stored in ``folder_path``; an empty folder yields ``[]``."""

        folder = FolderPath.of(folder_path)
        path = str(folder)
        params = GetKvsParams(path=folder.name)
        editor = self._request_editor()

        try:
            response = await self._transport.get_kvs(params, editor, timeout=timeout)
        except httpx.HTTPError as exc:
            raise TransportError(
                f"failed to fetch secrets at {path!r}: {exc}",
                operation="get_secrets",
                path=path,
            ) from exc

        try:
            body = await read_response_body(response, max_bytes=self._max_response_bytes)
        except TransportReadError as exc:
            raise TransportReadError(
                f"failed to read list secrets response at {path!r}: {exc}",
                operation="get_secrets",
                path=path,
            ) from exc

        status = response.status_code
        content_type = content_type_of(response)
        context = self._log_context("get_secrets", path, status=status)

        if status == httpx.codes.OK and is_json_content_type(content_type):
            try:
                listing = KVListResponse.model_validate_json(body)
            except ValidationError as exc:
                raise DecodeError(
                    f"failed to unmarshal response from list secrets at {path!r}: {exc}"
                ) from exc
            # The embedded error does not fail the call.
            if listing.error:
                self._logger.warning(
                    "SMoP list response carried an embedded error: %s",
                    listing.error,
                    extra=context,
                )
            items = listing.as_list()
            self._logger.debug("Listed %d secrets from SMoP", len(items), extra=context)
            return items

        self._logger.debug("SMoP rejected secret listing", extra=context)
        raise classify_error_response(
            body,
            status=status,
            content_type=content_type,
            path=path,
        )

    def _request_editor(self) -> RequestEditor:
        try:
            return get_request_editor(self._token)
        except AuthSetupError as exc:
            raise AuthSetupError(f"failed to create request editor: {exc}") from exc

    def _log_context(
        self,
        operation: str,
        path: str,
        *,
        name: str | None = None,
        status: int | None = None,
    ) -> dict[str, dict[str, Any]]:
        return {
            "smop_context": {
                "operation": operation,
                "name": name,
                "folder_path": path,
                "status": status,
            }
        }


__all__ = ["SMOPClient", "validate_server_url"]

"""Secret-store adapter translating remote references into SMoP lookups."""

from __future__ import annotations

import json
import logging
from types import TracebackType
from typing import Any

from ..smopclient.client import SMOPClient
from ..smopclient.exceptions import DecodeError, SecretPropertyNotFound
from ..smopclient.folders import FolderPath, FolderPathLike
from .refs import RemoteRef, parse_remote_key


class SMOPSecretStore:
    """Serves secret-store lookups from a :class:`SMOPClient`."""

    def __init__(self, client: SMOPClient) -> None:
        self._client: SMOPClient = client
        self._logger: logging.Logger = logging.getLogger(__name__)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> SMOPSecretStore:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def get_secret(self, ref: RemoteRef) -> bytes:
        """Return the secret value, or one property of a JSON-object value."""

        folder, name = parse_remote_key(ref.key)
        kv = await self._client.get_secret(name, folder)
        if ref.property is None:
            return kv.value.encode("utf-8")

        values = self._decode_object(kv.value, ref.key)
        if ref.property not in values:
            self._logger.warning(
                "Property missing from SMoP secret",
                extra={"smop_context": {"key": ref.key, "property": ref.property}},
            )
            raise SecretPropertyNotFound(
                f"property {ref.property!r} not found in secret {ref.key!r}"
            )
        return _encode_value(values[ref.property])

    async def get_secret_map(self, ref: RemoteRef) -> dict[str, bytes]:
        """Return every property of a secret whose value is a JSON object."""

        folder, name = parse_remote_key(ref.key)
        kv = await self._client.get_secret(name, folder)
        values = self._decode_object(kv.value, ref.key)
        return {key: _encode_value(value) for key, value in values.items()}

    async def get_all_secrets(self, folder_path: FolderPathLike = None) -> dict[str, bytes]:
        """Fetch every secret listed in ``folder_path``, keyed by secret name."""

        folder = FolderPath.of(folder_path)
        items = await self._client.get_secrets(folder)

        secrets: dict[str, bytes] = {}
        for item in items:
            if not item.key:
                continue
            kv = await self._client.get_secret(item.key, folder)
            secrets[item.key] = kv.value.encode("utf-8")
        return secrets

    async def validate(self) -> bool:
        """Check credentials and connectivity by listing the root folder."""

        await self._client.get_secrets()
        return True

    def _decode_object(self, value: str, key: str) -> dict[str, Any]:
        try:
            decoded = json.loads(value)
        except ValueError as exc:
            raise DecodeError(f"secret {key!r} is not a JSON document: {exc}") from exc
        if not isinstance(decoded, dict):
            raise DecodeError(f"secret {key!r} is not a JSON object")
        return decoded


def _encode_value(value: Any) -> bytes:
    if isinstance(value, str):
        return value.encode("utf-8")
    return json.dumps(value).encode("utf-8")


__all__ = ["SMOPSecretStore"]

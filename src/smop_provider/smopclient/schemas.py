"""Pydantic schemas mirroring payloads exchanged with the SMoP API."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _SMOPModel(BaseModel):
    """Accepts both camelCase wire names and snake_case field names."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )


class KV(_SMOPModel):
    """A single key/value secret returned by ``GET /kv/{name}``."""

    key: str
    value: str
    id: str | None = None
    folder_path: str | None = None
    description: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class KVListItem(_SMOPModel):
    """Lightweight listing entry for a secret stored in a folder."""

    key: str | None = None
    id: str | None = None
    folder_id: str | None = None
    folder_path: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class KVListResponse(_SMOPModel):
    """Wrapper for ``GET /kvs`` responses."""

    data: list[KVListItem] | None = None
    error: str | None = None

    def as_list(self) -> list[KVListItem]:
        """Return the contained items, treating a missing ``data`` as empty."""

        if not self.data:
            return []
        return list(self.data)


class APIErrorPayload(_SMOPModel):
    """Best-effort view of the error envelopes SMoP returns."""

    message: Any = None
    error: Any = None
    detail: Any = None
    status: Any = None
    code: Any = None

    def resolved_message(self) -> str | None:
        """Return the first usable human-readable message in the payload."""

        for candidate in (self.message, self.error, self.detail):
            if isinstance(candidate, dict):
                candidate = candidate.get("message")
            if isinstance(candidate, str) and candidate.strip():
                return candidate.strip()
        return None


__all__ = [
    "APIErrorPayload",
    "KV",
    "KVListItem",
    "KVListResponse",
]

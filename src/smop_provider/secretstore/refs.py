"""Remote secret references as used by secret-store consumers."""

from __future__ import annotations

from dataclasses import dataclass

from ..smopclient.folders import FolderPath


@dataclass(frozen=True, slots=True)
class RemoteRef:
    """Points at a SMoP secret as ``folder/.../name`` plus an optional property."""

    key: str
    property: str | None = None


def parse_remote_key(key: str) -> tuple[FolderPath, str]:
    """Split ``team/app/db-password`` into its folder and secret name."""

    cleaned = key.strip().lstrip("/")
    if not cleaned:
        raise ValueError("remote key must not be empty")
    if cleaned.endswith("/"):
        raise ValueError(f"remote key {key!r} does not name a secret")

    folder, _, name = cleaned.rpartition("/")
    return FolderPath.of(folder), name


__all__ = ["RemoteRef", "parse_remote_key"]

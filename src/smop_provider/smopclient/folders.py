"""Folder path value type used to address secrets in SMoP."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True, slots=True)
class FolderPath:
    """Either the root folder (``name is None``) or a named folder."""

    name: str | None = None

    @classmethod
    def root(cls) -> FolderPath:
        return cls(None)

    @classmethod
    def named(cls, name: str) -> FolderPath:
        """Return a named folder; blank names collapse to the root folder."""

        cleaned = name.strip().strip("/")
        return cls(cleaned or None)

    @classmethod
    def of(cls, value: FolderPathLike) -> FolderPath:
        """Normalize ``None``, strings and existing ``FolderPath`` values."""

        if isinstance(value, FolderPath):
            return value
        if value is None:
            return cls.root()
        if not isinstance(value, str):
            raise TypeError(f"folder path must be a string, got {type(value).__name__}")
        return cls.named(value)

    @property
    def is_root(self) -> bool:
        return self.name is None

    def join(self, name: str) -> str:
        """Return the slash-joined ``folder/name`` path used in error reports."""

        return f"{self}/{name}"

    def __str__(self) -> str:
        return self.name or ""


FolderPathLike = Union[FolderPath, str, None]


__all__ = ["FolderPath", "FolderPathLike"]

"""Secret-store facing adapter over the SMoP client."""

from .refs import RemoteRef, parse_remote_key
from .store import SMOPSecretStore

__all__ = [
    "RemoteRef",
    "SMOPSecretStore",
    "parse_remote_key",
]

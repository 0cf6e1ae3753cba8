"""Exception hierarchy raised by the SMoP API client."""

from __future__ import annotations


class SMOPError(Exception):
    """Base error raised for any SMoP client issue."""


class InvalidConfiguration(SMOPError):
    """Raised when the server URL or other client input is malformed."""


class ConfigurationError(SMOPError):
    """Raised when the API version policy cannot be resolved."""


class AuthSetupError(SMOPError):
    """Raised when an Authorization header cannot be built for a request."""


class TransportError(SMOPError):
    """Raised when the HTTP call to SMoP fails before a response is available."""

    def __init__(
        self,
        message: str,
        *,
        operation: str,
        name: str | None = None,
        path: str = "",
    ) -> None:
        super().__init__(message)
        self.operation = operation
        self.name = name
        self.path = path


class TransportReadError(TransportError):
    """Raised when a response body cannot be drained."""


class DecodeError(SMOPError):
    """Raised when a successful JSON response does not match the expected shape."""


class SecretPropertyNotFound(SMOPError):
    """Raised when a requested property is missing from a secret value."""


class APIError(SMOPError):
    """Failure reported by the SMoP API itself."""

    def __init__(self, status_code: int, message: str, path: str) -> None:
        self.status_code = status_code
        self.message = message
        self.path = path
        super().__init__(str(self))

    def __str__(self) -> str:
        return f"SMoP API error (HTTP {self.status_code}): {self.message} at path {self.path!r}"

    def __repr__(self) -> str:
        return (
            f"APIError(status_code={self.status_code!r}, message={self.message!r}, "
            f"path={self.path!r})"
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, APIError):
            return NotImplemented
        return (self.status_code, self.message, self.path) == (
            other.status_code,
            other.message,
            other.path,
        )

    def __hash__(self) -> int:
        return hash((self.status_code, self.message, self.path))


__all__ = [
    "APIError",
    "AuthSetupError",
    "ConfigurationError",
    "DecodeError",
    "InvalidConfiguration",
    "SMOPError",
    "SecretPropertyNotFound",
    "TransportError",
    "TransportReadError",
]

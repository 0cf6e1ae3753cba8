"""Response reading and API error classification helpers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Union

import httpx
from pydantic import ValidationError

from .exceptions import APIError, TransportReadError
from .schemas import APIErrorPayload

DEFAULT_MAX_RESPONSE_BYTES: Final[int] = 10 * 1024 * 1024


@dataclass(frozen=True, slots=True)
class Classified:
    """The backend reported a structured error."""

    error: APIError


@dataclass(frozen=True, slots=True)
class Unclassifiable:
    """The body could not be read as an error envelope; use the fallback."""

    reason: str


ClassificationResult = Union[Classified, Unclassifiable]


def content_type_of(response: httpx.Response) -> str:
    return response.headers.get("Content-Type", "")


def is_json_content_type(content_type: str) -> bool:
    return "json" in content_type.lower()


async def read_response_body(
    response: httpx.Response,
    *,
    max_bytes: int = DEFAULT_MAX_RESPONSE_BYTES,
) -> bytes:
    """Drain ``response`` exactly once and always release it."""

    body = bytearray()
    try:
        async for chunk in response.aiter_bytes():
            body.extend(chunk)
            if len(body) > max_bytes:
                raise TransportReadError(
                    f"response body exceeds {max_bytes} bytes",
                    operation="read",
                )
    except (httpx.HTTPError, httpx.StreamError) as exc:
        raise TransportReadError(f"failed to read response body: {exc}", operation="read") from exc
    finally:
        await response.aclose()
    return bytes(body)


def parse_api_error_response(body: bytes, path: str, status: int) -> ClassificationResult:
    """Try to turn an error body into an :class:`APIError`."""

    try:
        payload = APIErrorPayload.model_validate_json(body)
    except ValidationError as exc:
        return Unclassifiable(
            f"error body is not a JSON error envelope: {exc.error_count()} issue(s)"
        )

    message = payload.resolved_message()
    if message is None:
        return Unclassifiable("error body carries no message")
    return Classified(APIError(status, message, path))


def create_api_error(status: int, content_type: str, path: str) -> APIError:
    """Build the generic error used when a response cannot be classified."""

    shown = content_type or "unknown"
    return APIError(
        status,
        f"unexpected response from SMoP (HTTP {status}, content type {shown!r})",
        path,
    )


def classify_error_response(
    body: bytes,
    *,
    status: int,
    content_type: str,
    path: str,
) -> APIError:
    """Return the structured error when possible, the fallback otherwise."""

    if is_json_content_type(content_type):
        result = parse_api_error_response(body, path, status)
        if isinstance(result, Classified):
            return result.error
    return create_api_error(status, content_type, path)


__all__ = [
    "ClassificationResult",
    "Classified",
    "DEFAULT_MAX_RESPONSE_BYTES",
    "Unclassifiable",
    "classify_error_response",
    "content_type_of",
    "create_api_error",
    "is_json_content_type",
    "parse_api_error_response",
    "read_response_body",
]

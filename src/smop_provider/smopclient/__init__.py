"""Async client for the SMoP key/value secrets API."""

from .apiversion import (
    API_VERSION_HEADER,
    APIVersionSettings,
    DEFAULT_API_VERSION,
    current_api_version,
    with_api_version_header,
)
from .client import SMOPClient, validate_server_url
from .config import SMOPClientConfig
from .editors import RequestEditor, get_request_editor
from .exceptions import (
    APIError,
    AuthSetupError,
    ConfigurationError,
    DecodeError,
    InvalidConfiguration,
    SMOPError,
    SecretPropertyNotFound,
    TransportError,
    TransportReadError,
)
from .folders import FolderPath, FolderPathLike
from .responses import (
    Classified,
    ClassificationResult,
    Unclassifiable,
    create_api_error,
    parse_api_error_response,
    read_response_body,
)
from .schemas import KV, KVListItem, KVListResponse
from .transport import (
    GetKvByPathParams,
    GetKvsParams,
    SMOPTransport,
    TransportOption,
    with_headers,
    with_http_client,
    with_request_editor,
    with_timeout,
    with_verify,
)

__all__ = [
    "API_VERSION_HEADER",
    "APIError",
    "APIVersionSettings",
    "AuthSetupError",
    "Classified",
    "ClassificationResult",
    "ConfigurationError",
    "DEFAULT_API_VERSION",
    "DecodeError",
    "FolderPath",
    "FolderPathLike",
    "GetKvByPathParams",
    "GetKvsParams",
    "InvalidConfiguration",
    "KV",
    "KVListItem",
    "KVListResponse",
    "RequestEditor",
    "SMOPClient",
    "SMOPClientConfig",
    "SMOPError",
    "SMOPTransport",
    "SecretPropertyNotFound",
    "TransportError",
    "TransportOption",
    "TransportReadError",
    "Unclassifiable",
    "create_api_error",
    "current_api_version",
    "get_request_editor",
    "parse_api_error_response",
    "read_response_body",
    "validate_server_url",
    "with_api_version_header",
    "with_headers",
    "with_http_client",
    "with_request_editor",
    "with_timeout",
    "with_verify",
]

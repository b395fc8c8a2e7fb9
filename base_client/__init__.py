"""base_client: response classification and body decoding over a pluggable HTTP transport.

Public API re-exports for consumer convenience.
"""

from base_client.adapters.http_client import HttpConfig, RequestsTransport
from base_client.adapters.response_executor import (
    ResponseExecutor,
    drain,
    read_json,
    read_string,
    read_void,
)
from base_client.domain.errors import ClientError, ResponseError, ServerError
from base_client.domain.ports import (
    ErrorTransform,
    HttpTransport,
    TransportResponse,
    UseCaseError,
)
from base_client.usecases.error_mapping import map_response_error

__all__ = [
    "ClientError",
    "ErrorTransform",
    "HttpConfig",
    "HttpTransport",
    "RequestsTransport",
    "ResponseError",
    "ResponseExecutor",
    "ServerError",
    "TransportResponse",
    "UseCaseError",
    "drain",
    "map_response_error",
    "read_json",
    "read_string",
    "read_void",
]

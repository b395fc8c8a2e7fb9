"""Domain package exports for error types and ports."""

from .errors import ClientError, ResponseError, ServerError
from .ports import (
    ErrorTransform,
    HttpTransport,
    RequestId,
    StatusCode,
    TransportResponse,
    UseCaseError,
)

__all__ = [
    "ClientError",
    "ErrorTransform",
    "HttpTransport",
    "RequestId",
    "ResponseError",
    "ServerError",
    "StatusCode",
    "TransportResponse",
    "UseCaseError",
]

"""
Exception types raised by the Graph API client.

Every failure the client reports is a subclass of GraphClientError and carries
an ErrorKind tag, so callers can either catch by class or dispatch on
``error.kind`` (see graph_client.results).

Classes:
    ErrorKind: Failure category tag
    ErrorSource: Which endpoint's error shape an API error matched
    GraphClientError: Base class for all client failures
    InvalidParameterError: Caller misuse, detected before any network call
    NetworkError: Non-200 status or transport failure
    ApiResponseError: HTTP 200 whose body reports a remote error
    MappingError: Response JSON did not match the expected structure
    OperationNotSupportedError: Operation declared but not available
"""

from enum import Enum
from typing import Optional, Union


class ErrorKind(Enum):
    """Failure categories reported by the client."""
    INVALID_PARAMETER = "invalid_parameter"
    NETWORK = "network"
    API_RESPONSE = "api_response"
    MAPPING = "mapping"
    NOT_IMPLEMENTED = "not_implemented"


class ErrorSource(Enum):
    """Error body shape that matched in an ApiResponseError."""
    GRAPH = "graph"
    LEGACY = "legacy"


class GraphClientError(Exception):
    """Base class for all Graph API client errors.

    Attributes:
        kind: The ErrorKind of this failure
        message: Human-readable error message
    """

    kind: Optional[ErrorKind] = None

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class InvalidParameterError(GraphClientError, ValueError):
    """Raised when a caller supplies a reserved, blank or missing argument."""

    kind = ErrorKind.INVALID_PARAMETER


class NetworkError(GraphClientError):
    """Raised on a non-200 HTTP status or a failed transport call.

    Attributes:
        status_code: HTTP status code, or None if no response was received
    """

    kind = ErrorKind.NETWORK

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        if status_code is not None:
            message = f"{message} (HTTP {status_code})"
        super().__init__(message)


class ApiResponseError(GraphClientError):
    """Raised when the API answers 200 but the body encodes an error.

    The Graph endpoint reports errors as
    ``{"error": {"type": ..., "message": ...}}`` while the legacy endpoint
    uses ``{"error_code": N, "error_msg": ...}``.

    Attributes:
        code: Remote error code (legacy ``error_code`` or Graph ``error.code``)
        error_message: Remote error message
        source: Which error shape matched
        error_type: Graph ``error.type``; None for legacy errors
    """

    kind = ErrorKind.API_RESPONSE

    def __init__(
        self,
        code: Optional[Union[int, str]],
        message: str,
        source: ErrorSource,
        error_type: Optional[str] = None,
    ):
        self.code = code
        self.error_message = message
        self.source = source
        self.error_type = error_type
        label = error_type or code
        super().__init__(f"[{source.value}:{label}] {message}")


class MappingError(GraphClientError):
    """Raised when response JSON cannot be mapped to the requested shape or type."""

    kind = ErrorKind.MAPPING


class OperationNotSupportedError(GraphClientError, NotImplementedError):
    """Raised by operations that are part of the interface but not yet available.

    Attributes:
        operation: Name of the unsupported operation
    """

    kind = ErrorKind.NOT_IMPLEMENTED

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"'{operation}' is not supported by this client yet")

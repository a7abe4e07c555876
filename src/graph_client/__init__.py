"""Client library for the Graph API and its legacy FQL endpoint."""

__version__ = "1.0.0"
__author__ = "Graph Client Contributors"

from .client import GraphClient

from .config import ClientConfig, load_config

from .connection import Page

from .exceptions import (
    ErrorKind,
    ErrorSource,
    GraphClientError,
    InvalidParameterError,
    NetworkError,
    ApiResponseError,
    MappingError,
    OperationNotSupportedError,
)

from .http_client import (
    RawResponse,
    WebRequestor,
    DefaultWebRequestor,
    ResponseClassifier,
)

from .json_mapper import JsonMapper, DefaultJsonMapper

from .parameters import Parameter, ParameterSet

from .results import Result

from .routing import Endpoint, EndpointRouter, Route

__all__ = [
    # Client
    "GraphClient",
    "ClientConfig",
    "load_config",
    "Page",
    "Result",
    # Parameters and routing
    "Parameter",
    "ParameterSet",
    "Endpoint",
    "EndpointRouter",
    "Route",
    # Collaborators
    "RawResponse",
    "WebRequestor",
    "DefaultWebRequestor",
    "ResponseClassifier",
    "JsonMapper",
    "DefaultJsonMapper",
    # Errors
    "ErrorKind",
    "ErrorSource",
    "GraphClientError",
    "InvalidParameterError",
    "NetworkError",
    "ApiResponseError",
    "MappingError",
    "OperationNotSupportedError",
]

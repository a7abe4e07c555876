"""
Graph API client.

GraphClient is the public entry point. Every operation runs the same
pipeline:

    validate parameters -> inject internal parameters -> encode -> route
    -> transport -> classify response -> extract -> decode

The client holds only immutable configuration (access token, router and the
two collaborators), so one instance can be shared between threads.

Example:
    >>> client = GraphClient("my-access-token")
    >>> me = client.fetch_object("me", dict, Parameter.with_value("fields", "id,name"))
    >>> page = client.fetch_connection("me/friends", dict)
    >>> page.has_next
    True
"""

import logging
from typing import Any, Callable, FrozenSet, List, Mapping, Optional, Sequence, Tuple, Type, TypeVar

from .batch import normalize_ids, read_batch
from .config import ClientConfig
from .connection import Page, read_page
from .exceptions import (
    InvalidParameterError,
    MappingError,
    NetworkError,
    OperationNotSupportedError,
)
from .http_client import (
    DefaultWebRequestor,
    RawResponse,
    ResponseClassifier,
    WebRequestor,
    redact_access_token,
)
from .json_mapper import DefaultJsonMapper, JsonMapper
from .multiquery import build_payload, normalize_results
from .parameters import (
    BASE_RESERVED_NAMES,
    FETCH_OBJECTS_RESERVED_NAMES,
    FORMAT_PARAM_NAME,
    IDS_PARAM_NAME,
    MULTIQUERY_RESERVED_NAMES,
    QUERIES_PARAM_NAME,
    QUERY_PARAM_NAME,
    QUERY_RESERVED_NAMES,
    RESPONSE_FORMAT,
    Parameter,
    ParameterSet,
    encode_parameters,
    to_form_body,
    validate_parameters,
    verify_presence,
)
from .results import Result
from .routing import Endpoint, EndpointRouter, Route

logger = logging.getLogger(__name__)

T = TypeVar("T")

FQL_QUERY_METHOD = "fql.query"
FQL_MULTIQUERY_METHOD = "fql.multiquery"


class GraphClient:
    """Client for the Graph and legacy REST endpoints.

    Args:
        access_token: OAuth access token, sent with every request
        json_mapper: Decoder for response JSON (DefaultJsonMapper if None)
        web_requestor: Transport (DefaultWebRequestor if None)
        router: Endpoint router (default base URLs if None)

    Raises:
        InvalidParameterError: If the access token is blank or a collaborator
            does not implement its protocol
    """

    def __init__(
        self,
        access_token: str,
        json_mapper: Optional[JsonMapper] = None,
        web_requestor: Optional[WebRequestor] = None,
        router: Optional[EndpointRouter] = None,
    ):
        verify_presence("access_token", access_token)
        json_mapper = json_mapper if json_mapper is not None else DefaultJsonMapper()
        web_requestor = web_requestor if web_requestor is not None else DefaultWebRequestor()
        if not isinstance(json_mapper, JsonMapper):
            raise InvalidParameterError("json_mapper must implement decode_one and decode_many")
        if not isinstance(web_requestor, WebRequestor):
            raise InvalidParameterError("web_requestor must implement execute_get and execute_post")

        self._access_token = access_token
        self._json_mapper = json_mapper
        self._web_requestor = web_requestor
        self._router = router or EndpointRouter()
        self._classifier = ResponseClassifier()

    @classmethod
    def from_config(
        cls,
        config: ClientConfig,
        json_mapper: Optional[JsonMapper] = None,
        web_requestor: Optional[WebRequestor] = None,
    ) -> "GraphClient":
        """Create a client from a ClientConfig.

        The default transport is built with the configured timeout and
        User-Agent unless ``web_requestor`` is given.
        """
        if web_requestor is None:
            web_requestor = DefaultWebRequestor(timeout=config.timeout, user_agent=config.user_agent)
        return cls(
            config.access_token,
            json_mapper=json_mapper,
            web_requestor=web_requestor,
            router=EndpointRouter(config.graph_endpoint_url, config.legacy_endpoint_url),
        )

    # ------------------------------------------------------------------
    # Public operations
    # ------------------------------------------------------------------

    def fetch_object(self, path: str, object_type: Type[T], *parameters: Parameter) -> T:
        """Fetch a single Graph object, e.g. ``me`` or ``cocacola``.

        Args:
            path: Object path
            object_type: Type to decode the response into
            *parameters: Extra request parameters

        Returns:
            The decoded object

        Raises:
            InvalidParameterError: On a blank path, missing type or reserved parameter
            NetworkError: On transport failure or non-200 status
            ApiResponseError: If the API reports an error
            MappingError: If the response cannot be decoded
        """
        verify_presence("path", path)
        verify_presence("object_type", object_type)
        _, body = self._make_request(path, Endpoint.GRAPH, False, parameters, BASE_RESERVED_NAMES)
        return self._decode(self._json_mapper.decode_one, body, object_type)

    def fetch_objects(self, ids: Sequence[str], object_type: Type[T], *parameters: Parameter) -> List[T]:
        """Fetch several Graph objects in one request.

        IDs are trimmed and lower-cased before sending. IDs the API does not
        return are left out of the result, so it may be shorter than ``ids``;
        the order follows ``ids``. Duplicate IDs are passed through.

        Raises:
            InvalidParameterError: If ``ids`` is empty or has a blank entry, or
                ``ids`` is passed as a parameter
        """
        verify_presence("object_type", object_type)
        validate_parameters(parameters, FETCH_OBJECTS_RESERVED_NAMES)
        normalized_ids = normalize_ids(ids)

        payload, _ = self._make_request(
            "",
            Endpoint.GRAPH,
            False,
            parameters,
            FETCH_OBJECTS_RESERVED_NAMES,
            injected=Parameter(IDS_PARAM_NAME, ",".join(normalized_ids)),
        )
        return [
            self._decode(self._json_mapper.decode_one, item, object_type)
            for item in read_batch(payload, normalized_ids)
        ]

    def fetch_connection(self, path: str, connection_type: Type[T], *parameters: Parameter) -> Page[T]:
        """Fetch one page of a connection, e.g. ``me/friends``.

        Every item is decoded into ``connection_type``; one bad item fails
        the whole page with MappingError.
        """
        verify_presence("path", path)
        verify_presence("connection_type", connection_type)
        payload, _ = self._make_request(path, Endpoint.GRAPH, False, parameters, BASE_RESERVED_NAMES)
        page = read_page(payload)
        return page.map(lambda item: self._decode(self._json_mapper.decode_one, item, connection_type))

    def execute_query(self, query: str, object_type: Type[T], *parameters: Parameter) -> List[T]:
        """Run an FQL query against the legacy endpoint.

        Raises:
            InvalidParameterError: On a blank query or if ``query`` is passed
                as a parameter
        """
        verify_presence("query", query)
        verify_presence("object_type", object_type)
        validate_parameters(parameters, QUERY_RESERVED_NAMES)

        _, body = self._make_request(
            FQL_QUERY_METHOD,
            Endpoint.LEGACY,
            True,
            parameters,
            QUERY_RESERVED_NAMES,
            injected=Parameter(QUERY_PARAM_NAME, query),
        )
        return self._decode(self._json_mapper.decode_many, body, object_type)

    def execute_multiquery(self, queries: Mapping[str, str], object_type: Type[T], *parameters: Parameter) -> T:
        """Run several named FQL queries in one request.

        The result sets are decoded together into one ``object_type``
        instance whose fields are named after the queries.

        Example:
            >>> @dataclass
            ... class Results:
            ...     users: List[dict]
            ...     pages: List[dict]
            >>> client.execute_multiquery(
            ...     {"users": "SELECT uid, name FROM user WHERE uid=220439",
            ...      "pages": "SELECT page_id FROM page_fan WHERE uid=220439"},
            ...     Results)
        """
        verify_presence("object_type", object_type)
        validate_parameters(parameters, MULTIQUERY_RESERVED_NAMES)
        queries_json = build_payload(queries)

        payload, _ = self._make_request(
            FQL_MULTIQUERY_METHOD,
            Endpoint.LEGACY,
            True,
            parameters,
            MULTIQUERY_RESERVED_NAMES,
            injected=Parameter(QUERIES_PARAM_NAME, queries_json),
        )
        return self._decode(self._json_mapper.decode_one, normalize_results(payload), object_type)

    def publish(self, connection: str, *parameters: Parameter) -> None:
        """Publish to a connection. Not supported yet."""
        raise OperationNotSupportedError("publish")

    def delete_object(self, object_id: str) -> None:
        """Delete a Graph object. Not supported yet."""
        raise OperationNotSupportedError("delete_object")

    def attempt(self, operation: Callable[..., T], *args: Any, **kwargs: Any) -> Result[T]:
        """Run an operation and return a Result instead of raising.

        Example:
            >>> result = client.attempt(client.fetch_object, "me", dict)
            >>> result.kind
            <ErrorKind.API_RESPONSE: 'api_response'>
        """
        return Result.capture(operation, *args, **kwargs)

    # ------------------------------------------------------------------
    # Request pipeline
    # ------------------------------------------------------------------

    def _make_request(
        self,
        path: str,
        endpoint: Endpoint,
        as_post: bool,
        parameters: Tuple[Parameter, ...],
        reserved_names: FrozenSet[str],
        injected: Optional[Parameter] = None,
    ) -> Tuple[Any, str]:
        """Execute one request and return its parsed payload and body text."""
        validate_parameters(parameters, reserved_names)

        parameter_set = ParameterSet(parameters)
        if injected is not None:
            parameter_set = parameter_set.with_parameter(injected)
        parameter_set = parameter_set.with_parameter(Parameter(FORMAT_PARAM_NAME, RESPONSE_FORMAT))

        if as_post:
            encoded = to_form_body(parameter_set, self._access_token)
        else:
            encoded = encode_parameters(parameter_set, self._access_token)
        route = self._router.route(path, endpoint, as_post, encoded)

        response = self._execute(route)
        logger.info(f"API responded with HTTP {response.status_code}")
        payload = self._classifier.classify(response)
        return payload, response.body

    def _execute(self, route: Route) -> RawResponse:
        logger.debug(f"{route.method} {redact_access_token(route.url)}")
        try:
            if route.method == "POST":
                return self._web_requestor.execute_post(route.url, route.body or "")
            return self._web_requestor.execute_get(route.url)
        except NetworkError:
            raise
        except Exception as e:
            logger.error(f"{route.method} request failed: {e}")
            raise NetworkError(f"API {route.method} failed: {e}") from e

    @staticmethod
    def _decode(decoder: Callable[[str, Any], Any], json_text: str, target_type: Any) -> Any:
        try:
            return decoder(json_text, target_type)
        except MappingError:
            raise
        except Exception as e:
            type_name = getattr(target_type, "__name__", repr(target_type))
            raise MappingError(f"Unable to map response JSON to {type_name}: {e}") from e

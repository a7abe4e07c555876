"""
Endpoint selection and target URL assembly.

The API is served from two hosts: the Graph endpoint, addressed by object
path and read with GET, and the legacy REST endpoint, addressed by method
name (``fql.query``, ``fql.multiquery``) and called with POST.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal, Optional

GRAPH_ENDPOINT_URL = "https://graph.facebook.com"
LEGACY_ENDPOINT_URL = "https://api.facebook.com/method"

HttpMethod = Literal["GET", "POST"]


class Endpoint(Enum):
    """Which backend a request goes to."""
    GRAPH = "graph"
    LEGACY = "legacy"


@dataclass(frozen=True)
class Route:
    """A fully assembled request target.

    Attributes:
        url: Absolute URL; includes the query string for GET
        method: HTTP method
        body: Form-encoded body for POST, None for GET
    """
    url: str
    method: HttpMethod
    body: Optional[str] = None


def normalize_path(path: Optional[str]) -> str:
    """Trim ``path`` and give it exactly one leading separator.

    Example:
        >>> normalize_path("  //me/friends ")
        '/me/friends'
        >>> normalize_path("")
        '/'
    """
    return "/" + (path or "").strip().lstrip("/")


class EndpointRouter:
    """Maps a logical path and endpoint to a Route.

    Example:
        >>> router = EndpointRouter()
        >>> router.route("me", Endpoint.GRAPH, False, "?access_token=t").url
        'https://graph.facebook.com/me?access_token=t'
    """

    def __init__(
        self,
        graph_endpoint_url: str = GRAPH_ENDPOINT_URL,
        legacy_endpoint_url: str = LEGACY_ENDPOINT_URL,
    ):
        self._base_urls = {
            Endpoint.GRAPH: graph_endpoint_url.rstrip("/"),
            Endpoint.LEGACY: legacy_endpoint_url.rstrip("/"),
        }

    def base_url(self, endpoint: Endpoint) -> str:
        return self._base_urls[endpoint]

    def route(
        self,
        path: Optional[str],
        endpoint: Endpoint,
        as_post: bool,
        query_string: str = "",
    ) -> Route:
        """Build the request target.

        Args:
            path: Logical path, e.g. ``me/friends`` or ``fql.query``
            endpoint: Backend to address
            as_post: Issue as POST with the parameters in the body; the
                caller decides, the router does not infer it
            query_string: Encoded parameters, with or without the leading ``?``

        Returns:
            Route with URL, method and (for POST) body
        """
        url = self._base_urls[endpoint] + normalize_path(path)
        if as_post:
            return Route(url=url, method="POST", body=query_string.lstrip("?"))
        if query_string and not query_string.startswith("?"):
            query_string = "?" + query_string
        return Route(url=url + query_string, method="GET")

"""
HTTP transport and response classification for the Graph API client.

This module provides the transport contract the client consumes, a default
requests-based implementation, and the classifier that turns a raw transport
outcome into either a JSON payload or a typed error.

Classes:
    RawResponse: Status code and body returned by a transport
    WebRequestor: Transport protocol (GET/POST, blocking)
    DefaultWebRequestor: requests-based transport
    ResponseClassifier: Status and error-shape checks before decoding
"""

import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, Protocol, runtime_checkable

import requests

from .exceptions import ApiResponseError, ErrorSource, MappingError, NetworkError

logger = logging.getLogger(__name__)

HTTP_OK = 200

DEFAULT_TIMEOUT = 30
DEFAULT_USER_AGENT = "graph-client/1.0"

_ACCESS_TOKEN_VALUE = re.compile(r"((?:^|[?&])access_token=)[^&#]*")


@dataclass(frozen=True)
class RawResponse:
    """Transport outcome, consumed once by the classifier.

    Attributes:
        status_code: HTTP status code
        body: Response body text
    """
    status_code: int
    body: str

    def __str__(self) -> str:
        return f"HTTP {self.status_code}: {self.body[:200]}"


@runtime_checkable
class WebRequestor(Protocol):
    """Protocol for the blocking transport used by GraphClient."""

    def execute_get(self, url: str) -> RawResponse:
        """Issue a GET to ``url`` (query string included)."""
        ...

    def execute_post(self, url: str, body: str) -> RawResponse:
        """Issue a form-encoded POST of ``body`` to ``url``."""
        ...


class DefaultWebRequestor:
    """Transport built on ``requests``.

    Timeouts and connection failures are raised as NetworkError without a
    status code. Non-200 responses are returned, not raised; classifying them
    is the ResponseClassifier's job.

    Example:
        >>> requestor = DefaultWebRequestor(timeout=10)
        >>> response = requestor.execute_get("https://graph.facebook.com/me?access_token=...")
    """

    def __init__(
        self,
        timeout: int = DEFAULT_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
    ):
        """Initialize the requestor.

        Args:
            timeout: Request timeout in seconds
            user_agent: Value of the User-Agent header
        """
        self._timeout = timeout
        self._user_agent = user_agent

    def execute_get(self, url: str) -> RawResponse:
        return self._execute("GET", url, headers=self._headers())

    def execute_post(self, url: str, body: str) -> RawResponse:
        headers = self._headers()
        headers["Content-Type"] = "application/x-www-form-urlencoded"
        return self._execute("POST", url, headers=headers, data=body.encode("utf-8"))

    def _headers(self) -> Dict[str, str]:
        return {"User-Agent": self._user_agent}

    def _execute(self, method: str, url: str, **kwargs: Any) -> RawResponse:
        """Execute a request and wrap requests' failures as NetworkError."""
        try:
            response = requests.request(method, url, timeout=self._timeout, **kwargs)
        except requests.exceptions.Timeout:
            logger.error(f"{method} request timed out after {self._timeout}s")
            raise NetworkError(f"{method} request timed out after {self._timeout} seconds")
        except requests.exceptions.ConnectionError as e:
            logger.error(f"{method} connection error: {e}")
            raise NetworkError(f"{method} failed to connect: {e}")
        except requests.exceptions.RequestException as e:
            logger.error(f"{method} request error: {e}")
            raise NetworkError(f"{method} request failed: {e}")

        return RawResponse(status_code=response.status_code, body=response.text)


class ResponseClassifier:
    """Checks a raw response for transport and API-level failures.

    Checks run in order: the status code first, without looking at the body,
    then the parsed body for either error shape.

    Example:
        >>> ResponseClassifier().classify(RawResponse(200, '{"id": "4"}'))
        {'id': '4'}
    """

    def classify(self, response: RawResponse) -> Any:
        """Return the parsed JSON payload of a successful response.

        Args:
            response: Transport outcome

        Returns:
            The parsed JSON body

        Raises:
            NetworkError: If the status code is not 200
            MappingError: If the body is not valid JSON
            ApiResponseError: If the body encodes a Graph or legacy error
        """
        if response.status_code != HTTP_OK:
            logger.warning(f"API responded with HTTP {response.status_code}")
            raise NetworkError("API request failed", status_code=response.status_code)

        try:
            payload = json.loads(response.body)
        except (json.JSONDecodeError, TypeError) as e:
            logger.debug(f"Response text: {str(response.body)[:500]}")
            raise MappingError(f"API returned invalid JSON: {e}") from e

        self.raise_if_error(payload)
        return payload

    @staticmethod
    def raise_if_error(payload: Any) -> None:
        """Raise ApiResponseError if ``payload`` has either error shape.

        Graph errors look like
        ``{"error": {"type": "OAuthException", "message": "..."}}``;
        legacy errors like ``{"error_code": 601, "error_msg": "..."}``.
        """
        if not isinstance(payload, dict):
            return

        error = payload.get("error")
        if isinstance(error, dict):
            error_type = error.get("type")
            message = str(error.get("message", ""))
            logger.warning(f"Graph API error ({error_type}): {message}")
            raise ApiResponseError(
                code=error.get("code"),
                message=message,
                source=ErrorSource.GRAPH,
                error_type=error_type,
            )

        if "error_code" in payload:
            code = payload.get("error_code")
            message = str(payload.get("error_msg", ""))
            logger.warning(f"Legacy API error {code}: {message}")
            raise ApiResponseError(code=code, message=message, source=ErrorSource.LEGACY)


def redact_access_token(url: str) -> str:
    """Mask the ``access_token`` parameter value in a URL or form body before it is logged."""
    return _ACCESS_TOKEN_VALUE.sub(r"\1***", url)

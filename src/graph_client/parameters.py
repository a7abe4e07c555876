"""
Request parameters, reserved-name checks and query string encoding.

A request's arguments are an ordered ParameterSet. Callers may not supply
names the client injects itself; which names are reserved depends on the
operation, so the check takes an explicit reserved set instead of consulting
shared state.

Wire order of an encoded request is: caller parameters, any
operation-injected parameter (``ids``, ``query``, ``queries``), ``format``,
then ``access_token`` last.
"""

import json
from dataclasses import dataclass
from typing import Any, FrozenSet, Iterable, Iterator, Tuple
from urllib.parse import quote

from .exceptions import InvalidParameterError

ACCESS_TOKEN_PARAM_NAME = "access_token"
METHOD_PARAM_NAME = "method"
FORMAT_PARAM_NAME = "format"
IDS_PARAM_NAME = "ids"
QUERY_PARAM_NAME = "query"
QUERIES_PARAM_NAME = "queries"

RESPONSE_FORMAT = "json"

# Names the client always injects; every operation reserves at least these.
BASE_RESERVED_NAMES: FrozenSet[str] = frozenset(
    {ACCESS_TOKEN_PARAM_NAME, METHOD_PARAM_NAME, FORMAT_PARAM_NAME}
)
FETCH_OBJECTS_RESERVED_NAMES = BASE_RESERVED_NAMES | {IDS_PARAM_NAME}
QUERY_RESERVED_NAMES = BASE_RESERVED_NAMES | {QUERY_PARAM_NAME}
MULTIQUERY_RESERVED_NAMES = BASE_RESERVED_NAMES | {QUERIES_PARAM_NAME}


def _serialize_value(value: Any) -> str:
    """Convert a parameter value to its wire string."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, (dict, list, tuple)):
        return json.dumps(value, separators=(",", ":"), default=str)
    return str(value)


@dataclass(frozen=True)
class Parameter:
    """A single request argument.

    Attributes:
        name: Parameter name, never blank
        value: Wire representation of the value

    Example:
        >>> Parameter.with_value("limit", 25)
        Parameter(name='limit', value='25')
    """
    name: str
    value: str

    def __post_init__(self):
        if not isinstance(self.name, str) or not self.name.strip():
            raise InvalidParameterError("Parameter name cannot be blank.")
        if self.value is None:
            raise InvalidParameterError(
                f"Parameter '{self.name}' cannot have a None value."
            )
        object.__setattr__(self, "value", _serialize_value(self.value))

    @classmethod
    def with_value(cls, name: str, value: Any) -> "Parameter":
        """Create a parameter, serializing non-string values.

        Booleans become ``true``/``false``, containers become compact JSON
        and anything else goes through ``str()``. The constructor applies
        the same serialization.
        """
        return cls(name, value)


class ParameterSet:
    """Immutable ordered collection of request parameters."""

    __slots__ = ("_parameters",)

    def __init__(self, parameters: Iterable[Parameter] = ()):
        self._parameters: Tuple[Parameter, ...] = tuple(parameters)

    @classmethod
    def of(cls, *parameters: Parameter) -> "ParameterSet":
        return cls(parameters)

    def with_parameter(self, parameter: Parameter) -> "ParameterSet":
        """Return a new set with ``parameter`` appended."""
        return ParameterSet(self._parameters + (parameter,))

    def names(self) -> Tuple[str, ...]:
        return tuple(p.name for p in self._parameters)

    def __iter__(self) -> Iterator[Parameter]:
        return iter(self._parameters)

    def __len__(self) -> int:
        return len(self._parameters)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ParameterSet):
            return NotImplemented
        return self._parameters == other._parameters

    def __hash__(self) -> int:
        return hash(self._parameters)

    def __repr__(self) -> str:
        return f"ParameterSet({list(self._parameters)!r})"


def validate_parameters(
    parameters: Iterable[Parameter],
    reserved_names: FrozenSet[str],
) -> None:
    """Reject caller-supplied parameters whose names are reserved.

    Args:
        parameters: Caller-supplied parameters
        reserved_names: Names the current operation injects itself

    Raises:
        InvalidParameterError: On the first reserved name found
    """
    for parameter in parameters:
        if parameter.name in reserved_names:
            raise InvalidParameterError(
                f"Parameter '{parameter.name}' is reserved for internal use - "
                "you cannot specify it yourself."
            )


def verify_presence(name: str, value: Any) -> None:
    """Ensure a required argument is not None and, for strings, not blank.

    Raises:
        InvalidParameterError: If the argument is missing or blank
    """
    if value is None:
        raise InvalidParameterError(f"The '{name}' parameter cannot be None.")
    if isinstance(value, str) and not value.strip():
        raise InvalidParameterError(
            f"The '{name}' parameter cannot be an empty string."
        )


def _url_encode(text: str) -> str:
    return quote(text, safe="")


def _encoded_pairs(parameters: Iterable[Parameter], access_token: str) -> str:
    pairs = [
        f"{_url_encode(p.name)}={_url_encode(p.value)}" for p in parameters
    ]
    pairs.append(f"{ACCESS_TOKEN_PARAM_NAME}={_url_encode(access_token)}")
    return "&".join(pairs)


def encode_parameters(parameters: Iterable[Parameter], access_token: str) -> str:
    """Encode parameters as a URL query string with the access token last.

    Every name and value is percent-encoded with no safe characters, so the
    output round-trips through ``urllib.parse.parse_qsl`` unchanged. The
    access token is always appended, so the result is never empty.

    Args:
        parameters: Parameters to encode, in wire order
        access_token: Token appended as the final ``access_token`` parameter

    Returns:
        ``?name=value&...&access_token=...``
    """
    return "?" + _encoded_pairs(parameters, access_token)


def to_form_body(parameters: Iterable[Parameter], access_token: str) -> str:
    """Encode parameters as an ``application/x-www-form-urlencoded`` body."""
    return _encoded_pairs(parameters, access_token)

"""
FQL multiquery payload construction and response normalization.

Request: ``queries={"friends": "SELECT uid2 FROM friend WHERE uid1=...", ...}``
Response: ``[{"name": "friends", "fql_result_set": [...]}, ...]``

The response is re-keyed to ``{"friends": [...], ...}`` so that a single
target type whose fields are named after the queries can be decoded from it.
"""

import json
from typing import Any, Mapping

from .exceptions import InvalidParameterError, MappingError


def build_payload(queries: Mapping[str, str]) -> str:
    """Serialize named queries as the ``queries`` parameter value.

    Args:
        queries: Query name to FQL text

    Returns:
        JSON object text mapping trimmed names to trimmed queries

    Raises:
        InvalidParameterError: If there are no queries or any name or query
            is blank
    """
    if queries is None:
        raise InvalidParameterError("The 'queries' parameter cannot be None.")
    if len(queries) == 0:
        raise InvalidParameterError("You must specify at least one query.")

    normalized = {}
    for name, query in queries.items():
        if not isinstance(name, str) or not isinstance(query, str) \
                or not name.strip() or not query.strip():
            raise InvalidParameterError(
                "Provided queries must have non-blank keys and values. "
                f"You provided: {dict(queries)}"
            )
        normalized[name.strip()] = query.strip()

    return json.dumps(normalized)


def normalize_results(payload: Any) -> str:
    """Re-key a multiquery response by query name.

    Args:
        payload: Parsed JSON response body, a list of result set objects

    Returns:
        JSON object text ``{name: fql_result_set, ...}``

    Raises:
        MappingError: If the payload is not a list, or an element is not an
            object with ``name`` and ``fql_result_set``
    """
    if not isinstance(payload, list):
        raise MappingError(
            f"Unable to process fql.multiquery response: expected a JSON array, "
            f"got {type(payload).__name__}"
        )

    normalized = {}
    for index, entry in enumerate(payload):
        if not isinstance(entry, dict) or "name" not in entry or "fql_result_set" not in entry:
            raise MappingError(
                f"Unable to process fql.multiquery response: entry {index} "
                "must have 'name' and 'fql_result_set'"
            )
        normalized[str(entry["name"])] = entry["fql_result_set"]

    return json.dumps(normalized)

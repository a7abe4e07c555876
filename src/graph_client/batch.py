"""
Multi-ID ("batch") fetch support.

The Graph endpoint answers ``GET /?ids=a,b`` with an object keyed by ID.
IDs the backend does not return are dropped, not reported.
"""

import json
from typing import Any, List, Sequence

from .exceptions import InvalidParameterError, MappingError


def normalize_ids(ids: Sequence[str]) -> List[str]:
    """Trim and lower-case every ID.

    Duplicates are kept; callers get back exactly what they sent, normalized.

    Raises:
        InvalidParameterError: If ``ids`` is empty or any ID is blank
    """
    if ids is None or isinstance(ids, str):
        raise InvalidParameterError("The list of IDs must be a sequence of strings.")
    if len(ids) == 0:
        raise InvalidParameterError("The list of IDs cannot be empty.")

    normalized = []
    for object_id in ids:
        if object_id is None:
            raise InvalidParameterError("The list of IDs cannot contain None.")
        value = str(object_id).strip().lower()
        if not value:
            raise InvalidParameterError("The list of IDs cannot contain blank strings.")
        normalized.append(value)
    return normalized


def read_batch(payload: Any, ids: Sequence[str]) -> List[str]:
    """Pick the entries for ``ids`` out of an ID-keyed response.

    Output follows the order of ``ids``, not the response's key order.

    Args:
        payload: Parsed JSON response body
        ids: Normalized IDs, as produced by normalize_ids

    Returns:
        JSON text of each present entry

    Raises:
        MappingError: If the payload is not a JSON object
    """
    if not isinstance(payload, dict):
        raise MappingError(
            f"Batch response must be a JSON object, got {type(payload).__name__}"
        )
    return [json.dumps(payload[object_id]) for object_id in ids if object_id in payload]

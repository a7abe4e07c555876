"""
Paged collection ("connection") handling.

A Graph connection response looks like::

    {"data": [...], "paging": {"previous": "...", "next": "..."}}

``paging`` is optional and each of its keys is independently optional.
"""

import json
from dataclasses import dataclass
from typing import Any, Callable, Generic, Tuple, TypeVar

from .exceptions import MappingError

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of a paginated collection.

    ``has_previous``/``has_next`` record whether the response carried paging
    cursors; the cursor URLs themselves are not validated.

    Attributes:
        items: Items from the response's ``data`` array, in order
        has_previous: Whether ``paging.previous`` was present
        has_next: Whether ``paging.next`` was present
    """
    items: Tuple[T, ...]
    has_previous: bool = False
    has_next: bool = False

    def map(self, func: Callable[[T], U]) -> "Page[U]":
        """Return a page with ``func`` applied to every item, flags unchanged."""
        return Page(
            items=tuple(func(item) for item in self.items),
            has_previous=self.has_previous,
            has_next=self.has_next,
        )

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)


def read_page(payload: Any) -> Page[str]:
    """Extract items and paging flags from a connection payload.

    Each ``data`` element is returned as JSON text for per-item decoding.

    Args:
        payload: Parsed JSON response body

    Returns:
        Page of raw JSON item strings

    Raises:
        MappingError: If the payload is not an object with a ``data`` array,
            or ``paging`` is present but not an object
    """
    if not isinstance(payload, dict):
        raise MappingError(
            f"Connection response must be a JSON object, got {type(payload).__name__}"
        )
    data = payload.get("data")
    if not isinstance(data, list):
        raise MappingError("Connection response has no 'data' array")

    items = tuple(json.dumps(element) for element in data)

    paging = payload.get("paging")
    if paging is None:
        return Page(items=items)
    if not isinstance(paging, dict):
        raise MappingError("Connection response 'paging' must be a JSON object")

    return Page(
        items=items,
        has_previous="previous" in paging,
        has_next="next" in paging,
    )

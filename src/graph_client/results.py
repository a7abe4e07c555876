"""
Tagged results for callers who prefer values to exceptions.

Example:
    >>> result = Result.capture(client.fetch_object, "me", dict)
    >>> if result.kind is ErrorKind.API_RESPONSE:
    ...     handle_remote_error(result.error)
    >>> profile = result.unwrap()
"""

from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, TypeVar

from .exceptions import ErrorKind, GraphClientError

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of one client operation: a value or a GraphClientError.

    Attributes:
        value: The operation's return value when it succeeded
        error: The failure when it did not
    """
    value: Optional[T] = None
    error: Optional[GraphClientError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def kind(self) -> Optional[ErrorKind]:
        """ErrorKind of the failure, None on success."""
        return None if self.error is None else self.error.kind

    def unwrap(self) -> T:
        """Return the value, re-raising the captured error on failure."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: GraphClientError) -> "Result[T]":
        return cls(error=error)

    @classmethod
    def capture(cls, func: Callable[..., T], *args: Any, **kwargs: Any) -> "Result[T]":
        """Call ``func`` and capture any GraphClientError it raises.

        Other exceptions are programming errors and propagate.
        """
        try:
            return cls.success(func(*args, **kwargs))
        except GraphClientError as e:
            return cls.failure(e)

"""
JSON to typed-object decoding.

GraphClient hands every response (or response item) to a JsonMapper as JSON
text along with the caller's target type. DefaultJsonMapper validates the text
with a pydantic ``TypeAdapter`` and supports:

- ``dict``, ``list``, ``Any`` and ``object``: the parsed JSON, unchanged
- ``str``, ``int``, ``float``, ``bool`` (pydantic lax-mode coercion)
- dataclasses and pydantic models, with nested, ``List[...]``,
  ``Dict[str, ...]`` and ``Optional[...]`` fields; a field's JSON key defaults
  to its name and can be overridden with ``Annotated[..., Field(alias="...")]``
- any other class with a ``from_dict`` classmethod

Unknown JSON keys are ignored. A field without a default must be present in
the JSON.
"""

import dataclasses
from typing import Any, Dict, List, Protocol, Type, TypeVar, runtime_checkable

from pydantic import TypeAdapter, ValidationError
from pydantic.errors import PydanticUserError

from .exceptions import MappingError

T = TypeVar("T")


@runtime_checkable
class JsonMapper(Protocol):
    """Protocol for the decoder used by GraphClient."""

    def decode_one(self, json_text: str, target_type: Type[T]) -> T:
        """Decode a single JSON value into ``target_type``."""
        ...

    def decode_many(self, json_text: str, target_type: Type[T]) -> List[T]:
        """Decode a JSON array into a list of ``target_type``."""
        ...


def _uses_from_dict(target_type: Any) -> bool:
    return (
        isinstance(target_type, type)
        and hasattr(target_type, "from_dict")
        and not dataclasses.is_dataclass(target_type)
        and not hasattr(target_type, "model_validate")
    )


class DefaultJsonMapper:
    """Decoder for plain types, dataclasses, pydantic models and ``from_dict`` classes.

    Example:
        >>> @dataclass
        ... class User:
        ...     id: str
        ...     name: Optional[str] = None
        >>> DefaultJsonMapper().decode_one('{"id": "4", "name": "Mark"}', User)
        User(id='4', name='Mark')
    """

    def decode_one(self, json_text: str, target_type: Type[T]) -> T:
        if _uses_from_dict(target_type):
            return self._from_dict(target_type, self._validate(json_text, Dict[str, Any]))
        return self._validate(json_text, self._item_type(target_type))

    def decode_many(self, json_text: str, target_type: Type[T]) -> List[T]:
        if _uses_from_dict(target_type):
            items = self._validate(json_text, List[Dict[str, Any]])
            return [self._from_dict(target_type, item) for item in items]
        return self._validate(json_text, List[self._item_type(target_type)])

    @staticmethod
    def _item_type(target_type: Any) -> Any:
        return Any if target_type is object else target_type

    @staticmethod
    def _validate(json_text: str, target_type: Any) -> Any:
        try:
            return TypeAdapter(target_type).validate_json(json_text)
        except ValidationError as e:
            raise MappingError(_describe(e, target_type)) from e
        except PydanticUserError as e:
            raise MappingError(f"Cannot decode into {_type_name(target_type)}: {e}") from e

    @staticmethod
    def _from_dict(target_type: Any, data: Dict[str, Any]) -> Any:
        try:
            return target_type.from_dict(data)
        except (KeyError, TypeError, ValueError) as e:
            raise MappingError(
                f"{target_type.__name__}.from_dict rejected the JSON object: {e}"
            ) from e


def _describe(error: ValidationError, target_type: Any) -> str:
    return f"JSON does not match {_type_name(target_type)}: {error}"


def _type_name(target_type: Any) -> str:
    return getattr(target_type, "__name__", repr(target_type))

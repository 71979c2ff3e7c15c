"""Serialization of typed values to and from cache payloads.

Payloads are JSON text. Values are dumped by their runtime type and validated
back into the type the caller asks for, so anything pydantic understands
(builtins, dataclasses, ``BaseModel`` subclasses, ``TypedDict``s, generic
containers) round-trips through the cache.

Usage:
    serializer = JsonSerializer()
    payload = serializer.serialize(Order(id=42, total=9.5))
    order = serializer.deserialize(payload, Order)
"""

from functools import lru_cache
from typing import Any, Protocol, Type, TypeVar

from pydantic import TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError

from .errors import SerializationError, DeserializationError

T = TypeVar("T")


class Serializer(Protocol):
    """Converts typed values to transport payloads and back."""

    def serialize(self, value: Any) -> str:
        ...

    def deserialize(self, payload: str, value_type: Type[T]) -> T:
        ...


@lru_cache(maxsize=256)
def _cached_adapter(value_type: Any) -> TypeAdapter:
    return TypeAdapter(value_type)


def adapter_for(value_type: Any) -> TypeAdapter:
    """Return a (cached where possible) TypeAdapter for ``value_type``."""
    try:
        return _cached_adapter(value_type)
    except TypeError:
        # Unhashable type expressions can't be memoised
        return TypeAdapter(value_type)


class JsonSerializer:
    """JSON serializer backed by pydantic TypeAdapters."""

    def serialize(self, value: Any) -> str:
        try:
            return adapter_for(Any).dump_json(value).decode("utf-8")
        except (PydanticSerializationError, TypeError, ValueError) as e:
            raise SerializationError(
                f"Cannot serialize value of type {type(value).__name__}",
                {"value_type": type(value).__name__, "reason": str(e)},
            ) from e

    def deserialize(self, payload: str, value_type: Type[T] = Any) -> T:
        try:
            return adapter_for(value_type).validate_json(payload)
        except ValidationError as e:
            raise DeserializationError(
                f"Payload does not match {_type_name(value_type)}",
                {"value_type": _type_name(value_type), "error_count": e.error_count()},
            ) from e
        except ValueError as e:
            raise DeserializationError(
                f"Malformed payload for {_type_name(value_type)}",
                {"value_type": _type_name(value_type), "reason": str(e)},
            ) from e


def _type_name(value_type: Any) -> str:
    return getattr(value_type, "__name__", None) or repr(value_type)

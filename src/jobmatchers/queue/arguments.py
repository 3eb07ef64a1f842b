"""Job argument serialization."""

from __future__ import annotations

from typing import Any, Iterable

from ..errors import DeserializationError, SerializationError
from .global_id import GlobalID, GlobalIdentification, GlobalIdLocator, default_locator

GLOBAL_ID_KEY = "_global_id"
RESERVED_KEYS = frozenset({GLOBAL_ID_KEY})

_PRIMITIVES = (bool, int, float, str)


class ArgumentSerializer:
    """Convert job arguments to and from their queued representation."""

    def __init__(self, locator: GlobalIdLocator | None = None) -> None:
        self._locator = locator or default_locator

    def serialize(self, arguments: Iterable[Any]) -> list[Any]:
        return [self._serialize(value) for value in arguments]

    def deserialize(self, arguments: Iterable[Any]) -> list[Any]:
        return [self._deserialize(value) for value in arguments]

    def _serialize(self, value: Any) -> Any:
        if value is None or isinstance(value, _PRIMITIVES):
            return value
        if isinstance(value, GlobalIdentification):
            return {GLOBAL_ID_KEY: value.to_global_id().uri}
        if isinstance(value, (list, tuple)):
            return [self._serialize(item) for item in value]
        if isinstance(value, dict):
            serialized: dict[str, Any] = {}
            for key, item in value.items():
                if not isinstance(key, str):
                    raise SerializationError(
                        f"Only string keys are allowed in job arguments, got {key!r}"
                    )
                if key in RESERVED_KEYS:
                    raise SerializationError(f"Key {key!r} is reserved for job arguments")
                serialized[key] = self._serialize(item)
            return serialized
        raise SerializationError(f"Unsupported argument type: {type(value).__name__}")

    def _deserialize(self, value: Any) -> Any:
        if isinstance(value, list):
            return [self._deserialize(item) for item in value]
        if isinstance(value, dict):
            if set(value) == {GLOBAL_ID_KEY}:
                return self._locator.locate(GlobalID.parse(value[GLOBAL_ID_KEY]))
            return {key: self._deserialize(item) for key, item in value.items()}
        if value is None or isinstance(value, _PRIMITIVES):
            return value
        raise DeserializationError(f"Unexpected serialized value: {value!r}")


__all__ = ["ArgumentSerializer", "GLOBAL_ID_KEY"]

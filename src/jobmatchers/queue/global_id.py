"""Stable global identifiers for reference-typed job arguments."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar

from ..errors import ConfigurationError, DeserializationError

_SCHEME = "gid://"


@dataclass(frozen=True, slots=True)
class GlobalID:
    """Reference to a model instance by application, model name and id."""

    app: str
    model_name: str
    model_id: str

    @property
    def uri(self) -> str:
        return f"{_SCHEME}{self.app}/{self.model_name}/{self.model_id}"

    @classmethod
    def parse(cls, uri: str) -> GlobalID:
        if not isinstance(uri, str) or not uri.startswith(_SCHEME):
            raise DeserializationError(f"Invalid global id: {uri!r}")
        parts = uri[len(_SCHEME):].split("/", 2)
        if len(parts) != 3 or not all(parts):
            raise DeserializationError(f"Invalid global id: {uri!r}")
        app, model_name, model_id = parts
        return cls(app=app, model_name=model_name, model_id=model_id)

    def __str__(self) -> str:
        return self.uri


def model_name(model: type) -> str:
    """Qualified name identifying a model class inside a global id."""
    return f"{model.__module__}.{model.__qualname__}"


class GlobalIdLocator:
    """Resolve global ids back into model instances."""

    def __init__(self) -> None:
        self._models: dict[str, type[GlobalIdentification]] = {}

    def register(self, model: type[GlobalIdentification]) -> None:
        name = model_name(model)
        registered = self._models.get(name)
        if registered is not None and registered is not model:
            raise ConfigurationError(f"Another model is already registered as {name!r}")
        self._models[name] = model

    def locate(self, global_id: GlobalID) -> Any:
        try:
            model = self._models[global_id.model_name]
        except KeyError as exc:
            raise DeserializationError(
                f"Unknown model for global id: {global_id.uri!r}"
            ) from exc
        return model.find(global_id.model_id)


default_locator = GlobalIdLocator()


class GlobalIdentification:
    """Mixin for models passed to jobs by reference.

    Subclasses define an ``id`` attribute and a ``find`` classmethod; they are
    registered with the default locator when the class is created.
    """

    global_id_app: ClassVar[str] = "jobmatchers"

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        default_locator.register(cls)

    @classmethod
    def find(cls, model_id: str) -> Any:
        raise NotImplementedError(f"{cls.__name__} must implement find()")

    def to_global_id(self) -> GlobalID:
        return GlobalID(
            app=self.global_id_app,
            model_name=model_name(type(self)),
            model_id=str(getattr(self, "id")),
        )


__all__ = [
    "GlobalID",
    "GlobalIdLocator",
    "GlobalIdentification",
    "default_locator",
    "model_name",
]

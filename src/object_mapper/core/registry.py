"""
object-mapper — polymorphic type registry.

File: src/object_mapper/core/registry.py
Last updated: 2026-10-19

Purpose
- Associate model types with JSON type tags so a decode can pick the concrete
  subclass named by the payload and an encode can emit the tag again.

Functional requirements
- One process-wide table (``get_registry()``), explicitly resettable.
- Tag field name is configurable: ``"__type"``, ``"$type"``, or a custom name.
- Tags are unique across the table; re-configuring a type replaces its tag.

Non-functional requirements
- Lookups and mutations are serialized by a lock. Configure once at startup
  anyway: a ``reset()`` racing a decode may be observed either way.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from enum import Enum
from typing import TYPE_CHECKING, TypeVar

from object_mapper.constants import (
    CONTRACT_DATA_JSON_TAG_FIELD,
    DEFAULT_TAG_FIELD,
    JSON_DOT_NET_TAG_FIELD,
)
from object_mapper.core.mappable import Mappable

if TYPE_CHECKING:
    from object_mapper.core.map import Map

_LOGGER = logging.getLogger(__name__)

TModel = TypeVar("TModel", bound=type[Mappable])

Factory = Callable[["Map"], Mappable | None]


class RegistryError(ValueError):
    """Raised when the type registry is configured incorrectly."""


class TypeTagStyle(Enum):
    """Named conventions for the JSON field that carries the type tag."""

    DEFAULT = "default"
    CONTRACT_DATA_JSON = "contract"
    JSON_DOT_NET = "json.net"


_STYLE_FIELDS: dict[TypeTagStyle, str] = {
    TypeTagStyle.DEFAULT: DEFAULT_TAG_FIELD,
    TypeTagStyle.CONTRACT_DATA_JSON: CONTRACT_DATA_JSON_TAG_FIELD,
    TypeTagStyle.JSON_DOT_NET: JSON_DOT_NET_TAG_FIELD,
}


class TypeRegistry:
    """Tag ↔ type table plus the configured tag field name."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._factories: dict[str, Factory] = {}
        self._tag_types: dict[str, type[Mappable]] = {}
        self._type_tags: dict[type[Mappable], str] = {}
        self._tag_field = DEFAULT_TAG_FIELD

    @property
    def tag_field(self) -> str:
        with self._lock:
            return self._tag_field

    def set_tag_field(self, style: TypeTagStyle | str) -> None:
        """Select a named convention or a custom field name."""

        if isinstance(style, TypeTagStyle):
            field_name = _STYLE_FIELDS[style]
        elif isinstance(style, str):
            if not style.strip():
                raise RegistryError("custom type tag field must be a non-empty string")
            field_name = style
        else:
            raise RegistryError(
                f"type tag style must be TypeTagStyle or str, got {type(style).__name__}"
            )
        with self._lock:
            self._tag_field = field_name
        _LOGGER.debug("type tag field set to %r", field_name)

    def configure(self, model: type[Mappable], tag: str) -> None:
        """
        Decode payloads tagged ``tag`` as ``model`` and tag encoded ``model`` values.

        Calling it again for the same type replaces the previous tag.
        """

        if not isinstance(model, type) or not issubclass(model, Mappable):
            raise RegistryError(f"{model!r} is not a Mappable subclass")
        if not isinstance(tag, str) or not tag.strip():
            raise RegistryError(f"{model.__name__}: type tag must be a non-empty string")

        with self._lock:
            owner = self._tag_types.get(tag)
            if owner is not None and owner is not model:
                raise RegistryError(
                    f"type tag {tag!r} is already registered for {owner.__qualname__}"
                )
            previous = self._type_tags.get(model)
            if previous is not None and previous != tag:
                self._factories.pop(previous, None)
                self._tag_types.pop(previous, None)
            self._factories[tag] = model.from_map
            self._tag_types[tag] = model
            self._type_tags[model] = tag
        _LOGGER.debug("registered type tag %r for %s", tag, model.__qualname__)

    def register(self, tag: str) -> Callable[[TModel], TModel]:
        """Class decorator form of :meth:`configure`."""

        def decorator(model: TModel) -> TModel:
            self.configure(model, tag)
            return model

        return decorator

    def reset(self) -> None:
        """Drop every registration and restore the default tag field."""

        with self._lock:
            self._factories.clear()
            self._tag_types.clear()
            self._type_tags.clear()
            self._tag_field = DEFAULT_TAG_FIELD
        _LOGGER.debug("type registry reset")

    def resolve_factory(self, tag: str) -> Factory | None:
        with self._lock:
            return self._factories.get(tag)

    def resolve_type(self, tag: str) -> type[Mappable] | None:
        with self._lock:
            return self._tag_types.get(tag)

    def resolve_tag(self, model_type: type) -> str | None:
        with self._lock:
            return self._type_tags.get(model_type)

    def tags(self) -> dict[str, str]:
        """Return ``{tag: qualified type name}`` sorted by tag."""

        with self._lock:
            return {
                tag: f"{model.__module__}.{model.__qualname__}"
                for tag, model in sorted(self._tag_types.items())
            }


_DEFAULT_REGISTRY = TypeRegistry()


def get_registry() -> TypeRegistry:
    """Return the process-wide registry."""

    return _DEFAULT_REGISTRY


def configure(model: type[Mappable], tag: str) -> None:
    _DEFAULT_REGISTRY.configure(model, tag)


def register(tag: str) -> Callable[[TModel], TModel]:
    return _DEFAULT_REGISTRY.register(tag)


def set_tag_field(style: TypeTagStyle | str) -> None:
    _DEFAULT_REGISTRY.set_tag_field(style)


def reset() -> None:
    _DEFAULT_REGISTRY.reset()


__all__ = [
    "Factory",
    "RegistryError",
    "TypeRegistry",
    "TypeTagStyle",
    "configure",
    "get_registry",
    "register",
    "reset",
    "set_tag_field",
]

"""
object-mapper — decode/encode orchestration.

File: src/object_mapper/core/mapper.py
Last updated: 2026-10-19

Purpose
- Run one model's bindings over a JSON mapping in either direction, for single
  objects, lists, and string-keyed dictionaries, with polymorphic dispatch
  through the type registry.

Functional requirements
- A tag naming a subclass of the requested model selects that subclass's
  factory; a factory returning ``None`` is final (no direct-constructor retry).
- Collection decodes drop elements that fail and never fail as a whole.
- ``map_array`` accepts a single bare object and wraps it in a list.
- Text encodes return ``None`` for payloads that are not JSON-representable.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Generic, TypeVar, cast

from object_mapper.core.json_codec import dump_json, is_json_safe, parse_json
from object_mapper.core.map import Map, MappingType
from object_mapper.core.mappable import Mappable
from object_mapper.core.registry import TypeRegistry, get_registry

if TYPE_CHECKING:
    from object_mapper.core.registry import Factory

_LOGGER = logging.getLogger(__name__)

N = TypeVar("N", bound=Mappable)


@dataclass(frozen=True, slots=True)
class MappingResult(Generic[N]):
    """Outcome of one object decode: the instance (or ``None``) and its failure count."""

    value: N | None
    failure_count: int

    @property
    def is_valid(self) -> bool:
        return self.value is not None and self.failure_count == 0


class Mapper(Generic[N]):
    """Converts between JSON and instances of ``model`` (or its registered subclasses)."""

    def __init__(self, model: type[N], *, registry: TypeRegistry | None = None) -> None:
        if not isinstance(model, type) or not issubclass(model, Mappable):
            raise TypeError(f"{model!r} is not a Mappable subclass")
        self._model = model
        self._registry = registry if registry is not None else get_registry()

    @property
    def model(self) -> type[N]:
        return self._model

    @property
    def registry(self) -> TypeRegistry:
        return self._registry

    # Decoding single objects.

    def decode(self, json_dictionary: Mapping[str, object]) -> MappingResult[N]:
        """Decode one JSON mapping and report how many required fields were missing."""

        map_ = Map(MappingType.FROM_JSON, json_dictionary, registry=self._registry)
        tag, factory = self._polymorphic_factory(map_.json)
        value: N | None
        if factory is not None:
            value = cast("N | None", factory(map_))
            if value is None:
                _LOGGER.debug("factory for type tag %r returned no value", tag)
        else:
            value = self._model.from_map(map_)
        return MappingResult(value=value, failure_count=map_.failure_count)

    def map(self, payload: object) -> N | None:
        """
        Decode text or an already-parsed mapping.

        The instance is returned even when required fields were missing; use
        :meth:`map_strict` to reject those.
        """

        json_dictionary = self._as_mapping(payload)
        if json_dictionary is None:
            return None
        return self.decode(json_dictionary).value

    def map_strict(self, payload: object) -> N | None:
        """Like :meth:`map` but ``None`` unless every required field resolved."""

        json_dictionary = self._as_mapping(payload)
        if json_dictionary is None:
            return None
        result = self.decode(json_dictionary)
        return result.value if result.is_valid else None

    def map_onto(self, payload: object, target: N) -> N:
        """Run ``target``'s bindings over ``payload``; non-mapping payloads leave it as is."""

        json_dictionary = self._as_mapping(payload)
        if json_dictionary is None:
            return target
        target.mapping(Map(MappingType.FROM_JSON, json_dictionary, registry=self._registry))
        return target

    # Decoding collections.

    def map_array(self, payload: object) -> list[N]:
        """
        Decode a list of objects, dropping elements that fail.

        A payload that is a single object rather than a list yields a
        one-element list when it decodes.
        """

        parsed = self._parse(payload)
        if isinstance(parsed, list):
            return self._map_elements(parsed)
        if isinstance(parsed, Mapping):
            single = self.decode(parsed).value
            return [single] if single is not None else []
        return []

    def map_dictionary(self, payload: object) -> dict[str, N]:
        """Decode ``{key: object}``, keeping keys and dropping values that fail."""

        parsed = self._parse(payload)
        if not isinstance(parsed, Mapping):
            return {}

        values: dict[str, N] = {}
        for key, item in parsed.items():
            if not isinstance(item, Mapping):
                _LOGGER.debug("dropping %s entry %r: not an object", self._model.__name__, key)
                continue
            decoded = self.decode(item).value
            if decoded is None:
                _LOGGER.debug("dropping %s entry %r: decode failed", self._model.__name__, key)
                continue
            values[key] = decoded
        return values

    # Encoding.

    def to_json(self, value: N) -> dict[str, object]:
        map_ = Map(MappingType.TO_JSON, registry=self._registry)
        tag = self._registry.resolve_tag(type(value))
        if tag is not None:
            map_.json[self._registry.tag_field] = tag
        value.mapping(map_)
        return map_.json

    def to_json_array(self, values: Iterable[N]) -> list[dict[str, object]]:
        return [self.to_json(value) for value in values]

    def to_json_dictionary(self, values: Mapping[str, N]) -> dict[str, dict[str, object]]:
        return {key: self.to_json(value) for key, value in values.items()}

    def to_json_string(self, value: N, *, pretty: bool = False) -> str | None:
        """Encode ``value`` as JSON text; ``None`` if the result is not representable."""

        json_dictionary = self.to_json(value)
        if not is_json_safe(json_dictionary):
            _LOGGER.warning(
                "%s encoded to a value that is not JSON-representable",
                type(value).__qualname__,
            )
            return None
        try:
            return dump_json(json_dictionary, pretty=pretty)
        except (TypeError, ValueError) as exc:
            _LOGGER.warning("unable to write %s as JSON: %s", type(value).__qualname__, exc)
            return None

    # Helpers.

    def _polymorphic_factory(
        self, json_dictionary: Mapping[str, object]
    ) -> tuple[str | None, Factory | None]:
        tag = json_dictionary.get(self._registry.tag_field)
        if not isinstance(tag, str):
            return None, None
        tagged = self._registry.resolve_type(tag)
        if tagged is None:
            return tag, None
        if not issubclass(tagged, self._model):
            _LOGGER.debug(
                "ignoring type tag %r: %s is not a %s",
                tag,
                tagged.__qualname__,
                self._model.__qualname__,
            )
            return tag, None
        return tag, self._registry.resolve_factory(tag)

    def _map_elements(self, elements: list[object]) -> list[N]:
        values: list[N] = []
        for index, element in enumerate(elements):
            if not isinstance(element, Mapping):
                _LOGGER.debug("dropping %s[%d]: not an object", self._model.__name__, index)
                continue
            decoded = self.decode(element).value
            if decoded is None:
                _LOGGER.debug("dropping %s[%d]: decode failed", self._model.__name__, index)
                continue
            values.append(decoded)
        return values

    @staticmethod
    def _parse(payload: object) -> object:
        if isinstance(payload, (str, bytes, bytearray)):
            return parse_json(payload)
        return payload

    def _as_mapping(self, payload: object) -> Mapping[str, object] | None:
        parsed = self._parse(payload)
        if isinstance(parsed, Mapping):
            return parsed
        return None


__all__ = ["Mapper", "MappingResult"]

"""Field kinds: how one bound field converts between JSON and Python values."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from datetime import datetime, timezone
from enum import Enum
from typing import Final

from object_mapper.core.map import Map, interpret, zero_value
from object_mapper.core.mappable import Mappable
from object_mapper.core.mapper import Mapper

_LOGGER = logging.getLogger(__name__)

_SCALAR_TYPES: Final[tuple[type, ...]] = (str, int, float, bool)

__all__ = [
    "DateTimeKind",
    "DictOf",
    "EnumKind",
    "FieldKind",
    "KindLike",
    "ListOf",
    "ModelKind",
    "Raw",
    "Scalar",
    "as_kind",
    "dict_of",
    "list_of",
]


class FieldKind(ABC):
    """Decode/encode rules for one JSON shape."""

    @abstractmethod
    def decode(self, raw: object, map_: Map) -> object | None:
        """Convert a resolved JSON value; ``None`` when it does not fit."""

    @abstractmethod
    def encode(self, value: object, map_: Map) -> object:
        """Convert a field value to its JSON form."""

    def zero(self) -> object:
        """Placeholder for a required field that could not be decoded."""

        return None


class Raw(FieldKind):
    """Any JSON value, passed through unchanged."""

    def decode(self, raw: object, map_: Map) -> object | None:
        return raw

    def encode(self, value: object, map_: Map) -> object:
        return value

    def __repr__(self) -> str:
        return "Raw()"


class Scalar(FieldKind):
    def __init__(self, expected: type) -> None:
        if expected not in _SCALAR_TYPES:
            raise TypeError(f"Scalar supports str, int, float and bool, not {expected!r}")
        self.expected = expected

    def decode(self, raw: object, map_: Map) -> object | None:
        return interpret(raw, self.expected)

    def encode(self, value: object, map_: Map) -> object:
        return value

    def zero(self) -> object:
        return zero_value(self.expected)

    def __repr__(self) -> str:
        return f"Scalar({self.expected.__name__})"


class EnumKind(FieldKind):
    """Enum members stored as their ``value``."""

    def __init__(self, enum_type: type[Enum]) -> None:
        self.enum_type = enum_type

    def decode(self, raw: object, map_: Map) -> object | None:
        try:
            return self.enum_type(raw)
        except (TypeError, ValueError):
            return None

    def encode(self, value: object, map_: Map) -> object:
        if isinstance(value, Enum):
            return value.value
        return value

    def __repr__(self) -> str:
        return f"EnumKind({self.enum_type.__name__})"


class DateTimeKind(FieldKind):
    """ISO-8601 text; naive datetimes are read and written as UTC."""

    def decode(self, raw: object, map_: Map) -> object | None:
        if not isinstance(raw, str):
            return None
        text = raw[:-1] + "+00:00" if raw.endswith("Z") else raw
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed

    def encode(self, value: object, map_: Map) -> object:
        if not isinstance(value, datetime):
            return value
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.isoformat().replace("+00:00", "Z")

    def __repr__(self) -> str:
        return "DateTimeKind()"


class ModelKind(FieldKind):
    """A nested model, decoded and encoded through :class:`Mapper`."""

    def __init__(self, model: type[Mappable]) -> None:
        self.model = model

    def decode(self, raw: object, map_: Map) -> object | None:
        if not isinstance(raw, Mapping):
            return None
        result = Mapper(self.model, registry=map_.registry).decode(raw)
        if result.value is not None:
            map_.record_failure(result.failure_count)
        return result.value

    def encode(self, value: object, map_: Map) -> object:
        if not isinstance(value, Mappable):
            return value
        return Mapper(self.model, registry=map_.registry).to_json(value)

    def __repr__(self) -> str:
        return f"ModelKind({self.model.__name__})"


class ListOf(FieldKind):
    """A JSON array; elements that do not decode are dropped."""

    def __init__(self, item: KindLike) -> None:
        self.item = as_kind(item)

    def decode(self, raw: object, map_: Map) -> object | None:
        if not isinstance(raw, list):
            return None
        values: list[object] = []
        for index, element in enumerate(raw):
            decoded = self.item.decode(element, map_) if element is not None else None
            if decoded is None:
                _LOGGER.debug(
                    "dropping %s[%d]: does not match %r", map_.current_key, index, self.item
                )
                continue
            values.append(decoded)
        return values

    def encode(self, value: object, map_: Map) -> object:
        if not isinstance(value, (list, tuple)):
            return value
        return [self.item.encode(element, map_) for element in value]

    def zero(self) -> object:
        return []

    def __repr__(self) -> str:
        return f"ListOf({self.item!r})"


class DictOf(FieldKind):
    """A JSON object with arbitrary keys; values that do not decode are dropped."""

    def __init__(self, item: KindLike) -> None:
        self.item = as_kind(item)

    def decode(self, raw: object, map_: Map) -> object | None:
        if not isinstance(raw, Mapping):
            return None
        values: dict[str, object] = {}
        for key, element in raw.items():
            decoded = self.item.decode(element, map_) if element is not None else None
            if decoded is None:
                _LOGGER.debug(
                    "dropping %s.%s: does not match %r", map_.current_key, key, self.item
                )
                continue
            values[key] = decoded
        return values

    def encode(self, value: object, map_: Map) -> object:
        if not isinstance(value, Mapping):
            return value
        return {key: self.item.encode(element, map_) for key, element in value.items()}

    def zero(self) -> object:
        return {}

    def __repr__(self) -> str:
        return f"DictOf({self.item!r})"


KindLike = FieldKind | type


def as_kind(kind: KindLike) -> FieldKind:
    """
    Normalize a kind shorthand.

    ``str``/``int``/``float``/``bool`` become :class:`Scalar`, ``Mappable``
    subclasses :class:`ModelKind`, ``Enum`` subclasses :class:`EnumKind`,
    ``datetime`` :class:`DateTimeKind`, and ``list``/``dict``/``object`` raw
    JSON passthrough.
    """

    if isinstance(kind, FieldKind):
        return kind
    if isinstance(kind, type):
        if issubclass(kind, Mappable):
            return ModelKind(kind)
        if issubclass(kind, Enum):
            return EnumKind(kind)
        if kind in _SCALAR_TYPES:
            return Scalar(kind)
        if kind is datetime:
            return DateTimeKind()
        if kind in (list, dict, object):
            return _RAW_FACTORIES[kind]()
    raise TypeError(f"unsupported field kind: {kind!r}")


class _RawList(Raw):
    def decode(self, raw: object, map_: Map) -> object | None:
        return raw if isinstance(raw, list) else None

    def zero(self) -> object:
        return []

    def __repr__(self) -> str:
        return "Raw(list)"


class _RawDict(Raw):
    def decode(self, raw: object, map_: Map) -> object | None:
        return dict(raw) if isinstance(raw, Mapping) else None

    def zero(self) -> object:
        return {}

    def __repr__(self) -> str:
        return "Raw(dict)"


_RAW_FACTORIES: Final[dict[type, Callable[[], FieldKind]]] = {
    list: _RawList,
    dict: _RawDict,
    object: Raw,
}


def list_of(item: KindLike) -> ListOf:
    return ListOf(item)


def dict_of(item: KindLike) -> DictOf:
    return DictOf(item)

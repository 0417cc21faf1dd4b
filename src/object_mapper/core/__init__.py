"""Bidirectional mapping core: context, key paths, bindings, registry, and mapper."""

from object_mapper.core.binding import bind
from object_mapper.core.fields import (
    DateTimeKind,
    DictOf,
    EnumKind,
    FieldKind,
    ListOf,
    ModelKind,
    Raw,
    Scalar,
    as_kind,
    dict_of,
    list_of,
)
from object_mapper.core.keypath import assign_key_path, resolve_key_path, value_for_key_path
from object_mapper.core.map import Map, MappingType
from object_mapper.core.mappable import Mappable
from object_mapper.core.mapper import Mapper, MappingResult
from object_mapper.core.registry import (
    RegistryError,
    TypeRegistry,
    TypeTagStyle,
    configure,
    get_registry,
    register,
    reset,
    set_tag_field,
)

__all__ = [
    "DateTimeKind",
    "DictOf",
    "EnumKind",
    "FieldKind",
    "ListOf",
    "Map",
    "Mappable",
    "Mapper",
    "MappingResult",
    "MappingType",
    "ModelKind",
    "Raw",
    "RegistryError",
    "Scalar",
    "TypeRegistry",
    "TypeTagStyle",
    "as_kind",
    "assign_key_path",
    "bind",
    "configure",
    "dict_of",
    "get_registry",
    "list_of",
    "register",
    "reset",
    "resolve_key_path",
    "set_tag_field",
    "value_for_key_path",
]

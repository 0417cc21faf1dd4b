"""
object-mapper — package root.

File: src/object_mapper/__init__.py
Last updated: 2026-10-19

Purpose
- Convert between parsed JSON and model instances with one binding list per
  model that serves both directions, including polymorphic decode/encode via a
  configurable type-tag field.

Functional requirements
- Must not have side effects at import time (no config loading, no logging
  handlers installed).
"""

from object_mapper.core import (
    DateTimeKind,
    DictOf,
    EnumKind,
    FieldKind,
    ListOf,
    Map,
    Mappable,
    Mapper,
    MappingResult,
    MappingType,
    ModelKind,
    Raw,
    RegistryError,
    Scalar,
    TypeRegistry,
    TypeTagStyle,
    bind,
    configure,
    dict_of,
    get_registry,
    list_of,
    register,
    reset,
    set_tag_field,
)

__version__ = "0.1.0"

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
    "__version__",
    "bind",
    "configure",
    "dict_of",
    "get_registry",
    "list_of",
    "register",
    "reset",
    "set_tag_field",
]

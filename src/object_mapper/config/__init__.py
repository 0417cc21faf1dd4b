"""
object-mapper config package public API.

File: src/object_mapper/config/__init__.py
Last updated: 2026-10-19

Purpose
- Export settings loading, type-registration loading, and the error type.

Functional requirements
- Support loading from ``object_mapper.toml`` + ``OBJECT_MAPPER_`` env overrides.
- Fail fast with clear load errors.
"""

from object_mapper.config.loader import (
    ConfigLoadError,
    MapperSettings,
    apply_settings,
    import_model,
    load_settings,
    load_type_bindings,
)

__all__ = [
    "ConfigLoadError",
    "MapperSettings",
    "apply_settings",
    "import_model",
    "load_settings",
    "load_type_bindings",
]

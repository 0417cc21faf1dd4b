"""
object-mapper — settings loader.

File: src/object_mapper/config/loader.py
Last updated: 2026-10-19

Purpose
- Load mapper settings from defaults, ``object_mapper.toml``, and
  ``OBJECT_MAPPER_`` environment variables, and apply them to a type registry.

What should be included in this file
- Precedence logic: env > file > defaults.
- TOML loading via ``tomllib``; YAML type-registration files via PyYAML.
- Import of registered model types from ``"module:QualifiedName"`` references.

Functional requirements
- Reject unknown keys, unknown tag styles, and malformed references with
  ``ConfigLoadError``.
- ``types_file`` paths are relative to the config file that names them.
"""

from __future__ import annotations

import importlib
import logging
import os
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Final

import yaml

from object_mapper.constants import DEFAULT_CONFIG_FILE, ENV_PREFIX, LOGGER_NAME
from object_mapper.core.mappable import Mappable
from object_mapper.core.registry import RegistryError, TypeRegistry, TypeTagStyle, get_registry
from object_mapper.observability.logging import LoggingConfig

_LOGGER = logging.getLogger(__name__)

_STYLES: Final[dict[str, TypeTagStyle | None]] = {
    "default": TypeTagStyle.DEFAULT,
    "contract": TypeTagStyle.CONTRACT_DATA_JSON,
    "json.net": TypeTagStyle.JSON_DOT_NET,
    "custom": None,
}
_SCALAR_KEYS: Final[tuple[str, ...]] = (
    "type_tag_style",
    "type_tag_field",
    "log_level",
    "types_file",
)
_ALLOWED_KEYS: Final[frozenset[str]] = frozenset({*_SCALAR_KEYS, "types"})


class ConfigLoadError(ValueError):
    """Raised when settings or type registrations cannot be loaded."""


@dataclass(frozen=True, slots=True)
class MapperSettings:
    """Effective mapper settings."""

    type_tag_style: str = "default"
    type_tag_field: str | None = None
    log_level: str = "WARNING"
    types_file: str | None = None
    types: Mapping[str, str] = field(default_factory=dict)

    def tag_field_option(self) -> TypeTagStyle | str:
        """Return the argument for ``TypeRegistry.set_tag_field``."""

        style = _STYLES[self.type_tag_style]
        if style is None:
            assert self.type_tag_field is not None
            return self.type_tag_field
        return style

    def logging_config(self) -> LoggingConfig:
        return LoggingConfig(level=self.log_level)


def load_settings(
    config_path: str | Path | None = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> MapperSettings:
    """Load effective settings with precedence env > file > defaults."""

    resolved_path = _resolve_config_path(config_path)
    env_map = dict(os.environ if environ is None else environ)

    payload = _load_toml_file(resolved_path, required=config_path is not None)
    unknown = sorted(set(payload) - _ALLOWED_KEYS)
    if unknown:
        raise ConfigLoadError(f"unknown settings in {resolved_path}: {unknown}")

    values: dict[str, Any] = {}
    for key in _SCALAR_KEYS:
        if key in payload:
            values[key] = _expect_str(payload[key], key)
    if "types_file" in values:
        values["types_file"] = _normalize_one_path(values["types_file"], resolved_path.parent)

    for key in _SCALAR_KEYS:
        raw = env_map.get(_env_name(key))
        if raw is None or not raw.strip():
            continue
        values[key] = raw.strip()
        if key == "types_file":
            values[key] = _normalize_one_path(values[key], Path.cwd())

    types: dict[str, str] = {}
    types_file = values.get("types_file")
    if types_file is not None:
        types.update(load_type_bindings(types_file))
    if "types" in payload:
        types.update(_parse_type_table(payload["types"], str(resolved_path)))

    settings = MapperSettings(types=types, **values)
    _validate_settings(settings)
    return settings


def load_type_bindings(path: str | Path) -> dict[str, str]:
    """
    Read a YAML registration file.

    Expected shape::

        types:
          Subclass: "myapp.models:Subclass"
    """

    resolved = Path(path)
    try:
        with resolved.open("r", encoding="utf-8") as handle:
            parsed = yaml.safe_load(handle)
    except yaml.YAMLError as exc:
        raise ConfigLoadError(f"invalid YAML in {resolved}: {exc}") from exc
    except OSError as exc:
        raise ConfigLoadError(f"unable to read type registrations {resolved}: {exc}") from exc

    if parsed is None:
        return {}
    if not isinstance(parsed, Mapping):
        raise ConfigLoadError(f"type registration root must be a mapping: {resolved}")
    unknown = sorted(str(key) for key in parsed if key != "types")
    if unknown:
        raise ConfigLoadError(f"unknown keys in {resolved}: {unknown}")
    return _parse_type_table(parsed.get("types") or {}, str(resolved))


def apply_settings(
    settings: MapperSettings, registry: TypeRegistry | None = None
) -> TypeRegistry:
    """
    Set the tag field and register every configured type on ``registry``.

    ``log_level`` is applied to the ``object_mapper`` logger; handlers are
    still left to ``setup_logging``.
    """

    logging.getLogger(LOGGER_NAME).setLevel(settings.log_level.strip().upper())
    target = registry if registry is not None else get_registry()
    target.set_tag_field(settings.tag_field_option())
    for tag in sorted(settings.types):
        model = import_model(settings.types[tag])
        try:
            target.configure(model, tag)
        except RegistryError as exc:
            raise ConfigLoadError(f"cannot register type tag {tag!r}: {exc}") from exc
    _LOGGER.info(
        "applied mapper settings",
        extra={"tag_field": target.tag_field, "type_tags": sorted(settings.types)},
    )
    return target


def import_model(reference: str) -> type[Mappable]:
    """Import ``"package.module:Outer.Inner"`` and check it is a ``Mappable`` subclass."""

    module_name, _, qualified_name = reference.partition(":")
    if not module_name or not qualified_name:
        raise ConfigLoadError(f"type reference {reference!r} must look like 'module:Name'")
    try:
        resolved: object = importlib.import_module(module_name)
    except ImportError as exc:
        raise ConfigLoadError(f"cannot import module for {reference!r}: {exc}") from exc
    for part in qualified_name.split("."):
        try:
            resolved = getattr(resolved, part)
        except AttributeError as exc:
            raise ConfigLoadError(f"{reference!r} does not exist: {exc}") from exc
    if not isinstance(resolved, type) or not issubclass(resolved, Mappable):
        raise ConfigLoadError(f"{reference!r} is not a Mappable subclass")
    return resolved


def _resolve_config_path(config_path: str | Path | None) -> Path:
    if config_path is None:
        return (Path.cwd() / DEFAULT_CONFIG_FILE).resolve()
    return Path(config_path).expanduser().resolve()


def _load_toml_file(path: Path, *, required: bool) -> dict[str, Any]:
    if not path.exists():
        if required:
            raise ConfigLoadError(f"config file not found: {path}")
        return {}

    try:
        with path.open("rb") as handle:
            parsed = tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigLoadError(f"invalid TOML in {path}: {exc}") from exc
    except OSError as exc:
        raise ConfigLoadError(f"unable to read config file {path}: {exc}") from exc

    return parsed


def _parse_type_table(value: object, source: str) -> dict[str, str]:
    if not isinstance(value, Mapping):
        raise ConfigLoadError(f"{source}: 'types' must be a table of tag = \"module:Name\"")
    parsed: dict[str, str] = {}
    for tag, reference in value.items():
        if not isinstance(tag, str) or not tag.strip():
            raise ConfigLoadError(f"{source}: type tags must be non-empty strings")
        parsed[tag] = _expect_str(reference, f"types.{tag}")
    return parsed


def _validate_settings(settings: MapperSettings) -> None:
    if settings.type_tag_style not in _STYLES:
        allowed = ", ".join(sorted(_STYLES))
        raise ConfigLoadError(
            f"type_tag_style {settings.type_tag_style!r} is not one of: {allowed}"
        )
    if settings.type_tag_style == "custom":
        if not settings.type_tag_field:
            raise ConfigLoadError("type_tag_style 'custom' requires type_tag_field")
    elif settings.type_tag_field is not None:
        raise ConfigLoadError("type_tag_field is only allowed with type_tag_style 'custom'")
    if not isinstance(logging.getLevelName(settings.log_level.upper()), int):
        raise ConfigLoadError(f"unsupported log_level {settings.log_level!r}")


def _expect_str(value: object, key: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ConfigLoadError(f"{key} must be a non-empty string")
    return value.strip()


def _normalize_one_path(raw: str, base_dir: Path) -> str:
    expanded = os.path.expandvars(raw)
    candidate = Path(expanded).expanduser()
    if not candidate.is_absolute():
        candidate = base_dir / candidate
    normalized = Path(os.path.normpath(str(candidate)))
    return normalized.as_posix()


def _env_name(key: str) -> str:
    return ENV_PREFIX + key.upper()


__all__ = [
    "ConfigLoadError",
    "MapperSettings",
    "apply_settings",
    "import_model",
    "load_settings",
    "load_type_bindings",
]

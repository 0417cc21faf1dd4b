"""Stable constants shared across the mapping core, config, and logging."""

from __future__ import annotations

from typing import Final

# Type-tag field names.
CONTRACT_DATA_JSON_TAG_FIELD: Final[str] = "__type"
JSON_DOT_NET_TAG_FIELD: Final[str] = "$type"
DEFAULT_TAG_FIELD: Final[str] = CONTRACT_DATA_JSON_TAG_FIELD

# Key paths address nested mappings with this separator ("distance.value").
KEY_PATH_SEPARATOR: Final[str] = "."

# Configuration discovery.
DEFAULT_CONFIG_FILE: Final[str] = "object_mapper.toml"
ENV_PREFIX: Final[str] = "OBJECT_MAPPER_"

# Root of the library's logger tree.
LOGGER_NAME: Final[str] = "object_mapper"

__all__ = [
    "CONTRACT_DATA_JSON_TAG_FIELD",
    "DEFAULT_CONFIG_FILE",
    "DEFAULT_TAG_FIELD",
    "ENV_PREFIX",
    "JSON_DOT_NET_TAG_FIELD",
    "KEY_PATH_SEPARATOR",
    "LOGGER_NAME",
]

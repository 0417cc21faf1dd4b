"""Dotted key-path resolution over nested JSON mappings."""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping, Sequence

from object_mapper.constants import KEY_PATH_SEPARATOR

__all__ = [
    "assign_key_path",
    "resolve_key_path",
    "split_key_path",
    "value_for_key_path",
]


def split_key_path(key: str) -> tuple[str, ...]:
    """Split ``"distance.value"`` into ``("distance", "value")``."""

    return tuple(key.split(KEY_PATH_SEPARATOR))


def value_for_key_path(
    components: Sequence[str], mapping: Mapping[str, object]
) -> object | None:
    """
    Walk ``components`` through nested mappings and return the leaf value.

    JSON ``null`` counts as missing at every step, and a scalar is never
    descended into: ``{"a": {"b": 5}}`` resolves ``a.b`` to 5 but ``a.b.c`` to
    ``None``.
    """

    if not components:
        return None

    cursor: Mapping[str, object] = mapping
    last = len(components) - 1
    for index, component in enumerate(components):
        value = cursor.get(component)
        if value is None:
            return None
        if index == last:
            return value
        if not isinstance(value, Mapping):
            return None
        cursor = value
    return None


def resolve_key_path(key: str, mapping: Mapping[str, object]) -> object | None:
    """Resolve a dotted ``key`` against ``mapping``."""

    return value_for_key_path(split_key_path(key), mapping)


def assign_key_path(
    mapping: MutableMapping[str, object], components: Sequence[str], value: object
) -> None:
    """Write ``value`` at ``components``, creating intermediate mappings as needed."""

    if not components:
        raise ValueError("key path must contain at least one component")

    cursor = mapping
    for part in components[:-1]:
        next_node = cursor.get(part)
        if not isinstance(next_node, MutableMapping):
            next_node = {}
            cursor[part] = next_node
        cursor = next_node
    cursor[components[-1]] = value

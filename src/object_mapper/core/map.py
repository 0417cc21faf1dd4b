"""Per-call mapping context: direction, working JSON mapping, cursor, and failure count."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from enum import StrEnum
from typing import TYPE_CHECKING, Final, TypeVar, cast

from object_mapper.core.keypath import assign_key_path, split_key_path, value_for_key_path
from object_mapper.core.registry import get_registry

if TYPE_CHECKING:
    from object_mapper.core.registry import TypeRegistry

T = TypeVar("T")

_ZERO_VALUES: Final[dict[type, Callable[[], object]]] = {
    str: str,
    int: int,
    float: float,
    bool: bool,
    list: list,
    dict: dict,
}


class MappingType(StrEnum):
    FROM_JSON = "from_json"
    TO_JSON = "to_json"


def interpret(value: object, expected: type[T]) -> T | None:
    """
    Return ``value`` as ``expected`` or ``None`` when it is not one.

    ``bool`` is never accepted for ``int``/``float`` and an ``int`` is widened
    to ``float``.
    """

    if value is None:
        return None
    if isinstance(value, bool) and expected is not bool and expected is not object:
        return None
    if expected is float and isinstance(value, int):
        return cast("T", float(value))
    if isinstance(value, expected):
        return value
    return None


def zero_value(expected: type[T]) -> T:
    """Return the placeholder used for a required-but-missing value of ``expected``."""

    return _zero_provider(expected)()


def _zero_provider(expected: type[T]) -> Callable[[], T]:
    provider = _ZERO_VALUES.get(expected)
    if provider is None:
        raise TypeError(f"no zero value provider for {expected.__name__}; pass zero=")
    return cast("Callable[[], T]", provider)


class Map:
    """
    Mapping state for one decode or encode of one model instance.

    ``map_["distance.value"]`` moves the cursor; bindings then read from or
    write to the cursor depending on :attr:`mapping_type`, which never changes.
    """

    __slots__ = (
        "_failure_count",
        "_key_components",
        "_mapping_type",
        "_registry",
        "current_key",
        "current_value",
        "json",
    )

    def __init__(
        self,
        mapping_type: MappingType,
        json_dictionary: Mapping[str, object] | None = None,
        *,
        registry: TypeRegistry | None = None,
    ) -> None:
        self._mapping_type = mapping_type
        self._registry = registry if registry is not None else get_registry()
        self._failure_count = 0
        self._key_components: tuple[str, ...] = ()
        self.json: dict[str, object] = dict(json_dictionary or {})
        self.current_key: str | None = None
        self.current_value: object | None = None

    @property
    def mapping_type(self) -> MappingType:
        return self._mapping_type

    @property
    def registry(self) -> TypeRegistry:
        return self._registry

    @property
    def failure_count(self) -> int:
        return self._failure_count

    @property
    def is_valid(self) -> bool:
        return self._failure_count == 0

    def at(self, key: str) -> Map:
        """Point the cursor at ``key`` (a dotted path) and return ``self``."""

        self.current_key = key
        self._key_components = split_key_path(key)
        self.current_value = value_for_key_path(self._key_components, self.json)
        return self

    def __getitem__(self, key: str) -> Map:
        return self.at(key)

    def value(self, expected: type[T]) -> T | None:
        return interpret(self.current_value, expected)

    def value_or(self, default: T, expected: type[T]) -> T:
        resolved = self.value(expected)
        return default if resolved is None else resolved

    def value_or_fail(self, expected: type[T], zero: Callable[[], T] | None = None) -> T:
        """
        Return the cursor value, or count a failure and return a placeholder.

        The placeholder only keeps a decode going; callers check :attr:`is_valid`
        before trusting the result. A type without a built-in placeholder needs
        ``zero=`` and raises ``TypeError`` whether or not the value is present.
        """

        placeholder = zero if zero is not None else _zero_provider(expected)
        resolved = self.value(expected)
        if resolved is not None:
            return resolved
        self.record_failure()
        return placeholder()

    def record_failure(self, count: int = 1) -> None:
        if count < 0:
            raise ValueError("failure count increments must be >= 0")
        self._failure_count += count

    def write(self, value: object) -> None:
        """Store ``value`` at the cursor's key path in :attr:`json`."""

        if self.current_key is None:
            raise RuntimeError("write() requires a key; call at(key) first")
        assign_key_path(self.json, self._key_components, value)

    def __repr__(self) -> str:
        return (
            f"Map(mapping_type={self._mapping_type.value!r}, "
            f"current_key={self.current_key!r}, failure_count={self._failure_count})"
        )


__all__ = ["Map", "MappingType", "interpret", "zero_value"]

"""Thin wrapper around :mod:`json`: lenient parsing, safety checks, deterministic dumps."""

from __future__ import annotations

import json
import logging
import math
from collections.abc import Mapping

JSONScalar = str | int | float | bool | None
JSONValue = JSONScalar | list["JSONValue"] | dict[str, "JSONValue"]

_LOGGER = logging.getLogger(__name__)

__all__ = [
    "JSONScalar",
    "JSONValue",
    "dump_json",
    "is_json_safe",
    "parse_json",
]


def parse_json(raw: str | bytes | bytearray) -> JSONValue | None:
    """Parse JSON text; ``None`` when the text is not valid JSON."""

    if isinstance(raw, (bytes, bytearray)):
        raw = bytes(raw).decode("utf-8", errors="replace")
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        _LOGGER.debug("unable to parse JSON payload: %s", exc)
        return None


def is_json_safe(value: object) -> bool:
    """
    Return whether ``value`` can be written as JSON text.

    Only ``dict`` (string keys), ``list``/``tuple``, strings, finite numbers,
    booleans and ``None`` are accepted, and containers must not contain
    themselves.
    """

    return _is_json_safe(value, set())


def _is_json_safe(value: object, active: set[int]) -> bool:
    if value is None or isinstance(value, (bool, int, str)):
        return True
    if isinstance(value, float):
        return math.isfinite(value)
    if isinstance(value, (list, tuple, Mapping)):
        marker = id(value)
        if marker in active:
            return False
        active.add(marker)
        try:
            if isinstance(value, Mapping):
                return all(
                    isinstance(key, str) and _is_json_safe(item, active)
                    for key, item in value.items()
                )
            return all(_is_json_safe(item, active) for item in value)
        finally:
            active.discard(marker)
    return False


def dump_json(value: JSONValue, *, pretty: bool = False) -> str:
    """Dump with sorted keys; compact by default, two-space indent when ``pretty``."""

    if pretty:
        return json.dumps(value, sort_keys=True, indent=2, ensure_ascii=False)
    return json.dumps(value, sort_keys=True, separators=(",", ":"), ensure_ascii=False)

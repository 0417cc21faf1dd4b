"""Unit tests for the mapping context."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from object_mapper.core.map import Map, MappingType, interpret, zero_value
from object_mapper.core.registry import TypeRegistry, get_registry


def _decode_map(payload: dict[str, object]) -> Map:
    return Map(MappingType.FROM_JSON, payload)


def test_at_sets_cursor_and_returns_self() -> None:
    map_ = _decode_map({"distance": {"value": 12}})

    assert map_.at("distance.value") is map_
    assert map_.current_key == "distance.value"
    assert map_.current_value == 12

    assert map_["missing"] is map_
    assert map_.current_key == "missing"
    assert map_.current_value is None


def test_mapping_type_and_registry_defaults() -> None:
    registry = TypeRegistry()

    assert _decode_map({}).registry is get_registry()
    assert Map(MappingType.TO_JSON, registry=registry).registry is registry
    assert Map(MappingType.TO_JSON).mapping_type is MappingType.TO_JSON


def test_value_interprets_by_type() -> None:
    map_ = _decode_map({"count": 3, "flag": True, "name": "x", "ratio": 1.5})

    assert map_["count"].value(int) == 3
    assert map_["count"].value(str) is None
    assert map_["flag"].value(bool) is True
    assert map_["flag"].value(int) is None
    assert map_["name"].value(str) == "x"
    assert map_["ratio"].value(float) == 1.5


def test_int_is_widened_to_float() -> None:
    widened = _decode_map({"ratio": 2})["ratio"].value(float)

    assert widened == 2.0
    assert isinstance(widened, float)


def test_interpret_rejects_bool_as_number() -> None:
    assert interpret(True, float) is None
    assert interpret(None, str) is None
    assert interpret(False, object) is False


def test_value_or_never_counts_failures() -> None:
    map_ = _decode_map({"name": 5})

    assert map_["name"].value_or("fallback", str) == "fallback"
    assert map_["missing"].value_or(7, int) == 7
    assert map_.failure_count == 0
    assert map_.is_valid


def test_value_or_fail_counts_and_returns_placeholder() -> None:
    map_ = _decode_map({"count": 4})

    assert map_["count"].value_or_fail(int) == 4
    assert map_.is_valid

    assert map_["name"].value_or_fail(str) == ""
    assert map_["items"].value_or_fail(list) == []
    assert map_["label"].value_or_fail(str, zero=lambda: "n/a") == "n/a"

    assert map_.failure_count == 3
    assert not map_.is_valid


def test_zero_value_requires_a_provider() -> None:
    assert zero_value(bool) is False
    assert zero_value(dict) == {}
    with pytest.raises(TypeError, match="no zero value provider"):
        zero_value(bytes)


def test_value_or_fail_without_placeholder_fails_for_present_and_absent_values() -> None:
    created = datetime(2026, 1, 2, tzinfo=UTC)
    map_ = _decode_map({"created": created})

    with pytest.raises(TypeError, match="pass zero="):
        map_["created"].value_or_fail(datetime)
    with pytest.raises(TypeError, match="pass zero="):
        map_["missing"].value_or_fail(datetime)
    assert map_.failure_count == 0

    epoch = datetime(1970, 1, 1, tzinfo=UTC)
    assert map_["created"].value_or_fail(datetime, zero=lambda: epoch) == created
    assert map_["missing"].value_or_fail(datetime, zero=lambda: epoch) == epoch
    assert map_.failure_count == 1


def test_record_failure_rejects_negative_counts() -> None:
    map_ = _decode_map({})
    map_.record_failure(2)

    assert map_.failure_count == 2
    with pytest.raises(ValueError):
        map_.record_failure(-1)


def test_write_uses_the_cursor_key_path() -> None:
    map_ = Map(MappingType.TO_JSON)

    map_["location.city"].write("Oslo")
    map_["name"].write("Ada")

    assert map_.json == {"location": {"city": "Oslo"}, "name": "Ada"}


def test_write_requires_a_cursor() -> None:
    with pytest.raises(RuntimeError, match="at\\(key\\)"):
        Map(MappingType.TO_JSON).write(1)


def test_context_copies_the_input_mapping() -> None:
    payload: dict[str, object] = {"a": 1}
    map_ = _decode_map(payload)
    map_.json["b"] = 2

    assert payload == {"a": 1}

"""
object-mapper — unit tests for observability logging

File: tests/unit/observability/test_logging.py
Last updated: 2026-10-19

Purpose
- Validate the opt-in JSON-lines logging of the ``object_mapper`` logger tree.

What this test file should cover
- JSON line shape, extra fields, and level filtering.
- Replacement of a previous setup and handler cleanup on shutdown.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

import pytest

from object_mapper import Map, Mappable, Mapper, Raw, TypeRegistry, bind
from object_mapper.config.loader import MapperSettings, apply_settings
from object_mapper.observability.logging import (
    LoggingConfig,
    get_active_logging_handle,
    setup_logging,
    shutdown_logging,
)

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path


class _Blob(Mappable):
    def __init__(self, payload: object = None) -> None:
        self.payload = payload

    def mapping(self, map_: Map) -> None:
        bind(map_["payload"], self, "payload", Raw())


@pytest.fixture(autouse=True)
def _cleanup_logging() -> Iterator[None]:
    yield
    shutdown_logging()


def _read_json_lines(path: Path) -> list[dict[str, object]]:
    lines = path.read_text(encoding="utf-8").splitlines()
    return [json.loads(line) for line in lines]


def test_unrepresentable_encode_is_logged_as_json(tmp_path: Path) -> None:
    log_path = tmp_path / "logs" / "mapper.jsonl"
    handle = setup_logging(LoggingConfig(log_path=log_path, log_to_stderr=False))

    assert Mapper(_Blob).to_json_string(_Blob({1, 2})) is None
    Mapper(_Blob).map("not json")
    handle.flush()

    events = _read_json_lines(log_path)
    assert len(events) == 1
    event = events[0]
    assert event["level"] == "WARNING"
    assert event["logger"] == "object_mapper.core.mapper"
    assert event["message"] == "_Blob encoded to a value that is not JSON-representable"
    assert str(event["timestamp"]).endswith("Z")
    assert "fields" not in event


def test_extra_fields_are_emitted(tmp_path: Path) -> None:
    log_path = tmp_path / "mapper.jsonl"
    handle = setup_logging(LoggingConfig(level="info", log_path=log_path, log_to_stderr=False))

    apply_settings(
        MapperSettings(log_level="info", types={"Blob": f"{__name__}:_Blob"}),
        TypeRegistry(),
    )
    handle.flush()

    (event,) = _read_json_lines(log_path)
    assert event["level"] == "INFO"
    assert event["logger"] == "object_mapper.config.loader"
    assert event["fields"] == {"tag_field": "__type", "type_tags": ["Blob"]}


def test_debug_level_includes_parse_failures(tmp_path: Path) -> None:
    log_path = tmp_path / "mapper.jsonl"
    handle = setup_logging(
        LoggingConfig(level=logging.DEBUG, log_path=log_path, log_to_stderr=False)
    )

    Mapper(_Blob).map_array("{")
    handle.flush()

    messages = [str(event["message"]) for event in _read_json_lines(log_path)]
    assert any(message.startswith("unable to parse JSON payload") for message in messages)


def test_setup_replaces_previous_handle(tmp_path: Path) -> None:
    first = setup_logging(LoggingConfig(log_path=tmp_path / "a.jsonl", log_to_stderr=False))
    second = setup_logging(LoggingConfig(log_path=tmp_path / "b.jsonl", log_to_stderr=False))

    assert first.is_shutdown
    assert get_active_logging_handle() is second
    assert len(second.logger.handlers) == 1
    assert second.logger.propagate is False

    shutdown_logging()

    assert second.is_shutdown
    assert second.logger.handlers == []
    assert second.logger.propagate is True
    assert get_active_logging_handle() is None


@pytest.mark.parametrize(
    ("config", "message"),
    [
        (LoggingConfig(level="loud"), "unsupported logging level"),
        (LoggingConfig(logger_name="  "), "logger_name must be a non-empty string"),
    ],
)
def test_invalid_logging_config_raises(config: LoggingConfig, message: str) -> None:
    with pytest.raises(ValueError, match=message):
        setup_logging(config)

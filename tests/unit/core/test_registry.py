"""Unit tests for the polymorphic type registry."""

from __future__ import annotations

import pytest

from object_mapper.core import registry as registry_module
from object_mapper.core.map import Map, MappingType
from object_mapper.core.mapper import Mapper
from object_mapper.core.registry import RegistryError, TypeRegistry, TypeTagStyle, get_registry

from .models import Base, Other, Subclass


def test_configure_records_both_directions() -> None:
    registry = TypeRegistry()
    registry.configure(Subclass, "Subclass")

    assert registry.resolve_tag(Subclass) == "Subclass"
    assert registry.resolve_type("Subclass") is Subclass
    factory = registry.resolve_factory("Subclass")
    assert factory is not None

    built = factory(Map(MappingType.FROM_JSON, {"base": "x", "sub": "y"}, registry=registry))
    assert built == Subclass(base="x", sub="y")


def test_lookups_return_none_when_absent() -> None:
    registry = TypeRegistry()

    assert registry.resolve_factory("Nope") is None
    assert registry.resolve_type("Nope") is None
    assert registry.resolve_tag(Base) is None


def test_resolve_tag_uses_exact_runtime_type() -> None:
    registry = TypeRegistry()
    registry.configure(Base, "Base")

    assert registry.resolve_tag(Subclass) is None


def test_reconfigure_replaces_previous_tag() -> None:
    registry = TypeRegistry()
    registry.configure(Base, "Base")
    registry.configure(Base, "Base")
    registry.configure(Base, "BaseV2")

    assert registry.resolve_tag(Base) == "BaseV2"
    assert registry.resolve_factory("Base") is None
    assert registry.resolve_type("BaseV2") is Base
    assert registry.tags() == {"BaseV2": f"{Base.__module__}.Base"}


def test_tags_are_unique_across_types() -> None:
    registry = TypeRegistry()
    registry.configure(Base, "Shared")

    with pytest.raises(RegistryError, match="already registered for Base"):
        registry.configure(Other, "Shared")
    assert registry.resolve_type("Shared") is Base


@pytest.mark.parametrize("tag", ["", "   "])
def test_configure_rejects_empty_tags(tag: str) -> None:
    with pytest.raises(RegistryError, match="non-empty"):
        TypeRegistry().configure(Base, tag)


def test_configure_rejects_non_mappable_types() -> None:
    with pytest.raises(RegistryError, match="not a Mappable subclass"):
        TypeRegistry().configure(dict, "Dict")  # type: ignore[arg-type]


def test_register_decorator_returns_the_class() -> None:
    registry = TypeRegistry()

    decorated = registry.register("Other")(Other)

    assert decorated is Other
    assert registry.resolve_tag(Other) == "Other"


@pytest.mark.parametrize(
    ("style", "expected"),
    [
        (TypeTagStyle.DEFAULT, "__type"),
        (TypeTagStyle.CONTRACT_DATA_JSON, "__type"),
        (TypeTagStyle.JSON_DOT_NET, "$type"),
        ("kind", "kind"),
        ("  @class  ", "  @class  "),
    ],
)
def test_set_tag_field(style: TypeTagStyle | str, expected: str) -> None:
    registry = TypeRegistry()
    registry.set_tag_field(style)

    assert registry.tag_field == expected


def test_set_tag_field_rejects_invalid_values() -> None:
    registry = TypeRegistry()

    with pytest.raises(RegistryError, match="non-empty"):
        registry.set_tag_field("")
    with pytest.raises(RegistryError, match="non-empty"):
        registry.set_tag_field("   ")
    with pytest.raises(RegistryError, match="TypeTagStyle or str"):
        registry.set_tag_field(3)  # type: ignore[arg-type]
    assert registry.tag_field == "__type"


def test_reset_clears_everything() -> None:
    registry = TypeRegistry()
    registry.set_tag_field(TypeTagStyle.JSON_DOT_NET)
    registry.configure(Subclass, "Subclass")

    registry.reset()

    assert registry.tag_field == "__type"
    assert registry.resolve_factory("Subclass") is None
    assert registry.resolve_tag(Subclass) is None
    assert registry.tags() == {}


def test_module_helpers_target_the_process_registry() -> None:
    registry_module.set_tag_field("kind")
    registry_module.configure(Base, "Base")
    registry_module.register("Subclass")(Subclass)

    shared = get_registry()
    assert shared.tag_field == "kind"
    assert shared.resolve_tag(Base) == "Base"
    assert shared.resolve_tag(Subclass) == "Subclass"

    registry_module.reset()
    assert shared.tags() == {}
    assert shared.tag_field == "__type"


def test_custom_tag_field_is_used_verbatim() -> None:
    registry = TypeRegistry()
    registry.configure(Subclass, "Subclass")
    registry.set_tag_field("type ")
    mapper = Mapper(Base, registry=registry)

    assert isinstance(mapper.map({"type ": "Subclass"}), Subclass)
    assert type(mapper.map({"type": "Subclass"})) is Base
    assert mapper.to_json(Subclass(sub="y")) == {"type ": "Subclass", "sub": "y"}

"""Base class for models that map themselves against a :class:`Map`."""

from __future__ import annotations

import dataclasses
import inspect
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, TypeVar

if TYPE_CHECKING:
    from object_mapper.core.map import Map

TMappable = TypeVar("TMappable", bound="Mappable")


class Mappable(ABC):
    """
    A model with one binding list that serves both directions.

    Subclasses implement :meth:`mapping` as a sequence of ``bind`` calls.
    :meth:`from_map` creates a blank instance and lets the bindings populate
    it; override it to reject a payload by returning ``None``.
    """

    @classmethod
    def from_map(cls: type[TMappable], map_: Map) -> TMappable | None:
        instance = blank_instance(cls)
        instance.mapping(map_)
        return instance

    @abstractmethod
    def mapping(self, map_: Map) -> None:
        """Bind every field against ``map_``."""


def blank_instance(cls: type[TMappable]) -> TMappable:
    """
    Return ``cls()`` when the constructor takes no required arguments.

    Otherwise the instance is created without ``__init__``; dataclass fields
    that declare a default or ``default_factory`` still receive it.
    """

    if _accepts_no_arguments(cls):
        return cls()

    instance = cls.__new__(cls)
    if dataclasses.is_dataclass(cls):
        for item in dataclasses.fields(cls):
            if item.default_factory is not dataclasses.MISSING:
                object.__setattr__(instance, item.name, item.default_factory())
            elif item.default is not dataclasses.MISSING:
                object.__setattr__(instance, item.name, item.default)
    return instance


def _accepts_no_arguments(cls: type) -> bool:
    try:
        inspect.signature(cls).bind()
    except (TypeError, ValueError):
        return False
    return True


__all__ = ["Mappable", "TMappable", "blank_instance"]

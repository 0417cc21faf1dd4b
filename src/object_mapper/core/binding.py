"""The two-way field binding used inside ``Mappable.mapping``."""

from __future__ import annotations

from collections.abc import Callable

from object_mapper.core.fields import KindLike, as_kind
from object_mapper.core.map import Map, MappingType

__all__ = ["bind"]


def bind(
    map_: Map,
    target: object,
    attribute: str,
    kind: KindLike,
    *,
    required: bool = False,
    zero: Callable[[], object] | None = None,
) -> None:
    """
    Bind ``target.attribute`` to the key ``map_`` currently points at.

    Decoding assigns the converted cursor value. An optional field that cannot
    be decoded becomes ``None``. A required one counts a failure on ``map_``
    and keeps its current value, or receives the zero placeholder (``zero()``
    or the kind's zero) when it has none yet.

    Encoding writes the field's JSON form at the key path; ``None`` is skipped.

    Usage inside ``mapping``::

        bind(map_["distance.value"], self, "distance", int, required=True)
    """

    field_kind = as_kind(kind)

    if map_.mapping_type is MappingType.FROM_JSON:
        raw = map_.current_value
        decoded = field_kind.decode(raw, map_) if raw is not None else None
        if decoded is not None:
            setattr(target, attribute, decoded)
        elif not required:
            setattr(target, attribute, None)
        else:
            map_.record_failure()
            if not _has_value(target, attribute):
                setattr(target, attribute, zero() if zero is not None else field_kind.zero())
        return

    value = getattr(target, attribute, None)
    if value is None:
        return
    map_.write(field_kind.encode(value, map_))


def _has_value(target: object, attribute: str) -> bool:
    return getattr(target, attribute, None) is not None

"""Build binders from ``(slot, field spec, type name, format)`` settings.

Example:
    binder = new_binder(1, "header.timestamp", "date", "yyyy-MM-dd HH:mm:ss#UTC")
    binder.set_value(statement, event)
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from .binder import (
    Binder,
    BytesBodyBinder,
    DateHeaderBinder,
    DoubleHeaderBinder,
    FloatHeaderBinder,
    IntHeaderBinder,
    LongHeaderBinder,
    StringBodyBinder,
    StringHeaderBinder,
)
from .dates import DatePattern
from .exceptions import InvalidParameterType
from .field import FieldSpec, Source, parse_field_spec
from .registry import resolve_binder_factory

__all__ = ["new_binder", "BinderConfig", "build_binders"]

log = logging.getLogger("event_binder.factory")

DEFAULT_ENCODING = "utf-8"


def _require(type_name: str, field: FieldSpec, source: Source):
    if field.source is not source:
        raise InvalidParameterType(
            type_name, f"needs a {source.value} field, got {str(field)!r}"
        )


def _header_only(cls):
    def build(slot, field, fmt, type_name):
        _require(type_name, field, Source.HEADER)
        return cls(slot, field.name)

    return build


def _string(slot, field, fmt, type_name):
    if field.source is Source.HEADER:
        return StringHeaderBinder(slot, field.name)
    encoding = fmt or DEFAULT_ENCODING
    try:
        b"".decode(encoding)
    except LookupError as ex:
        raise InvalidParameterType(
            type_name, f"{encoding!r} is not a known text encoding"
        ) from ex
    return StringBodyBinder(slot, encoding)


def _bytearray(slot, field, fmt, type_name):
    _require(type_name, field, Source.BODY)
    return BytesBodyBinder(slot)


def _date(slot, field, fmt, type_name):
    _require(type_name, field, Source.HEADER)
    if not fmt:
        raise InvalidParameterType(type_name, "a date format is required")
    return DateHeaderBinder(slot, field.name, DatePattern.compile(fmt))


_BUILTINS = {
    "string": _string,
    "bytearray": _bytearray,
    "int": _header_only(IntHeaderBinder),
    "long": _header_only(LongHeaderBinder),
    "float": _header_only(FloatHeaderBinder),
    "double": _header_only(DoubleHeaderBinder),
    "date": _date,
}


def _custom(slot: int, type_name: str, allow_import: bool) -> Binder:
    factory = resolve_binder_factory(type_name, allow_import=allow_import)
    try:
        binder = factory(slot)
    except TypeError as ex:
        raise InvalidParameterType(
            type_name, f"cannot be built from a slot number: {ex}"
        ) from ex
    if not isinstance(binder, Binder):
        raise InvalidParameterType(
            type_name, f"{binder!r} has no set_value(output, event)"
        )
    return binder


def new_binder(
    slot: int,
    field_spec: str,
    type_name: str,
    fmt: str | None = None,
    *,
    allow_import: bool = False,
) -> Binder:
    """Create the binder for one statement slot.

    Args:
        slot: 1-based statement parameter position.
        field_spec: ``body`` or ``header.<name>``.  Not interpreted for
            custom binders.
        type_name: A keyword (string, bytearray, int, long, float,
            double, date) or the name of a custom binder.
        fmt: Encoding for body strings or ``<pattern>[#<zone>]`` for dates.
        allow_import: Let an unregistered type_name name a binder class by
            import path, such as ``package.module:Class``.  The module is
            imported and its code runs, so only allow this for trusted
            configuration.

    Returns:
        A binder whose ``set_value(output, event)`` fills the slot.

    Raises:
        InvalidFieldSpec: field_spec is malformed.
        InvalidParameterType: type_name can not be resolved, or does not
            fit the field or format.
    """
    if isinstance(slot, bool) or not isinstance(slot, int) or slot < 1:
        raise InvalidParameterType(type_name, f"slot must be 1 or more, got {slot!r}")
    if not isinstance(type_name, str) or not type_name:
        raise InvalidParameterType(type_name, "a type name is required")

    build = _BUILTINS.get(type_name.lower())
    if build is None:
        binder = _custom(slot, type_name, allow_import)
    else:
        binder = build(slot, parse_field_spec(field_spec), fmt, type_name)
    log.debug("Slot %d %s:%s -> %r", slot, field_spec, type_name, binder)
    return binder


@dataclass(frozen=True)
class BinderConfig:
    """Settings for one slot, as read from sink configuration."""

    slot: int
    field: str
    type: str
    format: str | None = None

    def build(self, *, allow_import: bool = False) -> Binder:
        return new_binder(
            self.slot, self.field, self.type, self.format, allow_import=allow_import
        )


def build_binders(
    configs: Iterable[BinderConfig], *, allow_import: bool = False
) -> tuple[Binder, ...]:
    """Build binders for every config, ordered by slot.

    allow_import is passed on to new_binder.

    Raises:
        InvalidParameterType: two configs share a slot.
    """
    by_slot: dict[int, BinderConfig] = {}
    for config in configs:
        if config.slot in by_slot:
            raise InvalidParameterType(
                config.type, f"slot {config.slot} is configured more than once"
            )
        by_slot[config.slot] = config
    return tuple(
        by_slot[slot].build(allow_import=allow_import) for slot in sorted(by_slot)
    )

"""Binders write one value taken from an event into one statement slot.

A binder is built once per slot while the sink is configured and then
called for every event.  Built-in binders are frozen dataclasses and hold
no per-call state, so one instance may be shared between threads.  Custom
binders must keep to the same rule.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, ClassVar, Protocol, runtime_checkable

from sqlalchemy.types import (
    BIGINT,
    DOUBLE,
    FLOAT,
    INTEGER,
    TIMESTAMP,
    VARBINARY,
    VARCHAR,
    TypeEngine,
)

from .dates import DatePattern
from .exceptions import UnimplementedBinderError
from .registry import decode_text, parse_double, parse_float, parse_long

__all__ = [
    "ParameterOutput",
    "Binder",
    "CustomBinder",
    "HeaderBinder",
    "StringHeaderBinder",
    "LongHeaderBinder",
    "DoubleHeaderBinder",
    "FloatHeaderBinder",
    "DateHeaderBinder",
    "IntHeaderBinder",
    "StringBodyBinder",
    "BytesBodyBinder",
]


class ParameterOutput(Protocol):
    """Typed setters of a prepared statement.  Slots start at 1."""

    def set_string(self, slot: int, value: str) -> None: ...

    def set_long(self, slot: int, value: int) -> None: ...

    def set_double(self, slot: int, value: float) -> None: ...

    def set_float(self, slot: int, value: float) -> None: ...

    def set_bytes(self, slot: int, value: bytes) -> None: ...

    def set_timestamp(self, slot: int, value: datetime) -> None: ...

    def set_null(self, slot: int, sql_type: type[TypeEngine]) -> None: ...


@runtime_checkable
class Binder(Protocol):
    def set_value(self, output: ParameterOutput, event: Any) -> None: ...


class CustomBinder:
    """Base for user supplied binders.

    Subclasses are built with the slot number alone and must not keep
    mutable state between calls.  Make one available with
    ``register_binder``; naming it by import path needs
    ``new_binder(..., allow_import=True)``, which imports and runs the
    module.
    """

    def __init__(self, slot: int):
        self.slot = slot

    def set_value(self, output: ParameterOutput, event: Any) -> None:
        raise NotImplementedError

    def __repr__(self):
        return f"<{type(self).__name__} slot={self.slot}>"


@dataclass(frozen=True)
class HeaderBinder:
    """Bind a header value, or NULL of sql_type when the header is absent.

    The value is converted before the output is touched, so a conversion
    error leaves the slot unwritten.
    """

    slot: int
    header: str

    sql_type: ClassVar[type[TypeEngine]]

    def set_value(self, output: ParameterOutput, event: Any) -> None:
        text = event.headers.get(self.header)
        if text is None:
            output.set_null(self.slot, self.sql_type)
            return
        self.bind(output, self.convert(text))

    def convert(self, text: str) -> Any:
        return text

    def bind(self, output: ParameterOutput, value: Any) -> None:
        raise NotImplementedError


@dataclass(frozen=True)
class StringHeaderBinder(HeaderBinder):
    sql_type = VARCHAR

    def bind(self, output, value):
        output.set_string(self.slot, value)


@dataclass(frozen=True)
class LongHeaderBinder(HeaderBinder):
    sql_type = BIGINT

    def convert(self, text):
        return parse_long(text)

    def bind(self, output, value):
        output.set_long(self.slot, value)


@dataclass(frozen=True)
class DoubleHeaderBinder(HeaderBinder):
    sql_type = DOUBLE

    def convert(self, text):
        return parse_double(text)

    def bind(self, output, value):
        output.set_double(self.slot, value)


@dataclass(frozen=True)
class FloatHeaderBinder(HeaderBinder):
    sql_type = FLOAT

    def convert(self, text):
        return parse_float(text)

    def bind(self, output, value):
        output.set_float(self.slot, value)


@dataclass(frozen=True)
class DateHeaderBinder(HeaderBinder):
    pattern: DatePattern

    sql_type = TIMESTAMP

    def convert(self, text):
        return self.pattern.parse(text)

    def bind(self, output, value):
        output.set_timestamp(self.slot, value)


@dataclass(frozen=True)
class IntHeaderBinder(HeaderBinder):
    """Reserved keyword; no conversion is defined for it yet."""

    sql_type = INTEGER

    def set_value(self, output, event):
        raise UnimplementedBinderError(
            f"type 'int' is reserved and not implemented (slot {self.slot}); "
            "use 'long' instead"
        )


@dataclass(frozen=True)
class StringBodyBinder:
    """Decode the body with encoding.  An empty body binds an empty string."""

    slot: int
    encoding: str = "utf-8"

    sql_type: ClassVar[type[TypeEngine]] = VARCHAR

    def set_value(self, output: ParameterOutput, event: Any) -> None:
        output.set_string(self.slot, decode_text(event.body, self.encoding))


@dataclass(frozen=True)
class BytesBodyBinder:
    slot: int

    sql_type: ClassVar[type[TypeEngine]] = VARBINARY

    def set_value(self, output: ParameterOutput, event: Any) -> None:
        output.set_bytes(self.slot, event.body)

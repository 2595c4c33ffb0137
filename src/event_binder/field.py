"""Parse field specs which name where a value is read from an event."""

import enum
from dataclasses import dataclass

from .exceptions import InvalidFieldSpec

__all__ = ["Source", "FieldSpec", "parse_field_spec"]


class Source(enum.Enum):
    BODY = "body"
    HEADER = "header"


@dataclass(frozen=True)
class FieldSpec:
    source: Source
    name: str | None = None

    @classmethod
    def body(cls) -> "FieldSpec":
        return cls(Source.BODY)

    @classmethod
    def header(cls, name: str) -> "FieldSpec":
        return cls(Source.HEADER, name)

    def __str__(self):
        if self.source is Source.BODY:
            return "body"
        return f"header.{self.name}"


def parse_field_spec(spec: str) -> FieldSpec:
    """Parse a field spec string.

    Args:
        spec: Either ``body`` or ``header.<name>``. The header name is
            everything after the first dot and may contain dots itself.

    Returns:
        The parsed FieldSpec.

    Raises:
        InvalidFieldSpec: for any other shape.
    """
    if not isinstance(spec, str):
        raise InvalidFieldSpec(spec)
    prefix, dot, name = spec.partition(".")
    if prefix == Source.BODY.value and not dot:
        return FieldSpec.body()
    if prefix == Source.HEADER.value and name:
        return FieldSpec.header(name)
    raise InvalidFieldSpec(spec)

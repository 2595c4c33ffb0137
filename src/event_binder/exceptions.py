"""Errors raised while configuring binders or binding events."""

__all__ = [
    "BinderError",
    "InvalidFieldSpec",
    "InvalidParameterType",
    "NumberFormatError",
    "DateParseError",
    "EncodingError",
    "UnimplementedBinderError",
]


class BinderError(Exception):
    """Base class for all event_binder errors."""


class InvalidFieldSpec(BinderError, ValueError):
    """Field spec is neither ``body`` nor ``header.<name>``."""

    def __init__(self, spec):
        self.spec = spec
        super().__init__(
            f"Invalid field spec {spec!r}: expected 'body' or 'header.<name>'"
        )


class InvalidParameterType(BinderError, ValueError):
    """Type name cannot be turned into a binder for the given field."""

    def __init__(self, type_name, reason: str):
        self.type_name = type_name
        self.reason = reason
        super().__init__(f"Invalid parameter type {type_name!r}: {reason}")


class NumberFormatError(BinderError, ValueError):
    def __init__(self, value: str, type_name: str):
        self.value = value
        self.type_name = type_name
        super().__init__(f"Cannot convert {value!r} to {type_name}")


class DateParseError(BinderError, ValueError):
    def __init__(self, value: str, pattern: str):
        self.value = value
        self.pattern = pattern
        super().__init__(f"Cannot parse {value!r} with date pattern {pattern!r}")


class EncodingError(BinderError, ValueError):
    def __init__(self, encoding: str, reason: str):
        self.encoding = encoding
        self.reason = reason
        super().__init__(f"Cannot decode body as {encoding}: {reason}")


class UnimplementedBinderError(BinderError, NotImplementedError):
    """The type keyword is reserved but has no conversion yet."""

"""Text conversions for the built-in binders and the custom binder registry."""

import functools
import importlib
import logging
import math
import re
import struct
from typing import Any, Callable

from .exceptions import EncodingError, InvalidParameterType, NumberFormatError

__all__ = [
    "KEYWORDS",
    "parse_long",
    "parse_double",
    "parse_float",
    "decode_text",
    "register_binder",
    "unregister_binder",
    "registered_binders",
    "clear_binders",
    "resolve_binder_factory",
]

log = logging.getLogger("event_binder.registry")

# Type names handled by the built-in binders.  They can not be registered.
KEYWORDS = ("string", "bytearray", "int", "long", "float", "double", "date")

LONG_MIN = -(2**63)
LONG_MAX = 2**63 - 1

_LONG = re.compile(r"[+-]?[0-9]+")
# ASCII decimal or scientific notation, NaN or Infinity, with optional
# surrounding whitespace.
_FLOAT = re.compile(
    r"[ \t\n\r\f\v]*[+-]?"
    r"(?:NaN|Infinity|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)"
    r"[ \t\n\r\f\v]*"
)


def parse_long(text: str) -> int:
    """Parse a signed 64-bit integer.

    Only an optional sign followed by ASCII digits is accepted, so
    whitespace, underscores and unicode digits that ``int()`` would
    take are rejected.
    """
    if not _LONG.fullmatch(text):
        raise NumberFormatError(text, "long")
    value = int(text)
    if not LONG_MIN <= value <= LONG_MAX:
        raise NumberFormatError(text, "long")
    return value


def _to_float(text: str, type_name: str) -> float:
    if not _FLOAT.fullmatch(text):
        raise NumberFormatError(text, type_name)
    return float(text)


def parse_double(text: str) -> float:
    return _to_float(text, "double")


def parse_float(text: str) -> float:
    """Parse text and round it to 32-bit precision.

    Finite values beyond the float32 range become a signed infinity.
    """
    value = _to_float(text, "float")
    try:
        return struct.unpack("f", struct.pack("f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def decode_text(data: bytes, encoding: str) -> str:
    """Strictly decode body bytes; malformed input is an error."""
    try:
        return bytes(data).decode(encoding)
    except UnicodeDecodeError as ex:
        log.debug("Undecodable body for %s: %s", encoding, ex)
        raise EncodingError(encoding, str(ex)) from ex


# Custom binder factories by name.  Each is called with the slot number.
_binders: dict[str, Callable[[int], Any]] = {}


def register_binder(
    name: str, factory: Callable[[int], Any] | None = None, *, overwrite: bool = False
):
    """Register a custom binder factory under name.

    Use directly or as a class decorator:

        @register_binder("geo-point")
        class GeoPointBinder(CustomBinder):
            def set_value(self, output, event):
                ...

    Raises:
        InvalidParameterType: name is a built-in keyword or already taken.
    """

    def decorator(factory: Callable[[int], Any]) -> Callable[[int], Any]:
        if not isinstance(name, str) or not name:
            raise InvalidParameterType(name, "binder name must be a non-empty string")
        if name.lower() in KEYWORDS:
            raise InvalidParameterType(name, "name is a reserved type keyword")
        if not callable(factory):
            raise InvalidParameterType(name, f"{factory!r} is not callable")
        if not overwrite and name in _binders:
            raise InvalidParameterType(
                name, f"already registered to {_binders[name]!r}"
            )
        _binders[name] = factory
        log.debug("Registered binder %r -> %r", name, factory)
        return factory

    if factory is None:
        return decorator
    return decorator(factory)


def unregister_binder(name: str) -> None:
    _binders.pop(name, None)


def registered_binders() -> dict[str, Callable[[int], Any]]:
    return dict(_binders)


def clear_binders() -> None:
    _binders.clear()


def resolve_binder_factory(
    name: str, *, allow_import: bool = False
) -> Callable[[int], Any]:
    """Find the factory for a custom binder name.

    Registered names win.  With allow_import, any other name is treated as
    an import path, either ``package.module.Class`` or
    ``package.module:Outer.Inner``.  Importing runs the module's code, so
    only enable it for trusted configuration.

    Raises:
        InvalidParameterType: nothing callable can be found for name.
    """
    if name in _binders:
        return _binders[name]

    if not allow_import:
        raise InvalidParameterType(
            name, "not a type keyword or registered binder name"
        )

    if ":" in name:
        module_name, _, attr = name.partition(":")
    else:
        module_name, _, attr = name.rpartition(".")
    if not module_name or not attr:
        raise InvalidParameterType(
            name, "not a type keyword, registered binder or import path"
        )

    try:
        module = importlib.import_module(module_name)
    except ImportError as ex:
        raise InvalidParameterType(name, f"cannot import {module_name!r}") from ex
    try:
        factory = functools.reduce(getattr, attr.split("."), module)
    except AttributeError as ex:
        raise InvalidParameterType(name, f"{module_name!r} has no {attr!r}") from ex
    if not callable(factory):
        raise InvalidParameterType(name, f"{factory!r} is not callable")

    log.debug("Resolved binder %r by import", name)
    return factory

"""Date formats of the form ``<pattern>[#<time zone>]``.

The pattern uses the letter style common to JDBC sink configuration,
``yyyy-MM-dd HH:mm:ss``, and is translated into a ``strptime`` format.
A pattern that already holds a ``%`` directive is used as is.

Example:
    >>> DatePattern.compile("yyyy-MM-dd HH:mm:ss#GMT").parse("2013-11-26 06:43:50")
    datetime.datetime(2013, 11, 26, 6, 43, 50, tzinfo=datetime.timezone.utc)
"""

import logging
from datetime import datetime, timezone, tzinfo

import pytz

from .exceptions import DateParseError, InvalidParameterType

__all__ = ["DatePattern", "to_strptime"]

log = logging.getLogger("event_binder.dates")


def _year(count):
    return "%y" if count == 2 else "%Y"


def _month(count):
    if count <= 2:
        return "%m"
    return "%b" if count == 3 else "%B"


def _weekday(count):
    return "%a" if count <= 3 else "%A"


def _millis(count):
    # %f reads digits as a decimal fraction; only SSS maps them to millis.
    if count != 3:
        raise ValueError("fraction of a second must be written SSS")
    return "%f"


# Pattern letter to a function of its repeat count.
_LETTERS = {
    "y": _year,
    "M": _month,
    "d": lambda count: "%d",
    "D": lambda count: "%j",
    "H": lambda count: "%H",
    "h": lambda count: "%I",
    "m": lambda count: "%M",
    "s": lambda count: "%S",
    "S": _millis,
    "a": lambda count: "%p",
    "E": _weekday,
    "Z": lambda count: "%z",
    "X": lambda count: "%z",
}


def to_strptime(pattern: str) -> str:
    """Translate a letter pattern into a strptime format.

    Raises:
        ValueError: on an unsupported letter or an unterminated quote.
    """
    out = []
    i = 0
    while i < len(pattern):
        char = pattern[i]
        if char == "'":
            end = pattern.find("'", i + 1)
            if end == -1:
                raise ValueError(f"unterminated quote in {pattern!r}")
            # '' is an escaped single quote
            literal = pattern[i + 1 : end] or "'"
            out.append(literal.replace("%", "%%"))
            i = end + 1
        elif char.isascii() and char.isalpha():
            count = 1
            while i + count < len(pattern) and pattern[i + count] == char:
                count += 1
            if char not in _LETTERS:
                raise ValueError(f"unsupported pattern letter {char!r}")
            out.append(_LETTERS[char](count))
            i += count
        else:
            out.append("%%" if char == "%" else char)
            i += 1
    return "".join(out)


class DatePattern:
    """A compiled date format and the zone naive values are read in."""

    def __init__(self, pattern: str, directives: str, zone: tzinfo | None):
        self.pattern = pattern
        self.directives = directives
        self.zone = zone

    @classmethod
    def compile(cls, fmt: str) -> "DatePattern":
        """Build from ``<pattern>[#<time zone>]``.

        Without a zone, naive values are read in the system time zone.

        Raises:
            InvalidParameterType: bad pattern or unknown time zone.
        """
        pattern, _, zone_name = fmt.partition("#")
        if not pattern:
            raise InvalidParameterType("date", f"empty date pattern in {fmt!r}")
        try:
            directives = pattern if "%" in pattern else to_strptime(pattern)
        except ValueError as ex:
            raise InvalidParameterType("date", str(ex)) from ex

        zone = None
        if zone_name:
            try:
                zone = pytz.timezone(zone_name)
            except pytz.UnknownTimeZoneError as ex:
                raise InvalidParameterType(
                    "date", f"unknown time zone {zone_name!r}"
                ) from ex
        log.debug("Date pattern %r -> %r zone=%s", pattern, directives, zone)
        return cls(pattern, directives, zone)

    def parse(self, text: str) -> datetime:
        """Parse text into an aware datetime in UTC."""
        try:
            parsed = datetime.strptime(text, self.directives)
        except ValueError as ex:
            log.debug("%r does not match %r: %s", text, self.pattern, ex)
            raise DateParseError(text, self.pattern) from ex

        if parsed.tzinfo is None:
            if self.zone is None:
                parsed = parsed.astimezone()
            else:
                parsed = self.zone.localize(parsed)
        return parsed.astimezone(timezone.utc)

    def __repr__(self):
        return f"DatePattern({self.pattern!r}, zone={self.zone})"

"""Collect bound slots and hand them to SQLAlchemy.

StatementParameters records each slot's value with its SQL type, which
lets a ``text()`` statement carry typed bind parameters, NULLs included:

    params = bind_event(binders, event)
    connection.execute(params.bind(text("INSERT INTO t VALUES (:p1, :p2)")))
"""

import logging
from collections.abc import Iterable
from datetime import datetime
from typing import Any

from sqlalchemy import bindparam
from sqlalchemy.sql.elements import BindParameter, TextClause
from sqlalchemy.types import (
    BIGINT,
    DOUBLE,
    FLOAT,
    TIMESTAMP,
    VARBINARY,
    VARCHAR,
    TypeEngine,
)

from .binder import Binder, ParameterOutput
from .exceptions import BinderError

__all__ = ["StatementParameters", "bind_event", "bind_events"]

log = logging.getLogger("event_binder.statement")


class StatementParameters:
    """A ParameterOutput that keeps ``slot -> (value, sql type)``."""

    def __init__(self, name_template: str = "p{slot}"):
        self.name_template = name_template
        self.slots: dict[int, tuple[Any, type[TypeEngine]]] = {}

    def _set(self, slot: int, value: Any, sql_type: type[TypeEngine]) -> None:
        self.slots[slot] = (value, sql_type)

    def set_string(self, slot: int, value: str) -> None:
        self._set(slot, value, VARCHAR)

    def set_long(self, slot: int, value: int) -> None:
        self._set(slot, value, BIGINT)

    def set_double(self, slot: int, value: float) -> None:
        self._set(slot, value, DOUBLE)

    def set_float(self, slot: int, value: float) -> None:
        self._set(slot, value, FLOAT)

    def set_bytes(self, slot: int, value: bytes) -> None:
        self._set(slot, value, VARBINARY)

    def set_timestamp(self, slot: int, value: datetime) -> None:
        self._set(slot, value, TIMESTAMP)

    def set_null(self, slot: int, sql_type: type[TypeEngine]) -> None:
        self._set(slot, None, sql_type)

    def __len__(self) -> int:
        return len(self.slots)

    def __getitem__(self, slot: int) -> Any:
        return self.slots[slot][0]

    def _ordered(self) -> list[tuple[int, Any, type[TypeEngine]]]:
        ordered = sorted(self.slots)
        if ordered != list(range(1, len(ordered) + 1)):
            missing = sorted(set(range(1, max(ordered) + 1)) - set(ordered))
            raise BinderError(f"Statement slots {missing} were never bound")
        return [(slot, *self.slots[slot]) for slot in ordered]

    def name(self, slot: int) -> str:
        return self.name_template.format(slot=slot)

    def values(self) -> list[Any]:
        """Values in slot order."""
        return [value for _, value, _ in self._ordered()]

    def as_dict(self) -> dict[str, Any]:
        return {self.name(slot): value for slot, value, _ in self._ordered()}

    def bindparams(self) -> list[BindParameter]:
        return [
            bindparam(self.name(slot), value, type_=sql_type)
            for slot, value, sql_type in self._ordered()
        ]

    def bind(self, statement: TextClause) -> TextClause:
        """Attach the typed values to a text statement."""
        return statement.bindparams(*self.bindparams())

    def clear(self) -> None:
        self.slots.clear()

    def __repr__(self):
        return f"<StatementParameters {self.slots!r}>"


def bind_event(
    binders: Iterable[Binder], event: Any, output: ParameterOutput | None = None
) -> ParameterOutput:
    """Run every binder against event.

    Returns:
        output, or a new StatementParameters when none is given.

    Raises:
        NumberFormatError, DateParseError, EncodingError: from the binders.
    """
    if output is None:
        output = StatementParameters()
    for binder in binders:
        binder.set_value(output, event)
    return output


def bind_events(
    binders: Iterable[Binder], events: Iterable[Any], name_template: str = "p{slot}"
) -> list[dict[str, Any]]:
    """Parameter dicts for an executemany style batch, one per event."""
    binders = tuple(binders)
    rows = [
        bind_event(binders, event, StatementParameters(name_template)).as_dict()
        for event in events
    ]
    log.debug("Bound %d events to %d slots", len(rows), len(binders))
    return rows

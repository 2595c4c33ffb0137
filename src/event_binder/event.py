from dataclasses import dataclass, field

__all__ = ["Event"]


@dataclass
class Event:
    """An ingested event: raw body bytes and string headers.

    Binders only read ``body`` and ``headers``, so any object with those
    attributes can be bound.
    """

    body: bytes = b""
    headers: dict[str, str | None] = field(default_factory=dict)

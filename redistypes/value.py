"""The low-level value returned by a server."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\0": "\\0",
}


def _escape_char(ch: str) -> str:
    escaped = _ESCAPES.get(ch)
    if escaped is not None:
        return escaped
    if not ch.isprintable():
        return f"\\u{{{ord(ch):x}}}"
    return ch


def _debug_str(text: str) -> str:
    """Quote and escape a string for diagnostic output."""
    return '"' + "".join(_escape_char(ch) for ch in text) + '"'


class Value:
    """Base of every response value."""

    __slots__ = ()

    def looks_like_cursor(self) -> bool:
        """Whether this is a two-item bulk of cursor data and a bulk."""
        return (
            isinstance(self, Bulk)
            and len(self.items) == 2
            and isinstance(self.items[0], Data)
            and isinstance(self.items[1], Bulk)
        )

    def as_sequence(self) -> tuple[Value, ...] | None:
        """The items if this value can be read as a sequence, else None."""
        if isinstance(self, Bulk):
            return self.items
        if isinstance(self, Nil):
            return ()
        return None

    def as_map_iter(self) -> Iterator[tuple[Value, Value]] | None:
        """Iterate key/value pairs if this is a bulk, else None.

        A trailing unpaired item is dropped.
        """
        if not isinstance(self, Bulk):
            return None
        items = iter(self.items)
        return zip(items, items)


@dataclass(frozen=True, repr=False, slots=True)
class Nil(Value):
    """A nil response."""

    def __repr__(self) -> str:
        return "nil"


@dataclass(frozen=True, repr=False, slots=True)
class Int(Value):
    """An integer response."""

    value: int

    def __repr__(self) -> str:
        return f"int({self.value})"


@dataclass(frozen=True, repr=False, slots=True)
class Data(Value):
    """Arbitrary binary data."""

    value: bytes

    def __post_init__(self) -> None:
        if not isinstance(self.value, bytes):
            object.__setattr__(self, "value", bytes(self.value))

    def __repr__(self) -> str:
        try:
            text = self.value.decode("utf-8")
        except UnicodeDecodeError:
            return f"binary-data({list(self.value)!r})"
        return f"string-data('{_debug_str(text)}')"


@dataclass(frozen=True, repr=False, slots=True)
class Bulk(Value):
    """A bulk response holding nested values."""

    items: tuple[Value, ...]

    def __post_init__(self) -> None:
        if not isinstance(self.items, tuple):
            object.__setattr__(self, "items", tuple(self.items))

    def __repr__(self) -> str:
        return "bulk(" + ", ".join(repr(item) for item in self.items) + ")"


@dataclass(frozen=True, repr=False, slots=True)
class Status(Value):
    """A status response."""

    value: str

    def __repr__(self) -> str:
        return f"status({_debug_str(self.value)})"


@dataclass(frozen=True, repr=False, slots=True)
class Okay(Value):
    """A status response of exactly "OK"."""

    def __repr__(self) -> str:
        return "ok"
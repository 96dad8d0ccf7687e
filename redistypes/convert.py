"""Converting response values into Python types."""

from __future__ import annotations

import re
import types
import typing
from collections.abc import Iterator, Mapping, Sequence

from .errors import ErrorKind, RedisError, invalid_type_error
from .value import Bulk, Data, Int, Nil, Okay, Status, Value

_NONE_TYPE = type(None)

_INT_TEXT = re.compile(r"[+-]?[0-9]+")
_FLOAT_TEXT = re.compile(
    r"[+-]?(?:inf|infinity|nan|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)",
    re.IGNORECASE,
)


class InfoDict(Mapping):
    """Key/value data from the response of the INFO command."""

    def __init__(self, kvpairs: str):
        entries: dict[str, Value] = {}
        for raw in kvpairs.split("\n"):
            line = raw[:-1] if raw.endswith("\r") else raw
            if not line or line.startswith("#"):
                continue
            key, sep, rest = line.partition(":")
            if not sep:
                continue
            entries[key] = Status(rest)
        self._map = entries

    def get(self, key: str, target: typing.Any = str) -> typing.Any:
        """Fetch a value and convert it to ``target``; None if missing or unconvertible."""
        found = self.find(key)
        if found is None:
            return None
        try:
            return from_redis_value(found, target)
        except RedisError:
            return None

    def find(self, key: str) -> Value | None:
        """Look up the raw value of a key."""
        return self._map.get(key)

    def __getitem__(self, key: str) -> Value:
        return self._map[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._map)

    def __len__(self) -> int:
        return len(self._map)

    def __repr__(self) -> str:
        return f"InfoDict({self._map!r})"


def _decode(value: Data) -> str:
    try:
        return value.value.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise RedisError(ErrorKind.TYPE_ERROR, "Invalid UTF-8") from exc


def _parse_number(text: str, target: type) -> int | float | None:
    if target is int:
        return int(text) if _INT_TEXT.fullmatch(text) else None
    return float(text) if _FLOAT_TEXT.fullmatch(text) else None


def _to_number(value: Value, target: type) -> int | float:
    if isinstance(value, Int):
        return target(value.value)
    if isinstance(value, Status):
        text = value.value
    elif isinstance(value, Data):
        text = _decode(value)
    else:
        raise invalid_type_error(value, "Response type not convertible to numeric.")
    parsed = _parse_number(text, target)
    if parsed is None:
        raise invalid_type_error(value, "Could not convert from string.")
    return parsed


def _to_byte(value: Value) -> int:
    if isinstance(value, Int):
        return value.value & 0xFF
    number = _to_number(value, int)
    if not 0 <= number <= 0xFF:
        raise invalid_type_error(value, "Could not convert from string.")
    return number


def _to_bool(value: Value) -> bool:
    if isinstance(value, Nil):
        return False
    if isinstance(value, Int):
        return value.value != 0
    if isinstance(value, Status):
        if value.value == "1":
            return True
        if value.value == "0":
            return False
        raise invalid_type_error(value, "Response status not valid boolean")
    if isinstance(value, Data):
        if value.value == b"1":
            return True
        if value.value == b"0":
            return False
        raise invalid_type_error(value, "Response type not bool compatible.")
    if isinstance(value, Okay):
        return True
    raise invalid_type_error(value, "Response type not bool compatible.")


def _to_str(value: Value) -> str:
    if isinstance(value, Data):
        return _decode(value)
    if isinstance(value, Okay):
        return "OK"
    if isinstance(value, Status):
        return value.value
    raise invalid_type_error(value, "Response type not string compatible.")


def _to_bytes(value: Value) -> bytes:
    if isinstance(value, Data):
        return value.value
    if isinstance(value, Bulk):
        return bytes(_to_byte(item) for item in value.items)
    if isinstance(value, Nil):
        return b""
    raise invalid_type_error(value, "Response type not vector compatible.")


def _type_name(target: typing.Any) -> str:
    if typing.get_origin(target) is not None:
        return repr(target)
    return getattr(target, "__name__", repr(target))


def _to_list(value: Value, item_type: typing.Any) -> list:
    if isinstance(value, Data):
        try:
            return [_convert(value, item_type)]
        except RedisError:
            raise invalid_type_error(
                value, f"Conversion to list[{_type_name(item_type)}] failed."
            ) from None
    if isinstance(value, Bulk):
        return from_redis_values(value.items, item_type)
    if isinstance(value, Nil):
        return []
    raise invalid_type_error(value, "Response type not vector compatible.")


def _to_dict(value: Value, key_type: typing.Any, item_type: typing.Any) -> dict:
    if isinstance(value, Nil):
        return {}
    pairs = value.as_map_iter()
    if pairs is None:
        raise invalid_type_error(value, "Response type not hashmap compatible")
    return {_convert(k, key_type): _convert(v, item_type) for k, v in pairs}


def _to_set(value: Value, item_type: typing.Any, kind: type) -> set | frozenset:
    items = value.as_sequence()
    if items is None:
        raise invalid_type_error(value, "Response type not hashset compatible")
    return kind(_convert(item, item_type) for item in items)


def _fixed_tuple_args(target: typing.Any) -> tuple | None:
    if typing.get_origin(target) is not tuple:
        return None
    args = typing.get_args(target)
    if not args or args[-1] is Ellipsis or args == ((),):
        return None
    return args


def _to_tuple(value: Value, args: tuple) -> tuple:
    if not isinstance(value, Bulk):
        raise invalid_type_error(value, "Not a bulk response")
    if len(value.items) != len(args):
        raise invalid_type_error(value, "Bulk response of wrong dimension")
    return tuple(_convert(item, arg) for item, arg in zip(value.items, args))


def _convert(value: Value, target: typing.Any) -> typing.Any:
    if target is Value or target is typing.Any:
        return value
    if target is None or target is _NONE_TYPE:
        return None
    if target is bool:
        return _to_bool(value)
    if target is int or target is float:
        return _to_number(value, target)
    if target is str:
        return _to_str(value)
    if target is bytes:
        return _to_bytes(value)
    if target is bytearray:
        return bytearray(_to_bytes(value))
    if target is InfoDict:
        return InfoDict(_to_str(value))
    if target is list:
        return _to_list(value, Value)
    if target is dict:
        return _to_dict(value, Value, Value)
    if target is set or target is frozenset:
        return _to_set(value, Value, target)

    origin = typing.get_origin(target)
    args = typing.get_args(target)
    if origin is typing.Union or origin is types.UnionType:
        members = [arg for arg in args if arg is not _NONE_TYPE]
        if len(members) == 1 and len(args) == 2:
            if isinstance(value, Nil):
                return None
            return _convert(value, members[0])
    elif origin is list and len(args) == 1:
        return _to_list(value, args[0])
    elif origin is dict and len(args) == 2:
        return _to_dict(value, args[0], args[1])
    elif origin in (set, frozenset) and len(args) == 1:
        return _to_set(value, args[0], origin)
    else:
        fixed = _fixed_tuple_args(target)
        if fixed is not None:
            return _to_tuple(value, fixed)
    raise TypeError(f"cannot convert a response into {target!r}")


def from_redis_value(value: Value, target: typing.Any) -> typing.Any:
    """Convert a response value into ``target``, raising RedisError if incompatible."""
    return _convert(value, target)


def from_redis_values(items: Sequence[Value], target: typing.Any) -> list:
    """Convert a sequence of values; tuple targets consume the items in chunks."""
    fixed = _fixed_tuple_args(target)
    if fixed is None:
        return [_convert(item, target) for item in items]
    size = len(fixed)
    items = list(items)
    if len(items) % size != 0:
        raise invalid_type_error(items, "Bulk response of wrong dimension")
    return [
        tuple(_convert(item, arg) for item, arg in zip(items[start : start + size], fixed))
        for start in range(0, len(items), size)
    ]
"""Turning Python values into command arguments."""

from __future__ import annotations

import enum
import math
from collections.abc import Iterator, Mapping, MutableSequence
from dataclasses import dataclass
from decimal import Decimal


class NumericBehavior(enum.Enum):
    """How an argument behaves in a numeric context."""

    NON_NUMERIC = enum.auto()
    NUMBER_IS_INTEGER = enum.auto()
    NUMBER_IS_FLOAT = enum.auto()


class ExpiryKind(enum.Enum):
    """The ways an expiry time can be given."""

    EX = "EX"
    PX = "PX"
    EXAT = "EXAT"
    PXAT = "PXAT"
    PERSIST = "PERSIST"


@dataclass(frozen=True)
class Expiry:
    """An expiry time: a relative or absolute time, or no expiry at all."""

    kind: ExpiryKind
    amount: int | None = None

    def __post_init__(self) -> None:
        if self.kind is ExpiryKind.PERSIST:
            if self.amount is not None:
                raise ValueError("PERSIST takes no amount")
            return
        if isinstance(self.amount, bool) or not isinstance(self.amount, int):
            raise TypeError(f"{self.kind.value} needs an integer amount")
        if self.amount < 0:
            raise ValueError(f"{self.kind.value} amount must not be negative")

    @classmethod
    def ex(cls, seconds: int) -> Expiry:
        """Expire after the given number of seconds."""
        return cls(ExpiryKind.EX, seconds)

    @classmethod
    def px(cls, milliseconds: int) -> Expiry:
        """Expire after the given number of milliseconds."""
        return cls(ExpiryKind.PX, milliseconds)

    @classmethod
    def exat(cls, timestamp: int) -> Expiry:
        """Expire at the given Unix time in seconds."""
        return cls(ExpiryKind.EXAT, timestamp)

    @classmethod
    def pxat(cls, timestamp: int) -> Expiry:
        """Expire at the given Unix time in milliseconds."""
        return cls(ExpiryKind.PXAT, timestamp)

    @classmethod
    def persist(cls) -> Expiry:
        """Remove the time to live of a key."""
        return cls(ExpiryKind.PERSIST)


def _format_float(number: float) -> str:
    """Shortest round-trip text for a float, in the wire's float notation."""
    if math.isnan(number):
        return "NaN"
    if math.isinf(number):
        return "inf" if number > 0 else "-inf"
    sign = "-" if math.copysign(1.0, number) < 0 else ""
    if number == 0:
        return sign + "0.0"
    parsed = Decimal(repr(abs(number))).as_tuple()
    digits = "".join(str(d) for d in parsed.digits)
    exponent = int(parsed.exponent)
    stripped = digits.rstrip("0")
    exponent += len(digits) - len(stripped)
    digits = stripped
    length = len(digits)
    point = length + exponent
    if exponent >= 0 and point <= 16:
        text = digits + "0" * exponent + ".0"
    elif 0 < point <= 16:
        text = digits[:point] + "." + digits[point:]
    elif -5 < point <= 0:
        text = "0." + "0" * (-point) + digits
    elif length == 1:
        text = f"{digits}e{point - 1}"
    else:
        text = f"{digits[0]}.{digits[1:]}e{point - 1}"
    return sign + text


def _iter_args(value: object) -> Iterator[bytes]:
    if value is None:
        return
    if isinstance(value, bool):
        yield b"1" if value else b"0"
    elif isinstance(value, int):
        yield str(value).encode("ascii")
    elif isinstance(value, float):
        yield _format_float(value).encode("ascii")
    elif isinstance(value, str):
        yield value.encode("utf-8")
    elif isinstance(value, (bytes, bytearray, memoryview)):
        yield bytes(value)
    elif isinstance(value, Mapping):
        for key, item in value.items():
            if not (is_single_arg(key) and is_single_arg(item)):
                raise ValueError("mapping keys and values must each be one argument")
            yield from _iter_args(key)
            yield from _iter_args(item)
    elif isinstance(value, (list, tuple, set, frozenset)):
        for item in value:
            yield from _iter_args(item)
    elif callable(getattr(value, "write_redis_args", None)):
        collected: list[bytes] = []
        value.write_redis_args(collected)
        yield from collected
    else:
        raise TypeError(f"cannot convert {type(value).__name__} to a command argument")


def to_redis_args(value: object) -> list[bytes]:
    """Convert a value into a list of arguments."""
    return list(_iter_args(value))


def write_redis_args(value: object, out: MutableSequence[bytes]) -> None:
    """Append the arguments of a value to ``out``."""
    for arg in _iter_args(value):
        out.append(arg)


def describe_numeric_behavior(value: object) -> NumericBehavior:
    """Say whether a value is an integer, a float or not numeric."""
    if isinstance(value, bool):
        return NumericBehavior.NON_NUMERIC
    if isinstance(value, int):
        return NumericBehavior.NUMBER_IS_INTEGER
    if isinstance(value, float):
        return NumericBehavior.NUMBER_IS_FLOAT
    describe = getattr(value, "describe_numeric_behavior", None)
    if callable(describe):
        return describe()
    return NumericBehavior.NON_NUMERIC


def is_single_arg(value: object) -> bool:
    """Whether a value produces exactly one argument."""
    if value is None:
        return False
    if isinstance(value, (bool, int, float, str, bytes, bytearray, memoryview)):
        return True
    if isinstance(value, tuple):
        return len(value) == 1
    if isinstance(value, list):
        return len(value) == 1 and is_single_arg(value[0])
    if isinstance(value, (Mapping, set, frozenset)):
        return len(value) <= 1
    check = getattr(value, "is_single_arg", None)
    if callable(check):
        return check()
    return True
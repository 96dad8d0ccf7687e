"""Error kinds and the error type raised for failed requests and conversions."""

from __future__ import annotations

import enum
import os
import re

from .value import _debug_str


class ErrorKind(enum.Enum):
    """Every kind of error the library can report."""

    RESPONSE_ERROR = enum.auto()
    AUTHENTICATION_FAILED = enum.auto()
    TYPE_ERROR = enum.auto()
    EXEC_ABORT_ERROR = enum.auto()
    BUSY_LOADING_ERROR = enum.auto()
    NO_SCRIPT_ERROR = enum.auto()
    INVALID_CLIENT_CONFIG = enum.auto()
    MOVED = enum.auto()
    ASK = enum.auto()
    TRY_AGAIN = enum.auto()
    CLUSTER_DOWN = enum.auto()
    CROSS_SLOT = enum.auto()
    MASTER_DOWN = enum.auto()
    IO_ERROR = enum.auto()
    CLIENT_ERROR = enum.auto()
    EXTENSION_ERROR = enum.auto()
    READ_ONLY = enum.auto()
    SERIALIZE = enum.auto()


_CODES = {
    ErrorKind.RESPONSE_ERROR: "ERR",
    ErrorKind.EXEC_ABORT_ERROR: "EXECABORT",
    ErrorKind.BUSY_LOADING_ERROR: "LOADING",
    ErrorKind.NO_SCRIPT_ERROR: "NOSCRIPT",
    ErrorKind.MOVED: "MOVED",
    ErrorKind.ASK: "ASK",
    ErrorKind.TRY_AGAIN: "TRYAGAIN",
    ErrorKind.CLUSTER_DOWN: "CLUSTERDOWN",
    ErrorKind.CROSS_SLOT: "CROSSSLOT",
    ErrorKind.MASTER_DOWN: "MASTERDOWN",
    ErrorKind.READ_ONLY: "READONLY",
}

_CATEGORIES = {
    ErrorKind.RESPONSE_ERROR: "response error",
    ErrorKind.AUTHENTICATION_FAILED: "authentication failed",
    ErrorKind.TYPE_ERROR: "type error",
    ErrorKind.EXEC_ABORT_ERROR: "script execution aborted",
    ErrorKind.BUSY_LOADING_ERROR: "busy loading",
    ErrorKind.NO_SCRIPT_ERROR: "no script",
    ErrorKind.INVALID_CLIENT_CONFIG: "invalid client config",
    ErrorKind.MOVED: "key moved",
    ErrorKind.ASK: "key moved (ask)",
    ErrorKind.TRY_AGAIN: "try again",
    ErrorKind.CLUSTER_DOWN: "cluster down",
    ErrorKind.CROSS_SLOT: "cross-slot",
    ErrorKind.MASTER_DOWN: "master down",
    ErrorKind.IO_ERROR: "I/O error",
    ErrorKind.EXTENSION_ERROR: "extension error",
    ErrorKind.CLIENT_ERROR: "client error",
    ErrorKind.READ_ONLY: "read-only",
    ErrorKind.SERIALIZE: "serializing",
}

_CLUSTER_KINDS = frozenset(
    {ErrorKind.MOVED, ErrorKind.ASK, ErrorKind.TRY_AGAIN, ErrorKind.CLUSTER_DOWN}
)

_ASCII_WORD = re.compile(r"[^ \t\n\f\r]+")
_U16 = re.compile(r"\+?[0-9]+")

_DEFAULT_EXTENSION_DETAIL = "Unknown extension error encountered"


class _Variant(enum.Enum):
    DESCRIPTION = enum.auto()
    DETAIL = enum.auto()
    EXTENSION = enum.auto()
    IO = enum.auto()


class RedisError(Exception):
    """An error raised by the library or reported by the server."""

    def __init__(self, kind: ErrorKind, description: str, detail: str | None = None):
        if detail is None:
            super().__init__(description)
        else:
            super().__init__(description, detail)
        self._kind = kind
        self._description = description
        self._detail = detail
        self._ext_code: str | None = None
        self._io_error: OSError | None = None
        self._variant = _Variant.DESCRIPTION if detail is None else _Variant.DETAIL

    @classmethod
    def from_io_error(cls, err: OSError) -> RedisError:
        """Wrap an operating-system I/O error."""
        error = cls(ErrorKind.IO_ERROR, str(err))
        error._variant = _Variant.IO
        error._io_error = err
        error.__cause__ = err
        return error

    @classmethod
    def from_extension(cls, code: str, detail: str) -> RedisError:
        """Build an error for a server error code the library does not know."""
        error = cls(ErrorKind.EXTENSION_ERROR, "extension error", detail)
        error._variant = _Variant.EXTENSION
        error._ext_code = code
        return error

    @property
    def kind(self) -> ErrorKind:
        """The kind of the error."""
        return self._kind

    @property
    def detail(self) -> str | None:
        """The error detail, if there is one."""
        if self._variant in (_Variant.DETAIL, _Variant.EXTENSION):
            return self._detail
        return None

    @property
    def description(self) -> str:
        """A short description of the error."""
        if self._variant is _Variant.EXTENSION:
            return "extension error"
        if self._variant is _Variant.IO:
            return str(self._io_error)
        return self._description

    @property
    def code(self) -> str | None:
        """The raw error code, if available."""
        known = _CODES.get(self._kind)
        if known is not None:
            return known
        if self._variant is _Variant.EXTENSION:
            return self._ext_code
        return None

    @property
    def category(self) -> str:
        """The name of the error category for display purposes."""
        return _CATEGORIES[self._kind]

    @property
    def io_error(self) -> OSError | None:
        """The wrapped I/O error, if this is an I/O failure."""
        return self._io_error

    def is_io_error(self) -> bool:
        """Whether this failure is an I/O failure."""
        return self._io_error is not None

    def is_cluster_error(self) -> bool:
        """Whether this is a cluster redirection or availability error."""
        return self._kind in _CLUSTER_KINDS

    def is_connection_refusal(self) -> bool:
        """Whether the connection was refused (or a unix socket is missing)."""
        err = self._io_error
        if isinstance(err, ConnectionRefusedError):
            return True
        if isinstance(err, FileNotFoundError):
            return os.name == "posix"
        return False

    def is_timeout(self) -> bool:
        """Whether the error was caused by an I/O time out."""
        return isinstance(self._io_error, (TimeoutError, BlockingIOError))

    def is_connection_dropped(self) -> bool:
        """Whether the error was caused by a dropped connection."""
        return isinstance(self._io_error, (BrokenPipeError, ConnectionResetError))

    def redirect_node(self) -> tuple[str, int] | None:
        """Return ``(addr, slot_id)`` for MOVED and ASK errors."""
        if self._kind not in (ErrorKind.ASK, ErrorKind.MOVED):
            return None
        detail = self.detail
        if detail is None:
            return None
        words = _ASCII_WORD.findall(detail)
        if len(words) < 2 or not _U16.fullmatch(words[0]):
            return None
        slot = int(words[0])
        if slot > 0xFFFF:
            return None
        return words[1], slot

    def clone_mostly(self, ioerror_description: str) -> RedisError:
        """Copy the error; an I/O error gets the description prepended."""
        if self._variant is _Variant.IO:
            err = self._io_error
            message = f"{ioerror_description}: {err}"
            try:
                new_io = type(err)(message)
            except TypeError:
                new_io = OSError(message)
            return type(self).from_io_error(new_io)
        if self._variant is _Variant.EXTENSION:
            return type(self).from_extension(self._ext_code, self._detail)
        return type(self)(self._kind, self._description, self._detail)

    def __str__(self) -> str:
        if self._variant is _Variant.DESCRIPTION:
            return self._description
        if self._variant is _Variant.DETAIL:
            return f"{self._description}: {self._detail}"
        if self._variant is _Variant.EXTENSION:
            return f"{self._ext_code}: {self._detail}"
        return str(self._io_error)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._kind.name}, {str(self)!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RedisError):
            return NotImplemented
        if self._variant is not other._variant:
            return False
        if self._variant in (_Variant.DESCRIPTION, _Variant.DETAIL):
            return self._kind is other._kind
        if self._variant is _Variant.EXTENSION:
            return self._ext_code == other._ext_code
        return False

    def __hash__(self) -> int:
        return hash((self._variant, self._kind, self._ext_code))


def make_extension_error(code: str, detail: str | None = None) -> RedisError:
    """Build an extension error from a server error code and optional detail."""
    return RedisError.from_extension(
        code, _DEFAULT_EXTENSION_DETAIL if detail is None else detail
    )


def invalid_type_error(value: object, detail: object) -> RedisError:
    """Build the error reported when a response has an incompatible type."""
    shown = _debug_str(detail) if isinstance(detail, str) else repr(detail)
    return RedisError(
        ErrorKind.TYPE_ERROR,
        "Response was of incompatible type",
        f"{shown} (response was {value!r})",
    )
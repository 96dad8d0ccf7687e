import os

import pytest

from redistypes.errors import (
    ErrorKind,
    RedisError,
    invalid_type_error,
    make_extension_error,
)
from redistypes.value import Int, Nil


def test_kind_and_description_without_detail():
    err = RedisError(ErrorKind.TYPE_ERROR, "Invalid UTF-8")
    assert err.kind is ErrorKind.TYPE_ERROR
    assert err.detail is None
    assert str(err) == "Invalid UTF-8"
    assert err.description == "Invalid UTF-8"


def test_display_with_detail():
    err = RedisError(ErrorKind.RESPONSE_ERROR, "An error", "something broke")
    assert err.detail == "something broke"
    assert str(err) == "An error: something broke"


def test_extension_error_defaults():
    err = make_extension_error("FOO", None)
    assert err.kind is ErrorKind.EXTENSION_ERROR
    assert err.detail == "Unknown extension error encountered"
    assert err.code == "FOO"
    assert err.description == "extension error"
    assert str(err) == "FOO: Unknown extension error encountered"


def test_extension_error_with_detail():
    err = make_extension_error("BAR", "odd thing")
    assert err.detail == "odd thing"
    assert str(err) == "BAR: odd thing"


@pytest.mark.parametrize(
    "kind, code",
    [
        (ErrorKind.RESPONSE_ERROR, "ERR"),
        (ErrorKind.EXEC_ABORT_ERROR, "EXECABORT"),
        (ErrorKind.BUSY_LOADING_ERROR, "LOADING"),
        (ErrorKind.NO_SCRIPT_ERROR, "NOSCRIPT"),
        (ErrorKind.MOVED, "MOVED"),
        (ErrorKind.ASK, "ASK"),
        (ErrorKind.TRY_AGAIN, "TRYAGAIN"),
        (ErrorKind.CLUSTER_DOWN, "CLUSTERDOWN"),
        (ErrorKind.CROSS_SLOT, "CROSSSLOT"),
        (ErrorKind.MASTER_DOWN, "MASTERDOWN"),
        (ErrorKind.READ_ONLY, "READONLY"),
        (ErrorKind.TYPE_ERROR, None),
        (ErrorKind.CLIENT_ERROR, None),
    ],
)
def test_codes(kind, code):
    assert RedisError(kind, "desc").code == code


@pytest.mark.parametrize(
    "kind, category",
    [
        (ErrorKind.RESPONSE_ERROR, "response error"),
        (ErrorKind.AUTHENTICATION_FAILED, "authentication failed"),
        (ErrorKind.ASK, "key moved (ask)"),
        (ErrorKind.IO_ERROR, "I/O error"),
        (ErrorKind.READ_ONLY, "read-only"),
        (ErrorKind.SERIALIZE, "serializing"),
    ],
)
def test_categories(kind, category):
    assert RedisError(kind, "desc").category == category


def test_every_kind_has_a_category():
    assert all(RedisError(kind, "d").category for kind in ErrorKind)


@pytest.mark.parametrize(
    "kind, expected",
    [
        (ErrorKind.MOVED, True),
        (ErrorKind.ASK, True),
        (ErrorKind.TRY_AGAIN, True),
        (ErrorKind.CLUSTER_DOWN, True),
        (ErrorKind.CROSS_SLOT, False),
        (ErrorKind.RESPONSE_ERROR, False),
    ],
)
def test_is_cluster_error(kind, expected):
    assert RedisError(kind, "desc").is_cluster_error() is expected


def test_io_error_wrapping():
    cause = ConnectionRefusedError("refused")
    err = RedisError.from_io_error(cause)
    assert err.kind is ErrorKind.IO_ERROR
    assert err.is_io_error()
    assert err.is_connection_refusal()
    assert err.code is None
    assert err.__cause__ is cause
    assert str(err) == str(cause)


def test_missing_socket_counts_as_refusal_on_posix():
    err = RedisError.from_io_error(FileNotFoundError("missing"))
    assert err.is_connection_refusal() is (os.name == "posix")


@pytest.mark.parametrize("exc", [TimeoutError, BlockingIOError])
def test_timeouts(exc):
    err = RedisError.from_io_error(exc("slow"))
    assert err.is_timeout()
    assert not err.is_connection_dropped()


@pytest.mark.parametrize("exc", [BrokenPipeError, ConnectionResetError])
def test_dropped(exc):
    err = RedisError.from_io_error(exc("gone"))
    assert err.is_connection_dropped()
    assert not err.is_timeout()
    assert not err.is_connection_refusal()


def test_non_io_error_predicates():
    err = RedisError(ErrorKind.RESPONSE_ERROR, "desc")
    assert not err.is_io_error()
    assert not err.is_timeout()
    assert not err.is_connection_dropped()
    assert not err.is_connection_refusal()


def test_redirect_node_moved():
    err = RedisError(ErrorKind.MOVED, "redirect", "3999 127.0.0.1:6381")
    assert err.redirect_node() == ("127.0.0.1:6381", 3999)


def test_redirect_node_ask():
    err = RedisError(ErrorKind.ASK, "redirect", "12 10.0.0.1:7000")
    assert err.redirect_node() == ("10.0.0.1:7000", 12)


@pytest.mark.parametrize(
    "kind, detail",
    [
        (ErrorKind.RESPONSE_ERROR, "3999 127.0.0.1:6381"),
        (ErrorKind.MOVED, "abc 127.0.0.1:6381"),
        (ErrorKind.MOVED, "70000 127.0.0.1:6381"),
        (ErrorKind.MOVED, "3999"),
        (ErrorKind.MOVED, None),
    ],
)
def test_redirect_node_rejects(kind, detail):
    assert RedisError(kind, "redirect", detail).redirect_node() is None


def test_equality_rules():
    assert RedisError(ErrorKind.TYPE_ERROR, "a") == RedisError(ErrorKind.TYPE_ERROR, "b")
    assert RedisError(ErrorKind.TYPE_ERROR, "a", "x") == RedisError(
        ErrorKind.TYPE_ERROR, "b", "y"
    )
    assert RedisError(ErrorKind.TYPE_ERROR, "a") != RedisError(ErrorKind.TYPE_ERROR, "a", "x")
    assert make_extension_error("FOO", "one") == make_extension_error("FOO", "two")
    assert make_extension_error("FOO", None) != make_extension_error("BAR", None)
    io = RedisError.from_io_error(OSError("x"))
    assert io != RedisError.from_io_error(OSError("x"))


def test_clone_mostly_io():
    err = RedisError.from_io_error(BrokenPipeError("pipe"))
    clone = err.clone_mostly("while sending")
    assert clone.kind is ErrorKind.IO_ERROR
    assert clone.is_connection_dropped()
    assert str(clone).startswith("while sending: ")
    assert str(err) in str(clone)


def test_clone_mostly_keeps_others():
    err = RedisError(ErrorKind.MOVED, "redirect", "1 host:1")
    clone = err.clone_mostly("ignored")
    assert clone == err
    assert str(clone) == str(err)
    ext = make_extension_error("FOO", "d")
    ext_clone = ext.clone_mostly("ignored")
    assert ext_clone.code == "FOO"
    assert str(ext_clone) == str(ext)


def test_invalid_type_error():
    value = Int(5)
    err = invalid_type_error(value, "Response type not string compatible.")
    assert err.kind is ErrorKind.TYPE_ERROR
    assert str(err).startswith("Response was of incompatible type: ")
    assert repr(value) in err.detail
    assert '"Response type not string compatible."' in err.detail


def test_invalid_type_error_for_nil():
    value = Nil()
    err = invalid_type_error(value, "Not a bulk response")
    assert err.kind is ErrorKind.TYPE_ERROR
    assert err.description == "Response was of incompatible type"
    assert "Not a bulk response" in err.detail
    assert repr(value) in err.detail
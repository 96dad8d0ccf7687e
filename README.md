# redistypes

`redistypes` holds the value and error types that sit between a Redis connection and
application code. It has no third-party dependencies. It is made of four modules:

- `redistypes.value`: `Nil`, `Int`, `Data`, `Bulk`, `Status` and `Okay` are the replies a server sends. All of them are subclasses of `Value`.
- `redistypes.errors`: `RedisError`, which has an `ErrorKind`, and the helpers `make_extension_error` and `invalid_type_error`.
- `redistypes.args`: `to_redis_args` and related functions turn Python values into command arguments. The module also has the `Expiry` helper.
- `redistypes.convert`: `from_redis_value` and `from_redis_values` turn replies into the Python types you ask for. `InfoDict` parses `INFO` output.

## What it does not do

The package has no client, no connection and no wire-protocol reader or writer. It does not send
commands or read replies from a socket. It only models the values and errors at either end of
that exchange.

## Installation

```
pip install redistypes
```

## Reply values

```python
from redistypes.value import Bulk, Data, Int, Nil

reply = Bulk([Data(b"0"), Bulk([Data(b"a")])])
reply.looks_like_cursor()                          # True
Nil().as_sequence()                                # ()
list(Bulk([Data(b"k"), Int(1)]).as_map_iter())     # [(Data(b"k"), Int(1))]
```

`Bulk` stores its items as a tuple. `Data` stores bytes. Every value has a short diagnostic
`repr`, for example `int(5)`, `nil`, `ok` or `bulk(...)`.

## Encoding arguments

```python
from redistypes.args import (
    Expiry, NumericBehavior, describe_numeric_behavior, is_single_arg, to_redis_args,
)

to_redis_args(["key", 42, True])      # [b"key", b"42", b"1"]
to_redis_args({"field": "value"})     # [b"field", b"value"]
to_redis_args(None)                   # []
is_single_arg(("a", "b"))             # False
describe_numeric_behavior(1.5) is NumericBehavior.NUMBER_IS_FLOAT   # True
Expiry.ex(10)                         # Expiry(kind=ExpiryKind.EX, amount=10)
```

Each key and each value in a mapping must encode to exactly one argument. If one does not,
`ValueError` is raised. A type that cannot be encoded raises `TypeError`.

An object can supply its own encoding. If it has a `write_redis_args(out)` method, that method is
used to encode it. `write_redis_args(value, out)` appends the arguments of `value` to a list you
pass in.

## Converting replies

```python
from redistypes.value import Bulk, Data, Int, Nil
from redistypes.convert import from_redis_value, from_redis_values

from_redis_value(Int(42), int)                                   # 42
from_redis_value(Data(b"17"), int)                               # 17
from_redis_value(Bulk([Data(b"a"), Data(b"b")]), list[str])      # ["a", "b"]
from_redis_value(Nil(), int | None)                              # None
from_redis_values([Data(b"a"), Int(1)], tuple[str, int])         # [("a", 1)]
```

You can ask for any of these target types:

- `bool`, `int`, `float`, `str`, `bytes`, `bytearray`
- `list[...]`, `dict[..., ...]`, `set[...]`, `frozenset[...]`
- fixed-size tuples
- `X | None`
- `InfoDict`
- `Value`

When a reply does not fit the requested type, `RedisError` is raised with
`ErrorKind.TYPE_ERROR`. If the target is not a type the module supports, `TypeError` is raised.

## INFO output

```python
from redistypes.convert import InfoDict

info = InfoDict("# Server\r\nrole:master\r\nconnected_clients:3\r\n")
info.get("role")                      # "master"
info.get("connected_clients", int)    # 3
info.find("missing")                  # None
len(info)                             # 2
```

`InfoDict` is a read-only mapping from keys to `Status` values. `get` returns `None` in two
cases: when the key is missing, and when its value cannot be converted to the requested type.

## Errors

```python
from redistypes.errors import ErrorKind, RedisError, make_extension_error

err = RedisError(ErrorKind.MOVED, "An error was signalled by the server", "3999 127.0.0.1:6381")
err.code                # "MOVED"
err.category            # "key moved"
err.redirect_node()     # ("127.0.0.1:6381", 3999)
err.is_cluster_error()  # True

make_extension_error("CUSTOM", None).code      # "CUSTOM"
str(make_extension_error("CUSTOM", "boom"))    # "CUSTOM: boom"
```

`RedisError.from_io_error` wraps an `OSError`. The checks `is_io_error()`, `is_timeout()`,
`is_connection_refusal()` and `is_connection_dropped()` look at that wrapped error.
`clone_mostly(description)` copies an error. When the error wraps an I/O error, the copy's
message has the given description in front of it.

## Running the tests

```
pip install -e ".[test]"
pytest
```
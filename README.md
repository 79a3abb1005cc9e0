# vwire

`vwire` builds and parses the messages that a database client and server
exchange over the wire. It works only on the bytes of each message body. It
opens no sockets and runs no queries, so it can sit under any transport.

## Installation

```
pip install vwire
```

The test suite uses pytest, which the `test` extra installs:

```
pip install "vwire[test]"
```

## Building blocks

- `vwire.buffer.MsgBuffer` is a byte buffer with a read cursor. The `append_*`
  methods add big-endian `uint16`, `uint32`, `int32` and `uint64` values, single
  bytes, raw bytes and NUL-terminated strings. Each of them returns the buffer,
  so calls can be chained. The `read_*` methods read signed and unsigned 16-,
  32- and 64-bit integers, bytes, booleans, strings and tagged strings from the
  front. `getvalue()` returns the unread bytes and `remaining()` returns how
  many there are. A read past the end raises `ValueError`.
- `vwire.base` defines `FrontEndMsg` (client to server), `BackEndMsg` (server
  to client), `CmdTargetType` (`PORTAL` or `STATEMENT`) and `ProtocolError`,
  a subclass of `ValueError`. It also holds the registry of server message
  types. `register_backend` is a class decorator that adds a class to the
  registry, and `lookup_backend` finds the class for a type byte.
- `vwire.decode.create_backend_msg(msg_type, body)` takes a type byte, given
  as an `int`, a one-character `str` or a one-byte `bytes`, and a message body.
  It returns the matching server message object. It raises `ProtocolError`
  when the type is unknown, when the body is malformed, or when bytes are left
  over after decoding.

## Server messages

| Module | Type byte: class |
| --- | --- |
| `vwire.backend_session` | `E`: `ErrorMsg`, `K`: `KeyDataMsg`, `Y`: `LoadBalanceMsg`, `N`: `NoticeMsg`, `S`: `ParamStatusMsg`, `Z`: `ReadyForQueryMsg` |
| `vwire.backend_query` | `D`: `DataRowMsg`, `I`: `EmptyQueryResponseMsg`, `n`: `NoDataMsg`, `1`: `ParseCompleteMsg`, `s`: `PortalSuspendedMsg` |
| `vwire.backend_load` | `G`: `InitStdinLoadMsg`, `H`: `LoadNewFileMsg`, `F`: `VerifyLoadFilesMsg`, `O`: `WriteFileMsg` |

Each of these classes is a dataclass, built from a `MsgBuffer` by the class
method `from_body`. Some of them behave in ways worth knowing:

- `DataRowMsg` stores the raw row in its `data` field, and `to_bytes()`
  returns those bytes. `columns()` returns a `ColumnExtractor`. Each call to
  `chunk()` returns the bytes of the next column, or `None` for SQL NULL.
  Iterating over the extractor yields all `num_cols` columns in order.
- `NoticeMsg.notices` is a list of `(code, text)` pairs. The `codes` and
  `values` properties list each half on its own.
- An `I` message decodes to a `ParseCompleteMsg`, not to an
  `EmptyQueryResponseMsg`.

## Client messages

| Module | Messages |
| --- | --- |
| `vwire.frontend_session` | `StartupMsg`, `SslRequestMsg`, `LoadBalanceRequestMsg`, `PasswordMsg`, `QueryMsg`, `CancelMsg`, `TerminateMsg` |
| `vwire.frontend_extended` | `ParseMsg`, `BindMsg`, `DescribeMsg`, `ExecuteMsg`, `CloseMsg`, `FlushMsg`, `SyncMsg` |
| `vwire.frontend_load` | `LoadDataMsg`, `LoadDoneMsg`, `LoadFailMsg`, `LoadFilesInfoMsg`, `ClientErrorMsg` |

Each client message is a dataclass with a `flatten()` method. It returns a
pair: the message body and the type byte as an integer. The startup, SSL,
load-balance and cancel requests have no type byte, so their type is `0`.

Some client messages need more detail:

- `BindMsg.args` sends each value as text. `None` becomes SQL NULL, a `bool`
  becomes `"1"` or `"0"`, and an `int`, `float`, `str` or `datetime` becomes
  its text form, a `datetime` in RFC 3339 form. Any other type is sent as the
  marker text `??HELP??`.
- `LoadDataMsg` sends only the first `used_bytes` bytes of `data`, or all of
  `data` when `used_bytes` is `None`.
- `LoadFailMsg` sends an empty body. Its `message` appears only in `str()`.
- `PasswordMsg` hides its data in both `repr()` and `str()`.

## Example

```python
from vwire.decode import create_backend_msg
from vwire.frontend_extended import SyncMsg

body, msg_type = SyncMsg().flatten()
assert (body, msg_type) == (b"", ord("S"))

msg = create_backend_msg("Z", b"I")
print(msg)  # ReadyForQuery: TransactionState='I'
```

## What the package does not do

- It does not frame messages. Reading and writing the type byte and the
  message length on a connection is up to the caller.
- It has no connection, authentication or query-running logic.
- It registers only the server message types listed above.
  `create_backend_msg` raises `ProtocolError` for any other type, which
  includes row and parameter descriptions, authentication requests and
  command completion.
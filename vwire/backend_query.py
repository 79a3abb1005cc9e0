"""Backend messages produced while a query runs: rows and completion markers."""

from __future__ import annotations

import struct
from collections.abc import Iterator
from dataclasses import dataclass, field

from vwire.base import BackEndMsg, ProtocolError, register_backend
from vwire.buffer import MsgBuffer

_COUNT = struct.Struct(">H")
_SIZE = struct.Struct(">i")
_NULL_SIZE = -1


@dataclass
class ColumnExtractor:
    """Reads the column values of a data row one after another."""

    num_cols: int
    _data: bytes = field(repr=False)
    _pos: int = field(default=0, repr=False)

    def chunk(self) -> bytes | None:
        """Return the raw bytes of the next column, or None for SQL NULL."""
        size_end = self._pos + _SIZE.size
        if size_end > len(self._data):
            raise ProtocolError("data row ends before a column size")
        (size,) = _SIZE.unpack_from(self._data, self._pos)
        self._pos = size_end
        if size == _NULL_SIZE:
            return None
        if size < 0:
            raise ProtocolError(f"invalid column size {size}")
        end = self._pos + size
        if end > len(self._data):
            raise ProtocolError(
                f"column of {size} byte(s) runs past the end of the data row"
            )
        value = self._data[self._pos:end]
        self._pos = end
        return value

    def __iter__(self) -> Iterator[bytes | None]:
        for _ in range(self.num_cols):
            yield self.chunk()


@register_backend("D")
@dataclass
class DataRowMsg(BackEndMsg):
    """One row of a result set, kept as raw bytes until its columns are read."""

    data: bytes = b""

    @classmethod
    def from_body(cls, buf: MsgBuffer) -> DataRowMsg:
        return cls(data=buf.read_bytes(buf.remaining()))

    def columns(self) -> ColumnExtractor:
        """Return an extractor positioned at the first column."""
        if len(self.data) < _COUNT.size:
            raise ProtocolError("data row is too short to hold a column count")
        (num_cols,) = _COUNT.unpack_from(self.data, 0)
        return ColumnExtractor(num_cols=num_cols, _data=self.data[_COUNT.size:])

    def to_bytes(self) -> bytes:
        """Return the message body as plain bytes."""
        return self.data

    def __str__(self) -> str:
        return f"DataRow: {self.columns().num_cols} column(s)"


@register_backend("1")
@dataclass
class ParseCompleteMsg(BackEndMsg):
    """Signals that a Parse command has completed."""

    @classmethod
    def from_body(cls, buf: MsgBuffer) -> ParseCompleteMsg:
        return cls()

    def __str__(self) -> str:
        return "ParseComplete"


@register_backend("I")
@dataclass
class EmptyQueryResponseMsg(BackEndMsg):
    """Sent in place of a command completion when the query string was empty."""

    @classmethod
    def from_body(cls, buf: MsgBuffer) -> BackEndMsg:
        # An empty query is reported to callers the same way as a completed parse.
        return ParseCompleteMsg()

    def __str__(self) -> str:
        return "EmptyQueryResponse"


@register_backend("n")
@dataclass
class NoDataMsg(BackEndMsg):
    """Signals that a described statement returns no rows."""

    @classmethod
    def from_body(cls, buf: MsgBuffer) -> NoDataMsg:
        return cls()

    def __str__(self) -> str:
        return "NoData"


@register_backend("s")
@dataclass
class PortalSuspendedMsg(BackEndMsg):
    """Signals that an Execute stopped because its row limit was reached."""

    transaction_state: int = 0

    @classmethod
    def from_body(cls, buf: MsgBuffer) -> PortalSuspendedMsg:
        return cls()

    def __str__(self) -> str:
        return "PortalSuspended"
"""Big-endian byte buffer used to build and parse protocol message bodies."""

from __future__ import annotations

import struct

_UINT16 = struct.Struct(">H")
_INT16 = struct.Struct(">h")
_UINT32 = struct.Struct(">I")
_INT32 = struct.Struct(">i")
_UINT64 = struct.Struct(">Q")
_INT64 = struct.Struct(">q")

_ENCODING = "utf-8"


class MsgBuffer:
    """A growable byte buffer with a read cursor.

    Values are appended at the end and read from the front. Multi-byte
    integers are big-endian and strings are NUL-terminated.
    """

    def __init__(self, data: bytes = b"") -> None:
        self._data = bytearray(data)
        self._pos = 0

    def __len__(self) -> int:
        return self.remaining()

    def __repr__(self) -> str:
        return f"MsgBuffer({self.getvalue()!r})"

    # ----------------------------------------------------------- writing

    def _pack(self, fmt: struct.Struct, value: int) -> MsgBuffer:
        try:
            self._data += fmt.pack(value)
        except struct.error as exc:
            raise ValueError(f"value {value!r} does not fit: {exc}") from None
        return self

    def append_uint16(self, value: int) -> MsgBuffer:
        """Append an unsigned 16-bit integer."""
        return self._pack(_UINT16, value)

    def append_uint32(self, value: int) -> MsgBuffer:
        """Append an unsigned 32-bit integer."""
        return self._pack(_UINT32, value)

    def append_int32(self, value: int) -> MsgBuffer:
        """Append a signed 32-bit integer."""
        return self._pack(_INT32, value)

    def append_uint64(self, value: int) -> MsgBuffer:
        """Append an unsigned 64-bit integer."""
        return self._pack(_UINT64, value)

    def append_byte(self, value: int) -> MsgBuffer:
        """Append a single byte given as an integer in 0..255."""
        self._data.append(value)
        return self

    def append_bytes(self, data: bytes) -> MsgBuffer:
        """Append raw bytes."""
        self._data += data
        return self

    def append_string(self, value: str) -> MsgBuffer:
        """Append a string followed by a NUL terminator."""
        self._data += value.encode(_ENCODING)
        self._data.append(0)
        return self

    def append_labeled_string(self, label: str, value: str) -> MsgBuffer:
        """Append a label string and then a value string."""
        return self.append_string(label).append_string(value)

    def getvalue(self) -> bytes:
        """Return the bytes that have not yet been read."""
        return bytes(self._data[self._pos:])

    # ----------------------------------------------------------- reading

    def _take(self, count: int) -> bytes:
        end = self._pos + count
        if end > len(self._data):
            raise ValueError(
                f"need {count} byte(s) but only {self.remaining()} remain"
            )
        chunk = bytes(self._data[self._pos:end])
        self._pos = end
        return chunk

    def _unpack(self, fmt: struct.Struct) -> int:
        return fmt.unpack(self._take(fmt.size))[0]

    def read_string(self) -> str:
        """Read a NUL-terminated string, consuming the terminator."""
        end = self._data.find(0, self._pos)
        if end < 0:
            raise ValueError("string is missing its NUL terminator")
        raw = bytes(self._data[self._pos:end])
        self._pos = end + 1
        return raw.decode(_ENCODING, errors="replace")

    def read_tagged_string(self) -> tuple[int, str]:
        """Read a one-byte tag followed by a string.

        Returns ``(0, "")`` when at most one byte is left.
        """
        if self.remaining() <= 1:
            return 0, ""
        tag = self.read_byte()
        return tag, self.read_string()

    def read_int16(self) -> int:
        """Read a signed 16-bit integer."""
        return self._unpack(_INT16)

    def read_uint16(self) -> int:
        """Read an unsigned 16-bit integer."""
        return self._unpack(_UINT16)

    def read_int32(self) -> int:
        """Read a signed 32-bit integer."""
        return self._unpack(_INT32)

    def read_uint32(self) -> int:
        """Read an unsigned 32-bit integer."""
        return self._unpack(_UINT32)

    def read_int64(self) -> int:
        """Read a signed 64-bit integer."""
        return self._unpack(_INT64)

    def read_uint64(self) -> int:
        """Read an unsigned 64-bit integer."""
        return self._unpack(_UINT64)

    def read_byte(self) -> int:
        """Read one byte; an exhausted buffer yields 0."""
        if self._pos >= len(self._data):
            return 0
        value = self._data[self._pos]
        self._pos += 1
        return value

    def read_bool(self) -> bool:
        """Read one byte and report whether it equals 1."""
        return self.read_byte() == 1

    def read_bytes(self, count: int) -> bytes:
        """Read up to ``count`` bytes; fewer are returned if fewer remain."""
        if count < 0:
            raise ValueError("count must not be negative")
        end = min(self._pos + count, len(self._data))
        chunk = bytes(self._data[self._pos:end])
        self._pos = end
        return chunk

    def remaining(self) -> int:
        """Return the number of unread bytes."""
        return len(self._data) - self._pos
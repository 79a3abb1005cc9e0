"""Frontend messages the client sends while a load is in progress."""

from __future__ import annotations

from dataclasses import dataclass, field

from vwire.base import FrontEndMsg
from vwire.buffer import MsgBuffer


@dataclass
class LoadDataMsg(FrontEndMsg):
    """A block of load data; only the first ``used_bytes`` bytes are sent."""

    data: bytes = b""
    used_bytes: int | None = None

    def _used(self) -> int:
        return len(self.data) if self.used_bytes is None else self.used_bytes

    def flatten(self) -> tuple[bytes, int]:
        return bytes(self.data[: self._used()]), ord("d")

    def __str__(self) -> str:
        return f"LoadData: {self._used()} byte(s)"


@dataclass
class LoadDoneMsg(FrontEndMsg):
    """Marks the end of the load data."""

    def flatten(self) -> tuple[bytes, int]:
        return b"", ord("c")

    def __str__(self) -> str:
        return "LoadDone"


@dataclass
class LoadFailMsg(FrontEndMsg):
    """Tells the server that the client could not complete the load."""

    message: str = ""

    def flatten(self) -> tuple[bytes, int]:
        # The message is only reported locally; the wire body is empty.
        return b"", ord("f")

    def __str__(self) -> str:
        return f"LoadFail: {self.message}"


@dataclass
class LoadFilesInfoMsg(FrontEndMsg):
    """Reports the name and size of each file that will be loaded."""

    files: list[tuple[str, int]] = field(default_factory=list)

    def flatten(self) -> tuple[bytes, int]:
        buf = MsgBuffer().append_uint16(len(self.files))
        for name, size in self.files:
            buf.append_string(name).append_uint64(size)
        return buf.getvalue(), ord("F")

    def __str__(self) -> str:
        return f"VerifyLoadFiles: {len(self.files)} file(s) verified"


@dataclass
class ClientErrorMsg(FrontEndMsg):
    """Reports an error that occurred on the client side."""

    file_name: str = ""
    line_number: int = 0
    method: str = ""
    error_msg: str = ""

    def flatten(self) -> tuple[bytes, int]:
        buf = MsgBuffer()
        buf.append_string(self.file_name)
        buf.append_uint32(self.line_number & 0xFFFFFFFF)
        buf.append_string(self.method)
        buf.append_string(self.error_msg)
        return buf.getvalue(), ord("e")

    def __str__(self) -> str:
        return (
            f"Error: {self.method} ({self.file_name}:{self.line_number}): "
            f"{self.error_msg}"
        )
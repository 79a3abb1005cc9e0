"""Backend messages that drive a COPY ... FROM LOCAL / STDIN load."""

from __future__ import annotations

from dataclasses import dataclass, field

from vwire.base import BackEndMsg, ProtocolError, register_backend
from vwire.buffer import MsgBuffer


@register_backend("G")
@dataclass
class InitStdinLoadMsg(BackEndMsg):
    """Tells the client to start streaming load data, and in which format."""

    is_binary: bool = False
    column_formats: list[int] = field(default_factory=list)

    @classmethod
    def from_body(cls, buf: MsgBuffer) -> InitStdinLoadMsg:
        is_binary = buf.read_byte() == 1
        count = buf.read_int16()
        if count < 0:
            raise ProtocolError(f"invalid column format count {count}")
        formats = [buf.read_int16() for _ in range(count)]
        return cls(is_binary=is_binary, column_formats=formats)

    def __str__(self) -> str:
        flag = "true" if self.is_binary else "false"
        return (
            f"InitSTDINLoad: IsBinary={flag}, "
            f"number of columns={len(self.column_formats)}"
        )


@register_backend("H")
@dataclass
class LoadNewFileMsg(BackEndMsg):
    """Asks the client to send the contents of the named file."""

    file_name: str = ""

    @classmethod
    def from_body(cls, buf: MsgBuffer) -> LoadNewFileMsg:
        return cls(file_name=buf.read_string())

    def __str__(self) -> str:
        return f"LoadNewFile: filename '{self.file_name}'"


@register_backend("F")
@dataclass
class VerifyLoadFilesMsg(BackEndMsg):
    """Lists the files of a load that the client has to check."""

    file_list: list[str] = field(default_factory=list)
    rejected_path: str = ""
    exceptions_path: str = ""

    @classmethod
    def from_body(cls, buf: MsgBuffer) -> VerifyLoadFilesMsg:
        count = buf.read_uint16()
        files = [buf.read_string() for _ in range(count)]
        rejected = buf.read_string()
        exceptions = buf.read_string()
        return cls(file_list=files, rejected_path=rejected, exceptions_path=exceptions)

    def __str__(self) -> str:
        return (
            f"VerifyLoadFiles: {len(self.file_list)} file(s), "
            f"rejected='{self.rejected_path}', exceptions='{self.exceptions_path}'"
        )


@register_backend("O")
@dataclass
class WriteFileMsg(BackEndMsg):
    """Asks the client to write data (rejected rows, exceptions) to a file."""

    file_name: str = ""
    data: bytes = b""

    @classmethod
    def from_body(cls, buf: MsgBuffer) -> WriteFileMsg:
        name = buf.read_string()
        size = buf.read_uint32()
        data = buf.read_bytes(size)
        if len(data) != size:
            raise ProtocolError(
                f"file data announces {size} byte(s) but only {len(data)} were sent"
            )
        return cls(file_name=name, data=data)

    def __str__(self) -> str:
        return f"WriteFile: filename '{self.file_name}', data: {len(self.data)} byte(s)"
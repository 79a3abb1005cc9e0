"""Backend messages that report session state, errors and notices."""

from __future__ import annotations

from dataclasses import dataclass, field

from vwire.base import BackEndMsg, register_backend
from vwire.buffer import MsgBuffer

_ERROR_FIELDS = {
    ord("q"): "internal_query",
    ord("S"): "severity",
    ord("M"): "message",
    ord("C"): "sql_state",
    ord("D"): "detail",
    ord("H"): "hint",
    ord("P"): "position",
    ord("W"): "where",
    ord("p"): "internal_position",
    ord("R"): "routine",
    ord("F"): "file",
    ord("L"): "line",
    ord("V"): "error_code",
}


@register_backend("E")
@dataclass
class ErrorMsg(BackEndMsg):
    """An error report sent by the server."""

    internal_query: str = ""
    severity: str = ""
    message: str = ""
    sql_state: str = ""
    detail: str = ""
    hint: str = ""
    position: str = ""
    where: str = ""
    internal_position: str = ""
    routine: str = ""
    file: str = ""
    line: str = ""
    error_code: str = ""

    @classmethod
    def from_body(cls, buf: MsgBuffer) -> ErrorMsg:
        values: dict[str, str] = {}
        while True:
            tag, text = buf.read_tagged_string()
            if tag == 0:
                buf.read_byte()  # trailing terminator of the field list
                break
            name = _ERROR_FIELDS.get(tag)
            if name is not None:
                values[name] = text
        return cls(**values)

    def __str__(self) -> str:
        return (
            f"ErrorResponse: {self.severity} {self.error_code}: "
            f"[{self.sql_state}] {self.message}"
        )


@register_backend("K")
@dataclass
class KeyDataMsg(BackEndMsg):
    """Backend process id and the key needed to cancel its queries."""

    backend_pid: int = 0
    cancel_key: int = 0

    @classmethod
    def from_body(cls, buf: MsgBuffer) -> KeyDataMsg:
        pid = buf.read_uint32()
        key = buf.read_uint32()
        return cls(backend_pid=pid, cancel_key=key)

    def __str__(self) -> str:
        return f"KeyData: BackendPID={self.backend_pid}, CancelKey={self.cancel_key:08X}"


@register_backend("Y")
@dataclass
class LoadBalanceMsg(BackEndMsg):
    """The host and port the client is redirected to."""

    port: int = 0
    host: str = ""

    @classmethod
    def from_body(cls, buf: MsgBuffer) -> LoadBalanceMsg:
        port = buf.read_uint32()
        host = buf.read_string()
        return cls(port=port, host=host)

    def __str__(self) -> str:
        return f"LoadBalanceResponse: host={self.host}, port={self.port}"


@register_backend("N")
@dataclass
class NoticeMsg(BackEndMsg):
    """A list of coded notice fields sent by the server."""

    notices: list[tuple[int, str]] = field(default_factory=list)

    @property
    def codes(self) -> list[int]:
        """The field code of each notice, in order."""
        return [code for code, _ in self.notices]

    @property
    def values(self) -> list[str]:
        """The text of each notice, in order."""
        return [value for _, value in self.notices]

    @classmethod
    def from_body(cls, buf: MsgBuffer) -> NoticeMsg:
        notices: list[tuple[int, str]] = []
        while (code := buf.read_byte()) != 0:
            notices.append((code, buf.read_string()))
        return cls(notices=notices)

    def __str__(self) -> str:
        return f"Notice: ({len(self.notices)}) notice(s)"


@register_backend("S")
@dataclass
class ParamStatusMsg(BackEndMsg):
    """A run-time parameter reported by the server."""

    name: str = ""
    value: str = ""

    @classmethod
    def from_body(cls, buf: MsgBuffer) -> ParamStatusMsg:
        name = buf.read_string()
        value = buf.read_string()
        return cls(name=name, value=value)

    def __str__(self) -> str:
        return f"ParameterStatus: {self.name}='{self.value}'"


@register_backend("Z")
@dataclass
class ReadyForQueryMsg(BackEndMsg):
    """Signals that the server is ready for a new command."""

    transaction_state: int = 0

    @classmethod
    def from_body(cls, buf: MsgBuffer) -> ReadyForQueryMsg:
        return cls(transaction_state=buf.read_byte())

    def __str__(self) -> str:
        return f"ReadyForQuery: TransactionState='{chr(self.transaction_state)}'"
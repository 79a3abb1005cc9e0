"""Frontend messages that open, authenticate, query and close a session."""

from __future__ import annotations

from dataclasses import dataclass, field

from vwire.base import FrontEndMsg
from vwire.buffer import MsgBuffer

CANCEL_REQUEST_CODE = 80877102
LOAD_BALANCE_REQUEST_CODE = 80936960
SSL_REQUEST_CODE = 80877103
STARTUP_PROTOCOL_VERSION = 0x00030005


@dataclass
class CancelMsg(FrontEndMsg):
    """Asks the server to cancel the query running in another backend."""

    pid: int = 0
    key: int = 0

    def flatten(self) -> tuple[bytes, int]:
        buf = MsgBuffer()
        buf.append_uint32(CANCEL_REQUEST_CODE)
        buf.append_uint32(self.pid)
        buf.append_uint32(self.key)
        return buf.getvalue(), 0

    def __str__(self) -> str:
        return f"Cancel: TargetPID={self.pid}, TargetKey={self.key}"


@dataclass
class LoadBalanceRequestMsg(FrontEndMsg):
    """Asks the server which node the client should connect to."""

    def flatten(self) -> tuple[bytes, int]:
        return MsgBuffer().append_uint32(LOAD_BALANCE_REQUEST_CODE).getvalue(), 0

    def __str__(self) -> str:
        return "LoadBalanceRequest"


@dataclass
class PasswordMsg(FrontEndMsg):
    """Carries the password or its hash in reply to an authentication request."""

    password_data: str = field(default="", repr=False)

    def flatten(self) -> tuple[bytes, int]:
        return MsgBuffer().append_string(self.password_data).getvalue(), ord("p")

    def __str__(self) -> str:
        return "Password: *********"


@dataclass
class QueryMsg(FrontEndMsg):
    """A simple-protocol query."""

    query: str = ""

    def flatten(self) -> tuple[bytes, int]:
        return MsgBuffer().append_string(self.query).getvalue(), ord("Q")

    def __str__(self) -> str:
        return f"Query: Query='{self.query}'"


@dataclass
class SslRequestMsg(FrontEndMsg):
    """Asks the server whether it will accept a TLS handshake."""

    def flatten(self) -> tuple[bytes, int]:
        return MsgBuffer().append_uint32(SSL_REQUEST_CODE).getvalue(), 0

    def __str__(self) -> str:
        return "SSL (packet)"


@dataclass
class StartupMsg(FrontEndMsg):
    """The first message of a session, naming the user, database and client."""

    protocol_version: int = 0
    driver_name: str = ""
    driver_version: str = ""
    username: str = ""
    database: str = ""
    session_id: str = ""
    client_pid: int = 0

    def flatten(self) -> tuple[bytes, int]:
        buf = MsgBuffer()
        buf.append_uint32(STARTUP_PROTOCOL_VERSION)

        buf.append_string("protocol_version")
        buf.append_uint32(self.protocol_version)
        buf.append_byte(0)

        if self.username:
            buf.append_labeled_string("user", self.username)
        if self.database:
            buf.append_labeled_string("database", self.database)

        buf.append_labeled_string("client_type", self.driver_name)
        buf.append_labeled_string("client_version", self.driver_version)
        buf.append_labeled_string("client_label", self.session_id)
        buf.append_labeled_string("client_pid", str(self.client_pid))
        buf.append_byte(0)

        return buf.getvalue(), 0

    def __str__(self) -> str:
        return (
            f"Startup (packet): ProtocolVersion:{self.protocol_version:08X}, "
            f"DriverName='{self.driver_name}', DriverVersion='{self.driver_version}', "
            f"UserName='{self.username}', Database='{self.database}', "
            f"SessionID='{self.session_id}', ClientPID={self.client_pid}"
        )


@dataclass
class TerminateMsg(FrontEndMsg):
    """Closes the session."""

    def flatten(self) -> tuple[bytes, int]:
        return b"", ord("X")

    def __str__(self) -> str:
        return "Terminate"
import pytest

from vwire.buffer import MsgBuffer
from vwire.frontend_session import (
    CancelMsg,
    LoadBalanceRequestMsg,
    PasswordMsg,
    QueryMsg,
    SslRequestMsg,
    StartupMsg,
    TerminateMsg,
)


def _startup_fields(body: bytes) -> tuple[int, int, dict[str, str], int]:
    buf = MsgBuffer(body)
    version = buf.read_uint32()
    assert buf.read_string() == "protocol_version"
    requested = buf.read_uint32()
    assert buf.read_byte() == 0
    pairs: dict[str, str] = {}
    while buf.remaining() > 1:
        label = buf.read_string()
        pairs[label] = buf.read_string()
    terminator = buf.read_byte()
    assert buf.remaining() == 0
    return version, requested, pairs, terminator


def test_cancel_flatten_layout():
    body, msg_type = CancelMsg(pid=42, key=7).flatten()
    assert msg_type == 0
    buf = MsgBuffer(body)
    assert buf.read_uint32() == 80877102
    assert buf.read_uint32() == 42
    assert buf.read_uint32() == 7
    assert buf.remaining() == 0


def test_cancel_str():
    assert str(CancelMsg(pid=42, key=7)) == "Cancel: TargetPID=42, TargetKey=7"


def test_cancel_rejects_out_of_range_pid():
    with pytest.raises(ValueError):
        CancelMsg(pid=-1, key=0).flatten()


def test_load_balance_request():
    body, msg_type = LoadBalanceRequestMsg().flatten()
    assert msg_type == 0
    assert MsgBuffer(body).read_uint32() == 80936960
    assert len(body) == 4
    assert str(LoadBalanceRequestMsg()) == "LoadBalanceRequest"


def test_ssl_request():
    body, msg_type = SslRequestMsg().flatten()
    assert msg_type == 0
    assert MsgBuffer(body).read_uint32() == 80877103
    assert len(body) == 4
    assert str(SslRequestMsg()) == "SSL (packet)"


def test_password_round_trip_and_hidden():
    msg = PasswordMsg(password_data="password")
    body, msg_type = msg.flatten()
    assert msg_type == ord("p")
    buf = MsgBuffer(body)
    assert buf.read_string() == "password"
    assert buf.remaining() == 0
    assert "password" not in str(msg)
    assert "password" not in repr(msg)
    assert str(msg) == "Password: *********"


def test_query_round_trip():
    msg = QueryMsg(query="SELECT 1")
    body, msg_type = msg.flatten()
    assert msg_type == ord("Q")
    assert body == b"SELECT 1\x00"
    assert str(msg) == "Query: Query='SELECT 1'"


def test_query_unicode_round_trip():
    body, _ = QueryMsg(query="SELECT 'ünï'").flatten()
    buf = MsgBuffer(body)
    assert buf.read_string() == "SELECT 'ünï'"
    assert buf.remaining() == 0


def test_terminate():
    assert TerminateMsg().flatten() == (b"", ord("X"))
    assert str(TerminateMsg()) == "Terminate"


def test_startup_full_fields():
    msg = StartupMsg(
        protocol_version=0x00030008,
        driver_name="vwire",
        driver_version="1.0",
        username="dbadmin",
        database="analytics",
        session_id="session-1",
        client_pid=4321,
    )
    body, msg_type = msg.flatten()
    assert msg_type == 0
    version, requested, pairs, terminator = _startup_fields(body)
    assert version == 0x00030005
    assert requested == 0x00030008
    assert terminator == 0
    assert pairs == {
        "user": "dbadmin",
        "database": "analytics",
        "client_type": "vwire",
        "client_version": "1.0",
        "client_label": "session-1",
        "client_pid": "4321",
    }
    assert list(pairs) == [
        "user",
        "database",
        "client_type",
        "client_version",
        "client_label",
        "client_pid",
    ]


def test_startup_omits_empty_user_and_database():
    body, _ = StartupMsg(driver_name="vwire", driver_version="1.0", client_pid=5).flatten()
    _, _, pairs, _ = _startup_fields(body)
    assert "user" not in pairs
    assert "database" not in pairs
    assert pairs["client_pid"] == "5"
    assert pairs["client_label"] == ""


def test_startup_str():
    msg = StartupMsg(
        protocol_version=0x00030008,
        driver_name="vwire",
        driver_version="1.0",
        username="dbadmin",
        database="analytics",
        session_id="s1",
        client_pid=12,
    )
    assert str(msg) == (
        "Startup (packet): ProtocolVersion:00030008, DriverName='vwire', "
        "DriverVersion='1.0', UserName='dbadmin', Database='analytics', "
        "SessionID='s1', ClientPID=12"
    )
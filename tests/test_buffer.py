import pytest

from vwire.buffer import MsgBuffer


def test_append_string_is_nul_terminated():
    assert MsgBuffer().append_string("abc").getvalue() == b"abc\x00"


def test_append_uint16_is_big_endian():
    assert MsgBuffer().append_uint16(1).getvalue() == b"\x00\x01"


def test_appends_chain_and_concatenate():
    buf = MsgBuffer().append_byte(ord("S")).append_bytes(b"xy").append_string("")
    assert buf.getvalue() == b"S" + b"xy" + b"\x00"


def test_labeled_string_round_trip():
    buf = MsgBuffer().append_labeled_string("user", "dbadmin")
    reader = MsgBuffer(buf.getvalue())
    assert reader.read_string() == "user"
    assert reader.read_string() == "dbadmin"
    assert reader.remaining() == 0


@pytest.mark.parametrize("value", [0, 1, 80877103, 0xFFFFFFFF])
def test_uint32_round_trip(value):
    buf = MsgBuffer().append_uint32(value)
    assert buf.remaining() == 4
    assert MsgBuffer(buf.getvalue()).read_uint32() == value


@pytest.mark.parametrize("value", [-(2**31), -1, 0, 2**31 - 1])
def test_int32_round_trip(value):
    buf = MsgBuffer().append_int32(value)
    assert MsgBuffer(buf.getvalue()).read_int32() == value


def test_int32_and_uint32_share_bits():
    raw = MsgBuffer().append_int32(-1).getvalue()
    assert MsgBuffer(raw).read_uint32() == 0xFFFFFFFF


@pytest.mark.parametrize("value", [0, 2**63, 2**64 - 1])
def test_uint64_round_trip(value):
    raw = MsgBuffer().append_uint64(value).getvalue()
    assert len(raw) == 8
    assert MsgBuffer(raw).read_uint64() == value


def test_int64_reads_signed_value():
    raw = MsgBuffer().append_uint64(2**64 - 1).getvalue()
    assert MsgBuffer(raw).read_int64() == -1


def test_int16_reads_signed_value():
    raw = MsgBuffer().append_uint16(0xFFFF).getvalue()
    assert MsgBuffer(raw).read_int16() == -1
    assert MsgBuffer(raw).read_uint16() == 0xFFFF


def test_out_of_range_append_raises():
    with pytest.raises(ValueError):
        MsgBuffer().append_uint16(0x10000)
    with pytest.raises(ValueError):
        MsgBuffer().append_uint32(-1)


def test_short_integer_read_raises():
    buf = MsgBuffer(b"\x00\x01")
    with pytest.raises(ValueError):
        buf.read_uint32()


def test_read_string_without_terminator_raises():
    with pytest.raises(ValueError):
        MsgBuffer(b"abc").read_string()


def test_read_tagged_string():
    raw = MsgBuffer().append_byte(ord("M")).append_string("boom").getvalue()
    buf = MsgBuffer(raw)
    assert buf.read_tagged_string() == (ord("M"), "boom")
    assert buf.remaining() == 0


def test_read_tagged_string_on_last_byte_leaves_it():
    buf = MsgBuffer(b"\x00")
    tag, text = buf.read_tagged_string()
    assert (tag, text) == (0, "")
    assert buf.remaining() == 1


def test_read_byte_on_empty_buffer_yields_zero():
    buf = MsgBuffer()
    assert buf.read_byte() == 0
    assert buf.read_bool() is False


def test_read_bool():
    buf = MsgBuffer(b"\x01\x02")
    assert buf.read_bool() is True
    assert buf.read_bool() is False


def test_read_bytes_may_return_fewer():
    buf = MsgBuffer(b"abcd")
    assert buf.read_bytes(2) == b"ab"
    assert buf.read_bytes(10) == b"cd"
    assert buf.remaining() == 0


def test_getvalue_returns_unread_portion():
    buf = MsgBuffer(b"hello")
    buf.read_byte()
    assert buf.getvalue() == b"ello"
    assert len(buf) == buf.remaining() == 4


def test_unicode_string_round_trip():
    raw = MsgBuffer().append_string("naïve").getvalue()
    assert MsgBuffer(raw).read_string() == "naïve"
"""Frontend messages of the extended query protocol: parse, bind, execute and friends."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from vwire.base import CmdTargetType, FrontEndMsg
from vwire.buffer import MsgBuffer

_NULL_LENGTH = 0xFFFFFFFF
_UNSUPPORTED = "??HELP??"
_ENCODING = "utf-8"


def _format_float(value: float) -> str:
    """Format a float with the shortest digits, switching to exponent form
    when the decimal exponent is below -4 or at least 6."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    if value == 0:
        return "-0" if math.copysign(1.0, value) < 0 else "0"

    sign, digit_tuple, exp = Decimal(repr(value)).normalize().as_tuple()
    digits = "".join(str(d) for d in digit_tuple)
    prefix = "-" if sign else ""
    point = len(digits) - 1 + exp  # exponent of the leading digit

    if point < -4 or point >= 6:
        mantissa = digits[0] + (f".{digits[1:]}" if len(digits) > 1 else "")
        exp_sign = "-" if point < 0 else "+"
        return f"{prefix}{mantissa}e{exp_sign}{abs(point):02d}"

    if point >= 0:
        whole = digits[: point + 1].ljust(point + 1, "0")
        frac = digits[point + 1:]
        return prefix + whole + (f".{frac}" if frac else "")
    return f"{prefix}0.{'0' * (-point - 1)}{digits}"


def _format_datetime(value: datetime) -> str:
    """Format as RFC 3339 with up to six fractional digits, trailing zeros dropped."""
    text = value.strftime("%Y-%m-%dT%H:%M:%S")
    if value.microsecond:
        text += "." + f"{value.microsecond:06d}".rstrip("0")
    offset = value.utcoffset()
    if offset is None or offset == timedelta(0):
        return text + "Z"
    total = int(offset.total_seconds())
    sign = "-" if total < 0 else "+"
    hours, rest = divmod(abs(total), 3600)
    return f"{text}{sign}{hours:02d}:{rest // 60:02d}"


def _format_arg(value: object) -> str | None:
    """Return the text form of a bind argument, or None for SQL NULL."""
    if value is None:
        return None
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return _format_float(value)
    if isinstance(value, str):
        return value
    if isinstance(value, datetime):
        return _format_datetime(value)
    return _UNSUPPORTED


def _target_char(target: CmdTargetType | int) -> str:
    return chr(int(target))


@dataclass
class BindMsg(FrontEndMsg):
    """Binds argument values to a prepared statement, creating a portal."""

    portal: str = ""
    statement: str = ""
    args: list[object] = field(default_factory=list)
    oid_types: list[int] | None = None

    def flatten(self) -> tuple[bytes, int]:
        buf = MsgBuffer()
        buf.append_string(self.portal)
        buf.append_string(self.statement)
        buf.append_uint16(0)  # no parameter format codes
        buf.append_uint16(len(self.args))
        for oid in self.oid_types or ():
            buf.append_uint32(oid & 0xFFFFFFFF)
        for arg in self.args:
            text = _format_arg(arg)
            if text is None:
                buf.append_uint32(_NULL_LENGTH)
                continue
            encoded = text.encode(_ENCODING)
            buf.append_uint32(len(encoded))
            buf.append_bytes(encoded)
        buf.append_uint16(0)  # all result columns in default format
        return buf.getvalue(), ord("B")

    def __str__(self) -> str:
        return (
            f"Bind: Portal='{self.portal}', Statement='{self.statement}', "
            f"ArgC={len(self.oid_types or ())}"
        )


@dataclass
class CloseMsg(FrontEndMsg):
    """Closes a prepared statement or a portal."""

    target_type: CmdTargetType = CmdTargetType.STATEMENT
    target_name: str = ""

    def flatten(self) -> tuple[bytes, int]:
        buf = MsgBuffer().append_byte(int(self.target_type)).append_string(self.target_name)
        return buf.getvalue(), ord("C")

    def __str__(self) -> str:
        return (
            f"Close: TargetType={_target_char(self.target_type)}, "
            f"TargetName='{self.target_name}'"
        )


@dataclass
class DescribeMsg(FrontEndMsg):
    """Asks the server to describe a prepared statement or a portal."""

    target_type: CmdTargetType = CmdTargetType.STATEMENT
    target_name: str = ""

    def flatten(self) -> tuple[bytes, int]:
        buf = MsgBuffer().append_byte(int(self.target_type)).append_string(self.target_name)
        return buf.getvalue(), ord("D")

    def __str__(self) -> str:
        return (
            f"Describe: TargetType={_target_char(self.target_type)}, "
            f"TargetName='{self.target_name}'"
        )


@dataclass
class ExecuteMsg(FrontEndMsg):
    """Runs a portal, returning at most ``row_limit`` rows (0 means no limit)."""

    portal: str = ""
    row_limit: int = 0

    def flatten(self) -> tuple[bytes, int]:
        buf = MsgBuffer().append_string(self.portal).append_uint32(self.row_limit)
        return buf.getvalue(), ord("E")

    def __str__(self) -> str:
        return f"Execute: Portal='{self.portal}', RowLimit={self.row_limit}"


@dataclass
class FlushMsg(FrontEndMsg):
    """Asks the server to send any pending output."""

    def flatten(self) -> tuple[bytes, int]:
        return b"", ord("H")

    def __str__(self) -> str:
        return "Flush"


@dataclass
class ParseMsg(FrontEndMsg):
    """Prepares a command under a statement name."""

    prepared_name: str = ""
    command: str = ""
    num_args: int = 0

    def flatten(self) -> tuple[bytes, int]:
        buf = MsgBuffer()
        buf.append_string(self.prepared_name)
        buf.append_string(self.command)
        buf.append_uint16(self.num_args)
        for _ in range(self.num_args):
            buf.append_uint32(0)  # parameter types left to the server
        return buf.getvalue(), ord("P")

    def __str__(self) -> str:
        return (
            f"Parse: PreparedName='{self.prepared_name}', "
            f"Command='{self.command}', NumArgs={self.num_args}"
        )


@dataclass
class SyncMsg(FrontEndMsg):
    """Ends an extended-query cycle."""

    def flatten(self) -> tuple[bytes, int]:
        return b"", ord("S")

    def __str__(self) -> str:
        return "Sync"
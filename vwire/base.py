"""Message base classes and the registry of backend message types."""

from __future__ import annotations

import abc
import enum
from typing import Callable, TypeVar

from vwire.buffer import MsgBuffer


class CmdTargetType(enum.IntEnum):
    """What a Close or Describe command refers to."""

    PORTAL = ord("P")
    STATEMENT = ord("S")


class ProtocolError(ValueError):
    """Raised when a backend message cannot be decoded."""


class FrontEndMsg(abc.ABC):
    """A message sent from the client to the database."""

    @abc.abstractmethod
    def flatten(self) -> tuple[bytes, int]:
        """Return the message body and its type byte (0 if it has none)."""


class BackEndMsg(abc.ABC):
    """A message received from the database."""

    @classmethod
    @abc.abstractmethod
    def from_body(cls, buf: MsgBuffer) -> BackEndMsg:
        """Build a message by reading its body from ``buf``."""


_BackEndT = TypeVar("_BackEndT", bound=type)

_registry: dict[int, type[BackEndMsg]] = {}


def _type_code(msg_type: int | str | bytes) -> int:
    if isinstance(msg_type, int):
        code = msg_type
    elif isinstance(msg_type, (str, bytes)) and len(msg_type) == 1:
        code = ord(msg_type)
    else:
        raise TypeError(f"message type must be a single character, got {msg_type!r}")
    if not 0 <= code <= 0xFF:
        raise ValueError(f"message type {code} is not a byte")
    return code


def register_backend(msg_type: int | str | bytes) -> Callable[[_BackEndT], _BackEndT]:
    """Class decorator registering a backend message class under a type byte."""
    code = _type_code(msg_type)

    def decorator(cls: _BackEndT) -> _BackEndT:
        _registry[code] = cls
        return cls

    return decorator


def lookup_backend(msg_type: int | str | bytes) -> type[BackEndMsg]:
    """Return the class registered for a type byte."""
    code = _type_code(msg_type)
    try:
        return _registry[code]
    except KeyError:
        raise ProtocolError(f"unsupported backend msg type: {chr(code)}") from None
"""Decoding of complete backend messages from their type byte and body."""

from __future__ import annotations

# Imported for their side effect of registering the backend message classes.
from vwire import backend_load, backend_query, backend_session  # noqa: F401
from vwire.base import BackEndMsg, ProtocolError, lookup_backend
from vwire.buffer import MsgBuffer


def _label(msg_type: int | str | bytes) -> str:
    if isinstance(msg_type, int):
        return chr(msg_type)
    if isinstance(msg_type, bytes):
        return msg_type.decode("latin-1")
    return msg_type


def create_backend_msg(msg_type: int | str | bytes, body: bytes) -> BackEndMsg:
    """Decode ``body`` as the backend message registered for ``msg_type``.

    Raises ProtocolError for an unknown type, a malformed body, or a body
    with bytes left over after decoding.
    """
    cls = lookup_backend(msg_type)
    buf = MsgBuffer(body)
    try:
        msg = cls.from_body(buf)
    except ProtocolError:
        raise
    except ValueError as exc:
        raise ProtocolError(
            f"error creating message of type '{_label(msg_type)}': {exc}"
        ) from exc
    left = buf.remaining()
    if left > 0:
        raise ProtocolError(
            f"error creating message of type '{_label(msg_type)}': "
            f"{left} byte(s) remaining"
        )
    return msg
"""Wire messages for a database client: a byte buffer, client message encoders and server message decoders."""

__version__ = "0.1.0"

__all__ = [
    "backend_load",
    "backend_query",
    "backend_session",
    "base",
    "buffer",
    "decode",
    "frontend_extended",
    "frontend_load",
    "frontend_session",
]
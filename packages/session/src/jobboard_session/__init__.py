"""Client-side session lifecycle: token decoding and the session manager."""

from jobboard_session.manager import (
    ANONYMOUS,
    AUTHENTICATED,
    UNINITIALIZED,
    SessionManager,
    SessionState,
)
from jobboard_session.token import TokenDecodeError, decode_token, is_expired

__all__ = [
    "ANONYMOUS",
    "AUTHENTICATED",
    "UNINITIALIZED",
    "SessionManager",
    "SessionState",
    "TokenDecodeError",
    "decode_token",
    "is_expired",
]

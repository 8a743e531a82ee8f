"""Bearer token decoding for the client-side session.

The client reads identity and expiry out of the access token's payload
without checking the signature: the backend verifies every request, so the
client only needs to know who it is and when to stop trying.
"""

from __future__ import annotations

from typing import Any

import jwt as pyjwt
from jobboard_shared.auth_models import SessionIdentity
from pydantic import ValidationError


class TokenDecodeError(ValueError):
    """The token is malformed or lacks the claims a session needs."""


_DECODE_OPTIONS: dict[str, Any] = {
    "verify_signature": False,
    "verify_exp": False,
    "verify_sub": False,
}


def decode_token(token: str) -> SessionIdentity:
    """Decode a bearer token's payload into a SessionIdentity.

    Expiry is not enforced here — an expired token still decodes, and the
    caller decides what an expired session means.

    Raises:
        TokenDecodeError: Malformed token, or `sub`/`role`/`exp` missing or invalid.
    """
    if not isinstance(token, str) or not token:
        raise TokenDecodeError("Token is empty")
    try:
        payload = pyjwt.decode(token, options=_DECODE_OPTIONS)
    except pyjwt.PyJWTError as e:
        raise TokenDecodeError(f"Malformed token: {e}") from e

    missing = [claim for claim in ("sub", "role", "exp") if payload.get(claim) is None]
    if missing:
        raise TokenDecodeError(f"Token is missing required claims: {', '.join(missing)}")

    try:
        return SessionIdentity(
            user_id=int(payload["sub"]),
            role=payload["role"],
            exp=int(payload["exp"]),
        )
    except (TypeError, ValueError, ValidationError) as e:
        raise TokenDecodeError(f"Token claims are invalid: {e}") from e


def is_expired(exp: int, now: float) -> bool:
    """True once `now` has reached the expiry instant."""
    return now >= exp

"""Classified API error and its mapping to user-facing messages.

ApiError is the only exception type that crosses the request pipeline
boundary. Its numeric status carries the whole taxonomy:

    0    transport failure, no response received
    408  client-enforced timeout
    401  unauthenticated or expired session
    403  forbidden
    404  not found
    409  conflict (e.g. duplicate application)
    422  validation failure, message from the backend body
    429  rate limited
    500  server error (and any other status)

handle_api_error() turns any exception into a message fit for display. A 401
additionally erases the persisted session. Outside the session manager, only
this function and the request pipeline (on a 401 response) clear storage.
"""

from __future__ import annotations

import logging
from typing import Any

from jobboard_shared.constants import ERROR_MESSAGES, TOKEN_KEY, USER_KEY
from jobboard_shared.storage import ClientStorage, get_storage

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """A failed API call, classified by HTTP status (0 and 408 are client-side)."""

    def __init__(
        self,
        status: int,
        status_text: str,
        message: str,
        data: Any | None = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.status_text = status_text
        self.message = message
        self.data = data

    def __repr__(self) -> str:
        return f"ApiError(status={self.status}, status_text={self.status_text!r}, message={self.message!r})"


def clear_stored_session(storage: ClientStorage | None = None) -> None:
    """Erase the persisted token and the cached user copy."""
    storage = storage or get_storage()
    storage.remove(TOKEN_KEY)
    storage.remove(USER_KEY)


def handle_api_error(error: BaseException, storage: ClientStorage | None = None) -> str:
    """Map any exception to a human-readable message.

    Args:
        error: Usually an ApiError from the pipeline; anything else gets the
            generic fallback.
        storage: Storage to clear on 401 (defaults to the process singleton).
    """
    if not isinstance(error, ApiError):
        logger.warning(f"Unclassified error reached the error handler: {error!r}")
        return ERROR_MESSAGES["UNKNOWN"]

    status = error.status
    if status == 401:
        clear_stored_session(storage)
        return ERROR_MESSAGES["TOKEN_EXPIRED"]
    if status == 0:
        return ERROR_MESSAGES["NETWORK_ERROR"]
    if status == 408:
        return ERROR_MESSAGES["TIMEOUT"]
    if status == 403:
        return ERROR_MESSAGES["FORBIDDEN"]
    if status == 404:
        return ERROR_MESSAGES["NOT_FOUND"]
    if status == 409:
        return error.message or ERROR_MESSAGES["CONFLICT"]
    if status == 422:
        return error.message or ERROR_MESSAGES["VALIDATION_ERROR"]
    if status == 429:
        return ERROR_MESSAGES["RATE_LIMITED"]
    if status == 500:
        return ERROR_MESSAGES["SERVER_ERROR"]
    return error.message or ERROR_MESSAGES["UNEXPECTED"]

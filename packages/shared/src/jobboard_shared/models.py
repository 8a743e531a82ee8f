"""Pydantic envelope models shared across components.

These are the contract types handed back to callers. Using Pydantic gives us
validation at the boundary — a malformed backend payload fails fast inside
the domain layer rather than surfacing as a half-built object in the UI.
"""

from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ActionResult(BaseModel):
    """Standard result envelope returned by session and mutation operations.

    Every caller-facing operation returns this (or a subclass) so callers have
    a consistent interface for checking success/failure without catching
    exceptions for expected business failures.
    """

    success: bool
    message: str = ""


class ApiResponse(BaseModel, Generic[T]):
    """Normalized backend response.

    The backend wraps payloads inconsistently (bare arrays, `{data: [...]}`,
    `{status, message, data}`); the domain modules fold all of them into this
    one shape so callers never branch on the wire format.
    """

    status: str = "success"
    message: str = ""
    data: T
    has_prev: bool | None = None
    has_next: bool | None = None
    total_pages: int | None = None


class AsyncState(BaseModel, Generic[T]):
    """Loading/data/error triple for read operations."""

    data: T | None = None
    loading: bool = False
    error: str | None = None

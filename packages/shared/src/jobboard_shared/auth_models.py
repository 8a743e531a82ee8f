"""Auth domain models — session identity, users, and auth request payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict

UserRole = Literal["SEEKER", "EMPLOYER", "ADMIN"]


class SessionIdentity(BaseModel):
    """Decoded bearer-token claims: who is logged in, as what, until when.

    Frozen so callers can hold a snapshot without being able to mutate the
    session manager's state.
    """

    model_config = ConfigDict(frozen=True)

    user_id: int
    role: UserRole
    exp: int  # seconds since epoch

    def is_expired(self, now: float) -> bool:
        return now >= self.exp


class User(BaseModel):
    id: int
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    role: UserRole | None = None
    is_email_verified: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None


class AuthResponse(BaseModel):
    """Login response — the token plus the user record when the backend sends one."""

    access_token: str | None = None
    user: User | None = None
    message: str = ""


class LoginCredentials(BaseModel):
    email: str
    password: str


class RegisterData(BaseModel):
    first_name: str
    last_name: str
    email: str
    password: str
    role: UserRole = "SEEKER"


class ForgotPasswordData(BaseModel):
    email: str


class ResetPasswordData(BaseModel):
    token: str
    new_password: str


class MessageResponse(BaseModel):
    """Bare `{message}` acknowledgement returned by most auth endpoints."""

    message: str = ""

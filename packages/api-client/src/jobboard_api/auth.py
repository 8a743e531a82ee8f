"""Auth endpoints.

Every auth call posts a URL-encoded form, not JSON — that's the backend
contract. None of these touch the session; persisting the token is the
session manager's job.
"""

from __future__ import annotations

from typing import Any

from jobboard_shared.auth_models import (
    AuthResponse,
    ForgotPasswordData,
    LoginCredentials,
    MessageResponse,
    RegisterData,
    ResetPasswordData,
)
from jobboard_shared.config import get_api_url

from jobboard_api.normalize import normalize_user
from jobboard_api.pipeline import RequestPipeline

LOGIN_PATH = "/auth/login"
REGISTER_PATH = "/auth/register"
FORGOT_PASSWORD_PATH = "/auth/forget-password"
RESET_PASSWORD_PATH = "/auth/reset-password"
RESEND_VERIFICATION_PATH = "/auth/resend-verification-email"
VERIFY_EMAIL_PATH = "/auth/verify-email"
GOOGLE_SEEKER_PATH = "/auth/google/seeker"
GOOGLE_EMPLOYER_PATH = "/auth/google/employer"


def _message(raw: Any) -> MessageResponse:
    if isinstance(raw, dict):
        return MessageResponse(message=str(raw.get("message") or ""))
    if isinstance(raw, str):
        return MessageResponse(message=raw)
    return MessageResponse()


class AuthApi:
    def __init__(self, pipeline: RequestPipeline) -> None:
        self.pipeline = pipeline

    async def login(self, credentials: LoginCredentials) -> AuthResponse:
        raw = await self.pipeline.post(
            LOGIN_PATH,
            {"email": credentials.email, "password": credentials.password},
            encoding="form",
        )
        if not isinstance(raw, dict):
            return AuthResponse()
        user = raw.get("user")
        return AuthResponse(
            access_token=raw.get("accessToken") or None,
            user=normalize_user(user) if isinstance(user, dict) and "id" in user else None,
            message=str(raw.get("message") or ""),
        )

    async def register(self, data: RegisterData) -> MessageResponse:
        raw = await self.pipeline.post(
            REGISTER_PATH,
            {
                "firstName": data.first_name,
                "lastName": data.last_name,
                "email": data.email,
                "password": data.password,
                "role": data.role,
            },
            encoding="form",
        )
        return _message(raw)

    async def forgot_password(self, data: ForgotPasswordData) -> MessageResponse:
        raw = await self.pipeline.post(FORGOT_PASSWORD_PATH, {"email": data.email}, encoding="form")
        return _message(raw)

    async def reset_password(self, data: ResetPasswordData) -> MessageResponse:
        raw = await self.pipeline.patch(
            RESET_PASSWORD_PATH,
            {"token": data.token, "newPassword": data.new_password},
            encoding="form",
        )
        return _message(raw)

    async def resend_verification_email(self, email: str) -> MessageResponse:
        raw = await self.pipeline.post(RESEND_VERIFICATION_PATH, {"email": email}, encoding="form")
        return _message(raw)

    async def verify_email(self, token: str) -> MessageResponse:
        raw = await self.pipeline.get(VERIFY_EMAIL_PATH, {"token": token})
        return _message(raw)

    # Google OAuth happens in a browser; the client only hands out the entry URLs.

    def google_seeker_url(self) -> str:
        return get_api_url(self.pipeline.config.api_base_url, GOOGLE_SEEKER_PATH)

    def google_employer_url(self) -> str:
        return get_api_url(self.pipeline.config.api_base_url, GOOGLE_EMPLOYER_PATH)

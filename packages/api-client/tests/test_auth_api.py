"""Auth endpoint tests with mocked HTTP.

Every auth call is a URL-encoded form; login maps `accessToken` and the
user record into an AuthResponse.
"""

from urllib.parse import parse_qs

import httpx
import pytest
from jobboard_api.errors import ApiError
from jobboard_shared.auth_models import (
    ForgotPasswordData,
    LoginCredentials,
    RegisterData,
    ResetPasswordData,
)

FORM = "application/x-www-form-urlencoded"


def _form(request: httpx.Request) -> dict[str, list[str]]:
    return parse_qs(request.content.decode())


class TestLogin:
    async def test_login_posts_form(self, make_client):
        client, transport = make_client(
            httpx.Response(
                200,
                json={
                    "accessToken": "a.b.c",
                    "user": {"id": 42, "firstName": "Sara", "email": "s@k.io", "role": "SEEKER"},
                },
            )
        )

        response = await client.auth.login(LoginCredentials(email="s@k.io", password="secret"))

        request = transport.last_request
        assert request.method == "POST"
        assert request.url.path == "/auth/login"
        assert request.headers["content-type"] == FORM
        assert _form(request) == {"email": ["s@k.io"], "password": ["secret"]}
        assert response.access_token == "a.b.c"
        assert response.user.id == 42
        assert response.user.first_name == "Sara"

    async def test_login_without_token(self, make_client):
        client, _ = make_client(httpx.Response(200, json={"message": "ok"}))

        response = await client.auth.login(LoginCredentials(email="s@k.io", password="x"))

        assert response.access_token is None
        assert response.user is None

    async def test_bad_credentials_raise(self, make_client):
        client, _ = make_client(httpx.Response(401, json={"message": "Invalid credentials"}))

        with pytest.raises(ApiError) as exc_info:
            await client.auth.login(LoginCredentials(email="s@k.io", password="wrong"))

        assert exc_info.value.status == 401
        assert exc_info.value.message == "Invalid credentials"


class TestAccountFlows:
    async def test_register(self, make_client):
        client, transport = make_client(httpx.Response(201, json={"message": "Check your email"}))

        response = await client.auth.register(
            RegisterData(
                first_name="Ali", last_name="R", email="a@r.io", password="pw", role="EMPLOYER"
            )
        )

        request = transport.last_request
        assert request.url.path == "/auth/register"
        assert request.headers["content-type"] == FORM
        assert _form(request) == {
            "firstName": ["Ali"],
            "lastName": ["R"],
            "email": ["a@r.io"],
            "password": ["pw"],
            "role": ["EMPLOYER"],
        }
        assert response.message == "Check your email"

    async def test_forgot_password(self, make_client):
        client, transport = make_client(httpx.Response(200, json={"message": "sent"}))

        await client.auth.forgot_password(ForgotPasswordData(email="a@r.io"))

        assert transport.last_request.url.path == "/auth/forget-password"
        assert _form(transport.last_request) == {"email": ["a@r.io"]}

    async def test_reset_password_is_patch(self, make_client):
        client, transport = make_client(httpx.Response(200, json={"message": "reset"}))

        await client.auth.reset_password(ResetPasswordData(token="t0k", new_password="new-pw"))

        request = transport.last_request
        assert request.method == "PATCH"
        assert request.url.path == "/auth/reset-password"
        assert _form(request) == {"token": ["t0k"], "newPassword": ["new-pw"]}

    async def test_resend_verification(self, make_client):
        client, transport = make_client(httpx.Response(200, text="sent"))

        response = await client.auth.resend_verification_email("a@r.io")

        assert transport.last_request.url.path == "/auth/resend-verification-email"
        assert response.message == "sent"

    async def test_verify_email(self, make_client):
        client, transport = make_client(httpx.Response(200, json={"message": "verified"}))

        response = await client.auth.verify_email("abc")

        request = transport.last_request
        assert request.method == "GET"
        assert request.url.path == "/auth/verify-email"
        assert parse_qs(request.url.query.decode()) == {"token": ["abc"]}
        assert response.message == "verified"


class TestGoogleUrls:
    async def test_entry_urls(self, make_client):
        client, transport = make_client()

        assert client.auth.google_seeker_url() == "https://api.jobboard.test/auth/google/seeker"
        assert client.auth.google_employer_url() == "https://api.jobboard.test/auth/google/employer"
        assert transport.requests == []

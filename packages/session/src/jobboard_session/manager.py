"""Session manager — the single owner of "who is logged in, as what, until when".

State machine:

    UNINITIALIZED --initialize()--> ANONYMOUS | AUTHENTICATED
    ANONYMOUS --login success--> AUTHENTICATED
    AUTHENTICATED --logout | expiry detected | any 401--> ANONYMOUS

register(), forgot_password() and resend_verification_email() never move
the state machine.

Only this class writes the persisted token. It also erases it, as do the
pipeline and handle_api_error() on a 401. Every public operation returns a
value instead of raising: network failures come back as
ActionResult(success=False) with a classified message, and a token that
can't be decoded just means "no session".

Expiry is checked on every read of the session and by a watchdog task on a
fixed interval (one minute by default). The watchdog never cancels in-flight
requests — a request started with a valid token is allowed to finish.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import time
from collections.abc import Awaitable, Callable
from typing import Literal

from jobboard_api.client import JobBoardClient
from jobboard_api.errors import ApiError, clear_stored_session, handle_api_error
from jobboard_shared.auth_models import (
    AuthResponse,
    ForgotPasswordData,
    LoginCredentials,
    MessageResponse,
    RegisterData,
    SessionIdentity,
    User,
)
from jobboard_shared.constants import ERROR_MESSAGES, SUCCESS_MESSAGES, TOKEN_KEY, USER_KEY
from jobboard_shared.models import ActionResult
from jobboard_shared.storage import ClientStorage
from pydantic import ValidationError

from jobboard_session.token import TokenDecodeError, decode_token

logger = logging.getLogger(__name__)

SessionState = Literal["UNINITIALIZED", "ANONYMOUS", "AUTHENTICATED"]

UNINITIALIZED: SessionState = "UNINITIALIZED"
ANONYMOUS: SessionState = "ANONYMOUS"
AUTHENTICATED: SessionState = "AUTHENTICATED"


class SessionManager:
    """Owns the authentication state for one client.

    Args:
        client: API client whose pipeline carries the token; the manager
            subscribes to its 401 notifications.
        storage: Durable storage for the token (defaults to the client's).
        clock: Returns the current time in seconds since the epoch.
        check_interval: Seconds between watchdog expiry checks (defaults to
            the client config's session_check_interval).
    """

    def __init__(
        self,
        client: JobBoardClient,
        storage: ClientStorage | None = None,
        *,
        clock: Callable[[], float] = time.time,
        check_interval: float | None = None,
    ) -> None:
        self.client = client
        self._storage = storage
        self._clock = clock
        self.check_interval = check_interval or client.config.session_check_interval
        self._session: SessionIdentity | None = None
        self._state: SessionState = UNINITIALIZED
        self._watchdog: asyncio.Task[None] | None = None
        self.is_loading = False
        client.pipeline.add_unauthorized_listener(self._on_unauthorized)

    @property
    def storage(self) -> ClientStorage:
        return self._storage or self.client.storage

    # ------------------------------------------------------------------
    # Reads (each one re-checks expiry)
    # ------------------------------------------------------------------

    @property
    def state(self) -> SessionState:
        self._check_expiry()
        return self._state

    @property
    def session(self) -> SessionIdentity | None:
        """Read-only snapshot of the current session, or None."""
        self._check_expiry()
        return self._session

    @property
    def is_authenticated(self) -> bool:
        return self.session is not None

    @property
    def user(self) -> User | None:
        """Cached display copy of the logged-in user, when the backend sent one."""
        if not self.is_authenticated:
            return None
        raw = self.storage.get(USER_KEY)
        if not isinstance(raw, dict):
            return None
        try:
            return User.model_validate(raw)
        except ValidationError:
            logger.warning("Cached user record is invalid — ignoring it")
            return None

    def check_token_expiry(self) -> bool:
        """True while the session is present and unexpired."""
        return self.is_authenticated

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def initialize(self) -> SessionState:
        """Restore the session from storage. Never raises."""
        try:
            token = self.storage.get(TOKEN_KEY)
        except Exception:
            logger.exception("Could not read the stored token")
            token = None

        if not token:
            self._set_anonymous()
            return self._state

        try:
            identity = decode_token(token)
        except TokenDecodeError as e:
            logger.warning(f"Discarding stored token: {e}")
            self._teardown()
            return self._state

        if identity.is_expired(self._clock()):
            logger.info(f"Stored session for user {identity.user_id} has expired")
            self._teardown()
            return self._state

        self._session = identity
        self._state = AUTHENTICATED
        logger.info(f"Restored session for user {identity.user_id} ({identity.role})")
        return self._state

    def refresh(self) -> SessionState:
        """Re-read the session from storage."""
        return self.initialize()

    def logout(self) -> None:
        """Erase the stored token and forget the session. Idempotent."""
        was_authenticated = self._session is not None
        self._teardown()
        if was_authenticated:
            logger.info("Logged out")

    def _set_anonymous(self) -> None:
        self._session = None
        self._state = ANONYMOUS

    def _teardown(self) -> None:
        try:
            clear_stored_session(self.storage)
        except OSError:
            logger.exception("Could not erase the stored token")
        self._set_anonymous()

    def _check_expiry(self) -> None:
        if self._session is not None and self._session.is_expired(self._clock()):
            logger.info(f"Session for user {self._session.user_id} expired — logging out")
            self.logout()

    def _on_unauthorized(self, error: ApiError) -> None:
        if self._session is not None:
            logger.info(f"Received 401 ({error.message}) — dropping session")
        self.logout()

    # ------------------------------------------------------------------
    # Network-backed operations
    # ------------------------------------------------------------------

    async def login(self, credentials: LoginCredentials) -> ActionResult:
        self.is_loading = True
        try:
            response: AuthResponse = await self.client.auth.login(credentials)
        except Exception as e:
            return ActionResult(success=False, message=handle_api_error(e, self.storage))
        finally:
            self.is_loading = False

        token = response.access_token
        if not token:
            return ActionResult(success=False, message=ERROR_MESSAGES["NO_ACCESS_TOKEN"])

        try:
            identity = decode_token(token)
        except TokenDecodeError as e:
            logger.warning(f"Login returned an undecodable token: {e}")
            return ActionResult(success=False, message=ERROR_MESSAGES["INVALID_TOKEN"])

        try:
            self.storage.set(TOKEN_KEY, token)
            if response.user is not None:
                self.storage.set(USER_KEY, response.user.model_dump(mode="json"))
            else:
                self.storage.remove(USER_KEY)
        except OSError:
            logger.exception("Could not persist the session token")
            return ActionResult(success=False, message=ERROR_MESSAGES["UNKNOWN"])

        self._session = identity
        self._state = AUTHENTICATED
        logger.info(f"Logged in as user {identity.user_id} ({identity.role})")
        return ActionResult(success=True, message=SUCCESS_MESSAGES["LOGIN"])

    async def _passthrough(
        self, call: Callable[[], Awaitable[MessageResponse]], default_message: str
    ) -> ActionResult:
        self.is_loading = True
        try:
            response = await call()
        except Exception as e:
            return ActionResult(success=False, message=handle_api_error(e, self.storage))
        finally:
            self.is_loading = False
        return ActionResult(success=True, message=response.message or default_message)

    async def register(self, data: RegisterData) -> ActionResult:
        """Create an account. No session — the backend requires email verification first."""
        return await self._passthrough(
            lambda: self.client.auth.register(data), SUCCESS_MESSAGES["REGISTER"]
        )

    async def forgot_password(self, data: ForgotPasswordData) -> ActionResult:
        return await self._passthrough(
            lambda: self.client.auth.forgot_password(data),
            SUCCESS_MESSAGES["PASSWORD_RESET_EMAIL"],
        )

    async def resend_verification_email(self, email: str) -> ActionResult:
        return await self._passthrough(
            lambda: self.client.auth.resend_verification_email(email),
            SUCCESS_MESSAGES["VERIFICATION_EMAIL"],
        )

    # ------------------------------------------------------------------
    # Expiry watchdog
    # ------------------------------------------------------------------

    def start_watchdog(self) -> None:
        """Start the periodic expiry check. Must be called from a running loop."""
        if self._watchdog is not None and not self._watchdog.done():
            return
        self._watchdog = asyncio.get_running_loop().create_task(self._watch())

    async def stop_watchdog(self) -> None:
        task, self._watchdog = self._watchdog, None
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task

    async def _watch(self) -> None:
        while True:
            await asyncio.sleep(self.check_interval)
            self._check_expiry()

    async def close(self) -> None:
        """Stop the watchdog and unsubscribe from 401 notifications."""
        await self.stop_watchdog()
        self.client.pipeline.remove_unauthorized_listener(self._on_unauthorized)

    async def __aenter__(self) -> SessionManager:
        if self._state == UNINITIALIZED:
            self.initialize()
        self.start_watchdog()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

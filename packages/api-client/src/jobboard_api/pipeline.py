"""Typed request pipeline — the single HTTP boundary of the client.

Every network call in the client goes through RequestPipeline.send(). The
pipeline owns the cross-cutting concerns so the domain modules don't have to:

  - Authorization: `Bearer <token>` from durable storage, read per request,
    omitted entirely when no token is stored
  - Body encoding per call: JSON, URL-encoded form, or multipart (the
    content-type header is left to httpx so it can write the boundary)
  - A whole-request timeout (10 s by default), surfaced as ApiError 408
  - Error classification: every failure becomes one ApiError
  - A 401 erases the stored token and notifies unauthorized listeners
  - Single attempt: no retry, no backoff

Success payloads come back as parsed JSON (or raw text for non-JSON bodies).
Reshaping them into ApiResponse happens one layer up in the domain modules,
because each endpoint wraps its payload differently.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, Literal

import httpx
from jobboard_shared.config import ClientConfig, load_config
from jobboard_shared.constants import TOKEN_KEY
from jobboard_shared.storage import ClientStorage, get_storage

from jobboard_api.errors import ApiError, clear_stored_session

logger = logging.getLogger(__name__)

BodyEncoding = Literal["none", "json", "form", "multipart"]

UnauthorizedListener = Callable[[ApiError], None]


@dataclass
class MultipartPart:
    """One part of a multipart body. Parts without a filename are plain fields."""

    name: str
    content: bytes
    filename: str | None = None
    content_type: str | None = None


@dataclass
class RequestDescriptor:
    """Everything needed to issue one request. Consumed once per call."""

    path: str
    method: str = "GET"
    body: Any = None
    encoding: BodyEncoding = "none"
    params: Mapping[str, Any] | None = None


def _form_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def clean_params(params: Mapping[str, Any] | None) -> dict[str, str]:
    """Drop None and empty-string values, stringify the rest."""
    if not params:
        return {}
    return {
        key: _form_value(value)
        for key, value in params.items()
        if value is not None and value != ""
    }


def encode_form(data: Mapping[str, Any] | None) -> dict[str, str]:
    """URL-encoded form fields — None values are left out."""
    if not data:
        return {}
    return {key: _form_value(value) for key, value in data.items() if value is not None}


def _error_message(error_data: Any) -> str:
    """Pull the human-readable message out of a backend error body.

    Validation failures may carry a list of messages; they're joined.
    """
    if not isinstance(error_data, dict):
        return ""
    message = error_data.get("message")
    if isinstance(message, list):
        return "; ".join(str(m) for m in message)
    if message:
        return str(message)
    return ""


class RequestPipeline:
    """Async HTTP client for the job board backend.

    One instance owns one httpx.AsyncClient. Tests inject a transport; the
    storage backend defaults to the process-wide singleton and is resolved
    per request so a freshly written token is always the one sent.
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        storage: ClientStorage | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config or load_config()
        self._storage = storage
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._unauthorized_listeners: list[UnauthorizedListener] = []
        self.request_count: int = 0

    @property
    def storage(self) -> ClientStorage:
        return self._storage or get_storage()

    @property
    def timeout(self) -> float:
        return self.config.request_timeout

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.config.api_base_url,
                transport=self._transport,
                timeout=self.timeout,
            )
        return self._client

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> RequestPipeline:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    # ------------------------------------------------------------------
    # 401 notification
    # ------------------------------------------------------------------

    def add_unauthorized_listener(self, listener: UnauthorizedListener) -> None:
        """Call `listener(error)` whenever any request comes back 401."""
        if listener not in self._unauthorized_listeners:
            self._unauthorized_listeners.append(listener)

    def remove_unauthorized_listener(self, listener: UnauthorizedListener) -> None:
        if listener in self._unauthorized_listeners:
            self._unauthorized_listeners.remove(listener)

    def _expire_session(self) -> None:
        """A 401 anywhere means the stored token is dead."""
        try:
            clear_stored_session(self.storage)
        except OSError:
            logger.exception("Could not erase the stored token after a 401")

    def _notify_unauthorized(self, error: ApiError) -> None:
        for listener in list(self._unauthorized_listeners):
            try:
                listener(error)
            except Exception:
                # A broken listener must not replace the ApiError the caller expects.
                logger.exception("Unauthorized listener failed")

    # ------------------------------------------------------------------
    # Request construction
    # ------------------------------------------------------------------

    def _auth_headers(self) -> dict[str, str]:
        token = self.storage.get(TOKEN_KEY)
        if isinstance(token, str) and token:
            return {"Authorization": f"Bearer {token}"}
        return {}

    @staticmethod
    def _body_kwargs(descriptor: RequestDescriptor) -> dict[str, Any]:
        """Translate the descriptor body into httpx keyword arguments."""
        if descriptor.encoding == "none" or (
            descriptor.body is None and descriptor.encoding != "multipart"
        ):
            return {}
        if descriptor.encoding == "json":
            return {"json": descriptor.body}
        if descriptor.encoding == "form":
            return {"data": encode_form(descriptor.body)}
        if descriptor.encoding == "multipart":
            parts: list[MultipartPart] = list(descriptor.body or [])
            if not parts:
                raise ValueError("Multipart request needs at least one part")
            files: list[tuple[str, tuple[Any, ...]]] = []
            for part in parts:
                if part.content_type:
                    files.append((part.name, (part.filename, part.content, part.content_type)))
                else:
                    files.append((part.name, (part.filename, part.content)))
            return {"files": files}
        raise ValueError(f"Unknown body encoding '{descriptor.encoding}'")

    # ------------------------------------------------------------------
    # Send
    # ------------------------------------------------------------------

    async def send(self, descriptor: RequestDescriptor) -> Any:
        """Execute one request and return the parsed success body.

        Raises:
            ApiError: Non-2xx status, timeout (408), or transport failure (0).
        """
        client = self._get_client()
        request = client.build_request(
            descriptor.method.upper(),
            descriptor.path,
            params=clean_params(descriptor.params) or None,
            headers=self._auth_headers(),
            **self._body_kwargs(descriptor),
        )
        self.request_count += 1
        if self.config.debug:
            logger.debug(f"{request.method} {request.url} ({descriptor.encoding})")

        try:
            response = await asyncio.wait_for(client.send(request), timeout=self.timeout)
        except (asyncio.TimeoutError, httpx.TimeoutException):
            logger.warning(f"{request.method} {descriptor.path} timed out after {self.timeout}s")
            raise ApiError(408, "Request Timeout", "Request timed out") from None
        except httpx.HTTPError as e:
            logger.warning(f"{request.method} {descriptor.path} failed: {e!r}")
            raise ApiError(0, "Network Error", str(e) or type(e).__name__) from e

        return self._handle_response(response)

    def _handle_response(self, response: httpx.Response) -> Any:
        if not response.is_success:
            try:
                error_data = response.json()
            except ValueError:
                error_data = {}
            status_text = response.reason_phrase
            error = ApiError(
                response.status_code,
                status_text,
                _error_message(error_data) or status_text,
                error_data,
            )
            logger.warning(
                f"{response.request.method} {response.request.url.path} → "
                f"{response.status_code} {status_text}: {error.message}"
            )
            if response.status_code == 401:
                self._expire_session()
                self._notify_unauthorized(error)
            raise error

        if not response.content:
            return None

        content_type = response.headers.get("content-type", "")
        if "application/json" in content_type:
            try:
                return response.json()
            except ValueError:
                raise ApiError(
                    response.status_code,
                    response.reason_phrase,
                    "Malformed JSON in response body",
                    response.text,
                ) from None
        return response.text

    # ------------------------------------------------------------------
    # Convenience wrappers
    # ------------------------------------------------------------------

    async def get(self, path: str, params: Mapping[str, Any] | None = None) -> Any:
        return await self.send(RequestDescriptor(path=path, method="GET", params=params))

    async def post(self, path: str, data: Any = None, encoding: BodyEncoding = "json") -> Any:
        return await self.send(
            RequestDescriptor(path=path, method="POST", body=data, encoding=encoding)
        )

    async def put(self, path: str, data: Any = None) -> Any:
        return await self.send(RequestDescriptor(path=path, method="PUT", body=data, encoding="json"))

    async def patch(self, path: str, data: Any = None, encoding: BodyEncoding = "json") -> Any:
        return await self.send(
            RequestDescriptor(path=path, method="PATCH", body=data, encoding=encoding)
        )

    async def delete(self, path: str) -> Any:
        return await self.send(RequestDescriptor(path=path, method="DELETE"))

"""Shared test fixtures for every package.

Provides:
  - Mock HTTP transport for httpx (intercepts and records all requests)
  - An isolated in-memory storage singleton per test
  - A client factory wired to the mock transport
  - A JWT factory minting tokens with backend-shaped claims
"""

from __future__ import annotations

import asyncio
import time
from typing import Any

import httpx
import jwt as pyjwt
import pytest
from jobboard_api.client import JobBoardClient
from jobboard_shared.config import ClientConfig
from jobboard_shared.storage import MemoryStorage, reset_storage, set_storage

BASE_URL = "https://api.jobboard.test"
SECRET = "test-only-signing-secret-not-checked-by-the-client"


class MockTransport(httpx.AsyncBaseTransport):
    """Mock HTTP transport that returns preconfigured responses.

    Usage:
        transport = MockTransport(responses=[
            httpx.Response(200, json={"data": [...]}),
        ])

    Each call pops the next entry. An exception entry is raised instead of
    answered (simulates a transport failure). `delay` holds every response
    back, for timeout tests. If the list is exhausted, returns a 500 error.
    """

    def __init__(
        self,
        responses: list[httpx.Response | Exception] | None = None,
        delay: float = 0.0,
    ) -> None:
        self.responses = list(responses or [])
        self.requests: list[httpx.Request] = []
        self.delay = delay

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        await request.aread()
        self.requests.append(request)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.responses:
            response = self.responses.pop(0)
            if isinstance(response, Exception):
                raise response
            response.stream = httpx.ByteStream(response.content)
            return response
        return httpx.Response(500, json={"message": "No more mock responses"})

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture(autouse=True)
def storage() -> MemoryStorage:
    """Fresh in-memory storage installed as the process singleton."""
    backend = MemoryStorage()
    set_storage(backend)
    yield backend
    reset_storage()


@pytest.fixture
def config() -> ClientConfig:
    return ClientConfig(
        api_base_url=BASE_URL,
        request_timeout=10.0,
        storage_path="",
        session_check_interval=60.0,
    )


@pytest.fixture
async def make_client(config, storage):
    """Factory: make_client(*responses, delay=0.0) -> (client, transport)."""
    clients: list[JobBoardClient] = []

    def _make(
        *responses: httpx.Response | Exception,
        delay: float = 0.0,
        client_config: ClientConfig | None = None,
    ) -> tuple[JobBoardClient, MockTransport]:
        transport = MockTransport(list(responses), delay=delay)
        client = JobBoardClient(config=client_config or config, storage=storage, transport=transport)
        clients.append(client)
        return client, transport

    yield _make
    for client in clients:
        await client.close()


@pytest.fixture
def make_token():
    """Factory: make_token(sub="42", role="SEEKER", exp=None, **extra) -> signed JWT."""

    def _make(
        sub: str = "42",
        role: str | None = "SEEKER",
        exp: int | None = None,
        **extra: Any,
    ) -> str:
        payload: dict[str, Any] = {
            "sub": sub,
            "exp": exp if exp is not None else int(time.time()) + 3600,
            **extra,
        }
        if role is not None:
            payload["role"] = role
        return pyjwt.encode(payload, SECRET, algorithm="HS256")

    return _make

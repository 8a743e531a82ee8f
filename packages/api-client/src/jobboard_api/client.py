"""Combined API client — one pipeline shared by the auth, jobs, and applications modules.

Usage:
    async with JobBoardClient() as api:
        jobs = await api.jobs.get_all(JobFilters(status="ACTIVE"))
"""

from __future__ import annotations

import httpx
from jobboard_shared.config import ClientConfig
from jobboard_shared.storage import ClientStorage

from jobboard_api.applications import ApplicationsApi
from jobboard_api.auth import AuthApi
from jobboard_api.jobs import JobsApi
from jobboard_api.pipeline import RequestPipeline


class JobBoardClient:
    def __init__(
        self,
        config: ClientConfig | None = None,
        storage: ClientStorage | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        pipeline: RequestPipeline | None = None,
    ) -> None:
        self.pipeline = pipeline or RequestPipeline(config, storage, transport)
        self.auth = AuthApi(self.pipeline)
        self.jobs = JobsApi(self.pipeline)
        self.applications = ApplicationsApi(self.pipeline)

    @property
    def config(self) -> ClientConfig:
        return self.pipeline.config

    @property
    def storage(self) -> ClientStorage:
        return self.pipeline.storage

    async def close(self) -> None:
        await self.pipeline.close()

    async def __aenter__(self) -> JobBoardClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

"""Caller-facing actions over the domain API.

The domain modules raise ApiError; the layer that talks to end users must not.
Every action here catches, classifies via handle_api_error(), and hands back
either an AsyncState (reads) or an ActionResult subclass (mutations), so no
raw exception ever reaches a display.

Expected failures → result objects with a message. The loading flag is true
while an action awaits the network.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from jobboard_shared.constants import ERROR_MESSAGES, SUCCESS_MESSAGES
from jobboard_shared.job_models import (
    Application,
    ApplicationActionResult,
    ApplicationStatus,
    ApplicationStatusCheck,
    CreateApplicationData,
    CreateJobData,
    Job,
    JobActionResult,
    JobFilters,
    JobStatus,
    PageFilters,
    UpdateApplicationData,
    UpdateJobData,
)
from jobboard_shared.models import ActionResult, AsyncState

from jobboard_api.client import JobBoardClient
from jobboard_api.errors import ApiError, handle_api_error

logger = logging.getLogger(__name__)

T = TypeVar("T")


class _Actions:
    def __init__(self, client: JobBoardClient) -> None:
        self.client = client
        self.loading = False

    def _message_for(self, error: Exception) -> str:
        return handle_api_error(error, self.client.storage)

    async def _load(self, fetch: Callable[[], Awaitable[T]]) -> AsyncState[T]:
        self.loading = True
        try:
            return AsyncState(data=await fetch(), loading=False, error=None)
        except Exception as e:
            return AsyncState(data=None, loading=False, error=self._message_for(e))
        finally:
            self.loading = False

    async def _mutate(
        self,
        run: Callable[[], Awaitable[Any]],
        success_message: str,
        result_type: type[ActionResult],
        payload_field: str | None = None,
    ) -> Any:
        self.loading = True
        try:
            payload = await run()
        except Exception as e:
            return result_type(success=False, message=self._message_for(e))
        finally:
            self.loading = False
        if payload_field is None:
            return result_type(success=True, message=success_message)
        return result_type(success=True, message=success_message, **{payload_field: payload})


class JobActions(_Actions):
    """Job reads for every role, plus employer CRUD and admin moderation."""

    async def fetch_jobs(self, filters: JobFilters | None = None) -> AsyncState[list[Job]]:
        async def fetch() -> list[Job]:
            return (await self.client.jobs.get_all(filters)).data or []

        return await self._load(fetch)

    async def fetch_job(self, job_id: int) -> AsyncState[Job]:
        async def fetch() -> Job | None:
            return (await self.client.jobs.get_by_id(job_id)).data

        return await self._load(fetch)

    async def fetch_user_jobs(self) -> AsyncState[list[Job]]:
        async def fetch() -> list[Job]:
            return (await self.client.jobs.get_user_jobs()).data or []

        return await self._load(fetch)

    async def fetch_admin_jobs(self, filters: JobFilters | None = None) -> AsyncState[list[Job]]:
        async def fetch() -> list[Job]:
            return (await self.client.jobs.get_all_admin(filters)).data or []

        return await self._load(fetch)

    async def create_job(self, data: CreateJobData) -> JobActionResult:
        async def run() -> Job | None:
            return (await self.client.jobs.create(data)).data

        return await self._mutate(run, SUCCESS_MESSAGES["JOB_CREATED"], JobActionResult, "job")

    async def update_job(self, job_id: int, data: UpdateJobData) -> JobActionResult:
        async def run() -> Job | None:
            return (await self.client.jobs.update(job_id, data)).data

        return await self._mutate(run, SUCCESS_MESSAGES["JOB_UPDATED"], JobActionResult, "job")

    async def delete_job(self, job_id: int) -> ActionResult:
        return await self._mutate(
            lambda: self.client.jobs.delete(job_id),
            SUCCESS_MESSAGES["JOB_DELETED"],
            ActionResult,
        )

    async def update_job_status(self, job_id: int, status: JobStatus) -> JobActionResult:
        async def run() -> Job | None:
            return (await self.client.jobs.update_admin(job_id, status)).data

        return await self._mutate(
            run, SUCCESS_MESSAGES["JOB_STATUS_UPDATED"], JobActionResult, "job"
        )


class ApplicationActions(_Actions):
    """Application reads and mutations for seekers, employers, and admins."""

    async def fetch_all_applications(self) -> AsyncState[list[Application]]:
        return await self._load(self.client.applications.get_all)

    async def fetch_job_applications(self, job_id: int) -> AsyncState[list[Application]]:
        async def fetch() -> list[Application]:
            return (await self.client.applications.get_for_job(job_id)).data or []

        return await self._load(fetch)

    async def fetch_application(self, application_id: int) -> AsyncState[Application]:
        async def fetch() -> Application | None:
            return (await self.client.applications.get_by_id(application_id)).data

        return await self._load(fetch)

    async def fetch_user_applications(self) -> AsyncState[list[Application]]:
        async def fetch() -> list[Application]:
            return (await self.client.applications.get_user_applications()).data or []

        return await self._load(fetch)

    async def fetch_employer_applications(
        self, filters: PageFilters | None = None
    ) -> AsyncState[list[Application]]:
        async def fetch() -> list[Application]:
            return (await self.client.applications.get_employer_applications(filters)).data or []

        return await self._load(fetch)

    async def create_application(
        self, job_id: int, data: CreateApplicationData
    ) -> ApplicationActionResult:
        self.loading = True
        try:
            response = await self.client.applications.create(job_id, data)
        except ApiError as e:
            if e.status == 409:
                return ApplicationActionResult(
                    success=False, message=ERROR_MESSAGES["ALREADY_APPLIED"]
                )
            return ApplicationActionResult(success=False, message=self._message_for(e))
        except Exception as e:
            return ApplicationActionResult(success=False, message=self._message_for(e))
        finally:
            self.loading = False
        return ApplicationActionResult(
            success=True,
            message=SUCCESS_MESSAGES["APPLICATION_SUBMITTED"],
            application=response.data,
        )

    async def update_application(
        self, application_id: int, data: UpdateApplicationData
    ) -> ApplicationActionResult:
        async def run() -> Application | None:
            return (await self.client.applications.update(application_id, data)).data

        return await self._mutate(
            run, SUCCESS_MESSAGES["APPLICATION_UPDATED"], ApplicationActionResult, "application"
        )

    async def update_application_status(
        self, application_id: int, status: ApplicationStatus
    ) -> ApplicationActionResult:
        return await self.update_application(application_id, UpdateApplicationData(status=status))

    async def has_applied(self, job_id: int) -> ApplicationStatusCheck:
        """Check the seeker's own applications for one targeting `job_id`.

        A failed lookup reads as "not applied" — the backend still rejects a
        duplicate with 409 on submit.
        """
        try:
            response = await self.client.applications.get_user_applications()
        except Exception as e:
            logger.warning(f"Could not check application status for job {job_id}: {e!r}")
            return ApplicationStatusCheck()
        for application in response.data or []:
            if application.job_id == job_id:
                return ApplicationStatusCheck(has_applied=True, application_id=application.id)
        return ApplicationStatusCheck()

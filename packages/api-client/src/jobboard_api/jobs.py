"""Jobs endpoints — public listing, employer CRUD, and admin moderation.

Reads return ApiResponse of normalized Job models. Create/update send JSON
with the location nested under `location`; the admin status change is a
URL-encoded form (`status=ACTIVE`), which the backend requires.
"""

from __future__ import annotations

from typing import Any

from jobboard_shared.auth_models import MessageResponse
from jobboard_shared.job_models import (
    CreateJobData,
    Job,
    JobFilters,
    JobStatus,
    UpdateJobData,
)
from jobboard_shared.models import ApiResponse

from jobboard_api.normalize import (
    normalize_item_response,
    normalize_job,
    normalize_list_response,
)
from jobboard_api.pipeline import RequestPipeline

JOBS_PATH = "/jobs"
MY_JOBS_PATH = "/jobs/my-jobs"
ADMIN_JOBS_PATH = "/admin/jobs"


def job_path(job_id: int) -> str:
    return f"{JOBS_PATH}/{job_id}"


def admin_job_path(job_id: int) -> str:
    return f"{ADMIN_JOBS_PATH}/{job_id}"


def filter_params(filters: JobFilters | None) -> dict[str, Any] | None:
    """Query parameters in the backend's spelling."""
    if filters is None:
        return None
    return {
        "status": filters.status,
        "search": filters.search,
        "page": filters.page,
        "limit": filters.limit,
        "employerId": filters.employer_id,
    }


def _location_body(city: str | None, street: str | None, alley: str | None) -> dict[str, str] | None:
    """Nested location object, only when at least one part was given."""
    location = {
        key: value
        for key, value in (("city", city), ("street", street), ("alley", alley))
        if value
    }
    return location or None


def create_job_body(data: CreateJobData) -> dict[str, Any]:
    body: dict[str, Any] = {"title": data.title, "description": data.description}
    if data.salary is not None:
        body["salary"] = data.salary
    location = _location_body(data.city, data.street, data.alley)
    if location:
        body["location"] = location
    return body


def update_job_body(data: UpdateJobData) -> dict[str, Any]:
    """Only the fields the caller actually set; empty strings are not updates."""
    body: dict[str, Any] = {}
    if data.title:
        body["title"] = data.title
    if data.description:
        body["description"] = data.description
    if data.salary is not None:
        body["salary"] = data.salary
    if data.status:
        body["status"] = data.status
    location = _location_body(data.city, data.street, data.alley)
    if location:
        body["location"] = location
    return body


class JobsApi:
    def __init__(self, pipeline: RequestPipeline) -> None:
        self.pipeline = pipeline

    async def get_all(self, filters: JobFilters | None = None) -> ApiResponse[list[Job]]:
        raw = await self.pipeline.get(JOBS_PATH, filter_params(filters))
        return normalize_list_response(raw, normalize_job)

    async def get_by_id(self, job_id: int) -> ApiResponse[Job | None]:
        raw = await self.pipeline.get(job_path(job_id))
        return normalize_item_response(raw, normalize_job)

    async def get_user_jobs(self) -> ApiResponse[list[Job]]:
        raw = await self.pipeline.get(MY_JOBS_PATH)
        return normalize_list_response(raw, normalize_job)

    async def create(self, data: CreateJobData) -> ApiResponse[Job | None]:
        raw = await self.pipeline.post(JOBS_PATH, create_job_body(data), encoding="json")
        return normalize_item_response(raw, normalize_job)

    async def update(self, job_id: int, data: UpdateJobData) -> ApiResponse[Job | None]:
        raw = await self.pipeline.patch(job_path(job_id), update_job_body(data), encoding="json")
        return normalize_item_response(raw, normalize_job)

    async def delete(self, job_id: int) -> MessageResponse:
        raw = await self.pipeline.delete(job_path(job_id))
        if isinstance(raw, dict):
            return MessageResponse(message=str(raw.get("message") or ""))
        return MessageResponse()

    # Admin endpoints

    async def get_all_admin(self, filters: JobFilters | None = None) -> ApiResponse[list[Job]]:
        raw = await self.pipeline.get(ADMIN_JOBS_PATH, filter_params(filters))
        return normalize_list_response(raw, normalize_job)

    async def update_admin(self, job_id: int, status: JobStatus) -> ApiResponse[Job | None]:
        raw = await self.pipeline.patch(admin_job_path(job_id), {"status": status}, encoding="form")
        return normalize_item_response(raw, normalize_job)

"""Applications endpoints.

Two backend quirks are handled here:
  - GET /applications sometimes answers with a bare array and sometimes with a
    wrapped object; get_all() always returns a plain list.
  - Creating an application is always a multipart upload, with or without a
    resume, and status updates are URL-encoded forms.
"""

from __future__ import annotations

from jobboard_shared.job_models import (
    Application,
    CreateApplicationData,
    PageFilters,
    UpdateApplicationData,
)
from jobboard_shared.models import ApiResponse

from jobboard_api.normalize import (
    normalize_application,
    normalize_item_response,
    normalize_list_response,
    unwrap_list,
)
from jobboard_api.pipeline import MultipartPart, RequestDescriptor, RequestPipeline

APPLICATIONS_PATH = "/applications"
MY_APPLICATIONS_PATH = "/applications/my-applications"
EMPLOYER_APPLICATIONS_PATH = "/applications/employer"


def application_path(application_id: int) -> str:
    return f"{APPLICATIONS_PATH}/{application_id}"


def job_applications_path(job_id: int) -> str:
    return f"{APPLICATIONS_PATH}/jobs/{job_id}"


def application_parts(data: CreateApplicationData) -> list[MultipartPart]:
    """Multipart parts: `description` always, `resume` iff a file was supplied."""
    parts = [MultipartPart(name="description", content=data.description.encode("utf-8"))]
    if data.resume is not None:
        parts.append(
            MultipartPart(
                name="resume",
                content=data.resume.content,
                filename=data.resume.filename,
                content_type=data.resume.content_type,
            )
        )
    return parts


class ApplicationsApi:
    def __init__(self, pipeline: RequestPipeline) -> None:
        self.pipeline = pipeline

    async def get_all(self) -> list[Application]:
        """Every application (admin only), as a bare list whatever the wire shape."""
        raw = await self.pipeline.get(APPLICATIONS_PATH)
        return [normalize_application(item) for item in unwrap_list(raw)]

    async def get_for_job(self, job_id: int) -> ApiResponse[list[Application]]:
        raw = await self.pipeline.get(job_applications_path(job_id))
        return normalize_list_response(raw, normalize_application)

    async def get_by_id(self, application_id: int) -> ApiResponse[Application | None]:
        raw = await self.pipeline.get(application_path(application_id))
        return normalize_item_response(raw, normalize_application)

    async def get_user_applications(self) -> ApiResponse[list[Application]]:
        raw = await self.pipeline.get(MY_APPLICATIONS_PATH)
        return normalize_list_response(raw, normalize_application)

    async def get_employer_applications(
        self, filters: PageFilters | None = None
    ) -> ApiResponse[list[Application]]:
        params = {"page": filters.page, "limit": filters.limit} if filters else None
        raw = await self.pipeline.get(EMPLOYER_APPLICATIONS_PATH, params)
        response = normalize_list_response(raw, normalize_application)
        # This endpoint nests pagination; absent flags mean "no more pages".
        return response.model_copy(
            update={
                "has_prev": bool(response.has_prev),
                "has_next": bool(response.has_next),
                "total_pages": response.total_pages or 0,
            }
        )

    async def create(
        self, job_id: int, data: CreateApplicationData
    ) -> ApiResponse[Application | None]:
        raw = await self.pipeline.send(
            RequestDescriptor(
                path=job_applications_path(job_id),
                method="POST",
                body=application_parts(data),
                encoding="multipart",
            )
        )
        return normalize_item_response(raw, normalize_application)

    async def update(
        self, application_id: int, data: UpdateApplicationData
    ) -> ApiResponse[Application | None]:
        raw = await self.pipeline.patch(
            application_path(application_id), {"status": data.status}, encoding="form"
        )
        return normalize_item_response(raw, normalize_application)

"""Jobs and applications boundary models.

Design choices:
  - Field names are snake_case; the camelCase wire names live only in the
    normalization functions of the api-client package.
  - Optional backend fields (salary, location, resume) are None when absent,
    never empty strings or empty objects.
  - `employer_id` is the single canonical owner field whatever the backend
    called it.
  - Result envelopes extend ActionResult for consistent success/failure
    handling.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel

from jobboard_shared.models import ActionResult

JobStatus = Literal["PENDING", "ACTIVE", "INACTIVE"]
ApplicationStatus = Literal["PENDING", "ACCEPTED", "REJECTED"]

# ============================================================================
# Domain objects
# ============================================================================


class JobLocation(BaseModel):
    city: str | None = None
    street: str | None = None
    alley: str | None = None


class Job(BaseModel):
    """A job posting as callers see it, after normalization."""

    id: int
    title: str = ""
    description: str = ""
    salary: float | None = None
    status: JobStatus = "PENDING"
    job_location: JobLocation | None = None
    employer_id: int | None = None
    employer_name: str = "Unknown Employer"
    created_at: datetime
    updated_at: datetime
    application_count: int | None = None  # from _count.applications


class Application(BaseModel):
    """A job application, after normalization."""

    id: int
    description: str = ""
    status: ApplicationStatus = "PENDING"
    resume_path: str | None = None
    original_file_name: str | None = None
    job_id: int | None = None
    applicant_id: int | None = None
    applicant_name: str | None = None
    applicant_email: str | None = None
    job_title: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    job: Job | None = None


# ============================================================================
# Request payloads
# ============================================================================


class CreateJobData(BaseModel):
    title: str
    description: str
    salary: float | None = None
    city: str | None = None
    street: str | None = None
    alley: str | None = None


class UpdateJobData(BaseModel):
    title: str | None = None
    description: str | None = None
    salary: float | None = None
    status: JobStatus | None = None
    city: str | None = None
    street: str | None = None
    alley: str | None = None


class JobFilters(BaseModel):
    status: JobStatus | None = None
    search: str | None = None
    page: int | None = None
    limit: int | None = None
    employer_id: int | None = None


class PageFilters(BaseModel):
    page: int | None = None
    limit: int | None = None


class ResumeFile(BaseModel):
    """Binary resume handed over by the file-picker collaborator."""

    filename: str
    content: bytes
    content_type: str | None = None


class CreateApplicationData(BaseModel):
    description: str
    resume: ResumeFile | None = None


class UpdateApplicationData(BaseModel):
    status: ApplicationStatus


# ============================================================================
# Result envelopes
# ============================================================================


class JobActionResult(ActionResult):
    """Result of a job mutation."""

    job: Job | None = None


class ApplicationActionResult(ActionResult):
    """Result of an application mutation."""

    application: Application | None = None


class ApplicationStatusCheck(BaseModel):
    """Whether the current seeker already applied to a job."""

    has_applied: bool = False
    application_id: int | None = None

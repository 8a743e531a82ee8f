"""Backend payload normalization.

The backend is inconsistent about how it wraps payloads and names fields.
Everything that knows about that lives here:

  - Wrapping: a bare array, `{data: [...]}`, and `{status, message, data}` all
    fold into one ApiResponse.
  - Pagination flags sit either at the top level or under `pagination`.
  - A job's owner id arrives as `employerId` or `userId`; callers always get
    `employer_id`.
  - Missing salary/location become None, never empty strings.
  - Missing job timestamps fall back to "now" (display-only).

Normalizers build new models from the raw dicts; they never mutate the
backend objects they're handed.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any, TypeVar

from jobboard_shared.auth_models import User
from jobboard_shared.constants import UNKNOWN_EMPLOYER
from jobboard_shared.job_models import Application, Job, JobLocation
from jobboard_shared.models import ApiResponse

T = TypeVar("T")


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _first_present(raw: dict[str, Any], *keys: str) -> Any:
    """Value of the first key that is present and not None."""
    for key in keys:
        value = raw.get(key)
        if value is not None:
            return value
    return None


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


def normalize_location(raw: Any) -> JobLocation | None:
    """A location object, or None when the backend sent nothing usable."""
    if not isinstance(raw, dict):
        return None
    fields = {key: _blank_to_none(raw.get(key)) for key in ("city", "street", "alley")}
    if all(value is None for value in fields.values()):
        return None
    return JobLocation(**fields)


def normalize_job(raw: dict[str, Any]) -> Job:
    """Map a backend job to a Job model."""
    count = raw.get("_count")
    return Job(
        id=raw["id"],
        title=raw.get("title") or "",
        description=raw.get("description") or "",
        salary=_blank_to_none(raw.get("salary")),
        status=raw.get("status") or "PENDING",
        job_location=normalize_location(raw.get("jobLocation") or raw.get("location")),
        employer_id=_first_present(raw, "employerId", "userId"),
        employer_name=raw.get("employerName") or UNKNOWN_EMPLOYER,
        created_at=raw.get("createdAt") or _now(),
        updated_at=raw.get("updatedAt") or _now(),
        application_count=count.get("applications") if isinstance(count, dict) else None,
    )


def normalize_application(raw: dict[str, Any]) -> Application:
    """Map a backend application to an Application model."""
    user = raw.get("user") if isinstance(raw.get("user"), dict) else {}
    job = raw.get("job") if isinstance(raw.get("job"), dict) else None
    applicant_name = raw.get("applicantName")
    if applicant_name is None and user:
        applicant_name = " ".join(
            part for part in (user.get("firstName"), user.get("lastName")) if part
        ) or None
    return Application(
        id=raw["id"],
        description=raw.get("description") or "",
        status=raw.get("status") or "PENDING",
        resume_path=_blank_to_none(raw.get("resumePath")),
        original_file_name=_blank_to_none(raw.get("originalFileName")),
        job_id=_first_present(raw, "jobId") or (job or {}).get("id"),
        applicant_id=_first_present(raw, "applicantId", "userId") or user.get("id"),
        applicant_name=applicant_name,
        applicant_email=raw.get("applicantEmail") or user.get("email"),
        job_title=raw.get("jobTitle") or (job or {}).get("title"),
        created_at=raw.get("createdAt"),
        updated_at=raw.get("updatedAt"),
        job=normalize_job(job) if job and "id" in job else None,
    )


def normalize_user(raw: dict[str, Any]) -> User:
    return User(
        id=raw["id"],
        first_name=raw.get("firstName") or "",
        last_name=raw.get("lastName") or "",
        email=raw.get("email") or "",
        role=raw.get("role"),
        is_email_verified=bool(raw.get("isEmailVerified", False)),
        created_at=raw.get("createdAt"),
        updated_at=raw.get("updatedAt"),
    )


def unwrap_list(raw: Any) -> list[Any]:
    """Bare array or `{data: [...]}` → the array. Anything else → []."""
    if isinstance(raw, list):
        return raw
    if isinstance(raw, dict) and isinstance(raw.get("data"), list):
        return raw["data"]
    return []


def _unwrap_item(raw: Any) -> Any:
    """`{data: {...}}` / `{status, message, data}` → the inner object; a bare object → itself."""
    if isinstance(raw, dict) and "data" in raw:
        return raw["data"]
    return raw


def _pagination(raw: Any) -> dict[str, Any]:
    if not isinstance(raw, dict):
        return {}
    nested = raw.get("pagination")
    source = nested if isinstance(nested, dict) else raw
    return {
        "has_prev": source.get("hasPrev"),
        "has_next": source.get("hasNext"),
        "total_pages": source.get("totalPages"),
    }


def _envelope(raw: Any) -> dict[str, Any]:
    # A bare object has no envelope; its own "status" belongs to the entity.
    if not isinstance(raw, dict) or "data" not in raw:
        return {"status": "success", "message": ""}
    return {
        "status": str(raw.get("status") or "success"),
        "message": str(raw.get("message") or ""),
    }


def normalize_list_response(
    raw: Any, parse: Callable[[dict[str, Any]], T]
) -> ApiResponse[list[T]]:
    """Build an ApiResponse around a list payload, whatever the wrapping."""
    items = [parse(item) for item in unwrap_list(raw)]
    return ApiResponse(data=items, **_envelope(raw), **_pagination(raw))


def normalize_item_response(
    raw: Any, parse: Callable[[dict[str, Any]], T]
) -> ApiResponse[T | None]:
    """Build an ApiResponse around a single-object payload, whatever the wrapping."""
    item = _unwrap_item(raw)
    data = parse(item) if isinstance(item, dict) else None
    return ApiResponse(data=data, **_envelope(raw), **_pagination(raw))

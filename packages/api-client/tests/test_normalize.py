"""Tests for backend payload normalization.

Verifies:
  - Owner id canonicalized to employer_id from either wire name
  - Missing location/salary become None, never empty values
  - Missing timestamps fall back to now; employer name has a default
  - Every wrapping shape folds into one ApiResponse
  - The raw backend dicts are never mutated
"""

import copy
from datetime import datetime

from jobboard_api.normalize import (
    normalize_application,
    normalize_item_response,
    normalize_job,
    normalize_list_response,
    normalize_location,
    normalize_user,
    unwrap_list,
)
from jobboard_shared.constants import UNKNOWN_EMPLOYER

RAW_JOB = {
    "id": 7,
    "title": "Backend Engineer",
    "description": "Build APIs",
    "salary": 90000,
    "status": "ACTIVE",
    "jobLocation": {"city": "Tehran", "street": "Valiasr", "alley": ""},
    "employerId": 3,
    "employerName": "Acme",
    "createdAt": "2024-05-01T10:00:00Z",
    "updatedAt": "2024-05-02T10:00:00Z",
    "_count": {"applications": 4},
}


class TestNormalizeJob:
    def test_full_job(self):
        job = normalize_job(RAW_JOB)

        assert job.id == 7
        assert job.title == "Backend Engineer"
        assert job.salary == 90000
        assert job.status == "ACTIVE"
        assert job.employer_id == 3
        assert job.employer_name == "Acme"
        assert job.application_count == 4
        assert job.job_location is not None
        assert job.job_location.city == "Tehran"
        assert job.job_location.alley is None
        assert job.created_at.year == 2024

    def test_user_id_becomes_employer_id(self):
        raw = {"id": 1, "userId": 12, "createdAt": "2024-01-01T00:00:00Z"}
        assert normalize_job(raw).employer_id == 12

    def test_employer_id_wins_over_user_id(self):
        raw = {"id": 1, "employerId": 5, "userId": 12}
        assert normalize_job(raw).employer_id == 5

    def test_missing_location_is_none(self):
        assert normalize_job({"id": 1}).job_location is None

    def test_blank_location_is_none(self):
        raw = {"id": 1, "jobLocation": {"city": "", "street": "  ", "alley": None}}
        assert normalize_job(raw).job_location is None

    def test_location_fallback_key(self):
        raw = {"id": 1, "location": {"city": "Shiraz"}}
        assert normalize_job(raw).job_location.city == "Shiraz"

    def test_missing_salary_is_none(self):
        assert normalize_job({"id": 1, "salary": ""}).salary is None
        assert normalize_job({"id": 1}).salary is None

    def test_defaults(self):
        job = normalize_job({"id": 1})

        assert job.employer_name == UNKNOWN_EMPLOYER
        assert job.status == "PENDING"
        assert job.application_count is None
        assert isinstance(job.created_at, datetime)
        assert job.created_at.tzinfo is not None

    def test_raw_not_mutated(self):
        raw = copy.deepcopy(RAW_JOB)
        normalize_job(raw)
        assert raw == RAW_JOB


class TestNormalizeApplication:
    def test_applicant_from_nested_user(self):
        raw = {
            "id": 9,
            "description": "Please hire me",
            "status": "ACCEPTED",
            "jobId": 7,
            "user": {"id": 21, "firstName": "Sara", "lastName": "K", "email": "s@k.io"},
        }

        application = normalize_application(raw)

        assert application.applicant_id == 21
        assert application.applicant_name == "Sara K"
        assert application.applicant_email == "s@k.io"
        assert application.job_id == 7
        assert application.status == "ACCEPTED"

    def test_user_id_becomes_applicant_id(self):
        assert normalize_application({"id": 1, "userId": 4}).applicant_id == 4

    def test_nested_job(self):
        raw = {"id": 1, "job": {"id": 7, "title": "Backend Engineer", "userId": 3}}

        application = normalize_application(raw)

        assert application.job_id == 7
        assert application.job_title == "Backend Engineer"
        assert application.job is not None
        assert application.job.employer_id == 3

    def test_missing_resume_is_none(self):
        application = normalize_application({"id": 1, "resumePath": ""})
        assert application.resume_path is None
        assert application.original_file_name is None


class TestNormalizeUser:
    def test_user_fields(self):
        user = normalize_user(
            {"id": 2, "firstName": "Ali", "lastName": "R", "email": "a@r.io", "role": "EMPLOYER"}
        )
        assert user.first_name == "Ali"
        assert user.role == "EMPLOYER"
        assert user.is_email_verified is False


class TestWrappers:
    def test_normalize_location_rejects_non_dict(self):
        assert normalize_location("Tehran") is None

    def test_unwrap_list_shapes(self):
        assert unwrap_list([1, 2]) == [1, 2]
        assert unwrap_list({"data": [1]}) == [1]
        assert unwrap_list({"data": {"id": 1}}) == []
        assert unwrap_list(None) == []

    def test_list_from_bare_array(self):
        response = normalize_list_response([{"id": 1}, {"id": 2}], normalize_job)

        assert [job.id for job in response.data] == [1, 2]
        assert response.status == "success"
        assert response.has_next is None

    def test_list_with_top_level_pagination(self):
        raw = {
            "status": "success",
            "message": "Jobs fetched",
            "data": [{"id": 1}],
            "hasPrev": False,
            "hasNext": True,
            "totalPages": 3,
        }

        response = normalize_list_response(raw, normalize_job)

        assert response.message == "Jobs fetched"
        assert response.has_prev is False
        assert response.has_next is True
        assert response.total_pages == 3

    def test_list_with_nested_pagination(self):
        raw = {"data": [], "pagination": {"hasPrev": True, "hasNext": False, "totalPages": 2}}

        response = normalize_list_response(raw, normalize_job)

        assert response.data == []
        assert response.has_prev is True
        assert response.total_pages == 2

    def test_item_wrapped(self):
        response = normalize_item_response(
            {"status": "success", "message": "ok", "data": {"id": 5}}, normalize_job
        )
        assert response.data.id == 5
        assert response.message == "ok"

    def test_item_bare_keeps_entity_status_off_envelope(self):
        response = normalize_item_response({"id": 5, "status": "INACTIVE"}, normalize_job)

        assert response.status == "success"
        assert response.data.status == "INACTIVE"

    def test_item_missing_is_none(self):
        assert normalize_item_response({"data": None}, normalize_job).data is None
        assert normalize_item_response(None, normalize_job).data is None

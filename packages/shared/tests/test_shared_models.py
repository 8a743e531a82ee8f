"""Tests for the shared boundary models.

Verifies:
  - SessionIdentity is a read-only snapshot with an exclusive expiry bound
  - Roles and statuses are restricted to the backend's vocabulary
  - Envelope defaults are sensible
"""

import pytest
from jobboard_shared.auth_models import SessionIdentity
from jobboard_shared.job_models import (
    ApplicationActionResult,
    JobFilters,
    UpdateApplicationData,
)
from jobboard_shared.models import ActionResult, ApiResponse, AsyncState
from pydantic import ValidationError


class TestSessionIdentity:
    def test_valid_until_expiry(self):
        identity = SessionIdentity(user_id=1, role="ADMIN", exp=1_000)
        assert not identity.is_expired(999.9)
        assert identity.is_expired(1_000)
        assert identity.is_expired(1_001)

    def test_is_frozen(self):
        identity = SessionIdentity(user_id=1, role="EMPLOYER", exp=1_000)
        with pytest.raises(ValidationError):
            identity.role = "ADMIN"

    def test_unknown_role_rejected(self):
        with pytest.raises(ValidationError):
            SessionIdentity(user_id=1, role="SUPERUSER", exp=1_000)


class TestEnvelopes:
    def test_api_response_defaults(self):
        response = ApiResponse(data=[1, 2])
        assert response.status == "success"
        assert response.message == ""
        assert response.has_next is None
        assert response.total_pages is None

    def test_async_state_defaults(self):
        state = AsyncState()
        assert state.data is None
        assert state.loading is False
        assert state.error is None

    def test_action_result_subclass(self):
        result = ApplicationActionResult(success=False, message="nope")
        assert isinstance(result, ActionResult)
        assert result.application is None


class TestRequestModels:
    def test_job_filters_all_optional(self):
        assert JobFilters().model_dump() == {
            "status": None,
            "search": None,
            "page": None,
            "limit": None,
            "employer_id": None,
        }

    def test_application_status_vocabulary(self):
        assert UpdateApplicationData(status="ACCEPTED").status == "ACCEPTED"
        with pytest.raises(ValidationError):
            UpdateApplicationData(status="MAYBE")

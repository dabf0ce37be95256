"""Error Hierarchy — status codes, codes and response envelope per taxonomy case."""

import pytest

from lessons_api.core.errors import (
    ErrorCategory,
    InsufficientPrivilegeError,
    InvalidCredentialError,
    LessonsApiError,
    MissingCredentialError,
    OwnershipDeniedError,
    PremiumRequiredError,
    ResourceNotFoundError,
    UpstreamFailureError,
)


@pytest.mark.parametrize("error, status, code", [
    (MissingCredentialError(), 401, "MISSING_CREDENTIAL"),
    (InvalidCredentialError(), 401, "INVALID_CREDENTIAL"),
    (InsufficientPrivilegeError(), 403, "INSUFFICIENT_PRIVILEGE"),
    (OwnershipDeniedError("lesson-1"), 403, "OWNERSHIP_DENIED"),
    (PremiumRequiredError("upgrade"), 403, "PREMIUM_REQUIRED"),
    (ResourceNotFoundError("Lesson", "lesson-1"), 404, "RESOURCE_NOT_FOUND"),
    (UpstreamFailureError("Database", "query"), 503, "UPSTREAM_FAILURE"),
])
def test_taxonomy_status_and_code(error, status, code):
    assert isinstance(error, LessonsApiError)
    assert error.http_status == status
    assert error.code == code


def test_to_response_envelope():
    body = ResourceNotFoundError("Lesson", "lesson-1").to_response()
    error = body["error"]
    assert error["code"] == "RESOURCE_NOT_FOUND"
    assert error["message"] == "Lesson 'lesson-1' not found"
    assert error["category"] == ErrorCategory.RESOURCE_NOT_FOUND.value
    assert error["context"]["resource_id"] == "lesson-1"
    assert "timestamp" in error


def test_upstream_failure_hides_collaborator_details():
    error = UpstreamFailureError("Payment provider", "checkout session")
    assert error.message == "Payment provider checkout session failed"
    assert error.collaborator == "Payment provider"


def test_invalid_credential_keeps_reason_out_of_message():
    error = InvalidCredentialError("ExpiredIdTokenError")
    assert error.reason == "ExpiredIdTokenError"
    assert "Expired" not in error.message

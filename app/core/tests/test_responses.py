"""
Tests for ServiceResult and the error-code to HTTP status mapping.
"""

from rest_framework import status

from core.responses import failure_response, status_for
from core.services import ServiceResult


class TestServiceResult:
    """Tests for ServiceResult construction and serialization."""

    def test_success(self):
        result = ServiceResult.success({"id": 1})

        assert result.success
        assert result.data == {"id": 1}
        assert result.error is None

    def test_failure(self):
        result = ServiceResult.failure("Nope", error_code="NOT_MEMBER")

        assert not result.success
        assert result.data is None

    def test_failure_response_body_merges_details(self):
        result = ServiceResult.failure(
            "You are muted",
            error_code="USER_MUTED",
            details={"reason": "spam", "muted_until": None},
        )

        assert result.to_response() == {
            "message": "You are muted",
            "error": "You are muted",
            "error_code": "USER_MUTED",
            "reason": "spam",
            "muted_until": None,
        }


class TestStatusFor:
    """Tests for status_for()."""

    def test_known_codes(self):
        assert status_for("INVALID_CREDENTIALS") == status.HTTP_401_UNAUTHORIZED
        assert status_for("USER_MUTED") == status.HTTP_403_FORBIDDEN
        assert status_for("ROOM_NOT_FOUND") == status.HTTP_404_NOT_FOUND
        assert status_for("USERNAME_TAKEN") == status.HTTP_409_CONFLICT

    def test_unknown_code_is_400(self):
        assert status_for("EMPTY_MESSAGE") == status.HTTP_400_BAD_REQUEST

    def test_missing_code_is_400(self):
        assert status_for(None) == status.HTTP_400_BAD_REQUEST


class TestFailureResponse:
    def test_builds_response(self):
        response = failure_response(
            ServiceResult.failure("Room not found", error_code="ROOM_NOT_FOUND")
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data["error_code"] == "ROOM_NOT_FOUND"
        assert response.data["message"] == "Room not found"

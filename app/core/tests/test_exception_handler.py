"""
Tests for api_exception_handler.

Every error body carries ``message`` and ``error_code`` regardless of
where the error was raised.
"""

from rest_framework import exceptions, status

from core.exception_handler import api_exception_handler
from core.exceptions import NotFoundError

CONTEXT = {"view": None}


class TestApplicationErrors:
    """BaseApplicationError subclasses map to their own status."""

    def test_not_found(self):
        response = api_exception_handler(
            NotFoundError("Room not found", error_code="ROOM_NOT_FOUND"), CONTEXT
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data == {
            "message": "Room not found",
            "error": "Room not found",
            "error_code": "ROOM_NOT_FOUND",
        }

    def test_default_error_code(self):
        response = api_exception_handler(NotFoundError("Gone"), CONTEXT)

        assert response.data["error_code"] == "NOT_FOUND"

    def test_details_are_nested(self):
        exc = NotFoundError("Gone", details={"user_id": 7})

        response = api_exception_handler(exc, CONTEXT)

        assert response.data["details"] == {"user_id": 7}


class TestDrfErrors:
    """DRF exceptions are reshaped into the same body."""

    def test_validation_error(self):
        exc = exceptions.ValidationError({"name": ["This field is required."]})

        response = api_exception_handler(exc, CONTEXT)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data["error_code"] == "VALIDATION_ERROR"
        assert response.data["message"] == "name: This field is required."
        assert response.data["errors"] == {"name": ["This field is required."]}

    def test_non_field_error_message_has_no_prefix(self):
        exc = exceptions.ValidationError({"non_field_errors": ["Passwords differ"]})

        response = api_exception_handler(exc, CONTEXT)

        assert response.data["message"] == "Passwords differ"

    def test_not_authenticated(self):
        response = api_exception_handler(exceptions.NotAuthenticated(), CONTEXT)

        assert response.data["error_code"] == "NOT_AUTHENTICATED"
        assert "detail" not in response.data

    def test_permission_code_becomes_error_code(self):
        exc = exceptions.PermissionDenied("Moderator role required", code="insufficient_role")

        response = api_exception_handler(exc, CONTEXT)

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data == {
            "message": "Moderator role required",
            "error_code": "INSUFFICIENT_ROLE",
        }

    def test_unhandled_exception_passes_through(self):
        assert api_exception_handler(RuntimeError("boom"), CONTEXT) is None

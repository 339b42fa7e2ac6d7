"""
Base exception classes for application-wide error handling.

This module provides a standardized exception hierarchy that enables:
- Consistent error responses across the application
- Machine-readable error codes for client handling
- A single place that decides the HTTP status of each error family

Exception Hierarchy:
    BaseApplicationError (base, 400)
    └── NotFoundError - Resource not found (404)

Usage:
    from core.exceptions import NotFoundError

    room = Room.objects.filter(pk=room_id).first()
    if room is None:
        raise NotFoundError("Room not found", error_code="ROOM_NOT_FOUND")

Raised from a DRF view, these are rendered by
core.exception_handler.api_exception_handler using ``to_dict()`` and
``http_status``. Services prefer returning ServiceResult failures; raise
these where returning is awkward (lookups shared by many views).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import Any


class BaseApplicationError(Exception):
    """
    Base exception for all application-specific errors.

    Attributes:
        message: Human-readable error description
        error_code: Machine-readable code for client-side handling
        details: Additional error context merged into the response body
    """

    default_error_code: str = "APPLICATION_ERROR"
    http_status: int = 400

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.error_code = error_code or self.default_error_code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert exception to dictionary for API response.

        Example:
            {
                "message": "Room not found",
                "error": "Room not found",
                "error_code": "ROOM_NOT_FOUND"
            }
        """
        result: dict[str, Any] = {
            "message": self.message,
            "error": self.message,
            "error_code": self.error_code,
        }
        if self.details:
            result["details"] = self.details
        return result

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"error_code={self.error_code!r}, "
            f"details={self.details!r})"
        )


class NotFoundError(BaseApplicationError):
    """
    Raised when a requested resource is not found.

    Example:
        raise NotFoundError(
            f"User with ID {user_id} not found",
            error_code="USER_NOT_FOUND",
            details={"user_id": user_id},
        )
    """

    default_error_code: str = "NOT_FOUND"
    http_status: int = 404

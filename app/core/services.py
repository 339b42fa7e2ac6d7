"""
Base service layer patterns for business logic encapsulation.

This module provides foundational patterns for the service layer:
- ServiceResult: Standard result wrapper for consistent success/failure handling
- BaseService: Base class with common service utilities

Service Layer Philosophy:
    Services encapsulate chat business rules separate from views and models.
    Views handle HTTP concerns, models handle data, services decide.

Pattern Comparison:
    - ServiceResult: expected failures (muted sender, wrong invite code)
    - Exceptions: unexpected failures (database errors, bugs)

Usage:
    from core.services import BaseService, ServiceResult

    class RoomService(BaseService):
        @classmethod
        def rename_room(cls, actor, room, name) -> ServiceResult[Room]:
            if room.created_by_id != actor.id:
                return ServiceResult.failure(
                    "Only the room creator can rename it",
                    error_code="PERMISSION_DENIED",
                )

            with cls.atomic():
                room.name = name
                room.save(update_fields=["name", "updated_at"])

            cls.get_logger().info(f"Room {room.id} renamed")
            return ServiceResult.success(room)

    # In view
    result = RoomService.rename_room(request.user, room, name)
    if not result.success:
        return failure_response(result)

Related:
    - core.exceptions: For unexpected/exceptional errors
    - core.responses: Maps failed results to HTTP responses
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Generic, TypeVar

from django.db import transaction

if TYPE_CHECKING:
    from collections.abc import Generator
    from typing import Any

# Generic type for ServiceResult data
T = TypeVar("T")


@dataclass
class ServiceResult(Generic[T]):
    """
    Standard result wrapper for service operations.

    Use this for expected failures (validation errors, business rule
    violations). Anything the caller cannot reasonably handle should raise.

    Attributes:
        success: Whether the operation succeeded
        data: Result data if successful (None if failed)
        error: Human-readable error message if failed
        error_code: Machine-readable error code for client handling
        details: Extra context for the client (mute reason, expiry, ...)

    Usage:
        # Success case
        return ServiceResult.success(message)

        # Failure with context the client shows to the user
        return ServiceResult.failure(
            "You are muted",
            error_code="USER_MUTED",
            details={"reason": "spam", "muted_until": until.isoformat()},
        )
    """

    success: bool
    data: T | None = None
    error: str | None = None
    error_code: str | None = None
    details: dict[str, Any] | None = field(default=None)

    @classmethod
    def success(cls, data: T = None) -> ServiceResult[T]:
        """
        Create a successful result.

        Args:
            data: The result data

        Returns:
            ServiceResult with success=True and data set
        """
        return cls(success=True, data=data)

    @classmethod
    def failure(
        cls,
        error: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> ServiceResult[T]:
        """
        Create a failed result.

        Args:
            error: Human-readable error message
            error_code: Machine-readable error code for client handling
            details: Additional payload merged into the error response

        Returns:
            ServiceResult with success=False and error details

        Example:
            return ServiceResult.failure("Room not found", "ROOM_NOT_FOUND")
        """
        return cls(
            success=False,
            error=error,
            error_code=error_code,
            details=details,
        )

    def to_response(self) -> dict[str, Any]:
        """
        Convert to API response format.

        Failed results become ``{"message", "error", "error_code", ...details}``
        so every error body the API returns has the same shape.
        """
        if self.success:
            return {"success": True, "data": self.data}

        response: dict[str, Any] = {
            "message": self.error,
            "error": self.error,
        }
        if self.error_code:
            response["error_code"] = self.error_code
        if self.details:
            response.update(self.details)
        return response


class BaseService:
    """
    Base class for service layer classes.

    Provides common utilities for services:
    - Logging setup per service
    - Database transaction management

    Design Notes:
        - Use @classmethod (no instance state)
        - Services should be stateless
        - Use ServiceResult for expected failures
        - Raise exceptions for unexpected failures
    """

    @classmethod
    def get_logger(cls) -> logging.Logger:
        """
        Get logger for this service.

        Returns a logger named after the service class for
        easy filtering in logs (e.g. ``chat.services.RoomService``).
        """
        return logging.getLogger(f"{cls.__module__}.{cls.__name__}")

    @classmethod
    @contextmanager
    def atomic(cls) -> Generator[None, None, None]:
        """
        Execute operations in a database transaction.

        Thin wrapper around Django's transaction.atomic() that makes
        transaction boundaries explicit in service code.

        Example:
            with cls.atomic():
                room = Room.objects.create(...)
                RoomMember.objects.create(room=room, user=creator)
                # If the membership fails, the room is rolled back too
        """
        with transaction.atomic():
            yield

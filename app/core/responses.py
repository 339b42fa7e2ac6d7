"""
Translation of failed ServiceResults into HTTP responses.

Services report expected failures with machine-readable error codes. The
status code a client sees is decided here, once, instead of in every view.

Usage:
    result = MessageService.send_message(...)
    if not result.success:
        return failure_response(result)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rest_framework import status
from rest_framework.response import Response

if TYPE_CHECKING:
    from core.services import ServiceResult


# Error codes not listed here map to 400 Bad Request.
ERROR_STATUS: dict[str, int] = {
    # 401: identity not established
    "INVALID_CREDENTIALS": status.HTTP_401_UNAUTHORIZED,
    # 403: identity known, action refused
    "PERMISSION_DENIED": status.HTTP_403_FORBIDDEN,
    "INSUFFICIENT_ROLE": status.HTTP_403_FORBIDDEN,
    "TARGET_PROTECTED": status.HTTP_403_FORBIDDEN,
    "CANNOT_TARGET_SELF": status.HTTP_403_FORBIDDEN,
    "ACCOUNT_SUSPENDED": status.HTTP_403_FORBIDDEN,
    "USER_MUTED": status.HTTP_403_FORBIDDEN,
    "INVITE_CODE_REQUIRED": status.HTTP_403_FORBIDDEN,
    "INVALID_INVITE_CODE": status.HTTP_403_FORBIDDEN,
    "NOT_MEMBER": status.HTTP_403_FORBIDDEN,
    "NOT_AUTHOR": status.HTTP_403_FORBIDDEN,
    "INVALID_PASSWORD": status.HTTP_403_FORBIDDEN,
    # 404
    "ROOM_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "USER_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "MESSAGE_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "WHISPER_TARGET_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    # 409
    "USERNAME_TAKEN": status.HTTP_409_CONFLICT,
}


def status_for(error_code: str | None) -> int:
    """Return the HTTP status for an error code (400 when unknown)."""
    return ERROR_STATUS.get(error_code or "", status.HTTP_400_BAD_REQUEST)


def failure_response(result: ServiceResult) -> Response:
    """Build the DRF Response for a failed ServiceResult."""
    return Response(result.to_response(), status=status_for(result.error_code))

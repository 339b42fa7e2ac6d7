"""
DRF exception handler that gives every error body the same shape.

Clients read ``message`` for display and ``error_code`` for branching,
whether the error came from a serializer, a permission class, or a
BaseApplicationError raised inside a view.
"""

from __future__ import annotations

import logging

from rest_framework import exceptions
from rest_framework.response import Response
from rest_framework.views import exception_handler

from core.exceptions import BaseApplicationError

logger = logging.getLogger(__name__)


def api_exception_handler(exc, context):
    """Render application and DRF exceptions as ``{"message", "error_code", ...}``."""
    if isinstance(exc, BaseApplicationError):
        logger.debug(f"Application error in {context.get('view')}: {exc}")
        return Response(exc.to_dict(), status=exc.http_status)

    response = exception_handler(exc, context)
    if response is None:
        return None

    if isinstance(exc, exceptions.ValidationError):
        response.data = {
            "message": _first_error(exc.detail),
            "error_code": "VALIDATION_ERROR",
            "errors": response.data,
        }
    elif isinstance(response.data, dict) and "detail" in response.data:
        detail = response.data.pop("detail")
        response.data["message"] = str(detail)
        response.data.setdefault(
            "error_code", getattr(detail, "code", "error").upper()
        )
    return response


def _first_error(detail) -> str:
    """Pull the first human-readable message out of nested validation errors."""
    if isinstance(detail, dict):
        for field_name, value in detail.items():
            message = _first_error(value)
            if field_name == "non_field_errors":
                return message
            return f"{field_name}: {message}"
    if isinstance(detail, list) and detail:
        return _first_error(detail[0])
    return str(detail)

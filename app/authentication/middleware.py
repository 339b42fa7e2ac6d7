"""
Middleware that ends the sessions of suspended users.

Suspending a user flips a flag on the row; sessions already issued stay
valid until they expire. This middleware checks the flag on every
request, logs the session out and answers 403 with the suspension reason
so the client can show it and return to the login screen.

Must come after AuthenticationMiddleware.
"""

import logging

from django.contrib.auth import logout
from django.http import JsonResponse

logger = logging.getLogger(__name__)


def suspension_payload(user) -> dict:
    """Body returned to a suspended user (login and live sessions alike)."""
    return {
        "message": "Your account has been suspended",
        "error_code": "ACCOUNT_SUSPENDED",
        "reason": user.suspended_reason or None,
        "suspended_at": (
            user.suspended_at.isoformat() if user.suspended_at else None
        ),
    }


class SuspendedUserMiddleware:
    """Log out and reject requests from suspended users."""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        user = getattr(request, "user", None)
        if user is not None and user.is_authenticated and user.suspended:
            payload = suspension_payload(user)
            logger.info(f"Ending session of suspended user {user.id}")
            logout(request)
            return JsonResponse(payload, status=403)
        return self.get_response(request)

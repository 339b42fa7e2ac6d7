"""
Session authentication for the JSON API.

DRF's SessionAuthentication has no ``WWW-Authenticate`` challenge, so DRF
turns NotAuthenticated into 403. Browser clients need to tell "log in
again" apart from "not allowed", so this class supplies a challenge and
unauthenticated requests get 401.
"""

from rest_framework.authentication import SessionAuthentication


class CookieSessionAuthentication(SessionAuthentication):
    """SessionAuthentication that answers missing sessions with 401."""

    def authenticate_header(self, request):
        return "Session"

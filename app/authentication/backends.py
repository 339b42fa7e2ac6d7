"""
Authentication backend that refuses suspended accounts.
"""

from django.contrib.auth.backends import ModelBackend


class ActiveAccountBackend(ModelBackend):
    """
    ModelBackend that refuses credentials of suspended users.

    Only ``authenticate`` checks the flag. ``get_user`` still resolves a
    suspended user's live session so SuspendedUserMiddleware can answer
    with the suspension reason and end the session.
    """

    def authenticate(self, request, username=None, password=None, **kwargs):
        user = super().authenticate(
            request, username=username, password=password, **kwargs
        )
        if user is not None and user.suspended:
            return None
        return user

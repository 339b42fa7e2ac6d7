"""
Role-based permission classes.

Roles form a total order (user < moderator < admin < owner) declared on
UserRole. These classes gate whole endpoints; rules that depend on the
target of an action (outranking, authorship) live in the services.

Unauthenticated requests fail IsAuthenticated first, so they get 401
before any role is looked at.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rest_framework import permissions

from authentication.models import UserRole

if TYPE_CHECKING:
    from rest_framework.request import Request
    from rest_framework.views import APIView


class HasMinimumRole(permissions.BasePermission):
    """
    Allows access to users whose role satisfies ``required_role``.

    Subclass and set ``required_role``; use in combination with
    IsAuthenticated so anonymous users are rejected with 401.
    """

    required_role: UserRole = UserRole.USER
    message = "Insufficient role for this action."
    code = "insufficient_role"

    def has_permission(self, request: Request, view: APIView) -> bool:
        user = request.user
        if not user or not user.is_authenticated:
            return False
        return user.has_role(self.required_role)


class IsModeratorOrAbove(HasMinimumRole):
    """Moderators, admins and owners."""

    required_role = UserRole.MODERATOR
    message = "Moderator role required."


class IsAdminOrAbove(HasMinimumRole):
    """Admins and owners."""

    required_role = UserRole.ADMIN
    message = "Admin role required."

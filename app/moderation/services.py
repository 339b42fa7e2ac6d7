"""
Moderation service layer.

This module provides ModerationService for mutes, suspensions and role
changes.

Rules:
    - Mute / unmute: moderator or above
    - Suspend / unsuspend / role change: admin or above
    - Nobody may act on themselves
    - The actor must outrank the target; owners may act on anyone
    - A role above the actor's own cannot be granted

Usage:
    from moderation.services import ModerationService

    result = ModerationService.mute(moderator, user, duration_minutes=60, reason="spam")
    if not result.success:
        return failure_response(result)
"""

from __future__ import annotations

from datetime import timedelta
from typing import TYPE_CHECKING

from django.utils import timezone

from authentication.models import User, UserRole
from core.services import BaseService, ServiceResult

if TYPE_CHECKING:
    from django.db.models import QuerySet


class ModerationService(BaseService):
    """
    Service for moderation actions on users.

    Methods:
        mute / unmute: Stop or allow a user posting messages
        suspend / unsuspend: Lock a user out of the service
        change_role: Move a user within the role hierarchy
        release_expired_mutes: Clear mutes whose time is up
    """

    @classmethod
    def _check_target(
        cls, actor: User, target: User, required: UserRole, action: str
    ) -> ServiceResult | None:
        """
        Return a failure if ``actor`` may not perform ``action`` on ``target``.

        Error codes:
            CANNOT_TARGET_SELF: Actor and target are the same user
            INSUFFICIENT_ROLE: Actor's role is below ``required``
            TARGET_PROTECTED: Target's role is not below the actor's
        """
        failure = None
        if actor.id == target.id:
            failure = ServiceResult.failure(
                f"You cannot {action} yourself", error_code="CANNOT_TARGET_SELF"
            )
        elif not actor.has_role(required):
            failure = ServiceResult.failure(
                f"{required.label} role required to {action} users",
                error_code="INSUFFICIENT_ROLE",
            )
        elif (
            actor.user_role != UserRole.OWNER
            and actor.user_role.level <= target.user_role.level
        ):
            failure = ServiceResult.failure(
                f"You cannot {action} a user with an equal or higher role",
                error_code="TARGET_PROTECTED",
            )

        if failure is not None:
            cls.get_logger().warning(
                f"User {actor.id} ({actor.role}) denied {action} on user "
                f"{target.id} ({target.role}): {failure.error_code}"
            )
        return failure

    # =========================================================================
    # Mutes
    # =========================================================================

    @classmethod
    def mute(
        cls, actor: User, target: User, duration_minutes: int, reason: str
    ) -> ServiceResult[User]:
        """
        Mute ``target`` for ``duration_minutes``.

        Muting an already muted user replaces the expiry and reason.

        Error codes:
            INVALID_DURATION: Duration is not a positive number of minutes
        """
        denied = cls._check_target(actor, target, UserRole.MODERATOR, "mute")
        if denied is not None:
            return denied

        if duration_minutes is None or duration_minutes <= 0:
            return ServiceResult.failure(
                "Mute duration must be a positive number of minutes",
                error_code="INVALID_DURATION",
            )

        target.muted = True
        target.muted_until = timezone.now() + timedelta(minutes=duration_minutes)
        target.muted_reason = reason.strip()
        target.save(update_fields=["muted", "muted_until", "muted_reason", "updated_at"])

        cls.get_logger().info(
            f"User {actor.id} muted user {target.id} for {duration_minutes} min"
        )
        return ServiceResult.success(target)

    @classmethod
    def unmute(cls, actor: User, target: User) -> ServiceResult[User]:
        denied = cls._check_target(actor, target, UserRole.MODERATOR, "unmute")
        if denied is not None:
            return denied

        target.muted = False
        target.muted_until = None
        target.muted_reason = ""
        target.save(update_fields=["muted", "muted_until", "muted_reason", "updated_at"])

        cls.get_logger().info(f"User {actor.id} unmuted user {target.id}")
        return ServiceResult.success(target)

    @classmethod
    def release_expired_mutes(cls) -> int:
        """Clear every mute whose expiry has passed. Returns the count."""
        released = User.objects.filter(
            muted=True, muted_until__isnull=False, muted_until__lte=timezone.now()
        ).update(muted=False, muted_until=None, muted_reason="", updated_at=timezone.now())
        if released:
            cls.get_logger().info(f"Released {released} expired mute(s)")
        return released

    # =========================================================================
    # Suspensions
    # =========================================================================

    @classmethod
    def suspend(cls, actor: User, target: User, reason: str) -> ServiceResult[User]:
        """
        Suspend ``target``.

        The target's live sessions are refused from their next request on
        (SuspendedUserMiddleware) and new logins are refused.
        """
        denied = cls._check_target(actor, target, UserRole.ADMIN, "suspend")
        if denied is not None:
            return denied

        target.suspended = True
        target.suspended_at = timezone.now()
        target.suspended_reason = reason.strip()
        target.is_online = False
        target.save(
            update_fields=[
                "suspended",
                "suspended_at",
                "suspended_reason",
                "is_online",
                "updated_at",
            ]
        )

        cls.get_logger().info(f"User {actor.id} suspended user {target.id}")
        return ServiceResult.success(target)

    @classmethod
    def unsuspend(cls, actor: User, target: User) -> ServiceResult[User]:
        denied = cls._check_target(actor, target, UserRole.ADMIN, "unsuspend")
        if denied is not None:
            return denied

        target.suspended = False
        target.suspended_at = None
        target.suspended_reason = ""
        target.save(
            update_fields=["suspended", "suspended_at", "suspended_reason", "updated_at"]
        )

        cls.get_logger().info(f"User {actor.id} unsuspended user {target.id}")
        return ServiceResult.success(target)

    # =========================================================================
    # Roles
    # =========================================================================

    @classmethod
    def change_role(
        cls, actor: User, target: User, new_role: UserRole | str
    ) -> ServiceResult[User]:
        """
        Set ``target``'s role.

        Error codes:
            INVALID_ROLE: ``new_role`` is not a known role
            INSUFFICIENT_ROLE: ``new_role`` is above the actor's own role
        """
        denied = cls._check_target(actor, target, UserRole.ADMIN, "change the role of")
        if denied is not None:
            return denied

        try:
            role = UserRole(new_role)
        except ValueError:
            return ServiceResult.failure(
                f"Role must be one of: {', '.join(UserRole.values)}",
                error_code="INVALID_ROLE",
            )

        if not actor.has_role(role):
            cls.get_logger().warning(
                f"User {actor.id} ({actor.role}) denied granting {role} to {target.id}"
            )
            return ServiceResult.failure(
                "You cannot grant a role above your own",
                error_code="INSUFFICIENT_ROLE",
            )

        previous = target.role
        target.role = role
        target.save(update_fields=["role", "updated_at"])

        cls.get_logger().info(
            f"User {actor.id} changed role of user {target.id}: {previous} -> {role}"
        )
        return ServiceResult.success(target)

    # =========================================================================
    # Queries
    # =========================================================================

    @staticmethod
    def list_users() -> QuerySet[User]:
        """All users, for the moderation dashboard."""
        return User.objects.order_by("username")

"""
Authentication services.

This module provides AuthService for account registration, session login
and logout, profile changes, presence, and account deletion.

Related files:
    - models.py: User and UserRole
    - serializers.py: Request validation (formats, lengths, consent)
    - middleware.py: Suspension enforcement on live sessions

Security:
    - Passwords hashed with Django's configured hashers
    - Username and password changes require the current password
    - Suspended users cannot log in; the reason is returned to them
"""

from __future__ import annotations

from datetime import timedelta
from typing import TYPE_CHECKING

from django.contrib.auth import authenticate, login, logout
from django.utils import timezone

from authentication.constants import PROFILE_CONFIG
from authentication.middleware import suspension_payload
from authentication.models import User
from core.services import BaseService, ServiceResult

if TYPE_CHECKING:
    from django.http import HttpRequest


class AuthService(BaseService):
    """
    Account lifecycle business logic.

    Usage:
        from authentication.services import AuthService

        result = AuthService.register("alice", "secret1")
        result = AuthService.login(request, "alice", "secret1")
        result = AuthService.update_profile(user, username="alice2",
                                            current_password="secret1")
    """

    # =========================================================================
    # Registration & sessions
    # =========================================================================

    @classmethod
    def register(cls, username: str, password: str) -> ServiceResult[User]:
        """
        Create an account.

        Format, length and consent are validated by RegisterSerializer;
        this only enforces case-insensitive uniqueness.
        """
        if User.objects.filter(username__iexact=username).exists():
            return ServiceResult.failure(
                "Username already exists", error_code="USERNAME_TAKEN"
            )

        with cls.atomic():
            user = User.objects.create_user(username=username, password=password)

        cls.get_logger().info(f"Registered user {user.id} ({user.username})")
        return ServiceResult.success(user)

    @classmethod
    def authenticate_credentials(
        cls, request: HttpRequest | None, username: str, password: str
    ) -> ServiceResult[User]:
        """
        Check credentials without starting a session.

        Suspended accounts with correct credentials get ACCOUNT_SUSPENDED
        (with reason) rather than a generic credentials error, so the
        client can explain why login is refused.
        """
        candidate = User.objects.filter(username=username).first()
        if (
            candidate is not None
            and candidate.suspended
            and candidate.check_password(password)
        ):
            payload = suspension_payload(candidate)
            return ServiceResult.failure(
                payload.pop("message"),
                error_code=payload.pop("error_code"),
                details=payload,
            )

        user = authenticate(request, username=username, password=password)
        if user is None:
            return ServiceResult.failure(
                "Invalid username or password", error_code="INVALID_CREDENTIALS"
            )
        return ServiceResult.success(user)

    @classmethod
    def login(
        cls, request: HttpRequest, username: str, password: str
    ) -> ServiceResult[User]:
        """Authenticate, start a session and mark the user online."""
        result = cls.authenticate_credentials(request, username, password)
        if not result.success:
            return result

        user = result.data
        login(request, user)
        cls._set_online(user, True)
        cls.get_logger().info(f"User {user.id} logged in")
        return ServiceResult.success(user)

    @classmethod
    def logout(cls, request: HttpRequest) -> None:
        """End the session; the user is marked offline if there was one."""
        user = request.user
        if user.is_authenticated:
            cls._set_online(user, False)
            cls.get_logger().info(f"User {user.id} logged out")
        logout(request)

    # =========================================================================
    # Presence
    # =========================================================================

    @classmethod
    def set_status(
        cls, actor: User, target_id: int, is_online: bool
    ) -> ServiceResult[User]:
        """Update online status. Users may only change their own."""
        if actor.id != target_id:
            return ServiceResult.failure(
                "You can only change your own status",
                error_code="PERMISSION_DENIED",
            )
        cls._set_online(actor, is_online)
        return ServiceResult.success(actor)

    @staticmethod
    def _set_online(user: User, is_online: bool) -> None:
        user.is_online = is_online
        user.last_seen = timezone.now()
        user.save(update_fields=["is_online", "last_seen", "updated_at"])

    # =========================================================================
    # Profile
    # =========================================================================

    @classmethod
    def update_profile(
        cls,
        user: User,
        *,
        username: str | None = None,
        current_password: str | None = None,
        new_password: str | None = None,
        avatar_url: str | None = None,
        appear_offline: bool | None = None,
    ) -> ServiceResult[User]:
        """
        Apply profile changes.

        Rules:
            - Username and password changes need the current password
            - Username changes at most once per cooldown window; the error
              carries ``next_allowed_at``
            - Usernames are unique (case-insensitive)

        All checks run before anything is written.
        """
        now = timezone.now()
        update_fields = ["updated_at"]
        changing_username = username is not None and username != user.username

        if (changing_username or new_password) and not (
            current_password and user.check_password(current_password)
        ):
            return ServiceResult.failure(
                "Current password is incorrect", error_code="INVALID_PASSWORD"
            )

        if changing_username:
            if user.last_username_change is not None:
                next_allowed = user.last_username_change + timedelta(
                    days=PROFILE_CONFIG.USERNAME_CHANGE_COOLDOWN_DAYS
                )
                if now < next_allowed:
                    return ServiceResult.failure(
                        "Username can only be changed once every "
                        f"{PROFILE_CONFIG.USERNAME_CHANGE_COOLDOWN_DAYS} days",
                        error_code="USERNAME_CHANGE_TOO_SOON",
                        details={"next_allowed_at": next_allowed.isoformat()},
                    )

            taken = (
                User.objects.filter(username__iexact=username)
                .exclude(pk=user.pk)
                .exists()
            )
            if taken:
                return ServiceResult.failure(
                    "Username already taken", error_code="USERNAME_TAKEN"
                )

            user.username = username
            user.last_username_change = now
            update_fields += ["username", "last_username_change"]

        if new_password:
            user.set_password(new_password)
            update_fields.append("password")

        if avatar_url is not None:
            user.avatar_url = avatar_url
            update_fields.append("avatar_url")

        if appear_offline is not None:
            user.appear_offline = appear_offline
            update_fields.append("appear_offline")

        user.save(update_fields=update_fields)
        cls.get_logger().info(
            f"Profile updated for user {user.id}: {', '.join(update_fields[1:]) or 'no changes'}"
        )
        return ServiceResult.success(user)

    # =========================================================================
    # Account deletion
    # =========================================================================

    @classmethod
    def delete_account(cls, user: User, password: str) -> ServiceResult[None]:
        """
        Delete an account and everything it owns.

        Messages, memberships, unread mentions and rooms the user created
        go with the user (FK cascades). Rooms the user only belonged to
        are deleted if this leaves them without members.
        """
        from chat.models import RoomMember
        from chat.services import RoomService

        if not user.check_password(password):
            return ServiceResult.failure(
                "Password is incorrect", error_code="INVALID_PASSWORD"
            )

        user_id = user.id
        with cls.atomic():
            joined_room_ids = list(
                RoomMember.objects.filter(user=user).values_list("room_id", flat=True)
            )
            user.delete()
            removed = RoomService.delete_empty_rooms(joined_room_ids)

        cls.get_logger().info(
            f"Deleted user {user_id} and {removed} room(s) left empty"
        )
        return ServiceResult.success(None)

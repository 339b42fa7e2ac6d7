"""
Authentication models.

This module defines the chat account model:
- UserRole: Closed role enumeration with an explicit total order
- User: Username-based account carrying presence and moderation state

Related files:
    - managers.py: Custom user manager for username-based creation
    - services.py: AuthService business logic (register, login, profile)
    - permissions.py: DRF permission classes built on UserRole

Security:
    - Passwords hashed with Django's configured hashers
    - Suspended users are refused by the auth backend and the
      SuspendedUserMiddleware, so suspension also ends live sessions
"""

import re

from django.contrib.auth.models import AbstractBaseUser, PermissionsMixin
from django.core.exceptions import ValidationError
from django.db import models
from django.utils import timezone

from authentication.managers import UserManager


def validate_username_format(value):
    """Validate username format: 3-30 chars, alphanumeric + _ + -."""
    if not re.match(r"^[a-zA-Z0-9_-]{3,30}$", value):
        raise ValidationError(
            "Username must be 3-30 characters and contain only "
            "letters, numbers, underscores, and hyphens."
        )


class UserRole(models.TextChoices):
    """
    Chat roles, declared from least to most privileged.

    Declaration order is the hierarchy: every role satisfies the
    requirements of the roles declared before it, and owner satisfies
    everything.

    Usage:
        UserRole.ADMIN.satisfies(UserRole.MODERATOR)  # True
        UserRole(user.role).level > UserRole(target.role).level
    """

    USER = "user", "User"
    MODERATOR = "moderator", "Moderator"
    ADMIN = "admin", "Admin"
    OWNER = "owner", "Owner"

    @property
    def level(self) -> int:
        """Position in the hierarchy (user=0 ... owner=3)."""
        return list(type(self)).index(self)

    def satisfies(self, required: "UserRole | str") -> bool:
        """Return True if this role meets the required minimum role."""
        return self.level >= UserRole(required).level

    @classmethod
    def at_least(cls, required: "UserRole | str") -> list[str]:
        """Values of every role that satisfies ``required`` (for queries)."""
        return [role.value for role in cls if role.satisfies(required)]


class User(AbstractBaseUser, PermissionsMixin):
    """
    Chat account identified by a unique username.

    Fields:
        username: Unique login and display name
        role: Position in the moderation hierarchy
        is_online / appear_offline / last_seen: Presence
        avatar_url: Externally hosted avatar image
        suspended*: Suspension flag, time and reason
        muted*: Mute flag, expiry and reason
        last_username_change: Start of the username-change cooldown

    Usage:
        user = User.objects.create_user(username="alice", password="secret1")
        user.has_role(UserRole.MODERATOR)
    """

    username = models.CharField(
        max_length=30,
        unique=True,
        validators=[validate_username_format],
        help_text="Unique username (3-30 chars, alphanumeric + _ + -)",
    )
    role = models.CharField(
        max_length=20,
        choices=UserRole.choices,
        default=UserRole.USER,
        db_index=True,
        help_text="Role in the moderation hierarchy",
    )

    # Presence
    is_online = models.BooleanField(default=False)
    appear_offline = models.BooleanField(
        default=False,
        help_text="Hide online status from other users",
    )
    last_seen = models.DateTimeField(null=True, blank=True)
    avatar_url = models.URLField(max_length=500, blank=True)

    # Moderation state
    suspended = models.BooleanField(default=False, db_index=True)
    suspended_at = models.DateTimeField(null=True, blank=True)
    suspended_reason = models.TextField(blank=True)
    muted = models.BooleanField(default=False, db_index=True)
    muted_until = models.DateTimeField(
        null=True,
        blank=True,
        help_text="Mute expiry; empty means the mute has no end",
    )
    muted_reason = models.TextField(blank=True)

    last_username_change = models.DateTimeField(null=True, blank=True)

    # Account status flags
    is_active = models.BooleanField(
        default=True,
        help_text="Whether this user account is active.",
    )
    is_staff = models.BooleanField(
        default=False,
        help_text="Whether the user can access the admin site.",
    )

    # Timestamps
    date_joined = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    USERNAME_FIELD = "username"
    REQUIRED_FIELDS = []

    objects = UserManager()

    class Meta:
        verbose_name = "user"
        verbose_name_plural = "users"
        ordering = ["username"]

    def __str__(self):
        return self.username

    @property
    def user_role(self) -> UserRole:
        return UserRole(self.role)

    def has_role(self, required) -> bool:
        """Return True if this user's role meets ``required``."""
        return self.user_role.satisfies(required)

    def is_muted_at(self, moment=None) -> bool:
        """
        Return True if a mute is in force at ``moment`` (default now).

        A mute without an expiry never lapses on its own.
        """
        if not self.muted:
            return False
        if self.muted_until is None:
            return True
        return (moment or timezone.now()) < self.muted_until

    @property
    def visible_online(self) -> bool:
        """Online status as other users see it."""
        return self.is_online and not self.appear_offline

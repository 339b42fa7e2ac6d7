"""
Constants for account registration and profile changes.

Import example:
    from authentication.constants import PROFILE_CONFIG
"""

from typing import Final


class PROFILE_CONFIG:
    """Configuration for registration and profile updates."""

    MIN_USERNAME_LENGTH: Final[int] = 3
    MAX_USERNAME_LENGTH: Final[int] = 30
    MIN_PASSWORD_LENGTH: Final[int] = 6

    # A username may change at most once per this many days
    USERNAME_CHANGE_COOLDOWN_DAYS: Final[int] = 7

"""
Constants and configuration for chat features.

This module centralizes configuration values for:
- Message content limits and paging
- Room invite codes
- Typing indicator lifetime
- Slash-command substitutions
- Profanity filtering

Import example:
    from chat.constants import MESSAGE_CONFIG, COMMAND_CONFIG
"""

from typing import Final


# =============================================================================
# Message Configuration
# =============================================================================


class MESSAGE_CONFIG:
    """Configuration for message operations."""

    MAX_CONTENT_LENGTH: Final[int] = 100  # Characters, after substitution

    # Listing
    DEFAULT_PAGE_SIZE: Final[int] = 50
    MAX_PAGE_SIZE: Final[int] = 100


# =============================================================================
# Room Configuration
# =============================================================================


class ROOM_CONFIG:
    """Configuration for rooms and invite codes."""

    MAX_NAME_LENGTH: Final[int] = 100

    # Invite codes are 6-digit numbers
    INVITE_CODE_MIN: Final[int] = 100000
    INVITE_CODE_MAX: Final[int] = 999999
    INVITE_CODE_MAX_ATTEMPTS: Final[int] = 20


# =============================================================================
# Typing Indicator Configuration
# =============================================================================


class TYPING_CONFIG:
    """Configuration for typing indicators."""

    # A typing entry older than this is considered stale
    TTL_SECONDS: Final[int] = 6
    CACHE_KEY_PREFIX: Final[str] = "chat:typing:"


# =============================================================================
# Slash Command Configuration
# =============================================================================


class COMMAND_CONFIG:
    """Slash commands that replace the whole message."""

    TEXT_COMMANDS: Final[dict] = {
        "/tableflip": "(╯°□°)╯︵ ┻━┻",
        "/unflip": "┬─┬ ノ( ゜-゜ノ)",
        "/shrug": "¯\\_(ツ)_/¯",
        "/kratos": "BOY!",
    }

    # /sus posts an image instead of text
    IMAGE_COMMANDS: Final[dict] = {
        "/sus": "https://i.kym-cdn.com/entries/icons/original/000/000/228/RAISE.jpg",
    }

    WHISPER_PREFIX: Final[str] = "/whisper"


# =============================================================================
# Mention Configuration
# =============================================================================


class MENTION_CONFIG:
    """Reserved mention tokens that address groups of members."""

    EVERYONE: Final[str] = "everyone"
    ADMIN: Final[str] = "admin"
    MOD: Final[str] = "mod"


# =============================================================================
# Profanity Filter Configuration
# =============================================================================


class PROFANITY_CONFIG:
    """Word list and leetspeak normalization for the profanity filter."""

    MASK_CHAR: Final[str] = "#"

    WORDS: Final[tuple] = (
        "fuck",
        "shit",
        "bitch",
        "cunt",
        "asshole",
        "bastard",
        "whore",
        "slut",
        "wanker",
        "piss",
    )

    # One character in, one character out, so match positions map back
    # onto the original text.
    LEET_MAP: Final[dict] = {
        "4": "a",
        "@": "a",
        "3": "e",
        "1": "i",
        "!": "i",
        "0": "o",
        "5": "s",
        "$": "s",
        "7": "t",
    }

    URL_PREFIXES: Final[tuple] = ("http://", "https://", "www.")

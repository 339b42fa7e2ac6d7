"""
Message content processing.

Pure text functions used by MessageService when a message is posted or
edited. Nothing here touches the database.

Functions:
    apply_command: Replace a slash command with its text or image payload
    parse_whisper: Split ``/whisper "name" text`` into recipient and text
    mask_profanity: Mask listed words, seeing through leetspeak, skipping URLs and @handles
    extract_mentions: Collect ``@name`` tokens
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from chat.constants import COMMAND_CONFIG, PROFANITY_CONFIG
from chat.models import MediaType

WHISPER_PATTERN = re.compile(r"""^["']([^"']+)["']\s+(.+)$""", re.DOTALL)
MENTION_PATTERN = re.compile(r"(?<![\w@])@([A-Za-z0-9_-]+)")
WHITESPACE_SPLIT = re.compile(r"(\s+)")
# A whole token that is one @handle, optionally followed by punctuation
MENTION_TOKEN = re.compile(r"^@[A-Za-z0-9_-]+[^\w\s]*$")


class WhisperFormatError(ValueError):
    """Raised for a ``/whisper`` message that is not ``/whisper "name" text``."""


@dataclass(frozen=True)
class CommandResult:
    """Message payload after slash-command substitution."""

    content: str
    media_url: str = ""
    media_type: str = ""
    is_command: bool = False


# =============================================================================
# Slash commands
# =============================================================================


def apply_command(content: str) -> CommandResult:
    """
    Substitute a slash command.

    The trimmed message must equal the command exactly; ``/shrug hi``
    is posted as typed.
    """
    command = content.strip()
    if command in COMMAND_CONFIG.TEXT_COMMANDS:
        return CommandResult(content=COMMAND_CONFIG.TEXT_COMMANDS[command], is_command=True)
    if command in COMMAND_CONFIG.IMAGE_COMMANDS:
        return CommandResult(
            content="",
            media_url=COMMAND_CONFIG.IMAGE_COMMANDS[command],
            media_type=MediaType.IMAGE,
            is_command=True,
        )
    return CommandResult(content=content)


# =============================================================================
# Whispers
# =============================================================================


def is_whisper(content: str) -> bool:
    stripped = content.strip()
    prefix = COMMAND_CONFIG.WHISPER_PREFIX
    return stripped == prefix or stripped.startswith(prefix + " ")


def parse_whisper(content: str) -> tuple[str, str]:
    """
    Parse ``/whisper "username" text`` (single or double quotes).

    A leading ``@`` on the username is dropped.

    Returns:
        (username, text)

    Raises:
        WhisperFormatError: If the message does not match the whisper form
    """
    body = content.strip()[len(COMMAND_CONFIG.WHISPER_PREFIX):].strip()
    match = WHISPER_PATTERN.match(body)
    if not match:
        raise WhisperFormatError('Use /whisper "username" message')

    username = match.group(1).strip().lstrip("@")
    text = match.group(2).strip()
    if not username or not text:
        raise WhisperFormatError('Use /whisper "username" message')
    return username, text


# =============================================================================
# Profanity filter
# =============================================================================


def _normalize(token: str) -> str:
    # Character by character so the result has the same length as token
    return "".join(
        PROFANITY_CONFIG.LEET_MAP.get(char) or (char.lower()[:1] or char)
        for char in token
    )


def _is_exempt(token: str) -> bool:
    return bool(
        token.lower().startswith(PROFANITY_CONFIG.URL_PREFIXES)
        or MENTION_TOKEN.match(token)
    )


def _mask_token(token: str) -> str:
    normalized = _normalize(token)
    masked = [False] * len(token)
    for word in PROFANITY_CONFIG.WORDS:
        start = normalized.find(word)
        while start != -1:
            for index in range(start, start + len(word)):
                masked[index] = True
            start = normalized.find(word, start + 1)

    if not any(masked):
        return token
    return "".join(
        PROFANITY_CONFIG.MASK_CHAR if hidden else char
        for char, hidden in zip(token, masked)
    )


def mask_profanity(text: str) -> str:
    """
    Replace listed words with ``#`` of the same length.

    Matching is case-insensitive and sees through digit and symbol
    substitutions such as ``sh1t`` or ``$lut``. Words inside longer
    tokens are masked too. Tokens that look like URLs or @mentions are
    left alone so links keep working and mentions still resolve.

    Example:
        >>> mask_profanity("you are a fuck")
        'you are a ####'
    """
    parts = WHITESPACE_SPLIT.split(text)
    return "".join(
        part if not part or part.isspace() or _is_exempt(part) else _mask_token(part)
        for part in parts
    )


# =============================================================================
# Mentions
# =============================================================================


def extract_mentions(content: str) -> list[str]:
    """
    Return the distinct ``@name`` tokens in order of appearance.

    Tokens are returned without the ``@`` and with their original case;
    ``foo@bar`` (an email-like string) is not a mention.
    """
    seen: set[str] = set()
    tokens = []
    for token in MENTION_PATTERN.findall(content):
        key = token.lower()
        if key not in seen:
            seen.add(key)
            tokens.append(token)
    return tokens

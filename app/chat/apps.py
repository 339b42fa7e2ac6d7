"""
Chat application configuration.

This app provides the chat system with:
- Public rooms and invite-code private rooms
- Messages with slash commands, whispers, mentions and a profanity filter
- Typing indicators
"""

from django.apps import AppConfig


class ChatConfig(AppConfig):
    """Configuration for the chat application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "chat"
    verbose_name = "Chat"

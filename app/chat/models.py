"""
Chat system models.

This module defines the data models for multi-room chat:
- Public rooms anyone can join
- Private rooms joined with a 6-digit invite code

Models:
    Room: Named chat room, public or private
    RoomMember: A user's membership in a room
    Message: Text and/or media posted to a room, optionally a whisper
    UnreadMention: A mention of a user that they have not seen yet

Design Decisions:
    - The invite code lives only on the room row; a private room always has
      one and a public room never does (database check constraint)
    - Messages are hard deleted
    - Whispers are ordinary messages with a recipient; listing filters them
      per reader so they never leave the server for anyone else
    - A room with no members is deleted (enforced by RoomService)
"""

from __future__ import annotations

from django.conf import settings
from django.db import models
from django.db.models import Q

from core.models import BaseModel


class MediaType(models.TextChoices):
    """Kind of media attached to a message."""

    IMAGE = "image", "Image"
    VIDEO = "video", "Video"


class Room(BaseModel):
    """
    A chat room.

    Fields:
        name: Display name (1-100 chars)
        created_by: User who created the room
        is_public: Public rooms are listed and joinable by everyone
        invite_code: 6-digit code required to join a private room

    Invariant:
        is_public is False exactly when invite_code is set.
    """

    name = models.CharField(max_length=100)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="created_rooms",
    )
    is_public = models.BooleanField(default=True, db_index=True)
    invite_code = models.CharField(
        max_length=6,
        unique=True,
        null=True,
        blank=True,
        help_text="Join code for private rooms",
    )
    members = models.ManyToManyField(
        settings.AUTH_USER_MODEL,
        through="RoomMember",
        related_name="chat_rooms",
    )

    class Meta:
        db_table = "chat_room"
        ordering = ["created_at", "id"]
        constraints = [
            models.CheckConstraint(
                condition=(
                    Q(is_public=True, invite_code__isnull=True)
                    | Q(is_public=False, invite_code__isnull=False)
                ),
                name="chat_room_private_has_invite_code",
            ),
        ]

    def __str__(self) -> str:
        return self.name

    def has_member(self, user) -> bool:
        return RoomMember.objects.filter(room=self, user=user).exists()


class RoomMember(models.Model):
    """A user's membership in a room. At most one per (room, user)."""

    room = models.ForeignKey(Room, on_delete=models.CASCADE, related_name="memberships")
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="room_memberships",
    )
    joined_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "chat_room_member"
        ordering = ["joined_at", "id"]
        constraints = [
            models.UniqueConstraint(
                fields=["room", "user"],
                name="unique_room_member",
            ),
        ]

    def __str__(self) -> str:
        return f"RoomMember(room={self.room_id}, user={self.user_id})"


class Message(BaseModel):
    """
    A message posted to a room.

    Fields:
        content: Text after command substitution and filtering (<=100 chars)
        media_url / media_type: Optional attached media (set together)
        whisper_to: Recipient if this is a whisper
        mentions: Raw mention tokens found in the content
        edited_at: Last edit time, null if never edited

    Room, sender and created_at never change after creation.
    """

    room = models.ForeignKey(Room, on_delete=models.CASCADE, related_name="messages")
    sender = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="chat_messages",
    )
    content = models.CharField(max_length=100, blank=True)
    media_url = models.URLField(max_length=500, blank=True)
    media_type = models.CharField(
        max_length=10,
        choices=MediaType.choices,
        blank=True,
    )
    whisper_to = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="received_whispers",
    )
    mentions = models.JSONField(default=list, blank=True)
    edited_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = "chat_message"
        ordering = ["created_at", "id"]
        indexes = [
            models.Index(fields=["room", "created_at"], name="chat_msg_room_created_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=(
                    Q(media_url="", media_type="")
                    | (~Q(media_url="") & ~Q(media_type=""))
                ),
                name="chat_message_media_url_and_type",
            ),
        ]

    def __str__(self) -> str:
        return f"Message({self.pk}) in room {self.room_id}"

    @property
    def is_whisper(self) -> bool:
        return self.whisper_to_id is not None

    @property
    def is_edited(self) -> bool:
        return self.edited_at is not None


class UnreadMention(models.Model):
    """A mention of ``user`` in ``message`` that the user has not seen."""

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="unread_mentions",
    )
    message = models.ForeignKey(
        Message, on_delete=models.CASCADE, related_name="unread_mentions"
    )
    room = models.ForeignKey(
        Room, on_delete=models.CASCADE, related_name="unread_mentions"
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "chat_unread_mention"
        ordering = ["-created_at", "-id"]
        constraints = [
            models.UniqueConstraint(
                fields=["user", "message"],
                name="unique_unread_mention",
            ),
        ]
        indexes = [
            models.Index(fields=["user", "room"], name="chat_mention_user_room_idx"),
        ]

    def __str__(self) -> str:
        return f"UnreadMention(user={self.user_id}, message={self.message_id})"

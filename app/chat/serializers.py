"""
Serializers for chat API.

This module provides DRF serializers for:
- Rooms (list/detail, create, rename, join)
- Room members
- Messages (read, create, edit)
- Unread mentions and typing indicators

Design Decisions:
    - Request serializers validate shape only; chat rules live in services
    - The invite code is only serialized for members of the room
    - Message input may be longer than the stored limit, because slash
      commands and whispers are rewritten before the limit applies
"""

from __future__ import annotations

from rest_framework import serializers

from authentication.serializers import UserSerializer
from chat.constants import MESSAGE_CONFIG, ROOM_CONFIG
from chat.models import MediaType, Message, Room, RoomMember, UnreadMention

# Raw input allowance for "/whisper "name" <text>" around a full-length text
MAX_RAW_CONTENT_LENGTH = MESSAGE_CONFIG.MAX_CONTENT_LENGTH * 5


# =============================================================================
# Room Serializers
# =============================================================================


class RoomSerializer(serializers.ModelSerializer):
    """
    Room for list and detail views.

    Context:
        request: Needed to decide membership
        member_room_ids: Optional precomputed set of room ids the
            requesting user belongs to (avoids a query per room)
    """

    created_by = UserSerializer(read_only=True)
    invite_code = serializers.SerializerMethodField()
    is_member = serializers.SerializerMethodField()
    member_count = serializers.SerializerMethodField()

    class Meta:
        model = Room
        fields = [
            "id",
            "name",
            "is_public",
            "invite_code",
            "created_by",
            "created_at",
            "is_member",
            "member_count",
        ]
        read_only_fields = fields

    def _is_member(self, obj: Room) -> bool:
        member_room_ids = self.context.get("member_room_ids")
        if member_room_ids is not None:
            return obj.id in member_room_ids
        request = self.context.get("request")
        if request is None or not request.user.is_authenticated:
            return False
        return obj.has_member(request.user)

    def get_is_member(self, obj: Room) -> bool:
        return self._is_member(obj)

    def get_invite_code(self, obj: Room) -> str | None:
        if obj.is_public or not self._is_member(obj):
            return None
        return obj.invite_code

    def get_member_count(self, obj: Room) -> int:
        annotated = getattr(obj, "member_count", None)
        if annotated is not None:
            return annotated
        return obj.memberships.count()


class RoomCreateSerializer(serializers.Serializer):
    """Create a room. Private rooms get an invite code."""

    name = serializers.CharField(max_length=ROOM_CONFIG.MAX_NAME_LENGTH)
    is_public = serializers.BooleanField(default=True)


class RoomUpdateSerializer(serializers.Serializer):
    """Rename a room."""

    name = serializers.CharField(max_length=ROOM_CONFIG.MAX_NAME_LENGTH)


class RoomJoinSerializer(serializers.Serializer):
    """Join a room; private rooms need the invite code."""

    invite_code = serializers.CharField(
        required=False, allow_blank=True, allow_null=True, max_length=20
    )


class RoomMemberSerializer(serializers.ModelSerializer):
    """A member of a room with public profile and presence."""

    user = UserSerializer(read_only=True)

    class Meta:
        model = RoomMember
        fields = ["user", "joined_at"]
        read_only_fields = fields


# =============================================================================
# Message Serializers
# =============================================================================


class MessageSerializer(serializers.ModelSerializer):
    """Message as returned to readers."""

    sender = UserSerializer(read_only=True)
    whisper_to = UserSerializer(read_only=True)
    is_whisper = serializers.BooleanField(read_only=True)
    is_edited = serializers.BooleanField(read_only=True)

    class Meta:
        model = Message
        fields = [
            "id",
            "room",
            "sender",
            "content",
            "media_url",
            "media_type",
            "whisper_to",
            "is_whisper",
            "mentions",
            "created_at",
            "edited_at",
            "is_edited",
        ]
        read_only_fields = fields


class MessageCreateSerializer(serializers.Serializer):
    """
    Post a message.

    Request body:
        {"content": "hello @bob"}
        {"content": "/whisper \"bob\" psst"}
        {"content": "", "media_url": "https://...", "media_type": "image"}
    """

    content = serializers.CharField(
        required=False,
        allow_blank=True,
        default="",
        trim_whitespace=False,
        max_length=MAX_RAW_CONTENT_LENGTH,
    )
    media_url = serializers.URLField(
        required=False, allow_blank=True, default="", max_length=500
    )
    media_type = serializers.ChoiceField(
        choices=MediaType.choices, required=False, allow_blank=True, default=""
    )


class MessageEditSerializer(serializers.Serializer):
    """Replace a message's text."""

    content = serializers.CharField(
        allow_blank=True, max_length=MAX_RAW_CONTENT_LENGTH
    )


class MentionUsernamesSerializer(serializers.Serializer):
    """Usernames to notify about a message."""

    usernames = serializers.ListField(
        child=serializers.CharField(max_length=40),
        allow_empty=False,
        max_length=50,
    )


# =============================================================================
# Mention & Typing Serializers
# =============================================================================


class UnreadMentionSerializer(serializers.ModelSerializer):
    """An unread mention with the message that caused it."""

    room_name = serializers.CharField(source="room.name", read_only=True)
    message = MessageSerializer(read_only=True)

    class Meta:
        model = UnreadMention
        fields = ["id", "room", "room_name", "message", "created_at"]
        read_only_fields = fields


class TypingSerializer(serializers.Serializer):
    """Start or stop typing."""

    is_typing = serializers.BooleanField(default=True)

"""
Django admin configuration for chat models.

Provides admin interfaces for:
- Room management (with inline members)
- Message moderation
"""

from django.contrib import admin

from chat.models import Message, Room, RoomMember, UnreadMention


class RoomMemberInline(admin.TabularInline):
    """Inline display of members in room admin."""

    model = RoomMember
    extra = 0
    readonly_fields = ["joined_at"]
    raw_id_fields = ["user"]


@admin.register(Room)
class RoomAdmin(admin.ModelAdmin):
    """Admin interface for Room model."""

    list_display = ["id", "name", "is_public", "invite_code", "created_by", "created_at"]
    list_filter = ["is_public", "created_at"]
    search_fields = ["name", "invite_code"]
    readonly_fields = ["created_at", "updated_at"]
    raw_id_fields = ["created_by"]
    inlines = [RoomMemberInline]
    ordering = ["-created_at"]


@admin.register(Message)
class MessageAdmin(admin.ModelAdmin):
    """Admin interface for Message model."""

    list_display = ["id", "room", "sender", "content", "media_type", "whisper_to", "created_at"]
    list_filter = ["media_type", "created_at"]
    search_fields = ["content", "sender__username", "room__name"]
    readonly_fields = ["created_at", "updated_at", "edited_at"]
    raw_id_fields = ["room", "sender", "whisper_to"]
    ordering = ["-created_at"]


@admin.register(UnreadMention)
class UnreadMentionAdmin(admin.ModelAdmin):
    """Admin interface for UnreadMention model."""

    list_display = ["id", "user", "room", "message", "created_at"]
    raw_id_fields = ["user", "room", "message"]

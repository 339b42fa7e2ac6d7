"""
Chat system service layer.

This module provides the business logic for rooms, messages, mentions
and typing indicators.

Services:
    RoomService: Room lifecycle (create, join, leave, rename, delete)
    MessageService: Message operations (send, edit, delete, list)
    MentionService: Unread mention bookkeeping
    TypingService: Cache-backed typing indicators with a TTL

Design Principles:
    - Services are stateless (use class methods)
    - Expected failures return ServiceResult.failure()
    - Unexpected failures raise exceptions
    - Every rule is enforced here, never only in the client

Usage:
    from chat.services import RoomService, MessageService

    result = RoomService.create_room(user, "Book club", is_public=False)
    room = result.data  # room.invite_code is a 6-digit string

    result = RoomService.join_room(other_user, room, invite_code="123456")

    result = MessageService.send_message(room, user, content="/shrug")
"""

from __future__ import annotations

import secrets
from typing import TYPE_CHECKING

from django.contrib.auth import get_user_model
from django.core.cache import cache
from django.db.models import Count, Q
from django.utils import timezone

from authentication.models import UserRole
from chat.constants import (
    MENTION_CONFIG,
    MESSAGE_CONFIG,
    ROOM_CONFIG,
    TYPING_CONFIG,
)
from chat.content import (
    WhisperFormatError,
    apply_command,
    extract_mentions,
    is_whisper,
    mask_profanity,
    parse_whisper,
)
from chat.models import MediaType, Message, Room, RoomMember, UnreadMention
from core.services import BaseService, ServiceResult

if TYPE_CHECKING:
    from collections.abc import Iterable

    from django.db.models import QuerySet

    from authentication.models import User


# =============================================================================
# Rooms
# =============================================================================


class RoomService(BaseService):
    """
    Service for room lifecycle operations.

    Methods:
        create_room: Create a room; private rooms get an invite code
        join_room: Join a room (idempotent)
        join_by_code: Join the private room carrying an invite code
        leave_room: Leave a room; the last member out deletes it
        rename_room / delete_room: Creator or admin-and-above only
        visible_rooms: Rooms a user may see in listings
    """

    @classmethod
    def _generate_invite_code(cls) -> str:
        """Return a 6-digit code not used by any room."""
        span = ROOM_CONFIG.INVITE_CODE_MAX - ROOM_CONFIG.INVITE_CODE_MIN + 1
        for _ in range(ROOM_CONFIG.INVITE_CODE_MAX_ATTEMPTS):
            code = str(ROOM_CONFIG.INVITE_CODE_MIN + secrets.randbelow(span))
            if not Room.objects.filter(invite_code=code).exists():
                return code
        raise RuntimeError("Could not allocate a unique invite code")

    @classmethod
    def create_room(
        cls, creator: User, name: str, is_public: bool = True
    ) -> ServiceResult[Room]:
        """
        Create a room with the creator as its first member.

        Error codes:
            INVALID_NAME: Name is blank or too long
        """
        name = (name or "").strip()
        if not name or len(name) > ROOM_CONFIG.MAX_NAME_LENGTH:
            return ServiceResult.failure(
                f"Room name must be 1-{ROOM_CONFIG.MAX_NAME_LENGTH} characters",
                error_code="INVALID_NAME",
            )

        with cls.atomic():
            room = Room.objects.create(
                name=name,
                created_by=creator,
                is_public=is_public,
                invite_code=None if is_public else cls._generate_invite_code(),
            )
            RoomMember.objects.create(room=room, user=creator)

        cls.get_logger().info(
            f"User {creator.id} created {'public' if is_public else 'private'} "
            f"room {room.id}"
        )
        return ServiceResult.success(room)

    @classmethod
    def join_room(
        cls, user: User, room: Room, invite_code: str | None = None
    ) -> ServiceResult[RoomMember]:
        """
        Add ``user`` to ``room``.

        Existing members get their current membership back. Public rooms
        admit anyone. Private rooms need the exact invite code, except
        for owners.

        Error codes:
            INVITE_CODE_REQUIRED: Private room and no code given
            INVALID_INVITE_CODE: Private room and the code does not match
        """
        existing = RoomMember.objects.filter(room=room, user=user).first()
        if existing is not None:
            return ServiceResult.success(existing)

        if not room.is_public and not user.has_role(UserRole.OWNER):
            supplied = (invite_code or "").strip()
            if not supplied:
                return ServiceResult.failure(
                    "This room is private. An invite code is required.",
                    error_code="INVITE_CODE_REQUIRED",
                )
            if supplied != room.invite_code:
                cls.get_logger().info(
                    f"User {user.id} gave a wrong invite code for room {room.id}"
                )
                return ServiceResult.failure(
                    "Invalid invite code", error_code="INVALID_INVITE_CODE"
                )

        membership, created = RoomMember.objects.get_or_create(room=room, user=user)
        if created:
            cls.get_logger().info(f"User {user.id} joined room {room.id}")
        return ServiceResult.success(membership)

    @classmethod
    def join_by_code(cls, user: User, invite_code: str) -> ServiceResult[Room]:
        """
        Join the private room whose invite code is ``invite_code``.

        Error codes:
            ROOM_NOT_FOUND: No room carries this code
        """
        room = Room.objects.filter(invite_code=(invite_code or "").strip()).first()
        if room is None:
            return ServiceResult.failure(
                "No room found for this invite code", error_code="ROOM_NOT_FOUND"
            )

        result = cls.join_room(user, room, invite_code=room.invite_code)
        if not result.success:
            return result
        return ServiceResult.success(room)

    @classmethod
    def leave_room(cls, user: User, room: Room) -> ServiceResult[dict]:
        """
        Remove ``user`` from ``room``.

        If nobody is left, the room is deleted along with its messages,
        memberships and unread mentions.

        Returns:
            ServiceResult with {"room_deleted": bool}

        Error codes:
            NOT_MEMBER: User is not in the room
        """
        room_id = room.id
        with cls.atomic():
            # Lock the room so two last members leaving together still
            # delete it exactly once.
            locked = Room.objects.select_for_update().filter(pk=room_id).first()
            if locked is None:
                return ServiceResult.failure("Room not found", error_code="ROOM_NOT_FOUND")

            deleted, _ = RoomMember.objects.filter(room=locked, user=user).delete()
            if not deleted:
                return ServiceResult.failure(
                    "You are not a member of this room", error_code="NOT_MEMBER"
                )

            room_deleted = not RoomMember.objects.filter(room=locked).exists()
            if room_deleted:
                locked.delete()

        cls.get_logger().info(f"User {user.id} left room {room_id}")
        if room_deleted:
            cls.get_logger().info(f"Room {room_id} deleted after its last member left")
        return ServiceResult.success({"room_deleted": room_deleted})

    @staticmethod
    def can_manage(actor: User, room: Room) -> bool:
        """Creators and admins-and-above may rename or delete a room."""
        return room.created_by_id == actor.id or actor.has_role(UserRole.ADMIN)

    @classmethod
    def rename_room(cls, actor: User, room: Room, name: str) -> ServiceResult[Room]:
        """
        Rename a room.

        Error codes:
            PERMISSION_DENIED: Actor is neither creator nor admin
            INVALID_NAME: Name is blank or too long
        """
        if not cls.can_manage(actor, room):
            return ServiceResult.failure(
                "Only the room creator or an admin can rename this room",
                error_code="PERMISSION_DENIED",
            )

        name = (name or "").strip()
        if not name or len(name) > ROOM_CONFIG.MAX_NAME_LENGTH:
            return ServiceResult.failure(
                f"Room name must be 1-{ROOM_CONFIG.MAX_NAME_LENGTH} characters",
                error_code="INVALID_NAME",
            )

        room.name = name
        room.save(update_fields=["name", "updated_at"])
        cls.get_logger().info(f"User {actor.id} renamed room {room.id}")
        return ServiceResult.success(room)

    @classmethod
    def delete_room(cls, actor: User, room: Room) -> ServiceResult[None]:
        """
        Delete a room and everything in it.

        Error codes:
            PERMISSION_DENIED: Actor is neither creator nor admin
        """
        if not cls.can_manage(actor, room):
            return ServiceResult.failure(
                "Only the room creator or an admin can delete this room",
                error_code="PERMISSION_DENIED",
            )

        room_id = room.id
        room.delete()
        cls.get_logger().info(f"User {actor.id} deleted room {room_id}")
        return ServiceResult.success(None)

    @classmethod
    def delete_empty_rooms(cls, room_ids: Iterable[int]) -> int:
        """Delete the rooms among ``room_ids`` that have no members left."""
        empty = Room.objects.filter(pk__in=list(room_ids)).annotate(
            member_count=Count("memberships")
        ).filter(member_count=0)
        empty_ids = list(empty.values_list("pk", flat=True))
        if empty_ids:
            Room.objects.filter(pk__in=empty_ids).delete()
            cls.get_logger().info(f"Deleted empty rooms {empty_ids}")
        return len(empty_ids)

    @staticmethod
    def visible_rooms(user: User) -> QuerySet[Room]:
        """Public rooms plus private rooms the user belongs to."""
        member_room_ids = RoomMember.objects.filter(user=user).values("room_id")
        return (
            Room.objects.filter(Q(is_public=True) | Q(pk__in=member_room_ids))
            .select_related("created_by")
            .annotate(member_count=Count("memberships"))
            .order_by("created_at", "id")
        )

    @staticmethod
    def can_read(user: User, room: Room) -> bool:
        return room.is_public or room.has_member(user)


# =============================================================================
# Messages
# =============================================================================


class MessageService(BaseService):
    """
    Service for message operations.

    Posting runs this pipeline:
        mute check -> room access -> slash command -> whisper parsing
        -> profanity mask -> validation -> save -> mention recording
    """

    @classmethod
    def check_mute(cls, user: User) -> ServiceResult[None]:
        """
        Refuse muted users; clear mutes whose time is up.

        Error codes:
            USER_MUTED: Mute in force (details: reason, muted_until)
        """
        if not user.muted:
            return ServiceResult.success(None)

        if not user.is_muted_at(timezone.now()):
            user.muted = False
            user.muted_until = None
            user.muted_reason = ""
            user.save(update_fields=["muted", "muted_until", "muted_reason", "updated_at"])
            cls.get_logger().info(f"Mute of user {user.id} expired")
            return ServiceResult.success(None)

        return ServiceResult.failure(
            "You are muted and cannot send messages",
            error_code="USER_MUTED",
            details={
                "reason": user.muted_reason or None,
                "muted_until": (
                    user.muted_until.isoformat() if user.muted_until else None
                ),
            },
        )

    @classmethod
    def send_message(
        cls,
        room: Room,
        sender: User,
        content: str = "",
        media_url: str = "",
        media_type: str = "",
    ) -> ServiceResult[Message]:
        """
        Post a message to a room.

        Sending to a public room joins it; private rooms require
        membership.

        Error codes:
            USER_MUTED: Sender is muted
            NOT_MEMBER: Private room and sender is not a member
            INVALID_WHISPER: Malformed /whisper
            WHISPER_TARGET_NOT_FOUND: Whisper recipient not in the room
            EMPTY_MESSAGE: Neither text nor media
            CONTENT_TOO_LONG: Text over the length limit
            INVALID_MEDIA: Media URL and type not given together, or bad type
        """
        mute = cls.check_mute(sender)
        if not mute.success:
            return mute

        if not room.has_member(sender):
            if not room.is_public:
                return ServiceResult.failure(
                    "You are not a member of this room", error_code="NOT_MEMBER"
                )
            RoomService.join_room(sender, room)

        content = content or ""
        media_url = media_url or ""
        media_type = media_type or ""
        whisper_to = None

        command = apply_command(content)
        if command.is_command:
            content = command.content
            if command.media_url:
                media_url, media_type = command.media_url, command.media_type
        elif is_whisper(content):
            try:
                target_name, content = parse_whisper(content)
            except WhisperFormatError as exc:
                return ServiceResult.failure(str(exc), error_code="INVALID_WHISPER")

            whisper_to = (
                get_user_model()
                .objects.filter(
                    username__iexact=target_name, room_memberships__room=room
                )
                .first()
            )
            if whisper_to is None:
                return ServiceResult.failure(
                    f"User '{target_name}' is not in this room",
                    error_code="WHISPER_TARGET_NOT_FOUND",
                )
            if whisper_to.id == sender.id:
                return ServiceResult.failure(
                    "You cannot whisper to yourself", error_code="INVALID_WHISPER"
                )

        if not command.is_command:
            content = mask_profanity(content)

        content = content.strip()
        invalid = cls._validate_payload(content, media_url, media_type)
        if invalid is not None:
            return invalid

        tokens = extract_mentions(content)
        with cls.atomic():
            message = Message.objects.create(
                room=room,
                sender=sender,
                content=content,
                media_url=media_url,
                media_type=media_type,
                whisper_to=whisper_to,
                mentions=tokens,
            )
            if tokens:
                MentionService.record_mentions(message, tokens)

        cls.get_logger().debug(
            f"User {sender.id} sent message {message.id} to room {room.id}"
        )
        return ServiceResult.success(message)

    @staticmethod
    def _validate_payload(
        content: str, media_url: str, media_type: str
    ) -> ServiceResult | None:
        if bool(media_url) != bool(media_type):
            return ServiceResult.failure(
                "Media URL and media type must be given together",
                error_code="INVALID_MEDIA",
            )
        if media_type and media_type not in MediaType.values:
            return ServiceResult.failure(
                f"Media type must be one of: {', '.join(MediaType.values)}",
                error_code="INVALID_MEDIA",
            )
        if not content and not media_url:
            return ServiceResult.failure(
                "Message must have text or media", error_code="EMPTY_MESSAGE"
            )
        if len(content) > MESSAGE_CONFIG.MAX_CONTENT_LENGTH:
            return ServiceResult.failure(
                f"Message cannot exceed {MESSAGE_CONFIG.MAX_CONTENT_LENGTH} characters",
                error_code="CONTENT_TOO_LONG",
            )
        return None

    @classmethod
    def edit_message(
        cls, user: User, message: Message, content: str
    ) -> ServiceResult[Message]:
        """
        Replace a message's text.

        Only the author may edit, whatever their role. The new text is
        filtered like a new post; mentions are not re-sent.

        Error codes:
            NOT_AUTHOR: Actor did not write the message
            EMPTY_MESSAGE / CONTENT_TOO_LONG: Invalid new text
        """
        if message.sender_id != user.id:
            return ServiceResult.failure(
                "You can only edit your own messages", error_code="NOT_AUTHOR"
            )

        content = mask_profanity((content or "").strip())
        invalid = cls._validate_payload(content, message.media_url, message.media_type)
        if invalid is not None:
            return invalid

        message.content = content
        message.edited_at = timezone.now()
        message.save(update_fields=["content", "edited_at", "updated_at"])

        cls.get_logger().info(f"User {user.id} edited message {message.id}")
        return ServiceResult.success(message)

    @classmethod
    def delete_message(cls, user: User, message: Message) -> ServiceResult[None]:
        """
        Permanently delete a message.

        Allowed for the author and for moderators and above.

        Error codes:
            PERMISSION_DENIED: Neither author nor moderator
        """
        is_author = message.sender_id == user.id
        if not (is_author or user.has_role(UserRole.MODERATOR)):
            return ServiceResult.failure(
                "You can only delete your own messages",
                error_code="PERMISSION_DENIED",
            )

        message_id, room_id = message.id, message.room_id
        message.delete()
        cls.get_logger().info(
            f"User {user.id} deleted message {message_id} in room {room_id}"
            + ("" if is_author else " (moderation)")
        )
        return ServiceResult.success(None)

    @staticmethod
    def visible_messages(room: Room, user: User) -> QuerySet[Message]:
        """
        Messages of ``room`` that ``user`` may read.

        Whispers are only returned to their sender and recipient.
        """
        return (
            Message.objects.filter(room=room)
            .filter(Q(whisper_to__isnull=True) | Q(sender=user) | Q(whisper_to=user))
            .select_related("sender", "whisper_to")
        )


# =============================================================================
# Mentions
# =============================================================================


class MentionService(BaseService):
    """
    Unread mention bookkeeping.

    Reserved tokens address groups of room members:
        @everyone  all members
        @admin     members with admin role or above
        @mod       members with moderator role or above

    Other tokens match member usernames case-insensitively. Authors are
    never notified about their own messages, and a whisper only ever
    notifies its recipient.
    """

    @classmethod
    def resolve_recipients(cls, message: Message, tokens: Iterable[str]) -> list[User]:
        """Members of the message's room addressed by ``tokens``."""
        members = get_user_model().objects.filter(
            room_memberships__room_id=message.room_id
        ).exclude(pk=message.sender_id)
        if message.whisper_to_id is not None:
            members = members.filter(pk=message.whisper_to_id)

        query = Q()
        for token in tokens:
            key = token.lower()
            if key == MENTION_CONFIG.EVERYONE:
                return list(members)
            if key == MENTION_CONFIG.ADMIN:
                query |= Q(role__in=UserRole.at_least(UserRole.ADMIN))
            elif key == MENTION_CONFIG.MOD:
                query |= Q(role__in=UserRole.at_least(UserRole.MODERATOR))
            else:
                query |= Q(username__iexact=token)

        if not query:
            return []
        return list(members.filter(query).distinct())

    @classmethod
    def record_mentions(cls, message: Message, tokens: Iterable[str]) -> int:
        """Create unread mentions for everyone ``tokens`` address."""
        recipients = cls.resolve_recipients(message, tokens)
        UnreadMention.objects.bulk_create(
            [
                UnreadMention(user=user, message=message, room_id=message.room_id)
                for user in recipients
            ],
            ignore_conflicts=True,
        )
        if recipients:
            cls.get_logger().debug(
                f"Message {message.id} mentioned {len(recipients)} user(s)"
            )
        return len(recipients)

    @classmethod
    def record_for_usernames(
        cls, actor: User, message: Message, usernames: list[str]
    ) -> ServiceResult[int]:
        """
        Record mentions for an explicit list of usernames.

        Error codes:
            NOT_AUTHOR: Only the author may attach mentions to a message
        """
        if message.sender_id != actor.id:
            return ServiceResult.failure(
                "Only the author can add mentions to a message",
                error_code="NOT_AUTHOR",
            )
        tokens = [name.strip().lstrip("@") for name in usernames if name.strip()]
        return ServiceResult.success(cls.record_mentions(message, tokens))

    @staticmethod
    def unread_for(user: User) -> QuerySet[UnreadMention]:
        return UnreadMention.objects.filter(user=user).select_related(
            "message", "message__sender", "room"
        )

    @staticmethod
    def counts_by_room(user: User) -> dict[int, int]:
        rows = (
            UnreadMention.objects.filter(user=user)
            .values("room_id")
            .annotate(count=Count("id"))
        )
        return {row["room_id"]: row["count"] for row in rows}

    @classmethod
    def clear_room(cls, user: User, room: Room) -> int:
        """Mark every mention of ``user`` in ``room`` as read."""
        deleted, _ = UnreadMention.objects.filter(user=user, room=room).delete()
        return deleted


# =============================================================================
# Typing indicators
# =============================================================================


class TypingService(BaseService):
    """
    Typing indicators stored in the Django cache.

    Each (room, user) pair has its own cache key holding the moment the
    "typing" state lapses, so concurrent writers never touch each other's
    entry. Readers drop lapsed entries and the cache timeout removes them,
    so a client that disappears mid-sentence stops showing as typing after
    the TTL without ever sending "stopped".

    Clients repeat ``set_typing(..., True)`` while the user keeps typing.
    """

    @staticmethod
    def _key(room_id: int, user_id: int) -> str:
        return f"{TYPING_CONFIG.CACHE_KEY_PREFIX}{room_id}:{user_id}"

    @classmethod
    def set_typing(cls, room: Room, user: User, is_typing: bool) -> ServiceResult[None]:
        """
        Start or stop the user's typing indicator in ``room``.

        Error codes:
            NOT_MEMBER: Only members may publish typing state
        """
        if not room.has_member(user):
            return ServiceResult.failure(
                "You are not a member of this room", error_code="NOT_MEMBER"
            )

        key = cls._key(room.id, user.id)
        if is_typing:
            expires = timezone.now().timestamp() + TYPING_CONFIG.TTL_SECONDS
            cache.set(key, expires, timeout=TYPING_CONFIG.TTL_SECONDS)
        else:
            cache.delete(key)
        return ServiceResult.success(None)

    @classmethod
    def get_typing(cls, room: Room, exclude_user: User | None = None) -> list[User]:
        """Users currently typing in ``room``, oldest entry first."""
        member_ids = RoomMember.objects.filter(room=room).values_list(
            "user_id", flat=True
        )
        if exclude_user is not None:
            member_ids = member_ids.exclude(user_id=exclude_user.id)

        keys = {cls._key(room.id, user_id): user_id for user_id in member_ids}
        if not keys:
            return []

        now = timezone.now().timestamp()
        entries = {
            keys[key]: expires
            for key, expires in cache.get_many(list(keys)).items()
            if expires > now
        }
        if not entries:
            return []

        users = get_user_model().objects.in_bulk(list(entries))
        ordered = sorted(entries, key=entries.get)
        return [users[user_id] for user_id in ordered if user_id in users]

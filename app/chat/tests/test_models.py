"""
Tests for chat models and their database constraints.
"""

import pytest
from django.db import IntegrityError, transaction
from django.utils import timezone

from chat.models import Message, Room, RoomMember
from chat.tests.factories import MessageFactory, PrivateRoomFactory, RoomFactory


@pytest.mark.django_db
class TestRoom:
    def test_private_room_needs_invite_code(self, creator):
        with pytest.raises(IntegrityError), transaction.atomic():
            Room.objects.create(name="Broken", created_by=creator, is_public=False)

    def test_public_room_cannot_have_invite_code(self, creator):
        with pytest.raises(IntegrityError), transaction.atomic():
            Room.objects.create(
                name="Broken", created_by=creator, is_public=True, invite_code="123456"
            )

    def test_invite_codes_are_unique(self, creator):
        PrivateRoomFactory(created_by=creator, invite_code="111111")
        with pytest.raises(IntegrityError), transaction.atomic():
            PrivateRoomFactory(created_by=creator, invite_code="111111")

    def test_has_member(self, public_room, member, outsider):
        assert public_room.has_member(member)
        assert public_room.has_member(public_room.created_by)
        assert not public_room.has_member(outsider)

    def test_one_membership_per_user(self, public_room, member):
        with pytest.raises(IntegrityError), transaction.atomic():
            RoomMember.objects.create(room=public_room, user=member)

    def test_deleting_room_removes_messages_and_memberships(self, public_room):
        MessageFactory(room=public_room)
        room_id = public_room.id

        public_room.delete()

        assert not Message.objects.filter(room_id=room_id).exists()
        assert not RoomMember.objects.filter(room_id=room_id).exists()


@pytest.mark.django_db
class TestMessage:
    def test_media_url_without_type_rejected(self, public_room):
        with pytest.raises(IntegrityError), transaction.atomic():
            Message.objects.create(
                room=public_room,
                sender=public_room.created_by,
                media_url="https://example.com/cat.png",
            )

    def test_media_with_type_accepted(self, public_room):
        message = Message.objects.create(
            room=public_room,
            sender=public_room.created_by,
            media_url="https://example.com/cat.png",
            media_type="image",
        )
        assert message.pk is not None

    def test_flags(self, public_room, member):
        message = MessageFactory(room=public_room)
        assert not message.is_whisper
        assert not message.is_edited

        message.whisper_to = member
        message.edited_at = timezone.now()
        assert message.is_whisper
        assert message.is_edited

    def test_default_ordering_is_oldest_first(self):
        room = RoomFactory()
        first = MessageFactory(room=room)
        second = MessageFactory(room=room)

        assert list(Message.objects.filter(room=room)) == [first, second]

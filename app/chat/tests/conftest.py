"""
Test configuration and fixtures for chat tests.

This module provides:
- Users at each role
- A public room and a private room, each with a member besides the creator
- API clients logged in as those users

Usage:
    def test_example(public_room, member_client):
        response = member_client.get(f"/api/rooms/{public_room.id}/messages")
        assert response.status_code == 200
"""

import pytest
from django.core.cache import cache

from authentication.models import UserRole
from authentication.tests.factories import UserFactory
from chat.models import RoomMember
from chat.tests.factories import PrivateRoomFactory, RoomFactory


@pytest.fixture(autouse=True)
def clear_cache():
    """Typing indicators live in the cache; start every test empty."""
    cache.clear()
    yield
    cache.clear()


# =============================================================================
# User Fixtures
# =============================================================================


@pytest.fixture
def creator(db):
    """User who creates the test rooms."""
    return UserFactory(username="creator")


@pytest.fixture
def member(db):
    """Regular user who belongs to the test rooms."""
    return UserFactory(username="member")


@pytest.fixture
def outsider(db):
    """Regular user who belongs to no room."""
    return UserFactory(username="outsider")


@pytest.fixture
def moderator(db):
    return UserFactory(username="moddy", role=UserRole.MODERATOR)


@pytest.fixture
def admin(db):
    return UserFactory(username="adminna", role=UserRole.ADMIN)


@pytest.fixture
def owner(db):
    return UserFactory(username="ownie", role=UserRole.OWNER)


# =============================================================================
# Room Fixtures
# =============================================================================


@pytest.fixture
def public_room(creator, member):
    room = RoomFactory(name="Lobby", created_by=creator)
    RoomMember.objects.create(room=room, user=member)
    return room


@pytest.fixture
def private_room(creator, member):
    room = PrivateRoomFactory(name="Secret", created_by=creator, invite_code="424242")
    RoomMember.objects.create(room=room, user=member)
    return room


# =============================================================================
# API Client Fixtures
# =============================================================================


@pytest.fixture
def creator_client(authenticated_client_factory, creator):
    return authenticated_client_factory(creator)


@pytest.fixture
def member_client(authenticated_client_factory, member):
    return authenticated_client_factory(member)


@pytest.fixture
def outsider_client(authenticated_client_factory, outsider):
    return authenticated_client_factory(outsider)

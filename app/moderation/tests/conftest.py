"""
Test configuration and fixtures for moderation tests.

One user per role, plus API clients for the staff roles.
"""

import pytest

from authentication.models import UserRole
from authentication.tests.factories import UserFactory


@pytest.fixture
def regular(db):
    return UserFactory(username="regular")


@pytest.fixture
def moderator(db):
    return UserFactory(username="moddy", role=UserRole.MODERATOR)


@pytest.fixture
def other_moderator(db):
    return UserFactory(username="moddy2", role=UserRole.MODERATOR)


@pytest.fixture
def admin(db):
    return UserFactory(username="adminna", role=UserRole.ADMIN)


@pytest.fixture
def owner(db):
    return UserFactory(username="ownie", role=UserRole.OWNER)


@pytest.fixture
def regular_client(authenticated_client_factory, regular):
    return authenticated_client_factory(regular)


@pytest.fixture
def moderator_client(authenticated_client_factory, moderator):
    return authenticated_client_factory(moderator)


@pytest.fixture
def admin_client(authenticated_client_factory, admin):
    return authenticated_client_factory(admin)

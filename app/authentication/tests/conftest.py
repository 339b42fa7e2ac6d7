"""
Test configuration and fixtures for authentication tests.

Usage:
    def test_example(user, user_client):
        response = user_client.get("/api/user")
        assert response.status_code == 200
"""

import pytest

from authentication.models import UserRole
from authentication.tests.factories import UserFactory


@pytest.fixture
def user(db):
    """A regular user with the default test password."""
    return UserFactory(username="alice")


@pytest.fixture
def other_user(db):
    return UserFactory(username="bob")


@pytest.fixture
def moderator(db):
    return UserFactory(username="mod_mary", role=UserRole.MODERATOR)


@pytest.fixture
def user_client(authenticated_client_factory, user):
    """API client logged in as ``user``."""
    return authenticated_client_factory(user)

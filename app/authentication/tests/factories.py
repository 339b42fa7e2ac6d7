"""
Factory Boy factories for authentication models.

Usage:
    from authentication.tests.factories import UserFactory

    user = UserFactory()
    moderator = UserFactory(role=UserRole.MODERATOR)
    muted = UserFactory(muted=True, muted_until=timezone.now() + timedelta(hours=1))
"""

import factory

from authentication.models import User, UserRole

DEFAULT_PASSWORD = "testpass123"


class UserFactory(factory.django.DjangoModelFactory):
    """
    Factory for User model.

    Users are created through UserManager.create_user() so passwords are
    hashed. Every user's password is DEFAULT_PASSWORD unless given.
    """

    class Meta:
        model = User
        skip_postgeneration_save = True

    username = factory.Sequence(lambda n: f"user{n}")
    role = UserRole.USER
    is_active = True

    @classmethod
    def _create(cls, model_class, *args, **kwargs):
        """Override create to use UserManager.create_user()."""
        password = kwargs.pop("password", DEFAULT_PASSWORD)
        return model_class.objects.create_user(
            username=kwargs.pop("username"), password=password, **kwargs
        )

"""
Custom user manager for username-based accounts.

Related files:
    - models.py: User model that uses this manager

Security:
    - Passwords are hashed via set_password()
"""

from django.contrib.auth.models import BaseUserManager


class UserManager(BaseUserManager):
    """
    Manager for the User model.

    Usage:
        user = User.objects.create_user(username="alice", password="secret1")
        owner = User.objects.create_superuser(username="root", password="...")
    """

    def create_user(self, username, password=None, **extra_fields):
        """
        Create and save a regular user.

        Raises:
            ValueError: If username is not provided
        """
        if not username:
            raise ValueError("The Username field must be set")

        extra_fields.setdefault("is_staff", False)
        extra_fields.setdefault("is_superuser", False)

        user = self.model(username=username, **extra_fields)
        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()

        user.save(using=self._db)
        return user

    def create_superuser(self, username, password=None, **extra_fields):
        """
        Create and save a superuser.

        Superusers hold the owner role so chat permissions and Django
        admin access agree.
        """
        from authentication.models import UserRole

        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        extra_fields.setdefault("role", UserRole.OWNER)

        if extra_fields.get("is_staff") is not True:
            raise ValueError("Superuser must have is_staff=True.")
        if extra_fields.get("is_superuser") is not True:
            raise ValueError("Superuser must have is_superuser=True.")

        return self.create_user(username, password, **extra_fields)

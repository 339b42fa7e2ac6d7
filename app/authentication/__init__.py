"""
Authentication application.

This app provides username/password accounts, cookie sessions, presence
and the role hierarchy the rest of the project checks against.

Key components:
    - User model: Username-based user with role, status and moderation state
    - AuthService: Registration, login, profile changes and account deletion
    - SuspendedUserMiddleware: Ends the sessions of suspended users

Usage:
    from authentication.models import User, UserRole
    from authentication.services import AuthService
"""

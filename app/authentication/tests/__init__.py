"""
Tests for authentication app.

This package contains test modules for:
- test_models.py: User and UserRole tests
- test_services.py: AuthService tests
- test_views.py: API endpoint and middleware tests
- test_permissions.py: Role permission class tests

Usage:
    pytest authentication/tests/
    pytest authentication/tests/test_models.py
"""

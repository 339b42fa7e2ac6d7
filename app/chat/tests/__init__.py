"""
Tests for chat app.

This package contains test modules for:
- test_content.py: Slash commands, profanity filter, mention parsing
- test_models.py: Room, RoomMember, Message model tests
- test_services.py: Room, message, mention and typing service tests
- test_views.py: REST API endpoint tests

Usage:
    pytest chat/tests/
    pytest chat/tests/test_services.py
"""

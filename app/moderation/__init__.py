"""
Moderation app.

Mute, suspend and role management for chat users, gated by the role
hierarchy defined in authentication.models.UserRole.
"""

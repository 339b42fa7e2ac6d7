"""
Permission classes for chat API.

This module provides DRF object permissions for rooms:
- CanReadRoom: Public rooms, or private rooms the user belongs to
- IsRoomMember: Members only

Role checks (moderator, admin) live in authentication.permissions;
rules that depend on who wrote a message live in MessageService.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rest_framework import permissions

from chat.models import Room

if TYPE_CHECKING:
    from rest_framework.request import Request
    from rest_framework.views import APIView


class IsRoomMember(permissions.BasePermission):
    """Allows access only to members of the room."""

    message = "You are not a member of this room."
    code = "not_member"

    def has_object_permission(self, request: Request, view: APIView, obj: Room) -> bool:
        if not request.user.is_authenticated:
            return False
        return obj.has_member(request.user)


class CanReadRoom(IsRoomMember):
    """Allows anyone into public rooms and members into private ones."""

    def has_object_permission(self, request: Request, view: APIView, obj: Room) -> bool:
        if not request.user.is_authenticated:
            return False
        return obj.is_public or obj.has_member(request.user)

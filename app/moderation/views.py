"""
Moderation views.

URL Structure (mounted under /api/):
    users                       GET     moderator+
    users/{id}/mute             POST    moderator+
    users/{id}/unmute           POST    moderator+
    users/{id}/suspend          POST    admin+
    users/{id}/unsuspend        POST    admin+
    users/{id}/role             PATCH   admin+

Endpoint-level role checks are done by permission classes; whether the
actor may act on this particular target is decided by ModerationService.
"""

from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from authentication.models import User
from authentication.permissions import IsAdminOrAbove, IsModeratorOrAbove
from core.exceptions import NotFoundError
from core.responses import failure_response
from moderation.serializers import (
    ModeratedUserSerializer,
    MuteSerializer,
    RoleChangeSerializer,
    SuspendSerializer,
)
from moderation.services import ModerationService


def _get_target(user_id: int) -> User:
    target = User.objects.filter(pk=user_id).first()
    if target is None:
        raise NotFoundError("User not found", error_code="USER_NOT_FOUND")
    return target


class UserListView(APIView):
    """GET: All users with moderation state."""

    permission_classes = [IsAuthenticated, IsModeratorOrAbove]

    @extend_schema(
        operation_id="list_users",
        summary="List users",
        tags=["Moderation"],
        responses={200: ModeratedUserSerializer(many=True)},
    )
    def get(self, request):
        users = ModerationService.list_users()
        return Response(ModeratedUserSerializer(users, many=True).data)


class MuteView(APIView):
    """POST: Mute a user for a number of minutes."""

    permission_classes = [IsAuthenticated, IsModeratorOrAbove]

    @extend_schema(
        operation_id="mute_user",
        summary="Mute user",
        tags=["Moderation"],
        request=MuteSerializer,
        responses={200: ModeratedUserSerializer},
    )
    def post(self, request, user_id):
        target = _get_target(user_id)
        serializer = MuteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = ModerationService.mute(
            request.user,
            target,
            duration_minutes=serializer.validated_data["duration"],
            reason=serializer.validated_data["reason"],
        )
        if not result.success:
            return failure_response(result)
        return Response(ModeratedUserSerializer(result.data).data)


class UnmuteView(APIView):
    """POST: Lift a mute."""

    permission_classes = [IsAuthenticated, IsModeratorOrAbove]

    @extend_schema(
        operation_id="unmute_user",
        summary="Unmute user",
        tags=["Moderation"],
        request=None,
        responses={200: ModeratedUserSerializer},
    )
    def post(self, request, user_id):
        target = _get_target(user_id)
        result = ModerationService.unmute(request.user, target)
        if not result.success:
            return failure_response(result)
        return Response(ModeratedUserSerializer(result.data).data)


class SuspendView(APIView):
    """POST: Suspend a user."""

    permission_classes = [IsAuthenticated, IsAdminOrAbove]

    @extend_schema(
        operation_id="suspend_user",
        summary="Suspend user",
        tags=["Moderation"],
        request=SuspendSerializer,
        responses={200: ModeratedUserSerializer},
    )
    def post(self, request, user_id):
        target = _get_target(user_id)
        serializer = SuspendSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = ModerationService.suspend(
            request.user, target, reason=serializer.validated_data["reason"]
        )
        if not result.success:
            return failure_response(result)
        return Response(ModeratedUserSerializer(result.data).data)


class UnsuspendView(APIView):
    """POST: Lift a suspension."""

    permission_classes = [IsAuthenticated, IsAdminOrAbove]

    @extend_schema(
        operation_id="unsuspend_user",
        summary="Unsuspend user",
        tags=["Moderation"],
        request=None,
        responses={200: ModeratedUserSerializer},
    )
    def post(self, request, user_id):
        target = _get_target(user_id)
        result = ModerationService.unsuspend(request.user, target)
        if not result.success:
            return failure_response(result)
        return Response(ModeratedUserSerializer(result.data).data)


class RoleView(APIView):
    """PATCH: Change a user's role."""

    permission_classes = [IsAuthenticated, IsAdminOrAbove]

    @extend_schema(
        operation_id="change_user_role",
        summary="Change user role",
        tags=["Moderation"],
        request=RoleChangeSerializer,
        responses={200: ModeratedUserSerializer},
    )
    def patch(self, request, user_id):
        target = _get_target(user_id)
        serializer = RoleChangeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = ModerationService.change_role(
            request.user, target, serializer.validated_data["role"]
        )
        if not result.success:
            return failure_response(result)
        return Response(ModeratedUserSerializer(result.data).data)

"""
ViewSets for chat API.

This module provides REST API endpoints for the chat system:
- RoomViewSet: Room CRUD, membership, messages, typing, mention clearing
- JoinByCodeView: Join a private room by its invite code alone
- MessageViewSet: Edit, delete and mention operations on single messages
- UnreadMentionsView: The caller's unread mentions

URL Structure:
    /api/rooms                          GET, POST
    /api/rooms/{id}                     GET, PATCH, DELETE
    /api/rooms/{id}/join                POST
    /api/rooms/{id}/leave               POST
    /api/rooms/{id}/members             GET
    /api/rooms/{id}/messages            GET, POST
    /api/rooms/{id}/typing              GET, POST
    /api/rooms/{id}/mentions/clear      POST
    /api/rooms/join/{code}              POST
    /api/messages/{id}                  PATCH, DELETE
    /api/messages/{id}/mentions         POST
    /api/mentions/unread                GET

Design Decisions:
    - All operations go through the service layer
    - Failed ServiceResults become responses via core.responses
    - Private rooms are invisible (404) to non-members except via join
"""

from __future__ import annotations

from django.db.models import Q
from django.http import Http404
from drf_spectacular.utils import extend_schema, extend_schema_view
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from authentication.serializers import UserSerializer
from chat.models import Message, Room, RoomMember
from chat.pagination import MessageCursorPagination
from chat.permissions import CanReadRoom, IsRoomMember
from chat.serializers import (
    MentionUsernamesSerializer,
    MessageCreateSerializer,
    MessageEditSerializer,
    MessageSerializer,
    RoomCreateSerializer,
    RoomJoinSerializer,
    RoomMemberSerializer,
    RoomSerializer,
    RoomUpdateSerializer,
    TypingSerializer,
    UnreadMentionSerializer,
)
from chat.services import MentionService, MessageService, RoomService, TypingService
from core.exceptions import NotFoundError
from core.responses import failure_response


# =============================================================================
# Rooms
# =============================================================================


@extend_schema_view(
    list=extend_schema(operation_id="list_rooms", summary="List rooms", tags=["Chat - Rooms"]),
    create=extend_schema(
        operation_id="create_room",
        summary="Create room",
        tags=["Chat - Rooms"],
        request=RoomCreateSerializer,
        responses={201: RoomSerializer},
    ),
    retrieve=extend_schema(operation_id="get_room", summary="Get room", tags=["Chat - Rooms"]),
    partial_update=extend_schema(
        operation_id="rename_room",
        summary="Rename room",
        tags=["Chat - Rooms"],
        request=RoomUpdateSerializer,
        responses={200: RoomSerializer},
    ),
    destroy=extend_schema(operation_id="delete_room", summary="Delete room", tags=["Chat - Rooms"]),
)
class RoomViewSet(viewsets.GenericViewSet):
    """
    ViewSet for room operations.

    list:
        Public rooms plus private rooms the user belongs to.

    create:
        Create a room. The creator joins it; private rooms get a
        6-digit invite code, visible to members only.

    partial_update / destroy:
        Creator or admin-and-above only.

    join:
        Join a room; private rooms need ``invite_code`` (owners excepted).

    leave:
        Leave a room; the last member out deletes it.

    messages:
        GET lists readable messages (whispers only for their two parties)
        and clears the caller's unread mentions in the room.
        POST sends a message.
    """

    serializer_class = RoomSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = None
    lookup_value_regex = r"\d+"

    def get_queryset(self):
        if self.action in ("list", "retrieve"):
            return RoomService.visible_rooms(self.request.user)
        return Room.objects.select_related("created_by")

    def get_object(self):
        try:
            return super().get_object()
        except Http404:
            raise NotFoundError("Room not found", error_code="ROOM_NOT_FOUND") from None

    def get_permissions(self):
        if self.action in ("members", "messages"):
            return [IsAuthenticated(), CanReadRoom()]
        if self.action == "typing":
            return [IsAuthenticated(), IsRoomMember()]
        return [IsAuthenticated()]

    def _member_room_ids(self) -> set[int]:
        return set(
            RoomMember.objects.filter(user=self.request.user).values_list(
                "room_id", flat=True
            )
        )

    def list(self, request):
        rooms = self.get_queryset()
        serializer = RoomSerializer(
            rooms,
            many=True,
            context={"request": request, "member_room_ids": self._member_room_ids()},
        )
        return Response(serializer.data)

    def create(self, request):
        serializer = RoomCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = RoomService.create_room(
            creator=request.user,
            name=serializer.validated_data["name"],
            is_public=serializer.validated_data["is_public"],
        )
        if not result.success:
            return failure_response(result)

        return Response(
            RoomSerializer(result.data, context={"request": request}).data,
            status=status.HTTP_201_CREATED,
        )

    def retrieve(self, request, pk=None):
        room = self.get_object()
        return Response(RoomSerializer(room, context={"request": request}).data)

    def partial_update(self, request, pk=None):
        room = self.get_object()
        serializer = RoomUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = RoomService.rename_room(
            request.user, room, serializer.validated_data["name"]
        )
        if not result.success:
            return failure_response(result)
        return Response(RoomSerializer(result.data, context={"request": request}).data)

    def destroy(self, request, pk=None):
        room = self.get_object()
        result = RoomService.delete_room(request.user, room)
        if not result.success:
            return failure_response(result)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(
        operation_id="join_room",
        summary="Join room",
        tags=["Chat - Rooms"],
        request=RoomJoinSerializer,
        responses={200: RoomSerializer},
    )
    @action(detail=True, methods=["post"])
    def join(self, request, pk=None):
        room = self.get_object()
        serializer = RoomJoinSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = RoomService.join_room(
            request.user, room, invite_code=serializer.validated_data.get("invite_code")
        )
        if not result.success:
            return failure_response(result)
        return Response(RoomSerializer(room, context={"request": request}).data)

    @extend_schema(operation_id="leave_room", summary="Leave room", tags=["Chat - Rooms"], request=None)
    @action(detail=True, methods=["post"])
    def leave(self, request, pk=None):
        room = self.get_object()
        result = RoomService.leave_room(request.user, room)
        if not result.success:
            return failure_response(result)
        return Response({"message": "Left room", **result.data})

    @extend_schema(
        operation_id="list_room_members",
        summary="List room members",
        tags=["Chat - Rooms"],
        responses={200: RoomMemberSerializer(many=True)},
    )
    @action(detail=True, methods=["get"])
    def members(self, request, pk=None):
        room = self.get_object()
        memberships = RoomMember.objects.filter(room=room).select_related("user")
        return Response(RoomMemberSerializer(memberships, many=True).data)

    @extend_schema(
        operation_id="room_messages",
        summary="List or send messages",
        tags=["Chat - Messages"],
        request=MessageCreateSerializer,
        responses={200: MessageSerializer(many=True), 201: MessageSerializer},
    )
    @action(detail=True, methods=["get", "post"])
    def messages(self, request, pk=None):
        room = self.get_object()

        if request.method == "POST":
            serializer = MessageCreateSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)

            result = MessageService.send_message(
                room=room, sender=request.user, **serializer.validated_data
            )
            if not result.success:
                return failure_response(result)
            return Response(
                MessageSerializer(result.data).data, status=status.HTTP_201_CREATED
            )

        if room.is_public:
            # Reading a public room joins it
            RoomService.join_room(request.user, room)

        MentionService.clear_room(request.user, room)
        paginator = MessageCursorPagination()
        page = paginator.paginate_queryset(
            MessageService.visible_messages(room, request.user), request, view=self
        )
        return paginator.get_paginated_response(MessageSerializer(page, many=True).data)

    @extend_schema(
        operation_id="room_typing",
        summary="Get or set typing state",
        tags=["Chat - Rooms"],
        request=TypingSerializer,
    )
    @action(detail=True, methods=["get", "post"])
    def typing(self, request, pk=None):
        room = self.get_object()

        if request.method == "POST":
            serializer = TypingSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            result = TypingService.set_typing(
                room, request.user, serializer.validated_data["is_typing"]
            )
            if not result.success:
                return failure_response(result)

        typing_users = TypingService.get_typing(room, exclude_user=request.user)
        return Response({"typing": UserSerializer(typing_users, many=True).data})

    @extend_schema(
        operation_id="clear_room_mentions",
        summary="Clear unread mentions in room",
        tags=["Chat - Mentions"],
        request=None,
    )
    @action(detail=True, methods=["post"], url_path="mentions/clear")
    def clear_mentions(self, request, pk=None):
        room = self.get_object()
        cleared = MentionService.clear_room(request.user, room)
        return Response({"cleared": cleared})


class JoinByCodeView(APIView):
    """
    POST: Join the private room that carries ``code``.

    URL: /api/rooms/join/<code>
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="join_room_by_code",
        summary="Join room by invite code",
        tags=["Chat - Rooms"],
        request=None,
        responses={200: RoomSerializer},
    )
    def post(self, request, code):
        result = RoomService.join_by_code(request.user, code)
        if not result.success:
            return failure_response(result)
        return Response(RoomSerializer(result.data, context={"request": request}).data)


# =============================================================================
# Messages
# =============================================================================


@extend_schema_view(
    partial_update=extend_schema(
        operation_id="edit_message",
        summary="Edit message",
        tags=["Chat - Messages"],
        request=MessageEditSerializer,
        responses={200: MessageSerializer},
    ),
    destroy=extend_schema(
        operation_id="delete_message", summary="Delete message", tags=["Chat - Messages"]
    ),
)
class MessageViewSet(viewsets.GenericViewSet):
    """
    ViewSet for single-message operations.

    partial_update:
        Edit text. Author only, whatever their role.

    destroy:
        Delete. Author, or moderator and above.

    mentions:
        Author records mentions of the given usernames.
    """

    serializer_class = MessageSerializer
    permission_classes = [IsAuthenticated]
    lookup_value_regex = r"\d+"

    def get_queryset(self):
        user = self.request.user
        # Whispers between other users do not exist as far as the caller knows
        return Message.objects.filter(
            Q(whisper_to__isnull=True) | Q(sender=user) | Q(whisper_to=user)
        ).select_related("sender", "whisper_to", "room")

    def get_object(self):
        try:
            return super().get_object()
        except Http404:
            raise NotFoundError("Message not found", error_code="MESSAGE_NOT_FOUND") from None

    def partial_update(self, request, pk=None):
        message = self.get_object()
        serializer = MessageEditSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = MessageService.edit_message(
            request.user, message, serializer.validated_data["content"]
        )
        if not result.success:
            return failure_response(result)
        return Response(MessageSerializer(result.data).data)

    def destroy(self, request, pk=None):
        message = self.get_object()
        result = MessageService.delete_message(request.user, message)
        if not result.success:
            return failure_response(result)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(
        operation_id="record_message_mentions",
        summary="Record mentions for a message",
        tags=["Chat - Mentions"],
        request=MentionUsernamesSerializer,
    )
    @action(detail=True, methods=["post"])
    def mentions(self, request, pk=None):
        message = self.get_object()
        serializer = MentionUsernamesSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = MentionService.record_for_usernames(
            request.user, message, serializer.validated_data["usernames"]
        )
        if not result.success:
            return failure_response(result)
        return Response({"recorded": result.data})


class UnreadMentionsView(APIView):
    """
    GET: The caller's unread mentions, newest first, with per-room counts.

    URL: /api/mentions/unread

    Response:
        {
            "count": 3,
            "by_room": {"12": 2, "15": 1},
            "results": [...]
        }
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="list_unread_mentions",
        summary="Unread mentions",
        tags=["Chat - Mentions"],
        responses={200: UnreadMentionSerializer(many=True)},
    )
    def get(self, request):
        mentions = MentionService.unread_for(request.user)
        by_room = MentionService.counts_by_room(request.user)
        return Response(
            {
                "count": sum(by_room.values()),
                "by_room": {str(room_id): count for room_id, count in by_room.items()},
                "results": UnreadMentionSerializer(mentions, many=True).data,
            }
        )

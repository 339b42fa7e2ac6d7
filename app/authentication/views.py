"""
Authentication views.

This module provides API views for:
- Registration, login and logout (cookie sessions)
- The current user's account (read, profile update, deletion)
- Online status updates

Related files:
    - serializers.py: Request/response serialization
    - services.py: Business logic (AuthService)
    - urls.py: URL routing

Note:
    Error bodies carry ``message`` and ``error_code``; a suspended user
    trying to log in also gets ``reason`` and ``suspended_at``.
"""

from django.contrib.auth import update_session_auth_hash
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from authentication.serializers import (
    CurrentUserSerializer,
    DeleteAccountSerializer,
    LoginSerializer,
    ProfileUpdateSerializer,
    RegisterSerializer,
    StatusSerializer,
)
from authentication.services import AuthService
from core.responses import failure_response


# =============================================================================
# Session Views
# =============================================================================


class RegisterView(APIView):
    """
    POST: Create an account and log it in.

    URL: /api/register
    """

    permission_classes = [AllowAny]

    @extend_schema(
        summary="Register",
        tags=["Auth"],
        request=RegisterSerializer,
        responses={201: CurrentUserSerializer},
    )
    def post(self, request):
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = AuthService.register(
            serializer.validated_data["username"],
            serializer.validated_data["password"],
        )
        if not result.success:
            return failure_response(result)

        login_result = AuthService.login(
            request,
            serializer.validated_data["username"],
            serializer.validated_data["password"],
        )
        if not login_result.success:
            return failure_response(login_result)

        return Response(
            CurrentUserSerializer(login_result.data).data,
            status=status.HTTP_201_CREATED,
        )


class LoginView(APIView):
    """
    POST: Log in with username and password.

    URL: /api/login

    Returns:
        200 with the user, 401 for bad credentials, 403 when suspended
    """

    permission_classes = [AllowAny]

    @extend_schema(
        summary="Log in",
        tags=["Auth"],
        request=LoginSerializer,
        responses={200: CurrentUserSerializer},
    )
    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = AuthService.login(
            request,
            serializer.validated_data["username"],
            serializer.validated_data["password"],
        )
        if not result.success:
            return failure_response(result)
        return Response(CurrentUserSerializer(result.data).data)


class LogoutView(APIView):
    """
    POST: End the current session.

    URL: /api/logout
    """

    permission_classes = [AllowAny]

    @extend_schema(summary="Log out", tags=["Auth"], request=None, responses={200: None})
    def post(self, request):
        AuthService.logout(request)
        return Response({"message": "Logged out"})


# =============================================================================
# Account Views
# =============================================================================


class CurrentUserView(APIView):
    """
    GET: The authenticated user's account.
    DELETE: Delete the account (password confirmation required).

    URL: /api/user
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(summary="Current user", tags=["Auth"], responses={200: CurrentUserSerializer})
    def get(self, request):
        return Response(CurrentUserSerializer(request.user).data)

    @extend_schema(
        summary="Delete account",
        description=(
            "Deletes the account with its messages, memberships and created "
            "rooms. Rooms left without members are deleted too."
        ),
        tags=["Auth"],
        request=DeleteAccountSerializer,
        responses={204: None},
    )
    def delete(self, request):
        serializer = DeleteAccountSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = AuthService.delete_account(
            request.user, serializer.validated_data["password"]
        )
        if not result.success:
            return failure_response(result)

        AuthService.logout(request)
        return Response(status=status.HTTP_204_NO_CONTENT)


class ProfileView(APIView):
    """
    PATCH: Update username, password, avatar or visibility.

    URL: /api/user/profile

    Request body (all optional):
        {
            "username": "new_name",        // needs current_password, 7-day cooldown
            "current_password": "...",
            "new_password": "...",         // needs current_password
            "avatar_url": "https://...",
            "appear_offline": true
        }
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Update profile",
        tags=["Auth - Profile"],
        request=ProfileUpdateSerializer,
        responses={200: CurrentUserSerializer},
    )
    def patch(self, request):
        serializer = ProfileUpdateSerializer(
            data=request.data, context={"user": request.user}
        )
        serializer.is_valid(raise_exception=True)

        result = AuthService.update_profile(request.user, **serializer.validated_data)
        if not result.success:
            return failure_response(result)
        if serializer.validated_data.get("new_password"):
            # Keep this session valid after the password hash changes
            update_session_auth_hash(request, result.data)
        return Response(CurrentUserSerializer(result.data).data)


class UserStatusView(APIView):
    """
    POST: Set the caller's own online status.

    URL: /api/users/<id>/status
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Set online status",
        tags=["Auth - Profile"],
        request=StatusSerializer,
        responses={200: CurrentUserSerializer},
    )
    def post(self, request, user_id):
        serializer = StatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = AuthService.set_status(
            request.user, user_id, serializer.validated_data["is_online"]
        )
        if not result.success:
            return failure_response(result)
        return Response(CurrentUserSerializer(result.data).data)

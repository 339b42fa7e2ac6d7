"""
URL configuration for moderation API.

All URLs are prefixed with /api/ in the main URL configuration.
"""

from django.urls import path

from moderation.views import (
    MuteView,
    RoleView,
    SuspendView,
    UnmuteView,
    UnsuspendView,
    UserListView,
)

app_name = "moderation"

urlpatterns = [
    path("users", UserListView.as_view(), name="user-list"),
    path("users/<int:user_id>/mute", MuteView.as_view(), name="user-mute"),
    path("users/<int:user_id>/unmute", UnmuteView.as_view(), name="user-unmute"),
    path("users/<int:user_id>/suspend", SuspendView.as_view(), name="user-suspend"),
    path("users/<int:user_id>/unsuspend", UnsuspendView.as_view(), name="user-unsuspend"),
    path("users/<int:user_id>/role", RoleView.as_view(), name="user-role"),
]

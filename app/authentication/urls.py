"""
URL configuration for authentication app.

URL structure (mounted under /api/):
    register                - Create account and log in
    login                   - Start a session
    logout                  - End the session
    user                    - Current user (GET) / delete account (DELETE)
    user/profile            - Profile update (PATCH)
    users/<id>/status       - Own online status (POST)
"""

from django.urls import path

from authentication.views import (
    CurrentUserView,
    LoginView,
    LogoutView,
    ProfileView,
    RegisterView,
    UserStatusView,
)

app_name = "authentication"

urlpatterns = [
    path("register", RegisterView.as_view(), name="register"),
    path("login", LoginView.as_view(), name="login"),
    path("logout", LogoutView.as_view(), name="logout"),
    path("user", CurrentUserView.as_view(), name="current-user"),
    path("user/profile", ProfileView.as_view(), name="profile"),
    path("users/<int:user_id>/status", UserStatusView.as_view(), name="user-status"),
]

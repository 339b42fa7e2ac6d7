"""
URL configuration for Parlor.

URL Structure:
    /                                   - ReDoc API documentation
    /admin/                             - Django admin interface
    /health/                            - Health check endpoint (load balancers, Docker)
    /schema/                            - OpenAPI schema (YAML)
    /api/                               - JSON API
        register, login, logout         - Session lifecycle
        user                            - Current user (GET, DELETE)
        user/profile                    - Profile update (PATCH)
        users/{id}/status               - Online status (POST)
        rooms...                        - Rooms, messages, typing (see chat.urls)
        messages/{id}...                - Message edit/delete/mentions
        mentions/unread                 - Unread mentions
        users                           - Moderation user list
        users/{id}/mute|unmute          - Mutes (moderator+)
        users/{id}/suspend|unsuspend    - Suspensions (admin+)
        users/{id}/role                 - Role changes (admin+)

For more information, see:
https://docs.djangoproject.com/en/5.2/topics/http/urls/
"""

from django.contrib import admin
from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView, SpectacularRedocView

from core.views import health_check

# =============================================================================
# API Routes
# =============================================================================
api_patterns = [
    path("", include("authentication.urls")),
    path("", include("chat.urls")),
    path("", include("moderation.urls")),
]

urlpatterns = [
    # Documentation
    path("", SpectacularRedocView.as_view(url_name="schema"), name="redoc"),
    path("schema/", SpectacularAPIView.as_view(), name="schema"),
    # Admin
    path("admin/", admin.site.urls),
    # Health check (Docker, Kubernetes, load balancers)
    path("health/", health_check, name="health_check"),
    path("api/", include(api_patterns)),
]

# =============================================================================
# Admin Site Customization
# =============================================================================
admin.site.site_header = "Parlor Admin"
admin.site.site_title = "Parlor Admin"
admin.site.index_title = "Rooms, messages and users"

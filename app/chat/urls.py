"""
URL configuration for chat API.

URL Structure:
    Rooms:
        rooms                          GET, POST
        rooms/{id}                     GET, PATCH, DELETE
        rooms/{id}/join                POST
        rooms/{id}/leave               POST
        rooms/{id}/members             GET
        rooms/{id}/messages            GET, POST
        rooms/{id}/typing              GET, POST
        rooms/{id}/mentions/clear      POST
        rooms/join/{code}              POST

    Messages:
        messages/{id}                  PATCH, DELETE
        messages/{id}/mentions         POST

    Mentions:
        mentions/unread                GET

All URLs are prefixed with /api/ in the main URL configuration.
"""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from chat.views import JoinByCodeView, MessageViewSet, RoomViewSet, UnreadMentionsView

router = DefaultRouter(trailing_slash=False)
router.include_root_view = False
router.register(r"rooms", RoomViewSet, basename="room")
router.register(r"messages", MessageViewSet, basename="message")

app_name = "chat"

urlpatterns = [
    # Before the router so "join" is never read as a room id
    path("rooms/join/<str:code>", JoinByCodeView.as_view(), name="room-join-by-code"),
    path("mentions/unread", UnreadMentionsView.as_view(), name="unread-mentions"),
    path("", include(router.urls)),
]

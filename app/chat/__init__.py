"""
Chat app for room-based messaging.

This app handles:
- Public rooms and private rooms joined with an invite code
- Message posting with slash commands, whispers and a profanity filter
- @mentions and per-room unread mention counts
- Typing indicators

Related apps:
    - authentication: User model, roles and presence
    - moderation: Mutes checked before a message is accepted

Usage:
    from chat.services import MessageService, RoomService

    room = RoomService.create_room(user, name="Lobby").data

    result = MessageService.send_message(room, user, content="hello @bob")
    if not result.success:
        return failure_response(result)
"""

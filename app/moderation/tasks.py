"""
Celery tasks for moderation.

Mutes are also cleared lazily when a muted user next posts; this task
keeps the stored state (and the moderation user list) accurate for
users who never come back.

Usage:
    from moderation.tasks import release_expired_mutes

    release_expired_mutes.delay()
"""

import logging

from celery import shared_task

logger = logging.getLogger(__name__)


@shared_task(
    bind=True,
    autoretry_for=(Exception,),
    retry_backoff=True,
    retry_kwargs={"max_retries": 3},
)
def release_expired_mutes(self) -> int:
    """
    Clear every mute whose expiry has passed.

    Returns:
        Number of users unmuted
    """
    from moderation.services import ModerationService

    released = ModerationService.release_expired_mutes()
    logger.debug(f"release_expired_mutes released {released} user(s)")
    return released

"""
Celery configuration for Parlor.

Celery runs periodic housekeeping off the request path. Today that is
releasing expired mutes (moderation.tasks.release_expired_mutes), scheduled
by CELERY_BEAT_SCHEDULE in settings.

Redis is both broker and result backend. Tasks are auto-discovered from
the installed apps' tasks.py modules.

Usage:
    celery -A config worker -l info
    celery -A config beat -l info
"""

import os

from celery import Celery

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")

app = Celery("parlor")

# All Celery settings are prefixed with CELERY_ in settings.py
app.config_from_object("django.conf:settings", namespace="CELERY")

app.autodiscover_tasks()

"""
WSGI config for Parlor.

Provided for traditional deployments (gunicorn, mod_wsgi); ASGI via
Uvicorn is the primary entry point.

https://docs.djangoproject.com/en/5.2/howto/deployment/wsgi/
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")

application = get_wsgi_application()

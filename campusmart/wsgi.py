"""
WSGI config for the Campus Mart backend.

HTTP-only entry point; WebSocket push requires the ASGI application.
"""

import os

from django.core.wsgi import get_wsgi_application


os.environ.setdefault("DJANGO_SETTINGS_MODULE", "campusmart.settings")

application = get_wsgi_application()

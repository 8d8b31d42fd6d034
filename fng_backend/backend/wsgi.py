# backend/wsgi.py
"""
WSGI config for the FNG admin backend.

Defaults to dev settings; production deployments set
DJANGO_SETTINGS_MODULE=backend.settings.prod explicitly.
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "backend.settings.dev")

application = get_wsgi_application()

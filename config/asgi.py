"""
ASGI config for Sativar project.

Served by any ASGI server (Uvicorn, Daphne).
"""
import os

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings')

from django.core.asgi import get_asgi_application

application = get_asgi_application()

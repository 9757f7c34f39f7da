"""
WSGI entry point for the Captain Board backend.

    gunicorn board_backend.wsgi:application --log-file -
"""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "board_backend.settings")

application = get_wsgi_application()

"""
users/apps.py — App configuration for the "users" app

Identity endpoints (JWT login/refresh/logout/me), the AdminConfig model and
the captain role guard live here.
"""

from django.apps import AppConfig


class UsersConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'users'

"""
announcements/apps.py

AppConfig for the Announcements app.

Why this app exists
-------------------
The captain's announcement board:

1) /api/announcements/  — paginated feed + captain-only create/edit/delete
2) /board/              — the same feed rendered server-side, with composer,
                          edit form and image lightbox

Images are stored on an external image host; only their URLs live here.
"""
from django.apps import AppConfig


class AnnouncementsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "announcements"
    verbose_name = "Announcements"

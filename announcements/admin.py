"""
announcements/admin.py

Minimal admin for manual curation of the feed.
"""
from django.contrib import admin

from .models import Announcement


@admin.register(Announcement)
class AnnouncementAdmin(admin.ModelAdmin):
    list_display = ("short", "image_count", "date", "updated_at")
    list_filter = ("date",)
    search_fields = ("text",)
    ordering = ("-date", "-id")

    def short(self, obj):
        return (obj.text or "")[:80]

    def image_count(self, obj):
        return len(obj.image_list)

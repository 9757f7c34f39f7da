"""
users/admin.py

The captain's email is curated here; nothing else writes AdminConfig.
"""
from django.contrib import admin

from .models import AdminConfig


@admin.register(AdminConfig)
class AdminConfigAdmin(admin.ModelAdmin):
    list_display = ("key", "email", "updated_at")
    search_fields = ("key", "email")
    readonly_fields = ("updated_at",)

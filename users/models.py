"""
users/models.py

AdminConfig: small key → email rows read by the role guard.

Notes & design choices
----------------------
- The captain is whoever's email sits in the row keyed by
  settings.CAPTAIN_CONFIG_KEY ("admin" by default).
- Rows are managed from the Django admin only; the API never writes them.
- Emails are stored exactly as typed: the role check is case-sensitive.
"""
from django.db import models


class AdminConfig(models.Model):
    key = models.CharField(max_length=50, unique=True, help_text='Lookup key, e.g. "admin".')
    email = models.EmailField(help_text="Email of the identity that holds this role (exact match).")
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "admin config"
        verbose_name_plural = "admin config"
        ordering = ["key"]

    def __str__(self) -> str:
        return f"{self.key}: {self.email}"

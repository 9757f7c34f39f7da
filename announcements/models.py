"""
announcements/models.py

Data model for:
- Announcement: a captain's post (text + hosted image URLs) shown in the feed

Notes & design choices
----------------------
- text is stored trimmed and never empty; HTML escaping happens at render time.
- images is a JSON list of hosted URLs in display order, or NULL when the post
  has no images (never an empty list).
- The feed is ordered newest first; id breaks ties so pagination is stable.
- No version column: concurrent edits resolve last-write-wins.
"""
from django.db import models
from django.utils import timezone


class Announcement(models.Model):
    text = models.TextField(help_text="Announcement body as typed (plain text).")
    images = models.JSONField(null=True, blank=True, help_text="Ordered list of hosted image URLs.")
    date = models.DateTimeField(default=timezone.now, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-date", "-id"]
        indexes = [models.Index(fields=["-date", "-id"], name="announcement_feed_idx")]

    def __str__(self) -> str:
        return (self.text or "")[:60] + ("…" if len(self.text or "") > 60 else "")

    @property
    def image_list(self):
        return list(self.images or [])

"""
Test doubles shared by the announcements tests.
"""
from datetime import timedelta

from django.contrib.auth import get_user_model
from django.core.files.uploadedfile import SimpleUploadedFile
from django.utils import timezone

from announcements.exceptions import RepositoryError
from announcements.models import Announcement
from announcements.uploads import UploadResult
from users.models import AdminConfig

CAPTAIN_EMAIL = "captain@example.com"


def make_users():
    User = get_user_model()
    captain = User.objects.create_user(username="captain", email=CAPTAIN_EMAIL, password="pass12345")
    member = User.objects.create_user(username="member", email="member@example.com", password="pass12345")
    AdminConfig.objects.create(key="admin", email=CAPTAIN_EMAIL)
    return captain, member


def make_announcement(text="Hello", minutes_ago=0, images=None):
    return Announcement.objects.create(
        text=text,
        images=images,
        date=timezone.now() - timedelta(minutes=minutes_ago),
    )


def image_file(name="photo.png", content=b"\x89PNG fake"):
    return SimpleUploadedFile(name, content, content_type="image/png")


class FakeUploader:
    """Uploads succeed as https://img.example/<name> unless the name is in fail."""

    def __init__(self, fail=()):
        self.fail = set(fail)
        self.calls = []
        self.closed = False

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.closed = True

    def upload(self, images):
        images = list(images)
        self.calls.append([i.name for i in images])
        return [
            UploadResult(name=i.name, reason="boom") if i.name in self.fail
            else UploadResult(name=i.name, url=f"https://img.example/{i.name}")
            for i in images
        ]


class FakeRepository:
    """In-memory stand-in that records calls; set fail=True to simulate an outage."""

    def __init__(self, fail=False):
        self.fail = fail
        self.created = []
        self.updated = []
        self.records = {}

    def create(self, text, images=None):
        if self.fail:
            raise RepositoryError("Failed to post announcement.")
        pk = len(self.created) + 1
        record = Announcement(pk=pk, text=text, images=list(images or []) or None, date=timezone.now())
        self.created.append(record)
        self.records[pk] = record
        return record

    def update(self, pk, text, images=None):
        if self.fail:
            raise RepositoryError("Failed to update announcement.")
        record = Announcement(pk=pk, text=text, images=list(images or []) or None, date=timezone.now())
        self.updated.append(record)
        self.records[pk] = record
        return record

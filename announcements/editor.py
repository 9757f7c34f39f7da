"""
announcements/editor.py

Edit session for one announcement.

Already-hosted URLs and newly staged files are tracked separately. Saving
uploads only the staged files and writes images as retained-then-new, then
returns the updated record so the caller can re-render just that item.
"""
from dataclasses import dataclass, field
from typing import List, Optional

from .exceptions import EmptyAnnouncementText, ImageUploadFailed
from .models import Announcement
from .uploads import StagedImage, UploadResult, failed, succeeded_urls


@dataclass
class SaveOutcome:
    record: Announcement
    failures: List[UploadResult] = field(default_factory=list)


class EditSession:
    def __init__(self, repository, uploader, require_all_uploads: bool = False):
        self.repository = repository
        self.uploader = uploader
        self.require_all_uploads = require_all_uploads
        self.record_id = None
        self.text = ""
        self.hosted: List[str] = []
        self.staged: List[StagedImage] = []

    @property
    def is_open(self) -> bool:
        return self.record_id is not None

    def open(self, record_id, text, images=None):
        self.record_id = record_id
        self.text = text or ""
        self.hosted = list(images or [])
        self.staged = []
        return self

    @classmethod
    def for_record(cls, record: Announcement, repository, uploader, **kwargs):
        return cls(repository, uploader, **kwargs).open(record.pk, record.text, record.images)

    def remove_image(self, index: int) -> str:
        """Drop the hosted image at index; staged files are untouched."""
        if index < 0 or index >= len(self.hosted):
            raise IndexError(f"no image at index {index}")
        return self.hosted.pop(index)

    def add_images(self, files):
        for f in files:
            self.staged.append(f if isinstance(f, StagedImage) else StagedImage.from_upload(f))
        return self.staged

    @property
    def previews(self) -> List[str]:
        return self.hosted + [s.preview_url for s in self.staged]

    def save(self, text: Optional[str] = None) -> SaveOutcome:
        if not self.is_open:
            raise RuntimeError("edit session is not open")
        if text is not None:
            self.text = text
        new_text = (self.text or "").strip()
        if not new_text:
            raise EmptyAnnouncementText()

        results = self.uploader.upload(self.staged) if self.staged else []
        failures = failed(results)
        if failures and self.require_all_uploads:
            raise ImageUploadFailed(failures)

        images = self.hosted + succeeded_urls(results)
        record = self.repository.update(self.record_id, new_text, images)

        self.text = record.text
        self.hosted = record.image_list
        self.staged = []
        return SaveOutcome(record=record, failures=failures)

"""
announcements/composer.py

New-announcement flow: stage files, then post(text).

post() order of operations:
1) blank text → EmptyAnnouncementText (no upload, no store call)
2) busy       → ComposerBusy (one post at a time per composer)
3) upload staged files; with require_all_uploads any failure stops here
4) create the record with the URLs that made it
5) clear staged files only after the record exists
"""
import logging
from dataclasses import dataclass, field
from typing import List

from .exceptions import ComposerBusy, EmptyAnnouncementText, ImageUploadFailed
from .models import Announcement
from .uploads import StagedImage, UploadResult, failed, succeeded_urls

logger = logging.getLogger(__name__)


@dataclass
class PostOutcome:
    record: Announcement
    failures: List[UploadResult] = field(default_factory=list)


class Composer:
    def __init__(self, repository, uploader, require_all_uploads: bool = False):
        self.repository = repository
        self.uploader = uploader
        self.require_all_uploads = require_all_uploads
        self.staged: List[StagedImage] = []
        self.busy = False

    def stage(self, files):
        """Add files, skipping names that are already staged."""
        for f in files:
            image = f if isinstance(f, StagedImage) else StagedImage.from_upload(f)
            if any(s.name == image.name for s in self.staged):
                continue
            self.staged.append(image)
        return self.staged

    def unstage(self, name: str):
        self.staged = [s for s in self.staged if s.name != name]
        return self.staged

    def clear(self):
        self.staged = []

    def post(self, text) -> PostOutcome:
        text = (text or "").strip()
        if not text:
            raise EmptyAnnouncementText()
        if self.busy:
            raise ComposerBusy()

        self.busy = True
        try:
            results = self.uploader.upload(self.staged) if self.staged else []
            failures = failed(results)
            if failures and self.require_all_uploads:
                raise ImageUploadFailed(failures)

            record = self.repository.create(text, succeeded_urls(results))
            if failures:
                logger.warning(
                    "Announcement %s posted without %d image(s) that failed to upload.",
                    record.pk, len(failures),
                )
            self.clear()
            return PostOutcome(record=record, failures=failures)
        finally:
            self.busy = False

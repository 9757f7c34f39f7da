"""
announcements/repository.py

Thin wrapper around the Announcement table: paginated reads plus
create / full-replace update / delete.

Pagination is keyset based. A cursor is a signed token holding the (date, id)
of the last record of a page; the next page starts strictly after it in
(-date, -id) order. Callers treat cursors as opaque strings.

Database failures surface as RepositoryError so callers can tell "no records"
(an empty Page) apart from "could not read".
"""
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from django.core import signing
from django.db import DatabaseError
from django.db.models import Q
from django.utils import timezone
from django.utils.dateparse import parse_datetime

from .exceptions import AnnouncementNotFound, InvalidCursor, RepositoryError
from .models import Announcement

logger = logging.getLogger(__name__)

CURSOR_SALT = "announcements.cursor"


def encode_cursor(record: Announcement) -> str:
    return signing.dumps({"d": record.date.isoformat(), "id": record.pk}, salt=CURSOR_SALT, compress=True)


def decode_cursor(cursor: str):
    try:
        payload = signing.loads(cursor, salt=CURSOR_SALT)
        date = parse_datetime(payload["d"])
        pk = int(payload["id"])
    except (signing.BadSignature, KeyError, TypeError, ValueError):
        raise InvalidCursor()
    if date is None:
        raise InvalidCursor()
    return date, pk


def _normalize_images(images) -> Optional[List[str]]:
    urls = [u for u in (images or []) if u]
    return urls or None


@dataclass
class Page:
    records: List[Announcement] = field(default_factory=list)
    next_cursor: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return not self.records

    def __len__(self):
        return len(self.records)


class AnnouncementRepository:
    def __init__(self, queryset=None):
        self._queryset = queryset if queryset is not None else Announcement.objects.all()

    def _qs(self):
        return self._queryset.all()

    def list(self, page_size: int, after_cursor: Optional[str] = None) -> Page:
        if page_size < 1:
            raise ValueError("page_size must be positive")

        qs = self._qs().order_by("-date", "-id")
        if after_cursor:
            date, pk = decode_cursor(after_cursor)
            qs = qs.filter(Q(date__lt=date) | Q(date=date, id__lt=pk))

        try:
            records = list(qs[:page_size])
        except DatabaseError as exc:
            logger.exception("Failed to load announcements page.")
            raise RepositoryError() from exc

        if not records:
            return Page()
        return Page(records=records, next_cursor=encode_cursor(records[-1]))

    def get(self, pk) -> Announcement:
        try:
            return self._qs().get(pk=pk)
        except Announcement.DoesNotExist:
            raise AnnouncementNotFound()
        except DatabaseError as exc:
            logger.exception("Failed to read announcement %s.", pk)
            raise RepositoryError() from exc

    def create(self, text: str, images=None) -> Announcement:
        try:
            record = Announcement.objects.create(
                text=text,
                images=_normalize_images(images),
                date=timezone.now(),
            )
        except DatabaseError as exc:
            logger.exception("Failed to create announcement.")
            raise RepositoryError("Failed to post announcement.") from exc
        logger.info("Announcement %s created with %d image(s).", record.pk, len(record.image_list))
        return record

    def update(self, pk, text: str, images=None) -> Announcement:
        """Overwrite text and images of an existing record (last write wins)."""
        record = self.get(pk)
        record.text = text
        record.images = _normalize_images(images)
        try:
            record.save(update_fields=["text", "images", "updated_at"])
        except DatabaseError as exc:
            logger.exception("Failed to update announcement %s.", pk)
            raise RepositoryError("Failed to update announcement.") from exc
        logger.info("Announcement %s updated.", pk)
        return record

    def delete(self, pk) -> bool:
        """Remove the record; returns False when it was already gone."""
        try:
            deleted, _ = self._qs().filter(pk=pk).delete()
        except DatabaseError as exc:
            logger.exception("Failed to delete announcement %s.", pk)
            raise RepositoryError("Failed to delete announcement.") from exc
        if not deleted:
            logger.info("Announcement %s was already deleted.", pk)
        return bool(deleted)

"""
announcements/feed.py

Feed state for one viewer: the records rendered so far, the cursor to continue
from, and whether the "load more" control should be shown.

    idle ──load_page()──▶ loading ──▶ rendered ──▶ idle      (full page: more may exist)
                                          └──────▶ terminal  (empty or short page)

A session is an explicit object handed to whoever renders the feed; nothing
about pagination lives at module level.
"""
from typing import List, Optional

from .models import Announcement
from .repository import AnnouncementRepository


class FeedState:
    IDLE = "idle"
    LOADING = "loading"
    RENDERED = "rendered"
    TERMINAL = "terminal"


class FeedSession:
    def __init__(self, repository: AnnouncementRepository, page_size: int, cursor: Optional[str] = None):
        if page_size < 1:
            raise ValueError("page_size must be positive")
        self.repository = repository
        self.page_size = page_size
        self.cursor = cursor
        self.items: List[Announcement] = []
        self.state = FeedState.IDLE
        self.show_load_more = False
        self.pages_loaded = 0

    @property
    def exhausted(self) -> bool:
        return self.state == FeedState.TERMINAL

    def load_page(self, reset: bool = False) -> List[Announcement]:
        """Fetch the next page and append it; returns the records just added."""
        if reset:
            self.cursor = None
            self.items = []
            self.pages_loaded = 0
            self.state = FeedState.IDLE
        elif self.exhausted:
            return []

        self.state = FeedState.LOADING
        try:
            page = self.repository.list(self.page_size, self.cursor)
        except Exception:
            self.state = FeedState.IDLE
            raise

        if page.is_empty:
            self.show_load_more = False
            self.state = FeedState.TERMINAL
            return []

        self.state = FeedState.RENDERED
        self.items.extend(page.records)
        self.cursor = page.next_cursor
        self.pages_loaded += 1

        if len(page) < self.page_size:
            self.show_load_more = False
            self.state = FeedState.TERMINAL
        else:
            self.show_load_more = True
            self.state = FeedState.IDLE
        return page.records

    # -- targeted updates --------------------------------------------------
    def prepend(self, record: Announcement):
        self.items.insert(0, record)

    def replace(self, record: Announcement) -> bool:
        for i, item in enumerate(self.items):
            if item.pk == record.pk:
                self.items[i] = record
                return True
        return False

    def remove(self, pk) -> bool:
        before = len(self.items)
        self.items = [item for item in self.items if item.pk != pk]
        return len(self.items) != before

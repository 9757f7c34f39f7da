"""
announcements/lightbox.py

Paged viewer over one announcement's images. Built from the record's own image
list; next/prev stop at the ends.
"""


class Lightbox:
    def __init__(self, images, index=0):
        self.images = list(images or [])
        self.index = 0
        self.is_open = False
        if self.images:
            self.open(index)

    @classmethod
    def for_announcement(cls, record, index=0):
        return cls(record.image_list, index)

    def open(self, index=0):
        if not self.images:
            raise IndexError("announcement has no images")
        self.index = max(0, min(int(index), len(self.images) - 1))
        self.is_open = True
        return self.current

    def close(self):
        self.is_open = False

    @property
    def current(self):
        return self.images[self.index] if self.images else None

    @property
    def has_prev(self):
        return self.index > 0

    @property
    def has_next(self):
        return self.index < len(self.images) - 1

    @property
    def prev_index(self):
        return self.index - 1 if self.has_prev else self.index

    @property
    def next_index(self):
        return self.index + 1 if self.has_next else self.index

    def prev(self):
        self.index = self.prev_index
        return self.current

    def next(self):
        self.index = self.next_index
        return self.current

    def __len__(self):
        return len(self.images)

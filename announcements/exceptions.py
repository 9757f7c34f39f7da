"""
announcements/exceptions.py

Every failure a board action can end in. Views translate these into HTTP
statuses (API) or flash messages (board pages); nothing is retried.
"""


class AnnouncementError(Exception):
    """Base class for announcement board failures."""
    default_message = "Announcement operation failed."

    def __init__(self, message=None):
        super().__init__(message or self.default_message)

    @property
    def message(self):
        return self.args[0]


class EmptyAnnouncementText(AnnouncementError):
    default_message = "Please enter announcement text."


class ComposerBusy(AnnouncementError):
    default_message = "An announcement is already being posted."


class ImageUploadFailed(AnnouncementError):
    default_message = "One or more images failed to upload."

    def __init__(self, failures, message=None):
        super().__init__(message)
        self.failures = list(failures)


class RepositoryError(AnnouncementError):
    default_message = "The announcement store is unavailable."


class AnnouncementNotFound(RepositoryError):
    default_message = "Announcement not found."


class InvalidCursor(AnnouncementError):
    default_message = "Invalid pagination cursor."

"""
announcements/pages.py

Server-rendered board (session login):

- /board/                          feed; composer + delete buttons for the captain only
- /board/?pages=<n>                the first n pages ("load more" appends the next one)
- /board/post/                     POST new announcement (captain)
- /board/<id>/delete/              POST delete (captain)
- /board/<id>/edit/                GET form / POST save (captain)
- /board/<id>/images/<index>/      lightbox over one announcement's images

Every outcome the user should know about goes through django.contrib.messages.
"""
import logging

from django.conf import settings
from django.contrib import messages
from django.shortcuts import redirect, render
from django.urls import reverse
from django.views.decorators.http import require_http_methods, require_POST

from users.permissions import captain_required, identity_required, resolve_role

from .composer import Composer
from .editor import EditSession
from .exceptions import (
    AnnouncementNotFound,
    EmptyAnnouncementText,
    ImageUploadFailed,
    RepositoryError,
)
from .feed import FeedSession
from .lightbox import Lightbox
from .repository import AnnouncementRepository
from .uploads import get_upload_client

logger = logging.getLogger(__name__)


def _failure_names(failures):
    return ", ".join(f.name for f in failures)


def _pages_requested(request):
    raw = request.GET.get("pages", "")
    return max(1, int(raw)) if raw.isdigit() else 1


def _load_feed(pages=1):
    """Load the feed from the top, one page at a time, until `pages` are rendered."""
    feed = FeedSession(AnnouncementRepository(), settings.ANNOUNCEMENTS_PAGE_SIZE)
    load_error = None
    try:
        feed.load_page()
        while feed.pages_loaded < pages and not feed.exhausted:
            feed.load_page()
    except RepositoryError as exc:
        load_error = exc.message
    return feed, load_error


@identity_required
def board(request):
    feed, load_error = _load_feed(_pages_requested(request))
    return render(request, "announcements/board.html", {
        "role": resolve_role(request.user),
        "feed": feed,
        "load_error": load_error,
    })


@require_POST
@captain_required
def post_announcement(request):
    text = request.POST.get("text", "")

    with get_upload_client() as uploader:
        composer = Composer(
            AnnouncementRepository(),
            uploader,
            require_all_uploads=settings.ANNOUNCEMENTS_REQUIRE_ALL_UPLOADS,
        )
        composer.stage(request.FILES.getlist("images"))
        try:
            outcome = composer.post(text)
        except EmptyAnnouncementText as exc:
            messages.warning(request, exc.message)
            return redirect("board:feed")
        except ImageUploadFailed as exc:
            messages.error(request, f"❌ Images failed to upload: {_failure_names(exc.failures)}")
            return render(request, "announcements/board.html", _retry_context(request, text), status=502)
        except RepositoryError as exc:
            logger.error("Error posting announcement: %s", exc.message)
            messages.error(request, "❌ Failed to post announcement.")
            return render(request, "announcements/board.html", _retry_context(request, text), status=503)

    if outcome.failures:
        messages.warning(request, f"Posted without: {_failure_names(outcome.failures)}")
    messages.success(request, "✅ Announcement posted successfully!")
    return redirect("board:feed")


def _retry_context(request, text):
    feed, load_error = _load_feed()
    return {
        "role": resolve_role(request.user),
        "feed": feed,
        "load_error": load_error,
        "draft_text": text,
    }


@require_POST
@captain_required
def delete_announcement(request, pk):
    try:
        AnnouncementRepository().delete(pk)
    except RepositoryError as exc:
        logger.error("Error deleting announcement %s: %s", pk, exc.message)
        messages.error(request, "❌ Failed to delete announcement.")
        return redirect("board:feed")
    messages.success(request, "✅ Announcement deleted successfully!")
    return redirect("board:feed")


def _edit_form(request, record, repository, uploader, text=None, status=200):
    # Always index the Remove checkboxes against the stored images; the next POST reloads them.
    session = EditSession.for_record(
        record, repository, uploader,
        require_all_uploads=settings.ANNOUNCEMENTS_REQUIRE_ALL_UPLOADS,
    )
    if text is not None:
        session.text = text
    return render(request, "announcements/edit.html", {"session": session, "record": record}, status=status)


@require_http_methods(["GET", "POST"])
@captain_required
def edit_announcement(request, pk):
    repository = AnnouncementRepository()
    try:
        record = repository.get(pk)
    except AnnouncementNotFound:
        messages.error(request, "Announcement not found.")
        return redirect("board:feed")
    except RepositoryError as exc:
        messages.error(request, exc.message)
        return redirect("board:feed")

    with get_upload_client() as uploader:
        if request.method == "GET":
            return _edit_form(request, record, repository, uploader)

        text = request.POST.get("text", "")
        session = EditSession.for_record(
            record, repository, uploader,
            require_all_uploads=settings.ANNOUNCEMENTS_REQUIRE_ALL_UPLOADS,
        )
        removed = sorted({int(i) for i in request.POST.getlist("remove") if i.isdigit()}, reverse=True)
        for index in removed:
            if index < len(session.hosted):
                session.remove_image(index)
        session.add_images(request.FILES.getlist("new_images"))

        try:
            outcome = session.save(text)
        except EmptyAnnouncementText as exc:
            messages.warning(request, exc.message)
            return _edit_form(request, record, repository, uploader, text, status=400)
        except AnnouncementNotFound:
            messages.error(request, "❌ This announcement was deleted before your edit was saved.")
            return redirect("board:feed")
        except ImageUploadFailed as exc:
            messages.error(request, f"❌ Images failed to upload: {_failure_names(exc.failures)}")
            return _edit_form(request, record, repository, uploader, text, status=502)
        except RepositoryError as exc:
            logger.error("Error updating announcement %s: %s", pk, exc.message)
            messages.error(request, "❌ Failed to update announcement.")
            return _edit_form(request, record, repository, uploader, text, status=503)

    if outcome.failures:
        messages.warning(request, f"Saved without: {_failure_names(outcome.failures)}")
    messages.success(request, "✅ Announcement updated successfully!")
    return redirect(f"{reverse('board:feed')}#announcement-{outcome.record.pk}")


@identity_required
def image_viewer(request, pk, index):
    try:
        record = AnnouncementRepository().get(pk)
    except RepositoryError:
        messages.error(request, "Announcement not found.")
        return redirect("board:feed")
    if not record.image_list:
        return redirect("board:feed")

    lightbox = Lightbox.for_announcement(record, index)
    return render(request, "announcements/image.html", {"record": record, "lightbox": lightbox})

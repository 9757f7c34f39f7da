import pytest

from announcements.composer import Composer
from announcements.editor import EditSession
from announcements.exceptions import (
    ComposerBusy,
    EmptyAnnouncementText,
    ImageUploadFailed,
    RepositoryError,
)
from announcements.uploads import StagedImage

from .helpers import FakeRepository, FakeUploader, image_file


def staged(name):
    return StagedImage(name=name, content=b"img", content_type="image/png")


# --------------------------------------------------------------------------- #
# Composer                                                                    #
# --------------------------------------------------------------------------- #

@pytest.mark.parametrize("text", ["", "   ", "\n\t ", None])
def test_blank_text_is_rejected_before_any_io(text):
    repo, uploader = FakeRepository(), FakeUploader()
    composer = Composer(repo, uploader)
    composer.stage([staged("a.png")])

    with pytest.raises(EmptyAnnouncementText) as err:
        composer.post(text)

    assert err.value.message == "Please enter announcement text."
    assert repo.created == []
    assert uploader.calls == []
    assert [s.name for s in composer.staged] == ["a.png"]


def test_post_uploads_then_creates_and_clears_staged():
    repo, uploader = FakeRepository(), FakeUploader()
    composer = Composer(repo, uploader)
    composer.stage([staged("a.png"), staged("b.png")])

    outcome = composer.post("  Training moved to 6pm ")

    assert outcome.record.text == "Training moved to 6pm"
    assert outcome.record.images == ["https://img.example/a.png", "https://img.example/b.png"]
    assert outcome.failures == []
    assert composer.staged == []
    assert composer.busy is False


def test_stage_skips_duplicate_names_and_unstage():
    composer = Composer(FakeRepository(), FakeUploader())
    composer.stage([staged("a.png"), staged("a.png"), image_file("b.png")])
    assert [s.name for s in composer.staged] == ["a.png", "b.png"]

    composer.unstage("a.png")
    assert [s.name for s in composer.staged] == ["b.png"]


def test_partial_upload_posts_what_succeeded():
    repo, uploader = FakeRepository(), FakeUploader(fail={"b.png"})
    composer = Composer(repo, uploader)
    composer.stage([staged("a.png"), staged("b.png")])

    outcome = composer.post("hi")

    assert outcome.record.images == ["https://img.example/a.png"]
    assert [f.name for f in outcome.failures] == ["b.png"]


def test_require_all_uploads_blocks_and_keeps_staged():
    repo, uploader = FakeRepository(), FakeUploader(fail={"b.png"})
    composer = Composer(repo, uploader, require_all_uploads=True)
    composer.stage([staged("a.png"), staged("b.png")])

    with pytest.raises(ImageUploadFailed) as err:
        composer.post("hi")

    assert [f.name for f in err.value.failures] == ["b.png"]
    assert repo.created == []
    assert len(composer.staged) == 2
    assert composer.busy is False


def test_store_failure_keeps_staged_for_retry():
    repo = FakeRepository(fail=True)
    composer = Composer(repo, FakeUploader())
    composer.stage([staged("a.png")])

    with pytest.raises(RepositoryError):
        composer.post("hi")

    assert [s.name for s in composer.staged] == ["a.png"]
    assert composer.busy is False

    repo.fail = False
    outcome = composer.post("hi")
    assert outcome.record.images == ["https://img.example/a.png"]


def test_busy_composer_refuses_reentry():
    repo = FakeRepository()
    composer = Composer(repo, FakeUploader())
    composer.busy = True

    with pytest.raises(ComposerBusy):
        composer.post("hi")
    assert repo.created == []


# --------------------------------------------------------------------------- #
# EditSession                                                                 #
# --------------------------------------------------------------------------- #

def test_remove_then_add_saves_retained_then_new():
    repo, uploader = FakeRepository(), FakeUploader()
    session = EditSession(repo, uploader).open(7, "text", ["a", "b", "c"])

    session.remove_image(1)
    assert session.hosted == ["a", "c"]

    session.add_images([staged("new.png")])
    outcome = session.save()

    assert outcome.record.pk == 7
    assert outcome.record.images == ["a", "c", "https://img.example/new.png"]
    assert uploader.calls == [["new.png"]]
    assert session.staged == []


def test_removing_keeps_staged_files_and_previews():
    session = EditSession(FakeRepository(), FakeUploader()).open(1, "t", ["a", "b"])
    session.add_images([staged("x.png")])
    session.remove_image(0)

    assert session.hosted == ["b"]
    assert [s.name for s in session.staged] == ["x.png"]
    assert session.previews[0] == "b"
    assert session.previews[1].startswith("data:image/png;base64,")


def test_remove_out_of_range():
    session = EditSession(FakeRepository(), FakeUploader()).open(1, "t", ["a"])
    with pytest.raises(IndexError):
        session.remove_image(1)


def test_save_only_uploads_new_files():
    repo, uploader = FakeRepository(), FakeUploader()
    session = EditSession(repo, uploader).open(3, "t", ["a"])
    outcome = session.save("changed")

    assert uploader.calls == []
    assert outcome.record.text == "changed"
    assert outcome.record.images == ["a"]


def test_save_rejects_blank_text():
    repo = FakeRepository()
    session = EditSession(repo, FakeUploader()).open(3, "t", [])
    with pytest.raises(EmptyAnnouncementText):
        session.save("   ")
    assert repo.updated == []


def test_save_without_images_writes_absent():
    repo = FakeRepository()
    session = EditSession(repo, FakeUploader()).open(3, "t", ["a"])
    session.remove_image(0)
    outcome = session.save()
    assert outcome.record.images is None


def test_save_requires_open_session():
    with pytest.raises(RuntimeError):
        EditSession(FakeRepository(), FakeUploader()).save("x")

from unittest import mock

import requests

from announcements.uploads import (
    ImageUploadClient,
    StagedImage,
    failed,
    succeeded_urls,
)


def _response(payload=None, status_error=None, json_error=False):
    resp = mock.Mock()
    if status_error:
        resp.raise_for_status.side_effect = status_error
    if json_error:
        resp.json.side_effect = ValueError("no json")
    else:
        resp.json.return_value = payload
    return resp


def _image(name="a.png"):
    return StagedImage(name=name, content=b"bytes", content_type="image/png")


def _client(*responses, api_key="k"):
    session = mock.Mock()
    session.post.side_effect = list(responses)
    return ImageUploadClient(api_key, "https://host/upload", timeout=5, session=session), session


def test_upload_success_sends_multipart_with_key():
    client, session = _client(_response({"success": True, "data": {"url": "https://i/a.png"}}))

    result = client.upload_one(_image())

    assert result.ok and result.url == "https://i/a.png"
    _, kwargs = session.post.call_args
    assert session.post.call_args[0][0] == "https://host/upload"
    assert kwargs["params"] == {"key": "k"}
    assert kwargs["files"]["image"] == ("a.png", b"bytes", "image/png")
    assert kwargs["timeout"] == 5


def test_each_file_gets_its_own_result_in_order():
    client, _ = _client(
        _response({"success": True, "data": {"url": "https://i/1"}}),
        requests.ConnectionError("down"),
        _response({"success": False, "error": {"message": "Invalid image"}}),
        _response(json_error=True),
        _response({"success": True, "data": {"url": "https://i/5"}}),
    )

    results = client.upload([_image(f"{n}.png") for n in range(1, 6)])

    assert [r.name for r in results] == ["1.png", "2.png", "3.png", "4.png", "5.png"]
    assert succeeded_urls(results) == ["https://i/1", "https://i/5"]
    assert [r.name for r in failed(results)] == ["2.png", "3.png", "4.png"]
    assert results[1].reason == "down"
    assert results[2].reason == "Invalid image"


def test_http_error_is_a_failure():
    client, _ = _client(_response(status_error=requests.HTTPError("400 Client Error")))
    result = client.upload_one(_image())
    assert not result.ok
    assert "400" in result.reason


def test_missing_api_key_fails_without_network():
    client, session = _client(api_key="")
    result = client.upload_one(_image())
    assert not result.ok
    assert result.reason == "image hosting is not configured"
    session.post.assert_not_called()


def test_staged_image_from_upload_and_preview():
    from django.core.files.uploadedfile import SimpleUploadedFile

    f = SimpleUploadedFile("p.png", b"\x89PNG", content_type="image/png")
    image = StagedImage.from_upload(f)
    assert image.name == "p.png"
    assert image.content == b"\x89PNG"
    assert image.preview_url == "data:image/png;base64,iVBORw=="


def test_context_manager_closes_its_own_session():
    with mock.patch("announcements.uploads.requests.Session") as session_cls:
        with ImageUploadClient("k", "https://host/upload") as client:
            assert client.session is session_cls.return_value
        session_cls.return_value.close.assert_called_once_with()


def test_injected_session_is_left_open():
    client, session = _client()
    with client:
        pass
    session.close.assert_not_called()

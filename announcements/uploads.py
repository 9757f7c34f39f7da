"""
announcements/uploads.py

Client for the external image host (ImgBB-compatible API).

    POST {IMGBB_UPLOAD_URL}?key=<api key>
    multipart field "image" = the file
    → {"success": true, "data": {"url": "https://..."}}

Each file is uploaded on its own. The client never raises for a failed file:
it returns one UploadResult per input, in input order, and logs the failures.
Callers decide what a partial result means (see Composer / EditSession).
Use the client as a context manager so its HTTP session is closed per request.
"""
import base64
import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional

import requests
from django.conf import settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StagedImage:
    """A locally selected file that has not been uploaded yet."""
    name: str
    content: bytes
    content_type: str = "application/octet-stream"

    @classmethod
    def from_upload(cls, uploaded_file):
        """Read a Django UploadedFile fully into memory."""
        uploaded_file.seek(0)
        return cls(
            name=uploaded_file.name,
            content=uploaded_file.read(),
            content_type=getattr(uploaded_file, "content_type", None) or "application/octet-stream",
        )

    @property
    def preview_url(self) -> str:
        encoded = base64.b64encode(self.content).decode("ascii")
        return f"data:{self.content_type};base64,{encoded}"


@dataclass(frozen=True)
class UploadResult:
    name: str
    url: Optional[str] = None
    reason: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.url is not None

    def as_failure_dict(self):
        return {"name": self.name, "reason": self.reason}


def succeeded_urls(results: Iterable[UploadResult]) -> List[str]:
    return [r.url for r in results if r.ok]


def failed(results: Iterable[UploadResult]) -> List[UploadResult]:
    return [r for r in results if not r.ok]


class ImageUploadClient:
    def __init__(self, api_key, endpoint, timeout=30, session=None):
        self.api_key = api_key
        self.endpoint = endpoint
        self.timeout = timeout
        self._owns_session = session is None
        self.session = session or requests.Session()

    def close(self):
        if self._owns_session:
            self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def upload_one(self, image: StagedImage) -> UploadResult:
        if not self.api_key:
            return self._fail(image, "image hosting is not configured")

        try:
            response = self.session.post(
                self.endpoint,
                params={"key": self.api_key},
                files={"image": (image.name, image.content, image.content_type)},
                timeout=self.timeout,
            )
            response.raise_for_status()
            body = response.json()
        except requests.RequestException as exc:
            return self._fail(image, str(exc) or exc.__class__.__name__)
        except ValueError:
            return self._fail(image, "image host returned a non-JSON response")

        if not isinstance(body, dict):
            return self._fail(image, "image host returned an unexpected response")

        url = (body.get("data") or {}).get("url")
        if not body.get("success") or not url:
            error = body.get("error") or {}
            reason = error.get("message") if isinstance(error, dict) else str(error)
            return self._fail(image, reason or "image host rejected the upload")

        return UploadResult(name=image.name, url=url)

    def upload(self, images: Iterable[StagedImage]) -> List[UploadResult]:
        return [self.upload_one(image) for image in images]

    def _fail(self, image, reason):
        logger.warning("Error uploading image %r: %s", image.name, reason)
        return UploadResult(name=image.name, reason=reason)


def get_upload_client() -> ImageUploadClient:
    return ImageUploadClient(
        api_key=settings.IMGBB_API_KEY,
        endpoint=settings.IMGBB_UPLOAD_URL,
        timeout=settings.IMAGE_UPLOAD_TIMEOUT,
    )

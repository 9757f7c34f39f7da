"""
announcements/views.py

Endpoints:
- GET    /api/announcements/             feed page (auth required), newest first
- POST   /api/announcements/             post a new announcement (captain)
- GET    /api/announcements/{id}/        one announcement (auth required)
- PUT    /api/announcements/{id}/        full-replace edit (captain)
- DELETE /api/announcements/{id}/        delete; 204 even if already gone (captain)

Pagination:
- ?cursor=<opaque>  continue after the last record of the previous page
- ?page_size=N      defaults to ANNOUNCEMENTS_PAGE_SIZE, capped at ANNOUNCEMENTS_MAX_PAGE_SIZE
- has_more=false once a page comes back short or empty (hide "load more")

Images:
- POST takes multipart `images` files; PUT takes `remove` indexes and `new_images` files.
- Files go to the image host one by one; failures are listed in `upload_failures`
  unless ANNOUNCEMENTS_REQUIRE_ALL_UPLOADS is on (then 502 and nothing is written).
"""
from django.conf import settings
from rest_framework import parsers, permissions, status, viewsets
from rest_framework.response import Response

from users.permissions import IsCaptain

from .composer import Composer
from .editor import EditSession
from .exceptions import (
    AnnouncementNotFound,
    ComposerBusy,
    EmptyAnnouncementText,
    ImageUploadFailed,
    InvalidCursor,
    RepositoryError,
)
from .repository import AnnouncementRepository
from .serializers import (
    AnnouncementCreateSerializer,
    AnnouncementPageSerializer,
    AnnouncementSerializer,
    AnnouncementUpdateSerializer,
    AnnouncementWriteResultSerializer,
    FeedQuerySerializer,
)
from .uploads import get_upload_client

# Swagger / OpenAPI
from drf_yasg.utils import swagger_auto_schema
from drf_yasg import openapi


# Most specific first: AnnouncementNotFound is a RepositoryError.
ERROR_STATUS = (
    (AnnouncementNotFound, status.HTTP_404_NOT_FOUND),
    (EmptyAnnouncementText, status.HTTP_400_BAD_REQUEST),
    (InvalidCursor, status.HTTP_400_BAD_REQUEST),
    (ComposerBusy, status.HTTP_409_CONFLICT),
    (ImageUploadFailed, status.HTTP_502_BAD_GATEWAY),
    (RepositoryError, status.HTTP_503_SERVICE_UNAVAILABLE),
)


def error_response(exc):
    for exc_type, code in ERROR_STATUS:
        if isinstance(exc, exc_type):
            break
    else:
        raise exc
    body = {"detail": exc.message}
    if isinstance(exc, ImageUploadFailed):
        body["upload_failures"] = [f.as_failure_dict() for f in exc.failures]
    return Response(body, status=code)


def _write_result(record, failures, code):
    return Response(
        {
            "announcement": AnnouncementSerializer(record).data,
            "upload_failures": [f.as_failure_dict() for f in failures],
        },
        status=code,
    )


# ----------------------------------------------------------------------------- #
# Announcements                                                                 #
# ----------------------------------------------------------------------------- #
class AnnouncementViewSet(viewsets.ViewSet):
    """
    Read for every signed-in user; write for the captain only.
    """
    lookup_value_regex = r"\d+"
    parser_classes = [parsers.MultiPartParser, parsers.FormParser]
    captain_actions = {"create", "update", "destroy"}

    def get_permissions(self):
        if self.action in self.captain_actions:
            return [permissions.IsAuthenticated(), IsCaptain()]
        return [permissions.IsAuthenticated()]

    def get_repository(self):
        return AnnouncementRepository()

    def _require_all_uploads(self):
        return bool(getattr(settings, "ANNOUNCEMENTS_REQUIRE_ALL_UPLOADS", False))

    # ---- list -----------------------------------------------------------------
    _param_cursor = openapi.Parameter(
        name="cursor", in_=openapi.IN_QUERY, type=openapi.TYPE_STRING,
        description="Opaque cursor returned as next_cursor by the previous page",
    )
    _param_page_size = openapi.Parameter(
        name="page_size", in_=openapi.IN_QUERY, type=openapi.TYPE_INTEGER,
        description="Records per page (default ANNOUNCEMENTS_PAGE_SIZE)",
    )

    @swagger_auto_schema(
        tags=["Announcements"],
        operation_description=(
            "List announcements newest first (auth required).\n\n"
            "- `?cursor=<next_cursor>` continues from the previous page\n"
            "- `has_more=false` means the feed is exhausted\n\n"
            "Responses:\n"
            "- 200: OK\n"
            "- 400: bad cursor\n"
            "- 503: store unavailable"
        ),
        manual_parameters=[_param_cursor, _param_page_size],
        responses={200: AnnouncementPageSerializer, 400: "Bad Request", 401: "Unauthorized", 503: "Unavailable"},
    )
    def list(self, request):
        query = FeedQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        page_size = min(
            query.validated_data.get("page_size") or settings.ANNOUNCEMENTS_PAGE_SIZE,
            settings.ANNOUNCEMENTS_MAX_PAGE_SIZE,
        )

        try:
            page = self.get_repository().list(page_size, query.validated_data.get("cursor") or None)
        except (InvalidCursor, RepositoryError) as exc:
            return error_response(exc)

        has_more = len(page) == page_size
        return Response({
            "results": AnnouncementSerializer(page.records, many=True).data,
            "next_cursor": page.next_cursor if has_more else None,
            "has_more": has_more,
        })

    # ---- retrieve ---------------------------------------------------------------
    @swagger_auto_schema(
        tags=["Announcements"],
        operation_description="Retrieve a single announcement by ID (auth required).",
        responses={200: AnnouncementSerializer, 401: "Unauthorized", 404: "Not Found"},
    )
    def retrieve(self, request, pk=None):
        try:
            record = self.get_repository().get(pk)
        except RepositoryError as exc:
            return error_response(exc)
        return Response(AnnouncementSerializer(record).data)

    # ---- create -----------------------------------------------------------------
    @swagger_auto_schema(
        tags=["Announcements"],
        operation_description=(
            "Post an announcement (captain only). Multipart: `text`, `images` (files).\n\n"
            "Images that fail to upload are left out and listed in `upload_failures`."
        ),
        request_body=AnnouncementCreateSerializer,
        responses={
            201: AnnouncementWriteResultSerializer,
            400: "Blank text",
            403: "Not the captain",
            502: "Image upload failed (all-or-nothing mode)",
            503: "Store unavailable",
        },
    )
    def create(self, request):
        payload = AnnouncementCreateSerializer(data=request.data)
        payload.is_valid(raise_exception=True)

        with get_upload_client() as uploader:
            composer = Composer(
                self.get_repository(), uploader, require_all_uploads=self._require_all_uploads()
            )
            composer.stage(payload.validated_data["images"])
            try:
                outcome = composer.post(payload.validated_data["text"])
            except (EmptyAnnouncementText, ComposerBusy, ImageUploadFailed, RepositoryError) as exc:
                return error_response(exc)
        return _write_result(outcome.record, outcome.failures, status.HTTP_201_CREATED)

    # ---- update -----------------------------------------------------------------
    @swagger_auto_schema(
        tags=["Announcements"],
        operation_description=(
            "Replace an announcement's text and images (captain only).\n\n"
            "Images end up as: current images minus `remove` indexes, then uploaded `new_images`."
        ),
        request_body=AnnouncementUpdateSerializer,
        responses={
            200: AnnouncementWriteResultSerializer,
            400: "Bad Request",
            403: "Not the captain",
            404: "Not Found",
            502: "Image upload failed (all-or-nothing mode)",
            503: "Store unavailable",
        },
    )
    def update(self, request, pk=None):
        payload = AnnouncementUpdateSerializer(data=request.data)
        payload.is_valid(raise_exception=True)
        repository = self.get_repository()

        try:
            record = repository.get(pk)
        except RepositoryError as exc:
            return error_response(exc)

        with get_upload_client() as uploader:
            session = EditSession.for_record(
                record, repository, uploader, require_all_uploads=self._require_all_uploads()
            )
            try:
                for index in sorted(set(payload.validated_data["remove"]), reverse=True):
                    session.remove_image(index)
            except IndexError as exc:
                return Response({"remove": [str(exc)]}, status=status.HTTP_400_BAD_REQUEST)
            session.add_images(payload.validated_data["new_images"])

            try:
                outcome = session.save(payload.validated_data["text"])
            except (EmptyAnnouncementText, ImageUploadFailed, RepositoryError) as exc:
                return error_response(exc)
        return _write_result(outcome.record, outcome.failures, status.HTTP_200_OK)

    # ---- destroy ----------------------------------------------------------------
    @swagger_auto_schema(
        tags=["Announcements"],
        operation_description="Delete an announcement (captain only). Deleting a missing id is a no-op.",
        responses={204: "No Content", 403: "Not the captain", 503: "Store unavailable"},
    )
    def destroy(self, request, pk=None):
        try:
            self.get_repository().delete(pk)
        except RepositoryError as exc:
            return error_response(exc)
        return Response(status=status.HTTP_204_NO_CONTENT)

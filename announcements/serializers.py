"""
announcements/serializers.py

DRF serializers that define the public JSON shapes returned to the frontend.
Keep these thin and explicit; they are our API contract.
"""
from rest_framework import serializers

from .models import Announcement
from .rendering import render_text


class AnnouncementSerializer(serializers.ModelSerializer):
    text_html = serializers.SerializerMethodField(help_text="HTML-escaped text with line breaks and links.")

    class Meta:
        model = Announcement
        fields = ["id", "text", "text_html", "images", "date", "updated_at"]
        read_only_fields = fields

    def get_text_html(self, obj) -> str:
        return str(render_text(obj.text))


class UploadFailureSerializer(serializers.Serializer):
    name = serializers.CharField()
    reason = serializers.CharField()


class AnnouncementPageSerializer(serializers.Serializer):
    results = AnnouncementSerializer(many=True)
    next_cursor = serializers.CharField(allow_null=True)
    has_more = serializers.BooleanField()


class AnnouncementWriteResultSerializer(serializers.Serializer):
    announcement = AnnouncementSerializer()
    upload_failures = UploadFailureSerializer(many=True)


# --------------------------------------------------------------------------- #
# Request payloads                                                            #
# --------------------------------------------------------------------------- #

class FeedQuerySerializer(serializers.Serializer):
    cursor = serializers.CharField(required=False, allow_blank=True)
    page_size = serializers.IntegerField(required=False, min_value=1)


class AnnouncementCreateSerializer(serializers.Serializer):
    # Blank text is rejected by the composer with a user-facing message.
    text = serializers.CharField(allow_blank=True, trim_whitespace=False, required=False, default="")
    images = serializers.ListField(child=serializers.FileField(), required=False, default=list)


class AnnouncementUpdateSerializer(serializers.Serializer):
    text = serializers.CharField(allow_blank=True, trim_whitespace=False)
    remove = serializers.ListField(
        child=serializers.IntegerField(min_value=0), required=False, default=list,
        help_text="Indexes of current images to drop.",
    )
    new_images = serializers.ListField(child=serializers.FileField(), required=False, default=list)

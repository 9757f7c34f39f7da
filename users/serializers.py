"""
users/serializers.py — DRF serializers for identity endpoints

Purpose
===============================================================================
- Login accepts a single **email_or_username** field plus password and returns
  the SimpleJWT pair along with username/email for UI display.
- Me exposes the caller's identity (read-only here; identity is managed elsewhere).
- Role reports what the board UI should reveal to the caller.
"""

from django.contrib.auth import get_user_model
from rest_framework import serializers
from rest_framework_simplejwt.serializers import TokenObtainPairSerializer


User = get_user_model()


# --------------------------------------------------------------------------- #
# Login                                                                       #
# --------------------------------------------------------------------------- #

class EmailOrUsernameTokenObtainPairSerializer(TokenObtainPairSerializer):
    email_or_username = serializers.CharField(write_only=True, required=False)

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        # The username field is filled from email_or_username in validate()
        self.fields[self.username_field].required = False

    def validate(self, attrs):
        ident = (attrs.pop("email_or_username", "") or attrs.get(self.username_field) or "").strip()
        if not ident:
            raise serializers.ValidationError({"email_or_username": "This field is required."})

        user = User.objects.filter(email__iexact=ident).first() if "@" in ident else None
        attrs[self.username_field] = user.get_username() if user else ident

        data = super().validate(attrs)
        data["username"] = self.user.get_username()
        data["email"] = self.user.email
        return data


# --------------------------------------------------------------------------- #
# Me / Role                                                                   #
# --------------------------------------------------------------------------- #

class MeSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ["id", "username", "email"]
        read_only_fields = fields


class RoleSerializer(serializers.Serializer):
    email = serializers.EmailField(read_only=True)
    is_captain = serializers.BooleanField(read_only=True)
    can_compose = serializers.BooleanField(read_only=True)
    can_delete = serializers.BooleanField(read_only=True)

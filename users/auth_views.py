"""
users/auth_views.py — JWT auth helpers for the Captain Board


Purpose
===============================================================================
Identity is delegated to Django auth + SimpleJWT. This module only exposes it:
- Login (JWT pair, email or username accepted)
- Refresh (via SimpleJWT)
- Logout (blacklist a submitted refresh token to invalidate future use)
- Me: who am I?
- Role: am I the captain? (drives composer/delete visibility in the UI)


Endpoints (wired in root urls.py)
- POST /api/auth/login/    → {"access", "refresh", "username", "email"}
- POST /api/auth/refresh/  → (SimpleJWT's refresh view, tagged)
- POST /api/auth/logout/   → blacklist provided refresh token (owner-checked)
- GET  /api/auth/me/       → {"id", "username", "email"}
- GET  /api/auth/role/     → {"email", "is_captain", "can_compose", "can_delete"}


Swagger notes
- All endpoints in this module are tagged **Auth** so they appear in one group.
"""

from rest_framework import status, permissions, serializers, generics
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework.views import APIView

from .permissions import resolve_role
from .serializers import (
    EmailOrUsernameTokenObtainPairSerializer,
    MeSerializer,
    RoleSerializer,
)

# SimpleJWT
from rest_framework_simplejwt.views import (
    TokenObtainPairView,
    TokenRefreshView as _TokenRefreshView,
)
from rest_framework_simplejwt.tokens import RefreshToken
from rest_framework_simplejwt.exceptions import TokenError

# Swagger / OpenAPI
from drf_yasg.utils import swagger_auto_schema
from drf_yasg import openapi


# ---------------------------------------------------------------------------
# Common response schemas for docs
# ---------------------------------------------------------------------------
TOKENS_PAIR_SCHEMA = openapi.Schema(
    type=openapi.TYPE_OBJECT,
    required=["access", "refresh"],
    properties={
        "access": openapi.Schema(type=openapi.TYPE_STRING, description="Access JWT"),
        "refresh": openapi.Schema(type=openapi.TYPE_STRING, description="Refresh JWT"),
        "username": openapi.Schema(type=openapi.TYPE_STRING, description="Username for UI display"),
        "email": openapi.Schema(type=openapi.TYPE_STRING, format="email", description="User email"),
    },
)
ACCESS_ONLY_SCHEMA = openapi.Schema(
    type=openapi.TYPE_OBJECT,
    properties={
        "access": openapi.Schema(type=openapi.TYPE_STRING, description="New access JWT"),
    },
)


# ---------------------------------------------------------------------------
# Login (email or username) → JWT pair
# ---------------------------------------------------------------------------
class LoginDocSerializer(serializers.Serializer):
    email_or_username = serializers.CharField(help_text="Type your email address OR your username.")
    password = serializers.CharField(write_only=True, style={"input_type": "password"})


class EmailTokenObtainPairView(TokenObtainPairView):
    """POST /api/auth/login/ — Returns refresh & access JWTs (email_or_username + password)."""
    serializer_class = EmailOrUsernameTokenObtainPairSerializer

    @swagger_auto_schema(
        tags=["Auth"],
        operation_description="Log in with **email_or_username** and **password**.",
        request_body=LoginDocSerializer,
        security=[],
        responses={
            200: openapi.Response("JWT pair", TOKENS_PAIR_SCHEMA),
            400: "Bad Request",
            401: "Invalid credentials",
        },
    )
    def post(self, request, *args, **kwargs):
        return super().post(request, *args, **kwargs)


# ---------------------------------------------------------------------------
# Refresh access token
# ---------------------------------------------------------------------------
class TokenRefreshTaggedView(_TokenRefreshView):
    """POST /api/auth/refresh/ — Exchange refresh for a new access token."""
    @swagger_auto_schema(
        tags=["Auth"],
        operation_description="Refresh access token using a refresh JWT.",
        security=[],
        responses={
            200: openapi.Response("New access token", ACCESS_ONLY_SCHEMA),
            400: "Bad Request",
            401: "Invalid or blacklisted refresh token",
        },
    )
    def post(self, request, *args, **kwargs):
        return super().post(request, *args, **kwargs)


# ---------------------------------------------------------------------------
# Logout (blacklist refresh token)
# ---------------------------------------------------------------------------
logout_request_schema = openapi.Schema(
    type=openapi.TYPE_OBJECT,
    required=["refresh"],
    properties={"refresh": openapi.Schema(type=openapi.TYPE_STRING, description="Refresh token to blacklist")},
)


@swagger_auto_schema(
    method="post",
    tags=["Auth"],
    operation_description=(
        "Blacklist a submitted refresh token to invalidate future use.\n\n"
        "**Ownership check**: the submitted token must belong to the authenticated caller."
    ),
    request_body=logout_request_schema,
    responses={
        205: "Reset Content",
        400: "Bad Request",
        401: "Unauthorized",
        403: "Forbidden",
    },
)
@api_view(["POST"])
@permission_classes([permissions.IsAuthenticated])
def logout(request):
    """
    POST /api/auth/logout/
    Body: { "refresh": "<refresh_token>" }

    Returns **205 Reset Content** once the token is blacklisted.
    """
    refresh_token = request.data.get("refresh")
    if not refresh_token:
        return Response({"detail": "refresh token is required"}, status=status.HTTP_400_BAD_REQUEST)

    try:
        token = RefreshToken(refresh_token)

        # The token being blacklisted must belong to the caller
        if str(token.get("user_id")) != str(request.user.id):
            return Response({"detail": "token does not belong to you"}, status=status.HTTP_403_FORBIDDEN)

        token.blacklist()
    except TokenError:
        return Response({"detail": "Invalid refresh token."}, status=status.HTTP_400_BAD_REQUEST)

    return Response({"detail": "Logged out."}, status=status.HTTP_205_RESET_CONTENT)


# ---------------------------------------------------------------------------
# Me / Role
# ---------------------------------------------------------------------------
class AuthMeView(generics.RetrieveAPIView):
    """GET /api/auth/me/ — the authenticated user's id, username and email."""
    permission_classes = [permissions.IsAuthenticated]
    serializer_class = MeSerializer

    def get_object(self):
        return self.request.user

    @swagger_auto_schema(
        tags=["Auth"],
        operation_description="Get your profile (id, username, email).",
        responses={200: MeSerializer, 401: "Unauthorized"},
    )
    def get(self, request, *args, **kwargs):
        return super().get(request, *args, **kwargs)


class RoleView(APIView):
    """
    GET /api/auth/role/

    Tells the UI whether to reveal the composer and the delete controls.
    The captain check fails closed: a missing config row or a database error
    reports is_captain=false.
    """
    permission_classes = [permissions.IsAuthenticated]

    @swagger_auto_schema(
        tags=["Auth"],
        operation_description="Report whether the caller is the captain.",
        responses={200: RoleSerializer, 401: "Unauthorized"},
    )
    def get(self, request):
        role = resolve_role(request.user)
        return Response(RoleSerializer(role).data)

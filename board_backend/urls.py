"""
urls.py — Root URL configuration for the Captain Board backend

Purpose
===============================================================================
- Wire Django admin, API routers, and auth endpoints.
- Mount the server-rendered board pages and the session login entry page.
- Provide interactive API docs:
    * /api/docs/   → Swagger UI
    * /api/schema/ → OpenAPI JSON (machine-readable)

Notes
- Auth views are centralized in users.auth_views.
- The board pages use session login; the JSON API uses JWT (Bearer).
"""

from django.contrib import admin
from django.contrib.auth import views as session_views
from django.urls import path, include
from django.shortcuts import redirect
from rest_framework import permissions

from users.auth_views import (
    EmailTokenObtainPairView,
    TokenRefreshTaggedView,
    logout as jwt_logout,
    AuthMeView,
    RoleView,
)

# ----------------------------------------------------------------------------- #
# API Docs (Swagger/OpenAPI via drf-yasg)                                       #
# ----------------------------------------------------------------------------- #
from drf_yasg.views import get_schema_view
from drf_yasg import openapi

schema_view = get_schema_view(
    openapi.Info(
        title="Captain Board API",
        default_version="v1",
        description=(
            "Announcement board: the captain posts, edits and deletes announcements; "
            "everyone else reads a paginated feed. "
            "Auth uses JWT (Bearer) tokens. Click 'Authorize' and paste: Bearer <ACCESS_TOKEN>."
        ),
    ),
    public=True,
    permission_classes=[permissions.AllowAny],
)

# ----------------------------------------------------------------------------- #
# URL Patterns                                                                  #
# ----------------------------------------------------------------------------- #
urlpatterns = [
    path("", lambda r: redirect("board:feed"), name="root-redirect"),

    path("admin/", admin.site.urls),

    # Entry page (session login for the board pages)
    path(
        "accounts/login/",
        session_views.LoginView.as_view(template_name="users/login.html"),
        name="login",
    ),
    path("accounts/logout/", session_views.LogoutView.as_view(), name="logout"),

    # Auth (JWT)
    path("api/auth/login/",    EmailTokenObtainPairView.as_view(),  name="auth_login"),
    path("api/auth/refresh/",  TokenRefreshTaggedView.as_view(),    name="auth_refresh_create"),
    path("api/auth/logout/",   jwt_logout,                          name="auth_logout"),
    path("api/auth/me/",       AuthMeView.as_view(),                name="auth-me"),
    path("api/auth/role/",     RoleView.as_view(),                  name="auth-role"),

    # API docs
    path("api/docs/",   schema_view.with_ui("swagger", cache_timeout=0), name="api-docs-swagger"),
    path("api/schema/", schema_view.without_ui(cache_timeout=0),         name="openapi-schema"),

    path("api/", include("announcements.urls", namespace="announcements")),
    path("board/", include("announcements.page_urls", namespace="board")),
]

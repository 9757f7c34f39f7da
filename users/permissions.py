"""
users/permissions.py — Role guard for the captain

The captain check is deliberately tiny:

1) no identity                → not captain
2) read AdminConfig[key]      → missing row or DB error means not captain
3) config.email == user.email → exact, case-sensitive comparison

Callers
- IsCaptain (DRF permission) gates create/update/delete on the API.
- resolve_role() feeds the board templates (composer + delete visibility).
- captain_required / identity_required protect the board pages with redirects.
"""
import logging
from dataclasses import dataclass
from functools import wraps

from django.conf import settings
from django.db import DatabaseError
from django.shortcuts import redirect
from rest_framework import permissions

from .models import AdminConfig

logger = logging.getLogger(__name__)


def get_captain_email():
    """Return the configured captain email, or None when no row exists."""
    key = getattr(settings, "CAPTAIN_CONFIG_KEY", "admin")
    config = AdminConfig.objects.filter(key=key).only("email").first()
    return config.email if config else None


def is_captain(user) -> bool:
    if user is None or not getattr(user, "is_authenticated", False):
        return False
    email = getattr(user, "email", "") or ""
    if not email:
        return False
    try:
        captain_email = get_captain_email()
    except DatabaseError:
        logger.warning("Captain lookup failed for %s; treating as non-captain.", email, exc_info=True)
        return False
    return captain_email is not None and captain_email == email


@dataclass(frozen=True)
class Role:
    email: str
    is_authenticated: bool
    is_captain: bool

    @property
    def can_compose(self) -> bool:
        return self.is_captain

    @property
    def can_delete(self) -> bool:
        return self.is_captain


def resolve_role(user) -> Role:
    authenticated = bool(user is not None and getattr(user, "is_authenticated", False))
    return Role(
        email=(getattr(user, "email", "") or "") if authenticated else "",
        is_authenticated=authenticated,
        is_captain=is_captain(user) if authenticated else False,
    )


class IsCaptain(permissions.BasePermission):
    """Allow the request only when the caller is the configured captain."""
    message = "Only the captain can manage announcements."

    def has_permission(self, request, view):
        return is_captain(getattr(request, "user", None))


# ---------------------------------------------------------------------------
# Page guards (session-auth board pages)
# ---------------------------------------------------------------------------
def identity_required(view_func):
    """Redirect to the entry page when nobody is signed in."""
    @wraps(view_func)
    def _wrapped(request, *args, **kwargs):
        if not request.user.is_authenticated:
            logger.info("No user signed in; redirecting to the entry page.")
            return redirect(settings.LOGIN_URL)
        return view_func(request, *args, **kwargs)
    return _wrapped


def captain_required(view_func):
    """Redirect to the entry page unless the signed-in user is the captain."""
    @wraps(view_func)
    def _wrapped(request, *args, **kwargs):
        if not request.user.is_authenticated:
            logger.info("No user signed in; redirecting to the entry page.")
            return redirect(settings.LOGIN_URL)
        if not is_captain(request.user):
            logger.warning("Unauthorized captain access by %s; redirecting.", request.user.email)
            return redirect(settings.LOGIN_URL)
        return view_func(request, *args, **kwargs)
    return _wrapped

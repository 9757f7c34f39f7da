from unittest import mock

from django.contrib.auth import get_user_model
from django.contrib.auth.models import AnonymousUser
from django.db import DatabaseError
from django.test import override_settings
from rest_framework import status
from rest_framework.test import APIClient, APITestCase

from users.models import AdminConfig
from users.permissions import is_captain, resolve_role


User = get_user_model()


class AuthAndRoleTests(APITestCase):
    """
    End-to-end checks for identity and the captain role guard:
      - Auth: login (email or username), refresh, logout blacklist, me
      - Role: captain vs member, exact email match, fail-closed lookups
    """

    def setUp(self):
        self.captain = User.objects.create_user(
            username="captain", email="captain@example.com", password="pass1234"
        )
        self.member = User.objects.create_user(
            username="member", email="member@example.com", password="pass1234"
        )
        AdminConfig.objects.create(key="admin", email="captain@example.com")

    def login(self, ident, password="pass1234"):
        c = APIClient()
        r = c.post("/api/auth/login/", {"email_or_username": ident, "password": password}, format="json")
        return c, r

    # -----------------------
    # Auth
    # -----------------------
    def test_login_with_email_and_username(self):
        for ident in ("captain@example.com", "captain"):
            _, r = self.login(ident)
            self.assertEqual(r.status_code, status.HTTP_200_OK, r.data)
            self.assertIn("access", r.data)
            self.assertIn("refresh", r.data)
            self.assertEqual(r.data["username"], "captain")
            self.assertEqual(r.data["email"], "captain@example.com")

    def test_login_bad_credentials(self):
        _, r = self.login("captain@example.com", "wrong")
        self.assertIn(r.status_code, (status.HTTP_400_BAD_REQUEST, status.HTTP_401_UNAUTHORIZED))

    def test_refresh_and_logout_blacklist(self):
        c, r = self.login("member")
        refresh = r.data["refresh"]
        c.credentials(HTTP_AUTHORIZATION=f"Bearer {r.data['access']}")

        r1 = c.post("/api/auth/refresh/", {"refresh": refresh}, format="json")
        self.assertEqual(r1.status_code, status.HTTP_200_OK, r1.data)

        r2 = c.post("/api/auth/logout/", {"refresh": refresh}, format="json")
        self.assertEqual(r2.status_code, status.HTTP_205_RESET_CONTENT, r2.data)

        r3 = c.post("/api/auth/refresh/", {"refresh": refresh}, format="json")
        self.assertIn(r3.status_code, (status.HTTP_400_BAD_REQUEST, status.HTTP_401_UNAUTHORIZED))

    def test_logout_rejects_someone_elses_token(self):
        _, other = self.login("captain")
        c, r = self.login("member")
        c.credentials(HTTP_AUTHORIZATION=f"Bearer {r.data['access']}")
        res = c.post("/api/auth/logout/", {"refresh": other.data["refresh"]}, format="json")
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)

    def test_me(self):
        self.client.force_authenticate(self.member)
        r = self.client.get("/api/auth/me/")
        self.assertEqual(r.status_code, status.HTTP_200_OK)
        self.assertEqual(r.data["email"], "member@example.com")

    # -----------------------
    # Role
    # -----------------------
    def test_role_for_captain(self):
        self.client.force_authenticate(self.captain)
        r = self.client.get("/api/auth/role/")
        self.assertEqual(r.status_code, status.HTTP_200_OK)
        self.assertEqual(
            r.data,
            {"email": "captain@example.com", "is_captain": True, "can_compose": True, "can_delete": True},
        )

    def test_role_for_member(self):
        self.client.force_authenticate(self.member)
        r = self.client.get("/api/auth/role/")
        self.assertFalse(r.data["is_captain"])
        self.assertFalse(r.data["can_compose"])
        self.assertFalse(r.data["can_delete"])

    def test_role_requires_identity(self):
        r = APIClient().get("/api/auth/role/")
        self.assertEqual(r.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_email_match_is_case_sensitive(self):
        shouty = User.objects.create_user(username="shouty", email="Captain@example.com", password="pass1234")
        self.assertFalse(is_captain(shouty))
        self.assertTrue(is_captain(self.captain))

    def test_missing_config_fails_closed(self):
        AdminConfig.objects.all().delete()
        self.assertFalse(is_captain(self.captain))

    def test_lookup_error_fails_closed(self):
        with mock.patch("users.permissions.get_captain_email", side_effect=DatabaseError("down")):
            self.assertFalse(is_captain(self.captain))
            self.assertFalse(resolve_role(self.captain).can_delete)

    @override_settings(CAPTAIN_CONFIG_KEY="skipper")
    def test_config_key_is_configurable(self):
        self.assertFalse(is_captain(self.captain))
        AdminConfig.objects.create(key="skipper", email="member@example.com")
        self.assertTrue(is_captain(self.member))

    def test_anonymous_is_never_captain(self):
        self.assertFalse(is_captain(AnonymousUser()))
        self.assertFalse(is_captain(None))
        self.assertFalse(resolve_role(AnonymousUser()).is_authenticated)

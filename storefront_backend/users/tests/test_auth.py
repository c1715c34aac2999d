# users/tests/test_auth.py

from unittest import mock

from django.contrib.auth import authenticate, get_user_model
from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from users.models import ROLE_ADMIN, ROLE_CLIENT

User = get_user_model()


class RegisterTests(TestCase):
    """
    GUARANTEES:
    - Self-registration always creates a client
    - Phone is normalized and validated
    - Password confirmation + minimum length are enforced
    """

    def setUp(self):
        self.client = APIClient()
        self.url = reverse("users:register")

    def _payload(self, **overrides):
        data = {
            "name": "Awa Mensah",
            "phone": "+228 90 12 34 56",
            "email": "awa@example.com",
            "password": "secret123",
            "confirm_password": "secret123",
        }
        data.update(overrides)
        return data

    def test_register_creates_client(self):
        res = self.client.post(self.url, self._payload(), format="json")

        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.assertEqual(res.data["message"], "Account created successfully")
        self.assertEqual(res.data["user"]["phone"], "+22890123456")
        self.assertEqual(res.data["user"]["role"], ROLE_CLIENT)
        self.assertNotIn("password", res.data["user"])

        user = User.objects.get(phone="+22890123456")
        self.assertTrue(user.check_password("secret123"))

    def test_role_cannot_be_chosen(self):
        res = self.client.post(self.url, self._payload(role=ROLE_ADMIN), format="json")

        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.assertEqual(User.objects.get().role, ROLE_CLIENT)

    def test_email_is_optional(self):
        res = self.client.post(self.url, self._payload(email=""), format="json")

        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.assertIsNone(User.objects.get().email)

    def test_password_mismatch(self):
        res = self.client.post(
            self.url, self._payload(confirm_password="other123"), format="json"
        )

        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(str(res.data["confirm_password"][0]), "Passwords do not match")

    def test_password_too_short(self):
        res = self.client.post(
            self.url, self._payload(password="abc", confirm_password="abc"), format="json"
        )

        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("password", res.data)

    def test_phone_without_plus_is_rejected(self):
        res = self.client.post(self.url, self._payload(phone="90123456"), format="json")

        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(
            str(res.data["phone"][0]),
            "Phone number must start with + (e.g. +228XXXXXXXX)",
        )

    def test_duplicate_phone_and_email(self):
        User.objects.create_user(phone="+22890123456", password="secret123", email="awa@example.com")

        res = self.client.post(self.url, self._payload(), format="json")

        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("phone", res.data)
        self.assertIn("email", res.data)


class LoginLogoutTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.client_user = User.objects.create_user(
            phone="+22890000001", password="secret123", email="client@example.com", name="Client"
        )
        self.admin_user = User.objects.create_user(
            phone="+22890000002", password="secret123", role=ROLE_ADMIN, name="Admin"
        )

    def _login(self, identifier, password="secret123"):
        return self.client.post(
            reverse("users:login"),
            {"identifier": identifier, "password": password},
            format="json",
        )

    def test_client_login_by_phone_lands_on_products(self):
        res = self._login("+228 9000 0001")

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertIn("access", res.data)
        self.assertIn("refresh", res.data)
        self.assertEqual(res.data["redirect_to"], "/products")
        self.assertEqual(res.data["user"]["id"], str(self.client_user.id))

    def test_login_by_email_is_case_insensitive(self):
        res = self._login("CLIENT@example.com")
        self.assertEqual(res.status_code, status.HTTP_200_OK)

    def test_admin_lands_on_dashboard(self):
        res = self._login("+22890000002")

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["redirect_to"], "/dashboard")
        self.assertTrue(res.data["user"]["is_admin"])

    def test_bad_credentials(self):
        for identifier, password in [
            ("+22890000001", "wrong-pass"),
            ("+22899999999", "secret123"),
            ("nobody@example.com", "secret123"),
            ("not-a-phone", "secret123"),
        ]:
            res = self._login(identifier, password)
            self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST, msg=identifier)
            self.assertEqual(res.data["detail"], "Invalid credentials")

    def test_inactive_user_is_forbidden(self):
        self.client_user.is_active = False
        self.client_user.save()

        res = self._login("+22890000001")
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)

    def test_logout_blacklists_refresh_token(self):
        tokens = self._login("+22890000001").data
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {tokens['access']}")

        res = self.client.post(reverse("users:logout"), {"refresh": tokens["refresh"]}, format="json")
        self.assertEqual(res.status_code, status.HTTP_205_RESET_CONTENT)

        res = self.client.post(reverse("jwt-refresh"), {"refresh": tokens["refresh"]}, format="json")
        self.assertEqual(res.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_logout_with_invalid_token(self):
        self.client.force_authenticate(self.client_user)

        res = self.client.post(reverse("users:logout"), {"refresh": "garbage"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)

    def test_jwt_create_accepts_phone(self):
        res = self.client.post(
            reverse("jwt-create"),
            {"phone": "+22890000001", "password": "secret123"},
            format="json",
        )
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertIn("access", res.data)

    def test_unknown_identifier_still_hashes_the_password(self):
        with mock.patch.object(User, "set_password") as set_password:
            res = self._login("+22899999999", "secret123")

        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        set_password.assert_called_once_with("secret123")

    def test_backend_authenticates_by_phone_or_email_and_skips_inactive(self):
        self.assertEqual(
            authenticate(None, username="+228 90 00 00 01", password="secret123"),
            self.client_user,
        )
        self.assertIsNone(authenticate(None, username="+22890000001", password="nope"))

        self.client_user.is_active = False
        self.client_user.save()
        self.assertIsNone(authenticate(None, username="+22890000001", password="secret123"))

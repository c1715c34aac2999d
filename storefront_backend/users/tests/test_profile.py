# users/tests/test_profile.py

from unittest import mock

from botocore.exceptions import ClientError, EndpointConnectionError
from django.contrib.auth import get_user_model
from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import TestCase, override_settings
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from products.services import storage

User = get_user_model()

STORAGE_SETTINGS = {
    "ENDPOINT_URL": None,
    "PUBLIC_BASE_URL": "https://cdn.test/public",
    "REGION": None,
    "ACCESS_KEY_ID": None,
    "SECRET_ACCESS_KEY": None,
    "FORCE_PATH_STYLE": True,
    "PRODUCT_IMAGES_BUCKET": "product-images",
    "AVATARS_BUCKET": "avatars",
    "CACHE_CONTROL": "max-age=3600",
    "MAX_UPLOAD_BYTES": 1024 * 1024,
}


@override_settings(OBJECT_STORAGE=STORAGE_SETTINGS)
class ProfileTests(TestCase):
    def setUp(self):
        self.user = User.objects.create_user(
            phone="+22890000050", password="secret123", name="Kossi"
        )
        self.client = APIClient()
        self.client.force_authenticate(self.user)
        self.url = reverse("users:me")

        self.s3 = mock.MagicMock()
        self.s3.head_object.side_effect = ClientError(
            {"Error": {"Code": "404", "Message": "Not Found"}}, "HeadObject"
        )
        patcher = mock.patch.object(storage, "_s3_client", return_value=self.s3)
        patcher.start()
        self.addCleanup(patcher.stop)

    def test_me_requires_authentication(self):
        res = APIClient().get(self.url)
        self.assertEqual(res.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_get_me(self):
        res = self.client.get(self.url)

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertTrue(res.data["authenticated"])
        self.assertEqual(res.data["user"]["name"], "Kossi")
        self.assertEqual(res.data["user"]["avatar"], "")

    def test_update_name(self):
        res = self.client.patch(self.url, {"name": "Kossi A."}, format="json")

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["message"], "Profile updated successfully")
        self.user.refresh_from_db()
        self.assertEqual(self.user.name, "Kossi A.")

    def test_avatar_upload_stores_public_url(self):
        avatar = SimpleUploadedFile("me.jpg", b"\xff\xd8\xff....", content_type="image/jpeg")

        res = self.client.patch(self.url, {"avatar": avatar}, format="multipart")

        self.assertEqual(res.status_code, status.HTTP_200_OK, res.data)
        self.user.refresh_from_db()
        self.assertTrue(self.user.avatar.startswith("https://cdn.test/public/avatars/"))
        self.assertTrue(self.user.avatar.endswith("-me.jpg"))
        self.assertEqual(self.s3.upload_fileobj.call_args.args[1], "avatars")

    def test_avatar_must_be_an_image(self):
        doc = SimpleUploadedFile("cv.pdf", b"%PDF", content_type="application/pdf")

        res = self.client.patch(self.url, {"avatar": doc}, format="multipart")

        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(res.data["error"]["code"], "invalid_image")

    def test_avatar_storage_failure_keeps_profile(self):
        self.s3.upload_fileobj.side_effect = EndpointConnectionError(endpoint_url="http://x")
        avatar = SimpleUploadedFile("me.png", b"\x89PNG", content_type="image/png")

        res = self.client.patch(self.url, {"avatar": avatar, "name": "Changed"}, format="multipart")

        self.assertEqual(res.status_code, status.HTTP_502_BAD_GATEWAY)
        self.user.refresh_from_db()
        self.assertEqual(self.user.name, "Kossi")
        self.assertEqual(self.user.avatar, "")

    def test_change_password(self):
        res = self.client.patch(
            self.url,
            {
                "current_password": "secret123",
                "new_password": "newsecret456",
                "confirm_password": "newsecret456",
            },
            format="json",
        )

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.user.refresh_from_db()
        self.assertTrue(self.user.check_password("newsecret456"))

    def test_change_password_mismatch(self):
        res = self.client.patch(
            self.url,
            {
                "current_password": "secret123",
                "new_password": "newsecret456",
                "confirm_password": "different",
            },
            format="json",
        )

        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(str(res.data["confirm_password"][0]), "New passwords do not match")

    def test_change_password_requires_current_password(self):
        res = self.client.patch(
            self.url,
            {
                "current_password": "wrong",
                "new_password": "newsecret456",
                "confirm_password": "newsecret456",
            },
            format="json",
        )

        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("current_password", res.data)
        self.user.refresh_from_db()
        self.assertTrue(self.user.check_password("secret123"))

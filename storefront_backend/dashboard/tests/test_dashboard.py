# dashboard/tests/test_dashboard.py

"""
DASHBOARD TESTS

Run with:
    python manage.py test dashboard -v 2

Object storage is never contacted: products.services.storage._s3_client
is patched with a MagicMock for every test that uploads or deletes images.
"""

from __future__ import annotations

from decimal import Decimal
from unittest import mock

from botocore.exceptions import ClientError, EndpointConnectionError
from django.contrib.auth import get_user_model
from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import TestCase, override_settings
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from cart.models import Cart, CartItem
from products.models import Favorite, Product
from products.services import storage
from users.models import ROLE_ADMIN

User = get_user_model()

CDN = "https://cdn.test/public"

STORAGE_SETTINGS = {
    "ENDPOINT_URL": "http://minio.test:9000",
    "PUBLIC_BASE_URL": CDN,
    "REGION": None,
    "ACCESS_KEY_ID": "key",
    "SECRET_ACCESS_KEY": "secret",
    "FORCE_PATH_STYLE": True,
    "PRODUCT_IMAGES_BUCKET": "product-images",
    "AVATARS_BUCKET": "avatars",
    "CACHE_CONTROL": "max-age=3600",
    "MAX_UPLOAD_BYTES": 5 * 1024 * 1024,
}


def _admin():
    return User.objects.create_user(
        phone="+22890000900", password="secret123", role=ROLE_ADMIN, name="Admin"
    )


def _client_user(phone="+22890000901"):
    return User.objects.create_user(phone=phone, password="secret123")


def _png(name="rose.png"):
    return SimpleUploadedFile(name, b"\x89PNG\r\n\x1a\n....", content_type="image/png")


class DashboardAccessTests(TestCase):
    def test_anonymous_is_401(self):
        res = APIClient().get(reverse("dashboard:stats"))
        self.assertEqual(res.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_client_is_403(self):
        client = APIClient()
        client.force_authenticate(_client_user())

        for url in (reverse("dashboard:stats"), reverse("dashboard:products-list")):
            res = client.get(url)
            self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN, msg=url)


@override_settings(LOW_STOCK_THRESHOLD=10)
class DashboardStatsTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.client.force_authenticate(_admin())

    def test_stats(self):
        _client_user("+22890000910")
        _client_user("+22890000911")

        Product.objects.create(
            name="A", description="a", price=Decimal("10.00"), stock=5,
            category=Product.Category.LUXE,
        )
        Product.objects.create(
            name="B", description="b", price=Decimal("2.50"), stock=100,
            category=Product.Category.LUXE,
        )
        Product.objects.create(
            name="C", description="c", price=Decimal("99.00"), stock=0,
            category=Product.Category.GOURMET, is_active=False,
        )

        res = self.client.get(reverse("dashboard:stats"))

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["total_products"], 3)
        self.assertEqual(res.data["active_products"], 2)
        self.assertEqual(res.data["total_clients"], 2)
        self.assertEqual(res.data["low_stock_products"], 2)
        self.assertEqual(res.data["inventory_value"], "300.00")

        by_category = {row["category"]: row["count"] for row in res.data["products_by_category"]}
        self.assertEqual(by_category, {"premium": 0, "signature": 0, "gourmet": 1, "luxe": 2})


@override_settings(OBJECT_STORAGE=STORAGE_SETTINGS)
class DashboardProductTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.admin = _admin()
        self.client.force_authenticate(self.admin)

        self.s3 = mock.MagicMock()
        self.s3.head_object.side_effect = ClientError(
            {"Error": {"Code": "404", "Message": "Not Found"}}, "HeadObject"
        )
        patcher = mock.patch.object(storage, "_s3_client", return_value=self.s3)
        patcher.start()
        self.addCleanup(patcher.stop)

        self.product = Product.objects.create(
            name="Huile Sacrée",
            description="Huile de massage",
            price=Decimal("89.99"),
            category=Product.Category.LUXE,
            stock=8,
            images=[f"{CDN}/product-images/1700-huile.png"],
        )

    # ------------------------------
    # list
    # ------------------------------
    def test_list_is_paginated_compact_rows(self):
        res = self.client.get(reverse("dashboard:products-list"))

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["count"], 1)

        row = res.data["results"][0]
        self.assertEqual(
            set(row),
            {"id", "name", "price", "category", "stock", "stock_level", "is_active", "created_at", "primary_image"},
        )
        self.assertEqual(row["stock_level"], "low")
        self.assertEqual(row["primary_image"], f"{CDN}/product-images/1700-huile.png")

    def test_list_search_and_filters(self):
        Product.objects.create(
            name="Chocolat Extase", description="x", price=Decimal("49.99"),
            category=Product.Category.GOURMET, is_active=False,
        )
        url = reverse("dashboard:products-list")

        res = self.client.get(url, {"search": "GOURM"})
        self.assertEqual([r["name"] for r in res.data["results"]], ["Chocolat Extase"])

        res = self.client.get(url, {"search": "huile"})
        self.assertEqual([r["name"] for r in res.data["results"]], ["Huile Sacrée"])

        res = self.client.get(url, {"is_active": "false"})
        self.assertEqual([r["name"] for r in res.data["results"]], ["Chocolat Extase"])

        res = self.client.get(url, {"category": "luxe"})
        self.assertEqual([r["name"] for r in res.data["results"]], ["Huile Sacrée"])

    def test_retrieve_full_representation(self):
        res = self.client.get(reverse("dashboard:products-detail", args=[self.product.id]))

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["description"], "Huile de massage")
        self.assertIn("ingredients", res.data)
        self.assertNotIn("uploaded_images", res.data)

    # ------------------------------
    # create
    # ------------------------------
    def test_create_json_drops_blank_ingredients(self):
        res = self.client.post(
            reverse("dashboard:products-list"),
            {
                "name": "Nectar Divin",
                "description": "Vanille de Madagascar",
                "price": "64.99",
                "category": "signature",
                "ingredients": ["Vanille Bourbon", "  ", "", "Miel de Manuka"],
            },
            format="json",
        )

        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.assertEqual(res.data["message"], "Product created successfully")

        product = Product.objects.get(name="Nectar Divin")
        self.assertEqual(product.ingredients, ["Vanille Bourbon", "Miel de Manuka"])
        self.assertEqual(product.stock, 100)
        self.assertEqual(product.rating, Decimal("4.5"))

    def test_create_multipart_uploads_images(self):
        res = self.client.post(
            reverse("dashboard:products-list"),
            {
                "name": "Élixir Éternité",
                "description": "Synergie de plantes",
                "price": "79.99",
                "original_price": "99.99",
                "category": "premium",
                "ingredients": ["Safran", "Maca"],
                "uploaded_images": [_png("a.png"), _png("b.png")],
            },
            format="multipart",
        )

        self.assertEqual(res.status_code, status.HTTP_201_CREATED, res.data)
        self.assertEqual(self.s3.upload_fileobj.call_count, 2)

        images = res.data["product"]["images"]
        self.assertEqual(len(images), 2)
        self.assertTrue(all(url.startswith(f"{CDN}/product-images/") for url in images))
        self.assertTrue(images[0].endswith("-a.png"))
        self.assertEqual(res.data["product"]["discount_percent"], 20)
        self.assertIs(res.data["product"]["is_active"], True)

        public = self.client.get(reverse("public:public-catalog"))
        self.assertIn("Élixir Éternité", [p["name"] for p in public.data["results"]])

    def test_create_requires_fields(self):
        res = self.client.post(
            reverse("dashboard:products-list"),
            {"name": "Sans prix", "description": "x"},
            format="json",
        )

        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("price", res.data)
        self.assertIn("category", res.data)

    def test_create_rejects_bad_values(self):
        res = self.client.post(
            reverse("dashboard:products-list"),
            {"name": "X", "description": "x", "price": "0", "category": "luxe", "rating": "6"},
            format="json",
        )

        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("price", res.data)
        self.assertIn("rating", res.data)

    def test_create_rejects_non_image_upload(self):
        res = self.client.post(
            reverse("dashboard:products-list"),
            {
                "name": "X",
                "description": "x",
                "price": "5.00",
                "category": "luxe",
                "uploaded_images": [SimpleUploadedFile("x.pdf", b"%PDF", content_type="application/pdf")],
            },
            format="multipart",
        )

        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(res.data["error"]["code"], "invalid_image")
        self.assertFalse(Product.objects.filter(name="X").exists())

    def test_storage_failure_creates_nothing(self):
        self.s3.upload_fileobj.side_effect = EndpointConnectionError(endpoint_url="http://minio.test:9000")

        res = self.client.post(
            reverse("dashboard:products-list"),
            {
                "name": "X",
                "description": "x",
                "price": "5.00",
                "category": "luxe",
                "uploaded_images": [_png()],
            },
            format="multipart",
        )

        self.assertEqual(res.status_code, status.HTTP_502_BAD_GATEWAY)
        self.assertEqual(res.data["error"]["code"], "upload_failed")
        self.assertFalse(Product.objects.filter(name="X").exists())

    # ------------------------------
    # update
    # ------------------------------
    def test_patch_appends_uploaded_images(self):
        res = self.client.patch(
            reverse("dashboard:products-detail", args=[self.product.id]),
            {"stock": "60", "uploaded_images": [_png("new.png")]},
            format="multipart",
        )

        self.assertEqual(res.status_code, status.HTTP_200_OK, res.data)
        self.product.refresh_from_db()
        self.assertEqual(self.product.stock, 60)
        self.assertEqual(len(self.product.images), 2)
        self.assertEqual(self.product.images[0], f"{CDN}/product-images/1700-huile.png")
        self.assertEqual(res.data["stock_level"], "high")

    def test_put_replaces_fields_and_keeps_active_flag(self):
        url = reverse("dashboard:products-detail", args=[self.product.id])
        payload = {
            "name": "Huile Sacrée",
            "description": "Huile de massage aux fleurs",
            "price": "95.00",
            "category": "luxe",
        }

        res = self.client.put(url, payload, format="multipart")

        self.assertEqual(res.status_code, status.HTTP_200_OK, res.data)
        self.product.refresh_from_db()
        self.assertTrue(self.product.is_active)
        self.assertEqual(self.product.price, Decimal("95.00"))
        self.assertEqual(self.product.images, [f"{CDN}/product-images/1700-huile.png"])

        Product.objects.filter(pk=self.product.pk).update(is_active=False)
        self.client.put(url, payload, format="multipart")
        self.product.refresh_from_db()
        self.assertFalse(self.product.is_active)

        self.client.put(url, {**payload, "is_active": "true"}, format="multipart")
        self.product.refresh_from_db()
        self.assertTrue(self.product.is_active)

    def test_put_validates_like_create(self):
        res = self.client.put(
            reverse("dashboard:products-detail", args=[self.product.id]),
            {"name": "Huile Sacrée", "description": "x", "price": "0"},
            format="json",
        )

        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("price", res.data)
        self.assertIn("category", res.data)

    def test_patch_validates(self):
        res = self.client.patch(
            reverse("dashboard:products-detail", args=[self.product.id]),
            {"price": "-1"},
            format="json",
        )
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)

    # ------------------------------
    # delete
    # ------------------------------
    def test_delete_cascades_and_removes_images(self):
        shopper = _client_user()
        cart = Cart.objects.create(user=shopper)
        CartItem.objects.create(cart=cart, product=self.product, quantity=1)
        Favorite.objects.create(user=shopper, product=self.product)

        res = self.client.delete(reverse("dashboard:products-detail", args=[self.product.id]))

        self.assertEqual(res.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Product.objects.filter(pk=self.product.pk).exists())
        self.assertFalse(CartItem.objects.exists())
        self.assertFalse(Favorite.objects.exists())
        self.s3.delete_object.assert_called_once_with(
            Bucket="product-images", Key="1700-huile.png"
        )

    def test_delete_survives_storage_failure(self):
        self.s3.delete_object.side_effect = EndpointConnectionError(endpoint_url="http://minio.test:9000")

        res = self.client.delete(reverse("dashboard:products-detail", args=[self.product.id]))

        self.assertEqual(res.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Product.objects.exists())

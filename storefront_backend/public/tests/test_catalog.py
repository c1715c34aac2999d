# public/tests/test_catalog.py

import uuid
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase
from rest_framework import status
from rest_framework.test import APIClient

from products.models import Favorite, Product

User = get_user_model()


class PublicCatalogTests(TestCase):
    """
    Storefront catalog tests.

    GUARANTEES:
    - Anonymous access, active products only
    - Category filter ("all" = everything) and case-insensitive search
    - Detail hides inactive products
    """

    @classmethod
    def setUpTestData(cls):
        cls.elixir = Product.objects.create(
            name="Élixir Éternité",
            description="Synergie de plantes rares",
            price=Decimal("79.99"),
            original_price=Decimal("99.99"),
            category=Product.Category.PREMIUM,
        )
        cls.chocolat = Product.objects.create(
            name="Chocolat Extase",
            description="Chocolat noir 90% aux super-aliments",
            price=Decimal("49.99"),
            category=Product.Category.GOURMET,
        )
        cls.hidden = Product.objects.create(
            name="Ancien Chocolat",
            description="Retiré du catalogue",
            price=Decimal("19.99"),
            category=Product.Category.GOURMET,
            is_active=False,
        )

    def setUp(self):
        self.client = APIClient()

    def _ids(self, res):
        return {row["id"] for row in res.data["results"]}

    def test_list_returns_active_products_only(self):
        res = self.client.get("/api/public/products/")

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["count"], 2)
        self.assertEqual(self._ids(res), {str(self.elixir.id), str(self.chocolat.id)})

    def test_public_rows_hide_admin_fields(self):
        res = self.client.get("/api/public/products/")
        row = res.data["results"][0]

        self.assertNotIn("stock", row)
        self.assertNotIn("is_active", row)
        self.assertIn("discount_percent", row)
        self.assertFalse(row["is_favorite"])

    def test_category_filter(self):
        res = self.client.get("/api/public/products/", {"category": "gourmet"})
        self.assertEqual(self._ids(res), {str(self.chocolat.id)})

        res = self.client.get("/api/public/products/", {"category": "all"})
        self.assertEqual(res.data["count"], 2)

    def test_unknown_category_is_rejected(self):
        res = self.client.get("/api/public/products/", {"category": "perfume"})
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("category", res.data)

    def test_search_matches_name_or_description_case_insensitively(self):
        res = self.client.get("/api/public/products/", {"q": "CHOCOLAT"})
        self.assertEqual(self._ids(res), {str(self.chocolat.id)})

        res = self.client.get("/api/public/products/", {"q": "plantes"})
        self.assertEqual(self._ids(res), {str(self.elixir.id)})

        res = self.client.get("/api/public/products/", {"q": ""})
        self.assertEqual(res.data["count"], 2)

    def test_detail(self):
        res = self.client.get(f"/api/public/products/{self.elixir.id}/")

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["name"], "Élixir Éternité")
        self.assertEqual(res.data["discount_percent"], 20)

    def test_detail_of_inactive_or_unknown_product_is_404(self):
        res = self.client.get(f"/api/public/products/{self.hidden.id}/")
        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)

        res = self.client.get(f"/api/public/products/{uuid.uuid4()}/")
        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)

    def test_categories(self):
        res = self.client.get("/api/public/categories/")

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data[0], {"id": "all", "name": "All products"})
        self.assertEqual(
            [c["id"] for c in res.data[1:]],
            ["premium", "signature", "gourmet", "luxe"],
        )

    def test_signed_in_client_sees_favorite_flags(self):
        user = User.objects.create_user(phone="+22890000200", password="secret123")
        Favorite.objects.create(user=user, product=self.chocolat)
        self.client.force_authenticate(user)

        res = self.client.get("/api/public/products/")
        flags = {row["id"]: row["is_favorite"] for row in res.data["results"]}

        self.assertTrue(flags[str(self.chocolat.id)])
        self.assertFalse(flags[str(self.elixir.id)])

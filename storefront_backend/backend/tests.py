# backend/tests.py

import importlib
import os
import sys
from unittest import mock

from django.core.exceptions import ImproperlyConfigured
from django.db import OperationalError
from django.test import SimpleTestCase, TestCase
from rest_framework.test import APIClient


class PlatformEndpointTests(TestCase):
    def setUp(self):
        self.client = APIClient()

    def test_api_root_lists_modules(self):
        res = self.client.get("/api/")

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["auth"]["login"], "/api/auth/login/")
        self.assertEqual(
            set(res.data["modules"]),
            {"public", "products", "cart", "dashboard"},
        )

    def test_health_ok(self):
        res = self.client.get("/api/health/")

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data, {"status": "ok", "db": "ok"})

    def test_health_degraded_when_db_fails(self):
        with mock.patch("backend.urls.connections") as conns:
            conns.__getitem__.return_value.cursor.side_effect = OperationalError("db gone")
            res = self.client.get("/api/health/")

        self.assertEqual(res.status_code, 503)
        self.assertEqual(res.data["status"], "degraded")

    def test_root_redirects_to_docs(self):
        res = self.client.get("/")

        self.assertEqual(res.status_code, 302)
        self.assertEqual(res["Location"], "/api/docs/")

    def test_schema_is_served(self):
        res = self.client.get("/api/schema/")
        self.assertEqual(res.status_code, 200)


PROD_ENV = {
    "SECRET_KEY": "a-real-production-secret",
    "ALLOWED_HOSTS": "api.fleursucree.shop",
    "CORS_ALLOWED_ORIGINS": "https://fleursucree.shop",
    "CSRF_TRUSTED_ORIGINS": "https://fleursucree.shop",
    "DATABASE_URL": "postgres://shop:pw@db.internal:5432/shop",
    "STORAGE_PUBLIC_BASE_URL": "https://cdn.fleursucree.shop/public",
    "STORAGE_ACCESS_KEY_ID": "key",
    "STORAGE_SECRET_ACCESS_KEY": "secret",
}


class ProductionSettingsTests(SimpleTestCase):
    """Production settings refuse to load with unsafe configuration."""

    MODULE = "backend.settings.prod"

    def _load(self, **overrides):
        values = {**PROD_ENV, **overrides}
        sys.modules.pop(self.MODULE, None)
        self.addCleanup(sys.modules.pop, self.MODULE, None)
        with mock.patch.dict(os.environ, values):
            return importlib.import_module(self.MODULE)

    def test_valid_configuration_loads(self):
        from backend.settings import base

        prod = self._load()

        self.assertFalse(prod.DEBUG)
        self.assertEqual(prod.MIDDLEWARE[1], "whitenoise.middleware.WhiteNoiseMiddleware")
        self.assertNotIn("whitenoise.middleware.WhiteNoiseMiddleware", base.MIDDLEWARE)
        self.assertEqual(prod.CORS_ALLOWED_ORIGINS, ["https://fleursucree.shop"])

    def test_unsafe_values_are_rejected(self):
        cases = {
            "SECRET_KEY": "dev-insecure-change-me",
            "DATABASE_URL": "sqlite:///db.sqlite3",
            "STORAGE_PUBLIC_BASE_URL": "http://cdn.fleursucree.shop/public",
            "CORS_ALLOWED_ORIGINS": "http://localhost:3000",
            "CSRF_TRUSTED_ORIGINS": "http://fleursucree.shop",
            "STORAGE_SECRET_ACCESS_KEY": "",
        }
        for name, value in cases.items():
            with self.subTest(name=name):
                with self.assertRaises(ImproperlyConfigured):
                    self._load(**{name: value})

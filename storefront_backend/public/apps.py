# public/apps.py

"""
PUBLIC APP CONFIG

Anonymous storefront browsing (AllowAny):
- product catalog with category filter + text search
- product detail
- category list
"""

from django.apps import AppConfig


class PublicConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "public"
    verbose_name = "Public Storefront"

# users/models.py

"""
CUSTOM USER MODEL

Identity:
- Phone number is the login identity (USERNAME_FIELD), stored normalized as "+<digits>".
- Email is optional; when present it is unique and can also be used to log in
  (see users/auth_backends.py).

Roles:
- admin  -> dashboard (product management, stats)
- client -> storefront (catalog, cart, favorites, profile)
"""

from __future__ import annotations

import re
import uuid

from django.contrib.auth.models import (
    AbstractBaseUser,
    BaseUserManager,
    PermissionsMixin,
)
from django.core.exceptions import ValidationError
from django.db import models

ROLE_ADMIN = "admin"
ROLE_CLIENT = "client"

PHONE_PATTERN = re.compile(r"^\+\d{7,15}$")
PHONE_ERROR = "Phone number must start with + (e.g. +228XXXXXXXX)"


def normalize_phone(raw: str | None) -> str:
    """
    Strip common separators and validate the international "+<digits>" form.

    "+228 90-12.34 (56)" -> "+22890123456"
    """
    value = re.sub(r"[\s.\-()]", "", (raw or "").strip())
    if not PHONE_PATTERN.match(value):
        raise ValidationError(PHONE_ERROR)
    return value


# ---------------- USER MANAGER ----------------
class UserManager(BaseUserManager):
    use_in_migrations = True

    def create_user(self, phone=None, password=None, **extra_fields):
        """
        Create a user keyed by phone.

        Rules:
        - phone is required and normalized
        - email is optional; blank email is stored as NULL so uniqueness only
          applies to real addresses
        - role defaults to client
        """
        if not phone:
            raise ValueError("A phone number is required")

        phone = normalize_phone(phone)

        email = (extra_fields.pop("email", None) or "").strip()
        extra_fields["email"] = self.normalize_email(email) if email else None

        extra_fields.setdefault("role", ROLE_CLIENT)
        extra_fields.setdefault("is_active", True)

        user = self.model(phone=phone, **extra_fields)

        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()

        user.save(using=self._db)
        return user

    def create_superuser(self, phone, password=None, **extra_fields):
        if not password:
            raise ValueError("Superuser must have a password")

        extra_fields.setdefault("role", ROLE_ADMIN)
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        extra_fields.setdefault("is_active", True)

        if extra_fields.get("is_staff") is not True:
            raise ValueError("Superuser must have is_staff=True")

        if extra_fields.get("is_superuser") is not True:
            raise ValueError("Superuser must have is_superuser=True")

        return self.create_user(phone=phone, password=password, **extra_fields)

    def get_by_identifier(self, identifier: str):
        """
        Resolve a login identifier: email if it contains "@", phone otherwise.
        Raises self.model.DoesNotExist when nothing matches.
        """
        identifier = (identifier or "").strip()
        if "@" in identifier:
            return self.get(email__iexact=identifier)
        try:
            phone = normalize_phone(identifier)
        except ValidationError:
            raise self.model.DoesNotExist(identifier)
        return self.get(phone=phone)


# ---------------- USER MODEL ----------------
class User(AbstractBaseUser, PermissionsMixin):
    ROLE_CHOICES = [
        (ROLE_ADMIN, "Admin"),
        (ROLE_CLIENT, "Client"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    phone = models.CharField(max_length=20, unique=True)
    email = models.EmailField(unique=True, null=True, blank=True)

    name = models.CharField(max_length=150, blank=True)

    role = models.CharField(
        max_length=20,
        choices=ROLE_CHOICES,
        default=ROLE_CLIENT,
    )

    avatar = models.URLField(max_length=500, blank=True, default="")

    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = UserManager()

    USERNAME_FIELD = "phone"
    REQUIRED_FIELDS = []

    class Meta:
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.name or self.phone} ({self.role})"

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN

# users/management/commands/ensure_admins.py

"""
PATH: users/management/commands/ensure_admins.py

Production-safe admin bootstrap.

- Reads ADMIN_ACCOUNTS (settings / env):
      "phone|email|password|name;phone|email|password|name"
  email and name may be empty; phone and password are required.
- Idempotent: creates missing admins; existing rows (matched by phone) get
  role=admin, is_staff=True, the configured password and name.
- Logs minimal info; does NOT print passwords.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from users.models import ROLE_ADMIN, normalize_phone

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AdminAccountSpec:
    phone: str
    email: str
    password: str
    name: str


def parse_admin_accounts(raw: str) -> list[AdminAccountSpec]:
    specs = []
    for position, chunk in enumerate((raw or "").split(";"), start=1):
        chunk = chunk.strip()
        if not chunk:
            continue

        parts = [p.strip() for p in chunk.split("|")]
        if len(parts) != 4:
            raise CommandError(
                f"ADMIN_ACCOUNTS entry #{position} must be phone|email|password|name"
            )

        phone, email, password, name = parts
        if not phone or not password:
            raise CommandError(
                f"ADMIN_ACCOUNTS entry #{position} needs a phone and a password"
            )

        try:
            phone = normalize_phone(phone)
        except ValidationError as exc:
            raise CommandError(f"ADMIN_ACCOUNTS entry #{position}: {exc.messages[0]}")

        specs.append(AdminAccountSpec(phone=phone, email=email, password=password, name=name))

    return specs


class Command(BaseCommand):
    help = "Create/update admin accounts from ADMIN_ACCOUNTS (idempotent)."

    def add_arguments(self, parser):
        parser.add_argument(
            "--accounts",
            default=None,
            help="Override ADMIN_ACCOUNTS (same phone|email|password|name;... format).",
        )

    def handle(self, *args, **options):
        raw = options.get("accounts")
        if raw is None:
            raw = getattr(settings, "ADMIN_ACCOUNTS", "")

        specs = parse_admin_accounts(raw)
        if not specs:
            self.stdout.write(self.style.WARNING("ADMIN_ACCOUNTS not set. Skipping."))
            return

        User = get_user_model()

        with transaction.atomic():
            for spec in specs:
                user = User.objects.filter(phone=spec.phone).first()
                created = user is None

                if created:
                    user = User.objects.create_user(
                        phone=spec.phone,
                        password=spec.password,
                        email=spec.email or None,
                        name=spec.name,
                        role=ROLE_ADMIN,
                        is_staff=True,
                    )
                else:
                    user.role = ROLE_ADMIN
                    user.is_staff = True
                    user.is_active = True
                    if spec.name:
                        user.name = spec.name
                    if spec.email:
                        user.email = spec.email
                    user.set_password(spec.password)
                    user.save()

                action = "created" if created else "updated"
                logger.info("Admin account %s (%s)", user.pk, action)
                self.stdout.write(
                    self.style.SUCCESS(f"Admin ensured: {spec.phone} ({action})")
                )

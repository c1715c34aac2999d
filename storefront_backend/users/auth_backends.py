"""
PATH: users/auth_backends.py

AUTH BACKEND: Phone OR Email login

Rules:
- Login accepts EITHER:
  - email (identifier contains "@"), OR
  - phone number (normalized to "+<digits>")
- If request supplies both phone + email explicitly -> authentication fails (returns None).

Subclasses ModelBackend so Django admin keeps group/permission checks.
"""

from __future__ import annotations

import logging

from django.contrib.auth import get_user_model
from django.contrib.auth.backends import ModelBackend

logger = logging.getLogger(__name__)

User = get_user_model()


def verify_credentials(identifier: str, password: str):
    """
    Return the user matching identifier + password, or None.

    Does not look at is_active; callers decide how to treat disabled accounts.
    """
    try:
        user = User.objects.get_by_identifier(identifier)
    except User.DoesNotExist:
        # Run the hasher anyway so timing does not reveal unknown identities.
        User().set_password(password)
        return None

    if user.check_password(password):
        return user

    logger.info("Rejected login for user %s: bad password", user.pk)
    return None


class PhoneOrEmailBackend(ModelBackend):
    def authenticate(self, request, username=None, password=None, **kwargs):
        """
        Django convention passes "username" as the identifier; SimpleJWT passes
        USERNAME_FIELD ("phone"). Explicit email=... is accepted as well.
        """
        email_kw = (kwargs.get("email") or "").strip()
        phone_kw = (kwargs.get(User.USERNAME_FIELD) or "").strip()

        if email_kw and phone_kw:
            return None

        identifier = (username or phone_kw or email_kw or "").strip()
        if not identifier or password is None:
            return None

        user = verify_credentials(identifier, password)
        if user is None or not self.user_can_authenticate(user):
            return None
        return user

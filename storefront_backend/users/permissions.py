# users/permissions.py

from rest_framework.permissions import BasePermission

from users.models import ROLE_ADMIN, ROLE_CLIENT


# ---------------- BASE ROLE PERMISSION ----------------
class HasRole(BasePermission):
    """
    Base permission to check user role safely.
    """

    allowed_roles = set()
    message = "You do not have access to this area."

    def has_permission(self, request, view):
        user = request.user
        return bool(
            user and user.is_authenticated and user.role in self.allowed_roles
        )


# ---------------- ROLE PERMISSIONS ----------------
class IsAdmin(HasRole):
    allowed_roles = {ROLE_ADMIN}
    message = "Admin access required."


class IsClient(HasRole):
    allowed_roles = {ROLE_CLIENT}

# users/admin.py

"""
USERS ADMIN REGISTRATION

Registers the custom User model (phone identity) in Django Admin.
Forms normalize the phone and store a blank email as NULL.
"""

from __future__ import annotations

from django import forms
from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as DjangoUserAdmin
from django.contrib.auth.forms import BaseUserCreationForm
from django.contrib.auth.forms import UserChangeForm as DjangoUserChangeForm

from users.models import User, normalize_phone


class _PhoneEmailCleaningMixin:
    def clean_phone(self):
        try:
            return normalize_phone(self.cleaned_data.get("phone"))
        except forms.ValidationError as exc:
            raise forms.ValidationError(exc.messages)

    def clean_email(self):
        return (self.cleaned_data.get("email") or "").strip() or None


class UserCreationForm(_PhoneEmailCleaningMixin, BaseUserCreationForm):
    class Meta(BaseUserCreationForm.Meta):
        model = User
        fields = ("phone", "name", "email", "role")


class UserChangeForm(_PhoneEmailCleaningMixin, DjangoUserChangeForm):
    class Meta(DjangoUserChangeForm.Meta):
        model = User
        fields = "__all__"


@admin.register(User)
class UserAdmin(DjangoUserAdmin):
    form = UserChangeForm
    add_form = UserCreationForm

    ordering = ("-created_at",)
    list_display = ("phone", "name", "email", "role", "is_active", "created_at")
    list_filter = ("role", "is_staff", "is_active", "is_superuser")
    search_fields = ("phone", "email", "name")
    readonly_fields = ("created_at", "updated_at", "last_login")

    fieldsets = (
        (None, {"fields": ("phone", "password")}),
        ("Profile", {"fields": ("name", "email", "avatar", "role")}),
        (
            "Permissions",
            {
                "fields": (
                    "is_active",
                    "is_staff",
                    "is_superuser",
                    "groups",
                    "user_permissions",
                )
            },
        ),
        ("Dates", {"fields": ("last_login", "created_at", "updated_at")}),
    )

    add_fieldsets = (
        (
            None,
            {
                "classes": ("wide",),
                "fields": (
                    "phone",
                    "name",
                    "email",
                    "role",
                    "password1",
                    "password2",
                ),
            },
        ),
    )

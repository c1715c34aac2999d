from django.conf import settings
from django.contrib.auth import get_user_model
from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction
from rest_framework import serializers

from products.services.storage import upload_image
from users.models import PHONE_ERROR, ROLE_CLIENT, normalize_phone

User = get_user_model()


def _clean_phone(value: str) -> str:
    try:
        return normalize_phone(value)
    except DjangoValidationError:
        raise serializers.ValidationError(PHONE_ERROR)


# ---------------- REGISTER ----------------
class RegisterSerializer(serializers.Serializer):
    """
    Client self-registration.

    Role is never client-controlled: every self-registered account is a client.
    Admin accounts come from `manage.py ensure_admins`.
    """

    name = serializers.CharField(max_length=150)
    phone = serializers.CharField(max_length=32)
    email = serializers.EmailField(required=False, allow_blank=True)
    password = serializers.CharField(
        write_only=True,
        validators=[validate_password],
        style={"input_type": "password"},
    )
    confirm_password = serializers.CharField(
        write_only=True,
        style={"input_type": "password"},
    )

    def validate_name(self, value):
        value = (value or "").strip()
        if not value:
            raise serializers.ValidationError("Name is required")
        return value

    def validate_phone(self, value):
        phone = _clean_phone(value)
        if User.objects.filter(phone=phone).exists():
            raise serializers.ValidationError(
                "An account with this phone number already exists"
            )
        return phone

    def validate_email(self, value):
        value = (value or "").strip()
        if value and User.objects.filter(email__iexact=value).exists():
            raise serializers.ValidationError(
                "An account with this email already exists"
            )
        return value

    def validate(self, attrs):
        if attrs["password"] != attrs["confirm_password"]:
            raise serializers.ValidationError(
                {"confirm_password": "Passwords do not match"}
            )
        return attrs

    def create(self, validated_data):
        return User.objects.create_user(
            phone=validated_data["phone"],
            password=validated_data["password"],
            name=validated_data["name"],
            email=validated_data.get("email") or None,
            role=ROLE_CLIENT,
        )


# ---------------- LOGIN (INPUT ONLY) ----------------
class LoginSerializer(serializers.Serializer):
    """
    Input validation only.
    Authentication is handled in the view.

    identifier: phone number or email.
    """

    identifier = serializers.CharField()
    password = serializers.CharField(
        write_only=True,
        style={"input_type": "password"},
    )


class LogoutSerializer(serializers.Serializer):
    refresh = serializers.CharField()


# ---------------- USER OUTPUT ----------------
class UserSerializer(serializers.ModelSerializer):
    """
    Safe user representation for frontend consumption.
    """

    is_admin = serializers.BooleanField(read_only=True)

    class Meta:
        model = User
        fields = [
            "id",
            "phone",
            "email",
            "name",
            "role",
            "is_admin",
            "avatar",
            "created_at",
        ]
        read_only_fields = fields


# ---------------- PROFILE UPDATE ----------------
class ProfileUpdateSerializer(serializers.Serializer):
    """
    Partial profile update for the authenticated user.

    - name: optional
    - avatar: optional image file, stored in the avatars bucket
    - password change: new_password + confirm_password + current_password
    """

    name = serializers.CharField(max_length=150, required=False)
    avatar = serializers.FileField(required=False, write_only=True)
    current_password = serializers.CharField(
        required=False, allow_blank=True, write_only=True
    )
    new_password = serializers.CharField(
        required=False, allow_blank=True, write_only=True
    )
    confirm_password = serializers.CharField(
        required=False, allow_blank=True, write_only=True
    )

    def validate_name(self, value):
        value = (value or "").strip()
        if not value:
            raise serializers.ValidationError("Name cannot be blank")
        return value

    def validate(self, attrs):
        new_password = attrs.get("new_password") or ""
        if not new_password:
            return attrs

        if new_password != (attrs.get("confirm_password") or ""):
            raise serializers.ValidationError(
                {"confirm_password": "New passwords do not match"}
            )

        user = self.instance
        if not user.check_password(attrs.get("current_password") or ""):
            raise serializers.ValidationError(
                {"current_password": "Current password is incorrect"}
            )

        try:
            validate_password(new_password, user=user)
        except DjangoValidationError as exc:
            raise serializers.ValidationError({"new_password": list(exc.messages)})

        return attrs

    def update(self, instance, validated_data):
        avatar = validated_data.get("avatar")
        avatar_url = None
        if avatar is not None:
            # Upload first: a storage failure must leave the profile untouched.
            avatar_url = upload_image(
                avatar, bucket=settings.OBJECT_STORAGE["AVATARS_BUCKET"]
            )

        with transaction.atomic():
            if "name" in validated_data:
                instance.name = validated_data["name"]
            if avatar_url:
                instance.avatar = avatar_url
            if validated_data.get("new_password"):
                instance.set_password(validated_data["new_password"])
            instance.save()

        return instance

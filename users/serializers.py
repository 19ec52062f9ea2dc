# users/serializers.py

from django.contrib.auth import get_user_model
from django.utils import timezone
from rest_framework import serializers

from permissions.roles import ROLE_CHOICES, ROLE_USER

User = get_user_model()

PASSWORD_MIN_LENGTH = 8


def _unique_email(value: str) -> str:
    email = User.objects.normalize_email((value or "").strip())
    if User.objects.filter(email__iexact=email).exists():
        raise serializers.ValidationError("A user with this email already exists")
    return email


# ---------------- REGISTER ----------------
class RegisterSerializer(serializers.Serializer):
    """
    Storefront sign-up. Always creates a "user" role account.
    """

    email = serializers.EmailField()
    password = serializers.CharField(
        write_only=True,
        min_length=PASSWORD_MIN_LENGTH,
        style={"input_type": "password"},
    )
    name = serializers.CharField(required=False, allow_blank=True, max_length=150)

    def validate_email(self, value):
        return _unique_email(value)

    def create(self, validated_data):
        return User.objects.create_user(
            email=validated_data["email"],
            password=validated_data["password"],
            name=validated_data.get("name", ""),
            role=ROLE_USER,
        )


# ---------------- LOGIN (INPUT ONLY) ----------------
class LoginSerializer(serializers.Serializer):
    """
    Input validation only.
    Authentication is handled in the view.
    """

    email = serializers.EmailField()
    password = serializers.CharField(
        write_only=True,
        style={"input_type": "password"},
    )


# ---------------- USER OUTPUT ----------------
class UserSerializer(serializers.ModelSerializer):
    """
    Safe user representation for frontend consumption.
    """

    class Meta:
        model = User
        fields = [
            "id",
            "email",
            "name",
            "role",
            "banned",
            "ban_reason",
            "ban_expires",
            "created_at",
        ]
        read_only_fields = fields


# ---------------- SELF SERVICE ----------------
class MeUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(min_length=2, max_length=150)


class ChangePasswordSerializer(serializers.Serializer):
    current_password = serializers.CharField(write_only=True)
    new_password = serializers.CharField(write_only=True, min_length=PASSWORD_MIN_LENGTH)

    def validate_current_password(self, value):
        user = self.context["request"].user
        if not user.check_password(value):
            raise serializers.ValidationError("Current password is incorrect")
        return value


# ---------------- ADMIN ----------------
class AdminUserCreateSerializer(serializers.Serializer):
    name = serializers.CharField(min_length=2, max_length=150)
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, min_length=PASSWORD_MIN_LENGTH)
    role = serializers.ChoiceField(choices=ROLE_CHOICES, default=ROLE_USER)

    def validate_email(self, value):
        return _unique_email(value)

    def create(self, validated_data):
        return User.objects.create_user(**validated_data)


class SetRoleSerializer(serializers.Serializer):
    role = serializers.ChoiceField(choices=ROLE_CHOICES)


class BanUserSerializer(serializers.Serializer):
    reason = serializers.CharField(min_length=5)
    expires_at = serializers.DateTimeField(required=False, allow_null=True)

    def validate_expires_at(self, value):
        if value is not None and value <= timezone.now():
            raise serializers.ValidationError("Expiration must be in the future")
        return value

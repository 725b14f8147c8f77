from __future__ import annotations

import logging
from typing import Any

from django.contrib.auth import authenticate
from django.contrib.auth.password_validation import validate_password
from django.db import IntegrityError

from rest_framework import serializers

from shop.models.user import User

logger = logging.getLogger(__name__)


class UserListSerializer(serializers.ModelSerializer):
    """
    Back office user list
    - minimal read-only fields
    """

    role = serializers.CharField(read_only=True)

    class Meta:
        model = User
        fields = [
            "id",
            "username",
            "email",
            "first_name",
            "last_name",
            "phone_number",
            "role",
            "is_active",
            "date_joined",
            "last_login",
        ]
        read_only_fields = fields


class UserSerializer(serializers.ModelSerializer):
    """
    Own profile view/update
    - role and account fields are read-only
    """

    role = serializers.CharField(read_only=True)

    class Meta:
        model = User
        fields = [
            "id",
            "username",
            "email",
            "first_name",
            "last_name",
            "phone_number",
            "role",
            "date_joined",
            "last_login",
        ]
        read_only_fields = [
            "id",
            "username",
            "role",
            "date_joined",
            "last_login",
        ]

    def validate_email(self, value: str) -> str:
        """Email must not belong to another account"""
        if self.instance and self.instance.email == value:
            return value

        if User.objects.filter(email=value).exists():
            raise serializers.ValidationError("This email is already in use.")

        return value


class RegisterSerializer(serializers.ModelSerializer):
    """
    Sign-up form
    - required: username, email, password, password2
    - optional: names, phone number
    """

    password2 = serializers.CharField(
        write_only=True,
        required=True,
        style={"input_type": "password"},
        label="Confirm password",
    )

    password = serializers.CharField(
        write_only=True,
        required=True,
        validators=[validate_password],
        style={"input_type": "password"},
        label="Password",
    )

    email = serializers.EmailField(required=True, label="Email")

    class Meta:
        model = User
        fields = [
            "username",
            "email",
            "password",
            "password2",
            "first_name",
            "last_name",
            "phone_number",
        ]
        extra_kwargs = {"username": {"required": True}}

    def validate_email(self, value: str) -> str:
        if User.objects.filter(email=value).exists():
            raise serializers.ValidationError("This email is already in use.")
        return value

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:
        if attrs["password"] != attrs["password2"]:
            raise serializers.ValidationError({"password": "Passwords do not match."})
        return attrs

    def create(self, validated_data: dict[str, Any]) -> User:
        """
        Create the user; the unique constraints are the final guard

        Concurrent sign-ups can both pass validation, so an IntegrityError
        is turned into a 400.
        """
        validated_data.pop("password2")

        try:
            user = User.objects.create_user(**validated_data)
        except IntegrityError as e:
            logger.warning(
                "Registration failed - IntegrityError caught",
                extra={"username": validated_data.get("username"), "error": str(e)},
            )
            if "email" in str(e).lower():
                raise serializers.ValidationError({"email": "This email is already in use."}, code="unique")
            raise serializers.ValidationError({"username": "This username is already taken."}, code="unique")

        logger.info("User registration successful", extra={"username": user.username})
        return user


class LoginSerializer(serializers.Serializer):
    """
    Sign-in form
    - username and password checked with authenticate()
    - JWT tokens are issued by the view
    """

    username = serializers.CharField(required=True, label="Username")
    password = serializers.CharField(
        required=True,
        write_only=True,
        style={"input_type": "password"},
        label="Password",
    )

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:
        user = authenticate(
            request=self.context.get("request"),
            username=attrs["username"],
            password=attrs["password"],
        )

        # authenticate() also returns None for inactive accounts
        if not user:
            raise serializers.ValidationError("Invalid username or password.")

        attrs["user"] = user
        return attrs


class RoleUpdateSerializer(serializers.Serializer):
    """Back office role change"""

    role = serializers.ChoiceField(choices=User.ROLE_CHOICES)

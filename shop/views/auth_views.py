from __future__ import annotations

import logging

from django.db import transaction
from django.utils import timezone

from drf_spectacular.utils import extend_schema, inline_serializer
from rest_framework import serializers as drf_serializers
from rest_framework import status
from rest_framework.generics import CreateAPIView
from rest_framework.permissions import AllowAny
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.tokens import RefreshToken

from shop.models.user import User
from shop.serializers.user_serializers import LoginSerializer, RegisterSerializer, UserSerializer
from shop.throttles import LoginRateThrottle, RegisterRateThrottle

logger = logging.getLogger(__name__)


TokenPairSerializer = inline_serializer(
    name="TokenPairSerializer",
    fields={
        "access": drf_serializers.CharField(),
        "refresh": drf_serializers.CharField(),
    },
)


class RegisterResponseSerializer(drf_serializers.Serializer):
    """Sign-up response"""

    message = drf_serializers.CharField()
    user = UserSerializer()
    tokens = TokenPairSerializer


class LoginResponseSerializer(drf_serializers.Serializer):
    """Sign-in response"""

    access = drf_serializers.CharField()
    refresh = drf_serializers.CharField()
    user = UserSerializer()
    message = drf_serializers.CharField()


def issue_tokens(user: User) -> dict[str, str]:
    """JWT access/refresh pair for the user"""
    refresh = RefreshToken.for_user(user)
    return {"access": str(refresh.access_token), "refresh": str(refresh)}


class RegisterView(CreateAPIView):
    """
    Sign-up
    - POST: create the account and issue a JWT pair
    """

    queryset = User.objects.all()
    serializer_class = RegisterSerializer
    permission_classes = [AllowAny]
    throttle_classes = [RegisterRateThrottle]

    @extend_schema(
        request=RegisterSerializer,
        responses={201: RegisterResponseSerializer},
        summary="Create an account.",
        description="Creates a customer account and returns a JWT access/refresh pair.",
        tags=["Auth"],
    )
    def post(self, request: Request, *args, **kwargs) -> Response:
        return super().post(request, *args, **kwargs)

    def create(self, request: Request, *args, **kwargs) -> Response:
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        # the unique constraints are the final guard against concurrent sign-ups
        with transaction.atomic():
            user = serializer.save()

        logger.info("[Auth] registered | user_id=%d", user.id)

        return Response(
            {
                "message": "Your account has been created.",
                "user": UserSerializer(user).data,
                "tokens": issue_tokens(user),
            },
            status=status.HTTP_201_CREATED,
        )


class LoginView(APIView):
    """
    Sign-in
    - POST: check credentials and issue a JWT pair
    """

    permission_classes = [AllowAny]
    throttle_classes = [LoginRateThrottle]

    @extend_schema(
        request=LoginSerializer,
        responses={200: LoginResponseSerializer},
        summary="Sign in.",
        tags=["Auth"],
    )
    def post(self, request: Request) -> Response:
        serializer = LoginSerializer(data=request.data, context={"request": request})

        if serializer.is_valid():
            user = serializer.validated_data["user"]

            user.last_login = timezone.now()
            user.save(update_fields=["last_login"])

            logger.info("[Auth] signed in | user_id=%d", user.id)

            response_data = {
                **issue_tokens(user),
                "user": UserSerializer(user).data,
                "message": "Signed in.",
            }
            return Response(response_data, status=status.HTTP_200_OK)

        logger.info("[Auth] sign-in rejected | username=%s", request.data.get("username", ""))
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

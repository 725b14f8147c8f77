from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework import generics, serializers as drf_serializers, status
from rest_framework.permissions import IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response

from shop.serializers.user_serializers import UserSerializer


class ProfileUpdateResponseSerializer(drf_serializers.Serializer):
    """Profile update response"""

    user = UserSerializer()
    message = drf_serializers.CharField()


@extend_schema(tags=["Users"])
class ProfileView(generics.RetrieveUpdateAPIView):
    """
    Own profile
    - GET: current user's details
    - PUT/PATCH: update names, email and phone number
    """

    permission_classes = [IsAuthenticated]
    serializer_class = UserSerializer
    http_method_names = ["get", "put", "patch", "head", "options"]

    def get_object(self):
        return self.request.user

    @extend_schema(
        request=UserSerializer,
        responses={200: ProfileUpdateResponseSerializer},
        summary="Update your profile.",
    )
    def update(self, request: Request, *args, **kwargs) -> Response:
        partial = kwargs.pop("partial", False)
        instance = self.get_object()
        serializer = self.get_serializer(instance, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        self.perform_update(serializer)

        return Response({"user": serializer.data, "message": "Your profile has been updated."}, status=status.HTTP_200_OK)

    @extend_schema(
        request=UserSerializer,
        responses={200: ProfileUpdateResponseSerializer},
        summary="Update part of your profile.",
    )
    def partial_update(self, request: Request, *args, **kwargs) -> Response:
        kwargs["partial"] = True
        return self.update(request, *args, **kwargs)

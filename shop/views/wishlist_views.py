from __future__ import annotations

from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import permissions, serializers as drf_serializers, status
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from shop.models.product import Product
from shop.serializers import WishlistProductIdSerializer, WishlistProductSerializer
from shop.services.wishlist_service import WishlistService, WishlistServiceError
from shop.views.mixins import ServiceErrorResponseMixin


# ===== Response serializers for the API docs =====


class WishlistListResponseSerializer(drf_serializers.Serializer):
    count = drf_serializers.IntegerField()
    results = WishlistProductSerializer(many=True)


class WishlistToggleResponseSerializer(drf_serializers.Serializer):
    """Toggle response"""

    is_wished = drf_serializers.BooleanField()
    message = drf_serializers.CharField()
    wishlist_count = drf_serializers.IntegerField()


class WishlistMessageResponseSerializer(drf_serializers.Serializer):
    message = drf_serializers.CharField()
    wishlist_count = drf_serializers.IntegerField(required=False)


class WishlistCheckResponseSerializer(drf_serializers.Serializer):
    """Heart button state"""

    product_id = drf_serializers.IntegerField()
    is_wished = drf_serializers.BooleanField()
    wishlist_count = drf_serializers.IntegerField()


class WishlistErrorResponseSerializer(drf_serializers.Serializer):
    error = drf_serializers.CharField()
    code = drf_serializers.CharField(required=False)


class WishlistViewSet(ServiceErrorResponseMixin, GenericViewSet):
    """
    Wishlist

    Endpoints:
    - GET    /api/wishlist/          - saved products
    - POST   /api/wishlist/toggle/   - add or remove
    - POST   /api/wishlist/add/      - add
    - DELETE /api/wishlist/remove/   - remove
    - GET    /api/wishlist/check/    - state of one product

    Sign-in required; a customer only manages their own list.
    """

    permission_classes = [permissions.IsAuthenticated]
    serializer_class = WishlistProductIdSerializer
    queryset = Product.objects.none()

    @extend_schema(
        responses={200: WishlistListResponseSerializer},
        summary="List saved products.",
        tags=["Wishlist"],
    )
    def list(self, request: Request) -> Response:
        products = WishlistService.get_list(request.user)
        serializer = WishlistProductSerializer(products, many=True)
        return Response({"count": len(serializer.data), "results": serializer.data})

    @extend_schema(
        request=WishlistProductIdSerializer,
        responses={200: WishlistToggleResponseSerializer, 400: WishlistErrorResponseSerializer},
        summary="Toggle a product in the wishlist.",
        tags=["Wishlist"],
    )
    @action(detail=False, methods=["post"])
    def toggle(self, request: Request) -> Response:
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            result = WishlistService.toggle(request.user, serializer.validated_data["product_id"])
        except WishlistServiceError as e:
            return self.service_error_response(e)

        return Response(
            {
                "is_wished": result.is_wished,
                "message": result.message,
                "wishlist_count": result.wishlist_count,
            }
        )

    @extend_schema(
        request=WishlistProductIdSerializer,
        responses={
            200: WishlistMessageResponseSerializer,
            201: WishlistMessageResponseSerializer,
            400: WishlistErrorResponseSerializer,
        },
        summary="Add a product to the wishlist.",
        description="201 when newly added, 200 when it was already saved.",
        tags=["Wishlist"],
    )
    @action(detail=False, methods=["post"])
    def add(self, request: Request) -> Response:
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            is_new, message, wishlist_count = WishlistService.add(request.user, serializer.validated_data["product_id"])
        except WishlistServiceError as e:
            return self.service_error_response(e)

        return Response(
            {"message": message, "wishlist_count": wishlist_count},
            status=status.HTTP_201_CREATED if is_new else status.HTTP_200_OK,
        )

    @extend_schema(
        request=WishlistProductIdSerializer,
        responses={200: WishlistMessageResponseSerializer, 400: WishlistErrorResponseSerializer},
        summary="Remove a product from the wishlist.",
        tags=["Wishlist"],
    )
    @action(detail=False, methods=["delete"])
    def remove(self, request: Request) -> Response:
        # DELETE bodies are unreliable in some clients, so the query string works too
        data = request.data or request.query_params
        serializer = self.get_serializer(data=data)
        serializer.is_valid(raise_exception=True)

        try:
            product_name = WishlistService.remove(request.user, serializer.validated_data["product_id"])
        except WishlistServiceError as e:
            return self.service_error_response(e)

        return Response({"message": f"{product_name} was removed from your wishlist."})

    @extend_schema(
        parameters=[
            OpenApiParameter(name="product_id", description="Product to check", required=True, type=int),
        ],
        responses={200: WishlistCheckResponseSerializer, 400: WishlistErrorResponseSerializer},
        summary="Wishlist state of one product.",
        description="Initial state of the heart button on a product page.",
        tags=["Wishlist"],
    )
    @action(detail=False, methods=["get"])
    def check(self, request: Request) -> Response:
        serializer = self.get_serializer(data=request.query_params)
        serializer.is_valid(raise_exception=True)

        try:
            data = WishlistService.check(request.user, serializer.validated_data["product_id"])
        except WishlistServiceError as e:
            return self.service_error_response(e)

        return Response(data)

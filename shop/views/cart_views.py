from __future__ import annotations

from drf_spectacular.utils import extend_schema, extend_schema_view
from rest_framework import permissions, serializers as drf_serializers, status, viewsets
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.serializers import BaseSerializer

from shop.models.cart import Cart
from shop.serializers import (
    CartItemCreateSerializer,
    CartItemSerializer,
    CartItemUpdateSerializer,
    CartSerializer,
    CartSummarySerializer,
)
from shop.services.cart_service import CartService, CartServiceError
from shop.views.mixins import ServiceErrorResponseMixin


# ===== Response serializers for the API docs =====


class CartItemResponseSerializer(drf_serializers.Serializer):
    """Add/update line response"""

    message = drf_serializers.CharField()
    item = CartItemSerializer()


class CartMessageResponseSerializer(drf_serializers.Serializer):
    message = drf_serializers.CharField()


class CartErrorResponseSerializer(drf_serializers.Serializer):
    """Cart error response"""

    error = drf_serializers.CharField()
    code = drf_serializers.CharField(required=False)
    details = drf_serializers.DictField(required=False)


@extend_schema_view(
    retrieve=extend_schema(
        summary="Get the cart.",
        description="The signed-in customer's cart with lines and totals.",
        tags=["Cart"],
    ),
)
class CartViewSet(ServiceErrorResponseMixin, viewsets.GenericViewSet):
    """
    Shopping cart

    Endpoints:
    - GET    /api/cart/             - cart with lines and totals
    - GET    /api/cart/summary/     - totals only
    - POST   /api/cart/add_item/    - add a product
    - PATCH  /api/cart/items/{id}/  - change a line's quantity
    - DELETE /api/cart/items/{id}/  - remove a line
    - POST   /api/cart/clear/       - empty the cart

    Sign-in required; each customer has exactly one cart.
    """

    permission_classes = [permissions.IsAuthenticated]
    queryset = Cart.objects.none()

    def get_serializer_class(self) -> type[BaseSerializer]:
        if self.action == "summary":
            return CartSummarySerializer
        elif self.action == "add_item":
            return CartItemCreateSerializer
        elif self.action == "update_item":
            return CartItemUpdateSerializer
        return CartSerializer

    def get_cart(self) -> Cart:
        return CartService.get_or_create_cart(self.request.user)

    def retrieve(self, request: Request) -> Response:
        cart = self.get_cart()
        return Response(CartSerializer(cart).data)

    @extend_schema(
        responses={200: CartSummarySerializer},
        summary="Cart totals.",
        description="Subtotal, the flat shipping estimate, total and item count for the header badge.",
        tags=["Cart"],
    )
    @action(detail=False, methods=["get"])
    def summary(self, request: Request) -> Response:
        cart = self.get_cart()
        return Response(CartSummarySerializer(CartService.get_summary(cart)).data)

    @extend_schema(
        request=CartItemCreateSerializer,
        responses={
            201: CartItemResponseSerializer,
            400: CartErrorResponseSerializer,
        },
        summary="Add a product to the cart.",
        description="""Adds a product with the chosen size and colour.

The same product, size and colour already in the cart only gets its quantity increased.""",
        tags=["Cart"],
    )
    @action(detail=False, methods=["post"])
    def add_item(self, request: Request) -> Response:
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        cart = self.get_cart()
        try:
            cart_item = CartService.add_item(cart, **serializer.validated_data)
        except CartServiceError as e:
            return self.service_error_response(e)

        return Response(
            {"message": "Added to your cart.", "item": CartItemSerializer(cart_item).data},
            status=status.HTTP_201_CREATED,
        )

    @extend_schema(
        request=CartItemUpdateSerializer,
        responses={
            200: CartItemResponseSerializer,
            204: None,
            400: CartErrorResponseSerializer,
            404: CartErrorResponseSerializer,
        },
        summary="Change a line's quantity.",
        description="A quantity of 0 or less removes the line.",
        tags=["Cart"],
    )
    def update_item(self, request: Request, pk: int | None = None) -> Response:
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        cart = self.get_cart()
        try:
            cart_item = CartService.update_item_quantity(cart, int(pk), serializer.validated_data["quantity"])
        except CartServiceError as e:
            status_code = status.HTTP_404_NOT_FOUND if e.code == "ITEM_NOT_FOUND" else status.HTTP_400_BAD_REQUEST
            return self.service_error_response(e, status_code)

        if cart_item is None:
            return Response(status=status.HTTP_204_NO_CONTENT)

        return Response({"message": "Quantity updated.", "item": CartItemSerializer(cart_item).data})

    @extend_schema(
        responses={204: None, 404: CartErrorResponseSerializer},
        summary="Remove a line from the cart.",
        tags=["Cart"],
    )
    def delete_item(self, request: Request, pk: int | None = None) -> Response:
        cart = self.get_cart()
        try:
            CartService.remove_item(cart, int(pk))
        except CartServiceError as e:
            return self.service_error_response(e, status.HTTP_404_NOT_FOUND)

        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(
        request=None,
        responses={200: CartMessageResponseSerializer},
        summary="Empty the cart.",
        tags=["Cart"],
    )
    @action(detail=False, methods=["post"])
    def clear(self, request: Request) -> Response:
        cart = self.get_cart()
        deleted = CartService.clear_cart(cart)
        return Response({"message": f"{deleted} item(s) removed from your cart."})

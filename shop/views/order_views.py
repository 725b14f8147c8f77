from __future__ import annotations

import logging
from typing import Any

from django.db.models import Count
from django_filters.rest_framework import DjangoFilterBackend

from drf_spectacular.utils import extend_schema, extend_schema_view
from rest_framework import filters, mixins, permissions, serializers as drf_serializers, status, viewsets
from rest_framework.decorators import action
from rest_framework.pagination import PageNumberPagination
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.serializers import BaseSerializer

from ..filters import OrderFilter
from ..models.order import Order
from ..permissions import IsAdmin, IsOrderOwnerOrAdmin, is_admin_user
from ..serializers.order_serializers import (
    CheckoutSerializer,
    OrderDetailSerializer,
    OrderListSerializer,
    OrderStatusUpdateSerializer,
)
from ..services.cart_service import CartService
from ..services.order_service import OrderService, OrderServiceError
from ..throttles import OrderCreateRateThrottle
from .mixins import ServiceErrorResponseMixin

logger = logging.getLogger(__name__)


# ===== Response serializers for the API docs =====


class OrderErrorResponseSerializer(drf_serializers.Serializer):
    """Order error response"""

    error = drf_serializers.CharField()
    code = drf_serializers.CharField(required=False)
    details = drf_serializers.DictField(required=False)


class OrderPagination(PageNumberPagination):
    """
    Order list pagination
    - 10 orders per page
    - page_size up to 50
    """

    page_size = 10
    page_size_query_param = "page_size"
    max_page_size = 50


@extend_schema_view(
    list=extend_schema(
        summary="List orders.",
        description="""Customers see their own orders; admins see every order.

- Filters: status, delivery_type
- Ordering: created_at, total""",
        tags=["Orders"],
    ),
    retrieve=extend_schema(summary="Order detail.", tags=["Orders"]),
)
class OrderViewSet(
    ServiceErrorResponseMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """
    Orders

    Endpoints:
    - GET   /api/orders/                      - list
    - POST  /api/orders/                      - checkout
    - GET   /api/orders/{id}/                 - detail
    - POST  /api/orders/{id}/confirm_payment/ - mark paid, issue OTP (admin)
    - POST  /api/orders/{id}/update_status/   - change status (admin)

    Permissions:
    - sign-in required
    - customers only reach their own orders
    """

    permission_classes = [permissions.IsAuthenticated, IsOrderOwnerOrAdmin]
    pagination_class = OrderPagination

    filter_backends = [DjangoFilterBackend, filters.OrderingFilter]
    filterset_class = OrderFilter
    ordering_fields = ["created_at", "total"]
    ordering = ["-created_at"]

    def get_throttles(self):
        if self.action == "create":
            return [OrderCreateRateThrottle()]
        return super().get_throttles()

    def get_queryset(self) -> Any:
        """
        Orders visible to the caller

        item_count is annotated here for the list serializer.
        """
        queryset = (
            Order.objects.select_related("user", "processed_by_admin")
            .prefetch_related("order_items")
            .annotate(item_count=Count("order_items"))
        )

        if is_admin_user(self.request.user):
            return queryset
        return queryset.filter(user=self.request.user)

    def get_serializer_class(self) -> type[BaseSerializer]:
        if self.action == "list":
            return OrderListSerializer
        elif self.action == "create":
            return CheckoutSerializer
        elif self.action == "update_status":
            return OrderStatusUpdateSerializer
        return OrderDetailSerializer

    @extend_schema(
        request=CheckoutSerializer,
        responses={
            201: OrderDetailSerializer,
            400: OrderErrorResponseSerializer,
        },
        summary="Check out the cart.",
        description="""Turns the cart into an order awaiting payment.

- delivery: address plus the location picked on the map; the fee is computed on the server
- pickup: no address, no fee

The cart is emptied and stock reserved once the order is created.""",
        tags=["Orders"],
    )
    def create(self, request: Request, *args: Any, **kwargs: Any) -> Response:
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        cart = CartService.get_or_create_cart(request.user)
        try:
            order = OrderService.place_order(request.user, cart, serializer.validated_data)
        except OrderServiceError as e:
            logger.warning("[Order] checkout rejected | user_id=%d, code=%s", request.user.id, e.code)
            return self.service_error_response(e)

        order = self.get_queryset().get(pk=order.pk)
        return Response(OrderDetailSerializer(order).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        request=None,
        responses={
            200: OrderDetailSerializer,
            400: OrderErrorResponseSerializer,
        },
        summary="Confirm payment (admin).",
        description="Marks an order awaiting payment as paid and issues the 6-digit delivery OTP.",
        tags=["Orders"],
    )
    @action(detail=True, methods=["post"], permission_classes=[IsAdmin])
    def confirm_payment(self, request: Request, pk: int | None = None) -> Response:
        order = self.get_object()
        try:
            order = OrderService.confirm_payment(order, request.user)
        except OrderServiceError as e:
            return self.service_error_response(e)

        return Response(OrderDetailSerializer(order).data)

    @extend_schema(
        request=OrderStatusUpdateSerializer,
        responses={
            200: OrderDetailSerializer,
            400: OrderErrorResponseSerializer,
        },
        summary="Change order status (admin).",
        description="Any selectable status; an order awaiting payment must be confirmed first.",
        tags=["Orders"],
    )
    @action(detail=True, methods=["post"], permission_classes=[IsAdmin])
    def update_status(self, request: Request, pk: int | None = None) -> Response:
        order = self.get_object()

        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            order = OrderService.update_status(order, serializer.validated_data["status"])
        except OrderServiceError as e:
            return self.service_error_response(e)

        return Response(OrderDetailSerializer(order).data)

from __future__ import annotations

import math
from typing import Any

from rest_framework import serializers

from ..models.order import Order, OrderItem
from ..services.order_service import OrderService
from ..services.shipping_service import ShippingService


def finite_coordinate(value: float | None) -> float | None:
    if value is not None and not math.isfinite(value):
        raise serializers.ValidationError("Coordinates must be finite numbers.")
    return value


class OrderItemSerializer(serializers.ModelSerializer):
    """Order line (snapshot at checkout)"""

    subtotal = serializers.SerializerMethodField()

    class Meta:
        model = OrderItem
        fields = [
            "id",
            "product",
            "product_name",  # name at order time
            "quantity",
            "price",  # unit price at order time
            "size",
            "color",
            "subtotal",
        ]
        read_only_fields = fields

    def get_subtotal(self, obj: OrderItem) -> str:
        return str(obj.get_subtotal())


class OrderListSerializer(serializers.ModelSerializer):
    """
    Order list row

    item_count comes from the view's annotate() (avoids N+1).
    """

    user_username = serializers.CharField(source="user.username", read_only=True, allow_null=True)
    item_count = serializers.IntegerField(read_only=True)
    status_display = serializers.CharField(source="get_status_display", read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "order_number",
            "user_username",
            "status",
            "status_display",
            "delivery_type",
            "region",
            "shipping_fee",
            "total",
            "item_count",
            "created_at",
        ]
        read_only_fields = fields


class OrderDetailSerializer(serializers.ModelSerializer):
    """
    Order detail

    Reached only by the owner or an admin (queryset filtering plus
    IsOrderOwnerOrAdmin).
    """

    order_items = OrderItemSerializer(many=True, read_only=True)
    user_username = serializers.CharField(source="user.username", read_only=True, allow_null=True)
    status_display = serializers.CharField(source="get_status_display", read_only=True)
    processed_by = serializers.CharField(source="processed_by_admin.username", read_only=True, allow_null=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "order_number",
            "user",
            "user_username",
            "status",
            "status_display",
            "order_items",
            "delivery_type",
            "customer_name",
            "customer_phone",
            "shipping_address",
            "gps_coordinates",
            "longitude",
            "latitude",
            "region",
            "shipping_fee",
            "total",
            "payment_intent",
            "otp_code",
            "processed_by",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class CheckoutSerializer(serializers.Serializer):
    """
    Checkout form

    Only the input shape is validated here; cart contents, stock and the
    delivery fee are handled by OrderService.place_order.
    """

    delivery_type = serializers.ChoiceField(
        choices=[ShippingService.DELIVERY, ShippingService.PICKUP],
        default=ShippingService.DELIVERY,
    )
    full_name = serializers.CharField(max_length=100)
    phone = serializers.CharField(max_length=20)
    address = serializers.CharField(max_length=255, required=False, allow_blank=True, default="")
    longitude = serializers.FloatField(
        required=False, allow_null=True, min_value=-180, max_value=180, validators=[finite_coordinate]
    )
    latitude = serializers.FloatField(
        required=False, allow_null=True, min_value=-90, max_value=90, validators=[finite_coordinate]
    )
    payment_intent = serializers.CharField(max_length=100, required=False, allow_blank=True, default="")

    def validate_full_name(self, value: str) -> str:
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Full name is required.")
        return value

    def validate_phone(self, value: str) -> str:
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Phone number is required.")
        return value

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:
        """Home delivery needs an address and a location picked on the map"""
        if attrs["delivery_type"] == ShippingService.DELIVERY:
            errors = {}
            if not attrs.get("address", "").strip():
                errors["address"] = "Delivery address is required for home delivery."
            if attrs.get("longitude") is None or attrs.get("latitude") is None:
                errors["location"] = "Please select your location on the map."
            if errors:
                raise serializers.ValidationError(errors)
        return attrs


class OrderStatusUpdateSerializer(serializers.Serializer):
    """Back office status selector"""

    status = serializers.ChoiceField(choices=OrderService.SELECTABLE_STATUSES)


class ShippingQuoteRequestSerializer(serializers.Serializer):
    """Location picked on the checkout map"""

    longitude = serializers.FloatField(min_value=-180, max_value=180, validators=[finite_coordinate])
    latitude = serializers.FloatField(min_value=-90, max_value=90, validators=[finite_coordinate])


class ShippingQuoteResponseSerializer(serializers.Serializer):
    """Delivery fee quote"""

    fee = serializers.DecimalField(max_digits=12, decimal_places=2)
    region = serializers.CharField()
    distance_km = serializers.FloatField()
    gps_address = serializers.CharField()

from __future__ import annotations

from rest_framework import serializers

from ..models.cart import Cart, CartItem
from ..services.cart_service import CartService


class CartItemSerializer(serializers.ModelSerializer):
    """
    Cart line display

    Carries enough product data to render the line without another request.
    """

    product_id = serializers.IntegerField(source="product.id", read_only=True)
    product_name = serializers.CharField(source="product.name", read_only=True)
    product_image = serializers.SerializerMethodField()
    unit_price = serializers.DecimalField(max_digits=10, decimal_places=2, read_only=True, help_text="Price after discount")
    subtotal = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)
    available_stock = serializers.IntegerField(source="product.stock", read_only=True)
    is_available = serializers.SerializerMethodField()

    class Meta:
        model = CartItem
        fields = [
            "id",
            "product_id",
            "product_name",
            "product_image",
            "unit_price",
            "quantity",
            "size",
            "color",
            "subtotal",
            "available_stock",
            "is_available",
            "added_at",
        ]
        read_only_fields = fields

    def get_product_image(self, obj: CartItem) -> str | None:
        images = obj.product.images or []
        return images[0] if images else None

    def get_is_available(self, obj: CartItem) -> bool:
        return obj.is_available()


class CartSummarySerializer(serializers.Serializer):
    """Cart totals"""

    subtotal = serializers.DecimalField(max_digits=12, decimal_places=2)
    shipping_cost = serializers.DecimalField(max_digits=10, decimal_places=2)
    total = serializers.DecimalField(max_digits=12, decimal_places=2)
    item_count = serializers.IntegerField()


class CartSerializer(serializers.ModelSerializer):
    """Whole cart with its totals"""

    items = CartItemSerializer(many=True, read_only=True)
    summary = serializers.SerializerMethodField()

    class Meta:
        model = Cart
        fields = ["id", "items", "summary", "updated_at"]
        read_only_fields = fields

    def get_summary(self, obj: Cart) -> dict:
        return CartSummarySerializer(CartService.get_summary(obj)).data


class CartItemCreateSerializer(serializers.Serializer):
    """Add-to-cart form"""

    product_id = serializers.IntegerField(help_text="Product ID")
    quantity = serializers.IntegerField(default=1, min_value=1, help_text="Quantity (default 1)")
    size = serializers.CharField(required=False, allow_blank=True, default="", max_length=10)
    color = serializers.CharField(required=False, allow_blank=True, default="", max_length=30)


class CartItemUpdateSerializer(serializers.Serializer):
    """Quantity change; zero or less removes the line"""

    quantity = serializers.IntegerField(help_text="New quantity (<= 0 removes the line)")

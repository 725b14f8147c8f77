from rest_framework import serializers

from shop.models.product import Product


class WishlistProductSerializer(serializers.ModelSerializer):
    """Product shown in the wishlist"""

    effective_price = serializers.DecimalField(max_digits=10, decimal_places=2, read_only=True)
    is_available = serializers.SerializerMethodField()
    primary_image = serializers.SerializerMethodField()

    class Meta:
        model = Product
        fields = [
            "id",
            "name",
            "category",
            "price",
            "discount",
            "effective_price",
            "primary_image",
            "stock",
            "is_available",
            "created_at",
        ]

    def get_is_available(self, obj):
        return obj.is_in_stock

    def get_primary_image(self, obj):
        """First image URL"""
        return obj.images[0] if obj.images else None


class WishlistProductIdSerializer(serializers.Serializer):
    """toggle/add/remove request"""

    product_id = serializers.IntegerField(required=True, help_text="Product ID")

    def validate_product_id(self, value):
        if not Product.objects.filter(id=value).exists():
            raise serializers.ValidationError("Product not found.")
        return value

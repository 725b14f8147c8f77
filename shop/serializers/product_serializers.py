from __future__ import annotations

from typing import Any

from rest_framework import serializers

from ..models.product import Product, ProductReview


class AverageRatingField(serializers.FloatField):
    """Average rating to one decimal place"""

    def to_representation(self, value):
        return round(float(value), 1)


class ProductListSerializer(serializers.ModelSerializer):
    """
    Product card data for listings

    rating and review_count come from the view's annotate() (avoids N+1).
    """

    effective_price = serializers.DecimalField(
        max_digits=10,
        decimal_places=2,
        read_only=True,
        help_text="Price after discount",
    )
    rating = AverageRatingField(source="avg_rating", read_only=True, help_text="Average rating (0.0 - 5.0)")
    review_count = serializers.IntegerField(source="review_cnt", read_only=True, default=0)
    is_in_stock = serializers.BooleanField(read_only=True)

    class Meta:
        model = Product
        fields = [
            "id",
            "name",
            "category",
            "price",
            "discount",
            "effective_price",
            "images",
            "stock",
            "is_in_stock",
            "featured",
            "new_arrival",
            "rating",
            "review_count",
            "created_at",
        ]
        read_only_fields = fields


class ProductDetailSerializer(ProductListSerializer):
    """Full product page"""

    wishlist_count = serializers.SerializerMethodField()

    class Meta(ProductListSerializer.Meta):
        fields = ProductListSerializer.Meta.fields + [
            "description",
            "sizes",
            "colors",
            "view_count",
            "wishlist_count",
            "is_active",
            "updated_at",
        ]
        read_only_fields = fields

    def get_wishlist_count(self, obj: Product) -> int:
        return obj.get_wishlist_count()


class ProductWriteSerializer(serializers.ModelSerializer):
    """Back office create/update"""

    class Meta:
        model = Product
        fields = [
            "id",
            "name",
            "category",
            "description",
            "price",
            "discount",
            "images",
            "sizes",
            "colors",
            "stock",
            "featured",
            "new_arrival",
            "is_active",
        ]
        read_only_fields = ["id"]

    def validate_images(self, value: Any) -> list:
        if not isinstance(value, list) or not all(isinstance(url, str) for url in value):
            raise serializers.ValidationError("images must be a list of URLs.")
        return value

    def validate_sizes(self, value: Any) -> list:
        if not isinstance(value, list):
            raise serializers.ValidationError("sizes must be a list.")
        try:
            return [int(size) for size in value]
        except (TypeError, ValueError):
            raise serializers.ValidationError("sizes must be whole numbers.")

    def validate_colors(self, value: Any) -> list:
        if not isinstance(value, list) or not all(isinstance(color, str) for color in value):
            raise serializers.ValidationError("colors must be a list of names.")
        return value


class ProductReviewSerializer(serializers.ModelSerializer):
    """Review display"""

    product_name = serializers.CharField(source="product.name", read_only=True)

    class Meta:
        model = ProductReview
        fields = ["id", "product", "product_name", "user", "username", "rating", "comment", "created_at"]
        read_only_fields = fields


class ProductReviewCreateSerializer(serializers.Serializer):
    """Review form"""

    rating = serializers.IntegerField(min_value=1, max_value=5)
    comment = serializers.CharField(required=False, allow_blank=True, default="")

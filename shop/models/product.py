from decimal import ROUND_HALF_UP, Decimal

from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.db.models import Avg


class Product(models.Model):
    """Catalogue item (footwear)"""

    CATEGORY_CHOICES = [
        ("shoes", "Shoes"),
        ("slippers", "Slippers"),
        ("boots", "Boots"),
        ("sandals", "Sandals"),
    ]

    LOW_STOCK_THRESHOLD = 5

    # Basic info
    name = models.CharField(max_length=200, verbose_name="name", db_index=True)
    category = models.CharField(
        max_length=20,
        choices=CATEGORY_CHOICES,
        db_index=True,
        verbose_name="category",
    )
    description = models.TextField(blank=True, verbose_name="description")

    # Pricing
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(0)],
        verbose_name="price",
    )
    discount = models.PositiveSmallIntegerField(
        null=True,
        blank=True,
        validators=[MaxValueValidator(100)],
        verbose_name="discount (%)",
        help_text="Percentage off the price (optional)",
    )

    # Media and variants, stored as JSON lists
    images = models.JSONField(default=list, blank=True, verbose_name="image URLs")
    sizes = models.JSONField(default=list, blank=True, verbose_name="sizes")
    colors = models.JSONField(default=list, blank=True, verbose_name="colours")

    # Inventory
    stock = models.PositiveIntegerField(default=0, verbose_name="stock")

    # Merchandising flags
    featured = models.BooleanField(default=False, db_index=True, verbose_name="featured")
    new_arrival = models.BooleanField(default=False, db_index=True, verbose_name="new arrival")
    is_active = models.BooleanField(default=True, verbose_name="on sale", help_text="Untick to hide the product.")

    # Stats
    view_count = models.PositiveIntegerField(default=0, verbose_name="views")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "shop_products"
        verbose_name = "product"
        verbose_name_plural = "products"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["name", "category"]),
            models.Index(fields=["price"]),
        ]

    def __str__(self):
        return self.name

    @property
    def effective_price(self) -> Decimal:
        """Price after discount, rounded to cents"""
        if not self.discount:
            return self.price
        discounted = self.price * (Decimal("100") - Decimal(self.discount)) / Decimal("100")
        return discounted.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)

    @property
    def is_in_stock(self) -> bool:
        return self.is_active and self.stock > 0

    @property
    def is_low_stock(self) -> bool:
        return self.stock <= self.LOW_STOCK_THRESHOLD

    def can_purchase(self, quantity: int) -> bool:
        return self.is_active and self.stock >= quantity

    def get_rating(self) -> float:
        """Average review rating (0 when unreviewed)"""
        result = self.reviews.aggregate(avg=Avg("rating"))["avg"]
        return round(result, 1) if result is not None else 0.0

    def get_wishlist_count(self) -> int:
        return self.wished_by_users.count()


class ProductReview(models.Model):
    """Customer review, one per user per product"""

    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name="reviews", verbose_name="product")
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        related_name="reviews",
        verbose_name="author",
    )
    # Display name kept even if the account goes away
    username = models.CharField(max_length=150, verbose_name="display name")
    rating = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(1), MaxValueValidator(5)],
        verbose_name="rating",
    )
    comment = models.TextField(blank=True, verbose_name="comment")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "shop_product_reviews"
        verbose_name = "product review"
        verbose_name_plural = "product reviews"
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(fields=["product", "user"], name="unique_review_per_user_product"),
        ]

    def __str__(self):
        return f"{self.product.name} - review by {self.username}"

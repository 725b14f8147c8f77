from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models

if TYPE_CHECKING:
    from shop.models.user import User


class Cart(models.Model):
    """
    Shopping cart

    Each user owns exactly one cart; it is emptied (not replaced) when an
    order is placed.
    """

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="cart",
        verbose_name="user",
    )

    created_at = models.DateTimeField(auto_now_add=True, verbose_name="created at")
    updated_at = models.DateTimeField(auto_now=True, verbose_name="updated at")

    class Meta:
        db_table = "shop_carts"
        verbose_name = "cart"
        verbose_name_plural = "carts"
        ordering = ["-updated_at"]

    def __str__(self) -> str:
        return f"{self.user.username}'s cart"

    def get_subtotal(self) -> Decimal:
        """Sum of effective price x quantity"""
        return sum(
            (item.subtotal for item in self.items.select_related("product")),
            Decimal("0"),
        )

    def get_total_quantity(self) -> int:
        from django.db.models import Sum
        from django.db.models.functions import Coalesce

        result = self.items.aggregate(total=Coalesce(Sum("quantity"), 0))
        return result["total"]

    def clear(self) -> None:
        self.items.all().delete()

    @classmethod
    def get_or_create_for_user(cls, user: User) -> tuple[Cart, bool]:
        return cls.objects.get_or_create(user=user)


class CartItem(models.Model):
    """
    Cart line

    A line is keyed by product, size and colour; the same product in a
    different size or colour is a separate line.
    """

    cart = models.ForeignKey(Cart, on_delete=models.CASCADE, related_name="items", verbose_name="cart")
    product = models.ForeignKey(
        "Product", on_delete=models.CASCADE, related_name="cart_items", verbose_name="product"
    )
    quantity = models.PositiveIntegerField(default=1, validators=[MinValueValidator(1)], verbose_name="quantity")
    size = models.CharField(max_length=10, blank=True, default="", verbose_name="size")
    color = models.CharField(max_length=30, blank=True, default="", verbose_name="colour")

    added_at = models.DateTimeField(auto_now_add=True, verbose_name="added at")
    updated_at = models.DateTimeField(auto_now=True, verbose_name="updated at")

    class Meta:
        db_table = "shop_cart_items"
        verbose_name = "cart item"
        verbose_name_plural = "cart items"
        ordering = ["-added_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["cart", "product", "size", "color"],
                name="unique_cart_line",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.product.name} x {self.quantity}"

    @property
    def unit_price(self) -> Decimal:
        return self.product.effective_price

    @property
    def subtotal(self) -> Decimal:
        return self.unit_price * self.quantity

    def is_available(self) -> bool:
        return self.product.can_purchase(self.quantity)

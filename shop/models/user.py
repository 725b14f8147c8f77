from __future__ import annotations

from typing import TYPE_CHECKING

from django.contrib.auth.models import AbstractUser
from django.core.validators import RegexValidator
from django.db import models

if TYPE_CHECKING:
    from shop.models.product import Product

phone_regex = RegexValidator(
    regex=r"^\+?\d{9,15}$",
    message="Enter a phone number like '0241234567' or '+233241234567'.",
)


class User(AbstractUser):
    """
    Custom user model

    Extends AbstractUser (username, email, password, ...) with the fields the
    storefront needs. The admin role is carried by is_staff.
    """

    ROLE_ADMIN = "admin"
    ROLE_USER = "user"
    ROLE_CHOICES = [
        (ROLE_ADMIN, "Admin"),
        (ROLE_USER, "User"),
    ]

    phone_number = models.CharField(
        max_length=16,
        validators=[phone_regex],
        blank=True,
        verbose_name="phone number",
    )

    # Saved products (wishlist)
    wishlist_products = models.ManyToManyField(
        "Product",
        related_name="wished_by_users",
        blank=True,
        verbose_name="wishlist",
        db_table="shop_wishlist",
    )

    class Meta:
        db_table = "shop_users"
        verbose_name = "user"
        verbose_name_plural = "users"

    def __str__(self) -> str:
        return f'{self.username} ({self.get_full_name() or "no name"})'

    @property
    def role(self) -> str:
        return self.ROLE_ADMIN if self.is_staff else self.ROLE_USER

    def set_role(self, role: str) -> None:
        """Switch between admin and user"""
        self.is_staff = role == self.ROLE_ADMIN
        self.save(update_fields=["is_staff"])

    # Wishlist helpers
    def add_to_wishlist(self, product: Product) -> None:
        self.wishlist_products.add(product)

    def remove_from_wishlist(self, product: Product) -> None:
        self.wishlist_products.remove(product)

    def is_in_wishlist(self, product: Product) -> bool:
        return self.wishlist_products.filter(id=product.id).exists()

    def get_wishlist_count(self) -> int:
        return self.wishlist_products.count()

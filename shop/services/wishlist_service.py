"""Wishlist service layer

Saved products per user, stored on User.wishlist_products.

Usage:
    result = WishlistService.toggle(user, product_id=1)
    status = WishlistService.check(user, product_id=1)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from django.db.models import QuerySet

    from ..models.user import User

from ..models.product import Product
from .base import ServiceError, log_service_call

logger = logging.getLogger(__name__)


class WishlistServiceError(ServiceError):
    """Wishlist service error"""

    def __init__(self, message: str, code: str = "WISHLIST_ERROR", details: dict | None = None):
        super().__init__(message, code, details)


@dataclass
class ToggleResult:
    """Toggle outcome"""

    is_wished: bool
    message: str
    wishlist_count: int  # how many users saved this product


class WishlistService:
    """
    Wishlist business logic

    Responsibilities:
    - toggle, add, remove
    - list and status check
    """

    @staticmethod
    @log_service_call
    def toggle(user: User, product_id: int) -> ToggleResult:
        """
        Add the product when absent, remove it when present

        Raises:
            WishlistServiceError: unknown product
        """
        product = WishlistService._get_product(product_id)

        if user.is_in_wishlist(product):
            user.remove_from_wishlist(product)
            is_wished = False
            message = "Removed from your wishlist."
            logger.info("[Wishlist] removed | user_id=%d, product_id=%d", user.id, product_id)
        else:
            user.add_to_wishlist(product)
            is_wished = True
            message = "Added to your wishlist."
            logger.info("[Wishlist] added | user_id=%d, product_id=%d", user.id, product_id)

        return ToggleResult(
            is_wished=is_wished,
            message=message,
            wishlist_count=product.get_wishlist_count(),
        )

    @staticmethod
    @log_service_call
    def add(user: User, product_id: int) -> tuple[bool, str, int]:
        """
        Add a product to the wishlist

        Returns:
            tuple: (is_new, message, wishlist_count)

        Raises:
            WishlistServiceError: unknown product
        """
        product = WishlistService._get_product(product_id)

        if user.is_in_wishlist(product):
            return False, "Already in your wishlist.", product.get_wishlist_count()

        user.add_to_wishlist(product)
        logger.info("[Wishlist] added | user_id=%d, product_id=%d", user.id, product_id)

        return True, "Added to your wishlist.", product.get_wishlist_count()

    @staticmethod
    @log_service_call
    def remove(user: User, product_id: int) -> str:
        """
        Remove a product from the wishlist

        Returns:
            str: removed product name

        Raises:
            WishlistServiceError: unknown product, or not in the wishlist
        """
        product = WishlistService._get_product(product_id)

        if not user.is_in_wishlist(product):
            raise WishlistServiceError(
                "This product is not in your wishlist.",
                code="NOT_IN_WISHLIST",
                details={"product_id": product_id},
            )

        user.remove_from_wishlist(product)
        logger.info("[Wishlist] removed | user_id=%d, product_id=%d", user.id, product_id)

        return product.name

    @staticmethod
    @log_service_call
    def check(user: User, product_id: int) -> dict:
        """Wishlist status of one product"""
        product = WishlistService._get_product(product_id)

        return {
            "product_id": product.id,
            "is_wished": user.is_in_wishlist(product),
            "wishlist_count": product.get_wishlist_count(),
        }

    @staticmethod
    def get_list(user: User) -> QuerySet:
        """Saved products, newest catalogue entries first"""
        return user.wishlist_products.order_by("-created_at")

    @staticmethod
    def _get_product(product_id: int) -> Product:
        try:
            return Product.objects.get(id=product_id)
        except Product.DoesNotExist:
            raise WishlistServiceError(
                "Product not found.",
                code="PRODUCT_NOT_FOUND",
                details={"product_id": product_id},
            )

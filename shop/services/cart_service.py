"""Cart service layer

Cart business logic: one cart per user, lines keyed by product, size and
colour, stock checks and the cart summary shown before checkout.

Usage:
    cart = CartService.get_or_create_cart(user)
    item = CartService.add_item(cart, product_id=1, quantity=2, size="42", color="Black")
    summary = CartService.get_summary(cart)
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import TYPE_CHECKING, TypedDict

from django.conf import settings
from django.db import transaction
from django.db.models import F, Prefetch

if TYPE_CHECKING:
    from ..models.user import User

from ..models.cart import Cart, CartItem
from ..models.product import Product
from .base import ServiceError, log_service_call

logger = logging.getLogger(__name__)


class CartServiceError(ServiceError):
    """Cart service error"""

    def __init__(self, message: str, code: str = "CART_ERROR", details: dict | None = None):
        super().__init__(message, code, details)


class CartSummary(TypedDict):
    """Cart totals"""

    subtotal: Decimal
    shipping_cost: Decimal
    total: Decimal
    item_count: int


class CartService:
    """
    Cart business logic

    Responsibilities:
    - cart lookup/creation
    - add/update/remove lines
    - stock validation
    - summary with the display shipping estimate

    Note:
        Stateless; everything comes in through arguments.
    """

    # ===== Policy constants =====
    MIN_QUANTITY = 1
    MAX_QUANTITY = 999
    FREE_SHIPPING_THRESHOLD = Decimal(getattr(settings, "CART_FREE_SHIPPING_THRESHOLD", "100"))
    FLAT_SHIPPING_FEE = Decimal(getattr(settings, "CART_FLAT_SHIPPING_FEE", "9.99"))

    # ===== Lookup =====

    @staticmethod
    @log_service_call
    def get_or_create_cart(user: User) -> Cart:
        """
        The user's cart, created on first use

        Args:
            user: authenticated user

        Returns:
            Cart: cart with items and products prefetched
        """
        cart, created = Cart.get_or_create_for_user(user)
        if created:
            logger.info("[Cart] cart created | user_id=%d, cart_id=%d", user.id, cart.id)

        return Cart.objects.prefetch_related(
            Prefetch(
                "items",
                queryset=CartItem.objects.select_related("product").order_by("-added_at"),
            )
        ).get(pk=cart.pk)

    # ===== Add =====

    @staticmethod
    @log_service_call
    @transaction.atomic
    def add_item(
        cart: Cart,
        product_id: int,
        quantity: int = 1,
        size: str = "",
        color: str = "",
    ) -> CartItem:
        """
        Add a product to the cart

        An existing line with the same product, size and colour is merged.

        Args:
            cart: cart
            product_id: product id
            quantity: quantity to add
            size: selected size ("" when none)
            color: selected colour ("" when none)

        Returns:
            CartItem: created or updated line

        Raises:
            CartServiceError: unknown product, bad quantity, not enough stock
        """
        CartService._validate_quantity(quantity)

        product = CartService._get_product_with_lock(product_id)
        cart = Cart.objects.select_for_update().get(pk=cart.pk)

        size = str(size or "")
        color = str(color or "")

        existing_item = cart.items.filter(product_id=product_id, size=size, color=color).first()
        total_quantity = quantity + (existing_item.quantity if existing_item else 0)

        CartService._validate_stock(product, total_quantity)

        if existing_item:
            CartItem.objects.filter(pk=existing_item.pk).update(quantity=F("quantity") + quantity)
            existing_item.refresh_from_db()
            cart_item = existing_item
            logger.info(
                "[Cart] line quantity increased | cart_id=%d, product_id=%d, new_qty=%d",
                cart.id, product_id, cart_item.quantity
            )
        else:
            cart_item = CartItem.objects.create(
                cart=cart,
                product=product,
                quantity=quantity,
                size=size,
                color=color,
            )
            logger.info(
                "[Cart] line added | cart_id=%d, product_id=%d, qty=%d, size=%s, color=%s",
                cart.id, product_id, quantity, size, color
            )

        return cart_item

    # ===== Update / remove =====

    @staticmethod
    @log_service_call
    @transaction.atomic
    def update_item_quantity(cart: Cart, item_id: int, quantity: int) -> CartItem | None:
        """
        Set a line's quantity

        A quantity of zero or less removes the line.

        Args:
            cart: cart
            item_id: cart line id
            quantity: new quantity

        Returns:
            CartItem: updated line (None when removed)

        Raises:
            CartServiceError: unknown line, not enough stock
        """
        if quantity <= 0:
            CartService.remove_item(cart, item_id)
            return None

        CartService._validate_quantity(quantity)

        try:
            cart_item = CartItem.objects.select_for_update().select_related("product").get(
                pk=item_id,
                cart=cart,
            )
        except CartItem.DoesNotExist:
            raise CartServiceError(
                "That item is not in your cart.",
                code="ITEM_NOT_FOUND",
            )

        CartService._validate_stock(cart_item.product, quantity)

        cart_item.quantity = quantity
        cart_item.save(update_fields=["quantity", "updated_at"])

        logger.info(
            "[Cart] quantity changed | cart_id=%d, item_id=%d, new_qty=%d",
            cart.id, item_id, quantity
        )

        return cart_item

    @staticmethod
    @log_service_call
    @transaction.atomic
    def remove_item(cart: Cart, item_id: int) -> str:
        """
        Remove a cart line

        Returns:
            str: name of the removed product

        Raises:
            CartServiceError: unknown line
        """
        try:
            cart_item = cart.items.select_related("product").get(pk=item_id)
        except CartItem.DoesNotExist:
            raise CartServiceError(
                "That item is not in your cart.",
                code="ITEM_NOT_FOUND",
            )

        product_name = cart_item.product.name
        cart_item.delete()

        logger.info(
            "[Cart] line removed | cart_id=%d, item_id=%d, product=%s",
            cart.id, item_id, product_name
        )

        return product_name

    @staticmethod
    @log_service_call
    @transaction.atomic
    def clear_cart(cart: Cart) -> int:
        """
        Empty the cart

        Returns:
            int: number of lines removed
        """
        deleted, _ = cart.items.all().delete()

        logger.info("[Cart] cart cleared | cart_id=%d, deleted=%d", cart.id, deleted)

        return deleted

    # ===== Summary =====

    @staticmethod
    def get_summary(cart: Cart) -> CartSummary:
        """
        Cart totals

        shipping_cost is the flat display estimate: free above the threshold.
        The fee charged at checkout comes from the delivery location instead.

        Returns:
            CartSummary: subtotal, shipping_cost, total, item_count
        """
        items = list(cart.items.select_related("product"))
        subtotal = sum((item.subtotal for item in items), Decimal("0"))
        item_count = sum(item.quantity for item in items)

        # An empty cart still shows the flat fee (subtotal 0 is under the threshold)
        if subtotal > CartService.FREE_SHIPPING_THRESHOLD:
            shipping_cost = Decimal("0")
        else:
            shipping_cost = CartService.FLAT_SHIPPING_FEE

        return {
            "subtotal": subtotal,
            "shipping_cost": shipping_cost,
            "total": subtotal + shipping_cost,
            "item_count": item_count,
        }

    # ===== Private helpers =====

    @staticmethod
    def _validate_quantity(quantity: int) -> None:
        if not isinstance(quantity, int) or quantity < CartService.MIN_QUANTITY:
            raise CartServiceError(
                f"Quantity must be at least {CartService.MIN_QUANTITY}.",
                code="INVALID_QUANTITY",
            )

        if quantity > CartService.MAX_QUANTITY:
            raise CartServiceError(
                f"Quantity cannot exceed {CartService.MAX_QUANTITY}.",
                code="QUANTITY_EXCEEDED",
            )

    @staticmethod
    def _get_product_with_lock(product_id: int) -> Product:
        try:
            product = Product.objects.select_for_update().get(
                id=product_id,
                is_active=True,
            )
        except Product.DoesNotExist:
            raise CartServiceError(
                "Product not found or no longer on sale.",
                code="PRODUCT_NOT_FOUND",
            )
        return product

    @staticmethod
    def _validate_stock(product: Product, quantity: int) -> None:
        if product.stock < quantity:
            raise CartServiceError(
                f"Not enough stock. Available: {product.stock}",
                code="INSUFFICIENT_STOCK",
                details={
                    "product_id": product.id,
                    "requested": quantity,
                    "available": product.stock,
                },
            )

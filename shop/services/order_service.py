"""Order service layer

Checkout (cart to order with a server-side delivery quote), payment
confirmation and status updates by the back office.
"""

from __future__ import annotations

import logging
import secrets
from decimal import Decimal
from typing import TYPE_CHECKING, TypedDict

from django.db import transaction
from django.db.models import F

if TYPE_CHECKING:
    from ..models.user import User

from ..models.cart import Cart
from ..models.order import Order, OrderItem
from ..models.product import Product
from .base import ServiceError, log_service_call
from .shipping_service import Coordinate, ShippingService

logger = logging.getLogger(__name__)


class OrderServiceError(ServiceError):
    """Order service error"""

    def __init__(self, message: str, code: str = "ORDER_ERROR", details: dict | None = None):
        super().__init__(message, code, details)


class CheckoutData(TypedDict, total=False):
    """Validated checkout form"""

    delivery_type: str
    full_name: str
    phone: str
    address: str
    longitude: float
    latitude: float
    payment_intent: str


class OrderService:
    """Order business logic"""

    # Statuses the back office can pick from the status selector
    SELECTABLE_STATUSES = [
        Order.STATUS_PAYMENT_CONFIRMED,
        Order.STATUS_PENDING,
        Order.STATUS_PROCESSING,
        Order.STATUS_SHIPPED,
        Order.STATUS_DELIVERED,
        Order.STATUS_CANCELLED,
    ]

    @staticmethod
    @log_service_call
    @transaction.atomic
    def place_order(user: User, cart: Cart, checkout: CheckoutData) -> Order:
        """
        Create an order from the cart

        The delivery fee is recomputed from the submitted location; a fee sent
        by the client is never trusted. Pickup orders carry no fee and no
        region.

        Args:
            user: customer
            cart: customer's cart
            checkout: validated checkout form

        Returns:
            Order: new order in pending_payment

        Raises:
            OrderServiceError: empty cart, inactive product, not enough stock
        """
        delivery_type = checkout.get("delivery_type", ShippingService.DELIVERY)

        logger.info(
            "[Order] checkout started | user_id=%d, cart_id=%d, delivery_type=%s",
            user.id, cart.id, delivery_type
        )

        # 1. Lock the cart so the same cart cannot be checked out twice at once
        cart = Cart.objects.select_for_update().get(pk=cart.pk)
        cart_items = list(cart.items.select_related("product").order_by("product_id", "id"))

        if not cart_items:
            raise OrderServiceError("Your cart is empty.", code="CART_EMPTY")

        # 2. Delivery quote
        destination = None
        if delivery_type == ShippingService.DELIVERY:
            destination = Coordinate(float(checkout["longitude"]), float(checkout["latitude"]))
        quote = ShippingService.quote_for_checkout(delivery_type, destination)

        logger.info(
            "[Order] delivery quoted | user_id=%d, fee=%s, region=%s",
            user.id, quote["fee"], quote["region"] or "-"
        )

        # 3. Order record
        order = Order.objects.create(
            user=user,
            status=Order.STATUS_PENDING_PAYMENT,
            delivery_type=delivery_type,
            customer_name=checkout["full_name"],
            customer_phone=checkout["phone"],
            shipping_address=checkout.get("address", "") if destination else "",
            gps_coordinates=ShippingService.format_gps_address(destination) if destination else "",
            longitude=destination.longitude if destination else None,
            latitude=destination.latitude if destination else None,
            region=quote["region"],
            shipping_fee=quote["fee"],
            payment_intent=checkout.get("payment_intent", ""),
        )

        # 4. Items + stock
        subtotal = OrderService._create_order_items_and_decrease_stock(order, cart_items)

        # 5. Total
        order.total = subtotal + quote["fee"]
        order.save(update_fields=["total", "updated_at"])

        # 6. Empty the cart
        cart.items.all().delete()

        order.refresh_from_db(fields=["order_number"])
        logger.info(
            "[Order] order placed | order_id=%d, order_number=%s, user_id=%d, total=%s",
            order.id, order.order_number, user.id, order.total
        )

        return order

    @staticmethod
    def _create_order_items_and_decrease_stock(order: Order, cart_items: list) -> Decimal:
        """
        Snapshot cart lines into order items and decrease stock

        Rows are locked in product id order.

        Returns:
            Decimal: items subtotal (effective prices)

        Raises:
            OrderServiceError: inactive product or not enough stock
        """
        subtotal = Decimal("0")

        for cart_item in cart_items:
            product = Product.objects.select_for_update().get(pk=cart_item.product_id)

            if not product.is_active:
                raise OrderServiceError(
                    f"{product.name} is no longer on sale.",
                    code="PRODUCT_INACTIVE",
                    details={"product_id": product.pk},
                )

            if product.stock < cart_item.quantity:
                raise OrderServiceError(
                    f"Not enough stock for {product.name} "
                    f"(requested: {cart_item.quantity}, available: {product.stock}).",
                    code="INSUFFICIENT_STOCK",
                    details={
                        "product_id": product.pk,
                        "requested": cart_item.quantity,
                        "available": product.stock,
                    },
                )

            Product.objects.filter(pk=product.pk).update(stock=F("stock") - cart_item.quantity)
            logger.info(
                "[Order] stock decreased | product_id=%d, quantity=%d, previous_stock=%d",
                product.pk, cart_item.quantity, product.stock
            )

            unit_price = product.effective_price
            OrderItem.objects.create(
                order=order,
                product=product,
                product_name=product.name,
                quantity=cart_item.quantity,
                price=unit_price,
                size=cart_item.size,
                color=cart_item.color,
            )
            subtotal += unit_price * cart_item.quantity

        return subtotal

    @staticmethod
    @log_service_call
    @transaction.atomic
    def confirm_payment(order: Order, admin_user: User) -> Order:
        """
        Mark a pending_payment order as paid

        Generates the 6-digit delivery OTP and records the admin who verified
        the payment.

        Raises:
            OrderServiceError: order is not awaiting payment
        """
        order = Order.objects.select_for_update().get(pk=order.pk)

        if not order.awaiting_payment:
            raise OrderServiceError(
                "Only orders awaiting payment can be confirmed.",
                code="INVALID_STATUS",
                details={"status": order.status},
            )

        order.status = Order.STATUS_PAYMENT_CONFIRMED
        order.otp_code = OrderService.generate_otp()
        order.processed_by_admin = admin_user
        order.save(update_fields=["status", "otp_code", "processed_by_admin", "updated_at"])

        logger.info(
            "[Order] payment confirmed | order_id=%d, order_number=%s, admin_id=%d",
            order.id, order.order_number, admin_user.id
        )

        return order

    @staticmethod
    @log_service_call
    @transaction.atomic
    def update_status(order: Order, new_status: str) -> Order:
        """
        Set an order's status

        Any selectable status is accepted; there is no enforced sequence. An
        order still awaiting payment must go through confirm_payment first.

        Raises:
            OrderServiceError: unknown status, or order awaiting payment
        """
        if new_status not in OrderService.SELECTABLE_STATUSES:
            raise OrderServiceError(
                f"Unknown status: {new_status}",
                code="INVALID_STATUS",
                details={"allowed": OrderService.SELECTABLE_STATUSES},
            )

        order = Order.objects.select_for_update().get(pk=order.pk)

        if order.awaiting_payment:
            raise OrderServiceError(
                "Confirm the payment before changing the status.",
                code="PAYMENT_NOT_CONFIRMED",
            )

        previous_status = order.status
        order.status = new_status
        order.save(update_fields=["status", "updated_at"])

        logger.info(
            "[Order] status changed | order_id=%d, from=%s, to=%s",
            order.id, previous_status, new_status
        )

        return order

    @staticmethod
    def generate_otp() -> str:
        """Six-digit code, never starting with 0"""
        return str(100000 + secrets.randbelow(900000))

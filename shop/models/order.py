from __future__ import annotations

from decimal import Decimal

from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models


class Order(models.Model):
    """
    Customer order

    - One user places many orders
    - Items are snapshotted into OrderItem at checkout
    - Statuses are flat labels; only confirm_payment enforces a precondition
    """

    STATUS_PENDING_PAYMENT = "pending_payment"
    STATUS_PAYMENT_CONFIRMED = "payment_confirmed"
    STATUS_PENDING = "pending"
    STATUS_PROCESSING = "processing"
    STATUS_SHIPPED = "shipped"
    STATUS_DELIVERED = "delivered"
    STATUS_CANCELLED = "cancelled"

    STATUS_CHOICES = [
        (STATUS_PENDING_PAYMENT, "Pending payment"),  # placed, waiting for the admin to verify payment
        (STATUS_PAYMENT_CONFIRMED, "Payment confirmed"),
        (STATUS_PENDING, "Pending"),
        (STATUS_PROCESSING, "Processing"),
        (STATUS_SHIPPED, "Shipped"),
        (STATUS_DELIVERED, "Delivered"),
        (STATUS_CANCELLED, "Cancelled"),
    ]

    DELIVERY_CHOICES = [
        ("delivery", "Home delivery"),
        ("pickup", "Pickup at Makola Market"),
    ]

    # Kept when the user account is deleted
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        related_name="orders",
        verbose_name="customer",
    )

    status = models.CharField(
        max_length=20,
        choices=STATUS_CHOICES,
        default=STATUS_PENDING_PAYMENT,
        db_index=True,
        verbose_name="status",
    )

    # Customer / delivery details
    delivery_type = models.CharField(
        max_length=10,
        choices=DELIVERY_CHOICES,
        default="delivery",
        verbose_name="delivery type",
    )
    customer_name = models.CharField(max_length=100, verbose_name="full name")
    customer_phone = models.CharField(max_length=20, verbose_name="phone")
    shipping_address = models.CharField(max_length=255, blank=True, default="", verbose_name="delivery address")
    gps_coordinates = models.CharField(
        max_length=40,
        blank=True,
        default="",
        verbose_name="GPS address",
        help_text="'lat, lon' picked on the map",
    )
    longitude = models.FloatField(null=True, blank=True, verbose_name="longitude")
    latitude = models.FloatField(null=True, blank=True, verbose_name="latitude")
    region = models.CharField(max_length=50, blank=True, default="", verbose_name="delivery region")

    # Amounts (kept for the record)
    shipping_fee = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal("0"),
        validators=[MinValueValidator(Decimal("0"))],
        verbose_name="delivery fee",
    )
    total = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0"),
        validators=[MinValueValidator(Decimal("0"))],
        verbose_name="total",
        help_text="items subtotal + delivery fee",
    )

    # Payment verification
    payment_intent = models.CharField(max_length=100, blank=True, default="", verbose_name="payment reference")
    otp_code = models.CharField(max_length=6, blank=True, default="", verbose_name="delivery OTP")
    processed_by_admin = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="processed_orders",
        verbose_name="processed by",
    )

    order_number = models.CharField(
        max_length=20,
        unique=True,
        null=True,
        blank=True,
        editable=False,
        verbose_name="order number",
        help_text="Generated after the first save",
    )

    created_at = models.DateTimeField(auto_now_add=True, verbose_name="ordered at")
    updated_at = models.DateTimeField(auto_now=True, verbose_name="updated at")

    class Meta:
        db_table = "shop_orders"
        verbose_name = "order"
        verbose_name_plural = "orders"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["status", "-created_at"]),
            models.Index(fields=["user", "-created_at"]),
        ]

    def __str__(self) -> str:
        return f'Order #{self.order_number or self.pk} - {self.user.username if self.user else "deleted user"}'

    @property
    def is_pickup(self) -> bool:
        return self.delivery_type == "pickup"

    @property
    def awaiting_payment(self) -> bool:
        return self.status == self.STATUS_PENDING_PAYMENT

    def get_items_subtotal(self) -> Decimal:
        return sum((item.get_subtotal() for item in self.order_items.all()), Decimal("0"))

    def clean(self) -> None:
        super().clean()

        if self.delivery_type == "delivery" and (self.longitude is None or self.latitude is None):
            raise ValidationError({"gps_coordinates": "Home delivery needs a location picked on the map."})

        if self.is_pickup and self.shipping_fee != 0:
            raise ValidationError({"shipping_fee": "Pickup orders carry no delivery fee."})


class OrderItem(models.Model):
    """
    Product line snapshotted at checkout

    Name and unit price are copied so later catalogue edits do not change
    past orders.
    """

    order = models.ForeignKey(
        Order,
        on_delete=models.CASCADE,
        related_name="order_items",
        verbose_name="order",
    )

    product = models.ForeignKey(
        "Product",
        on_delete=models.SET_NULL,
        null=True,
        related_name="order_items",
        verbose_name="product",
    )

    product_name = models.CharField(max_length=200, verbose_name="product name (at order time)")
    quantity = models.PositiveIntegerField(default=1, validators=[MinValueValidator(1)], verbose_name="quantity")
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0"))],
        verbose_name="unit price (at order time)",
    )
    size = models.CharField(max_length=10, blank=True, default="", verbose_name="size")
    color = models.CharField(max_length=30, blank=True, default="", verbose_name="colour")

    class Meta:
        db_table = "shop_order_items"
        verbose_name = "order item"
        verbose_name_plural = "order items"
        ordering = ["id"]

    def __str__(self) -> str:
        return f"{self.product_name} x {self.quantity}"

    def get_subtotal(self) -> Decimal:
        return self.price * self.quantity

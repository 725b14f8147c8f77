"""
Test factories for the shop app

factory_boy builders for the test data:
- sensible defaults, override what a test cares about
- related objects created automatically
"""

import math
from decimal import Decimal

import factory
from factory.django import DjangoModelFactory

from shop.models.cart import Cart, CartItem
from shop.models.message import ContactMessage, Message
from shop.models.order import Order, OrderItem
from shop.models.product import Product, ProductReview
from shop.models.user import User
from shop.services.shipping_service import EARTH_RADIUS_KM, Coordinate, ShippingService


class TestConstants:
    """Values shared across the suite"""

    DEFAULT_PASSWORD = "Str0ngPass!23"
    DEFAULT_PRODUCT_PRICE = Decimal("50.00")
    DEFAULT_STOCK = 20

    CUSTOMER_NAME = "Ama Mensah"
    CUSTOMER_PHONE = "+233241234567"
    DELIVERY_ADDRESS = "12 Oxford Street, Osu"


# ==========================================
# Users
# ==========================================


class UserFactory(DjangoModelFactory):
    """
    Customer account

    Usage:
        user = UserFactory()
        admin = UserFactory.admin()
        user = UserFactory(password="other-pass")
    """

    class Meta:
        model = User
        django_get_or_create = ("username",)
        skip_postgeneration_save = True

    username = factory.Sequence(lambda n: f"customer{n}")
    email = factory.LazyAttribute(lambda obj: f"{obj.username}@example.com")
    first_name = "Ama"
    last_name = "Mensah"
    phone_number = factory.Sequence(lambda n: f"+23324{n:07d}")
    is_active = True

    @factory.post_generation
    def password(obj, create, extracted, **kwargs):
        if not create:
            return
        obj.set_password(extracted or TestConstants.DEFAULT_PASSWORD)
        obj.save()

    @classmethod
    def admin(cls, **kwargs):
        kwargs.setdefault("username", "shopadmin")
        kwargs.setdefault("is_staff", True)
        return cls(**kwargs)


# ==========================================
# Catalogue
# ==========================================


class ProductFactory(DjangoModelFactory):
    """
    Footwear product

    Usage:
        product = ProductFactory()
        product = ProductFactory(price=Decimal("80.00"), discount=25)
        product = ProductFactory.out_of_stock()
    """

    class Meta:
        model = Product

    name = factory.Sequence(lambda n: f"Leather Sneaker {n}")
    category = "shoes"
    description = "Hand-finished leather upper."
    price = TestConstants.DEFAULT_PRODUCT_PRICE
    discount = None
    images = factory.LazyFunction(lambda: ["https://cdn.example.com/shoe.jpg"])
    sizes = factory.LazyFunction(lambda: [40, 41, 42])
    colors = factory.LazyFunction(lambda: ["Black", "Brown"])
    stock = TestConstants.DEFAULT_STOCK
    is_active = True

    @classmethod
    def out_of_stock(cls, **kwargs):
        kwargs.setdefault("stock", 0)
        return cls(**kwargs)

    @classmethod
    def inactive(cls, **kwargs):
        kwargs.setdefault("is_active", False)
        return cls(**kwargs)


class ProductReviewFactory(DjangoModelFactory):
    class Meta:
        model = ProductReview

    product = factory.SubFactory(ProductFactory)
    user = factory.SubFactory(UserFactory)
    username = factory.LazyAttribute(lambda obj: obj.user.username if obj.user else "guest")
    rating = 5
    comment = "Comfortable from day one."


# ==========================================
# Cart
# ==========================================


class CartFactory(DjangoModelFactory):
    class Meta:
        model = Cart
        django_get_or_create = ("user",)

    user = factory.SubFactory(UserFactory)


class CartItemFactory(DjangoModelFactory):
    """
    Cart line

    Usage:
        CartItemFactory(cart=cart, product=product, quantity=2, size="42")
    """

    class Meta:
        model = CartItem

    cart = factory.SubFactory(CartFactory)
    product = factory.SubFactory(ProductFactory)
    quantity = 1
    size = ""
    color = ""


# ==========================================
# Orders
# ==========================================


class OrderFactory(DjangoModelFactory):
    """
    Order awaiting payment, delivered to Osu

    Usage:
        order = OrderFactory(user=user)
        order = OrderFactory.paid(user=user)
    """

    class Meta:
        model = Order

    user = factory.SubFactory(UserFactory)
    status = Order.STATUS_PENDING_PAYMENT
    delivery_type = "delivery"
    customer_name = TestConstants.CUSTOMER_NAME
    customer_phone = TestConstants.CUSTOMER_PHONE
    shipping_address = TestConstants.DELIVERY_ADDRESS
    longitude = -0.1780
    latitude = 5.5560
    gps_coordinates = "5.556000, -0.178000"
    region = "Greater Accra"
    shipping_fee = Decimal("5.00")
    total = Decimal("55.00")

    @classmethod
    def paid(cls, **kwargs):
        kwargs.setdefault("status", Order.STATUS_PAYMENT_CONFIRMED)
        kwargs.setdefault("otp_code", "482913")
        return cls(**kwargs)


class OrderItemFactory(DjangoModelFactory):
    class Meta:
        model = OrderItem

    order = factory.SubFactory(OrderFactory)
    product = factory.SubFactory(ProductFactory)
    product_name = factory.LazyAttribute(lambda obj: obj.product.name)
    quantity = 1
    price = factory.LazyAttribute(lambda obj: obj.product.effective_price)


# ==========================================
# Messaging
# ==========================================


class MessageFactory(DjangoModelFactory):
    """
    Customer message to an admin

    Usage:
        MessageFactory(sender=user, receiver=admin_user)
        MessageFactory.from_admin(sender=admin_user, receiver=user)
    """

    class Meta:
        model = Message

    sender = factory.SubFactory(UserFactory)
    receiver = factory.SubFactory(UserFactory, is_staff=True)
    content = "Do you have the Palace Loafer in size 44?"
    is_admin_message = False
    is_read = False

    @classmethod
    def from_admin(cls, **kwargs):
        kwargs.setdefault("is_admin_message", True)
        kwargs.setdefault("content", "Yes, size 44 is in stock in black.")
        return cls(**kwargs)


class ContactMessageFactory(DjangoModelFactory):
    class Meta:
        model = ContactMessage

    name = TestConstants.CUSTOMER_NAME
    email = factory.Sequence(lambda n: f"visitor{n}@example.com")
    subject = "Wholesale order"
    message = "Can I order twenty pairs for a church event?"


# ==========================================
# Map helpers
# ==========================================


def point_north_of_origin(distance_km: float) -> Coordinate:
    """
    Coordinate due north of the dispatch point at an exact distance

    On the same meridian the great-circle distance is R * delta-latitude.
    """
    origin = ShippingService.ORIGIN
    return Coordinate(origin.longitude, origin.latitude + math.degrees(distance_km / EARTH_RADIUS_KM))

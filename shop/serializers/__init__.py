"""
shop/serializers/__init__.py

Entry point for the serializer modules.

Usage:
    from shop.serializers import ProductListSerializer, CartSerializer
"""

# Cart serializers
from .cart_serializers import (
    CartItemCreateSerializer,
    CartItemSerializer,
    CartItemUpdateSerializer,
    CartSerializer,
    CartSummarySerializer,
)

# Messaging serializers
from .message_serializers import (
    ContactMessageSerializer,
    ConversationSerializer,
    MessageCreateSerializer,
    MessageMarkReadSerializer,
    MessageSerializer,
)

# Order / checkout serializers
from .order_serializers import (
    CheckoutSerializer,
    OrderDetailSerializer,
    OrderItemSerializer,
    OrderListSerializer,
    OrderStatusUpdateSerializer,
    ShippingQuoteRequestSerializer,
    ShippingQuoteResponseSerializer,
)

# Product serializers
from .product_serializers import (
    ProductDetailSerializer,
    ProductListSerializer,
    ProductReviewCreateSerializer,
    ProductReviewSerializer,
    ProductWriteSerializer,
)

# User serializers
from .user_serializers import (
    LoginSerializer,
    RegisterSerializer,
    RoleUpdateSerializer,
    UserListSerializer,
    UserSerializer,
)

# Wishlist serializers
from .wishlist_serializers import WishlistProductIdSerializer, WishlistProductSerializer

__all__ = [
    # Cart
    "CartItemCreateSerializer",
    "CartItemSerializer",
    "CartItemUpdateSerializer",
    "CartSerializer",
    "CartSummarySerializer",
    # Messaging
    "ContactMessageSerializer",
    "ConversationSerializer",
    "MessageCreateSerializer",
    "MessageMarkReadSerializer",
    "MessageSerializer",
    # Order
    "CheckoutSerializer",
    "OrderDetailSerializer",
    "OrderItemSerializer",
    "OrderListSerializer",
    "OrderStatusUpdateSerializer",
    "ShippingQuoteRequestSerializer",
    "ShippingQuoteResponseSerializer",
    # Product
    "ProductDetailSerializer",
    "ProductListSerializer",
    "ProductReviewCreateSerializer",
    "ProductReviewSerializer",
    "ProductWriteSerializer",
    # User
    "LoginSerializer",
    "RegisterSerializer",
    "RoleUpdateSerializer",
    "UserListSerializer",
    "UserSerializer",
    # Wishlist
    "WishlistProductIdSerializer",
    "WishlistProductSerializer",
]

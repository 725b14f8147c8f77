"""
Storefront business logic services

Service layer pattern:
- business logic between views and models
- transaction boundaries and business rules
- unit-testable without HTTP
"""

from .base import ServiceError, log_service_call
from .cart_service import CartService, CartServiceError
from .dashboard_service import DashboardService
from .order_service import OrderService, OrderServiceError
from .product_service import ProductService
from .review_service import ReviewService, ReviewServiceError
from .shipping_service import Coordinate, ShippingService
from .wishlist_service import WishlistService, WishlistServiceError

__all__ = [
    # Base
    "ServiceError",
    "log_service_call",
    # Services
    "CartService",
    "CartServiceError",
    "Coordinate",
    "DashboardService",
    "OrderService",
    "OrderServiceError",
    "ProductService",
    "ReviewService",
    "ReviewServiceError",
    "ShippingService",
    "WishlistService",
    "WishlistServiceError",
]

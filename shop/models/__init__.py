from .cart import Cart, CartItem
from .message import ContactMessage, Message
from .order import Order, OrderItem
from .product import Product, ProductReview
from .user import User

__all__ = [
    "Product",
    "ProductReview",
    "Order",
    "OrderItem",
    "User",
    "Cart",
    "CartItem",
    "Message",
    "ContactMessage",
]

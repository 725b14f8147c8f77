"""
API rate limiting classes

- Auth endpoints (login, register): strict limits against brute force
- Checkout, shipping quote and contact form: moderate limits against spam
- Global limits: default for every API request

Rates live in REST_FRAMEWORK["DEFAULT_THROTTLE_RATES"]; local and production
settings back them with the Redis cache.
"""

from rest_framework.throttling import AnonRateThrottle, UserRateThrottle


# ============================================================
# Auth throttles
# ============================================================


class LoginRateThrottle(AnonRateThrottle):
    """
    Login endpoint

    Limit: 5 per minute per IP

    Applied to: LoginView
    """
    scope = "login"


class RegisterRateThrottle(AnonRateThrottle):
    """
    Registration endpoint

    Applied to: RegisterView
    """
    scope = "register"


# ============================================================
# Checkout throttles
# ============================================================


class OrderCreateRateThrottle(UserRateThrottle):
    """
    Order placement

    Applied to: OrderViewSet.create
    """
    scope = "order_create"


class ShippingQuoteRateThrottle(UserRateThrottle):
    """
    Delivery fee quote

    The checkout map re-quotes on every pin move, so the rate is generous.
    Signed-in shoppers are limited per account, guests per IP.

    Applied to: ShippingQuoteView
    """
    scope = "shipping_quote"


class ContactRateThrottle(UserRateThrottle):
    """
    Contact form

    Open to guests, so both guests and signed-in users are limited.

    Applied to: ContactMessageViewSet.create
    """
    scope = "contact"


# ============================================================
# Global throttles
# ============================================================


class GlobalAnonRateThrottle(AnonRateThrottle):
    """Default limit for anonymous requests"""
    scope = "anon_global"


class GlobalUserRateThrottle(UserRateThrottle):
    """Default limit for authenticated requests"""
    scope = "user_global"

"""
Shipping Configuration
Delivery fee policy shared by the checkout and the cart summary.
"""

import os

# ==========================================
# Map-based delivery fee
# ==========================================
#
# Dispatch point as (longitude, latitude): Makola Market, Accra.
# The region tier table lives in shop.services.shipping_service.

SHIPPING_ORIGIN = (
    float(os.environ.get("SHIPPING_ORIGIN_LONGITUDE", "-0.2074")),
    float(os.environ.get("SHIPPING_ORIGIN_LATITUDE", "5.5500")),
)

# Distance delivered without surcharge (km)
SHIPPING_FREE_RADIUS_KM = float(os.environ.get("SHIPPING_FREE_RADIUS_KM", "20"))

# Surcharge per km beyond the free radius (GHS)
SHIPPING_SURCHARGE_PER_KM = float(os.environ.get("SHIPPING_SURCHARGE_PER_KM", "0.5"))

# ==========================================
# Cart summary estimate
# ==========================================

# Subtotal above which the cart shows free shipping (GHS)
CART_FREE_SHIPPING_THRESHOLD = os.environ.get("CART_FREE_SHIPPING_THRESHOLD", "100")

# Flat estimate shown in the cart below the threshold (GHS)
CART_FLAT_SHIPPING_FEE = os.environ.get("CART_FLAT_SHIPPING_FEE", "9.99")

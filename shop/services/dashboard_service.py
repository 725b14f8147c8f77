"""
Back office dashboard figures
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import TypedDict

from django.contrib.auth import get_user_model
from django.core.cache import cache
from django.db.models import Sum
from django.db.models.functions import Coalesce

from ..models.order import Order
from ..models.product import Product

logger = logging.getLogger(__name__)


class DashboardStats(TypedDict):
    orders_count: int
    products_count: int
    users_count: int
    total_revenue: Decimal


class DashboardService:
    """Dashboard counters, cached briefly"""

    CACHE_KEY = "shop:dashboard_stats"
    CACHE_TIMEOUT = 60  # seconds

    @staticmethod
    def get_stats(use_cache: bool = True) -> DashboardStats:
        """
        Orders, products and users counts plus revenue

        total_revenue is the sum of every order total, whatever its status.
        """
        if use_cache:
            cached = cache.get(DashboardService.CACHE_KEY)
            if cached is not None:
                return cached

        stats: DashboardStats = {
            "orders_count": Order.objects.count(),
            "products_count": Product.objects.count(),
            "users_count": get_user_model().objects.count(),
            "total_revenue": Order.objects.aggregate(
                total=Coalesce(Sum("total"), Decimal("0"))
            )["total"],
        }

        cache.set(DashboardService.CACHE_KEY, stats, DashboardService.CACHE_TIMEOUT)
        logger.debug("[Dashboard] stats computed | orders=%d", stats["orders_count"])

        return stats

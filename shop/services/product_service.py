"""
Catalogue business logic
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from django.db.models import Avg, Count, F, FloatField, Value
from django.db.models.functions import Coalesce

from ..models.product import Product

if TYPE_CHECKING:
    from django.db.models import QuerySet

logger = logging.getLogger(__name__)


class ProductService:
    """Catalogue service"""

    RECOMMENDATION_LIMIT = 4

    @staticmethod
    def with_ratings(queryset: QuerySet | None = None) -> QuerySet:
        """
        Annotate avg_rating and review_cnt (one query instead of N+1)

        Unreviewed products get avg_rating 0.0, not NULL.

        Must be applied before slicing.
        """
        queryset = Product.objects.all() if queryset is None else queryset
        return queryset.annotate(
            avg_rating=Coalesce(Avg("reviews__rating"), Value(0.0), output_field=FloatField()),
            review_cnt=Count("reviews", distinct=True),
        )

    @staticmethod
    def record_view(product: Product) -> int:
        """
        Count a product page view

        F() increment so concurrent views are not lost.

        Returns:
            int: updated view count
        """
        Product.objects.filter(pk=product.pk).update(view_count=F("view_count") + 1)
        product.refresh_from_db(fields=["view_count"])
        logger.debug("[Product] view recorded | product_id=%d, views=%d", product.pk, product.view_count)
        return product.view_count

    @staticmethod
    def get_recommendations(product: Product, limit: int | None = None) -> QuerySet:
        """
        Other active products in the same category

        Featured products first, then the most viewed.

        Args:
            product: product being viewed (excluded)
            limit: maximum number of results (default 4)
        """
        limit = limit or ProductService.RECOMMENDATION_LIMIT
        queryset = Product.objects.filter(category=product.category, is_active=True).exclude(pk=product.pk)
        return ProductService.with_ratings(queryset).order_by("-featured", "-view_count", "-created_at")[:limit]

    @staticmethod
    def get_low_stock_products() -> QuerySet:
        """Active products at or under the low-stock threshold, lowest first"""
        queryset = Product.objects.filter(
            is_active=True,
            stock__lte=Product.LOW_STOCK_THRESHOLD,
        )
        return ProductService.with_ratings(queryset).order_by("stock", "name")

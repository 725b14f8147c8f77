"""
Product review business logic
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from django.db import IntegrityError, transaction

from ..models.product import ProductReview
from .base import ServiceError, log_service_call

if TYPE_CHECKING:
    from shop.models.product import Product
    from shop.models.user import User

logger = logging.getLogger(__name__)


class ReviewServiceError(ServiceError):
    """Review service error"""

    def __init__(self, message: str, code: str = "REVIEW_ERROR", details: dict | None = None):
        super().__init__(message, code, details)


class ReviewService:
    """Product review service"""

    @staticmethod
    @log_service_call
    def create_review(product: Product, user: User, rating: int, comment: str = "") -> ProductReview:
        """
        Post a review

        The display name is copied from the account (full name, else username).

        Args:
            product: reviewed product
            user: author
            rating: 1-5
            comment: review text

        Returns:
            ProductReview: new review

        Raises:
            ReviewServiceError: the user already reviewed this product
        """
        if ProductReview.objects.filter(product=product, user=user).exists():
            raise ReviewServiceError(
                "You have already reviewed this product.",
                code="ALREADY_REVIEWED",
                details={"product_id": product.id},
            )

        try:
            # savepoint so a lost race leaves the outer transaction usable
            with transaction.atomic():
                review = ProductReview.objects.create(
                    product=product,
                    user=user,
                    username=user.get_full_name() or user.username,
                    rating=rating,
                    comment=comment,
                )
        except IntegrityError:
            raise ReviewServiceError(
                "You have already reviewed this product.",
                code="ALREADY_REVIEWED",
                details={"product_id": product.id},
            )

        logger.info(
            "[Review] review posted | product_id=%d, user_id=%d, rating=%d",
            product.id, user.id, rating
        )

        return review

    @staticmethod
    @log_service_call
    def delete_review(review: ProductReview) -> None:
        """Remove a review (back office moderation)"""
        review_id, product_id = review.id, review.product_id
        review.delete()
        logger.info("[Review] review deleted | review_id=%d, product_id=%d", review_id, product_id)

"""
Back office API

Dashboard figures, user roles and review moderation. Every endpoint here
requires an admin account.
"""

from __future__ import annotations

import logging

from drf_spectacular.utils import extend_schema, extend_schema_view
from rest_framework import mixins, serializers as drf_serializers, status, viewsets
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from shop.models.product import ProductReview
from shop.models.user import User
from shop.permissions import IsAdmin
from shop.serializers import ProductReviewSerializer, RoleUpdateSerializer, UserListSerializer
from shop.services.dashboard_service import DashboardService
from shop.services.review_service import ReviewService

logger = logging.getLogger(__name__)


class DashboardStatsSerializer(drf_serializers.Serializer):
    orders_count = drf_serializers.IntegerField()
    products_count = drf_serializers.IntegerField()
    users_count = drf_serializers.IntegerField()
    total_revenue = drf_serializers.DecimalField(max_digits=14, decimal_places=2)


class DashboardStatsView(APIView):
    """Headline counters for the back office"""

    permission_classes = [IsAdmin]

    @extend_schema(
        responses={200: DashboardStatsSerializer},
        summary="Dashboard figures (admin).",
        description="Orders, products, users and revenue. Cached for 60 seconds.",
        tags=["Admin"],
    )
    def get(self, request: Request) -> Response:
        return Response(DashboardStatsSerializer(DashboardService.get_stats()).data)


@extend_schema_view(
    list=extend_schema(summary="List users (admin).", tags=["Admin"]),
)
class AdminUserViewSet(mixins.ListModelMixin, viewsets.GenericViewSet):
    """
    User management
    - GET   /api/admin/users/            - all accounts, newest first
    - PATCH /api/admin/users/{id}/role/  - promote to admin or demote to user
    """

    permission_classes = [IsAdmin]
    serializer_class = UserListSerializer
    queryset = User.objects.order_by("-date_joined")

    @extend_schema(
        request=RoleUpdateSerializer,
        responses={200: UserListSerializer},
        summary="Change a user's role (admin).",
        tags=["Admin"],
    )
    @action(detail=True, methods=["patch"])
    def role(self, request: Request, pk: int | None = None) -> Response:
        user = self.get_object()

        serializer = RoleUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user.set_role(serializer.validated_data["role"])
        logger.info("[Admin] role changed | user_id=%d, role=%s, by=%d", user.id, user.role, request.user.id)

        return Response(UserListSerializer(user).data)


@extend_schema_view(
    list=extend_schema(summary="List all reviews (admin).", tags=["Admin"]),
    destroy=extend_schema(summary="Delete a review (admin).", tags=["Admin"]),
)
class AdminReviewViewSet(mixins.ListModelMixin, mixins.DestroyModelMixin, viewsets.GenericViewSet):
    """Review moderation across every product"""

    permission_classes = [IsAdmin]
    serializer_class = ProductReviewSerializer
    queryset = ProductReview.objects.select_related("product").order_by("-created_at")

    def destroy(self, request: Request, *args, **kwargs) -> Response:
        review = self.get_object()
        ReviewService.delete_review(review)
        return Response(status=status.HTTP_204_NO_CONTENT)

from __future__ import annotations

from typing import Any

from django_filters.rest_framework import DjangoFilterBackend

from drf_spectacular.utils import extend_schema, extend_schema_view, OpenApiParameter
from rest_framework import filters, permissions, serializers as drf_serializers, status, viewsets
from rest_framework.decorators import action
from rest_framework.pagination import PageNumberPagination
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.serializers import BaseSerializer

from shop.filters import ProductFilter
from shop.models.product import Product
from shop.permissions import IsAdmin, IsAdminOrReadOnly, is_admin_user
from shop.serializers import (
    ProductDetailSerializer,
    ProductListSerializer,
    ProductReviewCreateSerializer,
    ProductReviewSerializer,
    ProductWriteSerializer,
)
from shop.services.product_service import ProductService
from shop.services.review_service import ReviewService, ReviewServiceError
from shop.views.mixins import ServiceErrorResponseMixin


# ===== Response serializers for the API docs =====


class ProductErrorResponseSerializer(drf_serializers.Serializer):
    """Product error response"""

    error = drf_serializers.CharField()
    code = drf_serializers.CharField(required=False)


class ProductViewCountResponseSerializer(drf_serializers.Serializer):
    """View counter response"""

    view_count = drf_serializers.IntegerField()


class ProductPagination(PageNumberPagination):
    """
    Product list pagination
    - 12 products per page by default
    - page_size query parameter, capped at 100
    """

    page_size = 12
    page_size_query_param = "page_size"
    max_page_size = 100


@extend_schema_view(
    list=extend_schema(
        parameters=[
            OpenApiParameter(name="search", description="Search text (name, description)", required=False, type=str),
            OpenApiParameter(
                name="ordering",
                description="Ordering (price, -price, created_at, -created_at, name, view_count)",
                required=False,
                type=str,
            ),
        ],
        summary="List products.",
        description="""Returns active products, paginated.
- Filters: category, featured, new_arrival, min_price, max_price, in_stock
- Search over name and description""",
        tags=["Products"],
    ),
    retrieve=extend_schema(summary="Product detail.", tags=["Products"]),
    create=extend_schema(summary="Create a product (admin).", tags=["Products"]),
    update=extend_schema(summary="Replace a product (admin).", tags=["Products"]),
    partial_update=extend_schema(summary="Update a product (admin).", tags=["Products"]),
    destroy=extend_schema(summary="Delete a product (admin).", tags=["Products"]),
)
class ProductViewSet(ServiceErrorResponseMixin, viewsets.ModelViewSet):
    """Catalogue CRUD, search and filtering"""

    queryset = Product.objects.all()
    pagination_class = ProductPagination
    permission_classes = [IsAdminOrReadOnly]

    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_class = ProductFilter
    search_fields = ["name", "description"]
    ordering_fields = ["price", "created_at", "name", "view_count", "stock"]
    ordering = ["-created_at"]

    def get_serializer_class(self) -> type[BaseSerializer]:
        """
        Serializer per action

        - list/recommendations/low_stock: ProductListSerializer
        - retrieve: ProductDetailSerializer
        - create/update/partial_update: ProductWriteSerializer
        """
        if self.action == "retrieve":
            return ProductDetailSerializer
        elif self.action in ["create", "update", "partial_update"]:
            return ProductWriteSerializer
        return ProductListSerializer

    def get_queryset(self) -> Any:
        """
        Products with rating aggregates

        Shoppers only see active products; admins reach hidden ones too so
        they can edit them.
        """
        queryset = ProductService.with_ratings()

        if not is_admin_user(self.request.user):
            queryset = queryset.filter(is_active=True)

        return queryset

    @extend_schema(
        responses={200: ProductListSerializer(many=True)},
        summary="Products to suggest alongside this one.",
        description="Up to 4 other active products from the same category.",
        tags=["Products"],
    )
    @action(detail=True, methods=["get"])
    def recommendations(self, request: Request, pk: int | None = None) -> Response:
        product = self.get_object()
        recommended = ProductService.get_recommendations(product)
        serializer = ProductListSerializer(recommended, many=True, context={"request": request})
        return Response(serializer.data)

    @extend_schema(
        request=None,
        responses={200: ProductViewCountResponseSerializer},
        summary="Record a product page view.",
        tags=["Products"],
    )
    @action(detail=True, methods=["post"], permission_classes=[permissions.AllowAny])
    def views(self, request: Request, pk: int | None = None) -> Response:
        product = self.get_object()
        view_count = ProductService.record_view(product)
        return Response({"view_count": view_count})

    @extend_schema(
        responses={200: ProductReviewSerializer(many=True)},
        summary="List a product's reviews.",
        tags=["Reviews"],
    )
    @action(detail=True, methods=["get"], permission_classes=[permissions.IsAuthenticatedOrReadOnly])
    def reviews(self, request: Request, pk: int | None = None) -> Response:
        product = self.get_object()
        reviews = product.reviews.select_related("product").order_by("-created_at")

        page = self.paginate_queryset(reviews)
        if page is not None:
            serializer = ProductReviewSerializer(page, many=True)
            return self.get_paginated_response(serializer.data)

        serializer = ProductReviewSerializer(reviews, many=True)
        return Response(serializer.data)

    @extend_schema(
        request=ProductReviewCreateSerializer,
        responses={
            201: ProductReviewSerializer,
            400: ProductErrorResponseSerializer,
        },
        summary="Review a product.",
        description="One review per user per product; sign-in required.",
        tags=["Reviews"],
    )
    @reviews.mapping.post
    def create_review(self, request: Request, pk: int | None = None) -> Response:
        product = self.get_object()

        serializer = ProductReviewCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            review = ReviewService.create_review(
                product,
                request.user,
                rating=serializer.validated_data["rating"],
                comment=serializer.validated_data["comment"],
            )
        except ReviewServiceError as e:
            return self.service_error_response(e)

        return Response(ProductReviewSerializer(review).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        responses={
            200: ProductListSerializer(many=True),
            403: ProductErrorResponseSerializer,
        },
        summary="Inventory alert.",
        description="Active products with 5 or fewer in stock, lowest first (admin).",
        tags=["Products"],
    )
    @action(detail=False, methods=["get"], permission_classes=[IsAdmin])
    def low_stock(self, request: Request) -> Response:
        low_stock_products = ProductService.get_low_stock_products()
        serializer = ProductListSerializer(low_stock_products, many=True, context={"request": request})
        return Response(serializer.data)

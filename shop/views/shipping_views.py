from __future__ import annotations

import logging

from drf_spectacular.utils import extend_schema
from rest_framework import permissions
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from shop.serializers import ShippingQuoteRequestSerializer, ShippingQuoteResponseSerializer
from shop.services.shipping_service import Coordinate, ShippingService
from shop.throttles import ShippingQuoteRateThrottle

logger = logging.getLogger(__name__)


class ShippingQuoteView(APIView):
    """
    Delivery fee quote for a location picked on the map

    Shown live on the checkout page; checkout recomputes the same fee on the
    server when the order is placed.
    """

    permission_classes = [permissions.AllowAny]
    throttle_classes = [ShippingQuoteRateThrottle]

    @extend_schema(
        request=ShippingQuoteRequestSerializer,
        responses={200: ShippingQuoteResponseSerializer},
        summary="Quote the delivery fee.",
        description="Region tier fee plus a per-km surcharge beyond the free radius from the shop.",
        tags=["Shipping"],
    )
    def post(self, request: Request) -> Response:
        serializer = ShippingQuoteRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        destination = Coordinate(serializer.validated_data["longitude"], serializer.validated_data["latitude"])
        quote, distance = ShippingService.quote_with_distance(destination)

        logger.debug(
            "[Shipping] quote | lon=%.6f, lat=%.6f, region=%s, fee=%s",
            destination.longitude, destination.latitude, quote["region"], quote["fee"]
        )

        data = {
            "fee": quote["fee"],
            "region": quote["region"],
            "distance_km": round(distance, 2),
            "gps_address": ShippingService.format_gps_address(destination),
        }
        return Response(ShippingQuoteResponseSerializer(data).data)

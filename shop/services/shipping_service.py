"""Shipping service layer

Map-based delivery fee: great-circle distance from the dispatch point,
region tier lookup and a per-km surcharge beyond the free radius.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import Decimal
from typing import NamedTuple, TypedDict

from django.conf import settings


class Coordinate(NamedTuple):
    """(longitude, latitude) in decimal degrees, WGS-84"""

    longitude: float
    latitude: float


@dataclass(frozen=True)
class RegionTier:
    """Named distance bracket with its base delivery fee"""

    region_name: str
    base_fee: float
    max_distance_km: float


class FeeQuote(TypedDict):
    """Delivery fee quote"""

    fee: Decimal
    region: str


EARTH_RADIUS_KM = 6371

# Order matters: the first tier whose radius covers the distance wins.
# The table is not sorted by max_distance_km: Central, Eastern, Volta and
# Brong Ahafo sit behind wider tiers and are never selected. Keep it as
# shipped; a re-sort changes quoted fees and must be a deliberate change.
REGION_TIERS: tuple[RegionTier, ...] = (
    RegionTier("Greater Accra", 5, 50),
    RegionTier("Ashanti", 15, 300),
    RegionTier("Western", 20, 400),
    RegionTier("Central", 18, 200),
    RegionTier("Eastern", 12, 150),
    RegionTier("Northern", 35, 600),
    RegionTier("Upper East", 40, 700),
    RegionTier("Upper West", 42, 750),
    RegionTier("Volta", 22, 300),
    RegionTier("Brong Ahafo", 25, 350),
)


def haversine_km(origin: Coordinate, destination: Coordinate) -> float:
    """
    Great-circle distance between two coordinates

    Args:
        origin: start point (longitude, latitude)
        destination: end point (longitude, latitude)

    Returns:
        float: distance in kilometres, NaN when either point is not finite
    """
    if not all(math.isfinite(value) for value in (*origin, *destination)):
        return math.nan
    d_lat = math.radians(destination.latitude - origin.latitude)
    d_lon = math.radians(destination.longitude - origin.longitude)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(origin.latitude))
        * math.cos(math.radians(destination.latitude))
        * math.sin(d_lon / 2) ** 2
    )
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def _round_half_up_cents(value: float) -> float:
    """Round to 2 places, halves towards +infinity. Non-finite values pass through."""
    if not math.isfinite(value):
        return value
    return math.floor(value * 100 + 0.5) / 100


class ShippingService:
    """Delivery fee calculation for checkout"""

    ORIGIN = Coordinate(*getattr(settings, "SHIPPING_ORIGIN", (-0.2074, 5.5500)))  # Makola Market, Accra
    FREE_RADIUS_KM = getattr(settings, "SHIPPING_FREE_RADIUS_KM", 20.0)
    SURCHARGE_PER_KM = getattr(settings, "SHIPPING_SURCHARGE_PER_KM", 0.5)
    REGION_TIERS = REGION_TIERS

    DELIVERY = "delivery"
    PICKUP = "pickup"

    @classmethod
    def distance_km(cls, destination: Coordinate) -> float:
        """Distance from the dispatch point"""
        return haversine_km(cls.ORIGIN, destination)

    @classmethod
    def match_tier(cls, distance_km: float) -> RegionTier:
        """
        Region tier for a distance

        First tier in table order whose radius covers the distance. When none
        does (farther than every tier, or NaN distance) the first tier is
        returned; unmatched far destinations are charged as Greater Accra plus
        the distance surcharge.

        Args:
            distance_km: distance from the dispatch point

        Returns:
            RegionTier: matched tier
        """
        selected = cls.REGION_TIERS[0]
        for tier in cls.REGION_TIERS:
            if distance_km <= tier.max_distance_km:
                selected = tier
                break
        return selected

    @classmethod
    def surcharge(cls, distance_km: float) -> float:
        """Per-km surcharge beyond the free radius; none for a NaN distance"""
        excess = distance_km - cls.FREE_RADIUS_KM
        if not excess > 0:
            return 0.0
        return excess * cls.SURCHARGE_PER_KM

    @classmethod
    def estimate_fee(cls, destination: Coordinate) -> FeeQuote:
        """
        Delivery fee for a destination

        Args:
            destination: (longitude, latitude) picked on the map

        Returns:
            FeeQuote: fee rounded to 2 places and the matched region name

        Note:
            Never raises. A NaN or infinite coordinate has no distance and is
            charged the first tier's base fee; callers must check that a
            location was selected first.
        """
        quote, _distance = cls.quote_with_distance(destination)
        return quote

    @classmethod
    def quote_with_distance(cls, destination: Coordinate) -> tuple[FeeQuote, float]:
        """Fee quote together with the distance it was priced on"""
        distance = cls.distance_km(Coordinate(*destination))
        tier = cls.match_tier(distance)
        fee = _round_half_up_cents(tier.base_fee + cls.surcharge(distance))

        quote: FeeQuote = {
            "fee": Decimal(str(fee)),
            "region": tier.region_name,
        }
        return quote, distance

    @classmethod
    def quote_for_checkout(cls, delivery_type: str, destination: Coordinate | None = None) -> FeeQuote:
        """
        Fee stored on an order

        Pickup at the market is free and carries no region.

        Args:
            delivery_type: "delivery" or "pickup"
            destination: required for delivery

        Returns:
            FeeQuote
        """
        if delivery_type == cls.PICKUP:
            return {"fee": Decimal("0"), "region": ""}
        if destination is None:
            raise ValueError("destination is required for home delivery")
        return cls.estimate_fee(destination)

    @staticmethod
    def format_gps_address(destination: Coordinate) -> str:
        """'lat, lon' with 6 decimals, as shown in the checkout form"""
        return f"{destination.latitude:.6f}, {destination.longitude:.6f}"

"""
Delivery fee estimator tests (ShippingService)

Covers:
- great-circle distance
- first-match region tier lookup and the far-distance fallback
- per-km surcharge beyond the free radius
- rounding and degenerate coordinates
- checkout quote (pickup vs delivery)
"""

import math
from decimal import Decimal

import pytest

from shop.services.shipping_service import (
    REGION_TIERS,
    Coordinate,
    ShippingService,
    _round_half_up_cents,
    haversine_km,
)
from shop.tests.factories import point_north_of_origin


class TestHaversine:
    def test_zero_distance_at_origin(self):
        assert ShippingService.distance_km(ShippingService.ORIGIN) == pytest.approx(0.0, abs=1e-9)

    def test_one_degree_of_latitude(self):
        """One degree along a meridian is R * pi / 180 km"""
        origin = Coordinate(0.0, 0.0)
        destination = Coordinate(0.0, 1.0)

        assert haversine_km(origin, destination) == pytest.approx(111.19, abs=0.01)

    def test_symmetric(self):
        accra = Coordinate(-0.2074, 5.5500)
        kumasi = Coordinate(-1.6244, 6.6885)

        assert haversine_km(accra, kumasi) == pytest.approx(haversine_km(kumasi, accra))

    def test_accra_to_kumasi(self):
        distance = ShippingService.distance_km(Coordinate(-1.6244, 6.6885))

        assert 195 < distance < 205

    def test_helper_point_lands_at_requested_distance(self):
        assert ShippingService.distance_km(point_north_of_origin(120)) == pytest.approx(120, abs=1e-6)

    @pytest.mark.parametrize(
        "destination",
        [Coordinate(-0.2, float("inf")), Coordinate(float("inf"), 5.0), Coordinate(float("nan"), 5.0)],
    )
    def test_non_finite_point_has_no_distance(self, destination):
        assert math.isnan(haversine_km(ShippingService.ORIGIN, destination))


class TestRegionTierTable:
    def test_shipped_order_is_pinned(self):
        """Re-sorting the table changes quoted fees; this must stay a deliberate change"""
        assert [(t.region_name, t.base_fee, t.max_distance_km) for t in REGION_TIERS] == [
            ("Greater Accra", 5, 50),
            ("Ashanti", 15, 300),
            ("Western", 20, 400),
            ("Central", 18, 200),
            ("Eastern", 12, 150),
            ("Northern", 35, 600),
            ("Upper East", 40, 700),
            ("Upper West", 42, 750),
            ("Volta", 22, 300),
            ("Brong Ahafo", 25, 350),
        ]

    def test_tiers_are_immutable(self):
        with pytest.raises(AttributeError):
            REGION_TIERS[0].base_fee = 1

    @pytest.mark.parametrize(
        "distance, region",
        [
            (0, "Greater Accra"),
            (50, "Greater Accra"),
            (50.01, "Ashanti"),
            (120, "Ashanti"),
            (300, "Ashanti"),
            (350, "Western"),
            (500, "Northern"),
            (650, "Upper East"),
            (720, "Upper West"),
            (750, "Upper West"),
        ],
    )
    def test_first_matching_tier_wins(self, distance, region):
        assert ShippingService.match_tier(distance).region_name == region

    @pytest.mark.parametrize("region", ["Central", "Eastern", "Volta", "Brong Ahafo"])
    def test_shadowed_tiers_are_never_selected(self, region):
        selected = {ShippingService.match_tier(km).region_name for km in range(0, 1001, 5)}

        assert region not in selected

    def test_beyond_every_tier_falls_back_to_first(self):
        assert ShippingService.match_tier(800).region_name == "Greater Accra"

    def test_nan_distance_falls_back_to_first(self):
        assert ShippingService.match_tier(float("nan")).region_name == "Greater Accra"

    def test_nan_distance_has_no_surcharge(self):
        assert ShippingService.surcharge(float("nan")) == 0.0


class TestEstimateFee:
    def test_origin_costs_greater_accra_base_fee(self):
        quote = ShippingService.estimate_fee(ShippingService.ORIGIN)

        assert quote == {"fee": Decimal("5.0"), "region": "Greater Accra"}

    def test_fee_is_decimal(self):
        quote = ShippingService.estimate_fee(point_north_of_origin(10))

        assert isinstance(quote["fee"], Decimal)

    def test_inside_free_radius_no_surcharge(self):
        quote = ShippingService.estimate_fee(point_north_of_origin(19))

        assert quote["fee"] == Decimal("5")
        assert quote["region"] == "Greater Accra"

    def test_surcharge_inside_greater_accra(self):
        """40 km: 5 + (40 - 20) * 0.5"""
        quote = ShippingService.estimate_fee(point_north_of_origin(40))

        assert float(quote["fee"]) == pytest.approx(15.00, abs=0.01)
        assert quote["region"] == "Greater Accra"

    def test_ashanti_at_120_km(self):
        """15 + 100 * 0.5"""
        quote = ShippingService.estimate_fee(point_north_of_origin(120))

        assert float(quote["fee"]) == pytest.approx(65.00, abs=0.01)
        assert quote["region"] == "Ashanti"

    @pytest.mark.parametrize("extra_km", [1, 7.5, 12.34, 25])
    def test_surcharge_is_half_per_km_beyond_radius(self, extra_km):
        quote = ShippingService.estimate_fee(point_north_of_origin(20 + extra_km))

        assert float(quote["fee"]) == pytest.approx(round(5 + 0.5 * extra_km, 2), abs=0.01)

    def test_far_destination_uses_fallback_tier_plus_surcharge(self):
        """800 km: Greater Accra base fee 5 + 780 * 0.5"""
        quote = ShippingService.estimate_fee(point_north_of_origin(800))

        assert quote["region"] == "Greater Accra"
        assert float(quote["fee"]) == pytest.approx(395.00, abs=0.01)

    def test_fee_has_at_most_two_places(self):
        quote = ShippingService.estimate_fee(Coordinate(-1.6244, 6.6885))

        assert quote["fee"] == quote["fee"].quantize(Decimal("0.01"))

    def test_accepts_plain_tuple(self):
        quote = ShippingService.estimate_fee((-0.2074, 5.5500))

        assert quote["region"] == "Greater Accra"

    @pytest.mark.parametrize(
        "destination",
        [
            Coordinate(float("nan"), 5.0),
            Coordinate(-0.2, float("nan")),
            Coordinate(-0.2, float("inf")),
            Coordinate(float("inf"), 5.0),
            Coordinate(float("-inf"), float("-inf")),
        ],
    )
    def test_non_finite_coordinate_charges_first_tier_base_fee(self, destination):
        quote = ShippingService.estimate_fee(destination)

        assert quote == {"fee": Decimal("5.0"), "region": "Greater Accra"}

    def test_deterministic(self):
        destination = Coordinate(-1.6244, 6.6885)

        assert ShippingService.estimate_fee(destination) == ShippingService.estimate_fee(destination)

    def test_quote_with_distance_matches_estimate(self):
        destination = point_north_of_origin(120)

        quote, distance = ShippingService.quote_with_distance(destination)

        assert quote == ShippingService.estimate_fee(destination)
        assert distance == pytest.approx(120, abs=1e-6)


class TestRounding:
    def test_half_rounds_up(self):
        assert _round_half_up_cents(10.125) == pytest.approx(10.13)

    def test_below_half_rounds_down(self):
        assert _round_half_up_cents(10.124) == pytest.approx(10.12)

    def test_non_finite_passes_through(self):
        assert math.isinf(_round_half_up_cents(float("inf")))
        assert math.isnan(_round_half_up_cents(float("nan")))


class TestQuoteForCheckout:
    def test_pickup_is_free_with_no_region(self):
        quote = ShippingService.quote_for_checkout(ShippingService.PICKUP)

        assert quote == {"fee": Decimal("0"), "region": ""}

    def test_pickup_ignores_destination(self):
        quote = ShippingService.quote_for_checkout(ShippingService.PICKUP, point_north_of_origin(120))

        assert quote["fee"] == Decimal("0")

    def test_delivery_uses_estimator(self):
        destination = point_north_of_origin(120)

        assert ShippingService.quote_for_checkout(ShippingService.DELIVERY, destination) == ShippingService.estimate_fee(
            destination
        )

    def test_delivery_without_destination_raises(self):
        with pytest.raises(ValueError):
            ShippingService.quote_for_checkout(ShippingService.DELIVERY)


class TestFormatGpsAddress:
    def test_latitude_first_six_places(self):
        assert ShippingService.format_gps_address(Coordinate(-0.2074, 5.55)) == "5.550000, -0.207400"

"""Tests for ValuationCalculator."""

from decimal import Decimal

import pytest

from prospect_engine.api import compute_valuation
from prospect_engine.exceptions import ValidationError
from prospect_engine.generators import ValuationCalculator
from prospect_engine.models import PropertyAttributes, ValuationResult


class TestValuationCalculator:
    """Tests for the valuation formula."""

    def test_lekki_family_home(self, lekki_home: PropertyAttributes, seed: int) -> None:
        result = ValuationCalculator(seed=seed).calculate(lekki_home)

        # 150,000 x 150 x 1.8 x 1.15 + 2,500,000
        assert result.current_value == Decimal("49075000")
        assert result.market_value == Decimal("56436250")
        assert result.estimated_worth == Decimal("53982500")

    def test_factor_breakdown(self, lekki_home: PropertyAttributes, seed: int) -> None:
        factors = ValuationCalculator(seed=seed).calculate(lekki_home).factors

        assert factors.unit_value == Decimal("150000")
        assert factors.location == 1.8
        assert factors.size == 150
        assert factors.amenities == Decimal("2500000")
        assert factors.story_multiplier == 1.15
        assert factors.room_efficiency == 1.0
        assert 0.85 <= factors.condition <= 1.05
        assert 0.9 <= factors.market <= 1.1

    def test_victoria_island_multiplier(self, seed: int) -> None:
        attrs = PropertyAttributes(size_sqm=100, location="Victoria Island")

        result = ValuationCalculator(seed=seed).calculate(attrs)

        assert result.factors.location == 2.5
        assert result.current_value == Decimal("25000000")

    def test_unknown_location_and_usage_use_defaults(self, seed: int) -> None:
        attrs = PropertyAttributes(size_sqm=100, current_usage="Lighthouse", location="Kano")

        result = ValuationCalculator(seed=seed).calculate(attrs)

        assert result.factors.location == 1.0
        assert result.current_value == Decimal("10000000")

    def test_room_efficiency_capped(self, seed: int) -> None:
        calc = ValuationCalculator(seed=seed)

        assert calc.room_efficiency(None) == Decimal("1")
        assert calc.room_efficiency(12.5) == Decimal("0.5")
        assert calc.room_efficiency(100) == Decimal("1.5")

    def test_story_multiplier(self, seed: int) -> None:
        calc = ValuationCalculator(seed=seed)

        assert calc.story_multiplier(None) == Decimal("1")
        assert calc.story_multiplier(1) == Decimal("1")
        assert calc.story_multiplier(3) == Decimal("1.30")

    def test_zero_size_is_amenities_only(self, seed: int) -> None:
        attrs = PropertyAttributes(size_sqm=0, amenities=("Swimming Pool", "Helipad"))

        result = ValuationCalculator(seed=seed).calculate(attrs)

        assert result.current_value == Decimal("2000000")

    def test_adding_amenity_increases_value(self, lekki_home: PropertyAttributes, seed: int) -> None:
        richer = PropertyAttributes(
            size_sqm=lekki_home.size_sqm,
            current_usage=lekki_home.current_usage,
            location=lekki_home.location,
            stories=lekki_home.stories,
            amenities=lekki_home.amenities + ("24/7 Security",),
        )
        calc = ValuationCalculator(seed=seed)

        assert calc.calculate(richer).current_value == calc.calculate(lekki_home).current_value + 1000000

    def test_duplicate_amenities_counted_once(self, seed: int) -> None:
        attrs = PropertyAttributes(size_sqm=0, amenities=("Swimming Pool", "Swimming Pool"))

        assert ValuationCalculator(seed=seed).calculate(attrs).current_value == Decimal("2000000")

    def test_value_ordering(self, office: PropertyAttributes, seed: int) -> None:
        result = ValuationCalculator(seed=seed).calculate(office)

        assert result.market_value >= result.estimated_worth >= result.current_value >= 0

    def test_placeholder_ranges(self, office: PropertyAttributes, seed: int) -> None:
        result = ValuationCalculator(seed=seed).calculate(office)

        assert 8.5 <= result.appreciation_rate <= 11.5
        assert 85 <= result.confidence <= 95

    def test_comparables(self, lekki_home: PropertyAttributes, seed: int) -> None:
        result = ValuationCalculator(seed=seed).calculate(lekki_home)
        similar, nearby, comparable = result.comparables

        assert similar.address == "Similar property in Lekki Phase 1"
        assert nearby.address == "Nearby property"
        assert comparable.address == "Comparable Residential - Family Home"
        assert result.current_value * Decimal("0.9") <= similar.price <= result.current_value * Decimal("1.1")
        assert 120 <= similar.size_sqm <= 180
        assert 90 <= comparable.similarity <= 98

    def test_seeded_reproducibility(self, office: PropertyAttributes) -> None:
        first = ValuationCalculator(seed=7).calculate(office)
        second = ValuationCalculator(seed=7).calculate(office)

        assert first == second


class TestComputeValuation:
    """Tests for the compute_valuation entry point."""

    def test_accepts_form_payload(self, seed: int) -> None:
        result = compute_valuation({"propertySize": "100", "location": "Ikoyi"}, seed=seed)

        assert isinstance(result, ValuationResult)
        assert result.current_value == Decimal("23000000")

    def test_rejects_malformed_payload(self) -> None:
        with pytest.raises(ValidationError):
            compute_valuation({"propertySize": "big"})

    def test_rejects_other_types(self) -> None:
        with pytest.raises(ValidationError):
            compute_valuation(150)

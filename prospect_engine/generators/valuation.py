"""Property valuation from structural attributes, location and amenities."""

from __future__ import annotations

import logging
import random
from decimal import Decimal

from prospect_engine.catalog import MarketData, default_market_data
from prospect_engine.generators.base import BaseGenerator, as_decimal, to_currency
from prospect_engine.models import (
    ComparableProperty,
    PropertyAttributes,
    ValuationFactors,
    ValuationResult,
)

logger = logging.getLogger(__name__)


class ValuationCalculator(BaseGenerator):
    """Compute current, market and estimated value of a property.

    The deterministic part of the valuation is::

        base    = unit_value(usage) * size * location_multiplier
        stories = 1 + (stories - 1) * 0.15
        rooms   = min(average_room_size / 25, 1.5)
        current = round(base * stories * rooms + amenity_additions)

    Appreciation, confidence, comparables and the condition/market
    factors are placeholders for a market-data feed and are drawn from
    fixed ranges using the component's random source.
    """

    STORY_INCREMENT = Decimal("0.15")
    EFFICIENT_ROOM_SIZE = Decimal("25")
    MAX_ROOM_EFFICIENCY = Decimal("1.5")
    MARKET_PREMIUM = Decimal("1.15")
    CONSERVATIVE_PREMIUM = Decimal("1.10")

    APPRECIATION_RANGE = (8.5, 11.5)  # Annual %
    CONFIDENCE_RANGE = (85.0, 95.0)
    CONDITION_RANGE = (0.85, 1.05)
    MARKET_RANGE = (0.9, 1.1)

    # (label, price band, size band, similarity band)
    COMPARABLE_BANDS = (
        ("Similar property in {location}", (0.90, 1.10), (0.8, 1.2), (85.0, 95.0)),
        ("Nearby property", (0.85, 1.15), (0.7, 1.3), (75.0, 90.0)),
        ("Comparable {usage}", (0.95, 1.05), (0.9, 1.1), (90.0, 98.0)),
    )

    def __init__(
        self,
        market: MarketData | None = None,
        seed: int | None = None,
        rng: random.Random | None = None,
    ) -> None:
        super().__init__(seed=seed, rng=rng)
        self.market = market or default_market_data()

    def calculate(self, attributes: PropertyAttributes) -> ValuationResult:
        """Value a property.

        Parameters
        ----------
        attributes : PropertyAttributes
            Validated property description.

        Returns
        -------
        ValuationResult
            Valuation with factor breakdown and synthetic comparables.
        """
        unit_value = self.market.unit_value_for(attributes.current_usage)
        location_key, location_multiplier = self.market.location_multiplier_for(attributes.location)

        base_value = unit_value * as_decimal(attributes.size_sqm) * as_decimal(location_multiplier)
        amenity_sum = sum(
            (self.market.amenity_value_for(a) for a in attributes.amenities),
            Decimal("0"),
        )
        story_multiplier = self.story_multiplier(attributes.stories)
        room_efficiency = self.room_efficiency(attributes.average_room_size)

        current_value = to_currency(base_value * story_multiplier * room_efficiency + amenity_sum)
        market_value = to_currency(current_value * self.MARKET_PREMIUM)
        estimated_worth = to_currency(current_value * self.CONSERVATIVE_PREMIUM)

        logger.debug(
            "Valued %.1f sqm '%s' at %s (location=%s x%.2f, amenities=%s)",
            attributes.size_sqm,
            attributes.current_usage,
            current_value,
            location_key or "default",
            location_multiplier,
            amenity_sum,
        )

        factors = ValuationFactors(
            unit_value=unit_value,
            location=location_multiplier,
            size=attributes.size_sqm,
            amenities=amenity_sum,
            story_multiplier=float(story_multiplier),
            room_efficiency=float(room_efficiency),
            condition=self.uniform(self.CONDITION_RANGE),
            market=self.uniform(self.MARKET_RANGE),
        )

        return ValuationResult(
            current_value=current_value,
            market_value=market_value,
            estimated_worth=estimated_worth,
            appreciation_rate=self.uniform(self.APPRECIATION_RANGE),
            confidence=self.uniform(self.CONFIDENCE_RANGE, digits=1),
            factors=factors,
            comparables=self._comparables(attributes, current_value),
        )

    def story_multiplier(self, stories: int | None) -> Decimal:
        """Each story above the first adds 15%."""
        if stories is None:
            return Decimal("1")
        return 1 + (stories - 1) * self.STORY_INCREMENT

    def room_efficiency(self, average_room_size: float | None) -> Decimal:
        """Ratio to a 25 sqm room, capped at 1.5."""
        if average_room_size is None:
            return Decimal("1")
        return min(as_decimal(average_room_size) / self.EFFICIENT_ROOM_SIZE, self.MAX_ROOM_EFFICIENCY)

    def _comparables(
        self,
        attributes: PropertyAttributes,
        current_value: Decimal,
    ) -> tuple[ComparableProperty, ...]:
        """Synthesize comparators by perturbing value and size."""
        comparables = []
        for label, price_band, size_band, similarity_band in self.COMPARABLE_BANDS:
            comparables.append(
                ComparableProperty(
                    address=label.format(
                        location=attributes.location or "your area",
                        usage=attributes.current_usage,
                    ),
                    price=to_currency(current_value * as_decimal(self.rng.uniform(*price_band))),
                    size_sqm=round(attributes.size_sqm * self.rng.uniform(*size_band)),
                    similarity=self.uniform(similarity_band, digits=1),
                )
            )
        return tuple(comparables)

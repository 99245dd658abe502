"""Valuation result models."""

from dataclasses import dataclass, field
from decimal import Decimal


@dataclass(frozen=True)
class ComparableProperty:
    """Synthetic comparator used to contextualize a valuation."""

    address: str
    price: Decimal
    size_sqm: int
    similarity: float  # Percent


@dataclass(frozen=True)
class ValuationFactors:
    """Per-factor breakdown of a valuation."""

    unit_value: Decimal
    location: float
    size: float
    amenities: Decimal  # Sum of amenity additions
    story_multiplier: float
    room_efficiency: float
    condition: float
    market: float


@dataclass(frozen=True)
class ValuationResult:
    """Computed worth of a property."""

    current_value: Decimal
    market_value: Decimal  # 1.15 x current
    estimated_worth: Decimal  # 1.10 x current
    appreciation_rate: float  # Annual percent
    confidence: float  # Percent
    factors: ValuationFactors
    comparables: tuple[ComparableProperty, ...] = field(default_factory=tuple)

"""Prospect template and projected prospect models."""

from dataclasses import dataclass, field
from decimal import Decimal

from prospect_engine.models.enums import RiskLevel, UsageCategory


@dataclass(frozen=True)
class PhaseTemplate:
    """Named implementation phase with its share of the development cost."""

    name: str
    duration: str
    share: Decimal
    description: str = ""


@dataclass(frozen=True)
class CategoryEconomics:
    """Business constants used to project prospects of one category."""

    roi_range: tuple[float, float]
    monthly_yield_range: tuple[float, float]
    revenue_band: tuple[float, float]
    contingency_rate: Decimal
    risk_level: RiskLevel
    success_range: tuple[float, float]
    implementation_timeframe: str
    phases: tuple[PhaseTemplate, ...]


@dataclass(frozen=True)
class ProspectTemplate:
    """Catalog entry describing an alternative use for a property.

    Cost factors are multipliers of the property's current value, not
    absolute currency.
    """

    id: str
    title: str
    category: UsageCategory
    narrative: str
    purchase_cost_factor: Decimal
    development_cost_factor: Decimal
    realization_tips: tuple[str, ...] = ()
    image_ref: str = ""
    min_size_sqm: float | None = None  # Exclusive
    max_size_sqm: float | None = None  # Inclusive
    phases: tuple[PhaseTemplate, ...] = ()
    implementation_timeframe: str | None = None

    def is_eligible(self, size_sqm: float) -> bool:
        """Check the template's size predicates against a property size."""
        if self.min_size_sqm is not None and not size_sqm > self.min_size_sqm:
            return False
        if self.max_size_sqm is not None and size_sqm > self.max_size_sqm:
            return False
        return True


@dataclass(frozen=True)
class TimelinePhase:
    """Implementation phase with an absolute cost allocation."""

    name: str
    duration: str
    cost: Decimal
    description: str = ""


@dataclass(frozen=True)
class ProspectInstance:
    """Concrete financial projection of a template for one property."""

    prospect_id: str
    template_id: str
    rank: int
    title: str
    category: UsageCategory
    narrative: str
    image_ref: str
    purchase_cost: Decimal
    development_cost: Decimal
    estimated_cost: Decimal
    total_investment: Decimal
    monthly_income: Decimal
    annual_revenue_min: Decimal
    annual_revenue_max: Decimal
    expected_roi: float  # Percent
    payback_period_years: float | None
    implementation_timeframe: str
    risk_level: RiskLevel
    success_probability: float  # Percent
    phases: tuple[TimelinePhase, ...] = ()
    realization_tips: tuple[str, ...] = field(default_factory=tuple)

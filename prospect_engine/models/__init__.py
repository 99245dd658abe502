"""Domain models for property valuation and prospect generation."""

from prospect_engine.models.analysis import (
    IdentifiedCategory,
    Prediction,
    PropertyAnalysisResult,
    SavedAnalysis,
)
from prospect_engine.models.enums import AnalysisStatus, RiskLevel, UsageCategory
from prospect_engine.models.property import PropertyAttributes
from prospect_engine.models.prospect import (
    CategoryEconomics,
    PhaseTemplate,
    ProspectInstance,
    ProspectTemplate,
    TimelinePhase,
)
from prospect_engine.models.valuation import (
    ComparableProperty,
    ValuationFactors,
    ValuationResult,
)

__all__ = [
    "AnalysisStatus",
    "CategoryEconomics",
    "ComparableProperty",
    "IdentifiedCategory",
    "PhaseTemplate",
    "Prediction",
    "PropertyAnalysisResult",
    "PropertyAttributes",
    "ProspectInstance",
    "ProspectTemplate",
    "RiskLevel",
    "SavedAnalysis",
    "TimelinePhase",
    "UsageCategory",
    "ValuationFactors",
    "ValuationResult",
]

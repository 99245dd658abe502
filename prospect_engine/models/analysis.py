"""Classification and analysis result models."""

from dataclasses import dataclass, field
from datetime import datetime

from prospect_engine.models.enums import AnalysisStatus, UsageCategory
from prospect_engine.models.property import PropertyAttributes
from prospect_engine.models.prospect import ProspectInstance
from prospect_engine.models.valuation import ValuationResult


@dataclass(frozen=True)
class Prediction:
    """Single label emitted by the external image classifier."""

    label: str
    confidence: float  # 0-1


@dataclass(frozen=True)
class IdentifiedCategory:
    """Classifier output normalized onto a usage category."""

    label: str
    confidence: float
    category: UsageCategory | None  # None when rejected
    rejected: bool = False
    fallback: bool = False  # Default category used after a classifier failure


@dataclass(frozen=True)
class PropertyAnalysisResult:
    """Top-level output of one analysis request."""

    analysis_id: str
    attributes: PropertyAttributes
    valuation: ValuationResult
    prospects: tuple[ProspectInstance, ...]
    usage_category: UsageCategory | None
    identified_category: IdentifiedCategory | None = None
    rejected: bool = False
    cross_category: bool = False
    warnings: tuple[str, ...] = ()
    created_at: datetime | None = None
    completed_at: datetime | None = None


@dataclass
class SavedAnalysis:
    """Persisted analysis with its user-facing bookkeeping."""

    analysis_id: str
    user_id: str
    result: PropertyAnalysisResult
    status: AnalysisStatus = AnalysisStatus.COMPLETED
    is_favorite: bool = False
    notes: str | None = None
    image_ref: str | None = None
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime | None = None

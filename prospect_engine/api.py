"""Caller-facing entry points."""

from __future__ import annotations

import random
from typing import Any, Mapping

from prospect_engine.catalog import MarketData, ProspectCatalog, default_catalog, default_market_data
from prospect_engine.classification import CategoryClassifierAdapter, ImageClassifier
from prospect_engine.config import EngineConfig
from prospect_engine.exceptions import ValidationError
from prospect_engine.generators import FinancialProjector, ProspectSelector, ValuationCalculator
from prospect_engine.models import (
    IdentifiedCategory,
    PropertyAnalysisResult,
    PropertyAttributes,
    ProspectInstance,
    UsageCategory,
    ValuationResult,
)
from prospect_engine.orchestrator import AnalysisOrchestrator

ProspectTarget = UsageCategory | str | PropertyAttributes | IdentifiedCategory | None


def compute_valuation(
    attributes: PropertyAttributes | Mapping[str, Any],
    seed: int | None = None,
    market: MarketData | None = None,
) -> ValuationResult:
    """Value a property.

    ``attributes`` may be a form payload, which is validated through
    :meth:`PropertyAttributes.from_dict`.
    """
    return ValuationCalculator(market=market, seed=seed).calculate(_as_attributes(attributes))


def generate_prospects(
    target: ProspectTarget,
    valuation: ValuationResult,
    count: int = 5,
    seed: int | None = None,
    catalog: ProspectCatalog | None = None,
    market: MarketData | None = None,
) -> list[ProspectInstance]:
    """Generate ranked prospects for a valued property.

    Parameters
    ----------
    target : UsageCategory | str | PropertyAttributes | IdentifiedCategory | None
        What to generate for. A category (or classifier label), the
        property itself (category from its usage label, size predicates
        applied), a classifier result, or ``None`` for all categories.
    valuation : ValuationResult
        Valuation the projections scale with.
    count : int
        Number of prospects.
    seed : int | None
        Random seed for reproducibility.

    Returns
    -------
    list[ProspectInstance]
        Exactly ``count`` prospects ordered by rank, or an empty list
        when ``target`` is rejected.
    """
    catalog = catalog or default_catalog()
    attributes = None

    if isinstance(target, PropertyAttributes):
        attributes = target
        category = (market or default_market_data()).category_for_usage(target.current_usage)
    elif isinstance(target, IdentifiedCategory):
        if target.rejected:
            return []
        category = target.category
    elif target is None:
        category = None
    elif isinstance(target, str):
        identified = CategoryClassifierAdapter().from_category(target)
        if identified.rejected:
            return []
        category = identified.category
    else:
        raise ValidationError(f"Cannot generate prospects for {target!r}")

    rng = random.Random(seed)
    templates = ProspectSelector(catalog=catalog, rng=rng).select(category, attributes, count=count)
    return FinancialProjector(catalog=catalog, rng=rng).project_all(templates, valuation)


def run_full_analysis(
    attributes: PropertyAttributes | Mapping[str, Any],
    image: Any | None = None,
    classifier: ImageClassifier | None = None,
    category: UsageCategory | str | None = None,
    explore_all: bool = False,
    seed: int | None = None,
    config: EngineConfig | None = None,
) -> PropertyAnalysisResult:
    """Run valuation, category identification and prospect generation."""
    orchestrator = AnalysisOrchestrator(config=config, classifier=classifier, seed=seed)
    return orchestrator.run_full_analysis(
        _as_attributes(attributes),
        image=image,
        category=category,
        explore_all=explore_all,
    )


def _as_attributes(attributes: PropertyAttributes | Mapping[str, Any]) -> PropertyAttributes:
    if isinstance(attributes, PropertyAttributes):
        return attributes
    if isinstance(attributes, Mapping):
        return PropertyAttributes.from_dict(dict(attributes))
    raise ValidationError(f"Expected property attributes, got {type(attributes).__name__}")

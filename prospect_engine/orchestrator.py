"""End-to-end analysis pipeline: valuation, category and prospects."""

from __future__ import annotations

import logging
import random
from datetime import datetime
from typing import Any

from prospect_engine.catalog import (
    MarketData,
    ProspectCatalog,
    default_catalog,
    default_market_data,
    load_catalog,
    load_market_data,
)
from prospect_engine.classification import CategoryClassifierAdapter, ImageClassifier
from prospect_engine.config import DATA_DIR, EngineConfig
from prospect_engine.generators import FinancialProjector, ProspectSelector, ValuationCalculator
from prospect_engine.generators.base import BaseGenerator
from prospect_engine.logging import analysis_logger
from prospect_engine.models import (
    IdentifiedCategory,
    PropertyAnalysisResult,
    PropertyAttributes,
    UsageCategory,
    ValuationResult,
)

logger = logging.getLogger(__name__)


class AnalysisOrchestrator(BaseGenerator):
    """Run the full analysis for one property per call.

    The orchestrator keeps no state between requests apart from its
    random source; all components draw from that one source so a seeded
    orchestrator replays the same sequence of analyses.

    The category comes from, in order of precedence: the image classifier
    (when an image and a classifier are given), the manual ``category``,
    and finally the property's usage label. A manual category also
    replaces the default category when classification fails.
    """

    def __init__(
        self,
        config: EngineConfig | None = None,
        catalog: ProspectCatalog | None = None,
        market: MarketData | None = None,
        classifier: ImageClassifier | None = None,
        seed: int | None = None,
        rng: random.Random | None = None,
    ) -> None:
        """Initialize the orchestrator.

        Parameters
        ----------
        config : EngineConfig | None
            Engine configuration. Defaults to ``EngineConfig()``.
        catalog : ProspectCatalog | None
            Prospect catalog. Loaded from ``config.catalog`` when omitted.
        market : MarketData | None
            Market tables. Loaded from ``config.catalog`` when omitted.
        classifier : ImageClassifier | None
            External image classifier.
        seed : int | None
            Random seed; falls back to ``config.seed``.
        rng : random.Random | None
            Shared random source. Takes precedence over ``seed``.
        """
        self.config = config or EngineConfig()
        super().__init__(seed=seed if seed is not None else self.config.seed, rng=rng)

        self.catalog = catalog or _resolve_catalog(self.config)
        self.market = market or _resolve_market(self.config)
        self.classifier = classifier
        self.adapter = CategoryClassifierAdapter(self.config.classifier)

        self.valuation = ValuationCalculator(market=self.market, rng=self.rng)
        self.selector = ProspectSelector(catalog=self.catalog, rng=self.rng)
        self.projector = FinancialProjector(catalog=self.catalog, rng=self.rng)

    def run_full_analysis(
        self,
        attributes: PropertyAttributes,
        image: Any | None = None,
        category: UsageCategory | str | None = None,
        explore_all: bool = False,
    ) -> PropertyAnalysisResult:
        """Value a property and generate ranked investment prospects.

        Parameters
        ----------
        attributes : PropertyAttributes
            Validated property description.
        image : Any | None
            Image passed through to the classifier.
        category : UsageCategory | str | None
            Manually chosen category or classifier label.
        explore_all : bool
            Select prospects across all categories.

        Returns
        -------
        PropertyAnalysisResult
            Frozen result; ``prospects`` is empty when the image is rejected.
        """
        created_at = datetime.now()
        valuation = self.valuation.calculate(attributes)

        identified, warnings = None, []
        if image is not None:
            if self.classifier is None:
                warnings.append("No image classifier configured; image ignored")
            else:
                identified, warnings = self.adapter.classify_image(self.classifier, image)

        return self._complete(attributes, valuation, identified, warnings, category, explore_all, created_at)

    async def arun_full_analysis(
        self,
        attributes: PropertyAttributes,
        image: Any | None = None,
        category: UsageCategory | str | None = None,
        explore_all: bool = False,
    ) -> PropertyAnalysisResult:
        """Async form of :meth:`run_full_analysis`."""
        created_at = datetime.now()
        valuation = self.valuation.calculate(attributes)

        identified, warnings = None, []
        if image is not None:
            if self.classifier is None:
                warnings.append("No image classifier configured; image ignored")
            else:
                identified, warnings = await self.adapter.aclassify_image(self.classifier, image)

        return self._complete(attributes, valuation, identified, warnings, category, explore_all, created_at)

    def _complete(
        self,
        attributes: PropertyAttributes,
        valuation: ValuationResult,
        identified: IdentifiedCategory | None,
        warnings: list[str],
        category: UsageCategory | str | None,
        explore_all: bool,
        created_at: datetime,
    ) -> PropertyAnalysisResult:
        analysis_id = self.fake.uuid4()
        log = analysis_logger(logger, analysis_id)

        if category is not None and (identified is None or identified.fallback):
            identified = self.adapter.from_category(category)

        if identified is not None and identified.rejected:
            log.info("Analysis %s rejected: image shows '%s'", analysis_id, identified.label)
            return PropertyAnalysisResult(
                analysis_id=analysis_id,
                attributes=attributes,
                valuation=valuation,
                prospects=(),
                usage_category=None,
                identified_category=identified,
                rejected=True,
                warnings=tuple(warnings),
                created_at=created_at,
                completed_at=datetime.now(),
            )

        if identified is not None:
            usage_category = identified.category
        else:
            usage_category = self.market.category_for_usage(attributes.current_usage)

        templates = self.selector.select(
            None if explore_all else usage_category,
            attributes,
            count=self.config.prospect_count,
        )
        prospects = self.projector.project_all(templates, valuation)

        log.info(
            "Analysis %s: %s valued at %s, %d prospects (%s)",
            analysis_id,
            attributes.current_usage,
            valuation.current_value,
            len(prospects),
            "all categories" if explore_all else usage_category.value,
        )

        return PropertyAnalysisResult(
            analysis_id=analysis_id,
            attributes=attributes,
            valuation=valuation,
            prospects=tuple(prospects),
            usage_category=usage_category,
            identified_category=identified,
            cross_category=explore_all,
            warnings=tuple(warnings),
            created_at=created_at,
            completed_at=datetime.now(),
        )


def _resolve_catalog(config: EngineConfig) -> ProspectCatalog:
    if config.catalog.prospects_path == DATA_DIR / "prospects.json":
        return default_catalog()
    return load_catalog(config.catalog.prospects_path)


def _resolve_market(config: EngineConfig) -> MarketData:
    if config.catalog.market_path == DATA_DIR / "market.json":
        return default_market_data()
    return load_market_data(config.catalog.market_path)

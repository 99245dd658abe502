"""Financial projection of prospect templates against a valuation."""

from __future__ import annotations

import logging
import random
from dataclasses import replace
from decimal import ROUND_DOWN, Decimal
from typing import Iterable

from prospect_engine.catalog import ProspectCatalog, default_catalog
from prospect_engine.generators.base import CENT, BaseGenerator, as_decimal, to_cents
from prospect_engine.models import (
    ProspectInstance,
    ProspectTemplate,
    TimelinePhase,
    ValuationResult,
)

logger = logging.getLogger(__name__)


class FinancialProjector(BaseGenerator):
    """Turn a template and a valuation into a concrete prospect.

    Costs scale linearly with the property's current value. Income,
    ROI and success probability are drawn from the per-category ranges
    of the catalog; payback follows from investment and income.
    """

    ACQUISITION_PHASE = ("Acquisition", "1 month", "Purchase or lease of the property")

    def __init__(
        self,
        catalog: ProspectCatalog | None = None,
        seed: int | None = None,
        rng: random.Random | None = None,
    ) -> None:
        super().__init__(seed=seed, rng=rng)
        self.catalog = catalog or default_catalog()

    def project(
        self,
        template: ProspectTemplate,
        valuation: ValuationResult,
        rank: int = 1,
    ) -> ProspectInstance:
        """Project a single template.

        Parameters
        ----------
        template : ProspectTemplate
            Selected catalog entry.
        valuation : ValuationResult
            Valuation of the property.
        rank : int
            1-based position of the prospect in its result list.

        Returns
        -------
        ProspectInstance
            Prospect with costs, income, ROI, payback and timeline.
        """
        economics = self.catalog.economics_for(template.category)
        current = valuation.current_value

        purchase_cost = to_cents(current * template.purchase_cost_factor)
        development_cost = to_cents(current * template.development_cost_factor)
        estimated_cost = purchase_cost + development_cost
        total_investment = to_cents(estimated_cost * (1 + economics.contingency_rate))

        monthly_yield = as_decimal(self.uniform(economics.monthly_yield_range, digits=4))
        monthly_income = to_cents(current * monthly_yield)
        annual_income = monthly_income * 12
        revenue_low, revenue_high = economics.revenue_band

        payback = None
        if annual_income > 0:
            payback = round(float(total_investment / annual_income), 1)

        return ProspectInstance(
            prospect_id=self.fake.uuid4(),
            template_id=template.id,
            rank=rank,
            title=template.title,
            category=template.category,
            narrative=template.narrative.replace("{size}", f"{valuation.factors.size:g}"),
            image_ref=template.image_ref,
            purchase_cost=purchase_cost,
            development_cost=development_cost,
            estimated_cost=estimated_cost,
            total_investment=total_investment,
            monthly_income=monthly_income,
            annual_revenue_min=to_cents(annual_income * as_decimal(revenue_low)),
            annual_revenue_max=to_cents(annual_income * as_decimal(revenue_high)),
            expected_roi=self.uniform(economics.roi_range, digits=1),
            payback_period_years=payback,
            implementation_timeframe=template.implementation_timeframe or economics.implementation_timeframe,
            risk_level=economics.risk_level,
            success_probability=self.uniform(economics.success_range, digits=1),
            phases=self._timeline(template, purchase_cost, development_cost),
            realization_tips=template.realization_tips,
        )

    def project_all(
        self,
        templates: Iterable[ProspectTemplate],
        valuation: ValuationResult,
    ) -> list[ProspectInstance]:
        """Project templates and rank them by expected ROI, best first."""
        projected = [self.project(t, valuation) for t in templates]
        projected.sort(key=lambda p: p.expected_roi, reverse=True)
        return [replace(p, rank=i) for i, p in enumerate(projected, start=1)]

    def _timeline(
        self,
        template: ProspectTemplate,
        purchase_cost: Decimal,
        development_cost: Decimal,
    ) -> tuple[TimelinePhase, ...]:
        """Allocate purchase and development cost over named phases.

        Development shares sum to at most 1 and are rounded down, so the
        allocated total never exceeds the estimated cost.
        """
        phases = []
        if purchase_cost > 0:
            name, duration, description = self.ACQUISITION_PHASE
            phases.append(TimelinePhase(name, duration, purchase_cost, description))

        plan = template.phases or self.catalog.economics_for(template.category).phases
        for phase in plan:
            phases.append(
                TimelinePhase(
                    name=phase.name,
                    duration=phase.duration,
                    cost=(development_cost * phase.share).quantize(CENT, rounding=ROUND_DOWN),
                    description=phase.description,
                )
            )
        return tuple(phases)

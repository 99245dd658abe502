"""Valuation, selection and projection components."""

from prospect_engine.generators.projection import FinancialProjector
from prospect_engine.generators.selector import ProspectSelector
from prospect_engine.generators.valuation import ValuationCalculator

__all__ = [
    "FinancialProjector",
    "ProspectSelector",
    "ValuationCalculator",
]

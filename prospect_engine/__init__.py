"""Property valuation and investment prospect generation."""

from prospect_engine.api import compute_valuation, generate_prospects, run_full_analysis
from prospect_engine.orchestrator import AnalysisOrchestrator

__all__ = [
    "AnalysisOrchestrator",
    "compute_valuation",
    "generate_prospects",
    "run_full_analysis",
]

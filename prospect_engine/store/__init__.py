"""In-memory persistence of saved analyses."""

from prospect_engine.store.analysis import AnalysisAnalytics, AnalysisStore

__all__ = ["AnalysisAnalytics", "AnalysisStore"]

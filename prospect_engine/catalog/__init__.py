"""Versioned knowledge base: prospect templates and market tables."""

from prospect_engine.catalog.loader import (
    MarketData,
    ProspectCatalog,
    default_catalog,
    default_market_data,
    load_catalog,
    load_market_data,
)

__all__ = [
    "MarketData",
    "ProspectCatalog",
    "default_catalog",
    "default_market_data",
    "load_catalog",
    "load_market_data",
]

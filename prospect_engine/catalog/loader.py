"""Loading of the versioned prospect catalog and market data assets."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

from prospect_engine.config import DATA_DIR
from prospect_engine.exceptions import CatalogError
from prospect_engine.models.enums import RiskLevel, UsageCategory
from prospect_engine.models.prospect import CategoryEconomics, PhaseTemplate, ProspectTemplate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MarketData:
    """Lookup tables for unit values, location multipliers and amenities.

    Location keys are matched in file order, so more specific keys must
    precede broader ones ("Lekki Phase 1" before "Lekki"). The loader
    rejects tables where a key can never match because an earlier key is
    contained in it.
    """

    version: str
    currency: str
    default_unit_value: Decimal
    unit_values: Mapping[str, Decimal]
    location_multipliers: tuple[tuple[str, float], ...]
    amenity_values: Mapping[str, Decimal]
    usage_categories: tuple[tuple[str, UsageCategory], ...]

    def unit_value_for(self, usage: str) -> Decimal:
        """Get the base value per square meter for a usage label."""
        value = self.unit_values.get(usage.strip())
        if value is None:
            lowered = usage.strip().lower()
            for key, candidate in self.unit_values.items():
                if key.lower() == lowered:
                    return candidate
            return self.default_unit_value
        return value

    def location_multiplier_for(self, location: str) -> tuple[str | None, float]:
        """Get the first matching location key and its multiplier."""
        lowered = location.lower()
        for key, multiplier in self.location_multipliers:
            if key.lower() in lowered:
                return key, multiplier
        return None, 1.0

    def amenity_value_for(self, amenity: str) -> Decimal:
        """Get the value added by an amenity; unknown amenities add nothing."""
        return self.amenity_values.get(amenity, Decimal("0"))

    def category_for_usage(self, usage: str) -> UsageCategory:
        """Map a free-text usage label onto a usage category by prefix."""
        lowered = usage.strip().lower()
        for prefix, category in self.usage_categories:
            if lowered.startswith(prefix.lower()):
                return category
        return UsageCategory.RESIDENTIAL


@dataclass(frozen=True)
class ProspectCatalog:
    """Immutable knowledge base of prospect templates per usage category."""

    version: str
    templates: Mapping[UsageCategory, tuple[ProspectTemplate, ...]]
    economics: Mapping[UsageCategory, CategoryEconomics]
    generic_template: ProspectTemplate

    @property
    def categories(self) -> tuple[UsageCategory, ...]:
        """Categories that carry templates, in catalog order."""
        return tuple(self.templates.keys())

    def templates_for(self, category: UsageCategory) -> tuple[ProspectTemplate, ...]:
        """Get all templates of a category (empty for unknown categories)."""
        return self.templates.get(category, ())

    def all_templates(self) -> tuple[ProspectTemplate, ...]:
        """Flatten every category into one pool."""
        return tuple(t for templates in self.templates.values() for t in templates)

    def economics_for(self, category: UsageCategory) -> CategoryEconomics:
        """Get the business constants for a category, generic as fallback."""
        return self.economics.get(category) or self.economics[UsageCategory.GENERIC]

    def get(self, template_id: str) -> ProspectTemplate | None:
        """Find a template by id."""
        for template in self.all_templates():
            if template.id == template_id:
                return template
        return None

    def __len__(self) -> int:
        return sum(len(t) for t in self.templates.values())


def load_market_data(path: str | Path | None = None) -> MarketData:
    """Load market data from a JSON asset.

    Parameters
    ----------
    path : str | Path | None
        Asset location. Defaults to the bundled ``market.json``.

    Returns
    -------
    MarketData
        Parsed, read-only market tables.

    Raises
    ------
    CatalogError
        If the file is missing, malformed or inconsistent.
    """
    raw = _read_json(Path(path) if path else DATA_DIR / "market.json")
    try:
        locations = tuple((str(key), float(mult)) for key, mult in raw["location_multipliers"])
        _check_location_order(locations)

        usage_categories = tuple(
            (str(prefix), UsageCategory(category)) for prefix, category in raw["usage_categories"]
        )

        market = MarketData(
            version=str(raw["version"]),
            currency=str(raw.get("currency", "NGN")),
            default_unit_value=_decimal(raw["default_unit_value"]),
            unit_values=MappingProxyType(
                {key: _decimal(value) for key, value in raw["unit_values"].items()}
            ),
            location_multipliers=locations,
            amenity_values=MappingProxyType(
                {key: _non_negative(key, value) for key, value in raw["amenity_values"].items()}
            ),
            usage_categories=usage_categories,
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise CatalogError(f"Invalid market data: {exc}") from exc

    logger.debug(
        "Loaded market data %s: %d usages, %d locations, %d amenities",
        market.version,
        len(market.unit_values),
        len(market.location_multipliers),
        len(market.amenity_values),
    )
    return market


def load_catalog(path: str | Path | None = None) -> ProspectCatalog:
    """Load the prospect catalog from a JSON asset.

    Parameters
    ----------
    path : str | Path | None
        Asset location. Defaults to the bundled ``prospects.json``.

    Returns
    -------
    ProspectCatalog
        Parsed, read-only catalog.

    Raises
    ------
    CatalogError
        If the file is missing, malformed or inconsistent.
    """
    raw = _read_json(Path(path) if path else DATA_DIR / "prospects.json")
    try:
        version = str(raw["version"])
        templates: dict[UsageCategory, tuple[ProspectTemplate, ...]] = {}
        economics: dict[UsageCategory, CategoryEconomics] = {}

        for name, section in raw["categories"].items():
            category = UsageCategory(name)
            if category == UsageCategory.GENERIC:
                raise CatalogError("'generic' is reserved for padding templates")
            economics[category] = _parse_economics(section["economics"])
            templates[category] = tuple(_parse_template(t, category) for t in section["templates"])

        generic = raw["generic"]
        economics[UsageCategory.GENERIC] = _parse_economics(generic["economics"])
        generic_template = _parse_template({"id": "generic", **generic["template"]}, UsageCategory.GENERIC)
    except (KeyError, TypeError, ValueError) as exc:
        raise CatalogError(f"Invalid prospect catalog: {exc}") from exc

    ids = [t.id for group in templates.values() for t in group]
    duplicates = sorted({i for i in ids if ids.count(i) > 1})
    if duplicates:
        raise CatalogError(f"Duplicate template ids: {', '.join(duplicates)}")

    catalog = ProspectCatalog(
        version=version,
        templates=MappingProxyType(templates),
        economics=MappingProxyType(economics),
        generic_template=generic_template,
    )
    logger.info(
        "Loaded prospect catalog %s: %d templates in %d categories",
        catalog.version,
        len(catalog),
        len(catalog.categories),
    )
    return catalog


@lru_cache(maxsize=1)
def default_catalog() -> ProspectCatalog:
    """Bundled catalog, loaded once per process."""
    return load_catalog()


@lru_cache(maxsize=1)
def default_market_data() -> MarketData:
    """Bundled market data, loaded once per process."""
    return load_market_data()


def _read_json(path: Path) -> dict[str, Any]:
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError as exc:
        raise CatalogError(f"Asset not found: {path}") from exc
    except (OSError, json.JSONDecodeError) as exc:
        raise CatalogError(f"Cannot read asset {path}: {exc}") from exc


def _decimal(value: Any) -> Decimal:
    try:
        return Decimal(str(value))
    except InvalidOperation as exc:
        raise ValueError(f"not a number: {value!r}") from exc


def _non_negative(name: str, value: Any) -> Decimal:
    amount = _decimal(value)
    if amount < 0:
        raise ValueError(f"{name} must not be negative")
    return amount


def _range(raw: Any) -> tuple[float, float]:
    low, high = (float(v) for v in raw)
    if low > high:
        raise ValueError(f"range low {low} exceeds high {high}")
    return low, high


def _parse_phases(raw: list[dict[str, Any]]) -> tuple[PhaseTemplate, ...]:
    phases = tuple(
        PhaseTemplate(
            name=p["name"],
            duration=p["duration"],
            share=_non_negative("phase share", p["share"]),
            description=p.get("description", ""),
        )
        for p in raw
    )
    if sum((p.share for p in phases), Decimal("0")) > 1:
        raise ValueError("phase shares must not exceed 1")
    return phases


def _parse_economics(raw: dict[str, Any]) -> CategoryEconomics:
    return CategoryEconomics(
        roi_range=_range(raw["roi_range"]),
        monthly_yield_range=_range(raw["monthly_yield_range"]),
        revenue_band=_range(raw["revenue_band"]),
        contingency_rate=_non_negative("contingency_rate", raw["contingency_rate"]),
        risk_level=RiskLevel(raw["risk_level"]),
        success_range=_range(raw["success_range"]),
        implementation_timeframe=raw["implementation_timeframe"],
        phases=_parse_phases(raw["phases"]),
    )


def _parse_template(raw: dict[str, Any], category: UsageCategory) -> ProspectTemplate:
    return ProspectTemplate(
        id=raw["id"],
        title=raw["title"],
        category=category,
        narrative=raw["narrative"],
        purchase_cost_factor=_non_negative("purchase_cost_factor", raw["purchase_cost_factor"]),
        development_cost_factor=_non_negative("development_cost_factor", raw["development_cost_factor"]),
        realization_tips=tuple(raw.get("realization_tips", ())),
        image_ref=raw.get("image_ref", ""),
        min_size_sqm=raw.get("min_size_sqm"),
        max_size_sqm=raw.get("max_size_sqm"),
        phases=_parse_phases(raw.get("phases", [])),
        implementation_timeframe=raw.get("implementation_timeframe"),
    )


def _check_location_order(locations: tuple[tuple[str, float], ...]) -> None:
    for i, (earlier, _) in enumerate(locations):
        for later, _ in locations[i + 1 :]:
            if earlier.lower() in later.lower():
                raise ValueError(f"location key {later!r} is shadowed by earlier key {earlier!r}")

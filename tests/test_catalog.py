"""Tests for catalog and market data loading."""

from decimal import Decimal

import pytest

from prospect_engine.catalog import (
    ProspectCatalog,
    default_catalog,
    default_market_data,
    load_catalog,
    load_market_data,
)
from prospect_engine.exceptions import CatalogError
from prospect_engine.models import RiskLevel, UsageCategory


class TestBundledCatalog:
    """Tests for the bundled prospect catalog."""

    @pytest.fixture
    def catalog(self) -> ProspectCatalog:
        return default_catalog()

    def test_loaded_once(self, catalog: ProspectCatalog) -> None:
        assert default_catalog() is catalog

    def test_category_sizes(self, catalog: ProspectCatalog) -> None:
        assert len(catalog.templates_for(UsageCategory.RESIDENTIAL)) == 30
        assert len(catalog.templates_for(UsageCategory.COMMERCIAL)) == 30
        assert len(catalog.templates_for(UsageCategory.INDUSTRIAL)) == 10
        assert len(catalog.templates_for(UsageCategory.AGRICULTURAL)) == 10
        assert len(catalog) == 80

    def test_generic_has_no_templates(self, catalog: ProspectCatalog) -> None:
        assert UsageCategory.GENERIC not in catalog.categories
        assert catalog.templates_for(UsageCategory.GENERIC) == ()

    def test_ids_unique(self, catalog: ProspectCatalog) -> None:
        ids = [t.id for t in catalog.all_templates()]
        assert len(ids) == len(set(ids))

    def test_factors_non_negative(self, catalog: ProspectCatalog) -> None:
        for template in catalog.all_templates():
            assert template.purchase_cost_factor >= 0
            assert template.development_cost_factor >= 0

    def test_short_let_requires_more_than_50_sqm(self, catalog: ProspectCatalog) -> None:
        short_let = catalog.get("residential-short-let-plan")

        assert short_let is not None
        assert short_let.min_size_sqm == 50
        assert [p.name for p in short_let.phases] == [
            "Interior Renovation",
            "Legal & Marketing Setup",
            "Operations Launch",
        ]

    def test_generic_template(self, catalog: ProspectCatalog) -> None:
        generic = catalog.generic_template

        assert generic.category == UsageCategory.GENERIC
        assert generic.purchase_cost_factor == Decimal("1.0")
        assert generic.development_cost_factor == Decimal("0.25")

    def test_economics(self, catalog: ProspectCatalog) -> None:
        residential = catalog.economics_for(UsageCategory.RESIDENTIAL)

        assert residential.roi_range == (35.0, 50.0)
        assert residential.contingency_rate == Decimal("0.1")
        assert residential.risk_level == RiskLevel.MEDIUM
        assert catalog.economics_for(UsageCategory.INDUSTRIAL).risk_level == RiskLevel.HIGH

    def test_phase_shares_at_most_one(self, catalog: ProspectCatalog) -> None:
        for category in catalog.categories:
            assert sum(p.share for p in catalog.economics_for(category).phases) <= 1

    def test_get_unknown(self, catalog: ProspectCatalog) -> None:
        assert catalog.get("no-such-template") is None


class TestBundledMarketData:
    """Tests for the bundled market tables."""

    def test_unit_values(self) -> None:
        market = default_market_data()

        assert market.unit_value_for("Residential - Family Home") == Decimal("150000")
        assert market.unit_value_for("commercial - office space") == Decimal("250000")
        assert market.unit_value_for("Castle") == Decimal("100000")

    def test_location_most_specific_first(self) -> None:
        market = default_market_data()

        assert market.location_multiplier_for("Lekki Phase 1") == ("Lekki Phase 1", 1.8)
        assert market.location_multiplier_for("lekki phase 2, lagos") == ("Lekki Phase 2", 1.6)
        assert market.location_multiplier_for("Lekki") == ("Lekki", 1.5)
        assert market.location_multiplier_for("Victoria Island") == ("Victoria Island", 2.5)

    def test_location_default(self) -> None:
        assert default_market_data().location_multiplier_for("Kano") == (None, 1.0)
        assert default_market_data().location_multiplier_for("") == (None, 1.0)

    def test_unknown_amenity_adds_nothing(self) -> None:
        assert default_market_data().amenity_value_for("Helipad") == Decimal("0")

    @pytest.mark.parametrize(
        "usage, category",
        [
            ("Residential - Rental Income", UsageCategory.RESIDENTIAL),
            ("Commercial - Retail Store", UsageCategory.COMMERCIAL),
            ("Mixed Use - Residential & Commercial", UsageCategory.COMMERCIAL),
            ("Industrial - Warehouse", UsageCategory.INDUSTRIAL),
            ("Agricultural - Farming", UsageCategory.AGRICULTURAL),
            ("Vacant - Development Ready", UsageCategory.RESIDENTIAL),
        ],
    )
    def test_category_for_usage(self, usage: str, category: UsageCategory) -> None:
        assert default_market_data().category_for_usage(usage) == category


class TestLoadCatalog:
    """Tests for loading custom catalog assets."""

    def test_small_catalog(self, small_catalog: ProspectCatalog) -> None:
        assert small_catalog.version == "test-1"
        assert len(small_catalog) == 3
        assert small_catalog.categories == (UsageCategory.RESIDENTIAL, UsageCategory.COMMERCIAL)

    def test_missing_category_economics_fall_back_to_generic(self, small_catalog: ProspectCatalog) -> None:
        assert small_catalog.economics_for(UsageCategory.INDUSTRIAL) is small_catalog.economics_for(
            UsageCategory.GENERIC
        )

    def test_missing_file(self, tmp_path) -> None:
        with pytest.raises(CatalogError, match="not found"):
            load_catalog(tmp_path / "missing.json")

    def test_malformed_json(self, tmp_path) -> None:
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(CatalogError):
            load_catalog(path)

    def test_missing_key(self, catalog_data: dict, write_json) -> None:
        del catalog_data["generic"]

        with pytest.raises(CatalogError, match="Invalid prospect catalog"):
            load_catalog(write_json("c.json", catalog_data))

    def test_duplicate_ids(self, catalog_data: dict, write_json) -> None:
        templates = catalog_data["categories"]["residential"]["templates"]
        templates.append(dict(templates[0]))

        with pytest.raises(CatalogError, match="Duplicate template ids"):
            load_catalog(write_json("c.json", catalog_data))

    def test_negative_factor(self, catalog_data: dict, write_json) -> None:
        catalog_data["categories"]["commercial"]["templates"][0]["purchase_cost_factor"] = -1

        with pytest.raises(CatalogError, match="must not be negative"):
            load_catalog(write_json("c.json", catalog_data))

    def test_phase_shares_over_one(self, catalog_data: dict, write_json) -> None:
        catalog_data["categories"]["residential"]["economics"]["phases"][0]["share"] = 0.5

        with pytest.raises(CatalogError, match="phase shares"):
            load_catalog(write_json("c.json", catalog_data))

    def test_unknown_category(self, catalog_data: dict, write_json) -> None:
        catalog_data["categories"]["maritime"] = catalog_data["categories"].pop("commercial")

        with pytest.raises(CatalogError):
            load_catalog(write_json("c.json", catalog_data))

    def test_generic_category_reserved(self, catalog_data: dict, write_json) -> None:
        catalog_data["categories"]["generic"] = catalog_data["categories"].pop("commercial")

        with pytest.raises(CatalogError, match="reserved"):
            load_catalog(write_json("c.json", catalog_data))


class TestLoadMarketData:
    """Tests for loading custom market assets."""

    @pytest.fixture
    def market_data(self) -> dict:
        return {
            "version": "m-1",
            "default_unit_value": 1000,
            "unit_values": {"Other": 1000},
            "location_multipliers": [["Lekki Phase 1", 1.8], ["Lekki", 1.5]],
            "amenity_values": {"Pool": 100},
            "usage_categories": [["Commercial", "commercial"]],
        }

    def test_load(self, market_data: dict, write_json) -> None:
        market = load_market_data(write_json("m.json", market_data))

        assert market.version == "m-1"
        assert market.currency == "NGN"
        assert market.amenity_value_for("Pool") == Decimal("100")

    def test_shadowed_location_key(self, market_data: dict, write_json) -> None:
        market_data["location_multipliers"].reverse()

        with pytest.raises(CatalogError, match="shadowed"):
            load_market_data(write_json("m.json", market_data))

    def test_negative_amenity(self, market_data: dict, write_json) -> None:
        market_data["amenity_values"]["Pool"] = -5

        with pytest.raises(CatalogError):
            load_market_data(write_json("m.json", market_data))

    def test_unknown_usage_category(self, market_data: dict, write_json) -> None:
        market_data["usage_categories"] = [["Maritime", "maritime"]]

        with pytest.raises(CatalogError):
            load_market_data(write_json("m.json", market_data))

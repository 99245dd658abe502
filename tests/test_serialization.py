"""Tests for shared serialization utilities."""

import json
from datetime import date, datetime
from decimal import Decimal

from prospect_engine.models import PropertyAttributes, RiskLevel, UsageCategory
from prospect_engine.orchestrator import AnalysisOrchestrator
from prospect_engine.sinks.serialization import dataclass_to_dict, serialize_value, to_dict


class TestSerializeValue:
    """Tests for serialize_value."""

    def test_decimal_keeps_precision(self) -> None:
        assert serialize_value(Decimal("37787750.00")) == "37787750.00"

    def test_enum(self) -> None:
        assert serialize_value(UsageCategory.COMMERCIAL) == "commercial"
        assert serialize_value(RiskLevel.HIGH) == "High"

    def test_datetime_and_date(self) -> None:
        assert serialize_value(datetime(2024, 1, 15, 10, 30)) == "2024-01-15T10:30:00"
        assert serialize_value(date(2024, 1, 15)) == "2024-01-15"

    def test_nested_containers(self) -> None:
        value = {"costs": (Decimal("1.50"), [Decimal("2")]), "risk": RiskLevel.LOW}

        assert serialize_value(value) == {"costs": ["1.50", ["2"]], "risk": "Low"}

    def test_passthrough(self) -> None:
        assert serialize_value(None) is None
        assert serialize_value(3.5) == 3.5
        assert serialize_value("text") == "text"


class TestToDict:
    """Tests for to_dict and dataclass_to_dict."""

    def test_dataclass(self) -> None:
        data = to_dict(PropertyAttributes(size_sqm=120, amenities=("Swimming Pool",)))

        assert data["size_sqm"] == 120
        assert data["amenities"] == ["Swimming Pool"]

    def test_dict(self) -> None:
        assert to_dict({"value": Decimal("1")}) == {"value": "1"}

    def test_other(self) -> None:
        assert to_dict(42) == {"value": "42"}

    def test_analysis_is_json_ready(self, lekki_home: PropertyAttributes, seed: int) -> None:
        result = AnalysisOrchestrator(seed=seed).run_full_analysis(lekki_home)

        data = dataclass_to_dict(result)
        decoded = json.loads(json.dumps(data))

        assert decoded["valuation"]["current_value"] == "49075000"
        assert decoded["usage_category"] == "residential"
        assert len(decoded["prospects"]) == 5
        assert decoded["prospects"][0]["rank"] == 1
        assert isinstance(decoded["prospects"][0]["phases"], list)
        assert decoded["created_at"] == result.created_at.isoformat()

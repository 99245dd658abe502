"""Pytest configuration and fixtures."""

import json
from pathlib import Path

import pytest

from prospect_engine.catalog import ProspectCatalog, load_catalog
from prospect_engine.models import PropertyAttributes


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def lekki_home() -> PropertyAttributes:
    """Two-story family home in Lekki Phase 1 with pool and generator."""
    return PropertyAttributes(
        size_sqm=150,
        current_usage="Residential - Family Home",
        location="Lekki Phase 1",
        stories=2,
        amenities=("Swimming Pool", "Generator/Backup Power"),
    )


@pytest.fixture
def office() -> PropertyAttributes:
    """Office building on Victoria Island."""
    return PropertyAttributes(
        size_sqm=600,
        current_usage="Commercial - Office Space",
        location="Victoria Island, Lagos",
        stories=4,
        rooms=20,
        average_room_size=30,
        amenities=("24/7 Security", "Elevator/Lift"),
    )


def _economics(**overrides: object) -> dict:
    economics = {
        "roi_range": [20, 30],
        "monthly_yield_range": [0.02, 0.03],
        "revenue_band": [0.8, 1.2],
        "contingency_rate": 0.1,
        "risk_level": "Low",
        "success_range": [60, 80],
        "implementation_timeframe": "2-4 months",
        "phases": [
            {"name": "Planning", "duration": "1 month", "share": 0.3, "description": "Design"},
            {"name": "Build", "duration": "2 months", "share": 0.7, "description": "Works"},
        ],
    }
    economics.update(overrides)
    return economics


def _template(template_id: str, title: str, **overrides: object) -> dict:
    template = {
        "id": template_id,
        "title": title,
        "narrative": f"{title} on {{size}} sqm.",
        "purchase_cost_factor": 0.5,
        "development_cost_factor": 0.2,
        "realization_tips": ["Tip"],
        "image_ref": f"/img/{template_id}.jpg",
    }
    template.update(overrides)
    return template


@pytest.fixture
def catalog_data() -> dict:
    """Small catalog: two residential templates, one commercial."""
    return {
        "version": "test-1",
        "categories": {
            "residential": {
                "economics": _economics(),
                "templates": [
                    _template("residential-loft", "Loft Conversion"),
                    _template("residential-tower", "Tower Block", min_size_sqm=1000),
                ],
            },
            "commercial": {
                "economics": _economics(risk_level="High", contingency_rate=0.2),
                "templates": [_template("commercial-kiosk", "Kiosk", max_size_sqm=50)],
            },
        },
        "generic": {
            "economics": _economics(roi_range=[10, 15]),
            "template": {
                "title": "Investment Opportunity",
                "narrative": "A customized investment opportunity for your {size} sqm property.",
                "purchase_cost_factor": 1.0,
                "development_cost_factor": 0.25,
                "realization_tips": ["Consult a local expert"],
                "image_ref": "/img/generic.jpg",
            },
        },
    }


@pytest.fixture
def write_json(tmp_path: Path):
    """Write a JSON document under tmp_path and return its path."""

    def _write(name: str, data: object) -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def small_catalog(catalog_data: dict, write_json) -> ProspectCatalog:
    """Catalog loaded from the small test asset."""
    return load_catalog(write_json("prospects.json", catalog_data))

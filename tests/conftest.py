"""
Shared test fixtures — catalogs, price history, engine, test client.
"""

import pytest
from fastapi.testclient import TestClient

from toolingcost.calculators.material_lookup import MaterialLookup
from toolingcost.calculators.price_timeline import PriceTimeline
from toolingcost.main import app
from toolingcost.pricing_engine import CostEngine


PART_TYPES = [
    {"name": "plate", "volume_formula": "length*width*height", "input_hint": "A*B*C"},
    {"name": "round-bar", "volume_formula": "π*radius²*height", "input_hint": "φA*B"},
    {"name": "ring", "volume_formula": "π×（outerRadius²－innerRadius²）×height", "input_hint": "φA-B*C"},
    {"name": "disc-from-plate", "volume_formula": "pi*radius*radius*thickness", "input_hint": "φA*B"},
    {"name": "sawn-square", "volume_formula": "length*width*height", "input_hint": "A*B*C"},
    {"name": "tube", "volume_formula": "", "input_hint": ""},
]

MATERIALS = [
    {"id": "m-45", "name": "45#", "density": 7.85},
    {"id": "m-al", "name": "aluminum", "density": 2.7},
    {"id": "m-cu", "name": "铜", "density": None},
    {"id": "m-x", "name": "mystery alloy", "density": 0},
]

HISTORY_45 = [
    {"unit_price": 25.5, "effective_start": "2025-06-07", "effective_end": "2025-12-31"},
    {"unit_price": 22.6, "effective_start": "2025-11-24", "effective_end": None},
]


@pytest.fixture
def lookup():
    return MaterialLookup(MATERIALS, PART_TYPES)


@pytest.fixture
def timeline():
    return PriceTimeline({"m-45": HISTORY_45})


@pytest.fixture
def cost_engine(lookup, timeline):
    return CostEngine(lookup=lookup, timeline=timeline)


@pytest.fixture
def client():
    """FastAPI test client."""
    return TestClient(app)


@pytest.fixture
def materials():
    return [dict(record) for record in MATERIALS]


@pytest.fixture
def part_types():
    return [dict(record) for record in PART_TYPES]


@pytest.fixture
def history_45():
    return [dict(record) for record in HISTORY_45]


@pytest.fixture
def catalogs(materials, part_types, history_45):
    """Request-body catalogs, with the 45# history tagged by material id."""
    return {
        "part_types": part_types,
        "materials": materials,
        "price_history": [dict(record, material_id="m-45") for record in history_45],
    }

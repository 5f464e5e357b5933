"""
Engine API — the pure calculation functions over HTTP.

GET  /api/engine/part-types         — grammar-backed part types with hints
GET  /api/engine/part-types/{name}  — hint + built-in formula for one part type
POST /api/engine/decode             — shorthand text → measurement set
POST /api/engine/encode             — measurement set → shorthand text
POST /api/engine/volume             — formula + measurements → variables, volume
POST /api/engine/price              — price history + date → unit price
POST /api/engine/cost               — one part row → ComputedCost
POST /api/engine/cost/batch         — many rows sharing the same catalogs

Catalogs and price histories travel in the request body: this service
never reads a database or fetches anything on its own.
"""

from datetime import date
from typing import Dict, List, Optional, Union

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from .. import schemas
from ..calculators.formula import evaluate, extract_variable_names, required_inputs
from ..calculators.material_lookup import MaterialLookup
from ..calculators.price_timeline import PriceTimeline, resolve_price
from ..calculators.registry import (
    canonical_part_type, decode, default_formula, encode, format_hint,
    has_format, list_part_types,
)
from ..pricing_engine import CostEngine

router = APIRouter(prefix="/engine", tags=["engine"])


# --- Request/Response schemas ---

class DecodeRequest(BaseModel):
    text: str = ""
    part_type: str


class EncodeRequest(BaseModel):
    measurements: Dict[str, float] = {}
    part_type: str


class VolumeRequest(BaseModel):
    formula: str = ""
    measurements: Dict[str, float] = {}


class PriceRequest(BaseModel):
    history: List[schemas.PriceRecord] = []
    reference_date: Optional[date] = None


class CostRow(BaseModel):
    part_type: str
    spec_text: Optional[str] = None
    measurements: Optional[Dict[str, float]] = None
    material_id: Optional[Union[str, int]] = None
    quantity: float = 0
    reference_date: Optional[date] = None
    unit_price: Optional[float] = None


class Catalogs(BaseModel):
    part_types: List[schemas.PartTypeDefinition] = []
    materials: List[schemas.MaterialRecord] = []
    price_history: List[schemas.PriceRecord] = []


class CostRequest(CostRow, Catalogs):
    pass


class BatchCostRequest(Catalogs):
    rows: List[CostRow] = []


def _engine(catalogs: Catalogs) -> CostEngine:
    """Build a CostEngine over the catalogs sent with the request."""
    histories: Dict[str, list] = {}
    for record in catalogs.price_history:
        if record.material_id is None:
            continue
        histories.setdefault(str(record.material_id), []).append(record)
    return CostEngine(
        lookup=MaterialLookup(catalogs.materials, catalogs.part_types),
        timeline=PriceTimeline(histories),
    )


# --- Endpoints ---

@router.get("/part-types")
def part_types():
    return [
        {"name": name, "hint": format_hint(name), "formula": default_formula(name)}
        for name in list_part_types()
    ]


@router.get("/part-types/{name}")
def part_type(name: str):
    if not has_format(name):
        raise HTTPException(status_code=404, detail=f"No shorthand grammar for part type: {name}")
    canonical = canonical_part_type(name)
    return {"name": canonical, "hint": format_hint(canonical), "formula": default_formula(canonical)}


@router.post("/decode")
def decode_text(request: DecodeRequest):
    return {"measurements": decode(request.text, request.part_type)}


@router.post("/encode")
def encode_measurements(request: EncodeRequest):
    return {"text": encode(request.measurements, request.part_type)}


@router.post("/volume")
def volume(request: VolumeRequest):
    return {
        "variables": extract_variable_names(request.formula),
        "missing": required_inputs(request.formula, request.measurements),
        "volume": evaluate(request.formula, request.measurements),
    }


@router.post("/price")
def price(request: PriceRequest):
    return {"unit_price": resolve_price(request.history, request.reference_date)}


@router.post("/cost", response_model=schemas.ComputedCost)
def cost(request: CostRequest):
    """
    Compute one row. Price records sent without a material_id are taken to be
    the history of this row's material.
    """
    engine = _engine(request)
    unit_price = request.unit_price
    if unit_price is None and not engine.timeline.has(request.material_id):
        untagged = [r for r in request.price_history if r.material_id is None]
        unit_price = resolve_price(untagged, request.reference_date)
    return engine.estimate(
        part_type=request.part_type,
        spec_text=request.spec_text,
        measurements=request.measurements,
        material_id=request.material_id,
        quantity=request.quantity,
        reference_date=request.reference_date,
        unit_price=unit_price,
    )


@router.post("/cost/batch", response_model=List[schemas.ComputedCost])
def cost_batch(request: BatchCostRequest):
    engine = _engine(request)
    return engine.estimate_batch([row.model_dump() for row in request.rows])

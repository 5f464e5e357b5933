"""
Cost Aggregator.

Combines the weight and price steps into a ComputedCost for one part row.
total_price = total_weight × unit_price, rounded once, in this module.

Input: part type + shorthand text (or a measurement set), material id,
       quantity, reference date
Output: ComputedCost {unit_volume, unit_weight, quantity, total_weight,
                      unit_price, total_price}

Every edit handler calls this on any change to material, part type,
specification text or quantity, to keep the row's denormalized
{total_weight, unit_price, total_price} in sync.
"""

import logging
import math
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation

from .calculators.base import coerce_measurement
from .calculators.material_lookup import MaterialLookup
from .calculators.price_timeline import PriceTimeline
from .calculators.registry import decode, default_formula
from .config import settings
from .schemas import ComputedCost
from .weights import resolve_density, resolve_weight

logger = logging.getLogger(__name__)


def _round_half_up(value: float, decimals: int) -> float:
    try:
        quantum = Decimal(1).scaleb(-decimals)
        return float(Decimal(repr(float(value))).quantize(quantum, rounding=ROUND_HALF_UP))
    except (InvalidOperation, ValueError, TypeError):
        return 0.0


def round_weight(value) -> float:
    """kg to WEIGHT_DECIMALS (3) places, half-up."""
    return _round_half_up(value, settings.WEIGHT_DECIMALS)


def round_price(value) -> float:
    """Currency to PRICE_DECIMALS (2) places, half-up."""
    return _round_half_up(value, settings.PRICE_DECIMALS)


def _usable(value) -> float:
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        value = float(value)
    except (TypeError, ValueError):
        return 0.0
    return value if math.isfinite(value) else 0.0


def compute_cost(total_weight, unit_price) -> float:
    """
    Total price = round2(total_weight × unit_price).
    0 if either operand is 0, missing, or not a finite number.
    """
    total_weight = _usable(total_weight)
    unit_price = _usable(unit_price)
    if not total_weight or not unit_price:
        return 0.0
    return round_price(total_weight * unit_price)


class CostEngine:
    """
    Assembles a ComputedCost for part rows.

    Holds the caller's already-fetched catalogs (MaterialLookup) and price
    histories (PriceTimeline); holds no other state.
    """

    def __init__(self, lookup: MaterialLookup = None, timeline: PriceTimeline = None):
        self.lookup = lookup or MaterialLookup()
        self.timeline = timeline or PriceTimeline()

    def estimate(self, part_type: str, spec_text: str = None, measurements: dict = None,
                 material_id=None, quantity=0, reference_date=None,
                 unit_price=None) -> ComputedCost:
        """
        Compute one row. Never raises.

        Args:
            part_type: catalog part-type name (selects formula and shorthand grammar)
            spec_text: shorthand as typed, e.g. "φ20*30"; decoded if given
            measurements: measurement set, used when spec_text is not given
            material_id: catalog material id (density + price history)
            quantity: pieces; <= 0 gives zero totals
            reference_date: date the price should apply on (e.g. receiving date)
            unit_price: explicit price override; skips the price timeline
        """
        if spec_text is not None:
            measurements = decode(spec_text, part_type)
        measurements = measurements if isinstance(measurements, dict) else {}

        formula = self.lookup.get_formula(part_type) or default_formula(part_type)
        if not formula:
            logger.debug("No volume formula for part type %r", part_type)

        density, is_fallback = resolve_density(material_id, self.lookup)
        volume, unit_weight, total_weight = resolve_weight(formula, measurements, density, quantity)

        if unit_price is None:
            unit_price = self.timeline.price_for(material_id, reference_date)
        unit_price = _usable(unit_price)

        return ComputedCost(
            unit_volume=volume,
            unit_weight=round_weight(unit_weight),
            quantity=_usable(quantity),
            total_weight=round_weight(total_weight),
            unit_price=unit_price,
            total_price=compute_cost(total_weight, unit_price),
            density=density,
            density_fallback=is_fallback,
            measurements={str(k): coerce_measurement(v) for k, v in measurements.items()
                          if coerce_measurement(v) is not None},
        )

    def estimate_batch(self, rows: list) -> list:
        """
        estimate() for each row dict (keys as estimate()'s arguments).
        Rows are independent; one bad row doesn't affect the others.
        """
        results = []
        for row in rows or []:
            if not isinstance(row, dict):
                results.append(ComputedCost())
                continue
            results.append(self.estimate(
                part_type=row.get("part_type", ""),
                spec_text=row.get("spec_text"),
                measurements=row.get("measurements"),
                material_id=row.get("material_id"),
                quantity=row.get("quantity", 0),
                reference_date=row.get("reference_date"),
                unit_price=row.get("unit_price"),
            ))
        return results

# Material weight constants and the volume → weight step.
#
# Formulas give mm³; densities are g/cm³; weights are kg:
#   mm³ / 1000 = cm³,  cm³ × g/cm³ = g,  g / 1000 = kg

import logging
import math
from typing import Tuple

from .calculators.formula import evaluate
from .calculators.material_lookup import MaterialLookup
from .config import settings

logger = logging.getLogger(__name__)

# Standard steel (45#, Q235, Q345)
DEFAULT_DENSITY = settings.DEFAULT_DENSITY

# Densities (g/cm³) for common grades, by material name.
# Used when a catalog material exists but its density was never filled in.
DENSITIES = {
    "45#": 7.85,
    "Q235": 7.85,
    "Q345": 7.85,
    "Cr12MoV": 7.85,
    "SKD11": 7.85,
    "aluminum": 2.70,
    "铝合金": 2.70,
    "copper": 8.90,
    "铜": 8.90,
    "stainless": 7.93,
    "不锈钢": 7.93,
    "cast_iron": 7.20,
    "铸铁": 7.20,
    "brass": 8.50,
    "黄铜": 8.50,
}

MM3_PER_CM3 = 1000.0
G_PER_KG = 1000.0


def resolve_density(material_id, lookup: MaterialLookup) -> Tuple[float, bool]:
    """
    Returns (density g/cm³, is_fallback).

    Catalog density first, then the grade table by material name, then
    DEFAULT_DENSITY. Falling back never blocks an estimate, but it is logged
    at WARNING so it can be told apart from a real catalog density.
    """
    density = lookup.get_density(material_id)
    if density is not None:
        logger.debug("Density %.3f g/cm³ for material %s", density, material_id)
        return density, False

    record = lookup.get_material(material_id)
    if record is not None:
        name = lookup.get_material_name(material_id).strip()
        if name in DENSITIES:
            logger.debug("Density %.3f g/cm³ for material %s from grade %s",
                         DENSITIES[name], material_id, name)
            return DENSITIES[name], False
        logger.warning("density fallback: material %s (%s) has no density, using %.2f g/cm³",
                       material_id, name or "unnamed", DEFAULT_DENSITY)
    else:
        logger.warning("density fallback: unknown material %r, using %.2f g/cm³",
                       material_id, DEFAULT_DENSITY)
    return DEFAULT_DENSITY, True


def unit_weight_kg(volume_mm3: float, density: float) -> float:
    """Weight in kg of one part. Unrounded."""
    if not volume_mm3 or not density:
        return 0.0
    return volume_mm3 / MM3_PER_CM3 * density / G_PER_KG


def total_weight_kg(unit_weight: float, quantity) -> float:
    """unit_weight × quantity; 0 when quantity isn't a positive number."""
    try:
        quantity = float(quantity)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(quantity) or quantity <= 0:
        return 0.0
    return unit_weight * quantity


def resolve_weight(formula: str, measurements: dict, density: float,
                   quantity) -> Tuple[float, float, float]:
    """
    Returns (unit_volume mm³, unit_weight kg, total_weight kg), all unrounded.
    Rounding happens once, in pricing_engine.
    """
    volume = evaluate(formula, measurements)
    unit_weight = unit_weight_kg(volume, density)
    return volume, unit_weight, total_weight_kg(unit_weight, quantity)

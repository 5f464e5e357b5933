"""
Volume formula evaluator.

Part-type formulas are written over whole-word variable names, e.g.
    plate:      length*width*height
    round-bar:  π*radius²*height
    ring:       π*(outerRadius²-innerRadius²)*height
and evaluated against a measurement set in millimetres, giving mm³.

evaluate() re-runs on every keystroke of a specification cell, so it never
raises: a missing variable, a half-typed formula or a non-finite result all
give 0.
"""

import logging
import math
import re
from typing import Dict, List

from .arithmetic import ExpressionError, evaluate_expression
from .base import DIAMETER_GLYPH, coerce_measurement, normalize_glyphs

logger = logging.getLogger(__name__)

# Fixed vocabulary, in prompting order
VOCABULARY = (
    "length", "width", "height", "thickness",
    "diameter", "outerDiameter", "innerDiameter",
    "radius", "outerRadius", "innerRadius",
)

# Where each variable may be found in a measurement set, first hit wins.
# The single letters are the positional keys older catalog rows were stored with.
MEASUREMENT_KEYS = {
    "length": ("length", "A"),
    "width": ("width", "B"),
    "height": ("height", "C", "B"),
    "thickness": ("thickness", "B"),
    "diameter": ("diameter", "φA"),
    "outerDiameter": ("outerDiameter", "φA"),
    "innerDiameter": ("innerDiameter", "φB"),
    "radius": ("radius",),
    "outerRadius": ("outerRadius",),
    "innerRadius": ("innerRadius",),
}

# In a rectangular set "B" is the width. It only reads as height or thickness
# (round bar, disc) when the set carries no width.
SECOND_POSITION = "B"
WIDTH_KEYS = ("width", "A")
SECOND_POSITION_ONLY_WITHOUT_WIDTH = ("height", "thickness")

# Derived quantity → the quantity it is half of
DERIVED = {
    "radius": "diameter",
    "outerRadius": "outerDiameter",
    "innerRadius": "innerDiameter",
}

# Parenthesized so "2π" can never read as the number 23.14159…
PI_LITERAL = f"({math.pi!r})"

# Longest first so "innerDiameter" is never read as "inner" + "Diameter"
_NAME_RE = re.compile(
    r"(?<![A-Za-z0-9_])("
    + "|".join(sorted(VOCABULARY, key=len, reverse=True))
    + r")(?![A-Za-z0-9_])"
)
_PI_RE = re.compile(r"(?<![A-Za-z0-9_])(?:pi|PI|Pi)(?![A-Za-z0-9_])")


def normalize_formula(formula) -> str:
    """
    Rewrite catalog notation into plain arithmetic:
    × ÷ － ＋ （ ） → * / - + ( ),  ² → **2,  ³ → **3,  π / pi → 3.14159…,
    stray φ removed.
    """
    if not isinstance(formula, str):
        return ""
    expression = normalize_glyphs(formula)
    expression = expression.replace("²", "**2").replace("³", "**3")
    expression = expression.replace("π", PI_LITERAL)
    expression = _PI_RE.sub(PI_LITERAL, expression)
    expression = expression.replace(DIAMETER_GLYPH, "")
    return expression


def extract_variable_names(formula) -> List[str]:
    """
    Vocabulary names the formula uses, in vocabulary order.
    Used to prompt for inputs; has no effect on evaluation.
    """
    found = set(_NAME_RE.findall(normalize_formula(formula)))
    return [name for name in VOCABULARY if name in found]


def resolve_values(measurements) -> Dict[str, float]:
    """
    Collect a value for every vocabulary name the measurement set can supply,
    then fill radii from diameters where a radius wasn't given directly.
    """
    if not isinstance(measurements, dict):
        return {}
    has_width = any(coerce_measurement(measurements.get(key)) is not None for key in WIDTH_KEYS)
    values = {}
    for name, keys in MEASUREMENT_KEYS.items():
        if has_width and name in SECOND_POSITION_ONLY_WITHOUT_WIDTH:
            keys = tuple(key for key in keys if key != SECOND_POSITION)
        for key in keys:
            value = coerce_measurement(measurements.get(key))
            if value is not None:
                values[name] = value
                break
    for derived, base in DERIVED.items():
        if derived not in values and base in values:
            values[derived] = values[base] / 2
    return values


def _substitute(expression: str, values: Dict[str, float]) -> str:
    return _NAME_RE.sub(lambda m: f"({values[m.group(1)]!r})", expression)


def evaluate(formula, measurements) -> float:
    """
    Evaluate a volume formula against a measurement set. Returns mm³.

    Returns 0 when:
      - the formula is empty
      - any variable the formula names has no value (never a stale default)
      - the formula doesn't parse, divides by zero, or the result isn't finite
    """
    expression = normalize_formula(formula)
    if not expression.strip():
        return 0.0

    values = resolve_values(measurements)
    missing = [name for name in extract_variable_names(expression) if name not in values]
    if missing:
        logger.debug("Formula %r missing %s", formula, ", ".join(missing))
        return 0.0

    try:
        return evaluate_expression(_substitute(expression, values))
    except ExpressionError as e:
        logger.warning("Could not evaluate formula %r: %s", formula, e)
        return 0.0


def required_inputs(formula, measurements) -> List[str]:
    """Vocabulary names the formula still needs before it can produce a volume."""
    values = resolve_values(measurements)
    return [name for name in extract_variable_names(formula) if name not in values]


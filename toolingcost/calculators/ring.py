"""
Ring — annulus with an outer and inner diameter.

Shorthand: φOD-ID*H  (e.g. "φ60-40*15")
"-" separates the outer/inner pair, "*" precedes the height.
"""

import re

from .base import GrammarFormat, NUMBER, DIAMETER_GLYPH


class RingFormat(GrammarFormat):
    PART_TYPE = "ring"
    HINT = "φA-B*C"
    FORMULA = "π*(outerRadius²-innerRadius²)*height"

    FIELDS = (("outerDiameter", "φA"), ("innerDiameter", "φB"), ("height", "C"))
    TEMPLATE = DIAMETER_GLYPH + "{}-{}*{}"
    PATTERN = re.compile(rf"^{DIAMETER_GLYPH}{NUMBER}-{NUMBER}\*{NUMBER}$")

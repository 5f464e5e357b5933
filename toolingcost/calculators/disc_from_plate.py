"""
Disc cut from plate.

Shorthand: φD*T  (e.g. "φ200*12") — same shape as a round bar,
but the second value is the plate thickness.
"""

import re

from .base import GrammarFormat, NUMBER, DIAMETER_GLYPH


class DiscFromPlateFormat(GrammarFormat):
    PART_TYPE = "disc-from-plate"
    HINT = "φA*B"
    FORMULA = "π*radius²*thickness"

    FIELDS = (("diameter", "φA"), ("thickness", "B"))
    TEMPLATE = DIAMETER_GLYPH + "{}*{}"
    PATTERN = re.compile(rf"^{DIAMETER_GLYPH}{NUMBER}\*{NUMBER}$")

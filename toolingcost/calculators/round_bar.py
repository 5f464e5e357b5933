"""
Round bar — length cut from round stock.

Shorthand: φD*H  (e.g. "φ20*30")
The leading diameter glyph is required; "20*30" is not a round bar.
"""

import re

from .base import GrammarFormat, NUMBER, DIAMETER_GLYPH


class RoundBarFormat(GrammarFormat):
    PART_TYPE = "round-bar"
    HINT = "φA*B"
    FORMULA = "π*radius²*height"

    FIELDS = (("diameter", "φA"), ("height", "B"))
    TEMPLATE = DIAMETER_GLYPH + "{}*{}"
    PATTERN = re.compile(rf"^{DIAMETER_GLYPH}{NUMBER}\*{NUMBER}$")

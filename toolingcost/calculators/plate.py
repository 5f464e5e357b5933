"""
Plate — rectangular blank cut from plate stock.

Shorthand: L*W*H  (e.g. "100*50*10")
Keys: length (A), width (B), height (C)
"""

import re

from .base import GrammarFormat, NUMBER


class PlateFormat(GrammarFormat):
    PART_TYPE = "plate"
    HINT = "A*B*C"
    FORMULA = "length*width*height"

    FIELDS = (("length", "A"), ("width", "B"), ("height", "C"))
    TEMPLATE = "{}*{}*{}"
    PATTERN = re.compile(rf"^{NUMBER}\*{NUMBER}\*{NUMBER}$")

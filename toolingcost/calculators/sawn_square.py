"""
Sawn square — block cut on the band saw.

Shorthand: L*W*H like a plate. Older rows were stored as key:value text,
so when the grammar doesn't match we fall back to the generic codec.
"""

import re

from .base import GrammarFormat, NUMBER
from .key_value import KeyValueFormat


class SawnSquareFormat(GrammarFormat):
    PART_TYPE = "sawn-square"
    HINT = "A*B*C"
    FORMULA = "length*width*height"

    FIELDS = (("length", "A"), ("width", "B"), ("height", "C"))
    TEMPLATE = "{}*{}*{}"
    PATTERN = re.compile(rf"^{NUMBER}\*{NUMBER}\*{NUMBER}$")

    def decode(self, text: str) -> dict:
        measurements = super().decode(text)
        if measurements:
            return measurements
        return KeyValueFormat().decode(text)

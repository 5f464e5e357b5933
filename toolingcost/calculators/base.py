"""
Abstract base class for all shorthand formats.

Input: the text a worker types into a specification cell (e.g. "100*50*10")
Output: a measurement set dict {canonical_key: mm, legacy_alias: mm}

Every format is total: decode() returns {} on anything it can't read,
encode() returns "" unless every required value is present.
"""

import logging
import math
import re
from abc import ABC, abstractmethod
from typing import Optional

logger = logging.getLogger(__name__)

DIAMETER_GLYPH = "φ"

# Full-width / look-alike punctuation typed by IME keyboards → ASCII.
# Shared by the shorthand decoders and the formula evaluator.
GLYPH_MAP = str.maketrans({
    "＊": "*", "×": "*", "✕": "*", "∗": "*",
    "－": "-", "—": "-", "–": "-", "﹣": "-", "−": "-",
    "＋": "+", "﹢": "+",
    "（": "(", "﹙": "(",
    "）": ")", "﹚": ")",
    "．": ".", "，": ",", "：": ":", "／": "/", "÷": "/",
    "Φ": DIAMETER_GLYPH, "ϕ": DIAMETER_GLYPH, "ø": DIAMETER_GLYPH,
    "Ø": DIAMETER_GLYPH, "⌀": DIAMETER_GLYPH,
    **{chr(0xFF10 + i): str(i) for i in range(10)},  # ０-９
})

# Unsigned decimal, optional exponent. Signs never appear inside a grammar:
# "-" is the outer/inner separator of a ring.
NUMBER = r"((?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)"


def normalize_glyphs(text: str) -> str:
    """Map full-width operators, digits and diameter look-alikes to their ASCII / φ form."""
    return text.translate(GLYPH_MAP)


def coerce_measurement(value) -> Optional[float]:
    """
    Read one measurement value. Returns None for anything that isn't a usable
    length: missing, booleans, unparseable strings, NaN/inf, negatives.
    Zero is a real value ("user typed 0"), not absent.
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(str(value).strip()) if isinstance(value, str) else float(value)
    except (ValueError, TypeError):
        return None
    if not math.isfinite(number) or number < 0:
        return None
    return number


def format_number(value: float) -> str:
    """Render a measurement the way a worker writes it: 100, not 100.0."""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


class BaseFormat(ABC):
    """All shorthand formats inherit from this."""

    PART_TYPE = ""
    HINT = ""
    # Volume formula used when the catalog has none for this part type
    FORMULA = ""

    @abstractmethod
    def encode(self, measurements: dict) -> str:
        """Measurement set → shorthand text, or "" if incomplete."""
        pass

    @abstractmethod
    def decode(self, text: str) -> dict:
        """Shorthand text → measurement set, or {} if the text doesn't match."""
        pass

    def normalize(self, text) -> str:
        """Glyph normalization plus whitespace removal."""
        if not isinstance(text, str):
            return ""
        return re.sub(r"\s+", "", normalize_glyphs(text))


class GrammarFormat(BaseFormat):
    """
    A fixed-arity positional grammar.

    Subclasses declare:
        FIELDS   — ordered (canonical_key, legacy_alias) pairs
        TEMPLATE — str.format template over the rendered values, in FIELDS order
        PATTERN  — anchored regex with one NUMBER group per field
    """

    FIELDS: tuple = ()
    TEMPLATE = ""
    PATTERN: re.Pattern = None

    def read_field(self, measurements: dict, key: str, alias: str) -> Optional[float]:
        """Canonical key wins; legacy alias is the fallback."""
        value = coerce_measurement(measurements.get(key))
        if value is None:
            value = coerce_measurement(measurements.get(alias))
        return value

    def encode(self, measurements: dict) -> str:
        if not isinstance(measurements, dict):
            return ""
        values = []
        for key, alias in self.FIELDS:
            value = self.read_field(measurements, key, alias)
            if value is None:
                return ""
            values.append(format_number(value))
        return self.TEMPLATE.format(*values)

    def normalize(self, text) -> str:
        # Workers often type "100x50x10"; no grammar uses letters
        return super().normalize(text).replace("x", "*").replace("X", "*")

    def decode(self, text: str) -> dict:
        match = self.PATTERN.match(self.normalize(text))
        if not match:
            logger.debug("No %s match for %r", self.PART_TYPE, text)
            return {}
        measurements = {}
        for (key, alias), token in zip(self.FIELDS, match.groups()):
            value = coerce_measurement(token)
            if value is None:
                # e.g. "1e999" → inf; leave the key absent rather than zero
                continue
            measurements[key] = value
            measurements[alias] = value
        return measurements

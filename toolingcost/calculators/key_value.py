"""
Generic key:value codec — tube, and any part type without its own grammar.

Shorthand: "length:100,width:50"
Keys are taken as typed; pairs that don't parse are skipped, not fatal.
"""

import logging

from .base import BaseFormat, coerce_measurement, format_number, normalize_glyphs

logger = logging.getLogger(__name__)


class KeyValueFormat(BaseFormat):
    PART_TYPE = "tube"
    HINT = "key:value,key:value"

    def encode(self, measurements: dict) -> str:
        if not isinstance(measurements, dict):
            return ""
        pairs = []
        for key, raw in measurements.items():
            value = coerce_measurement(raw)
            if value is None:
                continue
            pairs.append(f"{key}:{format_number(value)}")
        return ",".join(pairs)

    def normalize(self, text) -> str:
        # Keys may legitimately contain spaces; only trim around them in decode()
        if not isinstance(text, str):
            return ""
        return normalize_glyphs(text).strip()

    def decode(self, text: str) -> dict:
        measurements = {}
        for pair in self.normalize(text).split(","):
            key, sep, raw = pair.partition(":")
            key = key.strip()
            if not sep or not key:
                continue
            value = coerce_measurement(raw.strip())
            if value is None:
                logger.debug("Skipping unreadable pair %r", pair)
                continue
            measurements[key] = value
        return measurements

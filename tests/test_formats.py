"""
Shorthand format tests — text ⇄ measurement set per part type.

Tests:
1-4.   Registry (lookup, aliases, fallback, hints)
5-12.  Grammar-backed part types (plate, round bar, ring, disc, sawn square)
13-17. Normalization and malformed input
18-21. Generic key:value codec
22-23. Round trips
"""

import math
import random

import pytest

from toolingcost.calculators.base import coerce_measurement, format_number
from toolingcost.calculators.key_value import KeyValueFormat
from toolingcost.calculators.plate import PlateFormat
from toolingcost.calculators.registry import (
    canonical_part_type, decode, default_formula, encode, format_hint,
    get_format, has_format, list_part_types,
)
from toolingcost.calculators.ring import RingFormat


# ============================================================
# Registry
# ============================================================

def test_registry_lists_grammar_types():
    types = list_part_types()
    for part_type in ["plate", "round-bar", "ring", "disc-from-plate", "sawn-square"]:
        assert part_type in types, f"{part_type} not in registry"
        assert has_format(part_type)
    assert not has_format("tube")


def test_part_type_names_are_folded():
    assert canonical_part_type("Round_Bar") == "round-bar"
    assert canonical_part_type("  round bar ") == "round-bar"
    assert canonical_part_type("圆环") == "ring"
    assert canonical_part_type("板料割圆") == "disc-from-plate"
    assert canonical_part_type(None) == ""
    assert isinstance(get_format("PLATE"), PlateFormat)


def test_unknown_type_falls_back_to_key_value():
    assert isinstance(get_format("tube"), KeyValueFormat)
    assert isinstance(get_format("nonexistent_type"), KeyValueFormat)
    assert isinstance(get_format(42), KeyValueFormat)


def test_format_hints():
    assert format_hint("plate") == "A*B*C"
    assert format_hint("round-bar") == "φA*B"
    assert format_hint("ring") == "φA-B*C"
    assert format_hint("disc-from-plate") == "φA*B"
    assert format_hint("sawn-square") == "A*B*C"
    assert format_hint("tube") == "key:value,key:value"
    assert default_formula("plate") == "length*width*height"
    assert default_formula("tube") == ""


# ============================================================
# Grammar-backed part types
# ============================================================

def test_plate_encode():
    assert encode({"length": 100, "width": 50, "height": 10}, "plate") == "100*50*10"


def test_plate_decode_sets_canonical_and_legacy_keys():
    assert decode("100*50*10", "plate") == {
        "length": 100, "width": 50, "height": 10, "A": 100, "B": 50, "C": 10,
    }


def test_plate_encode_reads_legacy_alias():
    """Rows stored under A/B/C still encode."""
    assert encode({"A": 120, "B": 60.5, "C": 8}, "plate") == "120*60.5*8"


def test_plate_encode_incomplete_is_empty():
    assert encode({"length": 100, "width": 50}, "plate") == ""
    assert encode({"length": 100, "width": 50, "height": None}, "plate") == ""
    assert encode({"length": 100, "width": 50, "height": -1}, "plate") == ""
    assert encode({"length": 100, "width": 50, "height": float("nan")}, "plate") == ""
    assert encode(None, "plate") == ""


def test_plate_zero_is_a_value():
    assert encode({"length": 100, "width": 50, "height": 0}, "plate") == "100*50*0"
    assert decode("100*50*0", "plate")["height"] == 0


def test_round_bar():
    assert encode({"diameter": 20, "height": 30}, "round-bar") == "φ20*30"
    measurements = decode("φ20*30", "round-bar")
    assert measurements["diameter"] == 20
    assert measurements["height"] == 30
    assert measurements["φA"] == 20
    assert measurements["B"] == 30


def test_round_bar_requires_diameter_glyph():
    assert decode("20*30", "round-bar") == {}


def test_ring():
    assert encode({"outerDiameter": 60, "innerDiameter": 40, "height": 15}, "ring") == "φ60-40*15"
    assert decode("φ60-40*15", "ring") == {
        "outerDiameter": 60, "innerDiameter": 40, "height": 15,
        "φA": 60, "φB": 40, "C": 15,
    }


def test_disc_from_plate():
    assert encode({"diameter": 200, "thickness": 12}, "disc-from-plate") == "φ200*12"
    assert decode("φ200*12", "disc-from-plate") == {
        "diameter": 200, "thickness": 12, "φA": 200, "B": 12,
    }


def test_sawn_square_grammar_and_key_value_fallback():
    assert decode("80*80*120", "sawn-square")["height"] == 120
    assert decode("length:80,width:80,height:120", "sawn-square") == {
        "length": 80, "width": 80, "height": 120,
    }
    assert decode("80*80", "sawn-square") == {}


# ============================================================
# Normalization and malformed input
# ============================================================

def test_full_width_punctuation_is_normalized():
    assert decode("１００＊５０×１０", "plate")["length"] == 100
    assert decode("Φ60－40＊15", "ring")["innerDiameter"] == 40
    assert decode("⌀20*30", "round-bar")["diameter"] == 20
    assert decode(" 100 x 50 X 10 ", "plate")["width"] == 50


def test_decimals_parse_as_float():
    measurements = decode("φ20.5*30.25", "round-bar")
    assert measurements["diameter"] == 20.5
    assert measurements["height"] == 30.25


@pytest.mark.parametrize("text", [
    "", "100*50", "100*50*10*5", "100*50*", "*50*10", "abc", "100**50*10",
    "100*-50*10", "φ100*50*10", "100*50*10mm",
])
def test_plate_mismatch_decodes_empty(text):
    assert decode(text, "plate") == {}


@pytest.mark.parametrize("text", [None, 123, ["100*50*10"], {"a": 1}])
def test_non_string_input_never_raises(text):
    assert decode(text, "plate") == {}
    assert decode(text, "tube") == {}


def test_non_finite_token_is_absent_not_zero():
    measurements = decode("100*50*1e999", "plate")
    assert measurements == {"length": 100, "width": 50, "A": 100, "B": 50}
    assert "height" not in measurements


# ============================================================
# Generic key:value codec
# ============================================================

def test_key_value_decode():
    assert decode("length:100,outerDiameter:40,innerDiameter:30", "tube") == {
        "length": 100, "outerDiameter": 40, "innerDiameter": 30,
    }


def test_key_value_skips_bad_pairs():
    assert decode("length:100,width:abc,height,:5,depth:-3,thickness:2", "tube") == {
        "length": 100, "thickness": 2,
    }


def test_key_value_full_width_separators():
    assert decode("length：100，width：50", "tube") == {"length": 100, "width": 50}


def test_key_value_encode():
    assert encode({"length": 100, "width": 12.5}, "tube") == "length:100,width:12.5"
    assert encode({"length": 100, "note": "x", "width": None}, "tube") == "length:100"
    assert encode({}, "tube") == ""


# ============================================================
# Round trips
# ============================================================

def test_number_rendering():
    assert format_number(100.0) == "100"
    assert format_number(0.1) == "0.1"
    assert format_number(1e-7) == "1e-07"
    assert coerce_measurement(format_number(1e-7)) == 1e-7


_GRAMMAR_KEYS = {
    "plate": ("length", "width", "height"),
    "round-bar": ("diameter", "height"),
    "ring": ("outerDiameter", "innerDiameter", "height"),
    "disc-from-plate": ("diameter", "thickness"),
    "sawn-square": ("length", "width", "height"),
}


@pytest.mark.parametrize("part_type", sorted(_GRAMMAR_KEYS))
@pytest.mark.parametrize("seed", range(5))
def test_round_trip_canonical_keys(part_type, seed):
    rng = random.Random(f"{part_type}-{seed}")
    measurements = {
        key: rng.choice([0, rng.randint(1, 5000), round(rng.uniform(0, 2000), rng.randint(0, 4))])
        for key in _GRAMMAR_KEYS[part_type]
    }
    decoded = decode(encode(measurements, part_type), part_type)
    assert {k: decoded[k] for k in _GRAMMAR_KEYS[part_type]} == measurements


def test_ring_fields_match_template():
    fmt = RingFormat()
    assert len(fmt.FIELDS) == fmt.TEMPLATE.count("{}") == fmt.PATTERN.groups
    assert not math.isnan(fmt.decode("φ60-40*15")["C"])

"""
Format registry — maps part-type names to shorthand formats.

Unknown part types fall back to the generic key:value codec, so a part type
added to the catalog works immediately, just without a dedicated grammar.
"""

from .plate import PlateFormat
from .round_bar import RoundBarFormat
from .ring import RingFormat
from .disc_from_plate import DiscFromPlateFormat
from .sawn_square import SawnSquareFormat
from .key_value import KeyValueFormat
from .base import BaseFormat

FORMAT_REGISTRY: dict[str, type] = {
    "plate": PlateFormat,
    "round-bar": RoundBarFormat,
    "ring": RingFormat,
    "disc-from-plate": DiscFromPlateFormat,
    "sawn-square": SawnSquareFormat,
}

# Chinese catalog names and short forms
PART_TYPE_ALIASES = {
    "板料": "plate",
    "圆料": "round-bar",
    "圆环": "ring",
    "板料割圆": "disc-from-plate",
    "锯床割方": "sawn-square",
    "圆管": "tube",
    "round": "round-bar",
    "disc": "disc-from-plate",
}


def canonical_part_type(part_type) -> str:
    """'Round_Bar' / 'round bar' / '圆料' → 'round-bar'. Non-strings → ''."""
    if not isinstance(part_type, str):
        return ""
    name = part_type.strip()
    if name in PART_TYPE_ALIASES:
        return PART_TYPE_ALIASES[name]
    name = "-".join(name.lower().replace("_", " ").split())
    return PART_TYPE_ALIASES.get(name, name)


def get_format(part_type) -> BaseFormat:
    """Returns the format for a part type; the key:value codec if it has no grammar."""
    return FORMAT_REGISTRY.get(canonical_part_type(part_type), KeyValueFormat)()


def has_format(part_type) -> bool:
    """Check if a part type has a dedicated grammar."""
    return canonical_part_type(part_type) in FORMAT_REGISTRY


def list_part_types() -> list[str]:
    """List all grammar-backed part types."""
    return list(FORMAT_REGISTRY.keys())


def format_hint(part_type) -> str:
    """Shorthand template to show in an empty cell, e.g. 'φA-B*C' for a ring."""
    return get_format(part_type).HINT


def default_formula(part_type) -> str:
    """Built-in volume formula for a grammar-backed part type; "" otherwise."""
    return get_format(part_type).FORMULA


def encode(measurements: dict, part_type) -> str:
    """Measurement set → shorthand text for a part type. Never raises."""
    return get_format(part_type).encode(measurements)


def decode(text: str, part_type) -> dict:
    """Shorthand text → measurement set for a part type. Never raises."""
    return get_format(part_type).decode(text)

"""
Material and part-type lookup over already-fetched catalogs.

The catalogs come from the caller (fetched once and cached by the edit
handler or importer); this class only indexes them. Records may be the
pydantic models from schemas.py or plain dicts straight off the API.
"""

import logging
import math
from typing import Iterable, Optional

from .registry import canonical_part_type

logger = logging.getLogger(__name__)


def _field(record, name: str, default=None):
    if isinstance(record, dict):
        return record.get(name, default)
    return getattr(record, name, default)


class MaterialLookup:
    """
    Looks up materials by id and part types by name.

    This class wraps the catalogs so the weight and cost code doesn't need
    to know whether they came from the database, a cache, or a test fixture.
    """

    def __init__(self, materials: Optional[Iterable] = None, part_types: Optional[Iterable] = None):
        self._materials = {}
        for record in materials or []:
            material_id = _field(record, "id")
            if material_id is None:
                logger.warning("Skipping material without id: %r", record)
                continue
            self._materials[str(material_id)] = record

        self._part_types = {}
        for record in part_types or []:
            name = canonical_part_type(str(_field(record, "name") or ""))
            if not name:
                continue
            self._part_types[name] = record

    def get_material(self, material_id):
        """Returns the material record, or None for an unknown / empty id."""
        if material_id is None or material_id == "":
            return None
        return self._materials.get(str(material_id))

    def get_material_name(self, material_id) -> str:
        record = self.get_material(material_id)
        return str(_field(record, "name", "") or "") if record is not None else ""

    def get_density(self, material_id) -> Optional[float]:
        """
        Returns the catalog density in g/cm³, or None if the material is
        unknown or its density is missing / not a positive number.
        """
        record = self.get_material(material_id)
        if record is None:
            return None
        try:
            density = float(_field(record, "density"))
        except (TypeError, ValueError):
            return None
        if not math.isfinite(density) or density <= 0:
            return None
        return density

    def get_part_type(self, name):
        """Returns the part-type record for a catalog name (folded as in the registry), or None."""
        if not isinstance(name, str):
            return None
        return self._part_types.get(canonical_part_type(name))

    def get_formula(self, part_type: str) -> str:
        """Volume formula for a part type; "" if unknown or not configured."""
        record = self.get_part_type(part_type)
        if record is None:
            return ""
        return str(_field(record, "volume_formula", "") or "").strip()

"""
Price timeline — one unit price per (history, date).

A material's price history is append-only: a price change adds a record with
a new effective_start (and usually closes the previous one with an
effective_end). Given the already-fetched history and a reference date
(typically the receiving date), pick the price that applied:

1. No reference date → the record with the latest effective_start.
2. The record whose [effective_start, effective_end] contains the date
   (both ends inclusive; no end date = still in effect).
3. Nothing contains it (gap in coverage) → the latest record that started
   on or before the date.
4. Date precedes the whole history → 0. Never extrapolate backwards.

Overlapping ranges aren't prevented when records are written, so ties are
broken deterministically: latest effective_start wins, and between equal
starts the record later in the history (appended last) wins.
"""

import logging
import math
import re
from datetime import date, datetime
from typing import Dict, Iterable, List, NamedTuple, Optional

logger = logging.getLogger(__name__)

# Accepted spellings per field. API rows use snake_case, older exports camelCase
_FIELD_NAMES = {
    "unit_price": ("unit_price", "unitPrice"),
    "effective_start": ("effective_start", "effective_start_date", "effectiveStart", "start"),
    "effective_end": ("effective_end", "effective_end_date", "effectiveEnd", "end"),
}

# YYYY-M-D, zero padding optional; any time part after it is ignored
_DATE_RE = re.compile(r"(\d{4})-(\d{1,2})-(\d{1,2})(?!\d)")


class _Entry(NamedTuple):
    start: date
    end: Optional[date]
    index: int
    unit_price: float

    @property
    def order(self):
        return (self.start, self.index)


def to_date(value) -> Optional[date]:
    """date, datetime, or 'YYYY-MM-DD[...]' string (padding optional) → date. None if unreadable."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        match = _DATE_RE.match(text)
        if not match:
            return None
        try:
            return date(*(int(part) for part in match.groups()))
        except ValueError:
            return None
    return None


def _read(record, field: str):
    for name in _FIELD_NAMES[field]:
        if isinstance(record, dict):
            if name in record:
                return record[name]
        elif hasattr(record, name):
            return getattr(record, name)
    return None


def _entries(history) -> List[_Entry]:
    entries = []
    for index, record in enumerate(history or []):
        start = to_date(_read(record, "effective_start"))
        raw_end = _read(record, "effective_end")
        end = to_date(raw_end)
        try:
            unit_price = float(_read(record, "unit_price"))
        except (TypeError, ValueError):
            unit_price = math.nan

        if start is None or (raw_end not in (None, "") and end is None) or not math.isfinite(unit_price):
            logger.warning("Skipping malformed price record #%d: %r", index, record)
            continue
        entries.append(_Entry(start, end, index, unit_price))
    return entries


def resolve_price(history, reference_date=None) -> float:
    """
    Returns the unit price that applies on reference_date.
    Always returns a number; 0 when nothing applies.
    """
    entries = _entries(history)
    if not entries:
        return 0.0

    target = to_date(reference_date)
    if target is None:
        if reference_date not in (None, ""):
            logger.warning("Unreadable reference date %r, using latest price", reference_date)
        return max(entries, key=lambda e: e.order).unit_price

    covering = [e for e in entries if e.start <= target and (e.end is None or target <= e.end)]
    if covering:
        if len(covering) > 1:
            logger.debug("%d overlapping price records cover %s", len(covering), target)
        return max(covering, key=lambda e: e.order).unit_price

    started = [e for e in entries if e.start <= target]
    if not started:
        logger.debug("No price on or before %s (history starts %s)",
                     target, min(e.start for e in entries))
        return 0.0
    return max(started, key=lambda e: e.order).unit_price


class PriceTimeline:
    """
    Caller-owned cache of fetched price histories, keyed by material id.

    The engine never fetches; an edit handler loads the history it fetched,
    asks for prices, and invalidates when the material's prices change.
    """

    def __init__(self, histories: Optional[Dict[str, Iterable]] = None):
        self._histories: Dict[str, list] = {}
        for material_id, history in (histories or {}).items():
            self.load(material_id, history)

    def load(self, material_id, history: Iterable):
        """Store (or replace) the fetched history for a material."""
        self._histories[str(material_id)] = list(history or [])

    def get(self, material_id) -> Optional[list]:
        """The cached history, or None if it hasn't been loaded."""
        if material_id is None:
            return None
        return self._histories.get(str(material_id))

    def has(self, material_id) -> bool:
        return material_id is not None and str(material_id) in self._histories

    def invalidate(self, material_id=None):
        """Drop one material's history, or everything when no id is given."""
        if material_id is None:
            self._histories.clear()
        else:
            self._histories.pop(str(material_id), None)

    def price_for(self, material_id, reference_date=None) -> float:
        """Unit price for a material on a date; 0 if its history isn't loaded."""
        history = self.get(material_id)
        if history is None:
            logger.debug("No price history loaded for material %s", material_id)
            return 0.0
        return resolve_price(history, reference_date)

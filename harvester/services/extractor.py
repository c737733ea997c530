from __future__ import annotations

import math
import numbers
from collections.abc import Iterable, MutableMapping
from typing import Any

from ..models.row_data import RawRow

"""Pair extraction: one sheet row -> zero or more GTIN/PharmaCode pairs.

Rules applied to every row:

1. The GTIN cell is rendered as text; blank text drops the row.
2. The PharmaCode cell is ignored on the header row (index 0). On data rows
   it is truncated to an integer (7.9 -> "7") and rendered as decimal text.
3. The PharmaCode text must consist of digits only. Empty text and negative
   values fail this check and drop the row.
4. The GTIN text is split on a double space; one cell may carry several
   GTINs.
5. Every whitespace character is removed from each GTIN and from the
   PharmaCode; the pair is stored in the mapping, overwriting an earlier
   PharmaCode for the same GTIN.

Rejected rows are skipped silently: no exception, no log line.
"""

__all__ = [
    "GTIN_SEPARATOR",
    "cell_to_text",
    "pharmacode_to_text",
    "row_pairs",
    "extract_pair",
    "extract_pairs",
]

GTIN_SEPARATOR = "  "


def cell_to_text(value: Any) -> str:
    """Render a raw cell value as text; absent cells become ``""``.

    Whole-number floats are rendered without the ``.0`` a numeric cell picks
    up in the spreadsheet, so a GTIN stored as a number keeps its digits.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, numbers.Integral):
        return str(int(value))
    if isinstance(value, numbers.Real):
        value = float(value)
        if math.isnan(value):
            return ""
        if value.is_integer():
            return str(int(value))
        return str(value)
    return str(value)


def pharmacode_to_text(value: Any) -> str:
    """Truncate a numeric cell to an integer and render it as decimal text.

    Returns ``""`` for absent cells and for anything that is not a numeric
    cell, text included (even text that looks like a number).
    """
    if value is None or isinstance(value, bool):
        return ""
    if isinstance(value, numbers.Integral):
        return str(int(value))
    if isinstance(value, numbers.Real):
        value = float(value)
        if not math.isfinite(value):
            return ""
        return str(math.trunc(value))
    return ""


def _is_digits(text: str) -> bool:
    return text.isascii() and text.isdigit()


def _strip_whitespace(text: str) -> str:
    return "".join(text.split())


def row_pairs(raw_gtin: Any, raw_pharmacode: Any, row_index: int) -> list[tuple[str, str]]:
    """Return the normalized (GTIN, PharmaCode) pairs one row contributes."""
    gtin_text = cell_to_text(raw_gtin)
    if not gtin_text.strip():
        return []

    pharmacode_text = pharmacode_to_text(raw_pharmacode) if row_index > 0 else ""
    if not _is_digits(pharmacode_text):
        return []

    value = _strip_whitespace(pharmacode_text)
    pairs: list[tuple[str, str]] = []
    candidates = gtin_text.split(GTIN_SEPARATOR)
    # a cell ending in a double space has no trailing candidate
    while candidates and not candidates[-1]:
        candidates.pop()
    for candidate in candidates:
        pairs.append((_strip_whitespace(candidate), value))
    return pairs


def extract_pair(
    raw_gtin: Any,
    raw_pharmacode: Any,
    row_index: int,
    mapping: MutableMapping[str, str],
) -> None:
    """Fold one row into ``mapping`` (last write wins)."""
    for key, value in row_pairs(raw_gtin, raw_pharmacode, row_index):
        mapping[key] = value


def extract_pairs(rows: Iterable[RawRow]) -> tuple[dict[str, str], int]:
    """Run the extraction over all rows of one sheet.

    Returns:
        tuple: (mapping, skipped_rows) where mapping keeps insertion order and
        skipped_rows counts rows that contributed no pair.
    """
    mapping: dict[str, str] = {}
    skipped = 0
    for row in rows:
        pairs = row_pairs(row.gtin, row.pharmacode, row.row_index)
        if not pairs:
            skipped += 1
            continue
        for key, value in pairs:
            mapping[key] = value
    return mapping, skipped

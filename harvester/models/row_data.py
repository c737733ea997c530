from __future__ import annotations

from dataclasses import dataclass
from typing import Any

"""RawRow model for the PharmaCode harvester.

A RawRow carries the two referenced cells of one spreadsheet row exactly as
the reader decoded them. It only lives while the sheet is being iterated.
"""

__all__ = [
    "RawRow",
]


@dataclass(frozen=True)
class RawRow:
    """The GTIN and PharmaCode cells of a single sheet row.

    ``row_index`` is zero-based; row 0 is the header row. A cell value of
    ``None`` means the cell is absent (empty or outside the sheet width).
    """
    row_index: int
    gtin: Any = None  # str | int | float | None
    pharmacode: Any = None  # str | int | float | None

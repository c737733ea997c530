from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

"""Run result model for the PharmaCode harvester."""


@dataclass(frozen=True)
class HarvestResult:
    """Aggregated outcome of one extraction run, used for the SUMMARY line."""
    input_path: Path
    output_path: Path
    rows_read: int  # including the header row
    skipped_rows: int  # rows that produced no pair
    pairs_written: int  # lines in the output file
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float

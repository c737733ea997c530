from __future__ import annotations

import logging
from datetime import UTC, datetime
from pathlib import Path

from ..excel.reader import iter_raw_rows, read_first_sheet
from ..models.harvest_result import HarvestResult
from .extractor import extract_pairs
from .progress import ProgressTracker
from .writer import write_mapping

"""Run orchestration: read the sheet, extract pairs, write the mapping.

The mapping only exists for the duration of one ``harvest`` call. Any
failure (unreadable input, unwritable output) propagates to the caller and
nothing partial is kept.
"""

logger = logging.getLogger(__name__)

FINISH_MSG = "Process has successfully finished. {count} lines written to {path}."


def harvest(
    input_path: Path,
    gtin_column: int,
    pharmacode_column: int,
    output_directory: Path | None = None,
) -> HarvestResult:
    """Extract the GTIN -> PharmaCode mapping of ``input_path`` and write it.

    Args:
        input_path: workbook to read (first sheet only)
        gtin_column: zero-based index of the GTIN column
        pharmacode_column: zero-based index of the PharmaCode column
        output_directory: where to write; defaults to the input's directory

    Raises:
        FileNotFoundError / WorkbookReadError: input cannot be read
        OSError: output cannot be written
    """
    start_time = datetime.now(UTC)
    input_path = Path(input_path)

    df = read_first_sheet(input_path)
    rows_read = len(df)
    logger.debug(f"read {rows_read} rows from {input_path}")

    with ProgressTracker(rows_read) as progress:
        rows = iter_raw_rows(df, gtin_column, pharmacode_column)
        mapping, skipped = extract_pairs(progress.track(rows))

    destination = Path(output_directory) if output_directory is not None else input_path.parent
    output_path, count = write_mapping(mapping, destination)

    end_time = datetime.now(UTC)
    logger.info(FINISH_MSG.format(count=count, path=output_path))

    return HarvestResult(
        input_path=input_path,
        output_path=output_path,
        rows_read=rows_read,
        skipped_rows=skipped,
        pairs_written=count,
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=(end_time - start_time).total_seconds(),
    )

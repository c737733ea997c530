from __future__ import annotations

from ..models.harvest_result import HarvestResult

"""Summary line rendering.

Format:
SUMMARY rows={rows} skipped={skipped} pairs={pairs} elapsed_sec={elapsed} output={path}
"""


def format_seconds(seconds: float) -> str:
    """Format a duration without scientific notation or a trailing ``.0``."""
    if seconds == 0:
        return "0"
    if seconds == int(seconds):
        return str(int(seconds))
    if seconds < 0.01:
        # Format very small numbers to avoid scientific notation
        return f"{seconds:.6f}".rstrip("0").rstrip(".")
    return str(round(seconds, 3))


def render_summary_line(result: HarvestResult) -> str:
    """Render the SUMMARY line for a finished run.

    Examples:
        >>> from datetime import datetime, timezone
        >>> from pathlib import Path
        >>> t = datetime(2023, 1, 1, tzinfo=timezone.utc)
        >>> result = HarvestResult(
        ...     input_path=Path("in.xlsx"), output_path=Path("1_pharmacode.csv"),
        ...     rows_read=10, skipped_rows=2, pairs_written=9,
        ...     start_time=t, end_time=t, elapsed_seconds=0.5,
        ... )
        >>> render_summary_line(result)
        'SUMMARY rows=10 skipped=2 pairs=9 elapsed_sec=0.5 output=1_pharmacode.csv'
    """
    return (
        f"SUMMARY rows={result.rows_read} "
        f"skipped={result.skipped_rows} "
        f"pairs={result.pairs_written} "
        f"elapsed_sec={format_seconds(result.elapsed_seconds)} "
        f"output={result.output_path}"
    )

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pandas as pd

from ..models.row_data import RawRow

"""Spreadsheet reader (row source).

Only the first sheet is read. Rows are read without a header so that row 0
(the header row) keeps its position; the extractor decides what to do with
it. Cells are kept as ``object`` so that text stays text and numbers stay
numbers, and empty cells become ``None``.
"""


class WorkbookReadError(OSError):
    """Raised when the workbook cannot be opened or decoded."""


def read_first_sheet(path: Path) -> pd.DataFrame:
    """Read the first sheet of a workbook as a raw DataFrame.

    Raises:
        FileNotFoundError: the input file does not exist
        WorkbookReadError: the file is not a readable workbook or has no sheet
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"input file not found: {path}")

    try:
        xls = pd.ExcelFile(path)
    except Exception as e:  # BadZipFile, ValueError, InvalidFileException ...
        raise WorkbookReadError(f"cannot read workbook {path}: {e}") from e

    with xls:
        if not xls.sheet_names:
            raise WorkbookReadError(f"workbook has no sheet: {path}")
        try:
            # 文字列 "NA" 等を NaN に変換しない (空セルのみ欠損扱い)
            df = xls.parse(
                xls.sheet_names[0],
                header=None,
                dtype=object,
                keep_default_na=False,
                na_values=[""],
            )
        except Exception as e:
            raise WorkbookReadError(f"cannot decode first sheet of {path}: {e}") from e
    return df


def _cell(values: tuple[Any, ...], column: int) -> Any:
    if column >= len(values):
        return None
    value = values[column]
    if value is None:
        return None
    try:
        if pd.isna(value):
            return None
    except (TypeError, ValueError):  # non-scalar cell content
        pass
    return value


def iter_raw_rows(df: pd.DataFrame, gtin_column: int, pharmacode_column: int) -> Iterator[RawRow]:
    """Yield the GTIN and PharmaCode cells of every row, in sheet order.

    A column index outside the sheet width yields absent cells rather than an
    error.
    """
    if gtin_column < 0 or pharmacode_column < 0:
        raise ValueError(
            f"column indexes must be >= 0 (gtin={gtin_column}, pharmacode={pharmacode_column})"
        )
    for position, values in enumerate(df.itertuples(index=False, name=None)):
        yield RawRow(
            row_index=position,
            gtin=_cell(values, gtin_column),
            pharmacode=_cell(values, pharmacode_column),
        )


def read_raw_rows(path: Path, gtin_column: int, pharmacode_column: int) -> list[RawRow]:
    """Convenience wrapper: read the first sheet and materialize its rows."""
    df = read_first_sheet(path)
    return list(iter_raw_rows(df, gtin_column, pharmacode_column))

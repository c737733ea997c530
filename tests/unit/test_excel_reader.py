from __future__ import annotations

from pathlib import Path

import pandas as pd
import pytest

from harvester.excel.reader import (
    WorkbookReadError,
    iter_raw_rows,
    read_first_sheet,
    read_raw_rows,
)
from harvester.models.row_data import RawRow


def _make_excel(path: Path, sheets: dict[str, list[list[object]]]) -> Path:
    with pd.ExcelWriter(path) as writer:
        for sheet, rows in sheets.items():
            pd.DataFrame(rows).to_excel(writer, sheet_name=sheet, header=False, index=False)
    return path


def test_read_first_sheet_keeps_header_row(make_workbook):
    excel = make_workbook([["GTIN", "Pharmacode"], ["7680000000011", 1234567]])
    df = read_first_sheet(excel)
    assert df.shape == (2, 2)
    assert df.iloc[0, 0] == "GTIN"


def test_iter_raw_rows_returns_typed_cells(make_workbook):
    excel = make_workbook(
        [
            ["GTIN", "Pharmacode"],
            ["7680000000011", 1234567],
            [None, 7.9],
            ["7680000000028", None],
        ]
    )
    rows = list(iter_raw_rows(read_first_sheet(excel), 0, 1))
    assert rows[0] == RawRow(0, "GTIN", "Pharmacode")
    assert rows[1] == RawRow(1, "7680000000011", 1234567)
    assert rows[2].gtin is None
    assert rows[2].pharmacode == pytest.approx(7.9)
    assert rows[3].pharmacode is None


def test_column_outside_sheet_width_yields_absent_cells(make_workbook):
    excel = make_workbook([["GTIN"], ["7680000000011"]])
    rows = read_raw_rows(excel, 0, 5)
    assert [r.pharmacode for r in rows] == [None, None]


def test_negative_column_is_rejected(make_workbook):
    excel = make_workbook([["GTIN", "Pharmacode"]])
    with pytest.raises(ValueError):
        read_raw_rows(excel, -1, 1)


def test_na_text_is_kept_as_text(make_workbook):
    excel = make_workbook([["GTIN", "Pharmacode"], ["NA", "null"]])
    rows = read_raw_rows(excel, 0, 1)
    assert rows[1] == RawRow(1, "NA", "null")


def test_only_first_sheet_is_read(temp_workdir: Path):
    excel = _make_excel(
        temp_workdir / "data" / "multi.xlsx",
        {
            "First": [["GTIN", "PHAR"], ["111", 1]],
            "Second": [["GTIN", "PHAR"], ["222", 2], ["333", 3]],
        },
    )
    rows = read_raw_rows(excel, 0, 1)
    assert [r.gtin for r in rows] == ["GTIN", "111"]


def test_missing_file_raises_file_not_found(temp_workdir: Path):
    with pytest.raises(FileNotFoundError):
        read_first_sheet(temp_workdir / "data" / "missing.xlsx")


def test_corrupt_file_raises_workbook_read_error(temp_workdir: Path):
    broken = temp_workdir / "data" / "broken.xlsx"
    broken.write_bytes(b"this is not a workbook")
    with pytest.raises(WorkbookReadError) as e:
        read_first_sheet(broken)
    assert isinstance(e.value, OSError)

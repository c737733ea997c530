# Shared pytest fixtures
from __future__ import annotations
import tempfile
from collections.abc import Callable
from pathlib import Path

import pandas as pd
import pytest

from harvester.logging.init import reset_logging


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        monkeypatch.chdir(p)
        for name in (
            "HARVESTER_INPUT_PATH",
            "HARVESTER_GTIN_COLUMN",
            "HARVESTER_PHARMACODE_COLUMN",
            "HARVESTER_OUTPUT_DIRECTORY",
        ):
            # empty values read as unset; restored after the test even if .env overrides them
            monkeypatch.setenv(name, "")
        yield p


@pytest.fixture(autouse=True)
def clean_logging():
    reset_logging()
    yield
    reset_logging()


def write_workbook(path: Path, sheets: dict[str, list[list[object]]]) -> Path:
    """Write rows as-is (no header/index added by pandas) into a workbook."""
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        for sheet, rows in sheets.items():
            pd.DataFrame(rows).to_excel(writer, sheet_name=sheet, header=False, index=False)
    return path


@pytest.fixture()
def make_workbook(temp_workdir: Path) -> Callable[..., Path]:
    def _make(rows: list[list[object]], name: str = "articles.xlsx", **extra_sheets) -> Path:
        sheets = {"Articles": rows}
        sheets.update(extra_sheets)
        return write_workbook(temp_workdir / "data" / name, sheets)
    return _make


@pytest.fixture()
def sample_rows() -> list[list[object]]:
    # columns: article, GTIN, pharmacode
    return [
        ["Article", "GTIN", "Pharmacode"],
        ["a1", "7680000000011", 1234567],
        ["a2", "7680000000028  7680000000035", 2345678],
        ["a3", None, 3456789],
        ["a4", "7680000000042", None],
        ["a5", "7680000000059", "n/a"],
        ["a6", "7680000000011", 9999999],
        ["a7", "7680000000066", 7.9],
        ["a8", "7680000000073", -5],
    ]


@pytest.fixture()
def sample_config_yaml() -> str:
    return """input_path: ./data/articles.xlsx
gtin_column: 1
pharmacode_column: 2
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "harvester.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg

from __future__ import annotations

import os
import re
from pathlib import Path

import pytest

from harvester.services.writer import DELIMITER, FILE_NAME_SUFFIX, build_output_path, write_mapping

LINE_PATTERN = re.compile(r"^[^,]+,[0-9]+$")


def test_write_mapping_round_trip(tmp_path: Path):
    mapping = {f"76800000{i:05d}": str(i * 7) for i in range(50)}
    path, count = write_mapping(mapping, tmp_path)

    assert count == 50
    lines = path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 50
    assert all(LINE_PATTERN.match(line) for line in lines)
    assert dict(line.split(DELIMITER) for line in lines) == mapping


def test_write_mapping_preserves_iteration_order(tmp_path: Path):
    mapping = {"3": "1", "1": "2", "2": "3"}
    path, _ = write_mapping(mapping, tmp_path)
    assert path.read_text(encoding="utf-8").splitlines() == ["3,1", "1,2", "2,3"]


def test_write_mapping_uses_platform_newline(tmp_path: Path):
    path, _ = write_mapping({"A": "1", "B": "2"}, tmp_path)
    expected = f"A,1{os.linesep}B,2{os.linesep}".encode()
    assert path.read_bytes() == expected


def test_write_empty_mapping_creates_empty_file(tmp_path: Path):
    path, count = write_mapping({}, tmp_path)
    assert count == 0
    assert path.exists()
    assert path.read_bytes() == b""


def test_output_file_name_is_timestamped(tmp_path: Path):
    path, _ = write_mapping({"A": "1"}, tmp_path, timestamp_ms=1700000000123)
    assert path.name == "1700000000123_pharmacode.csv"
    assert path.parent == tmp_path.resolve()


def test_default_output_name_uses_millisecond_timestamp(tmp_path: Path):
    path = build_output_path(tmp_path)
    assert re.fullmatch(r"\d{13,}" + re.escape(FILE_NAME_SUFFIX), path.name)


def test_write_mapping_missing_directory_raises(tmp_path: Path):
    with pytest.raises(OSError):
        write_mapping({"A": "1"}, tmp_path / "does_not_exist")


def test_write_mapping_overwrites_existing_file(tmp_path: Path):
    existing = tmp_path / "42_pharmacode.csv"
    existing.write_text("stale\n", encoding="utf-8")
    path, _ = write_mapping({"A": "1"}, tmp_path, timestamp_ms=42)
    assert path.read_text(encoding="utf-8").splitlines() == ["A,1"]

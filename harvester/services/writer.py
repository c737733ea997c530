from __future__ import annotations

import logging
import time
from collections.abc import Mapping
from pathlib import Path

"""Mapping writer.

Writes one ``GTIN,PharmaCode`` line per mapping entry, in the mapping's
iteration order, without header. The file is named after the current time in
milliseconds so repeated runs into the same directory do not collide.
"""

__all__ = [
    "DELIMITER",
    "FILE_NAME_SUFFIX",
    "build_output_path",
    "write_mapping",
]

DELIMITER = ","
FILE_NAME_SUFFIX = "_pharmacode.csv"

logger = logging.getLogger(__name__)


def build_output_path(destination_directory: Path, timestamp_ms: int | None = None) -> Path:
    """Return ``<destination>/<timestamp_ms>_pharmacode.csv``."""
    if timestamp_ms is None:
        timestamp_ms = time.time_ns() // 1_000_000
    return Path(destination_directory) / f"{timestamp_ms}{FILE_NAME_SUFFIX}"


def write_mapping(
    mapping: Mapping[str, str],
    destination_directory: Path,
    *,
    timestamp_ms: int | None = None,
) -> tuple[Path, int]:
    """Serialize ``mapping`` into a new file inside ``destination_directory``.

    Lines end with the platform newline (text mode translation).

    Returns:
        tuple: (resolved output path, number of lines written)

    Raises:
        OSError: the directory does not exist or is not writable
    """
    path = build_output_path(destination_directory, timestamp_ms)
    count = 0
    with path.open("w", encoding="utf-8") as fh:
        for key, value in mapping.items():
            fh.write(f"{key}{DELIMITER}{value}\n")
            count += 1
    logger.debug(f"wrote {count} lines to {path}")
    return path.resolve(), count

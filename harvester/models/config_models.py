from __future__ import annotations

from dataclasses import dataclass, fields, replace

"""Config dataclass for the PharmaCode harvester.

The same dataclass is used for every configuration layer (command line,
environment, YAML file). Unset values stay ``None`` so layers can be merged.
"""


@dataclass(frozen=True)
class HarvesterConfig:
    """Run parameters for one harvest.

    ``input_path``, ``gtin_column`` and ``pharmacode_column`` are the three
    parameters a run cannot do without. ``output_directory`` defaults to the
    directory of the input file.
    """
    input_path: str | None = None  # spreadsheet to read
    gtin_column: int | None = None  # zero-based column index
    pharmacode_column: int | None = None  # zero-based column index
    output_directory: str | None = None

    @property
    def is_complete(self) -> bool:
        return (
            bool(self.input_path)
            and self.gtin_column is not None
            and self.pharmacode_column is not None
        )

    def overlay(self, other: HarvesterConfig) -> HarvesterConfig:
        """Return a copy where every value set on ``other`` wins."""
        changes = {
            f.name: getattr(other, f.name)
            for f in fields(other)
            if getattr(other, f.name) is not None
        }
        return replace(self, **changes)

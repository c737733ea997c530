#!/usr/bin/env python3
"""Sample workbook generation script.

Generates a synthetic GTIN / PharmaCode workbook in the layout the harvester
expects:
- Row 1: Header row
- Row 2+: Data rows

A share of the rows carries the usual irregularities of real exports: cells
holding two GTINs separated by a double space, blank GTINs, missing or
textual PharmaCodes and repeated GTINs.
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

import numpy as np
import pandas as pd

HEADER = ["Article", "GTIN", "Pharmacode", "Description"]


def _gtin(rng: np.random.Generator) -> str:
    return "76" + "".join(str(d) for d in rng.integers(0, 10, 11))


def generate_sample_data(rows: int, seed: int = 42, dirty_ratio: float = 0.1) -> pd.DataFrame:
    """Generate a DataFrame with article, GTIN, PharmaCode and description columns.

    Args:
        rows: Number of data rows
        seed: Random seed for reproducible data
        dirty_ratio: Share of rows receiving an irregular GTIN or PharmaCode
    """
    rng = np.random.default_rng(seed)
    gtins: list[object] = []
    pharmacodes: list[object] = []

    for i in range(rows):
        gtin: object = _gtin(rng)
        pharmacode: object = int(rng.integers(1_000_000, 9_999_999))
        if rng.random() < dirty_ratio:
            kind = rng.integers(0, 5)
            if kind == 0:
                gtin = f"{gtin}  {_gtin(rng)}"
            elif kind == 1:
                gtin = None
            elif kind == 2:
                pharmacode = None
            elif kind == 3:
                pharmacode = "n/a"
            elif gtins:
                # repeat an earlier GTIN with a new code
                gtin = gtins[int(rng.integers(0, len(gtins)))]
        gtins.append(gtin)
        pharmacodes.append(pharmacode)

    return pd.DataFrame(
        {
            "Article": [f"ART-{i + 1:06d}" for i in range(rows)],
            "GTIN": gtins,
            "Pharmacode": pharmacodes,
            "Description": [f"Sample article {i + 1}" for i in range(rows)],
        }
    )


def create_workbook(output_path: Path, rows: int, seed: int = 42, dirty_ratio: float = 0.1) -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    df = generate_sample_data(rows, seed, dirty_ratio)
    with pd.ExcelWriter(output_path, engine="openpyxl") as writer:
        df.to_excel(writer, sheet_name="Articles", header=HEADER, index=False)

    print(f"Created workbook: {output_path}")
    print(f"  Rows: {rows} (+ 1 header row)")
    print(f"  GTIN column: {HEADER.index('GTIN')}  PharmaCode column: {HEADER.index('Pharmacode')}")


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Generate a synthetic GTIN / PharmaCode workbook",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Generate default 10k rows
  %(prog)s sample.xlsx

  # Clean data only
  %(prog)s clean.xlsx --rows 500 --dirty-ratio 0
        """,
    )
    parser.add_argument("output", type=Path, help="Output workbook path")
    parser.add_argument("--rows", type=int, default=10_000, help="Number of data rows (default: 10,000)")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    parser.add_argument(
        "--dirty-ratio",
        type=float,
        default=0.1,
        help="Share of irregular rows between 0 and 1 (default: 0.1)",
    )
    args = parser.parse_args()

    if args.rows <= 0:
        print("Error: --rows must be positive", file=sys.stderr)
        return 1
    if not 0 <= args.dirty_ratio <= 1:
        print("Error: --dirty-ratio must be between 0 and 1", file=sys.stderr)
        return 1

    try:
        create_workbook(args.output, args.rows, args.seed, args.dirty_ratio)
    except OSError as e:
        print(f"\nError generating workbook: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

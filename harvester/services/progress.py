from __future__ import annotations

import sys
from collections.abc import Iterable, Iterator
from typing import Any, TypeVar

from tqdm import tqdm
from tqdm.std import tqdm as TqdmType

"""Row progress display with tqdm (TTY only).

A single tqdm bar is shown while the sheet rows are extracted. In non-TTY
environments (CI, redirected output) no bar is created so the log stays free
of control sequences.
"""

__all__ = [
    "ProgressTracker",
    "is_tty_enabled",
]

T = TypeVar("T")


def is_tty_enabled() -> bool:
    """Return True if stdout is a TTY and progress should be displayed."""
    return sys.stdout.isatty()


class ProgressTracker:
    """Progress tracker over the rows of one sheet."""

    def __init__(self, total_rows: int, *, description: str = "Harvesting rows") -> None:
        self.total_rows = total_rows
        self.description = description
        self.processed_rows = 0

        self.enabled = is_tty_enabled()
        self.pbar: TqdmType[Any] | None
        if self.enabled:
            self.pbar = tqdm(
                total=total_rows,
                desc=description,
                unit="row",
                disable=False,
                leave=False,
                position=0,
                ncols=80,
                ascii=True,
            )
        else:
            self.pbar = None

    def advance(self, rows: int = 1) -> None:
        self.processed_rows += rows
        if self.enabled and self.pbar is not None:
            self.pbar.update(rows)

    def track(self, items: Iterable[T]) -> Iterator[T]:
        """Yield ``items`` unchanged, advancing the bar for each one."""
        for item in items:
            yield item
            self.advance()

    def close(self) -> None:
        if self.enabled and self.pbar is not None:
            self.pbar.close()
            self.pbar = None

    def __enter__(self) -> ProgressTracker:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

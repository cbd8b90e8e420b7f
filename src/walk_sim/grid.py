from __future__ import annotations

import numpy as np


class VisitedGrid:
    """
    Square visited/free map of side n, indexed as (row, col).

    Cells hold 0 (free) or 1 (visited). Out-of-range coordinates are a
    caller error and raise IndexError; negative indices are never wrapped.
    """

    def __init__(self, n: int) -> None:
        if n < 1:
            raise ValueError(f"Grid size must be >= 1, got {n}")
        self.n = int(n)
        self._cells = np.zeros((self.n, self.n), dtype=np.uint8)

    @property
    def cells(self) -> np.ndarray:
        return self._cells

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.n and 0 <= col < self.n

    def _check(self, row: int, col: int) -> None:
        if not self.in_bounds(row, col):
            raise IndexError(
                f"Cell ({row}, {col}) outside {self.n}x{self.n} grid"
            )

    def mark_visited(self, row: int, col: int) -> None:
        self._check(row, col)
        self._cells[row, col] = 1

    def is_visited(self, row: int, col: int) -> bool:
        self._check(row, col)
        return bool(self._cells[row, col])

    def visited_count(self) -> int:
        return int(np.count_nonzero(self._cells))

    def copy_cells(self) -> np.ndarray:
        return self._cells.copy()

    def __repr__(self) -> str:
        return f"VisitedGrid(n={self.n}, visited={self.visited_count()})"

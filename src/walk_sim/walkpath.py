from __future__ import annotations

from typing import Iterator, List, Tuple

import numpy as np

Point = Tuple[float, float]


class WalkPath:
    """Append-only record of walker positions, scaled to pixels."""

    def __init__(self, step: float) -> None:
        self.step = float(step)
        self._points: List[Point] = []

    def record(self, x: int, y: int) -> Point:
        point = (x * self.step, y * self.step)
        self._points.append(point)
        return point

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[Point]:
        return iter(self._points)

    @property
    def last(self) -> Point | None:
        return self._points[-1] if self._points else None

    def points(self) -> np.ndarray:
        """(K, 2) float array of recorded pixel positions."""
        if not self._points:
            return np.empty((0, 2), dtype=np.float64)
        return np.asarray(self._points, dtype=np.float64)

    def segments(self) -> List[Tuple[Point, Point]]:
        """Consecutive point pairs, one per connecting line."""
        return list(zip(self._points[:-1], self._points[1:]))

"""
Self-avoiding grid walker.

A single walker moves on an N x N grid one cell per step, choosing uniformly
among the neighbouring cells it has not visited yet. Once every neighbour is
visited (or lies outside the legal range) the walker stops for good.

Coordinates:
    x is the column and y is the row, so the walker's cell is grid[y, x].
    Both coordinates stay inside the legal range [1, N-1]; row/column 0 is
    never entered.
"""

from __future__ import annotations

from enum import Enum, IntEnum
from typing import List, Optional, Tuple

import numpy as np
from numba import njit

from . import utils
from .config import WalkConfig
from .grid import VisitedGrid

###############################################################################
# Constants
###############################################################################

# (dx, dy) per direction, indexed by Direction
DIRECTION_DELTAS = np.array(
    [
        [-1, 0],  # left
        [0, -1],  # up
        [1, 0],  # right
        [0, 1],  # down
    ],
    dtype=np.int64,
)
DIRECTION_COUNT = DIRECTION_DELTAS.shape[0]

LOWER_BOUND = 1  # smallest legal coordinate

BLOCKED = 1
FREE = 0


class Direction(IntEnum):
    LEFT = 0
    UP = 1
    RIGHT = 2
    DOWN = 3

    @property
    def delta(self) -> Tuple[int, int]:
        dx, dy = DIRECTION_DELTAS[int(self)]
        return int(dx), int(dy)


class WalkerState(Enum):
    WALKING = "walking"
    STOPPED = "stopped"


###############################################################################
# Kernel
###############################################################################


@njit(cache=True)
def _free_flags(cells: np.ndarray, row: int, col: int, lo: int, hi: int) -> np.ndarray:
    """
    Blocked/free flag per direction for the cell (row, col).

    A direction is free (0) only when its destination lies in [lo, hi] on
    both axes and has not been visited; everything else is blocked (1).
    """
    flags = np.ones(DIRECTION_COUNT, dtype=np.int64)
    for d in range(DIRECTION_COUNT):
        nc = col + DIRECTION_DELTAS[d, 0]
        nr = row + DIRECTION_DELTAS[d, 1]
        if nr >= lo and nr <= hi and nc >= lo and nc <= hi:
            flags[d] = cells[nr, nc]
    return flags


###############################################################################
# Walker
###############################################################################


class Walker:
    """
    Owns the visited grid and the current position.

    Responsibilities:
    1. Pick the start cell and mark it visited.
    2. Report which directions are free.
    3. Step in a uniformly chosen free direction, or stop when boxed in.
    """

    def __init__(
        self,
        config: WalkConfig | None = None,
        *,
        rng: Optional[np.random.Generator] = None,
        start: Optional[Tuple[int, int]] = None,
    ) -> None:
        self.config = (config or WalkConfig()).validate()
        n = self.config.grid_size

        # One generator for the walker's lifetime
        self.rng = rng if rng is not None else utils.make_rng(self.config.seed)

        self._grid = VisitedGrid(n)
        self._upper = n - 1

        if start is None:
            x = int(self.rng.integers(LOWER_BOUND, n))
            y = int(self.rng.integers(LOWER_BOUND, n))
        else:
            x, y = (int(v) for v in start)
            if not (self._in_range(x) and self._in_range(y)):
                raise ValueError(
                    f"Start {start} outside legal range [{LOWER_BOUND}, {self._upper}]"
                )
        self.x = x
        self.y = y
        self.state = WalkerState.WALKING
        self.steps = 0
        self._grid.mark_visited(self.y, self.x)

    # ------------------------------------------------------------------ state
    @property
    def grid(self) -> VisitedGrid:
        return self._grid

    @property
    def grid_size(self) -> int:
        return self._grid.n

    @property
    def position(self) -> Tuple[int, int]:
        return self.x, self.y

    @property
    def stopped(self) -> bool:
        return self.state is WalkerState.STOPPED

    def _in_range(self, v: int) -> bool:
        return LOWER_BOUND <= v <= self._upper

    # ------------------------------------------------------------------ checks
    def check_free_step(self, row: int, col: int) -> Tuple[int, int, int, int]:
        """
        Flags (left, up, right, down) for the cell (row, col): 1 blocked, 0 free.
        """
        if not self._grid.in_bounds(row, col):
            raise IndexError(
                f"Cell ({row}, {col}) outside {self.grid_size}x{self.grid_size} grid"
            )
        flags = _free_flags(self._grid.cells, row, col, LOWER_BOUND, self._upper)
        return tuple(int(f) for f in flags)

    def free_directions(self) -> List[Direction]:
        flags = self.check_free_step(self.y, self.x)
        return [Direction(d) for d, flag in enumerate(flags) if flag == FREE]

    # ------------------------------------------------------------------ public
    def move(self) -> bool:
        """
        Take one step. Returns True when the position changed.

        With no free direction left the walker enters the STOPPED state and
        every later call is a no-op.
        """
        if self.stopped:
            return False

        free = self.free_directions()
        if not free:
            self.state = WalkerState.STOPPED
            if self.config.verbose:
                print(f"[walk] Game Over after {self.steps} steps at {self.position}")
            return False

        direction = free[int(self.rng.integers(len(free)))]
        self._grid.mark_visited(self.y, self.x)

        dx, dy = direction.delta
        nx, ny = self.x + dx, self.y + dy
        if not (self._in_range(nx) and self._in_range(ny)):
            return False
        self.x, self.y = nx, ny
        self.steps += 1
        return True

    def __repr__(self) -> str:
        return (
            f"Walker(position={self.position}, state={self.state.value}, "
            f"steps={self.steps}, grid={self.grid_size})"
        )

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Dict, Optional, Tuple

Color = Tuple[int, int, int]

###############################################################################
# Defaults (window and walk constants)
###############################################################################

WIDTH = 800
HEIGHT = 800
STEP = 10.0
DT = 1.0  # kept for metadata, movement does not use it
FRAME_DELAY = 0.005

BLACK: Color = (0, 0, 0)
WHITE: Color = (255, 255, 255)
PINK: Color = (245, 5, 150)


@dataclass
class WalkConfig:
    """Startup constants for the window, the grid and the walker."""
    width: int = WIDTH
    height: int = HEIGHT
    step: float = STEP
    dt: float = DT
    seed: Optional[int] = None
    title: str = "Random-walk"
    frame_delay: float = FRAME_DELAY
    point_radius: float = 1.0
    line_width: int = 1
    background_color: Color = BLACK
    point_color: Color = WHITE
    line_color: Color = PINK
    exit_on_stop: bool = False
    max_ticks: Optional[int] = None
    verbose: bool = True

    @property
    def grid_size(self) -> int:
        """Cells per side: floor(width / step)."""
        return int(self.width // self.step)

    def validate(self) -> "WalkConfig":
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Window size must be positive, got {self.width}x{self.height}"
            )
        if self.step <= 0:
            raise ValueError(f"step must be positive, got {self.step}")
        if self.grid_size < 2:
            raise ValueError(
                f"Grid needs at least 2 cells per side, got {self.grid_size} "
                f"(width={self.width}, step={self.step})"
            )
        if self.frame_delay < 0:
            raise ValueError(f"frame_delay must be >= 0, got {self.frame_delay}")
        if self.max_ticks is not None and self.max_ticks < 0:
            raise ValueError(f"max_ticks must be >= 0, got {self.max_ticks}")
        return self

    @classmethod
    def from_dict(cls, params: Dict[str, Any] | None = None) -> "WalkConfig":
        """
        Build a config from a plain dict (e.g. the output of utils.load_params).
        Colours given as lists are converted to tuples.
        """
        params = dict(params or {})
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(params) - known)
        if unknown:
            raise ValueError(f"Unknown config keys: {', '.join(unknown)}")
        for key in ("background_color", "point_color", "line_color"):
            if key in params:
                params[key] = tuple(int(c) for c in params[key])
        return cls(**params).validate()

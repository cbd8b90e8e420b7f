"""
Self-Avoiding Walk Simulation Library

This package animates a single walker on a bounded square grid:
- Walker: steps to unvisited neighbours and stops when boxed in
- VisitedGrid: the walker's visited/free map
- RenderDriver: per-frame loop recording and drawing the walker's path
"""

from .config import WalkConfig
from .grid import VisitedGrid
from .walker import Direction, Walker, WalkerState
from .walkpath import WalkPath
from .render import PygameCanvas, RenderDriver, run_headless
from . import utils

__all__ = [
    # Simulation
    "Walker",
    "VisitedGrid",
    "Direction",
    "WalkerState",
    "WalkPath",
    # Rendering
    "RenderDriver",
    "PygameCanvas",
    "run_headless",
    # Configuration
    "WalkConfig",
    # Utilities
    "utils",
]

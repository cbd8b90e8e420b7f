"""
Drawing boundary and per-frame driver.

The driver owns the recorded path and polls the walker once per frame. The
window itself sits behind the small Canvas protocol so that the loop can run
against pygame or against any object exposing the same five calls.
"""

from __future__ import annotations

import time
from typing import Any, Dict, Optional, Protocol, Sequence

import pygame

from . import utils
from .config import Color, WalkConfig
from .walker import Walker
from .walkpath import WalkPath


class Canvas(Protocol):
    def clear(self, color: Color) -> None: ...

    def circle(self, center: Sequence[float], radius: float, color: Color) -> None: ...

    def line(
        self, start: Sequence[float], end: Sequence[float], color: Color, width: int
    ) -> None: ...

    def present(self) -> None: ...

    def close_requested(self) -> bool: ...


###############################################################################
# pygame window
###############################################################################


class PygameCanvas:
    """
    A pygame window as a scoped resource.

        with PygameCanvas(800, 800, "Random-walk") as canvas:
            ...

    The window exists between open() and close(); drawing outside that span
    raises RuntimeError.
    """

    def __init__(self, width: int, height: int, title: str = "Random-walk") -> None:
        self.width = int(width)
        self.height = int(height)
        self.title = title
        self.screen: Optional[pygame.Surface] = None
        self._close_requested = False

    @property
    def is_open(self) -> bool:
        return self.screen is not None

    def open(self) -> "PygameCanvas":
        if self.screen is None:
            pygame.init()
            try:
                self.screen = pygame.display.set_mode((self.width, self.height))
                pygame.display.set_caption(self.title)
            except BaseException:
                self.screen = None
                pygame.quit()
                raise
            self._close_requested = False
        return self

    def close(self) -> None:
        if self.screen is not None:
            self.screen = None
            pygame.quit()

    def __enter__(self) -> "PygameCanvas":
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _surface(self) -> pygame.Surface:
        if self.screen is None:
            raise RuntimeError("Canvas is not open. Call open() first.")
        return self.screen

    def clear(self, color: Color) -> None:
        self._surface().fill(color)

    def circle(self, center: Sequence[float], radius: float, color: Color) -> None:
        pygame.draw.circle(self._surface(), color, center, radius)

    def line(
        self, start: Sequence[float], end: Sequence[float], color: Color, width: int
    ) -> None:
        pygame.draw.line(self._surface(), color, start, end, width)

    def present(self) -> None:
        self._surface()
        pygame.display.flip()

    def close_requested(self) -> bool:
        self._surface()
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._close_requested = True
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                self._close_requested = True
        return self._close_requested


###############################################################################
# Driver
###############################################################################


def walk_meta(walker: Walker, config: WalkConfig, **extra: Any) -> Dict[str, Any]:
    meta = {
        "model": "self_avoiding_walk",
        "grid_size": walker.grid_size,
        "step": float(config.step),
        "dt": float(config.dt),
        "seed": config.seed,
        "steps": int(walker.steps),
        "stopped": bool(walker.stopped),
        "final_position": walker.position,
        "visited": walker.grid.visited_count(),
    }
    meta.update(extra)
    return meta


class RenderDriver:
    """
    Per-frame loop: advance the walker, record its position, draw the path.

    The path is seeded with the start position, so after K successful ticks
    it holds K + 1 points.
    """

    def __init__(
        self,
        walker: Walker,
        canvas: Optional[Canvas] = None,
        config: WalkConfig | None = None,
    ) -> None:
        self.walker = walker
        self.canvas = canvas
        self.config = config or walker.config
        self.path = WalkPath(self.config.step)
        self.path.record(*walker.position)
        self.ticks = 0

    def tick(self) -> bool:
        """Advance the walker once. Returns True when it moved."""
        self.ticks += 1
        if self.walker.stopped:
            return False
        moved = self.walker.move()
        if moved:
            self.path.record(*self.walker.position)
        return moved

    def draw(self) -> None:
        if self.canvas is None:
            raise RuntimeError("No canvas attached; use run_headless() instead.")
        cfg = self.config
        self.canvas.clear(cfg.background_color)
        for start, end in self.path.segments():
            self.canvas.line(start, end, cfg.line_color, cfg.line_width)
        for point in self.path:
            self.canvas.circle(point, cfg.point_radius, cfg.point_color)
        self.canvas.present()

    def tick_limit_reached(self) -> bool:
        return self.config.max_ticks is not None and self.ticks >= self.config.max_ticks

    def should_stop(self) -> bool:
        if self.canvas is not None and self.canvas.close_requested():
            return True
        if self.walker.stopped and self.config.exit_on_stop:
            return True
        return self.tick_limit_reached()

    def result(self, elapsed: float | None = None) -> utils.WalkResult:
        meta = walk_meta(self.walker, self.config, ticks=self.ticks)
        if elapsed is not None:
            meta["time_elapsed"] = elapsed
        return utils.WalkResult(
            visited=self.walker.grid.copy_cells(),
            positions=self.path.points(),
            meta=meta,
        )

    def run(self) -> utils.WalkResult:
        """Run frames until the window closes or a stop condition holds."""
        start_time = time.time()
        while not self.should_stop():
            self.tick()
            self.draw()
            if self.config.frame_delay > 0:
                time.sleep(self.config.frame_delay)
        return self.result(time.time() - start_time)


def run_headless(
    walker: Walker | None = None, config: WalkConfig | None = None
) -> utils.WalkResult:
    """
    Tick without a window until the walker stops or max_ticks is reached.
    """
    config = config or (walker.config if walker is not None else WalkConfig())
    walker = walker or Walker(config)
    driver = RenderDriver(walker, None, config)
    start_time = time.time()
    while not walker.stopped and not driver.tick_limit_reached():
        driver.tick()
    elapsed = time.time() - start_time
    if config.verbose:
        print(
            f"[walk] {walker.steps} steps in {driver.ticks} ticks, "
            f"{walker.grid.visited_count()} cells visited, elapsed={elapsed:.3f}s"
        )
    return driver.result(elapsed)

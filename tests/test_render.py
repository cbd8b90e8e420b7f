"""
Tests for the path record and the per-frame driver.
"""

import numpy as np
import pytest

from walk_sim import PygameCanvas, RenderDriver, WalkConfig, WalkPath, Walker, run_headless


class RecordingCanvas:
    """Canvas stand-in that records draw calls."""

    def __init__(self, close_after=None):
        self.close_after = close_after
        self.polls = 0
        self.clears = []
        self.circles = []
        self.lines = []
        self.frames = 0

    def clear(self, color):
        self.clears.append(color)
        self.circles.clear()
        self.lines.clear()

    def circle(self, center, radius, color):
        self.circles.append((tuple(center), radius, color))

    def line(self, start, end, color, width):
        self.lines.append((tuple(start), tuple(end), color, width))

    def present(self):
        self.frames += 1

    def close_requested(self):
        self.polls += 1
        return self.close_after is not None and self.polls >= self.close_after


def small_config(n=10, **kwargs):
    params = dict(width=n * 10, height=n * 10, step=10.0, seed=0, frame_delay=0.0, verbose=False)
    params.update(kwargs)
    return WalkConfig(**params)


def test_walkpath_scales_and_pairs():
    path = WalkPath(step=10.0)
    assert path.last is None
    assert path.points().shape == (0, 2)
    path.record(1, 2)
    path.record(2, 2)
    path.record(2, 3)
    assert len(path) == 3
    assert list(path) == [(10.0, 20.0), (20.0, 20.0), (20.0, 30.0)]
    assert path.segments() == [((10.0, 20.0), (20.0, 20.0)), ((20.0, 20.0), (20.0, 30.0))]
    assert path.last == (20.0, 30.0)
    assert np.allclose(path.points(), [[10, 20], [20, 20], [20, 30]])


def test_path_grows_one_point_per_successful_tick():
    config = small_config()
    walker = Walker(config)
    driver = RenderDriver(walker, RecordingCanvas(), config)
    assert len(driver.path) == 1
    assert driver.path.last == (walker.x * 10.0, walker.y * 10.0)

    moves = 0
    while not walker.stopped and moves < 20:
        if driver.tick():
            moves += 1
        assert len(driver.path) == moves + 1
    assert driver.path.last == (walker.x * 10.0, walker.y * 10.0)


def test_tick_after_stop_records_nothing():
    config = small_config(5)
    walker = Walker(config, start=(2, 2))
    for row, col in [(1, 2), (3, 2), (2, 1), (2, 3)]:
        walker.grid.mark_visited(row, col)
    driver = RenderDriver(walker, RecordingCanvas(), config)
    assert driver.tick() is False
    assert driver.tick() is False
    assert walker.stopped
    assert len(driver.path) == 1


def test_draw_issues_points_and_segments():
    config = small_config()
    canvas = RecordingCanvas()
    driver = RenderDriver(Walker(config), canvas, config)
    for _ in range(4):
        driver.tick()
    driver.draw()

    k = len(driver.path)
    assert canvas.clears == [config.background_color]
    assert len(canvas.circles) == k
    assert len(canvas.lines) == k - 1
    assert canvas.frames == 1
    assert all(c[2] == config.point_color and c[1] == config.point_radius for c in canvas.circles)
    assert all(l[2] == config.line_color for l in canvas.lines)


def test_draw_without_canvas_raises():
    config = small_config()
    driver = RenderDriver(Walker(config), None, config)
    with pytest.raises(RuntimeError):
        driver.draw()


def test_run_ends_on_close_request():
    config = small_config()
    canvas = RecordingCanvas(close_after=3)
    result = RenderDriver(Walker(config), canvas, config).run()
    assert canvas.frames == 2
    assert result.meta["ticks"] == 2


def test_run_ends_when_walker_stops_if_configured():
    config = small_config(4, exit_on_stop=True)
    canvas = RecordingCanvas()
    result = RenderDriver(Walker(config), canvas, config).run()
    assert result.meta["stopped"]
    assert result.num_points == result.meta["steps"] + 1
    assert result.visited.shape == (4, 4)


def test_run_keeps_drawing_frozen_path_after_stop():
    config = small_config(4, max_ticks=60)
    canvas = RecordingCanvas()
    driver = RenderDriver(Walker(config), canvas, config)
    result = driver.run()
    assert driver.walker.stopped
    assert result.meta["ticks"] == 60
    assert canvas.frames == 60
    assert len(canvas.circles) == len(driver.path)


def test_run_headless_until_stopped():
    config = small_config(6, seed=5)
    result = run_headless(config=config)
    meta = result.meta
    assert meta["stopped"]
    assert meta["grid_size"] == 6
    assert result.positions.shape == (meta["steps"] + 1, 2)
    assert result.visited.shape == (6, 6)
    assert "time_elapsed" in meta


def test_run_headless_respects_max_ticks():
    config = small_config(20, max_ticks=5)
    result = run_headless(config=config)
    assert result.meta["ticks"] <= 5
    assert result.num_points <= 6


def test_pygame_canvas_lifecycle(monkeypatch):
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    canvas = PygameCanvas(40, 40, "test")
    with pytest.raises(RuntimeError):
        canvas.clear((0, 0, 0))

    with canvas:
        assert canvas.is_open
        canvas.clear((0, 0, 0))
        canvas.line((0.0, 0.0), (10.0, 10.0), (245, 5, 150), 1)
        canvas.circle((10.0, 10.0), 1.0, (255, 255, 255))
        canvas.present()
        assert canvas.close_requested() is False
        assert tuple(canvas.screen.get_at((5, 5)))[:3] == (245, 5, 150)

    assert not canvas.is_open
    with pytest.raises(RuntimeError):
        canvas.present()


def test_pygame_canvas_releases_pygame_when_window_fails(monkeypatch):
    import pygame

    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")

    def broken_set_mode(*args, **kwargs):
        raise pygame.error("no display")

    monkeypatch.setattr(pygame.display, "set_mode", broken_set_mode)
    canvas = PygameCanvas(40, 40, "test")
    with pytest.raises(pygame.error):
        with canvas:
            pass
    assert not canvas.is_open
    assert not pygame.get_init(), "pygame must be shut down after a failed open"


def test_tick_limit_reached():
    config = small_config(max_ticks=2)
    driver = RenderDriver(Walker(config), None, config)
    assert not driver.tick_limit_reached()
    driver.tick()
    driver.tick()
    assert driver.tick_limit_reached()

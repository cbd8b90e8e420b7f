#!/usr/bin/env python3
"""
Self-Avoiding Walk Runner

Opens a window and animates the walk one step per frame, or runs it headless.
Optionally saves the recorded path and visited grid to .npz.
"""

import argparse
import sys
from pathlib import Path

from walk_sim import PygameCanvas, RenderDriver, WalkConfig, Walker, run_headless, utils


def build_config(args: argparse.Namespace) -> WalkConfig:
    """Merge the optional parameter file with command-line overrides."""
    params = utils.load_params(args.config) if args.config else {}
    overrides = {
        "seed": args.seed,
        "width": args.width,
        "height": args.height,
        "step": args.step,
        "max_ticks": args.max_ticks,
    }
    params.update({k: v for k, v in overrides.items() if v is not None})
    if args.exit_on_stop:
        params["exit_on_stop"] = True
    if args.quiet:
        params["verbose"] = False
    return WalkConfig.from_dict(params)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Animate a self-avoiding random walk on a square grid",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--config", type=str, default=None, help="JSON/TOML parameter file")
    parser.add_argument("--seed", type=int, default=None, help="Random seed (default: OS entropy)")
    parser.add_argument("--width", type=int, default=None, help="Window width in pixels")
    parser.add_argument("--height", type=int, default=None, help="Window height in pixels")
    parser.add_argument("--step", type=float, default=None, help="Cell size in pixels")
    parser.add_argument("--max-ticks", type=int, default=None, help="Stop after this many ticks")
    parser.add_argument(
        "--exit-on-stop",
        action="store_true",
        help="Close the window once the walker is boxed in",
    )
    parser.add_argument("--headless", action="store_true", help="Run without a window")
    parser.add_argument(
        "--out",
        type=str,
        default=None,
        help="Output .npz file path (nothing is saved if not provided)",
    )
    parser.add_argument("--quiet", action="store_true", help="Suppress progress output")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    config = build_config(args)
    walker = Walker(config)

    if config.verbose:
        print(
            f"Running walk: grid={config.grid_size}x{config.grid_size}, "
            f"start={walker.position}, seed={config.seed}"
        )

    if args.headless:
        result = run_headless(walker, config)
    else:
        with PygameCanvas(config.width, config.height, config.title) as canvas:
            result = RenderDriver(walker, canvas, config).run()

    if args.out:
        out = utils.save_walk_result(Path(args.out), result)
        if config.verbose:
            print(f"Output saved to: {out}")

    if config.verbose:
        meta = result.ensure_meta()
        print("\nWalk finished")
        print(f"   Steps taken: {meta['steps']}")
        print(f"   Boxed in: {meta['stopped']}")
        print(f"   Path points: {result.num_points}")

    return 0


if __name__ == "__main__":
    sys.exit(main())

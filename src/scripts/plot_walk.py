# src/scripts/plot_walk.py
import argparse
import os
import sys

import matplotlib.colors as mcolors
import matplotlib.pyplot as plt

from walk_sim import utils
from walk_sim.config import BLACK, PINK, WHITE


def _rgb(color):
    """0-255 RGB tuple -> matplotlib 0-1 tuple."""
    return tuple(c / 255.0 for c in color)


def format_title(meta):
    """
    Format a title string with the main statistics from metadata.
    """
    if not meta:
        return None
    seed = meta.get("seed")
    seed_str = str(seed) if seed is not None else "?"
    n = meta.get("grid_size", "?")
    parts = [f"N={n}", f"steps={meta.get('steps', '?')}", f"seed={seed_str}"]
    if meta.get("stopped"):
        parts.append("boxed in")
    return "  ".join(parts)


def render(result, title=None, output=None, dpi=150, show_visited=True):
    """
    Draw a saved walk: the visited grid as a faint background, the path as
    pink segments with white points on black.

    Args:
        result: WalkResult
        title: Optional title string
        output: Output file path (None to skip saving)
        dpi: DPI for output
        show_visited: Overlay the visited grid
    """
    positions = result.positions
    if positions is None or len(positions) == 0:
        print("No path points to render")
        return None

    meta = result.meta or {}
    step = float(meta.get("step", 1.0))

    fig, ax = plt.subplots(figsize=(6, 6))
    bg_color = _rgb(BLACK)
    fig.patch.set_facecolor(bg_color)
    ax.set_facecolor(bg_color)

    if show_visited and result.visited is not None:
        n = result.visited.shape[0]
        cmap = mcolors.ListedColormap([bg_color, (0.15, 0.15, 0.3)])
        # cell (row, col) is centred on pixel (col*step, row*step)
        half = step / 2.0
        ax.imshow(
            result.visited,
            cmap=cmap,
            vmin=0,
            vmax=1,
            interpolation="nearest",
            extent=(-half, n * step - half, n * step - half, -half),
        )

    ax.plot(positions[:, 0], positions[:, 1], color=_rgb(PINK), linewidth=1.0)
    ax.scatter(positions[:, 0], positions[:, 1], s=2, color=_rgb(WHITE), zorder=3)

    ax.set_aspect("equal")
    if not ax.yaxis_inverted():
        ax.invert_yaxis()
    ax.axis("off")

    if title:
        ax.set_title(title, pad=10, color="white")

    if output:
        os.makedirs(os.path.dirname(output) if os.path.dirname(output) else ".", exist_ok=True)
        plt.savefig(output, dpi=dpi, bbox_inches="tight", pad_inches=0.1, facecolor=bg_color)
        print(f"Saved figure to {output} ({len(positions)} points @ {dpi} DPI)")

    plt.close(fig)
    return output


def main(argv=None):
    parser = argparse.ArgumentParser(description="Plot a saved walk .npz")
    parser.add_argument(
        "file",
        nargs="?",
        default="results/walk.npz",
        help="Path to .npz walk file",
    )
    parser.add_argument("--out", default=None, help="Output image (default: <file>.png)")
    parser.add_argument("--dpi", type=int, default=150, help="Output DPI")
    parser.add_argument("--no-grid", action="store_true", help="Do not draw the visited grid")
    args = parser.parse_args(argv)

    result = utils.load_walk(args.file)
    output = args.out or os.path.splitext(args.file)[0] + ".png"
    render(
        result,
        title=format_title(result.meta),
        output=output,
        dpi=args.dpi,
        show_visited=not args.no_grid,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())

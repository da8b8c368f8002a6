"""Mandelbrot set rendering to RGB PNG images with threaded or rank-interleaved rows."""

from __future__ import annotations

import argparse
import os
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from functools import partial

from .pngwriter import write_rgb_png

ESCAPE_RADIUS_SQUARED = 4.0


@dataclass(frozen=True)
class Region:
    """A rectangle of the complex plane sampled on a ``width`` x ``height`` grid."""

    iters: int
    left: float
    right: float
    lower: float
    upper: float
    width: int
    height: int

    def __post_init__(self) -> None:
        if self.iters < 0:
            raise ValueError(f"iters must not be negative, got {self.iters}")
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"image size must be positive, got {self.width}x{self.height}")

    @property
    def x_offset(self) -> float:
        return (self.right - self.left) / self.width

    @property
    def y_offset(self) -> float:
        return (self.upper - self.lower) / self.height


def escape_count(x0: float, y0: float, iters: int) -> int:
    """Return the iterations taken by ``x0 + i*y0`` to escape, at most ``iters``."""
    x = y = xx = yy = 0.0
    repeats = 0
    length_squared = 0.0
    while repeats < iters and length_squared < ESCAPE_RADIUS_SQUARED:
        xy = x * y
        y = xy + xy + y0
        x = xx - yy + x0
        xx = x * x
        yy = y * y
        length_squared = xx + yy
        repeats += 1
    return repeats


def color(p: int, iters: int) -> tuple[int, int, int]:
    """Map an escape count to an RGB colour; points inside the set are black."""
    if p == iters:
        return (0, 0, 0)
    shade = (p & 15) * 16
    if p & 16:
        return (240, shade, shade)
    return (shade, 0, 0)


def render_row(region: Region, j: int) -> bytes:
    """Return the RGB bytes of grid row ``j`` (row 0 lies at ``region.lower``)."""
    if not 0 <= j < region.height:
        raise ValueError(f"row {j} outside 0..{region.height - 1}")
    y0 = j * region.y_offset + region.lower
    x_offset, left, iters = region.x_offset, region.left, region.iters
    row = bytearray()
    for i in range(region.width):
        row += bytes(color(escape_count(i * x_offset + left, y0, iters), iters))
    return bytes(row)


def render(region: Region, workers: int | None = None) -> list[bytes]:
    """Render every row with a pool of threads; return image rows, top first."""
    if workers is None:
        workers = os.cpu_count() or 1
    if workers <= 0:
        raise ValueError(f"workers must be positive, got {workers}")
    with ThreadPoolExecutor(max_workers=workers) as pool:
        computed = list(pool.map(partial(render_row, region), range(region.height)))
    return computed[::-1]


def row_mapping(height: int, size: int) -> list[int]:
    """For each image row, top first, the index of that row in the gathered buffer.

    Rank ``i`` computes grid rows ``i, i + size, ...`` and the ranks' rows are
    gathered one rank after another.
    """
    if height < 0:
        raise ValueError(f"height must not be negative, got {height}")
    if size <= 0:
        raise ValueError(f"size must be positive, got {size}")
    mapping = [0] * height
    gathered = 0
    for rank in range(size):
        for j in range(rank, height, size):
            mapping[height - j - 1] = gathered
            gathered += 1
    return mapping


def render_interleaved(region: Region, ranks: int) -> list[bytes]:
    """Render with rows dealt round-robin to ``ranks`` ranks; return rows, top first."""
    if ranks <= 0:
        raise ValueError(f"ranks must be positive, got {ranks}")
    gathered: list[bytes] = []
    for rank in range(ranks):
        gathered.extend(render_row(region, h) for h in range(rank, region.height, ranks))
    return [gathered[k] for k in row_mapping(region.height, ranks)]


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="mandelbrot", description="Render the Mandelbrot set to a PNG file.")
    parser.add_argument("output", help="PNG file to write")
    parser.add_argument("iters", type=int)
    parser.add_argument("left", type=float)
    parser.add_argument("right", type=float)
    parser.add_argument("lower", type=float)
    parser.add_argument("upper", type=float)
    parser.add_argument("width", type=int)
    parser.add_argument("height", type=int)
    parser.add_argument("--workers", type=int, default=None, help="threads for rendering")
    parser.add_argument("--ranks", type=int, default=None, help="deal rows round-robin to this many ranks")
    args = parser.parse_args(argv)

    try:
        region = Region(args.iters, args.left, args.right, args.lower, args.upper, args.width, args.height)
        if args.ranks is not None:
            rows = render_interleaved(region, args.ranks)
        else:
            rows = render(region, args.workers)
    except ValueError as exc:
        parser.error(str(exc))
    write_rgb_png(args.output, region.width, region.height, rows)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
"""
Integer Bresenham rasterization, shared by paint strokes (gap-free drags) and
per-tick displacement (the path a moving cell walks inside the tick kernel).
"""

from numba import njit
import numpy as np

Point = tuple[int, int]


@njit(cache=True)
def bresenham_into(x0, y0, x1, y1, out):
    """Write the inclusive points from (x0, y0) to (x1, y1) into out[:, 0:2]; returns the count.
    Each step moves at most one unit per axis. out needs max(|dx|, |dy|) + 1 rows."""
    dx = abs(x1 - x0)
    dy = -abs(y1 - y0)
    sx = 1 if x0 < x1 else -1
    sy = 1 if y0 < y1 else -1
    err = dx + dy
    out[0, 0] = x0
    out[0, 1] = y0
    n = 1
    while x0 != x1 or y0 != y1:
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            x0 += sx
        if e2 <= dx:
            err += dx
            y0 += sy
        out[n, 0] = x0
        out[n, 1] = y0
        n += 1
    return n


def line_length(p1: Point, p2: Point) -> int:
    return max(abs(int(p2[0]) - int(p1[0])), abs(int(p2[1]) - int(p1[1]))) + 1


def rasterize(p1: Point, p2: Point) -> list[Point]:
    """Ordered, inclusive points from p1 to p2."""
    out = np.empty((line_length(p1, p2), 2), dtype=np.int64)
    n = bresenham_into(int(p1[0]), int(p1[1]), int(p2[0]), int(p2[1]), out)
    return [(int(x), int(y)) for x, y in out[:n]]

"""Walk a cell along the rasterized path to its intended destination, stopping at solids."""

from numba import njit

from world.line import bresenham_into
from world.materials import PARAM_SOLID


@njit(cache=True)
def _blocked(x, y, width, height, material, params):
    if not (0 <= x < width and 0 <= y < height):
        return True
    return params[material[y * width + x], PARAM_SOLID] != 0.0


@njit(cache=True)
def destination(index, width, height, vx, vy):
    """Current position plus truncated velocity, clamped to the grid."""
    x = index % width
    y = index // width
    tx = min(max(x + int(vx[index]), 0), width - 1)
    ty = min(max(y + int(vy[index]), 0), height - 1)
    return tx, ty


@njit(cache=True)
def resolve_movement(index, width, height, material, vx, vy, params, path):
    """
    Index the cell ends up at. A solid on an axis-aligned step stops the walk; a solid
    on a diagonal step deflects to (dx, 0), else (0, dy), else stops. path is
    (max(width, height) + 1, 2) scratch for the rasterized line.
    """
    x = index % width
    y = index // width
    tx, ty = destination(index, width, height, vx, vy)
    if tx == x and ty == y:
        return index
    n = bresenham_into(x, y, tx, ty, path)
    cx = x
    cy = y
    for k in range(1, n):
        dx = path[k, 0] - path[k - 1, 0]
        dy = path[k, 1] - path[k - 1, 1]
        nx = cx + dx
        ny = cy + dy
        if _blocked(nx, ny, width, height, material, params):
            if dx == 0 or dy == 0:
                break
            if not _blocked(cx + dx, cy, width, height, material, params):
                nx = cx + dx
                ny = cy
            elif not _blocked(cx, cy + dy, width, height, material, params):
                nx = cx
                ny = cy + dy
            else:
                break
        cx = nx
        cy = ny
    return cy * width + cx

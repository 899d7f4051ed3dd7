import numpy as np

from world import FREE_FALL_THRESHOLD as T, Material
from ui.colors import MOVING_SHADE, SETTLED_SHADE, grid_to_rgba


def test_rgba_shape_and_base_colors(make_grid):
    grid = make_grid(4, 3, {(1, 2): Material.SAND, (3, 0): Material.STONE})
    rgba = grid_to_rgba(grid)
    assert rgba.shape == (3, 4, 4)
    assert rgba.dtype == np.uint8
    assert tuple(rgba[2, 1]) == (252, 186, 3, 255)
    assert tuple(rgba[0, 3]) == (128, 128, 128, 255)
    assert tuple(rgba[0, 0]) == (0, 0, 0, 255)


def test_settled_tint(make_grid):
    grid = make_grid(3, 1, {(0, 0): Material.DIRT, (1, 0): Material.DIRT, (2, 0): Material.STONE})
    grid.cell_at((0, 0)).free_fall = T
    plain = grid_to_rgba(grid)
    tinted = grid_to_rgba(grid, tint_settled=True)
    r, g, b, a = (120, 78, 40, 255)
    assert tuple(tinted[0, 0]) == (int(r * SETTLED_SHADE), int(g * SETTLED_SHADE), int(b * SETTLED_SHADE), a)
    assert tuple(tinted[0, 1]) == (int(r * MOVING_SHADE), int(g * MOVING_SHADE), int(b * MOVING_SHADE), a)
    # stone is not movable: untouched
    assert tuple(tinted[0, 2]) == tuple(plain[0, 2])
    # rendering reads a snapshot; the plain render is unchanged
    assert tuple(plain[0, 0]) == (r, g, b, a)

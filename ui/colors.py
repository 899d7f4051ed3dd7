"""
Grid -> RGBA. Each cell takes its material's base color. With tint_settled, movable
solids that have come to rest (free_fall == T) are drawn darker and ones still
falling or rolling slightly brighter, so settling is visible.
"""

import numpy as np

from world.grid import Grid

SETTLED_SHADE = 0.75
MOVING_SHADE = 1.15


def palette_array(grid: Grid) -> np.ndarray:
    """(n_materials, 4) uint8, indexed by material tag."""
    return np.array(grid.context.materials.palette(), dtype=np.uint8)


def grid_to_rgba(grid: Grid, tint_settled: bool = False) -> np.ndarray:
    """Returns (height, width, 4) uint8 RGBA."""
    tags = grid.materials_array()
    rgba = palette_array(grid)[tags]
    if not tint_settled:
        return rgba

    movable = grid.context.materials.movable_mask()[tags]
    settled = movable & (grid.free_fall_array() == grid.context.threshold)
    moving = movable & ~settled

    rgb = rgba[..., :3].astype(np.float64)
    rgb[settled] *= SETTLED_SHADE
    rgb[moving] *= MOVING_SHADE
    rgba = rgba.copy()
    rgba[..., :3] = np.clip(rgb, 0, 255).astype(np.uint8)
    return rgba

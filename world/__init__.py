"""World: material grid and tick-driven granular physics."""

from world.grid import Grid
from world.materials import DEFAULT_TABLE, Material, MaterialSpec, MaterialTable
from world.paint import PaintStroke
from world.tick import TickContext
from world.constants import DEFAULT_HEIGHT, DEFAULT_WIDTH, FREE_FALL_THRESHOLD

__all__ = [
    "Grid",
    "Material",
    "MaterialSpec",
    "MaterialTable",
    "DEFAULT_TABLE",
    "PaintStroke",
    "TickContext",
    "DEFAULT_WIDTH",
    "DEFAULT_HEIGHT",
    "FREE_FALL_THRESHOLD",
]

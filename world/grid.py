"""2D grid of cells, flat row-major (index = y * width + x). Size fixed at construction.
Per-cell state lives in one numpy array per field; the tick runs as compiled kernels over them."""

import logging

from numba import njit
import numpy as np

from world.cell import Cell
from world.constants import DEFAULT_HEIGHT, DEFAULT_WIDTH
from world.forces import apply_forces
from world.line import Point, rasterize
from world.materials import PARAM_MOVABLE, Material
from world.movement import resolve_movement
from world.tick import TickContext

logger = logging.getLogger(__name__)


@njit(cache=True)
def _scan(width, height, material, vx, vy, free_fall, grounded, last_index,
          params, threshold, draws, swaps, overrides):
    """Visit movable solids in ascending index order. Returns (n_swaps, n_overrides)."""
    hood = np.empty(8, dtype=np.int64)
    path = np.empty((max(width, height) + 1, 2), dtype=np.int64)
    n_swaps = 0
    n_overrides = 0
    cursor = 0
    for i in range(width * height):
        if params[material[i], PARAM_MOVABLE] == 0.0:
            continue
        cursor, n_overrides = apply_forces(
            i, width, height, material, vx, vy, free_fall, grounded, last_index,
            params, threshold, draws, cursor, overrides, n_overrides, hood,
        )
        dst = resolve_movement(i, width, height, material, vx, vy, params, path)
        last_index[i] = i
        if dst != i:
            swaps[n_swaps, 0] = i
            swaps[n_swaps, 1] = dst
            n_swaps += 1
    return n_swaps, n_overrides


@njit(cache=True)
def _swap(a, i, j):
    t = a[i]
    a[i] = a[j]
    a[j] = t


@njit(cache=True)
def _apply_changes(material, vx, vy, free_fall, grounded, last_index,
                   params, swaps, n_swaps, overrides, n_overrides):
    """Swaps in request order, then overrides whose target still holds a movable solid.
    Returns the number of overrides applied."""
    for k in range(n_swaps):
        i = swaps[k, 0]
        j = swaps[k, 1]
        _swap(material, i, j)
        _swap(vx, i, j)
        _swap(vy, i, j)
        _swap(free_fall, i, j)
        _swap(grounded, i, j)
        _swap(last_index, i, j)
    applied = 0
    for k in range(n_overrides):
        i = overrides[k, 0]
        # Targets that moved away during the swaps leave something else here.
        if params[material[i], PARAM_MOVABLE] != 0.0:
            free_fall[i] = overrides[k, 1]
            applied += 1
    return applied


class Grid:
    """
    Tick semantics: cells are visited in ascending index order. Velocity and rest
    state are written back immediately, so later cells in the same pass see them;
    position swaps and free-fall overrides are buffered and applied after the scan.
    """

    __slots__ = (
        "width", "height", "context", "tick_count",
        "material", "vx", "vy", "free_fall", "grounded", "last_index",
    )

    def __init__(
        self,
        width: int = DEFAULT_WIDTH,
        height: int = DEFAULT_HEIGHT,
        context: TickContext | None = None,
    ) -> None:
        if width < 1 or height < 1:
            raise ValueError(f"grid size must be at least 1x1, got {width}x{height}")
        self.width = width
        self.height = height
        self.context = context if context is not None else TickContext()
        n = width * height
        self.material = np.zeros(n, dtype=np.uint8)
        self.vx = np.zeros(n, dtype=np.float64)
        self.vy = np.zeros(n, dtype=np.float64)
        self.free_fall = np.zeros(n, dtype=np.int32)
        self.grounded = np.zeros(n, dtype=np.bool_)
        self.last_index = np.arange(n, dtype=np.int64)
        self.tick_count = 0
        logger.info("Created %dx%d grid", width, height)

    def __len__(self) -> int:
        return len(self.material)

    def arrays(self) -> tuple[np.ndarray, ...]:
        """(material, vx, vy, free_fall, grounded, last_index), the order the kernels take."""
        return self.material, self.vx, self.vy, self.free_fall, self.grounded, self.last_index

    def in_bounds(self, pos: Point) -> bool:
        x, y = pos
        return 0 <= x < self.width and 0 <= y < self.height

    def index_of(self, pos: Point) -> int:
        if not self.in_bounds(pos):
            raise IndexError(f"position {pos} outside {self.width}x{self.height} grid")
        x, y = pos
        return y * self.width + x

    def position_of(self, index: int) -> Point:
        return index % self.width, index // self.width

    def cell(self, index: int) -> Cell:
        if not 0 <= index < len(self):
            raise IndexError(f"cell index {index} outside grid of {len(self)}")
        return Cell(self, index)

    def cell_at(self, pos: Point) -> Cell:
        return Cell(self, self.index_of(pos))

    def count(self, material: Material) -> int:
        return int(np.count_nonzero(self.material == material))

    # ---- painting ----

    def _reset_slot(self, i: int, material: Material) -> None:
        self.material[i] = material
        self.vx[i] = 0.0
        self.vy[i] = 0.0
        self.free_fall[i] = 0
        self.grounded[i] = False
        self.last_index[i] = i

    def place(self, pos: Point, material: Material) -> bool:
        """Write a fresh cell only if the target is air. Returns True if written."""
        if not self.in_bounds(pos):
            return False
        i = self.index_of(pos)
        if self.material[i] != Material.AIR:
            return False
        self._reset_slot(i, material)
        return True

    def place_line(self, p1: Point, p2: Point, material: Material) -> int:
        return sum(1 for p in rasterize(p1, p2) if self.place(p, material))

    def erase(self, pos: Point) -> bool:
        if not self.in_bounds(pos):
            return False
        i = self.index_of(pos)
        if self.material[i] == Material.AIR:
            return False
        self._reset_slot(i, Material.AIR)
        return True

    def erase_line(self, p1: Point, p2: Point) -> int:
        return sum(1 for p in rasterize(p1, p2) if self.erase(p))

    def reset(self) -> None:
        self.material[:] = Material.AIR
        self.vx[:] = 0.0
        self.vy[:] = 0.0
        self.free_fall[:] = 0
        self.grounded[:] = False
        self.last_index[:] = np.arange(len(self), dtype=np.int64)
        self.context.changes.clear()
        self.tick_count = 0
        logger.info("Reset %dx%d grid", self.width, self.height)

    # ---- simulation ----

    def execute_logic(self) -> None:
        """Advance exactly one tick."""
        ctx = self.context
        changes = ctx.changes
        if changes.capacity < len(self):
            changes.reserve(len(self))
        changes.clear()
        params = ctx.materials.params_array()
        draws = ctx.draws(int(np.count_nonzero(ctx.materials.movable_mask()[self.material])))
        changes.n_swaps, changes.n_free_fall = _scan(
            self.width, self.height, *self.arrays(),
            params, ctx.threshold, draws, changes.swap_rows, changes.free_fall_rows,
        )
        applied = _apply_changes(
            *self.arrays(), params,
            changes.swap_rows, changes.n_swaps, changes.free_fall_rows, changes.n_free_fall,
        )
        logger.debug(
            "Tick %d: %d swaps, %d/%d free-fall overrides",
            self.tick_count, changes.n_swaps, applied, changes.n_free_fall,
        )
        self.tick_count += 1

    # ---- render views ----

    def materials_array(self) -> np.ndarray:
        """(height, width) array of material tags."""
        return self.material.reshape(self.height, self.width)

    def free_fall_array(self) -> np.ndarray:
        return self.free_fall.reshape(self.height, self.width)

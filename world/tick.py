"""Everything one tick needs besides the grid itself."""

from dataclasses import dataclass, field

import numpy as np

from world.changes import ChangeBuffer
from world.constants import FREE_FALL_THRESHOLD, MAX_DRAWS_PER_CELL
from world.materials import DEFAULT_TABLE, MaterialTable


@dataclass
class TickContext:
    rng: np.random.Generator = field(default_factory=np.random.default_rng)
    materials: MaterialTable = DEFAULT_TABLE
    changes: ChangeBuffer = field(default_factory=ChangeBuffer)
    threshold: int = FREE_FALL_THRESHOLD

    @property
    def disturb_marker(self) -> int:
        return 2 * self.threshold

    def draws(self, movable_cells: int) -> np.ndarray:
        """Uniform [0, 1) draws for one tick. The kernel consumes them in visit order,
        so the same seed and the same grid give the same tick."""
        return self.rng.random(MAX_DRAWS_PER_CELL * movable_cells)

"""Deferred writes collected during a scan and applied after it."""

import numpy as np

from world.constants import MAX_DISTURBS_PER_CELL


class ChangeBuffer:
    """
    Position swaps and free-fall overrides as (src, dst) / (index, value) rows, in
    the order they were requested. Rows are preallocated for a grid size; the tick
    kernel fills them and reports how many are live.
    """

    __slots__ = ("swap_rows", "free_fall_rows", "n_swaps", "n_free_fall")

    def __init__(self, cells: int = 0) -> None:
        self.reserve(cells)

    def reserve(self, cells: int) -> None:
        # Each cell moves at most once per tick.
        self.swap_rows = np.zeros((cells, 2), dtype=np.int64)
        self.free_fall_rows = np.zeros((cells * MAX_DISTURBS_PER_CELL, 2), dtype=np.int64)
        self.clear()

    @property
    def capacity(self) -> int:
        return len(self.swap_rows)

    def clear(self) -> None:
        self.n_swaps = 0
        self.n_free_fall = 0

    @property
    def swaps(self) -> list[tuple[int, int]]:
        return [(int(a), int(b)) for a, b in self.swap_rows[: self.n_swaps]]

    @property
    def free_fall(self) -> list[tuple[int, int]]:
        return [(int(i), int(v)) for i, v in self.free_fall_rows[: self.n_free_fall]]

    def __len__(self) -> int:
        return self.n_swaps + self.n_free_fall

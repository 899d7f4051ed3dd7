"""
Fixed-order 3x3 neighborhood (center excluded). Slot order is a contract used by
the force model: 0 top-left, 1 top, 2 top-right, 3 left, 4 right, 5 bottom-left,
6 bottom, 7 bottom-right. Out-of-bounds rows and row-wrapping columns are absent
(-1 in the kernel, None in a Neighborhood).
"""

from typing import TYPE_CHECKING, Iterator, NamedTuple

from numba import njit
import numpy as np

from world.cell import Cell

if TYPE_CHECKING:
    from world.grid import Grid

TOP_LEFT, TOP, TOP_RIGHT, LEFT, RIGHT, BOTTOM_LEFT, BOTTOM, BOTTOM_RIGHT = range(8)

# (dx, dy) per slot, in slot order.
OFFSETS = [(-1, -1), (0, -1), (1, -1), (-1, 0), (1, 0), (-1, 1), (0, 1), (1, 1)]
_DX = (-1, 0, 1, -1, 1, -1, 0, 1)
_DY = (-1, -1, -1, 0, 0, 1, 1, 1)

ABSENT = -1


@njit(cache=True)
def neighbor_indices(index, width, height, out):
    """Fill out[0:8] with neighbor indices in slot order, ABSENT where off the grid."""
    x = index % width
    y = index // width
    for slot in range(8):
        nx = x + _DX[slot]
        ny = y + _DY[slot]
        if 0 <= ny < height and 0 <= nx < width:
            out[slot] = ny * width + nx
        else:
            out[slot] = ABSENT


class Neighbor(NamedTuple):
    index: int
    cell: Cell


class Neighborhood:
    __slots__ = ("slots",)

    def __init__(self, slots: list[Neighbor | None]) -> None:
        self.slots = slots

    def __getitem__(self, slot: int) -> Neighbor | None:
        return self.slots[slot]

    def __iter__(self) -> Iterator[Neighbor | None]:
        return iter(self.slots)

    def __len__(self) -> int:
        return len(self.slots)

    def present(self) -> Iterator[Neighbor]:
        return (n for n in self.slots if n is not None)

    @property
    def top_left(self) -> Neighbor | None:
        return self.slots[TOP_LEFT]

    @property
    def top(self) -> Neighbor | None:
        return self.slots[TOP]

    @property
    def top_right(self) -> Neighbor | None:
        return self.slots[TOP_RIGHT]

    @property
    def left(self) -> Neighbor | None:
        return self.slots[LEFT]

    @property
    def right(self) -> Neighbor | None:
        return self.slots[RIGHT]

    @property
    def bottom_left(self) -> Neighbor | None:
        return self.slots[BOTTOM_LEFT]

    @property
    def bottom(self) -> Neighbor | None:
        return self.slots[BOTTOM]

    @property
    def bottom_right(self) -> Neighbor | None:
        return self.slots[BOTTOM_RIGHT]


def sample(grid: "Grid", index: int) -> Neighborhood:
    """Named view of the same slots the tick kernel reads."""
    out = np.empty(8, dtype=np.int64)
    neighbor_indices(index, grid.width, grid.height, out)
    return Neighborhood([None if i == ABSENT else Neighbor(int(i), Cell(grid, int(i))) for i in out])

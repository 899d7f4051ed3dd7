"""Per-slot simulation state. The Grid keeps each field in its own flat array;
a Cell is a read/write view of one index across those arrays."""

from typing import TYPE_CHECKING

from world.materials import Material

if TYPE_CHECKING:
    from world.grid import Grid


class Cell:
    __slots__ = ("grid", "index")

    def __init__(self, grid: "Grid", index: int) -> None:
        self.grid = grid
        self.index = index

    @property
    def material(self) -> Material:
        return Material(int(self.grid.material[self.index]))

    @material.setter
    def material(self, value: Material) -> None:
        self.grid.material[self.index] = value

    @property
    def vx(self) -> float:
        return float(self.grid.vx[self.index])

    @vx.setter
    def vx(self, value: float) -> None:
        self.grid.vx[self.index] = value

    @property
    def vy(self) -> float:
        return float(self.grid.vy[self.index])

    @vy.setter
    def vy(self, value: float) -> None:
        self.grid.vy[self.index] = value

    @property
    def free_fall(self) -> int:
        return int(self.grid.free_fall[self.index])

    @free_fall.setter
    def free_fall(self, value: int) -> None:
        self.grid.free_fall[self.index] = value

    @property
    def grounded(self) -> bool:
        return bool(self.grid.grounded[self.index])

    @grounded.setter
    def grounded(self, value: bool) -> None:
        self.grid.grounded[self.index] = value

    @property
    def last_index(self) -> int:
        # Index held at the start of the previous tick; equal to the current index = did not move.
        return int(self.grid.last_index[self.index])

    @last_index.setter
    def last_index(self, value: int) -> None:
        self.grid.last_index[self.index] = value

    @property
    def is_air(self) -> bool:
        return self.material == Material.AIR

    def state(self) -> tuple:
        return (self.material, self.vx, self.vy, self.free_fall, self.grounded, self.last_index)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Cell):
            return NotImplemented
        return self.state() == other.state()

    def __repr__(self) -> str:
        return (
            f"Cell({self.material.name.lower()}, v=({self.vx:.2f}, {self.vy:.2f}), "
            f"free_fall={self.free_fall}, grounded={self.grounded}, last_index={self.last_index})"
        )

"""Pointer down/drag/up -> gap-free paint strokes on a Grid."""

from world.grid import Grid
from world.line import Point
from world.materials import Material


class PaintStroke:
    """
    Tracks the last pointer position of the current stroke. Each drag paints the
    line from that position to the new one, so fast pointer motion leaves no gaps.
    material None = eraser.
    """

    __slots__ = ("grid", "material", "_last")

    def __init__(self, grid: Grid, material: Material | None = Material.SAND) -> None:
        self.grid = grid
        self.material = material
        self._last: Point | None = None

    @property
    def active(self) -> bool:
        return self._last is not None

    def press(self, pos: Point) -> int:
        self._last = pos
        return self._paint(pos, pos)

    def drag(self, pos: Point) -> int:
        if self._last is None:
            return 0
        start, self._last = self._last, pos
        return self._paint(start, pos)

    def release(self) -> None:
        self._last = None

    def _paint(self, p1: Point, p2: Point) -> int:
        if self.material is None:
            return self.grid.erase_line(p1, p2)
        return self.grid.place_line(p1, p2, self.material)

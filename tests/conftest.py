import numpy as np
import pytest

from world import Grid, TickContext
from world.forces import apply_forces


class FixedRandom:
    """Stands in for np.random.Generator: every draw is the same value, which makes
    probability gates deterministic."""

    def __init__(self, value: float) -> None:
        self.value = value

    def random(self, size=None):
        if size is None:
            return self.value
        return np.full(size, self.value, dtype=np.float64)


@pytest.fixture
def fixed_rng():
    return FixedRandom


@pytest.fixture
def make_grid():
    """make_grid(w, h, {(x, y): Material}, rng=None, seed=0) -> Grid."""

    def _make(width, height, cells=None, rng=None, seed=0):
        ctx = TickContext(rng=rng if rng is not None else np.random.default_rng(seed))
        grid = Grid(width, height, context=ctx)
        for pos, material in (cells or {}).items():
            grid.place(pos, material)
        return grid

    return _make


@pytest.fixture
def run_forces():
    """run_forces(grid, pos) -> (cell, overrides): one force-model update in place, with
    draws taken from the grid's context rng, as the tick kernel does."""

    def _run(grid, pos):
        ctx = grid.context
        i = grid.index_of(pos)
        overrides = np.zeros((8, 2), dtype=np.int64)
        hood = np.empty(8, dtype=np.int64)
        _, n = apply_forces(
            i, grid.width, grid.height, *grid.arrays(),
            ctx.materials.params_array(), ctx.threshold, ctx.draws(1), 0, overrides, 0, hood,
        )
        return grid.cell(i), [(int(a), int(b)) for a, b in overrides[:n]]

    return _run

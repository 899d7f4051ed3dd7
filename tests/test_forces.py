import pytest

from world import FREE_FALL_THRESHOLD as T, Material, TickContext
from world.constants import GRAVITY


def test_enclosed_cell_sends_no_disturb_signals(make_grid, fixed_rng, run_forces):
    cells = {(x, y): Material.SAND for x in range(3) for y in range(3)}
    grid = make_grid(3, 3, cells, rng=fixed_rng(0.0))
    _, overrides = run_forces(grid, (1, 1))
    assert overrides == []


def test_edge_cell_disturbs_movable_neighbors(make_grid, fixed_rng, run_forces):
    cells = {(x, y): Material.SAND for x in range(3) for y in range(3)}
    grid = make_grid(3, 3, cells, rng=fixed_rng(0.0))
    _, overrides = run_forces(grid, (0, 0))
    assert overrides == [(1, 2 * T), (3, 2 * T), (4, 2 * T)]


def test_disturb_is_gated_by_neighbor_resistance(make_grid, fixed_rng, run_forces):
    # draw 0.5: sand (1 - 0.1 = 0.9) is disturbed, dirt (1 - 0.6 = 0.4) is not
    cells = {(0, 0): Material.SAND, (1, 0): Material.SAND, (0, 1): Material.DIRT}
    grid = make_grid(3, 3, cells, rng=fixed_rng(0.5))
    _, overrides = run_forces(grid, (0, 0))
    assert overrides == [(1, 2 * T)]


def test_stone_neighbors_are_not_disturbed(make_grid, fixed_rng, run_forces):
    grid = make_grid(3, 3, {(1, 1): Material.SAND, (0, 1): Material.STONE}, rng=fixed_rng(0.0))
    _, overrides = run_forces(grid, (1, 1))
    assert overrides == []


def test_settled_cell_does_not_disturb(make_grid, fixed_rng, run_forces):
    grid = make_grid(3, 3, {(0, 2): Material.SAND, (1, 2): Material.SAND}, rng=fixed_rng(0.0))
    grid.cell_at((0, 2)).free_fall = T
    _, overrides = run_forces(grid, (0, 2))
    assert overrides == []


def test_disturb_check_confirms_supported_cell(make_grid, fixed_rng, run_forces):
    grid = make_grid(3, 3, {(1, 2): Material.SAND}, rng=fixed_rng(0.9))
    grid.cell_at((1, 2)).free_fall = 2 * T
    cell, _ = run_forces(grid, (1, 2))
    assert cell.free_fall == T


def test_disturb_check_releases_unsupported_cell(make_grid, fixed_rng, run_forces):
    cells = {(1, 1): Material.SAND, (0, 2): Material.STONE, (1, 2): Material.STONE}
    grid = make_grid(3, 3, cells, rng=fixed_rng(0.9))
    c = grid.cell_at((1, 1))
    c.free_fall = 2 * T
    c.grounded = True
    cell, _ = run_forces(grid, (1, 1))
    # (2, 2) is air: back to rolling, then one tick of rest counting
    assert cell.free_fall == 1
    assert cell.grounded


def test_falling_cell_gains_gravity(make_grid, run_forces):
    grid = make_grid(3, 3, {(1, 0): Material.SAND})
    grid.cell_at((1, 0)).free_fall = 4
    cell, _ = run_forces(grid, (1, 0))
    assert cell.vy == pytest.approx(GRAVITY)
    assert cell.free_fall == 0
    assert not cell.grounded


def test_horizontal_drag(make_grid, run_forces):
    grid = make_grid(3, 3, {(1, 0): Material.SAND})
    c = grid.cell_at((1, 0))
    c.vx = 2.0
    assert run_forces(grid, (1, 0))[0].vx == pytest.approx(1.6)
    c.vx = -1.2
    assert run_forces(grid, (1, 0))[0].vx == 0.0
    c.vx = 0.5
    assert run_forces(grid, (1, 0))[0].vx == 0.5


def test_bottom_row_counts_as_grounded(make_grid, run_forces):
    grid = make_grid(3, 3, {(1, 2): Material.SAND})
    assert run_forces(grid, (1, 2))[0].grounded


def test_landing_kicks_toward_free_diagonal(make_grid, fixed_rng, run_forces):
    cells = {(1, 1): Material.SAND, (1, 2): Material.STONE, (2, 2): Material.STONE}
    grid = make_grid(3, 3, cells, rng=fixed_rng(0.5))
    grid.cell_at((1, 1)).vy = 2.0
    cell, _ = run_forces(grid, (1, 1))
    assert cell.vx == pytest.approx(-1.0)
    assert cell.vy == 1.0
    assert cell.grounded


def test_landing_kick_is_capped(make_grid, fixed_rng, run_forces):
    cells = {(1, 1): Material.SAND, (1, 2): Material.STONE, (0, 2): Material.STONE}
    grid = make_grid(3, 3, cells, rng=fixed_rng(0.99))
    grid.cell_at((1, 1)).vy = 20.0
    assert run_forces(grid, (1, 1))[0].vx == pytest.approx(4.0)


def test_landing_respects_velocity_direction(make_grid, fixed_rng, run_forces):
    # moving right, only the left diagonal is free: no kick
    cells = {(1, 1): Material.SAND, (1, 2): Material.STONE, (2, 2): Material.STONE}
    grid = make_grid(3, 3, cells, rng=fixed_rng(0.5))
    c = grid.cell_at((1, 1))
    c.vy = 2.0
    c.vx = 0.5
    assert run_forces(grid, (1, 1))[0].vx == 0.5


def test_rolling_cell_tips_toward_free_side(make_grid, fixed_rng, run_forces):
    cells = {(1, 1): Material.SAND, (1, 2): Material.STONE, (2, 2): Material.STONE}
    grid = make_grid(3, 3, cells, rng=fixed_rng(0.99))
    c = grid.cell_at((1, 1))
    c.grounded = True
    c.last_index = 0
    cell, _ = run_forces(grid, (1, 1))
    assert cell.vx == -1.0
    assert cell.vy == 1.0
    assert cell.free_fall == 0


def test_rolling_cell_with_no_free_side_may_freeze(make_grid, fixed_rng, run_forces):
    cells = {(1, 1): Material.DIRT, (0, 2): Material.STONE, (1, 2): Material.STONE, (2, 2): Material.STONE}
    grid = make_grid(3, 3, cells, rng=fixed_rng(0.0))
    c = grid.cell_at((1, 1))
    c.grounded = True
    c.vx = 0.5
    cell, _ = run_forces(grid, (1, 1))
    assert cell.free_fall == T
    assert cell.vx == 0.0


def test_resting_cell_counts_up_to_threshold(make_grid, fixed_rng, run_forces):
    cells = {(1, 1): Material.SAND, (0, 2): Material.STONE, (1, 2): Material.STONE, (2, 2): Material.STONE}
    grid = make_grid(3, 3, cells, rng=fixed_rng(0.99))
    grid.cell_at((1, 1)).grounded = True
    for expected in range(1, T + 3):
        cell, _ = run_forces(grid, (1, 1))
        assert cell.free_fall == min(expected, T)


def test_context_threshold_is_used(make_grid, run_forces):
    grid = make_grid(3, 3, {(1, 2): Material.SAND})
    grid.context = TickContext(threshold=3)
    c = grid.cell_at((1, 2))
    c.grounded = True
    c.free_fall = 2
    assert run_forces(grid, (1, 2))[0].free_fall == 3

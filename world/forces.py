"""
Movable-solid rest/disturb state machine. Per cell:

- Falling: not grounded; gravity accumulates in vy, free_fall stays 0.
- JustLanded: first grounded tick; part of vy becomes a sideways kick.
- Rolling: grounded, free_fall < T; tips into a free diagonal below at roll speed.
- Settled: grounded, free_fall == T; no lateral motion, no disturbing.
- DisturbCheck: free_fall == 2T, set by a neighbor last tick; resolved to T or 0 here.

Cells that are not yet settled and sit on a slope or edge (few movable-solid
neighbors) nudge their movable neighbors back into DisturbCheck.

Randomness comes in as a flat array of uniform draws consumed through a cursor,
in a fixed order per cell: disturb rolls, then the landing kick, then the side
pick or freeze roll.
"""

from numba import njit

from world.constants import ENCLOSED_NEIGHBOR_COUNT, GRAVITY, HORIZONTAL_DRAG, MAX_LANDING_KICK
from world.materials import PARAM_MOVABLE, PARAM_RESISTANCE, PARAM_ROLL_SPEED, PARAM_SOLID
from world.neighbors import ABSENT, BOTTOM, BOTTOM_LEFT, BOTTOM_RIGHT, neighbor_indices

LEFT, NONE, RIGHT = -1, 0, 1


@njit(cache=True)
def _is_air(material, n):
    return n != ABSENT and material[n] == 0


@njit(cache=True)
def _supports(material, params, n):
    """Grid edge counts as support."""
    return n == ABSENT or params[material[n], PARAM_SOLID] != 0.0


@njit(cache=True)
def _is_movable(material, params, n):
    return n != ABSENT and params[material[n], PARAM_MOVABLE] != 0.0


@njit(cache=True)
def _disturb_neighbors(material, params, hood, marker, draws, cursor, overrides, n_overrides):
    count = 0
    for slot in range(8):
        if _is_movable(material, params, hood[slot]):
            count += 1
    if count >= ENCLOSED_NEIGHBOR_COUNT:
        return cursor, n_overrides
    for slot in range(8):
        n = hood[slot]
        if not _is_movable(material, params, n):
            continue
        u = draws[cursor]
        cursor += 1
        if u < 1.0 - params[material[n], PARAM_RESISTANCE]:
            overrides[n_overrides, 0] = n
            overrides[n_overrides, 1] = marker
            n_overrides += 1
    return cursor, n_overrides


@njit(cache=True)
def _pick_side(material, hood, vx, draws, cursor):
    """Side toward a free diagonal below, gated by the sign of vx. Both free = coin flip.
    Returns (side, both_free, cursor)."""
    left = vx <= 0 and _is_air(material, hood[BOTTOM_LEFT])
    right = vx >= 0 and _is_air(material, hood[BOTTOM_RIGHT])
    if left and right:
        side = LEFT if draws[cursor] < 0.5 else RIGHT
        return side, True, cursor + 1
    if left:
        return LEFT, False, cursor
    if right:
        return RIGHT, False, cursor
    return NONE, False, cursor


@njit(cache=True)
def is_grounded(index, width, height, material, hood):
    """Something other than air directly below; the bottom row stands on the floor."""
    below = hood[BOTTOM]
    if below == ABSENT:
        return index // width == height - 1
    return material[below] != 0


@njit(cache=True)
def apply_forces(
    index, width, height,
    material, vx, vy, free_fall, grounded, last_index,
    params, threshold, draws, cursor, overrides, n_overrides, hood,
):
    """Update the cell at index in place. Disturb signals are appended to overrides.
    hood is 8-slot scratch. Returns (cursor, n_overrides)."""
    neighbor_indices(index, width, height, hood)
    tag = material[index]

    if free_fall[index] < threshold:
        cursor, n_overrides = _disturb_neighbors(
            material, params, hood, 2 * threshold, draws, cursor, overrides, n_overrides
        )
    elif free_fall[index] == 2 * threshold:
        if (
            _supports(material, params, hood[BOTTOM_LEFT])
            and _supports(material, params, hood[BOTTOM])
            and _supports(material, params, hood[BOTTOM_RIGHT])
        ):
            free_fall[index] = threshold
        else:
            free_fall[index] = 0

    on_ground = is_grounded(index, width, height, material, hood)

    if abs(vx[index]) >= 1:
        vx[index] *= HORIZONTAL_DRAG
        if abs(vx[index]) <= 1:
            vx[index] = 0.0

    if not on_ground:
        vy[index] += GRAVITY
        free_fall[index] = 0
    else:
        roll_speed = params[tag, PARAM_ROLL_SPEED]
        if not grounded[index]:
            absorbed = min(MAX_LANDING_KICK, vy[index] * draws[cursor])
            cursor += 1
            side, _, cursor = _pick_side(material, hood, vx[index], draws, cursor)
            if side != NONE:
                vx[index] = side * absorbed
        elif free_fall[index] < threshold:
            side, both_free, cursor = _pick_side(material, hood, vx[index], draws, cursor)
            if not both_free:
                u = draws[cursor]
                cursor += 1
                if u < params[tag, PARAM_RESISTANCE] ** 3:
                    free_fall[index] = threshold
                    side = NONE
            if side != NONE:
                vx[index] = side * roll_speed
        vy[index] = roll_speed
        if last_index[index] == index:
            free_fall[index] += 1
            if free_fall[index] >= threshold:
                free_fall[index] = threshold
                vx[index] = 0.0

    grounded[index] = on_ground
    return cursor, n_overrides

"""Simulation constants. Free-fall threshold T; 2T is the one-tick disturb marker."""

FREE_FALL_THRESHOLD = 10
DISTURB_MARKER = 2 * FREE_FALL_THRESHOLD
GRAVITY = 0.3
HORIZONTAL_DRAG = 0.8
MAX_LANDING_KICK = 4.0
# Fewer movable-solid neighbors than this = slope or edge; such cells disturb their neighbors.
ENCLOSED_NEIGHBOR_COUNT = 5
DEFAULT_WIDTH, DEFAULT_HEIGHT = 200, 200
# Most disturb signals one cell can send (it only disturbs when not enclosed).
MAX_DISTURBS_PER_CELL = ENCLOSED_NEIGHBOR_COUNT - 1
# Upper bound on uniform draws one cell consumes per tick: its disturb rolls plus
# the landing kick and side pick (or a side pick / freeze roll while rolling).
MAX_DRAWS_PER_CELL = MAX_DISTURBS_PER_CELL + 2

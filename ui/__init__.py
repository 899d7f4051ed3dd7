"""UI: grid view, control panel, tooltips."""

from ui.grid_view import draw_grid, screen_to_cell
from ui.panel import ParamPanel
from ui.colors import grid_to_rgba

__all__ = ["draw_grid", "screen_to_cell", "ParamPanel", "grid_to_rgba"]

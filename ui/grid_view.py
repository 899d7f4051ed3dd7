"""Left panel: simulation grid with thin grey border; pixel colors from the RGBA render."""

import pygame
import numpy as np

BORDER_COLOR = (80, 80, 80)
BORDER_PX = 1


def _rgba_surface(rgba: np.ndarray) -> pygame.Surface:
    """(H, W, 4) uint8 row-major -> pygame surface of size (W, H)."""
    h, w = rgba.shape[0], rgba.shape[1]
    data = np.ascontiguousarray(rgba).tobytes()
    try:
        return pygame.image.frombytes(data, (w, h), "RGBA")
    except AttributeError:
        return pygame.image.fromstring(data, (w, h), "RGBA")


def screen_to_cell(grid_rect: pygame.Rect, pos: tuple[int, int], width: int, height: int) -> tuple[int, int]:
    """Map a screen position to a grid cell, clamped to the grid."""
    cell_w = max(1, grid_rect.width // width)
    cell_h = max(1, grid_rect.height // height)
    x = (pos[0] - grid_rect.x) // cell_w
    y = (pos[1] - grid_rect.y) // cell_h
    return max(0, min(width - 1, x)), max(0, min(height - 1, y))


def draw_grid(surface: pygame.Surface, grid_rect: pygame.Rect, rgba: np.ndarray) -> None:
    """Scale the (H, W, 4) render into grid_rect (nearest neighbor, so cells stay crisp)."""
    h, w = rgba.shape[0], rgba.shape[1]
    if h == 0 or w == 0:
        return
    img = _rgba_surface(rgba)
    cell_w = max(1, grid_rect.width // w)
    cell_h = max(1, grid_rect.height // h)
    scaled = pygame.transform.scale(img, (w * cell_w, h * cell_h))
    surface.blit(scaled, grid_rect.topleft)
    pygame.draw.rect(surface, BORDER_COLOR, grid_rect, BORDER_PX)

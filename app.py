"""
App shell: display and main loop. One simulation tick per frame while running;
the frame rate is capped at the panel's tick rate. World, UI, and config are wired here.
"""

import argparse
import logging

import pygame

from world import Grid, PaintStroke, TickContext
from world.seed_util import make_rng
from ui import ParamPanel, draw_grid, grid_to_rgba, screen_to_cell
from ui.panel import BRUSHES
import config

logger = logging.getLogger(__name__)

TITLE = "Gritfall"
PANEL_WIDTH = 260
BACKGROUND = (0, 0, 0)
BRUSH_KEYS = {pygame.K_1 + n: name for n, name in enumerate(BRUSHES)}


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Falling-sand simulator.")
    parser.add_argument("--config", help="Path to a config JSON (default: last saved, else built-in defaults).")
    parser.add_argument("--seed", type=int, help="RNG seed; -1 picks a new one each run.")
    parser.add_argument("--width", type=int, help="Grid width in cells.")
    parser.add_argument("--height", type=int, help="Grid height in cells.")
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser.parse_args(argv)


def build_grid(cfg: dict) -> tuple[Grid, int]:
    """Grid from config; returns (grid, seed_used)."""
    rng, seed_used = make_rng(cfg.get("seed", -1))
    context = TickContext(rng=rng, materials=config.materials_from_config(cfg))
    grid = Grid(cfg["world"]["width"], cfg["world"]["height"], context=context)
    logger.info("Seed %d", seed_used)
    return grid, seed_used


def run(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    config.refresh_index()

    cfg = config.load_config(args.config)
    if args.seed is not None:
        cfg["seed"] = args.seed
    if args.width is not None:
        cfg["world"]["width"] = args.width
    if args.height is not None:
        cfg["world"]["height"] = args.height

    grid, seed_used = build_grid(cfg)
    scale = max(1, int(cfg.get("pixel_scale", 4)))
    grid_rect = pygame.Rect(0, 0, grid.width * scale, grid.height * scale)
    width = grid_rect.width + PANEL_WIDTH
    height = max(grid_rect.height, 420)
    panel_rect = pygame.Rect(grid_rect.width, 0, PANEL_WIDTH, height)

    pygame.init()
    screen = pygame.display.set_mode((width, height))
    pygame.display.set_caption(TITLE)
    clock = pygame.time.Clock()

    stroke = PaintStroke(grid)

    def clear() -> None:
        stroke.release()
        grid.reset()

    def step() -> None:
        grid.execute_logic()

    def save_current_config() -> None:
        params = panel.get_params()
        name = params["config_name"].strip() or "unnamed"
        config.save_config(panel.config_dict(cfg), name, materials=grid.context.materials)

    def load_config_callback(name: str) -> None:
        nonlocal cfg
        path = config.get_config_path(name)
        if not path.exists():
            return
        loaded = config.load_config(path)
        panel.apply_config(loaded)
        # Grid size and materials are fixed for this window; only panel settings are taken.
        cfg = {**cfg, **{k: loaded[k] for k in ("tick_rate", "tint_settled", "brush_material")}}

    last = config.get_last_config()
    panel = ParamPanel(
        panel_rect,
        {**cfg, "config_name": last or "", "selected_config": last},
        grid.context.materials,
        on_save=save_current_config,
        on_clear=clear,
        on_step=step,
        on_load_config=load_config_callback,
    )

    running = True
    while running:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
                break
            if panel.handle_event(event):
                continue
            if event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key == pygame.K_SPACE:
                    panel.toggle_pause()
                elif event.key == pygame.K_PERIOD and panel.params["paused"]:
                    step()
                elif event.key == pygame.K_c:
                    clear()
                elif event.key in BRUSH_KEYS:
                    panel.select_brush(BRUSH_KEYS[event.key])
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button in (1, 3):
                if grid_rect.collidepoint(event.pos):
                    stroke.material = panel.brush() if event.button == 1 else None
                    stroke.press(screen_to_cell(grid_rect, event.pos, grid.width, grid.height))
            elif event.type == pygame.MOUSEMOTION and stroke.active:
                stroke.drag(screen_to_cell(grid_rect, event.pos, grid.width, grid.height))
            elif event.type == pygame.MOUSEBUTTONUP and event.button in (1, 3):
                stroke.release()

        params = panel.get_params()
        if not params["paused"]:
            grid.execute_logic()

        screen.fill(BACKGROUND)
        draw_grid(screen, grid_rect, grid_to_rgba(grid, tint_settled=params["tint_settled"]))
        panel.draw(screen, tick_count=grid.tick_count, seed_used=seed_used)
        panel.draw_tooltip(screen)
        pygame.display.flip()
        clock.tick(max(1, params["tick_rate"]))

    pygame.quit()


if __name__ == "__main__":
    run()

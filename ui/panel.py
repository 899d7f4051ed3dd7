"""Right panel: material picker, play/pause/step/clear, tick rate, settled tint, save/load settings."""

import pygame
from typing import Callable

import config
from ui import tooltips
from world.materials import Material, MaterialTable

FONT_SIZE = 16
TOOLTIP_FONT_SIZE = 19
TOOLTIP_SMALL_FONT_SIZE = 16
LABEL_COLOR = (200, 200, 200)
SLIDER_COLOR = (100, 100, 100)
KNOB_COLOR = (180, 180, 180)
BUTTON_COLOR = (60, 60, 60)
BUTTON_HOVER = (80, 80, 80)
SELECTED_BORDER = (240, 240, 240)

ERASER = "eraser"
# Brush order also defines the 1..n hotkeys.
BRUSHES = ("sand", "dirt", "coal", "stone", "water", "co2", ERASER)
TICK_RATE_MIN, TICK_RATE_MAX = 1, 120


class ParamPanel:
    """State: params dict; draw and handle events. Save / Clear / Step callbacks."""

    def __init__(
        self,
        rect: pygame.Rect,
        initial: dict,
        materials: MaterialTable,
        on_save: Callable[[], None],
        on_clear: Callable[[], None],
        on_step: Callable[[], None],
        on_load_config: Callable[[str], None] | None = None,
    ) -> None:
        self.rect = rect
        self.materials = materials
        brush = initial.get("brush_material", "sand")
        self.params = {
            "tick_rate": initial.get("tick_rate", 60),
            "tint_settled": initial.get("tint_settled", False),
            "brush_material": brush if brush in BRUSHES else "sand",
            "config_name": initial.get("config_name", ""),
            "paused": False,
        }
        self.on_save = on_save
        self.on_clear = on_clear
        self.on_step = on_step
        self.on_load_config = on_load_config
        self._selected_config: str | None = initial.get("selected_config")
        self._font = None
        self._tooltip_font = None
        self._tooltip_small_font = None
        self._slider_rects: dict = {}
        self._button_rects: dict[str, pygame.Rect] = {}
        self._brush_rects: dict[str, pygame.Rect] = {}
        self._tooltip_rects: dict[str, pygame.Rect] = {}
        self._dragging: str | None = None
        self._config_name_focus = False
        self._config_name_buffer = ""
        self._config_dropdown_expanded = False
        self._config_dropdown_option_rects: list[tuple[str, pygame.Rect]] = []
        self._hover_tooltip: tooltips.Tooltip | None = None

    def _ensure_font(self) -> pygame.font.Font:
        if self._font is None:
            self._font = pygame.font.Font(None, FONT_SIZE)
        return self._font

    def _ensure_tooltip_fonts(self) -> tuple[pygame.font.Font, pygame.font.Font]:
        if self._tooltip_font is None:
            self._tooltip_font = pygame.font.Font(None, TOOLTIP_FONT_SIZE)
            self._tooltip_small_font = pygame.font.Font(None, TOOLTIP_SMALL_FONT_SIZE)
        return self._tooltip_font, self._tooltip_small_font

    def get_params(self) -> dict:
        return self.params.copy()

    def brush(self) -> Material | None:
        """Selected material, or None for the eraser."""
        name = self.params["brush_material"]
        return None if name == ERASER else Material.from_name(name)

    def select_brush(self, name: str) -> None:
        if name in BRUSHES:
            self.params["brush_material"] = name

    def toggle_pause(self) -> None:
        self.params["paused"] = not self.params["paused"]

    def _button(self, surface: pygame.Surface, key: str, rect: pygame.Rect, text: str) -> None:
        font = self._ensure_font()
        color = BUTTON_HOVER if rect.collidepoint(pygame.mouse.get_pos()) else BUTTON_COLOR
        pygame.draw.rect(surface, color, rect)
        surface.blit(font.render(text, True, LABEL_COLOR), (rect.x + 6, rect.y + 4))
        self._button_rects[key] = rect

    def draw(self, surface: pygame.Surface, tick_count: int = 0, seed_used: int | None = None) -> None:
        font = self._ensure_font()
        x, y = self.rect.x + 8, self.rect.y + 6
        line_h = 18
        gap = 4
        self._slider_rects.clear()
        self._button_rects.clear()
        self._brush_rects.clear()
        self._tooltip_rects.clear()

        slider_w = self.rect.width - 16 - 44  # leave 44px for value text
        slider_h = 12

        surface.blit(font.render(f"Tick: {tick_count}", True, LABEL_COLOR), (x, y))
        y += line_h
        if seed_used is not None:
            surface.blit(font.render(f"Seed: {seed_used}", True, LABEL_COLOR), (x, y))
            y += line_h
        y += gap

        # Brush swatches: two columns, material color + name; selected gets a bright border
        surface.blit(font.render("Brush", True, LABEL_COLOR), (x, y))
        y += line_h
        col_w = (self.rect.width - 20) // 2
        for n, name in enumerate(BRUSHES):
            bx = x + (n % 2) * (col_w + 4)
            by = y + (n // 2) * (line_h + gap + 4)
            r = pygame.Rect(bx, by, col_w, line_h + 4)
            color = BUTTON_HOVER if r.collidepoint(pygame.mouse.get_pos()) else BUTTON_COLOR
            pygame.draw.rect(surface, color, r)
            swatch = pygame.Rect(bx + 4, by + 4, 14, 14)
            if name == ERASER:
                pygame.draw.rect(surface, LABEL_COLOR, swatch, 1)
                pygame.draw.line(surface, LABEL_COLOR, swatch.topleft, swatch.bottomright)
            else:
                pygame.draw.rect(surface, self.materials.base_color(Material.from_name(name))[:3], swatch)
            surface.blit(font.render(f"{n + 1} {name.capitalize()}", True, LABEL_COLOR), (bx + 24, by + 4))
            if self.params["brush_material"] == name:
                pygame.draw.rect(surface, SELECTED_BORDER, r, 1)
            self._brush_rects[name] = r
            self._tooltip_rects[name] = r
        y += ((len(BRUSHES) + 1) // 2) * (line_h + gap + 4) + gap

        # Tick rate
        row_y = y
        surface.blit(font.render(f"Tick rate ({TICK_RATE_MIN}–{TICK_RATE_MAX})", True, LABEL_COLOR), (x, y))
        y += line_h
        sr = _draw_slider(surface, x, y, slider_w, slider_h, self.params["tick_rate"], TICK_RATE_MIN, TICK_RATE_MAX)
        _draw_slider_value(surface, font, x + slider_w + 4, y, str(self.params["tick_rate"]))
        self._slider_rects["tick_rate"] = (sr, TICK_RATE_MIN, TICK_RATE_MAX)
        self._tooltip_rects["tick_rate"] = pygame.Rect(x, row_y, self.rect.width - 16, line_h + slider_h + gap)
        y += slider_h + gap

        # Settled tint toggle
        box = pygame.Rect(x, y + 2, 14, 14)
        pygame.draw.rect(surface, KNOB_COLOR if self.params["tint_settled"] else SLIDER_COLOR, box)
        pygame.draw.rect(surface, LABEL_COLOR, box, 1)
        surface.blit(font.render("Tint settled grains", True, LABEL_COLOR), (x + 18, y + 2))
        self._button_rects["tint_settled"] = box.union(
            pygame.Rect(x, y, 18 + font.size("Tint settled grains")[0], 18)
        )
        self._tooltip_rects["tint_settled"] = self._button_rects["tint_settled"]
        y += 18 + gap * 2

        # Pause / Step / Clear
        btn_h = 26
        self._button(surface, "pause", pygame.Rect(x, y, 80, btn_h), "Resume" if self.params["paused"] else "Pause")
        if self.params["paused"]:
            self._button(surface, "step", pygame.Rect(x + 84, y, 60, btn_h), "Step")
        self._button(surface, "clear", pygame.Rect(x + 148, y, 70, btn_h), "Clear")
        y += btn_h + gap * 2

        # Config dropdown (saved settings)
        surface.blit(font.render("Config", True, LABEL_COLOR), (x, y))
        y += line_h
        drop_w, drop_h = 200, 18
        self._config_dropdown_rect = pygame.Rect(x, y, drop_w, drop_h)
        pygame.draw.rect(surface, SLIDER_COLOR, self._config_dropdown_rect)
        pygame.draw.polygon(surface, LABEL_COLOR, [(x + drop_w - 12, y + 4), (x + drop_w - 6, y + 4), (x + drop_w - 9, y + 11)])
        current = self._selected_config if self._selected_config is not None else "—"
        surface.blit(font.render(current[:28], True, LABEL_COLOR), (x + 4, y + 2))
        y += drop_h + gap
        self._config_dropdown_option_rects.clear()
        if self._config_dropdown_expanded:
            for name in config.list_configs():
                opt_rect = pygame.Rect(x, y, drop_w, drop_h)
                color = BUTTON_HOVER if opt_rect.collidepoint(pygame.mouse.get_pos()) else BUTTON_COLOR
                pygame.draw.rect(surface, color, opt_rect)
                surface.blit(font.render(name[:28], True, LABEL_COLOR), (opt_rect.x + 4, opt_rect.y + 2))
                self._config_dropdown_option_rects.append((name, opt_rect))
                y += drop_h + 1
        y += gap

        # Name field + Save/Update
        surface.blit(font.render("Name", True, LABEL_COLOR), (x, y))
        y += line_h
        name_w = 120
        self._config_name_rect = pygame.Rect(x, y, name_w, 18)
        pygame.draw.rect(surface, SLIDER_COLOR, self._config_name_rect)
        display_name = self._config_name_buffer if self._config_name_focus else self.params["config_name"]
        surface.blit(font.render(display_name[:20], True, LABEL_COLOR), (x + 4, y + 1))
        effective = (self._config_name_buffer if self._config_name_focus else self.params["config_name"]).strip()
        exists = effective != "" and config.config_exists(effective)
        self._button(surface, "save", pygame.Rect(x + name_w + 6, y - 4, 100, btn_h), "Update" if exists else "Save")

    def update_hover_tooltip(self, pos: tuple[int, int]) -> None:
        self._hover_tooltip = None
        for key, r in self._tooltip_rects.items():
            if r.collidepoint(pos):
                if key in BRUSHES and key != ERASER:
                    self._hover_tooltip = tooltips.material_tooltip(self.materials[Material.from_name(key)])
                else:
                    self._hover_tooltip = tooltips.PARAM_TOOLTIPS.get(key)
                return

    def draw_tooltip(self, surface: pygame.Surface) -> None:
        tf, sf = self._ensure_tooltip_fonts()
        tooltips.draw_tooltip(surface, tf, sf, self._hover_tooltip, pygame.mouse.get_pos())

    def handle_event(self, event: pygame.event.Event) -> bool:
        """Returns True if event was consumed."""
        if event.type == pygame.MOUSEBUTTONDOWN:
            if not self.rect.collidepoint(event.pos) and not self._config_dropdown_expanded:
                return False
            if getattr(self, "_config_name_rect", None) and self._config_name_rect.collidepoint(event.pos):
                self._config_name_focus = True
                self._config_name_buffer = self.params["config_name"]
                return True
            if self._config_name_focus:
                self._apply_config_name_buffer()
            self._config_name_focus = False
            if getattr(self, "_config_dropdown_rect", None) and self._config_dropdown_rect.collidepoint(event.pos):
                self._config_dropdown_expanded = not self._config_dropdown_expanded
                return True
            for name, opt_rect in self._config_dropdown_option_rects:
                if opt_rect.collidepoint(event.pos):
                    self._selected_config = name
                    self.params["config_name"] = name
                    self._config_dropdown_expanded = False
                    if self.on_load_config:
                        self.on_load_config(name)
                    return True
            self._config_dropdown_expanded = False
            for name, r in self._brush_rects.items():
                if r.collidepoint(event.pos):
                    self.select_brush(name)
                    return True
            for key, (slider_rect, lo, hi) in self._slider_rects.items():
                if slider_rect.collidepoint(event.pos):
                    self._dragging = key
                    self._set_slider_value(key, event.pos, slider_rect, lo, hi)
                    return True
            for key, btn_rect in self._button_rects.items():
                if btn_rect.collidepoint(event.pos):
                    if key == "pause":
                        self.toggle_pause()
                    elif key == "step":
                        self.on_step()
                    elif key == "clear":
                        self.on_clear()
                    elif key == "tint_settled":
                        self.params["tint_settled"] = not self.params["tint_settled"]
                    elif key == "save":
                        self.on_save()
                        self._selected_config = config._sanitize_name(self.params["config_name"])
                    return True
            return self.rect.collidepoint(event.pos)
        if event.type == pygame.KEYDOWN and self._config_name_focus:
            if event.key == pygame.K_RETURN:
                self._config_name_focus = False
                self._apply_config_name_buffer()
            elif event.key == pygame.K_BACKSPACE:
                self._config_name_buffer = self._config_name_buffer[:-1]
            elif event.unicode and len(self._config_name_buffer) < 48:
                self._config_name_buffer += event.unicode
            return True
        if event.type == pygame.MOUSEBUTTONUP:
            if self._dragging is not None:
                self._dragging = None
                return True
        elif event.type == pygame.MOUSEMOTION:
            self.update_hover_tooltip(event.pos)
            if self._dragging is not None:
                sr, lo, hi = self._slider_rects[self._dragging]
                self._set_slider_value(self._dragging, event.pos, sr, lo, hi)
                return True
        return False

    def _apply_config_name_buffer(self) -> None:
        self.params["config_name"] = self._config_name_buffer.strip()[:64]
        self._config_name_buffer = ""

    def apply_config(self, cfg: dict) -> None:
        """Load a config dict into panel params (e.g. after loading a saved config)."""
        self.params["tick_rate"] = cfg.get("tick_rate", self.params["tick_rate"])
        self.params["tint_settled"] = cfg.get("tint_settled", self.params["tint_settled"])
        self.select_brush(cfg.get("brush_material", self.params["brush_material"]))

    def _set_slider_value(self, key: str, pos: tuple[int, int], slider_rect: pygame.Rect, lo: int, hi: int) -> None:
        t = (pos[0] - slider_rect.x) / max(1, slider_rect.width - 8)
        t = max(0, min(1, t))
        self.params[key] = int(lo + t * (hi - lo))

    def config_dict(self, base: dict) -> dict:
        """base (the loaded config) updated with the panel's current settings."""
        return {
            **base,
            "tick_rate": self.params["tick_rate"],
            "tint_settled": self.params["tint_settled"],
            "brush_material": self.params["brush_material"],
        }


def _draw_slider(
    surface: pygame.Surface, x: int, y: int, w: int, h: int, value: int, vmin: int, vmax: int
) -> pygame.Rect:
    rect = pygame.Rect(x, y, w, h)
    pygame.draw.rect(surface, SLIDER_COLOR, rect)
    t = (value - vmin) / max(1, vmax - vmin)
    knob_x = x + 4 + int(t * (w - 8))
    pygame.draw.rect(surface, KNOB_COLOR, (knob_x, y, 8, h))
    return rect


def _draw_slider_value(
    surface: pygame.Surface, font: pygame.font.Font, x: int, y: int, value_str: str
) -> None:
    text = font.render(value_str, True, LABEL_COLOR)
    surface.blit(text, (x, y))

"""Tooltip text for panel controls and material buttons, plus drawing."""

import pygame

from world.materials import MaterialSpec

TOOLTIP_BG = (28, 28, 32)
TOOLTIP_BORDER = (60, 60, 68)
TOOLTIP_TEXT = (240, 240, 235)
TOOLTIP_DETAIL = (150, 150, 148)
TOOLTIP_MAX_WIDTH = 220
TOOLTIP_PADDING = 6
TOOLTIP_OFFSET_Y = 8
TOOLTIP_GAP = 4

Tooltip = tuple[str, str | None]

# (description, detail). Key = control name matching panel _tooltip_rects.
PARAM_TOOLTIPS: dict[str, Tooltip] = {
    "tick_rate": (
        "Simulation ticks per second. One tick moves every grain once; the window redraws once per tick.",
        "Min = slow motion; max = 120 ticks per second if the machine keeps up.",
    ),
    "tint_settled": (
        "Shade grains by rest state: grains that have settled are drawn darker, grains still falling "
        "or rolling are drawn brighter.",
        None,
    ),
    "eraser": ("Right mouse also erases with any material selected.", None),
}


def material_tooltip(spec: MaterialSpec) -> Tooltip:
    name = spec.material.name.capitalize()
    if spec.is_movable_solid:
        desc = (
            f"{name}: falls, piles and rolls off slopes. Rolls sideways at {spec.roll_speed:g} cell/tick; "
            f"resists being knocked loose by moving neighbors with weight {spec.inertial_resistance:g}."
        )
        detail = "Low resistance = loose, slides easily; high = packs into steep piles."
    elif spec.is_solid:
        desc = f"{name}: fixed solid. Never moves; grains pile on it."
        detail = None
    else:
        desc = f"{name}: no physics yet, painted as a static fill that grains fall through."
        detail = None
    return desc, detail


def wrap_tooltip_text(text: str, font: pygame.font.Font, max_width: int) -> list[str]:
    words = text.split()
    lines = []
    current: list[str] = []
    for word in words:
        w, _ = font.size(" ".join(current + [word]))
        if current and w > max_width:
            lines.append(" ".join(current))
            current = [word]
        else:
            current.append(word)
    if current:
        lines.append(" ".join(current))
    return lines


def _box_width(font: pygame.font.Font, lines: list[str]) -> int:
    return min(
        TOOLTIP_MAX_WIDTH + 2 * TOOLTIP_PADDING,
        max((font.size(l)[0] for l in lines), default=0) + 2 * TOOLTIP_PADDING,
    )


def draw_tooltip(
    surface: pygame.Surface,
    font: pygame.font.Font,
    small_font: pygame.font.Font,
    tooltip: Tooltip | None,
    mouse_pos: tuple[int, int],
) -> None:
    if not tooltip or not tooltip[0]:
        return
    desc, detail = tooltip
    mx, my = mouse_pos
    lines_desc = wrap_tooltip_text(desc, font, TOOLTIP_MAX_WIDTH)
    lines_detail = wrap_tooltip_text(detail, small_font, TOOLTIP_MAX_WIDTH) if detail else []
    box_w = max(_box_width(font, lines_desc), _box_width(small_font, lines_detail))
    box_h = len(lines_desc) * font.get_height() + 2 * TOOLTIP_PADDING
    if lines_detail:
        box_h += TOOLTIP_GAP + len(lines_detail) * small_font.get_height()

    # Prefer below-right of the cursor; flip when it would leave the screen.
    sw, sh = surface.get_size()
    tx = mx + 12 if mx + 12 + box_w <= sw else mx - box_w - 12
    ty = my + TOOLTIP_OFFSET_Y if my + TOOLTIP_OFFSET_Y + box_h <= sh else my - box_h - TOOLTIP_OFFSET_Y
    tx = max(0, min(tx, sw - box_w))
    ty = max(0, min(ty, sh - box_h))
    rect = pygame.Rect(tx, ty, box_w, box_h)
    pygame.draw.rect(surface, TOOLTIP_BG, rect)
    pygame.draw.rect(surface, TOOLTIP_BORDER, rect, 1)

    y_off = ty + TOOLTIP_PADDING
    for line in lines_desc:
        surface.blit(font.render(line, True, TOOLTIP_TEXT), (tx + TOOLTIP_PADDING, y_off))
        y_off += font.get_height()
    if lines_detail:
        y_off += TOOLTIP_GAP
        for line in lines_detail:
            surface.blit(small_font.render(line, True, TOOLTIP_DETAIL), (tx + TOOLTIP_PADDING, y_off))
            y_off += small_font.get_height()

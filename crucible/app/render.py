# crucible/app/render.py
#!/usr/bin/env python3
"""
Static snapshot of a search, written to an image file.

Draws onto an off-screen pygame Surface, so no window or display is needed:
- cells shaded from asphalt gray (cheap) to red (expensive), black borders
- closed cells tinted magenta
- the accepted route as a mint line
- start / goal badges
"""

import logging
import os
from pathlib import Path
from typing import List, Optional, Tuple, Union

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")
import pygame

from crucible.core.config import DEFAULTS
from crucible.core.search import CrucibleSearch
from crucible.core.types import Cell, Grid

log = logging.getLogger("crucible.render")

# Colors
WHITE       = (255,255,255)
BLACK       = (  0,  0,  0)
BLUE        = ( 70,130,180)
RED         = (220, 50, 47)
ASPHALT_GRAY= (200,200,200)
BG_DARK     = ( 24, 26, 32)
NEON_MAG_A  = (255,0,120,90)
NEON_MINT   = (0,255,200)

MAX_COST = 9


def _shade(cost: int) -> Tuple[int, int, int]:
    t = min(max(cost, 0), MAX_COST) / MAX_COST
    return (
        int(ASPHALT_GRAY[0] + (RED[0] - ASPHALT_GRAY[0]) * t),
        int(ASPHALT_GRAY[1] + (RED[1] - ASPHALT_GRAY[1]) * t),
        int(ASPHALT_GRAY[2] + (RED[2] - ASPHALT_GRAY[2]) * t),
    )


def auto_cell_size(grid: Grid, max_px: Optional[int] = None) -> int:
    settings = DEFAULTS["render"]
    max_px = max_px or settings["max_px"]
    avail = max_px - 2 * settings["margin"]
    fit = avail // max(grid.width, grid.height)
    return max(2, min(settings["cell_size"], fit))


def render_surface(search: CrucibleSearch, cell_size: Optional[int] = None) -> pygame.Surface:
    grid = search.grid
    if grid is None:
        raise RuntimeError("search has no grid; call init() first")
    cs = cell_size or auto_cell_size(grid)
    margin = DEFAULTS["render"]["margin"]
    ox, oy = margin, margin

    surf = pygame.Surface((grid.width * cs + 2 * margin, grid.height * cs + 2 * margin))
    surf.fill(BG_DARK)

    for row in range(grid.height):
        for col in range(grid.width):
            rect = pygame.Rect(ox + col*cs, oy + row*cs, cs, cs)
            pygame.draw.rect(surf, _shade(grid.cost_at((row, col))), rect)
            if cs >= 6:
                pygame.draw.rect(surf, BLACK, rect, 1)

    # overlays
    closed_cells = {s.pos for s in search.closed_set}
    tint = pygame.Surface((cs, cs), pygame.SRCALPHA); tint.fill(NEON_MAG_A)
    for (row, col) in closed_cells:
        surf.blit(tint, (ox + col*cs, oy + row*cs))

    # path
    path: List[Cell] = search.path() if search.done else []
    if len(path) >= 2:
        pts = [(ox + col*cs + cs//2, oy + row*cs + cs//2) for (row, col) in path]
        glow = pygame.Surface(surf.get_size(), pygame.SRCALPHA)
        pygame.draw.lines(glow, (0, 255, 220, 60), False, pts, max(3, cs // 3))
        surf.blit(glow, (0, 0), special_flags=pygame.BLEND_ADD)
        pygame.draw.lines(surf, NEON_MINT, False, pts, max(1, cs // 5))

    _draw_badge(surf, grid.start, "S", BLUE, cs, (ox, oy))
    _draw_badge(surf, grid.goal,  "G", RED,  cs, (ox, oy))
    return surf


def _draw_badge(surf: pygame.Surface, cell: Cell, label: str, color: Tuple[int, int, int],
                cs: int, origin: Tuple[int, int]) -> None:
    ox, oy = origin
    row, col = cell
    cx = ox + col*cs + cs//2
    cy = oy + row*cs + cs//2
    pygame.draw.circle(surf, color, (cx, cy), max(2, cs//2 - 2))
    if cs < 12:
        return
    if not pygame.font.get_init():
        pygame.font.init()
    font = pygame.font.Font(None, max(10, cs - 6))
    txt = font.render(label, True, WHITE)
    surf.blit(txt, txt.get_rect(center=(cx, cy)))


def render_search(search: CrucibleSearch, out_path: Union[str, Path],
                  cell_size: Optional[int] = None) -> Path:
    """Render the search state to an image file (format from the extension)."""
    out = Path(out_path)
    surf = render_surface(search, cell_size)
    out.parent.mkdir(parents=True, exist_ok=True)
    pygame.image.save(surf, str(out))
    log.info("wrote %s (%dx%d px)", out, surf.get_width(), surf.get_height())
    return out

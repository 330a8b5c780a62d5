"""
overlays.py

Pygame on-screen message renderer for the gst backend.
"""

from __future__ import annotations

import pygame, config

# ── colours ────────────────────────────────────────────────────────────────
WHITE = (255, 255, 255)
YEL   = (200, 200, 50)
BG    = (0, 0, 0, 180)

pygame.font.init()


# ── helpers ────────────────────────────────────────────────────────────────
def _compute_font_sizes(h: int) -> tuple[int, int]:
    return max(12, h // 45), max(16, h // 30)


def _fmt_hmsf(sec: float, fps: int) -> str:
    tf     = int(max(0.0, sec) * fps + 1e-4)
    frame  = tf % fps
    s_int  = tf // fps
    m, s   = divmod(s_int, 60)
    h, m   = divmod(m, 60)
    return f"{h:02d}:{m:02d}:{s:02d}:{frame:02d}"


# ── main entry point ───────────────────────────────────────────────────────
def draw_osd(surface: pygame.Surface, text: str, position: float | None = None) -> None:
    """Top-left message panel plus an optional bottom-right timestamp."""
    sw, sh = surface.get_width(), surface.get_height()
    small_pt, large_pt = _compute_font_sizes(sh)
    FS = pygame.font.SysFont("monospace", small_pt)
    FL = pygame.font.SysFont("monospace", large_pt)

    # ── message panel ───────────────────────────────────────────────────
    lines = text.splitlines() or [""]
    widest = max(FL.size(t)[0] for t in lines)
    pbg = pygame.Surface(
        (widest + 20, len(lines) * (FL.get_linesize() + 2) + 10),
        pygame.SRCALPHA,
    )
    pbg.fill(BG)
    y = 5
    for t in lines:
        pbg.blit(FL.render(t, True, WHITE), (10, y))
        y += FL.get_linesize() + 2
    surface.blit(pbg, (10, 10))

    if position is None:
        return

    # ── bottom-right timestamp ──────────────────────────────────────────
    tssurf = FS.render(_fmt_hmsf(position, config.FPS), True, YEL)
    tsbg   = pygame.Surface(
        (tssurf.get_width() + small_pt // 3, tssurf.get_height() + small_pt // 5),
        pygame.SRCALPHA,
    )
    tsbg.fill(BG)
    tsbg.blit(tssurf, (small_pt // 6, small_pt // 10))
    surface.blit(tsbg, (sw - tsbg.get_width() - 10, sh - tsbg.get_height() - 10))

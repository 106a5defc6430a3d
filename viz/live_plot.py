# viz/live_plot.py
from __future__ import annotations
import os
from collections import deque
from typing import Deque, Optional

import pygame as pg

from config import AppConfig

BG = (18, 18, 24)
GRID = (48, 48, 60)
LINE = (80, 200, 120)
TEXT = (230, 230, 230)


class PlotClosed(Exception):
    """Raised from emit() once the user closes the plot window."""


class LivePlot:
    """Sink that draws the emitted means as a scrolling line chart.

    open() creates a window; attach_surface() draws into a caller-owned surface
    instead (the caller flips and paces). Every emit() redraws one frame;
    closing the window raises PlotClosed so the feeding loop stops.
    """
    def __init__(self, cfg: AppConfig, window: Optional[int] = None):
        if isinstance(cfg, type):
            raise TypeError("Pass an AppConfig instance (use AppConfig()), not the class.")
        self.cfg = cfg
        self.window = window if window is not None else cfg.window
        self.history: Deque[float] = deque(maxlen=max(2, cfg.plot_history))
        self.surf: Optional[pg.Surface] = None
        self.clock: Optional[pg.time.Clock] = None
        self._auto_flip = True
        self._frame_idx = 0
        self._emitted = 0
        self._font: Optional[pg.font.Font] = None

    def open(self) -> None:
        pg.init()
        pg.display.set_caption(self.cfg.render_title)
        self.surf = pg.display.set_mode((self.cfg.render_width, self.cfg.render_height))
        self.clock = pg.time.Clock()
        self._auto_flip = True
        self._frame_idx = 0
        if self.cfg.render_record_dir:
            os.makedirs(self.cfg.render_record_dir, exist_ok=True)

    def attach_surface(self, surface: pg.Surface) -> None:
        if not pg.get_init():
            pg.init()
        self.surf = surface
        self.clock = None
        self._auto_flip = False

    # --- Sink ---
    def emit(self, value: float) -> None:
        if self.surf is None:
            raise RuntimeError("LivePlot.open() or attach_surface() must be called first")
        self.history.append(float(value))
        self._emitted += 1
        self.draw()
        self.tick(self.cfg.fps)

    def close(self) -> None:
        if self._auto_flip and self.surf is not None:
            pg.quit()
        self.surf = None
        self.clock = None

    # --- drawing ---
    def draw(self) -> None:
        assert self.surf is not None, "LivePlot not opened"
        surf = self.surf
        w, h = surf.get_size()

        if any(event.type == pg.QUIT for event in pg.event.get()):
            self.close()
            raise PlotClosed("plot window closed")

        surf.fill(BG)
        for gy in range(1, 4):
            y = h * gy // 4
            pg.draw.line(surf, GRID, (0, y), (w, y))

        pts = self._points(w, h)
        if len(pts) >= 2:
            pg.draw.lines(surf, LINE, False, pts, 2)
        elif pts:
            pg.draw.circle(surf, LINE, pts[0], 2)

        if self.cfg.render_show_hud and self.history:
            if self._font is None:
                pg.font.init()
                self._font = pg.font.SysFont(None, 22)
            txt = self._font.render(
                f"Window: {self.window}   Emitted: {self._emitted}   Mean: {self.history[-1]:.5f}",
                True, TEXT,
            )
            surf.blit(txt, (6, 4))

        if self._auto_flip:
            pg.display.flip()

        if self.cfg.render_record_dir:
            self._save_surface_frame()

    def tick(self, fps: int) -> None:
        if self.clock:
            self.clock.tick(fps)

    # internals
    def _points(self, w: int, h: int) -> list[tuple[int, int]]:
        if not self.history:
            return []
        lo, hi = min(self.history), max(self.history)
        span = hi - lo or 1.0
        pad = 24
        n = self.history.maxlen or len(self.history)
        dx = w / max(1, n - 1)
        return [
            (int(i * dx), int(h - pad - (v - lo) / span * (h - 2 * pad)))
            for i, v in enumerate(self.history)
        ]

    def _save_surface_frame(self) -> None:
        assert self.surf is not None
        fname = os.path.join(self.cfg.render_record_dir, f"frame_{self._frame_idx:06d}.png")
        pg.image.save(self.surf, fname)
        self._frame_idx += 1

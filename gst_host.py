#!/usr/bin/env python3
"""
gst_host.py – GStreamer + pygame player host

Plays through VideoPlayer and draws frames and on-screen messages into a
pygame window.  Input is dispatched by events.py.

sync mode: one VideoPlayer; load_file() opens the new path on a fresh one
and swaps it in only once it plays.
fast mode: a second, muted VideoPlayer decodes the external file on the
main pipeline's clock.  Both are exposed as video tracks 1 and 2 and the
active one is the one rendered.
"""
from __future__ import annotations

import time
from typing import Optional, Sequence

import pygame

import config
from events       import EventManager
from host         import Dispatch, PlayerHost
from labels       import basename
from overlays     import draw_osd
from video_player import VideoPlayer


# ── helpers ────────────────────────────────────────────────────────────────
def render_frame(screen: pygame.Surface, frame, sar: float) -> None:
    """Scale and letter-/pillar-box a raw RGB frame onto `screen`."""
    screen.fill((0, 0, 0))
    if frame is None:
        return
    surf = pygame.image.frombuffer(frame, frame.shape[1::-1], "RGB")
    sw, sh = screen.get_size()
    vw, vh = surf.get_size()
    scale = min(sw / (vw * sar), sh / vh)
    surf = pygame.transform.scale(surf, (int(vw * scale * sar), int(vh * scale)))
    screen.blit(surf, ((sw - surf.get_width()) // 2, (sh - surf.get_height()) // 2))


# ── host ───────────────────────────────────────────────────────────────────
class GstHost(PlayerHost):
    def __init__(self, files: Sequence[str], external: Optional[str] = None):
        # window ----------------------------------------------------------
        pygame.init()
        pygame.mouse.set_visible(False)
        self.screen = pygame.display.set_mode(
            (0, 0) if config.FULLSCREEN else config.WINDOWED_SIZE,
            pygame.FULLSCREEN if config.FULLSCREEN else 0,
        )
        pygame.display.set_caption("A/B compare")
        self.clock = pygame.time.Clock()

        # players ---------------------------------------------------------
        self.files    = list(files)
        self.external = external
        self.main     = VideoPlayer()
        self.ext      = VideoPlayer() if external else None
        self.vid      = 1

        # osd -------------------------------------------------------------
        self.osd_text   = ""
        self.osd_expire = 0.0

    # ── properties ─────────────────────────────────────────────────────────
    def time_pos(self) -> Optional[float]:
        return self.main.get_position_sec()

    def is_paused(self) -> bool:
        return self.main.paused

    def set_paused(self, paused: bool) -> None:
        self.main.set_paused(paused)
        self._resync()

    def path(self) -> Optional[str]:
        return self.main.path or None

    def playlist(self) -> list[dict]:
        return [{"filename": fp} for fp in self.files]

    def track_list(self) -> list[dict]:
        tracks = [{"id": 1, "type": "video", "external": False}]
        if self.ext:
            tracks.append({
                "id": 2, "type": "video", "external": True,
                "external-filename": self.external,
            })
        return tracks

    def set_video_track(self, track_id: int) -> None:
        self.vid = track_id

    # ── commands ───────────────────────────────────────────────────────────
    def seek_to(self, sec: float) -> None:
        self.main.seek_to(sec)
        self._resync()

    def load_file(self, path: str, token: Optional[int] = None) -> None:
        # open on a fresh player so a bad file leaves the current one playing
        player = VideoPlayer()
        if not player.open(path):
            self._report_open_failure(path, player.error)
            EventManager.post({"type": "load_failed", "token": token})
            return
        self.main.close()
        self.main = player
        self._resync()
        EventManager.post({"type": "file_loaded", "token": token})

    def osd_message(self, text: str, duration: float) -> None:
        self.osd_text   = text
        self.osd_expire = time.time() + duration

    def _report_open_failure(self, path: str, reason: str) -> None:
        print(f"[gst_host] cannot open {path}: {reason}")
        self.osd_message(f"ERROR: cannot open {basename(path)}", config.OSD_WARNING_SEC)

    def _resync(self) -> None:
        if self.ext:
            self.ext.slave_to(self.main)

    # ── lifecycle ──────────────────────────────────────────────────────────
    def start(self) -> None:
        if not self.main.open(self.files[0]):
            # window stays up showing the error
            self._report_open_failure(self.files[0], self.main.error)
            return
        if self.ext and not self.ext.open(self.external):
            print(f"[gst_host] cannot open {self.external}: {self.ext.error}")
            self.ext = None
        elif self.ext:
            self.ext.set_volume(0.0)
            self.ext.slave_to(self.main)
        EventManager.post({"type": "file_loaded", "token": None})

    def run(self, dispatch: Dispatch) -> None:
        running = True
        while running:
            for e in pygame.event.get():
                EventManager.handle(e)

            while running and (act := EventManager.poll()):
                running = dispatch(act)

            player = self.ext if (self.ext and self.vid == 2) else self.main
            render_frame(self.screen, player.decode_frame(), player.sar)

            if time.time() < self.osd_expire:
                draw_osd(self.screen, self.osd_text, self.time_pos())

            pygame.display.flip()
            self.clock.tick(config.FPS)

    def close(self) -> None:
        self.main.close()
        if self.ext:
            self.ext.close()
        pygame.quit()

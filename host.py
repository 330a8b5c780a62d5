"""
host.py – the player contract both togglers drive

A host owns decoding, the window and key capture.  Everything here is a
request: loads complete later, property writes are fire-and-forget.

load_file() takes the caller's request token and the host echoes it back
on the completion action, {"type": "file_loaded", "token": n}, or on
{"type": "load_failed", "token": n} when the file cannot be opened.  A
host that cannot tell which request a completion belongs to posts
token None.

Track descriptors are plain dicts with the keys mpv uses in `track-list`:
"id", "type", "external", "external-filename", "title".
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Optional

Action = dict
Dispatch = Callable[[Action], bool]


class PlayerHost(ABC):
    # ── properties ──────────────────────────────────────────────────────
    @abstractmethod
    def time_pos(self) -> Optional[float]: ...

    @abstractmethod
    def is_paused(self) -> bool: ...

    @abstractmethod
    def set_paused(self, paused: bool) -> None: ...

    @abstractmethod
    def path(self) -> Optional[str]: ...

    @abstractmethod
    def playlist(self) -> list[dict]: ...

    @abstractmethod
    def track_list(self) -> list[dict]: ...

    @abstractmethod
    def set_video_track(self, track_id: int) -> None: ...

    # ── commands ────────────────────────────────────────────────────────
    @abstractmethod
    def seek_to(self, sec: float) -> None: ...

    @abstractmethod
    def load_file(self, path: str, token: Optional[int] = None) -> None:
        """Replace the current file; completion arrives as a file_loaded action."""

    @abstractmethod
    def osd_message(self, text: str, duration: float) -> None: ...

    # transport keys; hosts with their own bindings may leave these alone
    def toggle_pause(self) -> None:
        self.set_paused(not self.is_paused())

    def seek_relative(self, delta: float) -> None:
        self.seek_to(max(0.0, (self.time_pos() or 0.0) + delta))

    # ── lifecycle ───────────────────────────────────────────────────────
    @abstractmethod
    def start(self) -> None: ...

    @abstractmethod
    def run(self, dispatch: Dispatch) -> None:
        """Drain actions on the calling thread until dispatch returns False."""

    def close(self) -> None:
        pass

#!/usr/bin/env python3
"""
mpv_host.py – libmpv player host (python-mpv)

mpv decodes, renders, keeps its own default key bindings and draws the
OSD.  The A/B keys are registered as forced bindings whose callbacks, like
the file-loaded and shutdown events, run on libmpv's event thread and only
post actions; run() drains them on the calling thread.

Completions are tied to requests through mpv's playlist entry ids: loadfile
returns the id of the entry it creates, and the file-loaded callback reads
the id of the entry now current.

sync mode: both files go on mpv's playlist, the first one plays.
fast mode: the second file is attached with --external-file, so mpv
decodes it as an alternate video track of the first.
"""
from __future__ import annotations

from typing import Optional, Sequence

import mpv

import config
from events import EventManager
from host   import Dispatch, PlayerHost


class MpvHost(PlayerHost):
    def __init__(self, files: Sequence[str], external: Optional[str] = None,
                 bindings: Optional[dict[str, str]] = None):
        opts = dict(config.MPV_OPTIONS)
        if external:
            opts["external_file"] = external
        self.mpv = mpv.MPV(**opts)
        self.files = list(files)
        self.tokens: dict[int, int] = {}     # playlist entry id → request token

        # keys the toggler does not handle keep their mpv defaults
        if bindings is None:
            bindings = config.KEY_BINDINGS
        for key, command in bindings.items():
            self.mpv.register_key_binding(key, self._key_callback(command))

        self.mpv.event_callback("file-loaded")(self._on_file_loaded)
        self.mpv.event_callback("shutdown")(self._on_shutdown)

    # ── libmpv thread → action queue ───────────────────────────────────────
    @staticmethod
    def _key_callback(command: str):
        def on_key(key_state, key_name=None, key_char=None):
            EventManager.post_key(command, key_state)
        return on_key

    def _on_file_loaded(self, event) -> None:
        entry = next((e for e in self.mpv.playlist or [] if e.get("current")), {})
        EventManager.post({"type": "file_loaded", "entry_id": entry.get("id")})

    @staticmethod
    def _on_shutdown(event) -> None:
        EventManager.post({"type": "quit"})

    # ── properties ─────────────────────────────────────────────────────────
    def time_pos(self) -> Optional[float]:
        return self.mpv.time_pos

    def is_paused(self) -> bool:
        return bool(self.mpv.pause)

    def set_paused(self, paused: bool) -> None:
        self.mpv.pause = paused

    def path(self) -> Optional[str]:
        return self.mpv.path

    def playlist(self) -> list[dict]:
        return self.mpv.playlist or []

    def track_list(self) -> list[dict]:
        return self.mpv.track_list or []

    def set_video_track(self, track_id: int) -> None:
        self.mpv.vid = track_id

    # ── commands ───────────────────────────────────────────────────────────
    def seek_to(self, sec: float) -> None:
        self.mpv.time_pos = sec

    def load_file(self, path: str, token: Optional[int] = None) -> None:
        result = self.mpv.node_command("loadfile", path, "replace")
        entry_id = result.get("playlist_entry_id") if isinstance(result, dict) else None
        if token is not None and entry_id is not None:
            self.tokens[entry_id] = token

    def osd_message(self, text: str, duration: float) -> None:
        self.mpv.command("show-text", text, int(duration * 1000))

    # ── lifecycle ──────────────────────────────────────────────────────────
    def start(self) -> None:
        for fp in self.files:
            self.mpv.playlist_append(fp)
        self.mpv.playlist_pos = 0

    def run(self, dispatch: Dispatch) -> None:
        while True:
            act = EventManager.wait(config.MPV_POLL_SEC)
            if act is None:
                continue
            if act.get("type") == "file_loaded":
                act["token"] = self.tokens.pop(act.pop("entry_id", None), None)
            if not dispatch(act):
                break

    def close(self) -> None:
        self.mpv.terminate()

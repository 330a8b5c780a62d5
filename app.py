#!/usr/bin/env python3
"""
app.py – action dispatcher for the A/B comparator

Owns the toggler for the chosen mode and its session state, and feeds it
one action at a time.  Hosts call dispatch() from their main loop; it
returns False when the session should end.
"""
from __future__ import annotations

from typing import Union

import config

from fast_toggle import FastState, FastToggler
from host import Action, PlayerHost
from sync_toggle import SyncState, SyncToggler

MODES = ("sync", "fast")
TOGGLERS = {"sync": SyncToggler, "fast": FastToggler}


def key_bindings_for(mode: str) -> dict[str, str]:
    """The configured A/B keys whose command the mode's toggler handles."""
    handled = TOGGLERS[mode].COMMANDS
    return {key: cmd for key, cmd in config.KEY_BINDINGS.items() if cmd in handled}


class ABCompare:
    def __init__(self, host: PlayerHost, mode: str = "sync"):
        if mode not in MODES:
            raise ValueError(f"unknown mode {mode!r} (expected one of {', '.join(MODES)})")

        self.host = host
        self.mode = mode
        self.toggler: Union[SyncToggler, FastToggler] = TOGGLERS[mode](host)
        self.state: Union[SyncState, FastState] = self.toggler.new_state()

    # ── main-loop entry point ─────────────────────────────────────────────
    def dispatch(self, act: Action) -> bool:
        t = act.get("type")
        if t == "quit":
            return False

        if t == "file_loaded":
            self.toggler.on_load_completed(self.state, act.get("token"))
        elif t == "load_failed":
            self.toggler.on_load_failed(self.state, act.get("token"))
        elif t == "key":
            self._dispatch_key(act.get("command", ""), act.get("phase", "press"))
        elif t == "pause":
            self.host.toggle_pause()
        elif t == "seek":
            self.host.seek_relative(act.get("delta", 0.0))
        return True

    def _dispatch_key(self, command: str, phase: str) -> None:
        # "press" is a down immediately followed by an up; repeats are dropped.
        # A press of the hold key would preview and return at once, so it is
        # dropped too.
        if phase == "press" and command == "hold":
            return
        if phase in ("down", "press"):
            self.toggler.on_key_down(self.state, command)
        if phase in ("up", "press"):
            self.toggler.on_key_up(self.state, command)

    # ── read-only view for the web remote ─────────────────────────────────
    def status_lines(self) -> list[str]:
        return self.toggler.status_lines(self.state)

#!/usr/bin/env python3
"""
events.py  – central hub

• Translates raw Pygame key events and mpv key states to action dicts.
• Exposes a thread-safe queue so *any* source (libmpv event thread, web
  remote, pygame pump) can inject actions; the host's main loop is the
  only consumer, so handlers never run concurrently.

Action shapes
-------------
    {"type": "file_loaded"}
    {"type": "key", "command": "toggle", "phase": "down" | "up" | "press" | "repeat"}
    {"type": "pause"}
    {"type": "seek", "delta": -5.0}
    {"type": "quit"}
"""

from __future__ import annotations
import queue
from pygame.locals import *

import config

Action = dict      # alias for readability

# pygame key codes → mpv key names used in config
_PYGAME_KEY_NAMES = {
    K_TAB:    "TAB",
    K_1:      "1",
    K_2:      "2",
    K_s:      "s",
    K_i:      "i",
    K_q:      "q",
    K_SPACE:  "SPACE",
    K_LEFT:   "LEFT",
    K_RIGHT:  "RIGHT",
    K_ESCAPE: "ESC",
}

# first character of python-mpv's key_state string
_MPV_PHASES = {"d": "down", "u": "up", "p": "press", "r": "repeat"}


class EventManager:
    _fifo: "queue.Queue[Action]" = queue.Queue()      # global, thread-safe

    # ── SDL / keyboard path ────────────────────────────────────────────
    @classmethod
    def handle(cls, event) -> None:
        """Translate one Pygame event → action and enqueue it."""
        act = cls._translate_pygame(event)
        if act:
            cls._fifo.put(act)

    # ── mpv key-binding path ───────────────────────────────────────────
    @classmethod
    def post_key(cls, command: str, key_state: str) -> None:
        """Called from libmpv's thread with python-mpv's key_state ("d-", "u-", …)."""
        phase = _MPV_PHASES.get(key_state[:1])
        if phase:
            cls._fifo.put({"type": "key", "command": command, "phase": phase})

    # ── external / programmatic path ───────────────────────────────────
    @classmethod
    def post(cls, action: Action) -> None:
        """
        Any thread may call this to inject an already-formed action dict, e.g.:
            EventManager.post({"type": "key", "command": "toggle", "phase": "press"})
        """
        cls._fifo.put(action)

    # ── main-loop consumer ─────────────────────────────────────────────
    @classmethod
    def poll(cls) -> Action | None:
        """Return next queued action or None (non-blocking)."""
        try:
            return cls._fifo.get_nowait()
        except queue.Empty:
            return None

    @classmethod
    def wait(cls, timeout: float) -> Action | None:
        """Blocking variant of poll() for loops with nothing to render."""
        try:
            return cls._fifo.get(timeout=timeout)
        except queue.Empty:
            return None

    @classmethod
    def clear(cls) -> None:
        while cls.poll() is not None:
            pass

    # ── internal translator ───────────────────────────────────────────
    @staticmethod
    def _translate_pygame(event) -> Action | None:
        if event.type == QUIT:
            return {"type": "quit"}

        if event.type not in (KEYDOWN, KEYUP):
            return None
        name = _PYGAME_KEY_NAMES.get(event.key)
        if name is None:
            return None

        phase = "down" if event.type == KEYDOWN else "up"
        command = config.KEY_BINDINGS.get(name)
        if command:
            return {"type": "key", "command": command, "phase": phase}

        if phase != "down":
            return None
        player = config.PLAYER_KEYS.get(name)
        if player == "pause":
            return {"type": "pause"}
        if player == "seek_back":
            return {"type": "seek", "delta": -config.SEEK_STEP}
        if player == "seek_forward":
            return {"type": "seek", "delta": config.SEEK_STEP}
        if player == "quit":
            return {"type": "quit"}
        return None

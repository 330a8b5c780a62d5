"""Recording stand-in for a player host.

Every request the togglers make is appended to ``calls`` so tests can
assert both on what happened and on what did not.
"""

from __future__ import annotations

import pytest

from events import EventManager
from host import PlayerHost


class FakeHost(PlayerHost):
    def __init__(self, files=None, tracks=None, current=None):
        self.files = list(files or [])
        self.tracks = list(tracks or [])
        self.current = current if current is not None else (self.files[0] if self.files else None)
        self.pos = 0.0
        self.paused = False
        self.vid = None
        self.calls = []
        self.tokens = []
        self.messages = []

    def time_pos(self):
        return self.pos

    def is_paused(self):
        return self.paused

    def set_paused(self, paused):
        self.calls.append(("set_paused", paused))
        self.paused = paused

    def path(self):
        return self.current

    def playlist(self):
        return [{"filename": fp} for fp in self.files]

    def track_list(self):
        return self.tracks

    def set_video_track(self, track_id):
        self.calls.append(("set_video_track", track_id))
        self.vid = track_id

    def seek_to(self, sec):
        self.calls.append(("seek_to", sec))
        self.pos = sec

    def load_file(self, path, token=None):
        self.calls.append(("load_file", path))
        self.tokens.append(token)
        self.current = path

    def osd_message(self, text, duration):
        self.messages.append((text, duration))

    def start(self):
        self.calls.append(("start",))

    def run(self, dispatch):
        while (act := EventManager.poll()) is not None:
            if not dispatch(act):
                break

    def commands(self, name):
        return [args for call, *args in self.calls if call == name]


@pytest.fixture(autouse=True)
def _empty_event_queue():
    EventManager.clear()
    yield
    EventManager.clear()

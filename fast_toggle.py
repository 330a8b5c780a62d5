"""
fast_toggle.py

Track-based A/B toggler.  The host decodes the main file and an external
file at once and treats the second as an alternate video track, so a
toggle is just a change of the active track: position, pause state and
seeking stay locked.  No offset between the encodes is possible here; use
sync mode for encodes that are not frame-aligned.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

import config
from host import PlayerHost
from labels import basename


@dataclass
class FastState:
    video_tracks: List[dict] = field(default_factory=list)
    current_index: int = 1
    hold_previous_index: Optional[int] = None
    label_for_track: Dict[int, str] = field(default_factory=dict)


def track_sort_key(track: dict) -> tuple[bool, int]:
    """Main file first, external second; ties by track id."""
    return bool(track.get("external")), track.get("id", 0)


def external_label(track: dict) -> str:
    return basename(track.get("external-filename") or track.get("title") or "external")


def _other(index: int) -> int:
    return 2 if index == 1 else 1


class FastToggler:
    """Event handlers for the track-based mode.  State is passed in."""

    COMMANDS = ("toggle", "first", "second", "hold")

    def __init__(self, host: PlayerHost) -> None:
        self.host = host

    @staticmethod
    def new_state() -> FastState:
        return FastState()

    # ---------------------------------------------------------------- init
    def on_load_completed(self, state: FastState, token: Optional[int] = None) -> None:
        tracks = [t for t in self.host.track_list() if t.get("type") == "video"]
        state.video_tracks = []
        state.label_for_track = {}
        state.hold_previous_index = None

        if len(tracks) != 2:
            print(f"[fast_toggle] found {len(tracks)} video tracks, toggling disabled")
            self.host.osd_message("ERROR: expected 2 video tracks (main + external file).",
                                  config.OSD_WARNING_SEC)
            return

        state.video_tracks = sorted(tracks, key=track_sort_key)
        for tr in state.video_tracks:
            if tr.get("external"):
                state.label_for_track[tr["id"]] = external_label(tr)
            else:
                state.label_for_track[tr["id"]] = basename(self.host.path())

        state.current_index = 1
        first = state.video_tracks[0]
        self.host.set_video_track(first["id"])
        disp = state.label_for_track.get(first["id"], "Track1")
        self.host.osd_message(f"Video {disp} active", config.OSD_ACTIVE_SEC)

    def on_load_failed(self, state: FastState, token: Optional[int] = None) -> None:
        """Nothing to undo: this mode never asks the host to load a file."""

    def on_key_down(self, state: FastState, command: str) -> None:
        if command == "toggle":
            self.toggle(state)
        elif command == "first":
            self.force_first(state)
        elif command == "second":
            self.force_second(state)
        elif command == "hold":
            self.hold_down(state)

    def on_key_up(self, state: FastState, command: str) -> None:
        if command == "hold":
            self.hold_up(state)

    # ------------------------------------------------------------ switching
    def set_track(self, state: FastState, index: int, prefix: str = "") -> None:
        if not 1 <= index <= len(state.video_tracks):
            return
        if index == state.current_index:
            return

        state.current_index = index
        tr = state.video_tracks[index - 1]
        self.host.set_video_track(tr["id"])

        disp = state.label_for_track.get(tr["id"], f"#{index}")
        self.host.osd_message(prefix + disp, config.OSD_SWITCH_SEC)

    def toggle(self, state: FastState) -> None:
        if len(state.video_tracks) < 2:
            return
        self.set_track(state, _other(state.current_index), config.PREFIX_SWITCH)

    def force_first(self, state: FastState) -> None:
        self.set_track(state, 1, config.PREFIX_SWITCH)

    def force_second(self, state: FastState) -> None:
        self.set_track(state, 2, config.PREFIX_SWITCH)

    def status_lines(self, state: FastState) -> list[str]:
        lines = ["A/B status:"]
        for i, tr in enumerate(state.video_tracks, start=1):
            line = f"{i}: {state.label_for_track.get(tr['id'], f'#{i}')}"
            if i == state.current_index:
                line += "  [ACTIVE]"
            lines.append(line)
        return lines

    # ----------------------------------------------------------------- hold
    def hold_down(self, state: FastState) -> None:
        if len(state.video_tracks) < 2 or state.hold_previous_index is not None:
            return
        state.hold_previous_index = state.current_index
        self.set_track(state, _other(state.current_index), config.PREFIX_PREVIEW)

    def hold_up(self, state: FastState) -> None:
        if state.hold_previous_index is None:
            return
        prev, state.hold_previous_index = state.hold_previous_index, None
        self.set_track(state, prev, config.PREFIX_BACK)

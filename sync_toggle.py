"""
sync_toggle.py

Reload-based A/B toggler.  Each toggle loads the other file and, once the
host reports the load, seeks to the position that lines up with the user's
sync marks.

Sync math
---------
Suppose file 1 is marked at T1, file 2 at T2 and we are at P in file 1.
(P - T1) is the shared "time since the sync frame"; in file 2 that moment
sits at (P - T1) + T2, floored at zero.  Without both marks the same
timestamp is reused.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

import config
from host import PlayerHost
from labels import basename, fmt_seconds, status_lines


# ── Data structures ─────────────────────────────────────────────────────────
@dataclass
class PendingSwitch:
    index: int
    target_pos: float
    paused: Optional[bool]
    message: str
    token: int
    previous_index: int = 1


@dataclass
class SyncState:
    files: List[str] = field(default_factory=list)
    current_index: int = 1
    sync_marks: Dict[int, float] = field(default_factory=dict)
    pending_switch: Optional[PendingSwitch] = None
    hold_previous_index: Optional[int] = None
    initialised: bool = False
    request_seq: int = 0       # bumped for every load we issue


# ── Sync math ───────────────────────────────────────────────────────────────
def compute_target_pos(marks: Dict[int, float], cur: int, new: int, pos: float) -> float:
    cur_mark = marks.get(cur)
    new_mark = marks.get(new)
    if cur_mark is None or new_mark is None:
        return pos
    return max(0.0, (pos - cur_mark) + new_mark)


def _other(index: int) -> int:
    return 2 if index == 1 else 1


# ── Toggler ─────────────────────────────────────────────────────────────────
class SyncToggler:
    """Event handlers for the reload-based mode.  State is passed in."""

    COMMANDS = ("toggle", "first", "second", "mark", "status", "hold")

    def __init__(self, host: PlayerHost) -> None:
        self.host = host

    @staticmethod
    def new_state() -> SyncState:
        return SyncState()

    # ---------------------------------------------------------------- init
    def _init_from_playlist(self, state: SyncState) -> None:
        state.files = [item.get("filename") for item in self.host.playlist()[:2]]

        if len(state.files) < 2:
            print(f"[sync_toggle] only {len(state.files)} playlist entries, toggling disabled")
            self.host.osd_message("WARNING: expected 2 files on the command line.",
                                  config.OSD_WARNING_SEC)

        cur_path = self.host.path()
        state.current_index = 1
        for i, fp in enumerate(state.files, start=1):
            if fp == cur_path:
                state.current_index = i

        state.initialised = True

    # ------------------------------------------------------------ handlers
    def on_load_completed(self, state: SyncState, token: Optional[int] = None) -> None:
        if not state.initialised:
            self._init_from_playlist(state)

        sw = state.pending_switch
        if sw is None:
            self.host.osd_message("Loaded " + basename(self.host.path()), config.OSD_LOADED_SEC)
            return

        # hosts that cannot correlate completions fall back to the loaded path
        if token is not None:
            matched = token == sw.token
        else:
            matched = self.host.path() == state.files[sw.index - 1]
        if not matched:
            print(f"[sync_toggle] ignoring superseded load of {basename(self.host.path())} "
                  f"(waiting for switch #{sw.token})")
            return

        state.pending_switch = None
        self.host.seek_to(sw.target_pos)
        if sw.paused is not None:
            self.host.set_paused(sw.paused)
        self.host.osd_message(sw.message, config.OSD_LOADED_SEC)

    def on_load_failed(self, state: SyncState, token: Optional[int] = None) -> None:
        """The requested file never opened: fall back to the one still playing."""
        sw = state.pending_switch
        if sw is None or (token is not None and token != sw.token):
            return
        state.pending_switch = None
        state.current_index = sw.previous_index
        if state.hold_previous_index == sw.previous_index:
            state.hold_previous_index = None
        print(f"[sync_toggle] switch #{sw.token} failed, staying on {sw.previous_index}")

    def on_key_down(self, state: SyncState, command: str) -> None:
        if command == "toggle":
            self.toggle(state)
        elif command == "first":
            self.force_first(state)
        elif command == "second":
            self.force_second(state)
        elif command == "mark":
            self.mark_sync(state)
        elif command == "status":
            self.show_status(state)
        elif command == "hold":
            self.hold_down(state)

    def on_key_up(self, state: SyncState, command: str) -> None:
        if command == "hold":
            self.hold_up(state)

    # ------------------------------------------------------------ switching
    def switch_to(self, state: SyncState, new_index: int, is_peek: bool = False) -> None:
        if not 1 <= new_index <= len(state.files):
            return
        if new_index == state.current_index:
            return

        cur_index = state.current_index
        cur_pos = self.host.time_pos() or 0.0
        paused = self.host.is_paused()
        target = compute_target_pos(state.sync_marks, cur_index, new_index, cur_pos)

        prefix = config.PREFIX_PREVIEW if is_peek else config.PREFIX_SWITCH
        name = basename(state.files[new_index - 1])

        state.request_seq += 1
        state.pending_switch = PendingSwitch(
            index=new_index,
            target_pos=target,
            paused=paused,
            message=prefix + name,
            token=state.request_seq,
            previous_index=cur_index,
        )
        state.current_index = new_index
        print(f"[sync_toggle] switch #{state.request_seq}: {cur_index}→{new_index} "
              f"{fmt_seconds(cur_pos)} → {fmt_seconds(target)}")
        self.host.load_file(state.files[new_index - 1], state.request_seq)

    def toggle(self, state: SyncState) -> None:
        if len(state.files) < 2:
            return
        self.switch_to(state, _other(state.current_index))

    def force_first(self, state: SyncState) -> None:
        self.switch_to(state, 1)

    def force_second(self, state: SyncState) -> None:
        self.switch_to(state, 2)

    # ---------------------------------------------------------------- marks
    def mark_sync(self, state: SyncState) -> None:
        pos = self.host.time_pos() or 0.0
        state.sync_marks[state.current_index] = pos

        if state.current_index <= len(state.files):
            name = basename(state.files[state.current_index - 1])
        else:
            name = f"#{state.current_index}"
        print(f"[sync_toggle] mark {state.current_index} = {fmt_seconds(pos)}")
        self.host.osd_message(f"Marked sync for {name} @ {fmt_seconds(pos)}", config.OSD_MARK_SEC)

    def status_lines(self, state: SyncState) -> list[str]:
        return status_lines(state.files, state.sync_marks, state.current_index)

    def show_status(self, state: SyncState) -> None:
        self.host.osd_message("\n".join(self.status_lines(state)), config.OSD_STATUS_SEC)

    # ----------------------------------------------------------------- hold
    def hold_down(self, state: SyncState) -> None:
        if len(state.files) < 2 or state.hold_previous_index is not None:
            return
        state.hold_previous_index = state.current_index
        self.switch_to(state, _other(state.current_index), is_peek=True)

    def hold_up(self, state: SyncState) -> None:
        if state.hold_previous_index is None:
            return
        prev, state.hold_previous_index = state.hold_previous_index, None
        self.switch_to(state, prev, is_peek=True)

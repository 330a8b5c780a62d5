import pytest

import config
from app import ABCompare, key_bindings_for
from conftest import FakeHost
from fast_toggle import FastState
from host import PlayerHost
from sync_toggle import SyncState


def test_unknown_mode_is_rejected():
    with pytest.raises(ValueError):
        ABCompare(FakeHost(), "triple")


def test_mode_selects_state_type():
    assert isinstance(ABCompare(FakeHost(), "sync").state, SyncState)
    assert isinstance(ABCompare(FakeHost(), "fast").state, FastState)


def test_quit_stops_the_loop():
    ab = ABCompare(FakeHost(files=["a.mkv", "b.mkv"]))
    assert ab.dispatch({"type": "quit"}) is False
    assert ab.dispatch({"type": "something-else"}) is True


def test_full_sync_session():
    host = FakeHost(files=["a.mkv", "b.mkv"])
    ab = ABCompare(host, "sync")

    ab.dispatch({"type": "file_loaded"})
    host.pos = 10.0
    ab.dispatch({"type": "key", "command": "mark", "phase": "press"})
    ab.dispatch({"type": "key", "command": "toggle", "phase": "press"})
    ab.dispatch({"type": "file_loaded"})
    host.pos = 25.0
    ab.dispatch({"type": "key", "command": "mark", "phase": "press"})

    host.pos = 27.5
    ab.dispatch({"type": "key", "command": "toggle", "phase": "press"})
    ab.dispatch({"type": "file_loaded"})

    assert ab.state.current_index == 1
    assert host.current == "a.mkv"
    assert host.pos == pytest.approx(12.5)
    assert ab.status_lines()[1:] == [
        "1: a.mkv  sync=10.000s  [ACTIVE]",
        "2: b.mkv  sync=25.000s",
    ]


def test_hold_phases_are_routed_separately():
    host = FakeHost(files=["a.mkv", "b.mkv"])
    ab = ABCompare(host, "sync")
    ab.dispatch({"type": "file_loaded"})

    ab.dispatch({"type": "key", "command": "hold", "phase": "down"})
    ab.dispatch({"type": "key", "command": "hold", "phase": "repeat"})
    assert ab.state.current_index == 2
    assert ab.state.hold_previous_index == 1

    ab.dispatch({"type": "key", "command": "hold", "phase": "up"})
    assert ab.state.current_index == 1
    assert ab.state.hold_previous_index is None


def test_transport_actions_reach_the_host():
    host = FakeHost(files=["a.mkv", "b.mkv"])
    ab = ABCompare(host)
    host.pos = 3.0

    ab.dispatch({"type": "pause"})
    ab.dispatch({"type": "seek", "delta": -5.0})

    assert host.calls == [("set_paused", True), ("seek_to", 0.0)]


def test_fast_session_toggle():
    host = FakeHost(tracks=[
        {"id": 1, "type": "video", "external": False},
        {"id": 2, "type": "video", "external": True, "title": "alt"},
    ], current="main.mkv")
    ab = ABCompare(host, "fast")

    ab.dispatch({"type": "file_loaded"})
    ab.dispatch({"type": "key", "command": "toggle", "phase": "press"})

    assert host.vid == 2
    assert ab.status_lines() == ["A/B status:", "1: main.mkv", "2: alt  [ACTIVE]"]


def test_key_bindings_follow_mode_commands():
    assert key_bindings_for("sync") == config.KEY_BINDINGS
    fast = key_bindings_for("fast")
    assert "s" not in fast and "i" not in fast
    assert set(fast.values()) == {"toggle", "first", "second", "hold"}


def test_hold_press_is_ignored():
    host = FakeHost(files=["a.mkv", "b.mkv"])
    ab = ABCompare(host, "sync")
    ab.dispatch({"type": "file_loaded"})
    host.calls.clear()

    ab.dispatch({"type": "key", "command": "hold", "phase": "press"})

    assert host.calls == []
    assert ab.state.current_index == 1
    assert ab.state.hold_previous_index is None


def test_load_failed_action_reverts_switch():
    host = FakeHost(files=["a.mkv", "b.mkv"])
    ab = ABCompare(host, "sync")
    ab.dispatch({"type": "file_loaded"})
    ab.dispatch({"type": "key", "command": "toggle", "phase": "press"})

    ab.dispatch({"type": "load_failed", "token": 1})

    assert ab.state.current_index == 1
    assert ab.state.pending_switch is None
    assert ab.status_lines()[1].endswith("[ACTIVE]")


def test_file_loaded_token_is_passed_through():
    host = FakeHost(files=["a.mkv", "b.mkv"])
    ab = ABCompare(host, "sync")
    ab.dispatch({"type": "file_loaded"})
    ab.dispatch({"type": "key", "command": "toggle", "phase": "press"})
    ab.dispatch({"type": "key", "command": "toggle", "phase": "press"})

    ab.dispatch({"type": "file_loaded", "token": 1})
    assert ab.state.pending_switch is not None

    ab.dispatch({"type": "file_loaded", "token": 2})
    assert ab.state.pending_switch is None


def test_host_contract_is_abstract():
    class Partial(PlayerHost):
        def time_pos(self):
            return 0.0

    with pytest.raises(TypeError):
        Partial()

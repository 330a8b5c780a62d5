import pytest

from conftest import FakeHost
from fast_toggle import FastToggler, external_label, track_sort_key

MAIN = {"id": 1, "type": "video", "external": False}
EXT = {"id": 2, "type": "video", "external": True,
       "external-filename": "/encodes/Encode2.mkv", "title": "x265"}
AUDIO = {"id": 1, "type": "audio"}


def _ready(tracks=(EXT, AUDIO, MAIN)):
    host = FakeHost(tracks=list(tracks), current="/encodes/Encode1.mkv")
    toggler = FastToggler(host)
    state = toggler.new_state()
    toggler.on_load_completed(state)
    host.calls.clear()
    host.messages.clear()
    return host, toggler, state


# ── initialisation ──────────────────────────────────────────────────────────
def test_load_selects_main_track_and_labels_both():
    host = FakeHost(tracks=[EXT, AUDIO, MAIN], current="/encodes/Encode1.mkv")
    toggler = FastToggler(host)
    state = toggler.new_state()

    toggler.on_load_completed(state)

    assert [t["id"] for t in state.video_tracks] == [1, 2]
    assert state.label_for_track == {1: "Encode1.mkv", 2: "Encode2.mkv"}
    assert state.current_index == 1
    assert host.calls == [("set_video_track", 1)]
    assert host.messages == [("Video Encode1.mkv active", 1.5)]


@pytest.mark.parametrize("tracks", [[MAIN], [MAIN, AUDIO], [MAIN, EXT, dict(EXT, id=3)]])
def test_wrong_video_track_count_disables_toggling(tracks):
    host = FakeHost(tracks=tracks, current="Encode1.mkv")
    toggler = FastToggler(host)
    state = toggler.new_state()

    toggler.on_load_completed(state)
    assert host.messages[0][0].startswith("ERROR: expected 2 video tracks")
    assert state.video_tracks == []

    host.calls.clear()
    toggler.toggle(state)
    toggler.force_second(state)
    toggler.hold_down(state)
    assert host.calls == []


def test_sort_puts_primary_first_regardless_of_id():
    tracks = [
        {"id": 1, "external": True},
        {"id": 5, "external": False},
        {"id": 3, "external": False},
    ]
    assert [t["id"] for t in sorted(tracks, key=track_sort_key)] == [3, 5, 1]


def test_external_label_fallback_chain():
    track = {"id": 2, "external": True, "external-filename": "C:\\enc\\b.mkv", "title": "title"}
    assert external_label(track) == "b.mkv"
    del track["external-filename"]
    assert external_label(track) == "title"
    del track["title"]
    assert external_label(track) == "external"


# ── switching ───────────────────────────────────────────────────────────────
def test_toggle_switches_track_without_touching_playback():
    host, toggler, state = _ready()

    toggler.toggle(state)
    assert state.current_index == 2
    assert host.calls == [("set_video_track", 2)]
    assert host.messages == [("Switched to: Encode2.mkv", 1.0)]

    toggler.toggle(state)
    assert state.current_index == 1
    assert host.commands("seek_to") == []
    assert host.commands("set_paused") == []
    assert host.commands("load_file") == []


@pytest.mark.parametrize("index", [1, 0, 3])
def test_set_track_current_or_out_of_range_is_noop(index):
    host, toggler, state = _ready()
    toggler.set_track(state, index, "Switched to: ")
    assert host.calls == []
    assert host.messages == []
    assert state.current_index == 1


def test_force_second_then_first():
    host, toggler, state = _ready()
    toggler.force_second(state)
    toggler.force_second(state)
    toggler.force_first(state)
    assert host.calls == [("set_video_track", 2), ("set_video_track", 1)]


def test_missing_label_falls_back_to_index():
    host, toggler, state = _ready()
    state.label_for_track.clear()
    toggler.toggle(state)
    assert host.messages[-1] == ("Switched to: #2", 1.0)


# ── hold to preview ─────────────────────────────────────────────────────────
def test_hold_preview_and_back():
    host, toggler, state = _ready()

    toggler.on_key_down(state, "hold")
    toggler.on_key_down(state, "hold")
    assert state.hold_previous_index == 1
    assert host.messages == [("Preview: Encode2.mkv", 1.0)]

    toggler.on_key_up(state, "hold")
    assert state.hold_previous_index is None
    assert state.current_index == 1
    assert host.messages[-1] == ("Back: Encode1.mkv", 1.0)


def test_status_lines_mark_active_track():
    _, toggler, state = _ready()
    assert toggler.status_lines(state) == [
        "A/B status:",
        "1: Encode1.mkv  [ACTIVE]",
        "2: Encode2.mkv",
    ]

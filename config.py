# config.py
"""
Configuration settings for the A/B encode comparator.
"""

# ── Basic Application Settings ──────────────────────────────────────────────

# "sync" reloads the other file and re-anchors the position on sync marks,
# "fast" flips between two decoded video tracks of a single playback.
DEFAULT_MODE = "sync"

# "mpv" (libmpv via python-mpv) or "gst" (GStreamer playbin + pygame window)
DEFAULT_BACKEND = "mpv"

# Probe every input with PyAV before starting
PROBE_INPUTS = True

# ── Key bindings (mpv key names) ───────────────────────────────────────────

KEY_BINDINGS = {
    "TAB": "toggle",
    "1":   "first",
    "2":   "second",
    "s":   "mark",
    "i":   "status",
    "q":   "hold",
}

# Transport keys for the pygame window; mpv keeps its own defaults
PLAYER_KEYS = {
    "SPACE": "pause",
    "LEFT":  "seek_back",
    "RIGHT": "seek_forward",
    "ESC":   "quit",
}

SEEK_STEP = 5.0   # seconds per LEFT/RIGHT press

# ── On-screen messages ─────────────────────────────────────────────────────

PREFIX_SWITCH  = "Switched to: "
PREFIX_PREVIEW = "Preview: "
PREFIX_BACK    = "Back: "

OSD_LOADED_SEC  = 1.2   # "Loaded …" and post-switch message
OSD_SWITCH_SEC  = 1.0   # fast-mode track switch
OSD_ACTIVE_SEC  = 1.5   # fast-mode "Video … active"
OSD_MARK_SEC    = 1.5
OSD_STATUS_SEC  = 3.0
OSD_WARNING_SEC = 4.0

# ── Display settings (gst backend) ─────────────────────────────────────────

FPS = 30
FULLSCREEN = False
WINDOWED_SIZE = (1280, 720)

# ── mpv settings ───────────────────────────────────────────────────────────

# keep-open stops mpv from advancing to the second playlist entry at EOF
MPV_OPTIONS = {
    "input_default_bindings": True,
    "input_vo_keyboard": True,
    "osc": True,
    "force_window": "yes",
    "keep_open": "yes",
}

# Seconds the mpv main loop blocks on the action queue per iteration
MPV_POLL_SEC = 0.25

# ── Web remote ─────────────────────────────────────────────────────────────

WEB_PORT = 8080

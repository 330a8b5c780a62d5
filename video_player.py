# =========  video_player.py  =========
"""
One GStreamer playbin decoding into an RGB appsink, for the gst backend.

Public API
----------
open(path, start) → True once prerolled and playing, False if unplayable
decode_frame()    → newest RGB frame (HxWx3 uint8) or None
get_position_sec()
seek_to(sec)
set_paused(bool)
set_volume(0.0-1.0)
slave_to(other)   → follow another player's clock (alternate-track mode)
close()
Properties
----------
.path    → file being played ("" when closed)
.sar     → sample-aspect ratio
.paused  → last requested pause state
.error   → text of the last open/playback error
"""
import gi, queue, numpy as np
gi.require_version("Gst", "1.0")
from gi.repository import Gst

PREROLL_TIMEOUT = 5 * 10**9      # ns


# ────────────────────────────────────────────────────────────────────────────
class VideoPlayer:
    def __init__(self):
        Gst.init(None)

        self.player = Gst.ElementFactory.make("playbin", None)
        self._vsink = Gst.ElementFactory.make("appsink", None)
        for prop, value in (("emit-signals", True), ("max-buffers", 2),
                            ("drop", True), ("sync", True)):
            self._vsink.set_property(prop, value)
        self._vsink.set_property("caps", Gst.Caps.from_string("video/x-raw,format=RGB"))
        self._vsink.connect("new-sample", self._on_sample)
        self.player.set_property("video-sink", self._vsink)
        self.player.set_property("audio-sink",
                                 Gst.ElementFactory.make("autoaudiosink", None))

        # latest raw buffer only; older ones are stale by the next draw
        self._frames: "queue.Queue[bytes]" = queue.Queue(maxsize=1)
        self._size   = (0, 0)
        self._last   = None
        self.sar     = 1.0
        self.path    = ""
        self.paused  = False
        self.error   = ""

    # ── public API ──────────────────────────────────────────────────────────
    def open(self, fp: str, start: float = 0.0) -> bool:
        self.close()
        self.player.set_property("uri", Gst.filename_to_uri(fp))
        self.player.set_state(Gst.State.PAUSED)

        msg = self.player.get_bus().timed_pop_filtered(
            PREROLL_TIMEOUT, Gst.MessageType.ASYNC_DONE | Gst.MessageType.ERROR)
        if msg is None:
            return self._fail(fp, "timed out while prerolling")
        if msg.type == Gst.MessageType.ERROR:
            return self._fail(fp, msg.parse_error()[0].message)

        caps = self._vsink.get_static_pad("sink").get_current_caps()
        if caps is None:
            return self._fail(fp, "no video stream")
        s = caps.get_structure(0)
        self._size = (s.get_int("width")[1], s.get_int("height")[1])
        if s.has_field("pixel-aspect-ratio"):
            num, den = s.get_fraction("pixel-aspect-ratio")[-2:]
            self.sar = num / den if den else 1.0

        self.path = fp
        self.seek_to(start)
        self.set_paused(False)
        return True

    def decode_frame(self):
        self._check_bus()
        try:
            data = self._frames.get_nowait()
        except queue.Empty:
            return self._last
        w, h = self._size
        rows = np.frombuffer(data, np.uint8).reshape((h, len(data) // h))
        # appsink rows are padded to 4-byte strides
        self._last = np.ascontiguousarray(rows[:, : w * 3].reshape((h, w, 3)))
        return self._last

    def get_position_sec(self):
        ok, pos = self.player.query_position(Gst.Format.TIME)
        return pos / Gst.SECOND if ok else 0.0

    def seek_to(self, sec: float):
        self.player.seek_simple(
            Gst.Format.TIME,
            Gst.SeekFlags.FLUSH | Gst.SeekFlags.ACCURATE,
            int(max(0.0, sec) * Gst.SECOND),
        )

    def set_paused(self, paused: bool):
        self.paused = paused
        self.player.set_state(Gst.State.PAUSED if paused else Gst.State.PLAYING)

    def set_volume(self, vol: float):
        self.player.set_property("volume", max(0.0, min(1.0, vol)))

    def slave_to(self, other: "VideoPlayer"):
        """
        Share *other*'s pipeline clock and base time, then jump to its
        position.  start-time NONE keeps our base time from being reset on
        state changes, so call this again after every pause/resume or seek
        of *other*.
        """
        clock = other.player.get_clock()
        if clock is None:
            return
        self.player.set_state(Gst.State.PAUSED)
        self.player.use_clock(clock)
        self.player.set_start_time(Gst.CLOCK_TIME_NONE)
        self.player.set_base_time(other.player.get_base_time())
        self.seek_to(other.get_position_sec())
        self.set_paused(other.paused)

    def close(self):
        self.player.set_state(Gst.State.NULL)
        while not self._frames.empty():
            self._frames.get_nowait()
        self._last = None
        self.path = ""

    # ── internals ───────────────────────────────────────────────────────────
    def _fail(self, fp: str, reason: str) -> bool:
        self.error = reason
        print(f"[video_player] cannot open {fp}: {reason}")
        self.close()
        return False

    def _check_bus(self):
        msg = self.player.get_bus().pop_filtered(Gst.MessageType.ERROR)
        if msg is not None:
            self.error = msg.parse_error()[0].message
            print(f"[video_player] playback error in {self.path}: {self.error}")

    def _on_sample(self, sink):
        sample = sink.emit("pull-sample")
        if sample is None:
            return Gst.FlowReturn.OK
        buf = sample.get_buffer()
        ok, info = buf.map(Gst.MapFlags.READ)
        if ok:
            data = bytes(info.data)
            buf.unmap(info)
            if self._frames.full():
                try:
                    self._frames.get_nowait()
                except queue.Empty:
                    pass
            try:
                self._frames.put_nowait(data)
            except queue.Full:
                pass    # the draw loop took and refilled the slot meanwhile
        return Gst.FlowReturn.OK

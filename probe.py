"""
probe.py  – one-shot input check run before the player starts
Reports duration / frames / fps per file and warns when the two encodes
disagree on frame rate (sync marks cannot compensate for that).
"""
from __future__ import annotations
import math, typing as _t, av
from av.error import FFmpegError

from labels import basename


# ---------- probe ---------------------------------------------------------
def probe(fp: str) -> tuple[float, int, float]:
    """
    Return (seconds, frames, fps) – frames > 0 on success.
    Final fallback: decode to last frame PTS.
    """
    try:
        with av.open(fp) as c:
            vs = next((s for s in c.streams if s.type == "video"), None)
            if not vs:
                return 0.0, 0, 0.0

            if vs.frames and vs.average_rate:                     # meta
                dur = vs.frames / float(vs.average_rate)
                return dur, vs.frames, float(vs.average_rate)

            if vs.duration and vs.time_base:
                dur = float(vs.duration * vs.time_base)
                if vs.average_rate:
                    fps = float(vs.average_rate)
                    frm = int(round(dur * fps))
                    return dur, frm, fps

            # brute-force last frame
            last_pts = None
            for f in c.decode(video=vs.index):
                last_pts = f.pts
            if last_pts is not None and vs.time_base and vs.average_rate:
                fps  = float(vs.average_rate)
                dur  = float(last_pts * vs.time_base)
                frm  = int(round(dur * fps))
                return dur, frm, fps
    except (FFmpegError, OSError) as exc:
        print(f"  ! cannot read {basename(fp)}: {exc}")
    return 0.0, 0, 0.0


# ---------- report --------------------------------------------------------
def describe_inputs(paths: _t.Sequence[str],
                    prober: _t.Callable[[str], tuple[float, int, float]] = probe,
                    ) -> list[tuple[float, int, float]]:
    print("[probe] checking inputs …")
    results = []
    for fp in paths:
        dur, frm, fps = prober(fp)
        if frm:
            print(f"  {basename(fp)}: {dur:.3f}s  {frm} frames @ {fps:.3f} fps")
        else:
            print(f"  ! no usable video stream in {basename(fp)}")
        results.append((dur, frm, fps))

    rates = [fps for _, frm, fps in results if frm]
    if len(rates) == 2 and not math.isclose(rates[0], rates[1], rel_tol=1e-3):
        print(f"[probe] frame rates differ ({rates[0]:.3f} vs {rates[1]:.3f}); "
              "sync marks only hold near the marked frame")
    return results

"""
main.py – command-line entry point

    abcompare Encode1.mkv Encode2.mkv                 # reload + sync marks
    abcompare Encode1.mkv Encode2.mkv --mode fast     # alternate video track
    abcompare Encode1.mkv Encode2.mkv --backend gst   # GStreamer window

Controls: TAB toggle, 1/2 force a source, s mark sync, i status,
q hold to preview the other encode.
"""
from __future__ import annotations

import argparse

import config, web_remote
from app   import ABCompare, MODES, key_bindings_for
from host  import PlayerHost
from probe import describe_inputs

BACKENDS = ("mpv", "gst")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Toggle between two video encodes")
    parser.add_argument("files", nargs="+", metavar="FILE",
                        help="one or two media files; in fast mode the second is the external track")
    parser.add_argument("--mode", choices=MODES, default=config.DEFAULT_MODE)
    parser.add_argument("--backend", choices=BACKENDS, default=config.DEFAULT_BACKEND)
    parser.add_argument("--web", action="store_true", help="start the web remote")
    parser.add_argument("--port", type=int, default=config.WEB_PORT)
    parser.add_argument("--no-probe", dest="probe", action="store_false",
                        default=config.PROBE_INPUTS, help="skip the PyAV input check")
    return parser


def make_host(backend: str, mode: str, files: list[str]) -> PlayerHost:
    if mode == "fast":
        playlist, external = files[:1], (files[1] if len(files) > 1 else None)
    else:
        playlist, external = files, None

    # backends import their native libraries lazily
    if backend == "gst":
        from gst_host import GstHost
        return GstHost(playlist, external)
    from mpv_host import MpvHost
    return MpvHost(playlist, external, key_bindings_for(mode))


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if len(args.files) > 2:
        parser.error("at most two files can be compared")

    if args.probe:
        describe_inputs(args.files)

    host = make_host(args.backend, args.mode, args.files)
    ab = ABCompare(host, args.mode)
    if args.web:
        web_remote.start(ab, args.port)

    try:
        host.start()
        host.run(ab.dispatch)
    finally:
        host.close()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

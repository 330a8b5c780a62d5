"""
labels.py

Display-name and timestamp formatting shared by both togglers.
"""

from __future__ import annotations

from typing import Optional


def basename(path: Optional[str]) -> str:
    """Last path component, accepting both separators. "?" for empty input."""
    if not path:
        return "?"
    clean = path.replace("\\", "/")
    name = clean.rsplit("/", 1)[-1]
    return name or clean


def fmt_seconds(sec: float) -> str:
    return f"{sec:.3f}s"


def status_lines(files: list[str], marks: dict[int, float], current: int) -> list[str]:
    """One line per source: index, name, sync mark and the active flag."""
    lines = ["A/B status:"]
    for i, fp in enumerate(files, start=1):
        mark = marks.get(i)
        line = f"{i}: {basename(fp)}  sync={fmt_seconds(mark) if mark is not None else 'unset'}"
        if i == current:
            line += "  [ACTIVE]"
        lines.append(line)
    return lines

"""Readers for the two-line station text format.

Each entry is a reference date line (``YYYY/MM/DD HH:MM``) followed by the
report line, as published per station. Batch files concatenate entries.
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

from metardecode.errors import SourceError


def _content_lines(text: str) -> list[str]:
    return [line.strip() for line in text.splitlines() if line.strip()]


def split_station_text(text: str) -> tuple[str, str]:
    """Return ``(reference_text, report_text)`` from one station entry."""
    lines = _content_lines(text)
    if len(lines) < 2:
        raise SourceError(f"Expected a reference line and a report line, got {len(lines)} line(s)")
    return lines[0], lines[1]


def iter_station_entries(text: str) -> Iterator[tuple[str, str]]:
    """Yield consecutive ``(reference_text, report_text)`` pairs."""
    lines = _content_lines(text)
    if len(lines) % 2:
        raise SourceError(f"Unpaired line at end of input: {lines[-1]!r}")
    for idx in range(0, len(lines), 2):
        yield lines[idx], lines[idx + 1]


def load_entries(path: Path) -> list[tuple[str, str]]:
    return list(iter_station_entries(path.read_text()))

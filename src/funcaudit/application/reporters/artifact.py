"""Persisted report artifact."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable
    from datetime import datetime
    from pathlib import Path

TIMESTAMP_FORMAT = "%Y-%m-%dT%H-%M-%S"


def report_path(root: Path, *, prefix: str, now: datetime) -> Path:
    """First free report path under root.

    <root>/<prefix>-<timestamp>.txt, then -1, -2, ... when taken.
    """
    stem = f"{prefix}-{now.strftime(TIMESTAMP_FORMAT)}"
    candidate = root / f"{stem}.txt"
    suffix = 0
    while candidate.exists():
        suffix += 1
        candidate = root / f"{stem}-{suffix}.txt"
    return candidate


def save_report(root: Path, lines: Iterable[str], *, prefix: str, now: datetime) -> Path:
    """Write report lines to a new timestamped file under root.

    Never overwrites an existing report. Undecodable path characters
    (surrogate escapes from the file system) are written backslash-escaped.

    Args:
        root: Scanned root directory
        lines: Report lines without trailing newlines
        prefix: File name prefix
        now: Timestamp embedded in the name

    Returns:
        Path of the written file

    Raises:
        OSError: If the file cannot be written
    """
    path = report_path(root, prefix=prefix, now=now)
    text = "\n".join(lines) + "\n"
    # "x" mode fails instead of clobbering a report created concurrently
    with path.open("x", encoding="utf-8", errors="backslashreplace") as fh:
        fh.write(text)
    return path

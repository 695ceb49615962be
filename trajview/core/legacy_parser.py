"""Reader for the legacy tab-separated trajectory log format.

Each accepted line starts with four whitespace separated fields::

    <ignored-int> <frame_id> <x> <y> [anything else]

Lines that do not start with that shape are skipped without a diagnostic.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from trajview.core.trajectory import Frame, Trajectory

LOGGER = logging.getLogger(__name__)

_ENTRY_PATTERN = re.compile(
    r"^(\d+)[ \t]+(\d+)[ \t]+(-?\d+(?:\.\d+)?)[ \t]+(-?\d+(?:\.\d+)?)"
)


@dataclass(frozen=True)
class Entry:
    """One matched log row, discarded once frames are built."""

    frame_id: int
    position: tuple[float, float]


def parse_entry(line: str) -> Entry | None:
    """Return the row encoded by ``line`` or ``None`` if it does not match."""
    match = _ENTRY_PATTERN.match(line)
    if match is None:
        return None
    return Entry(
        frame_id=int(match.group(2)),
        position=(float(match.group(3)), float(match.group(4))),
    )


def group_into_frames(entries: Iterable[Entry]) -> tuple[Frame, ...]:
    """Fold entries sorted by ``frame_id`` into playback frames.

    Playback index 0 exists before the first entry. A new frame is started
    whenever an entry's ``frame_id`` exceeds the current playback index, and
    the index then moves forward by exactly one. Gaps in source ids are not
    skipped over, so the playback index can lag behind the source id.
    """
    buckets: list[list[tuple[float, float]]] = [[]]
    playback_index = 0
    for entry in entries:
        if entry.frame_id > playback_index:
            playback_index += 1
            buckets.append([])
        buckets[-1].append(entry.position)
    return tuple(Frame.from_points(bucket) for bucket in buckets)


def parse_trajectory_txt(path: str | Path) -> Trajectory:
    """Parse a legacy trajectory log into a ``Trajectory``.

    Raises ``OSError`` if the file cannot be opened. Unparseable lines are
    ignored; a file without a single valid row yields one empty frame.
    """
    log_path = Path(path)
    entries: list[Entry] = []
    with log_path.open("r", encoding="utf-8", errors="replace") as handle:
        for line in handle:
            entry = parse_entry(line)
            if entry is not None:
                entries.append(entry)

    entries.sort(key=lambda entry: entry.frame_id)
    trajectory = Trajectory(frames=group_into_frames(entries))
    LOGGER.debug(
        "Parsed %d entries into %d frames from %s",
        len(entries),
        trajectory.frame_count(),
        log_path,
    )
    return trajectory

"""Immutable trajectory containers and the bounding-box query."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, NamedTuple

import numpy as np

FLOAT32_MAX = float(np.finfo(np.float32).max)


def _as_positions(values: Iterable[tuple[float, float]] | np.ndarray) -> np.ndarray:
    # Coordinates beyond the float32 range are stored as +/-inf.
    with np.errstate(over="ignore"):
        positions = np.array(values, dtype=np.float32).reshape(-1, 2)
    positions.flags.writeable = False
    return positions


class Area(NamedTuple):
    """Axis-aligned bounding box ``(x_min, x_max, y_min, y_max)``."""

    x_min: float
    x_max: float
    y_min: float
    y_max: float

    @property
    def is_empty(self) -> bool:
        """True when the box is the untouched scan sentinel (no positions)."""
        return self.x_min > self.x_max or self.y_min > self.y_max

    @property
    def width(self) -> float:
        return self.x_max - self.x_min

    @property
    def height(self) -> float:
        return self.y_max - self.y_min


EMPTY_AREA = Area(FLOAT32_MAX, -FLOAT32_MAX, FLOAT32_MAX, -FLOAT32_MAX)


@dataclass(frozen=True, eq=False)
class Frame:
    """Positions observed at one playback step, as a read-only ``(n, 2)`` float32 array."""

    positions: np.ndarray

    @classmethod
    def from_points(cls, points: Iterable[tuple[float, float]] | np.ndarray = ()) -> Frame:
        if not isinstance(points, np.ndarray):
            points = list(points)
        return cls(positions=_as_positions(points))

    def __len__(self) -> int:
        return int(self.positions.shape[0])

    def __iter__(self) -> Iterator[tuple[float, float]]:
        for x, y in self.positions.tolist():
            yield (x, y)


@dataclass(frozen=True, eq=False)
class Trajectory:
    """Ordered playback frames parsed from a single log file."""

    frames: tuple[Frame, ...]

    def frame_count(self) -> int:
        return len(self.frames)

    def position_count(self) -> int:
        return sum(len(frame) for frame in self.frames)

    def area(self) -> Area:
        """Return the bounding box over every position of every frame.

        Starts from float32 sentinel extrema and returns them unchanged when no
        frame holds a position; check ``Area.is_empty`` before using the box.
        """
        x_min, y_min = FLOAT32_MAX, FLOAT32_MAX
        x_max, y_max = -FLOAT32_MAX, -FLOAT32_MAX
        for frame in self.frames:
            if not len(frame):
                continue
            lows = frame.positions.min(axis=0)
            highs = frame.positions.max(axis=0)
            x_min = min(x_min, float(lows[0]))
            y_min = min(y_min, float(lows[1]))
            x_max = max(x_max, float(highs[0]))
            y_max = max(y_max, float(highs[1]))
        return Area(x_min, x_max, y_min, y_max)

"""Immutable per-tick payload handed to renderers."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from trajview.core.viewport import Rect


def _no_positions() -> np.ndarray:
    return np.empty((0, 2), dtype=np.float32)


@dataclass(frozen=True, eq=False)
class RenderFrame:
    """Positions to draw this tick and the view rectangle to draw them in."""

    viewport: Rect
    positions: np.ndarray = field(default_factory=_no_positions)
    frame_index: int = 0
    frame_count: int = 0

    @property
    def instance_count(self) -> int:
        return int(self.positions.shape[0])

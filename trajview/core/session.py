"""Application-level ownership of the active replay."""

from __future__ import annotations

import logging
from datetime import timedelta
from pathlib import Path

from trajview.core.legacy_parser import parse_trajectory_txt
from trajview.core.render_state import RenderFrame
from trajview.core.replay import Replay, ReplayConfigurationError
from trajview.core.viewport import DEFAULT_MIN_EXTENT, DEFAULT_VIEWPORT, fit_aspect_ratio, fit_area

LOGGER = logging.getLogger(__name__)


class ReplaySession:
    """Holds at most one replay and swaps it out when a new log is opened."""

    def __init__(self, frame_duration: timedelta, min_extent: float = DEFAULT_MIN_EXTENT) -> None:
        if frame_duration <= timedelta(0):
            raise ReplayConfigurationError(f"frame_duration must be > 0, got {frame_duration!r}")
        self.frame_duration = frame_duration
        self.min_extent = min_extent
        self.replay: Replay | None = None
        self.source_path: Path | None = None

    def open_file(self, path: str | Path) -> Replay:
        """Parse ``path`` and make it the active replay.

        ``OSError`` propagates and leaves the previous replay in place.
        """
        source = Path(path)
        trajectory = parse_trajectory_txt(source)
        self.replay = Replay(trajectory, self.frame_duration)
        self.source_path = source
        LOGGER.info(
            "Opened %s: %d frames, %d positions",
            source,
            trajectory.frame_count(),
            trajectory.position_count(),
        )
        return self.replay

    def close(self) -> None:
        if self.replay is not None:
            LOGGER.info("Closed %s", self.source_path)
        self.replay = None
        self.source_path = None

    def tick(self, delta: timedelta, display_aspect: float) -> RenderFrame:
        """Advance playback by ``delta`` and describe what to draw."""
        replay = self.replay
        if replay is None or replay.frame_count() == 0:
            return RenderFrame(viewport=fit_aspect_ratio(*DEFAULT_VIEWPORT, display_aspect))

        replay.advance_by(delta)
        return RenderFrame(
            viewport=fit_area(replay.area(), display_aspect, self.min_extent),
            positions=replay.current_frame().positions,
            frame_index=replay.current_frame_index,
            frame_count=replay.frame_count(),
        )


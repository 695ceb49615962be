"""Time-driven playback over a parsed trajectory."""

from __future__ import annotations

from datetime import timedelta

from trajview.core.trajectory import Area, Frame, Trajectory

_ZERO = timedelta(0)


class ReplayConfigurationError(ValueError):
    """Raised when a replay is constructed with an unusable frame duration."""


class Replay:
    """Maps accumulated wall-clock time onto a playback frame index.

    Elapsed time only grows and saturates at ``total_duration``, after which
    playback stays on the last frame.
    """

    def __init__(self, trajectory: Trajectory, frame_duration: timedelta) -> None:
        if frame_duration <= _ZERO:
            raise ReplayConfigurationError(
                f"frame_duration must be > 0, got {frame_duration!r}"
            )
        self._trajectory = trajectory
        self._frame_duration = frame_duration
        frame_count = trajectory.frame_count()
        self._total_duration = frame_duration * (frame_count - 1) if frame_count > 0 else _ZERO
        self._elapsed = _ZERO
        self._current_frame_index = 0

    @property
    def trajectory(self) -> Trajectory:
        return self._trajectory

    @property
    def frame_duration(self) -> timedelta:
        return self._frame_duration

    @property
    def total_duration(self) -> timedelta:
        return self._total_duration

    @property
    def elapsed(self) -> timedelta:
        return self._elapsed

    @property
    def current_frame_index(self) -> int:
        return self._current_frame_index

    @property
    def finished(self) -> bool:
        return self._elapsed >= self._total_duration

    def advance_by(self, delta: timedelta) -> None:
        if delta < _ZERO:
            raise ValueError(f"Cannot advance a replay by a negative delta: {delta!r}")
        self._elapsed = min(self._total_duration, self._elapsed + delta)
        self._current_frame_index = self._elapsed // self._frame_duration

    def current_frame(self) -> Frame:
        if not self._trajectory.frames:
            raise IndexError("Replay has no frames; check frame_count() before reading a frame.")
        return self._trajectory.frames[self._current_frame_index]

    def area(self) -> Area:
        return self._trajectory.area()

    def frame_count(self) -> int:
        return self._trajectory.frame_count()

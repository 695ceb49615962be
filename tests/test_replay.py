"""Tests for time-driven replay playback."""

from __future__ import annotations

import random
from datetime import timedelta

import pytest

from trajview.core.legacy_parser import parse_trajectory_txt
from trajview.core.replay import Replay, ReplayConfigurationError
from trajview.core.trajectory import Frame, Trajectory


def _ms(value: float) -> timedelta:
    return timedelta(milliseconds=value)


def _trajectory(frame_count: int) -> Trajectory:
    return Trajectory(
        frames=tuple(Frame.from_points([(float(i), float(i))]) for i in range(frame_count))
    )


def test_end_to_end_example(tmp_path) -> None:
    path = tmp_path / "traj.txt"
    path.write_text("1\t0\t0.0\t0.0\n1\t0\t1.0\t1.0\n1\t1\t2.0\t2.0\n", encoding="utf-8")

    replay = Replay(parse_trajectory_txt(path), _ms(100))

    assert replay.frame_count() == 2
    assert replay.total_duration == _ms(100)
    assert replay.current_frame_index == 0
    assert len(replay.current_frame()) == 2

    replay.advance_by(_ms(50))
    assert replay.current_frame_index == 0

    replay.advance_by(_ms(60))
    assert replay.elapsed == _ms(100)
    assert replay.current_frame_index == 1
    assert replay.current_frame().positions.tolist() == [[2.0, 2.0]]
    assert replay.finished


def test_total_duration_scales_with_frame_count() -> None:
    assert Replay(_trajectory(5), _ms(40)).total_duration == _ms(160)
    assert Replay(_trajectory(1), _ms(40)).total_duration == timedelta(0)


def test_frame_boundaries_are_exact() -> None:
    replay = Replay(_trajectory(5), _ms(100))

    for expected in (1, 2, 3):
        replay.advance_by(_ms(100))
        assert replay.current_frame_index == expected

    replay.advance_by(_ms(99))
    assert replay.current_frame_index == 3
    replay.advance_by(_ms(1))
    assert replay.current_frame_index == 4


def test_advance_by_zero_is_idempotent() -> None:
    replay = Replay(_trajectory(4), _ms(100))
    replay.advance_by(_ms(150))

    for _ in range(10):
        replay.advance_by(timedelta(0))

    assert replay.elapsed == _ms(150)
    assert replay.current_frame_index == 1


def test_large_delta_saturates_on_last_frame() -> None:
    replay = Replay(_trajectory(6), _ms(100))

    replay.advance_by(timedelta(hours=3))

    assert replay.elapsed == replay.total_duration
    assert replay.current_frame_index == replay.frame_count() - 1
    assert replay.current_frame().positions.tolist() == [[5.0, 5.0]]

    replay.advance_by(_ms(1))
    assert replay.current_frame_index == 5


def test_random_advances_are_monotonic_and_bounded() -> None:
    rng = random.Random(1234)
    for frame_count in (1, 2, 7, 30):
        replay = Replay(_trajectory(frame_count), _ms(rng.randint(1, 50)))
        previous_elapsed = replay.elapsed
        previous_index = replay.current_frame_index
        for _ in range(200):
            replay.advance_by(timedelta(microseconds=rng.randint(0, 20_000)))
            assert previous_elapsed <= replay.elapsed <= replay.total_duration
            assert previous_index <= replay.current_frame_index < replay.frame_count()
            previous_elapsed = replay.elapsed
            previous_index = replay.current_frame_index


@pytest.mark.parametrize("duration", [timedelta(0), _ms(-5)])
def test_non_positive_frame_duration_is_rejected(duration: timedelta) -> None:
    with pytest.raises(ReplayConfigurationError, match="frame_duration must be > 0"):
        Replay(_trajectory(2), duration)


def test_negative_delta_is_rejected() -> None:
    replay = Replay(_trajectory(3), _ms(10))
    replay.advance_by(_ms(15))

    with pytest.raises(ValueError, match="negative delta"):
        replay.advance_by(_ms(-1))
    assert replay.elapsed == _ms(15)


def test_empty_trajectory_has_no_current_frame() -> None:
    replay = Replay(Trajectory(frames=()), _ms(100))

    replay.advance_by(_ms(500))

    assert replay.frame_count() == 0
    assert replay.total_duration == timedelta(0)
    assert replay.current_frame_index == 0
    assert replay.area().is_empty
    with pytest.raises(IndexError):
        replay.current_frame()

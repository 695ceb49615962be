"""Command-line entry points for inspecting, plotting and viewing trajectory logs."""

from __future__ import annotations

import argparse
import logging
import math
import sys
from datetime import timedelta

from trajview.configs.loader import ConfigLoader, ConfigValidationError, ViewerConfig
from trajview.core.legacy_parser import parse_trajectory_txt
from trajview.core.replay import Replay, ReplayConfigurationError

LOGGER = logging.getLogger(__name__)


def _configure_logging(config: ViewerConfig, override: str | None) -> None:
    level = override.upper() if override else config.log_level
    logging.basicConfig(level=getattr(logging, level, logging.INFO))


def _frame_duration(config: ViewerConfig, override_ms: float | None) -> timedelta:
    if override_ms is None:
        return config.frame_duration
    if not math.isfinite(override_ms):
        raise ReplayConfigurationError(f"frame duration must be finite, got {override_ms} ms")
    try:
        return timedelta(milliseconds=override_ms)
    except OverflowError as exc:
        raise ReplayConfigurationError(f"frame duration is too large: {override_ms} ms") from exc


def _print_info(path: str, frame_duration: timedelta) -> None:
    trajectory = parse_trajectory_txt(path)
    replay = Replay(trajectory, frame_duration)
    area = replay.area()
    print(f"frames: {replay.frame_count()}")
    print(f"positions: {trajectory.position_count()}")
    if area.is_empty:
        print("area: no data")
    else:
        print(f"area: x=[{area.x_min:g}, {area.x_max:g}] y=[{area.y_min:g}, {area.y_max:g}]")
    print(f"total duration: {replay.total_duration.total_seconds():.3f} s")


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="trajview")
    parser.add_argument("--config", help="YAML or JSON viewer config")
    parser.add_argument("--log-level", help="Override the configured log level")
    sub = parser.add_subparsers(dest="command", required=True)

    info_cmd = sub.add_parser("info", help="Summarise a trajectory log")
    info_cmd.add_argument("path")
    info_cmd.add_argument("--frame-duration-ms", type=float)

    plot_cmd = sub.add_parser("plot", help="Export a trajectory plot")
    plot_cmd.add_argument("path")
    plot_cmd.add_argument("--out", default="artifacts/trajectory.png")
    plot_cmd.add_argument("--frame", type=int, help="Playback frame index; all frames if omitted")
    plot_cmd.add_argument("--aspect", type=float, default=4.0 / 3.0)

    gui_cmd = sub.add_parser("gui", help="Open the desktop viewer")
    gui_cmd.add_argument("path", nargs="?")

    return parser


def run_cli(argv: list[str] | None = None) -> int:
    args = build_arg_parser().parse_args(argv)

    try:
        config = ConfigLoader.load(args.config)
    except ConfigValidationError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    _configure_logging(config, args.log_level)

    if args.command == "gui":
        from trajview.ui_desktop.app import main as desktop_main

        forwarded: list[str] = []
        if args.config:
            forwarded.extend(["--config", str(args.config)])
        if args.path:
            forwarded.append(str(args.path))
        return int(desktop_main(forwarded))

    try:
        if args.command == "info":
            _print_info(args.path, _frame_duration(config, args.frame_duration_ms))
            return 0

        if args.command == "plot":
            from trajview.visualization.plotting import plot_trajectory

            trajectory = parse_trajectory_txt(args.path)
            out = plot_trajectory(
                trajectory,
                args.out,
                frame_index=args.frame,
                display_aspect=args.aspect,
            )
            print(out)
            return 0
    except OSError as exc:
        LOGGER.error("%s failed: %s", args.command, exc)
        print(f"error: {exc}", file=sys.stderr)
        return 1
    except (ValueError, IndexError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    return 1


if __name__ == "__main__":
    raise SystemExit(run_cli())

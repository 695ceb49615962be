"""Desktop app bootstrap for the trajectory viewer."""

from __future__ import annotations

import argparse
import logging
import sys

from PySide6.QtWidgets import QApplication

from trajview.configs.loader import ConfigLoader, ConfigValidationError
from trajview.ui_desktop.main_window import MainWindow


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="trajview-desktop")
    parser.add_argument("path", nargs="?", help="Trajectory log to open on start")
    parser.add_argument("--config", help="YAML or JSON viewer config")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_arg_parser().parse_args(argv)
    try:
        config = ConfigLoader.load(args.config)
    except ConfigValidationError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    logging.basicConfig(level=config.logging_level)

    app = QApplication.instance() or QApplication(sys.argv)
    window = MainWindow(config)
    initial_path = args.path or config.trajectory_path
    if initial_path:
        window.open_path(initial_path)
    window.show()
    return int(app.exec())


if __name__ == "__main__":
    raise SystemExit(main())

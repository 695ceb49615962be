"""Tests for the desktop viewer widgets and host loop."""

from __future__ import annotations

import os

import numpy as np
import pytest

from trajview.configs.loader import ViewerConfig
from trajview.core.render_state import RenderFrame
from trajview.ui_desktop.models.key_map import KeyMap

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


def _qt_app():
    QtWidgets = pytest.importorskip("PySide6.QtWidgets")
    pytest.importorskip("pyqtgraph")
    return QtWidgets.QApplication.instance() or QtWidgets.QApplication([])


def test_key_map_collects_presses_per_frame() -> None:
    keymap = KeyMap()

    keymap.handle_key(65)
    keymap.handle_key(65, is_auto_repeat=True)
    keymap.handle_key(96)

    assert keymap.pressed_keys == [65, 96]
    assert keymap.was_pressed(96)

    keymap.begin_frame()
    assert not keymap.was_pressed(65)


def test_render_viewport_draws_frame_instances() -> None:
    _qt_app()
    from trajview.ui_desktop.render_viewport import RenderViewport

    viewport = RenderViewport(marker_size=0.5)
    positions = np.array([[i % 100, i // 100] for i in range(10_000)], dtype=np.float32)
    viewport.set_render_frame(RenderFrame(viewport=(0.0, 100.0, -25.0, 125.0), positions=positions))

    assert viewport.instance_count() == 10_000
    assert viewport.current_viewport() == (0.0, 100.0, -25.0, 125.0)
    assert viewport.display_aspect() > 0

    viewport.set_render_frame(RenderFrame(viewport=(-1.0, 1.0, -1.0, 1.0)))
    assert viewport.instance_count() == 0
    viewport.close()


def test_main_window_opens_log_and_ticks(tmp_path) -> None:
    _qt_app()
    from trajview.ui_desktop.main_window import MainWindow

    path = tmp_path / "traj.txt"
    path.write_text("1\t0\t0.0\t0.0\n1\t0\t1.0\t1.0\n1\t1\t2.0\t2.0\n", encoding="utf-8")
    window = MainWindow(ViewerConfig(frame_duration_ms=60_000.0))

    window.tick()
    assert window.last_frame is not None
    assert window.last_frame.frame_count == 0

    assert window.open_path(path)
    window.tick()

    assert window.last_frame.frame_count == 2
    assert window.last_frame.frame_index == 0
    assert window.viewport.instance_count() == 2
    assert "frame 1 / 2" in window.statusBar().currentMessage()

    assert not window.open_path(tmp_path / "missing.txt")
    assert window.session.source_path == path
    assert any(line.startswith("Cannot open") for line in window.console.lines)
    window.close()


def test_console_panel_submits_commands(tmp_path) -> None:
    _qt_app()
    from trajview.ui_desktop.main_window import MainWindow

    window = MainWindow(ViewerConfig())
    panel = window.console_panel

    panel.input.setText("help")
    panel._submit()

    assert panel.input.text() == ""
    assert "info" in panel.output.toPlainText()

    panel.input.setText("quit")
    panel._submit()
    window.tick()
    assert window.console.quit_requested
    window.close()


def test_console_toggle_key_works_from_console_input() -> None:
    _qt_app()
    from PySide6.QtCore import QEvent, Qt
    from PySide6.QtGui import QKeyEvent
    from PySide6.QtWidgets import QApplication

    from trajview.ui_desktop.main_window import MainWindow

    window = MainWindow(ViewerConfig())
    panel = window.console_panel
    assert not panel.isHidden()

    def backquote() -> QKeyEvent:
        return QKeyEvent(
            QEvent.Type.KeyPress, Qt.Key.Key_QuoteLeft.value, Qt.KeyboardModifier.NoModifier, "`"
        )

    QApplication.sendEvent(panel.input, backquote())
    window.tick()

    assert panel.isHidden()
    assert panel.input.text() == ""

    QApplication.sendEvent(window, backquote())
    window.tick()
    assert not panel.isHidden()
    window.close()


def test_desktop_main_reports_invalid_config(tmp_path, capsys) -> None:
    _qt_app()
    from trajview.ui_desktop.app import main

    config = tmp_path / "viewer.yaml"
    config.write_text("frame_duration_ms: .nan\n", encoding="utf-8")

    assert main(["--config", str(config)]) == 1
    assert "error: frame_duration_ms must be a finite number" in capsys.readouterr().err

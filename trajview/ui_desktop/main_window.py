"""Viewer main window: menu, viewport, console and the playback timer."""

from __future__ import annotations

import logging
from pathlib import Path

from PySide6.QtCore import Qt, QTimer
from PySide6.QtGui import QAction, QKeyEvent
from PySide6.QtWidgets import QFileDialog, QMainWindow, QMessageBox, QSplitter

from trajview.configs.loader import ViewerConfig
from trajview.core.console import Console, register_session_commands
from trajview.core.frame_timer import FrameTimer
from trajview.core.render_state import RenderFrame
from trajview.core.session import ReplaySession
from trajview.ui_desktop.console_panel import CONSOLE_TOGGLE_KEY, ConsolePanel
from trajview.ui_desktop.models.key_map import KeyMap
from trajview.ui_desktop.render_viewport import RenderViewport

LOGGER = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Drives the session from a ``QTimer`` and draws every tick."""

    def __init__(self, config: ViewerConfig, session: ReplaySession | None = None) -> None:
        super().__init__()
        self.config = config
        self.session = session or ReplaySession(config.frame_duration)
        self.console = Console()
        register_session_commands(self.console, self.session)
        self.keymap = KeyMap()
        self.frame_timer = FrameTimer()
        self.last_frame: RenderFrame | None = None

        self.setWindowTitle("Trajectory Viewer")
        self.resize(config.window_width, config.window_height)

        self.viewport = RenderViewport(marker_size=config.marker_size)
        self.console_panel = ConsolePanel(self.console, key_handler=self.keymap.handle_key)
        split = QSplitter(Qt.Orientation.Vertical)
        split.addWidget(self.viewport)
        split.addWidget(self.console_panel)
        split.setSizes([config.window_height - 200, 200])
        self.setCentralWidget(split)

        menu = self.menuBar().addMenu("File")
        self.open_action = QAction("Open...", self)
        self.exit_action = QAction("Exit", self)
        menu.addAction(self.open_action)
        menu.addAction(self.exit_action)
        self.open_action.triggered.connect(self._choose_file)
        self.exit_action.triggered.connect(self.close)

        self._timer = QTimer(self)
        self._timer.timeout.connect(self.tick)
        self._timer.start(config.tick_interval_ms)

    def open_path(self, path: str | Path) -> bool:
        """Replace the current replay with ``path``; report failures without raising."""
        try:
            replay = self.session.open_file(path)
        except OSError as exc:
            LOGGER.warning("Cannot open %s: %s", path, exc)
            self.console.log(f"Cannot open '{path}': {exc.strerror or exc}")
            return False
        self.console.log(f"Opened '{path}' ({replay.frame_count()} frames)")
        self.frame_timer.reset()
        return True

    def tick(self) -> None:
        delta = self.frame_timer.advance()
        frame = self.session.tick(delta, self.viewport.display_aspect())
        self.viewport.set_render_frame(frame)
        self.last_frame = frame

        if self.keymap.was_pressed(CONSOLE_TOGGLE_KEY):
            self.console_panel.setHidden(not self.console_panel.isHidden())
        self.keymap.begin_frame()

        if frame.frame_count:
            self.statusBar().showMessage(f"frame {frame.frame_index + 1} / {frame.frame_count}")
        else:
            self.statusBar().showMessage("No trajectory loaded")
        self.console_panel.refresh()
        if self.console.quit_requested:
            self.close()

    def keyPressEvent(self, event: QKeyEvent) -> None:  # type: ignore[override]
        self.keymap.handle_key(event.key(), event.isAutoRepeat())
        super().keyPressEvent(event)

    def closeEvent(self, event) -> None:  # type: ignore[override]
        self._timer.stop()
        super().closeEvent(event)

    def _choose_file(self) -> None:
        path, _selected = QFileDialog.getOpenFileName(
            self, "Open trajectory log", "", "Trajectory logs (*.txt);;All files (*)"
        )
        if path and not self.open_path(path):
            QMessageBox.warning(self, "Open failed", f"Cannot open '{path}', see the console for details.")
